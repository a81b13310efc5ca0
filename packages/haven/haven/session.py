"""Session - fixed-interval host loop driving a GameStateStore."""

from __future__ import annotations

import logging
import time
from typing import Callable

from haven.store import GameStateStore

logger = logging.getLogger(__name__)


class Session:
    """Feeds real elapsed time into the store once per clock tick."""

    def __init__(
        self,
        store: GameStateStore,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._sleep = sleep
        self._monotonic = monotonic
        self._stop_requested: bool = False
        self._ticks: int = 0

    @property
    def store(self) -> GameStateStore:
        return self._store

    @property
    def ticks(self) -> int:
        return self._ticks

    def request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self) -> None:
        self._store.tick(self._store.clock.tick_ms)
        self._ticks += 1

    def step(self) -> None:
        self._stop_requested = False
        self._store.start()
        self._tick()

    def run(self, n: int) -> None:
        """Run *n* ticks back to back, without pacing."""
        self._stop_requested = False
        self._store.start()
        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break

    def run_forever(self) -> None:
        """Tick once per ``tick_ms`` of real time until a stop is requested."""
        self._stop_requested = False
        self._store.start()
        interval = self._store.clock.tick_ms / 1000
        logger.info(f"Session loop running, one tick every {interval:.3f}s")
        while not self._stop_requested:
            start = self._monotonic()
            self._tick()
            if self._stop_requested:
                break
            elapsed = self._monotonic() - start
            sleep_time = interval - elapsed
            if sleep_time > 0:
                self._sleep(sleep_time)
        self._store.save()
        logger.info(f"Session loop stopped after {self._ticks} ticks")
