"""Day clock - converts real elapsed time into time of day and day count."""

from __future__ import annotations

HOURS_PER_DAY = 24.0


class DayClock:
    def __init__(
        self,
        day_duration_ms: int = 20 * 60 * 1000,
        tick_ms: int = 1000,
        night_start: float = 18.0,
        night_end: float = 6.0,
    ) -> None:
        if day_duration_ms <= 0:
            raise ValueError("day_duration_ms must be positive")
        if tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        self._day_duration_ms = day_duration_ms
        self._tick_ms = tick_ms
        self._night_start = night_start
        self._night_end = night_end
        self._increment = HOURS_PER_DAY / (day_duration_ms / 1000)

    @property
    def day_duration_ms(self) -> int:
        return self._day_duration_ms

    @property
    def tick_ms(self) -> int:
        return self._tick_ms

    @property
    def increment(self) -> float:
        """In-game hours added per tick."""
        return self._increment

    def ticks_in(self, elapsed_ms: int) -> int:
        return elapsed_ms // self._tick_ms

    def tick(self, time_of_day: float, day_count: int) -> tuple[float, int]:
        """Advance by one tick. Crossing 24 resets to exactly 0 and starts the next day."""
        time_of_day += self._increment
        if time_of_day >= HOURS_PER_DAY:
            return 0.0, day_count + 1
        return time_of_day, day_count

    def advance(
        self, time_of_day: float, day_count: int, elapsed_ms: int
    ) -> tuple[float, int]:
        """Apply one tick per whole ``tick_ms`` in *elapsed_ms*."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
        for _ in range(self.ticks_in(elapsed_ms)):
            time_of_day, day_count = self.tick(time_of_day, day_count)
        return time_of_day, day_count

    def is_daytime(self, time_of_day: float) -> bool:
        return self._night_end <= time_of_day < self._night_start


def format_time(time_of_day: float) -> str:
    """Render an hour value as ``HH:MM``."""
    hours = int(time_of_day)
    minutes = int((time_of_day - hours) * 60)
    return f"{hours:02d}:{minutes:02d}"
