"""GameStateStore - the single owner of the canonical GameState."""

from __future__ import annotations

import logging
import os
import random
import time
from collections.abc import Mapping
from dataclasses import replace
from typing import Callable

from haven_resource import (
    InventoryHelper,
    ResourceCatalog,
    STARTING_RESOURCES,
    StackPolicy,
    default_catalog,
    starting_inventory,
)
from haven_world import (
    DEFAULT_COUNTS,
    HarvestOutcome,
    HarvestResolver,
    PlacementPolicy,
    Position,
    RandomSource,
    Rejected,
    RespawnScheduler,
    WorldGenerator,
    WorldObjectTemplate,
    default_templates,
)

from haven.clock import DayClock
from haven.config import GameConfig
from haven.persistence import (
    PersistenceGateway,
    SavedGame,
    decode_player_data,
    decode_world_objects,
    player_from_dict,
)
from haven.state import GameState, Player, PlayerStats
from haven.types import CorruptSaveError, Listener

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Survivor"


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


# --- Pure transitions ---

def new_game_state(
    config: GameConfig, catalog: ResourceCatalog, player_id: str, name: str
) -> GameState:
    player = Player(
        id=player_id,
        name=name,
        stats=PlayerStats(
            health=config.player_max_health,
            max_health=config.player_max_health,
            hunger=config.player_max_hunger,
            max_hunger=config.player_max_hunger,
            energy=config.player_max_energy,
            max_energy=config.player_max_energy,
            warmth=config.player_max_warmth,
            max_warmth=config.player_max_warmth,
        ),
        position=Position(*config.spawn_position),
        inventory=starting_inventory(
            catalog, STARTING_RESOURCES, config.starting_inventory_slots
        ),
    )
    return GameState(player=player, time_of_day=config.start_time_of_day)


def move_player(state: GameState, position: Position) -> GameState:
    """Place the player on *position*. Objects on that cell do not block."""
    return replace(state, player=replace(state.player, position=position))


def apply_harvest(
    state: GameState,
    outcome: HarvestOutcome,
    catalog: ResourceCatalog,
    policy: StackPolicy = StackPolicy.UNBOUNDED,
) -> GameState:
    """Merge a resolved harvest into a new snapshot."""
    player = state.player
    inventory = InventoryHelper.apply_gain(
        player.inventory, outcome.resources_gained, catalog, policy
    )
    updated = outcome.updated_object
    objects = tuple(
        updated if obj.id == updated.id else obj for obj in state.world_objects
    )
    return replace(
        state,
        player=replace(
            player,
            inventory=inventory,
            experience=player.experience + outcome.experience_delta,
        ),
        world_objects=objects,
    )


def advance_time(state: GameState, clock: DayClock, elapsed_ms: int) -> GameState:
    time_of_day, day_count = clock.advance(state.time_of_day, state.day_count, elapsed_ms)
    if time_of_day == state.time_of_day and day_count == state.day_count:
        return state
    return replace(state, time_of_day=time_of_day, day_count=day_count)


class GameStateStore:
    """Mediates every mutation of one player's session.

    Each operation replaces the canonical snapshot with a new one and
    publishes it to subscribers. Rejected operations return the current
    snapshot unchanged.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        catalog: ResourceCatalog | None = None,
        persistence: PersistenceGateway | None = None,
        templates: Mapping[str, WorldObjectTemplate] | None = None,
        placement: PlacementPolicy | None = None,
        counts: Mapping[str, int] | None = None,
        seed: int | None = None,
        rng: RandomSource | None = None,
        sleep: Callable[[float], None] = time.sleep,
        now_ms: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        self._catalog = catalog if catalog is not None else default_catalog()
        self._persistence = persistence if persistence is not None else PersistenceGateway()
        self._templates = dict(templates) if templates is not None else default_templates()
        self._placement = placement if placement is not None else PlacementPolicy.default()
        self._counts = dict(counts) if counts is not None else dict(DEFAULT_COUNTS)
        self._clock = DayClock(
            day_duration_ms=self._config.day_duration_ms,
            tick_ms=self._config.tick_ms,
            night_start=self._config.night_start,
            night_end=self._config.night_end,
        )
        self._resolver = HarvestResolver(
            damage=self._config.harvest_damage,
            experience=self._config.harvest_experience,
        )
        self._generator = WorldGenerator()
        self._respawn = RespawnScheduler()
        self._sleep = sleep
        self._now_ms = now_ms
        self._listeners: list[Listener] = []

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._world_rng = random.Random(seed)
        self._rng: RandomSource = rng if rng is not None else self._world_rng

        self._state: GameState | None = None
        self._started: bool = False
        self._busy: bool = False
        self._carry_ms: int = 0

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> ResourceCatalog:
        return self._catalog

    @property
    def clock(self) -> DayClock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def started(self) -> bool:
        return self._started

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def is_daytime(self) -> bool:
        state = self._require_state()
        return self._clock.is_daytime(state.time_of_day)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _publish(self, state: GameState) -> GameState:
        if state is self._state:
            return state
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state

    def _require_state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("GameStateStore has no state; call initialize() first")
        return self._state

    # --- Lifecycle ---

    def initialize(
        self,
        player_id: str,
        saved: SavedGame | None = None,
        name: str | None = None,
    ) -> GameState:
        """Rebuild the session from *saved*, or start a fresh one."""
        name = name or DEFAULT_PLAYER_NAME
        if saved is None:
            state = new_game_state(self._config, self._catalog, player_id, name)
            logger.info(f"Starting new game for player {player_id!r}")
        else:
            state = self._decode(saved, player_id, name)
            logger.info(
                f"Loaded game {saved.id!r}: day {state.day_count}, "
                f"{len(state.world_objects)} world objects"
            )

        self._started = False
        self._busy = False
        self._carry_ms = 0

        if not state.world_objects:
            objects = self._generator.generate(
                self._templates, self._placement, self._counts, self._world_rng
            )
            state = replace(state, world_objects=objects)
            logger.info(f"Generated {len(objects)} world objects")
            self._persistence.create(state)

        self._state = None
        return self._publish(state)

    def load(self, player_id: str, name: str | None = None) -> GameState:
        """Initialize from whatever the persistence backend holds for *player_id*."""
        return self.initialize(player_id, self._persistence.load(player_id), name)

    def _decode(self, saved: SavedGame, player_id: str, name: str) -> GameState:
        try:
            player_data = decode_player_data(saved.player_data)
            player = player_from_dict(
                player_data, self._config, self._catalog, player_id, name
            )
            world_objects = decode_world_objects(saved.world_objects)
            time_of_day = (
                self._config.start_time_of_day
                if saved.time_of_day is None
                else float(saved.time_of_day)
            )
            day_count = 1 if saved.day_count is None else int(saved.day_count)
            return GameState(
                player=player,
                world_objects=world_objects,
                time_of_day=time_of_day,
                day_count=day_count,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CorruptSaveError(saved.id, str(exc)) from exc

    def start(self) -> None:
        self._require_state()
        if not self._started:
            self._started = True
            logger.info("Session started")

    def stop(self) -> None:
        self._started = False

    # --- Operations ---

    def move_player(self, position: Position) -> GameState:
        return self._publish(move_player(self._require_state(), position))

    def harvest(self, object_id: str) -> GameState:
        """Harvest *object_id*, taking ``harvest_delay_ms`` to complete.

        A harvest requested while another is in progress is refused.
        """
        state = self._require_state()
        if self._busy:
            logger.debug(f"Harvest of {object_id!r} refused: another harvest in progress")
            return state
        obj = state.object_by_id(object_id)
        if obj is None:
            logger.debug(f"Harvest of unknown object {object_id!r} ignored")
            return state
        rejected = self._resolver.check(obj, state.player.equipped_tool)
        if rejected is not None:
            logger.debug(f"Harvest of {object_id!r} rejected: {rejected.reason.value}")
            return state

        self._busy = True
        try:
            self._sleep(self._config.harvest_delay_ms / 1000)
            state = self._require_state()
            obj = state.object_by_id(object_id)
            if obj is None:
                return state
            result = self._resolver.resolve(
                obj, state.player.equipped_tool, self._rng, self._now_ms()
            )
            if isinstance(result, Rejected):
                logger.debug(f"Harvest of {object_id!r} rejected: {result.reason.value}")
                return state
            new_state = apply_harvest(
                state, result, self._catalog, self._config.stack_policy
            )
            self._log_dropped(result, new_state)
            self._publish(new_state)
            if not self._persistence.update_progress(new_state):
                logger.warning(f"Harvest of {object_id!r} kept in memory only")
            return new_state
        finally:
            self._busy = False

    def _log_dropped(self, outcome: HarvestOutcome, state: GameState) -> None:
        held = set(InventoryHelper.names(state.player.inventory))
        for resource_type, quantity in outcome.resources_gained:
            if resource_type not in held:
                logger.warning(
                    f"Inventory full: dropped {quantity} {resource_type}"
                )

    def tick(self, elapsed_ms: int) -> GameState | None:
        """Advance the day clock. Does nothing until the session is started."""
        if not self._started or self._state is None:
            return self._state
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
        state = self._state
        ticks, self._carry_ms = divmod(self._carry_ms + elapsed_ms, self._clock.tick_ms)
        new_state = advance_time(state, self._clock, ticks * self._clock.tick_ms)
        objects = self._respawn.step(new_state.world_objects, self._now_ms())
        if objects is not new_state.world_objects:
            new_state = replace(new_state, world_objects=objects)
        if new_state.day_count != state.day_count:
            logger.info(f"Day {new_state.day_count} begins")
        return self._publish(new_state)

    def equip_tool(self, tool_type: str) -> GameState:
        """Equip a fresh tool of *tool_type*. Raises KeyError for unknown tools."""
        state = self._require_state()
        tool = self._catalog.make_tool(tool_type)
        new_state = replace(state, player=replace(state.player, equipped_tool=tool))
        self._publish(new_state)
        self._persistence.update_progress(new_state)
        return new_state

    def save(self) -> bool:
        """Write the whole snapshot, creating the record if needed."""
        return self._persistence.create(self._require_state())
