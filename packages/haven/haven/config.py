"""Game balance configuration."""
from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from haven_resource import StackPolicy
from haven_world import HARVEST_DAMAGE, HARVEST_DURATION_MS, HARVEST_EXPERIENCE

from haven.types import ConfigError


@dataclass(frozen=True)
class GameConfig:
    """Immutable balance constants for one session.

    Attributes:
        day_duration_ms: Real time for one full in-game day.
        tick_ms: Real time between clock ticks.
        night_start: Hour at which night begins.
        night_end: Hour at which night ends.
        start_time_of_day: Hour a fresh game starts at.
        season_length_days: In-game days per season. Metadata only.
        player_max_health: Maximum player health.
        player_max_hunger: Maximum player hunger.
        player_max_energy: Maximum player energy.
        player_max_warmth: Maximum player warmth.
        starting_inventory_slots: Inventory slots of a new player.
        spawn_position: Cell a new player starts on.
        harvest_delay_ms: Time a harvest takes; no other harvest may start meanwhile.
        harvest_damage: Health a world object loses per harvest.
        harvest_experience: Experience granted per accepted harvest.
        stack_policy: Whether merges into an existing stack are capped.
    """

    day_duration_ms: int = 20 * 60 * 1000
    tick_ms: int = 1000
    night_start: float = 18.0
    night_end: float = 6.0
    start_time_of_day: float = 8.0
    season_length_days: int = 7
    player_max_health: int = 100
    player_max_hunger: int = 100
    player_max_energy: int = 100
    player_max_warmth: int = 100
    starting_inventory_slots: int = 20
    spawn_position: tuple[int, int] = (10, 7)
    harvest_delay_ms: int = HARVEST_DURATION_MS
    harvest_damage: int = HARVEST_DAMAGE
    harvest_experience: int = HARVEST_EXPERIENCE
    stack_policy: StackPolicy = StackPolicy.UNBOUNDED

    def __post_init__(self) -> None:
        if self.day_duration_ms <= 0:
            raise ConfigError(f"day_duration_ms must be positive, got {self.day_duration_ms}")
        if self.tick_ms <= 0:
            raise ConfigError(f"tick_ms must be positive, got {self.tick_ms}")
        if not 0 <= self.night_end < self.night_start < 24:
            raise ConfigError(
                f"need 0 <= night_end < night_start < 24, got {self.night_end}, {self.night_start}"
            )
        if not 0 <= self.start_time_of_day < 24:
            raise ConfigError(f"start_time_of_day must be in [0, 24), got {self.start_time_of_day}")
        if self.starting_inventory_slots <= 0:
            raise ConfigError("starting_inventory_slots must be positive")
        for name in ("harvest_delay_ms", "harvest_damage", "harvest_experience"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in ("player_max_health", "player_max_hunger",
                     "player_max_energy", "player_max_warmth"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> GameConfig:
        """Build a config from plain data, e.g. parsed JSON."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown keys: {', '.join(unknown)}")
        values = dict(data)
        try:
            if "stack_policy" in values:
                values["stack_policy"] = StackPolicy(values["stack_policy"])
            if "spawn_position" in values:
                x, y = values["spawn_position"]
                values["spawn_position"] = (int(x), int(y))
        except (TypeError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        return cls(**values)


def load_config(path: str | Path) -> GameConfig:
    """Read a JSON config file. A missing file yields the defaults."""
    path = Path(path)
    if not path.exists():
        return GameConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    return GameConfig.from_mapping(data)
