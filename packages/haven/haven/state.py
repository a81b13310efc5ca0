"""Immutable snapshot types: player, weather, and the GameState aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from haven_resource import Inventory, Tool
from haven_world import Position, WorldObject

SEASONS = ("spring", "summer", "autumn", "winter")


def _clamp(value: float, maximum: float) -> float:
    return max(0, min(value, maximum))


@dataclass(frozen=True)
class PlayerStats:
    """Vital stats, each clamped to ``[0, max]`` on construction."""

    health: float = 100
    max_health: float = 100
    hunger: float = 100
    max_hunger: float = 100
    energy: float = 100
    max_energy: float = 100
    warmth: float = 100
    max_warmth: float = 100

    def __post_init__(self) -> None:
        for name in ("health", "hunger", "energy", "warmth"):
            maximum = getattr(self, f"max_{name}")
            if maximum <= 0:
                raise ValueError(f"max_{name} must be positive, got {maximum}")
            object.__setattr__(self, name, _clamp(getattr(self, name), maximum))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    stats: PlayerStats
    position: Position
    inventory: Inventory
    equipped_tool: Tool | None = None
    experience: int = 0
    level: int = 1

    def __post_init__(self) -> None:
        if self.experience < 0:
            raise ValueError(f"experience must be >= 0, got {self.experience}")
        if self.level < 1:
            raise ValueError(f"level must be >= 1, got {self.level}")


@dataclass(frozen=True)
class Weather:
    type: str = "clear"
    intensity: float = 0.0
    duration: float = 0.0
    effects: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class GameState:
    """The whole session at one instant. Replaced, never mutated."""

    player: Player
    world_objects: tuple[WorldObject, ...] = ()
    structures: tuple[dict[str, Any], ...] = ()
    threats: tuple[dict[str, Any], ...] = ()
    time_of_day: float = 8.0
    day_count: int = 1
    season: str = "spring"
    weather: Weather = field(default_factory=Weather)
    game_mode: str = "survival"
    difficulty: str = "normal"

    def __post_init__(self) -> None:
        if not 0 <= self.time_of_day < 24:
            raise ValueError(f"time_of_day must be in [0, 24), got {self.time_of_day}")
        if self.day_count < 1:
            raise ValueError(f"day_count must be >= 1, got {self.day_count}")
        if self.season not in SEASONS:
            raise ValueError(f"unknown season {self.season!r}")

    def object_by_id(self, object_id: str) -> WorldObject | None:
        for obj in self.world_objects:
            if obj.id == object_id:
                return obj
        return None
