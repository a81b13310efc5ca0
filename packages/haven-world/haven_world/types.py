"""Shared types for world objects and placement."""
from __future__ import annotations

from dataclasses import dataclass, field, replace

GRID_WIDTH = 20
GRID_HEIGHT = 15

CATEGORIES = ("tree", "rock", "bush", "water_source")


class TemplateError(ValueError):
    """Raised when a world object template or placement rule is malformed."""


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < GRID_WIDTH and 0 <= self.y < GRID_HEIGHT):
            raise ValueError(
                f"Position ({self.x}, {self.y}) outside {GRID_WIDTH}x{GRID_HEIGHT} grid"
            )


@dataclass(frozen=True)
class Size:
    width: int = 1
    height: int = 1

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Size must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class ResourceDrop:
    """What a world object may yield per harvest.

    Attributes:
        resource_type: Resource produced.
        quantity_range: Inclusive ``(min, max)`` quantity.
        chance: Probability in [0, 1] that this drop yields at all.
        required_tool: Tool type the drop asks for, if any.
    """

    resource_type: str
    quantity_range: tuple[int, int]
    chance: float = 1.0
    required_tool: str | None = None

    def __post_init__(self) -> None:
        low, high = self.quantity_range
        if low < 0 or high < low:
            raise ValueError(f"invalid quantity_range {self.quantity_range!r}")
        if not 0.0 <= self.chance <= 1.0:
            raise ValueError(f"chance must be in [0, 1], got {self.chance}")


@dataclass(frozen=True)
class WorldObjectTemplate:
    type: str
    name: str
    size: Size
    max_health: int
    resources: tuple[ResourceDrop, ...]
    icon: str = ""
    harvestable: bool = True
    respawn_time_ms: int | None = None

    def __post_init__(self) -> None:
        if self.max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {self.max_health}")


@dataclass(frozen=True)
class WorldObject:
    id: str
    type: str
    name: str
    position: Position
    size: Size
    health: int
    max_health: int
    resources: tuple[ResourceDrop, ...] = field(default_factory=tuple)
    harvestable: bool = True
    icon: str = ""
    respawn_time_ms: int | None = None
    last_harvested: int | None = None

    def __post_init__(self) -> None:
        if self.max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {self.max_health}")
        clamped = max(0, min(self.health, self.max_health))
        if clamped != self.health:
            object.__setattr__(self, "health", clamped)

    @property
    def depleted(self) -> bool:
        return self.health == 0

    def damaged(self, amount: int, now_ms: int) -> WorldObject:
        """Return a copy with health reduced by *amount*, stamped when it hits 0."""
        health = max(0, self.health - amount)
        last = now_ms if health == 0 else self.last_harvested
        return replace(self, health=health, last_harvested=last)

    @classmethod
    def from_template(
        cls, object_id: str, template: WorldObjectTemplate, position: Position
    ) -> WorldObject:
        return cls(
            id=object_id,
            type=template.type,
            name=template.name,
            position=position,
            size=template.size,
            health=template.max_health,
            max_health=template.max_health,
            resources=template.resources,
            harvestable=template.harvestable,
            icon=template.icon,
            respawn_time_ms=template.respawn_time_ms,
        )
