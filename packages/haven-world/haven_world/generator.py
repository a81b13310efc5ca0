"""WorldGenerator and placement policy."""
from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass

from haven_world.types import (
    GRID_HEIGHT,
    GRID_WIDTH,
    Position,
    TemplateError,
    WorldObject,
    WorldObjectTemplate,
)

DEFAULT_COUNTS: dict[str, int] = {
    "tree": 15,
    "rock": 8,
    "bush": 10,
    "water_source": 3,
}


@dataclass(frozen=True)
class PlacementBounds:
    """Inclusive cell range a category may be placed in."""

    x_min: int
    x_max: int
    y_min: int
    y_max: int

    def __post_init__(self) -> None:
        if not (0 <= self.x_min <= self.x_max < GRID_WIDTH):
            raise TemplateError(f"x bounds {self.x_min}..{self.x_max} outside grid")
        if not (0 <= self.y_min <= self.y_max < GRID_HEIGHT):
            raise TemplateError(f"y bounds {self.y_min}..{self.y_max} outside grid")

    def draw(self, rng: random.Random) -> Position:
        return Position(
            x=rng.randint(self.x_min, self.x_max),
            y=rng.randint(self.y_min, self.y_max),
        )


class PlacementPolicy:
    """Maps categories to the bounds their objects are scattered within.

    Objects are placed independently; overlaps with each other or the
    player's spawn cell are allowed.
    """

    def __init__(self, bounds: Mapping[str, PlacementBounds] | None = None) -> None:
        self._bounds: dict[str, PlacementBounds] = dict(bounds or {})

    def set(self, category: str, bounds: PlacementBounds) -> None:
        self._bounds[category] = bounds

    def bounds(self, category: str) -> PlacementBounds:
        if category not in self._bounds:
            raise TemplateError(f"No placement bounds for category {category!r}")
        return self._bounds[category]

    def position_for(self, category: str, rng: random.Random) -> Position:
        return self.bounds(category).draw(rng)

    @classmethod
    def default(cls) -> PlacementPolicy:
        # Trees keep a one-cell margin so their 2x2 footprint stays on the grid.
        return cls({
            "tree": PlacementBounds(1, 18, 1, 13),
            "rock": PlacementBounds(0, 18, 0, 13),
            "bush": PlacementBounds(0, 18, 0, 13),
            "water_source": PlacementBounds(0, 18, 0, 13),
        })


class WorldGenerator:
    """Produces the initial world objects of a session."""

    def generate(
        self,
        templates: Mapping[str, WorldObjectTemplate],
        placement: PlacementPolicy,
        counts: Mapping[str, int],
        rng: random.Random,
    ) -> tuple[WorldObject, ...]:
        """Emit ``counts[category]`` objects per category, ids ``"{category}_{index}"``."""
        objects: list[WorldObject] = []
        for category, count in counts.items():
            if count < 0:
                raise TemplateError(f"count for {category!r} must be >= 0, got {count}")
            if category not in templates:
                raise TemplateError(f"No template for category {category!r}")
            template = templates[category]
            bounds = placement.bounds(category)
            for index in range(count):
                objects.append(
                    WorldObject.from_template(
                        f"{category}_{index}", template, bounds.draw(rng)
                    )
                )
        return tuple(objects)
