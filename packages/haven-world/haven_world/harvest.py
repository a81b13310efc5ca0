"""HarvestResolver - tool gating, drop rolls, and object damage."""
from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from haven_world.types import ResourceDrop, WorldObject

if TYPE_CHECKING:
    from haven_resource import Tool

HARVEST_DAMAGE = 10
HARVEST_EXPERIENCE = 5
HARVEST_DURATION_MS = 2000


class RandomSource(Protocol):
    def random(self) -> float: ...


class RejectReason(enum.Enum):
    NOT_HARVESTABLE = "not_harvestable"
    MISSING_TOOL = "missing_tool"


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    required_tool: str | None = None


@dataclass(frozen=True)
class HarvestOutcome:
    resources_gained: tuple[tuple[str, int], ...]
    updated_object: WorldObject
    experience_delta: int


def gating_drop(resources: Sequence[ResourceDrop]) -> ResourceDrop | None:
    """The first drop declaring a required tool; only it gates a harvest."""
    for drop in resources:
        if drop.required_tool is not None:
            return drop
    return None


def roll_drop(drop: ResourceDrop, rng: RandomSource) -> int:
    """Roll one drop. Returns the quantity yielded, 0 when the chance roll fails."""
    if rng.random() >= drop.chance:
        return 0
    low, high = drop.quantity_range
    return low + int(rng.random() * (high - low + 1))


class HarvestResolver:
    """Pure harvest resolution: the result depends only on the arguments."""

    def __init__(
        self, damage: int = HARVEST_DAMAGE, experience: int = HARVEST_EXPERIENCE
    ) -> None:
        if damage < 0:
            raise ValueError(f"damage must be >= 0, got {damage}")
        if experience < 0:
            raise ValueError(f"experience must be >= 0, got {experience}")
        self._damage = damage
        self._experience = experience

    @property
    def damage(self) -> int:
        return self._damage

    @property
    def experience(self) -> int:
        return self._experience

    def check(self, obj: WorldObject, tool: Tool | None) -> Rejected | None:
        """Return why *obj* cannot be harvested with *tool*, or None if it can."""
        if not obj.harvestable or obj.health <= 0:
            return Rejected(RejectReason.NOT_HARVESTABLE)
        gate = gating_drop(obj.resources)
        if gate is not None and (tool is None or tool.type != gate.required_tool):
            return Rejected(RejectReason.MISSING_TOOL, gate.required_tool)
        return None

    def resolve(
        self,
        obj: WorldObject,
        tool: Tool | None,
        rng: RandomSource,
        now_ms: int,
    ) -> HarvestOutcome | Rejected:
        rejected = self.check(obj, tool)
        if rejected is not None:
            return rejected

        gained: list[tuple[str, int]] = []
        for drop in obj.resources:
            quantity = roll_drop(drop, rng)
            if quantity > 0:
                gained.append((drop.resource_type, quantity))

        return HarvestOutcome(
            resources_gained=tuple(gained),
            updated_object=obj.damaged(self._damage, now_ms),
            experience_delta=self._experience,
        )
