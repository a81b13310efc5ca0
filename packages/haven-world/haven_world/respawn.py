"""Respawn bookkeeping for depleted world objects."""
from __future__ import annotations

from collections.abc import Sequence

from haven_world.types import WorldObject


class RespawnScheduler:
    """Tracks which depleted objects have waited out their ``respawn_time_ms``.

    Objects are never revived here; ``step`` hands the sequence back as is.
    """

    def due(self, obj: WorldObject, now_ms: int) -> bool:
        if not obj.depleted or obj.respawn_time_ms is None or obj.last_harvested is None:
            return False
        return now_ms - obj.last_harvested >= obj.respawn_time_ms

    def pending(self, objects: Sequence[WorldObject], now_ms: int) -> list[str]:
        """Ids of objects whose respawn time has elapsed."""
        return [obj.id for obj in objects if self.due(obj, now_ms)]

    def step(
        self, objects: tuple[WorldObject, ...], now_ms: int
    ) -> tuple[WorldObject, ...]:
        return objects
