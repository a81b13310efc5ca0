"""Persistence boundary: save records, backends, and JSON codecs.

A saved game is one record keyed by ``"game_" + player_id``. The world
objects and the player are each JSON-encoded into a string field of that
record, so a record is JSON nested inside JSON once a backend writes it.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Protocol

from haven_resource import (
    Inventory,
    ResourceCatalog,
    ResourceStack,
    STARTING_RESOURCES,
    Tool,
    starting_inventory,
)
from haven_world import Position, ResourceDrop, Size, WorldObject

from haven.config import GameConfig
from haven.state import GameState, Player, PlayerStats
from haven.types import CorruptSaveError

logger = logging.getLogger(__name__)

_STAT_KEYS = (
    ("health", "maxHealth"),
    ("hunger", "maxHunger"),
    ("energy", "maxEnergy"),
    ("warmth", "maxWarmth"),
)


def record_id(player_id: str) -> str:
    return f"game_{player_id}"


@dataclass(frozen=True)
class SavedGame:
    id: str
    user_id: str
    world_objects: str = "[]"
    player_data: str = "{}"
    day_count: int | None = None
    time_of_day: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedGame:
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            world_objects=data.get("world_objects") or "[]",
            player_data=data.get("player_data") or "{}",
            day_count=data.get("day_count"),
            time_of_day=data.get("time_of_day"),
        )


class SaveBackend(Protocol):
    def load(self, player_id: str) -> SavedGame | None: ...
    def create(self, record: SavedGame) -> None: ...
    def update(self, record_id: str, fields: dict[str, Any]) -> None: ...


class InMemorySaveBackend:
    """Keeps records in a dict. Useful for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._records: dict[str, SavedGame] = {}

    def load(self, player_id: str) -> SavedGame | None:
        return self._records.get(record_id(player_id))

    def create(self, record: SavedGame) -> None:
        self._records[record.id] = record

    def update(self, record_id: str, fields: dict[str, Any]) -> None:
        if record_id not in self._records:
            raise KeyError(record_id)
        self._records[record_id] = replace(self._records[record_id], **fields)

    def records(self) -> dict[str, SavedGame]:
        return dict(self._records)


class JsonDirectorySaveBackend:
    """One ``<record id>.json`` file per save inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, rid: str) -> Path:
        return self._directory / f"{rid}.json"

    def load(self, player_id: str) -> SavedGame | None:
        rid = record_id(player_id)
        path = self._path(rid)
        if not path.exists():
            return None
        return self._read(rid, path)

    def _read(self, rid: str, path: Path) -> SavedGame:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
                if not isinstance(data, dict):
                    raise TypeError("record must be a JSON object")
                return SavedGame.from_dict(data)
            except (json.JSONDecodeError, KeyError, TypeError) as exc:
                raise CorruptSaveError(rid, str(exc)) from exc

    def create(self, record: SavedGame) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(record.id), "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, ensure_ascii=False, indent=2)

    def update(self, record_id: str, fields: dict[str, Any]) -> None:
        path = self._path(record_id)
        if not path.exists():
            raise KeyError(record_id)
        record = self._read(record_id, path)
        self.create(replace(record, **fields))


# --- Codecs ---

def _position_to_dict(pos: Position) -> dict[str, int]:
    return {"x": pos.x, "y": pos.y}


def _tool_to_dict(tool: Tool) -> dict[str, Any]:
    return {
        "type": tool.type,
        "durability": tool.durability,
        "maxDurability": tool.max_durability,
        "efficiency": tool.efficiency,
    }


def player_to_dict(player: Player) -> dict[str, Any]:
    stats: dict[str, float] = {}
    for key, max_key in _STAT_KEYS:
        stats[key] = getattr(player.stats, key)
        stats[max_key] = getattr(player.stats, f"max_{key}")
    data: dict[str, Any] = {
        "id": player.id,
        "name": player.name,
        "level": player.level,
        "experience": player.experience,
        "stats": stats,
        "position": _position_to_dict(player.position),
        "inventory": [
            {"type": s.resource_type, "quantity": s.quantity, "maxStack": s.max_stack}
            for s in player.inventory.stacks
        ],
        "maxInventorySlots": player.inventory.max_slots,
    }
    if player.equipped_tool is not None:
        data["equippedTool"] = _tool_to_dict(player.equipped_tool)
    return data


def world_object_to_dict(obj: WorldObject) -> dict[str, Any]:
    resources = []
    for drop in obj.resources:
        entry: dict[str, Any] = {
            "resourceType": drop.resource_type,
            "quantity": {"min": drop.quantity_range[0], "max": drop.quantity_range[1]},
            "chance": drop.chance,
        }
        if drop.required_tool is not None:
            entry["requiredTool"] = drop.required_tool
        resources.append(entry)
    data: dict[str, Any] = {
        "id": obj.id,
        "type": obj.type,
        "name": obj.name,
        "position": _position_to_dict(obj.position),
        "size": {"width": obj.size.width, "height": obj.size.height},
        "resources": resources,
        "health": obj.health,
        "maxHealth": obj.max_health,
        "icon": obj.icon,
        "harvestable": obj.harvestable,
    }
    if obj.respawn_time_ms is not None:
        data["respawnTime"] = obj.respawn_time_ms
    if obj.last_harvested is not None:
        data["lastHarvested"] = obj.last_harvested
    return data


def world_object_from_dict(data: dict[str, Any]) -> WorldObject:
    return WorldObject(
        id=data["id"],
        type=data["type"],
        name=data.get("name", data["type"]),
        position=Position(int(data["position"]["x"]), int(data["position"]["y"])),
        size=Size(**data.get("size", {"width": 1, "height": 1})),
        health=int(data["health"]),
        max_health=int(data["maxHealth"]),
        resources=tuple(
            ResourceDrop(
                resource_type=d["resourceType"],
                quantity_range=(int(d["quantity"]["min"]), int(d["quantity"]["max"])),
                chance=float(d["chance"]),
                required_tool=d.get("requiredTool"),
            )
            for d in data.get("resources", [])
        ),
        harvestable=bool(data.get("harvestable", True)),
        icon=data.get("icon", ""),
        respawn_time_ms=data.get("respawnTime"),
        last_harvested=data.get("lastHarvested"),
    )


def _saved_or(data: dict[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def player_from_dict(
    data: dict[str, Any],
    config: GameConfig,
    catalog: ResourceCatalog,
    player_id: str,
    name: str,
) -> Player:
    """Rebuild a player, filling every missing or null field with its default.

    *name* is used only when the save carries no name.
    """
    raw_stats = data.get("stats") or {}
    stat_values: dict[str, float] = {}
    for key, max_key in _STAT_KEYS:
        maximum = _saved_or(raw_stats, max_key, getattr(config, f"player_max_{key}"))
        stat_values[f"max_{key}"] = maximum
        stat_values[key] = _saved_or(raw_stats, key, maximum)

    pos = data.get("position")
    position = (
        Position(*config.spawn_position)
        if pos is None
        else Position(int(pos["x"]), int(pos["y"]))
    )

    max_slots = int(_saved_or(data, "maxInventorySlots", config.starting_inventory_slots))
    raw_inventory = data.get("inventory")
    if raw_inventory is None:
        inventory = starting_inventory(catalog, STARTING_RESOURCES, max_slots)
    else:
        stacks = tuple(
            ResourceStack(
                resource_type=s["type"],
                quantity=int(s["quantity"]),
                max_stack=int(s.get("maxStack") or catalog.lookup(s["type"]).max_stack),
            )
            for s in raw_inventory
        )
        inventory = Inventory(stacks=stacks, max_slots=max(max_slots, len(stacks)))

    raw_tool = data.get("equippedTool")
    tool = None
    if raw_tool is not None:
        tool = Tool(
            type=raw_tool["type"],
            durability=int(raw_tool["durability"]),
            max_durability=int(raw_tool["maxDurability"]),
            efficiency=float(raw_tool.get("efficiency", 1.0)),
        )

    return Player(
        id=player_id,
        name=_saved_or(data, "name", name),
        stats=PlayerStats(**stat_values),
        position=position,
        inventory=inventory,
        equipped_tool=tool,
        experience=int(_saved_or(data, "experience", 0)),
        level=int(_saved_or(data, "level", 1)),
    )


def encode_player(player: Player) -> str:
    return json.dumps(player_to_dict(player), ensure_ascii=False)


def encode_world_objects(objects: tuple[WorldObject, ...]) -> str:
    return json.dumps([world_object_to_dict(o) for o in objects], ensure_ascii=False)


def decode_world_objects(payload: str) -> tuple[WorldObject, ...]:
    data = json.loads(payload)
    if not isinstance(data, list):
        raise TypeError("world objects must be a JSON array")
    return tuple(world_object_from_dict(d) for d in data)


def decode_player_data(payload: str) -> dict[str, Any]:
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise TypeError("player data must be a JSON object")
    return data


def to_record(state: GameState) -> SavedGame:
    player_id = state.player.id
    return SavedGame(
        id=record_id(player_id),
        user_id=player_id,
        world_objects=encode_world_objects(state.world_objects),
        player_data=encode_player(state.player),
        day_count=state.day_count,
        time_of_day=state.time_of_day,
    )


class PersistenceGateway:
    """Wraps a backend so storage failures never interrupt play.

    Failures are logged and reported as ``None``/``False``; the in-memory
    state stays authoritative. A record that exists but cannot be decoded
    raises ``CorruptSaveError``. After a failed load the record is never
    written to, since the stored game may still be intact.
    """

    def __init__(self, backend: SaveBackend | None = None) -> None:
        self._backend = backend if backend is not None else InMemorySaveBackend()
        self._unreadable: set[str] = set()

    @property
    def backend(self) -> SaveBackend:
        return self._backend

    def load(self, player_id: str) -> SavedGame | None:
        rid = record_id(player_id)
        try:
            record = self._backend.load(player_id)
        except CorruptSaveError:
            self._unreadable.add(rid)
            raise
        except Exception:
            logger.exception(f"Failed to load game for player {player_id!r}")
            self._unreadable.add(rid)
            return None
        self._unreadable.discard(rid)
        return record

    def _refuse(self, rid: str) -> bool:
        if rid in self._unreadable:
            logger.warning(f"Not writing {rid!r}: the stored game could not be read")
            return True
        return False

    def create(self, state: GameState) -> bool:
        record = to_record(state)
        if self._refuse(record.id):
            return False
        try:
            self._backend.create(record)
        except Exception:
            logger.exception(f"Failed to save game {record.id!r}")
            return False
        logger.info(f"Saved game {record.id!r} (day {record.day_count})")
        return True

    def update_progress(self, state: GameState) -> bool:
        """Write the world objects and player only, as after a harvest."""
        rid = record_id(state.player.id)
        if self._refuse(rid):
            return False
        fields = {
            "world_objects": encode_world_objects(state.world_objects),
            "player_data": encode_player(state.player),
        }
        try:
            self._backend.update(rid, fields)
        except Exception:
            logger.exception(f"Failed to update game {rid!r}")
            return False
        return True
