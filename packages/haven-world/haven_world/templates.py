"""World object templates: the built-in table and parsing from plain data."""
from __future__ import annotations

from typing import Any

from haven_world.types import ResourceDrop, Size, TemplateError, WorldObjectTemplate

_MINUTE_MS = 60 * 1000

WORLD_OBJECT_TEMPLATES: dict[str, WorldObjectTemplate] = {
    "oak_tree": WorldObjectTemplate(
        type="tree",
        name="Oak Tree",
        size=Size(2, 2),
        max_health=30,
        icon="\U0001f333",
        resources=(
            ResourceDrop("wood", (3, 6), 1.0, required_tool="axe"),
            ResourceDrop("fiber", (1, 2), 0.3),
        ),
        respawn_time_ms=10 * _MINUTE_MS,
    ),
    "stone_deposit": WorldObjectTemplate(
        type="rock",
        name="Stone Deposit",
        size=Size(1, 1),
        max_health=20,
        icon="\U0001faa8",
        resources=(
            ResourceDrop("stone", (2, 4), 1.0, required_tool="pickaxe"),
            ResourceDrop("metal", (1, 1), 0.1, required_tool="pickaxe"),
        ),
        respawn_time_ms=15 * _MINUTE_MS,
    ),
    "berry_bush": WorldObjectTemplate(
        type="bush",
        name="Berry Bush",
        size=Size(1, 1),
        max_health=10,
        icon="\U0001fad0",
        resources=(
            ResourceDrop("food", (1, 3), 1.0),
            ResourceDrop("fiber", (1, 1), 0.2),
        ),
        respawn_time_ms=5 * _MINUTE_MS,
    ),
    "water_spring": WorldObjectTemplate(
        type="water_source",
        name="Natural Spring",
        size=Size(1, 1),
        max_health=999,
        icon="\U0001f4a7",
        resources=(ResourceDrop("water", (2, 4), 1.0),),
        respawn_time_ms=1 * _MINUTE_MS,
    ),
}

# Which template each generator category instantiates.
CATEGORY_TEMPLATES: dict[str, str] = {
    "tree": "oak_tree",
    "rock": "stone_deposit",
    "bush": "berry_bush",
    "water_source": "water_spring",
}

_REQUIRED_FIELDS = ("type", "name", "size", "max_health", "resources")


def default_templates() -> dict[str, WorldObjectTemplate]:
    """Templates keyed by generator category."""
    return {
        category: WORLD_OBJECT_TEMPLATES[name]
        for category, name in CATEGORY_TEMPLATES.items()
    }


def drop_from_mapping(data: dict[str, Any]) -> ResourceDrop:
    try:
        quantity = data["quantity"]
        return ResourceDrop(
            resource_type=data["resource_type"],
            quantity_range=(int(quantity["min"]), int(quantity["max"])),
            chance=float(data.get("chance", 1.0)),
            required_tool=data.get("required_tool"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TemplateError(f"Malformed resource drop {data!r}: {exc}") from exc


def template_from_mapping(data: dict[str, Any]) -> WorldObjectTemplate:
    """Build a template from plain data. Raises TemplateError on missing or bad fields."""
    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        raise TemplateError(f"Template missing required fields: {', '.join(missing)}")
    size = data["size"]
    try:
        return WorldObjectTemplate(
            type=data["type"],
            name=data["name"],
            size=Size(int(size["width"]), int(size["height"])),
            max_health=int(data["max_health"]),
            resources=tuple(drop_from_mapping(d) for d in data["resources"]),
            icon=data.get("icon", ""),
            harvestable=bool(data.get("harvestable", True)),
            respawn_time_ms=data.get("respawn_time_ms"),
        )
    except TemplateError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise TemplateError(f"Malformed template {data.get('name')!r}: {exc}") from exc
