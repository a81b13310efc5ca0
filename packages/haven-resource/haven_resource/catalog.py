"""Built-in resource and tool tables."""
from __future__ import annotations

from haven_resource.registry import ResourceCatalog
from haven_resource.types import ResourceDef, ToolDef

RESOURCE_DEFINITIONS: tuple[ResourceDef, ...] = (
    ResourceDef("wood", "Wood", "Basic building material from trees", "\U0001fab5", 50),
    ResourceDef("stone", "Stone", "Durable material for construction", "\U0001faa8", 50),
    ResourceDef("food", "Food", "Restores hunger and health", "\U0001f356", 20),
    ResourceDef("metal", "Metal Ore", "Raw metal for advanced crafting", "⚙️", 30, "uncommon"),
    ResourceDef("fiber", "Plant Fiber", "Flexible material for tools and rope", "\U0001f33e", 40),
    ResourceDef("water", "Fresh Water", "Essential for survival", "\U0001f4a7", 10),
    ResourceDef("fuel", "Fuel", "Burns to provide heat and light", "\U0001f525", 25),
    ResourceDef("rare_material", "Rare Crystal", "Mysterious material with unknown properties", "\U0001f48e", 5, "rare"),
)

TOOL_DEFINITIONS: tuple[ToolDef, ...] = (
    ToolDef("axe", "Axe", 100, 2.0, "\U0001fa93", "Cuts wood efficiently"),
    ToolDef("pickaxe", "Pickaxe", 80, 1.8, "⛏️", "Mines stone and metal ore"),
    ToolDef("spear", "Spear", 60, 1.5, "\U0001f531", "Hunting weapon for food and defense"),
    ToolDef("hammer", "Hammer", 120, 1.3, "\U0001f528", "Essential for construction"),
    ToolDef("knife", "Knife", 40, 1.2, "\U0001f52a", "Versatile cutting tool"),
    ToolDef("bow", "Bow", 50, 2.2, "\U0001f3f9", "Ranged hunting and defense weapon"),
)

# What a new player carries.
STARTING_RESOURCES: tuple[tuple[str, int], ...] = (
    ("wood", 10),
    ("stone", 5),
    ("food", 3),
)


def default_catalog() -> ResourceCatalog:
    catalog = ResourceCatalog()
    for defn in RESOURCE_DEFINITIONS:
        catalog.define(defn)
    for tdef in TOOL_DEFINITIONS:
        catalog.define_tool(tdef)
    return catalog
