"""haven-resource - Resource catalog, stacks, tools, and inventories."""
from haven_resource.catalog import (
    RESOURCE_DEFINITIONS,
    STARTING_RESOURCES,
    TOOL_DEFINITIONS,
    default_catalog,
)
from haven_resource.inventory import (
    DEFAULT_MAX_SLOTS,
    InsufficientResourcesError,
    Inventory,
    InventoryHelper,
    starting_inventory,
)
from haven_resource.registry import ResourceCatalog, default_definition
from haven_resource.types import ResourceDef, ResourceStack, StackPolicy, Tool, ToolDef

__all__ = [
    "DEFAULT_MAX_SLOTS",
    "InsufficientResourcesError",
    "Inventory",
    "InventoryHelper",
    "RESOURCE_DEFINITIONS",
    "ResourceCatalog",
    "ResourceDef",
    "ResourceStack",
    "STARTING_RESOURCES",
    "StackPolicy",
    "TOOL_DEFINITIONS",
    "Tool",
    "ToolDef",
    "default_catalog",
    "default_definition",
    "starting_inventory",
]
