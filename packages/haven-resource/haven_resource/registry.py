"""ResourceCatalog class."""
from __future__ import annotations

from typing import Any

from haven_resource.types import ResourceDef, Tool, ToolDef


def default_definition(resource_type: str) -> ResourceDef:
    """Generic definition for a resource type the catalog does not know."""
    return ResourceDef(type=resource_type, name=resource_type)


class ResourceCatalog:
    """Static lookup table of resource and tool definitions."""

    def __init__(self) -> None:
        self._resources: dict[str, ResourceDef] = {}
        self._tools: dict[str, ToolDef] = {}

    def define(self, resource_def: ResourceDef) -> None:
        """Register a resource type. Overwrites if type exists."""
        self._resources[resource_def.type] = resource_def

    def define_tool(self, tool_def: ToolDef) -> None:
        """Register a tool type. Overwrites if type exists."""
        self._tools[tool_def.type] = tool_def

    def get(self, resource_type: str) -> ResourceDef:
        """Look up definition. Raises KeyError if not defined."""
        if resource_type not in self._resources:
            raise KeyError(resource_type)
        return self._resources[resource_type]

    def lookup(self, resource_type: str) -> ResourceDef:
        """Look up definition, falling back to ``default_definition``."""
        defn = self._resources.get(resource_type)
        if defn is None:
            return default_definition(resource_type)
        return defn

    def has(self, resource_type: str) -> bool:
        return resource_type in self._resources

    def defined_resources(self) -> list[str]:
        return list(self._resources.keys())

    def tool(self, tool_type: str) -> ToolDef:
        """Look up a tool definition. Raises KeyError if not defined."""
        if tool_type not in self._tools:
            raise KeyError(tool_type)
        return self._tools[tool_type]

    def has_tool(self, tool_type: str) -> bool:
        return tool_type in self._tools

    def defined_tools(self) -> list[str]:
        return list(self._tools.keys())

    def make_tool(self, tool_type: str) -> Tool:
        """Create a tool instance at full durability."""
        defn = self.tool(tool_type)
        return Tool(
            type=defn.type,
            durability=defn.max_durability,
            max_durability=defn.max_durability,
            efficiency=defn.efficiency,
        )

    def snapshot(self) -> dict[str, Any]:
        """Serialize catalog contents."""
        resources: dict[str, dict[str, Any]] = {}
        for resource_type, defn in self._resources.items():
            resources[resource_type] = {
                "type": defn.type,
                "name": defn.name,
                "description": defn.description,
                "icon": defn.icon,
                "max_stack": defn.max_stack,
                "rarity": defn.rarity,
            }
        tools: dict[str, dict[str, Any]] = {}
        for tool_type, tdef in self._tools.items():
            tools[tool_type] = {
                "type": tdef.type,
                "name": tdef.name,
                "max_durability": tdef.max_durability,
                "efficiency": tdef.efficiency,
                "icon": tdef.icon,
                "description": tdef.description,
            }
        return {"resources": resources, "tools": tools}

    def restore(self, data: dict[str, Any]) -> None:
        """Restore catalog contents from snapshot data."""
        self._resources.clear()
        self._tools.clear()
        for _type, defn_data in data.get("resources", {}).items():
            self.define(ResourceDef(**defn_data))
        for _type, tool_data in data.get("tools", {}).items():
            self.define_tool(ToolDef(**tool_data))
