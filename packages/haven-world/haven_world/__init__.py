"""haven-world - World objects, procedural placement, and harvesting."""
from haven_world.generator import (
    DEFAULT_COUNTS,
    PlacementBounds,
    PlacementPolicy,
    WorldGenerator,
)
from haven_world.harvest import (
    HARVEST_DAMAGE,
    HARVEST_DURATION_MS,
    HARVEST_EXPERIENCE,
    HarvestOutcome,
    HarvestResolver,
    RandomSource,
    Rejected,
    RejectReason,
    gating_drop,
    roll_drop,
)
from haven_world.respawn import RespawnScheduler
from haven_world.templates import (
    CATEGORY_TEMPLATES,
    WORLD_OBJECT_TEMPLATES,
    default_templates,
    drop_from_mapping,
    template_from_mapping,
)
from haven_world.types import (
    CATEGORIES,
    GRID_HEIGHT,
    GRID_WIDTH,
    Position,
    ResourceDrop,
    Size,
    TemplateError,
    WorldObject,
    WorldObjectTemplate,
)

__all__ = [
    "CATEGORIES",
    "CATEGORY_TEMPLATES",
    "DEFAULT_COUNTS",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "HARVEST_DAMAGE",
    "HARVEST_DURATION_MS",
    "HARVEST_EXPERIENCE",
    "HarvestOutcome",
    "HarvestResolver",
    "PlacementBounds",
    "PlacementPolicy",
    "Position",
    "RandomSource",
    "Rejected",
    "RejectReason",
    "ResourceDrop",
    "RespawnScheduler",
    "Size",
    "TemplateError",
    "WORLD_OBJECT_TEMPLATES",
    "WorldGenerator",
    "WorldObject",
    "WorldObjectTemplate",
    "default_templates",
    "drop_from_mapping",
    "gating_drop",
    "roll_drop",
    "template_from_mapping",
]
