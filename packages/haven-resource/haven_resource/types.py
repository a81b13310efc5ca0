"""Core data types for resources, stacks, and tools."""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace

RARITIES = ("common", "uncommon", "rare", "epic", "legendary")


class StackPolicy(enum.Enum):
    """How merging into an existing stack treats ``max_stack``.

    UNBOUNDED lets a merged stack grow past its ``max_stack``.
    CLAMPED caps it and discards the excess.
    """

    UNBOUNDED = "unbounded"
    CLAMPED = "clamped"


@dataclass(frozen=True)
class ResourceDef:
    """Immutable resource type definition.

    Attributes:
        type: Unique identifier for this resource type (e.g. "wood").
        name: Display name.
        description: Flavour text shown next to the stack.
        icon: Single glyph used by front ends.
        max_stack: Maximum quantity a freshly created stack may hold.
        rarity: One of ``RARITIES``.
    """

    type: str
    name: str = ""
    description: str = ""
    icon: str = "\U0001f4e6"
    max_stack: int = 50
    rarity: str = "common"

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("ResourceDef type must be non-empty")
        if self.max_stack <= 0:
            raise ValueError(f"max_stack must be > 0, got {self.max_stack}")
        if self.rarity not in RARITIES:
            raise ValueError(f"unknown rarity {self.rarity!r}")


@dataclass(frozen=True)
class ToolDef:
    """Immutable tool type definition.

    Attributes:
        type: Tool identifier (e.g. "axe").
        name: Display name.
        max_durability: Durability of a freshly made tool.
        efficiency: Harvest efficiency multiplier. Metadata only.
        icon: Single glyph used by front ends.
        description: Flavour text.
    """

    type: str
    name: str
    max_durability: int
    efficiency: float = 1.0
    icon: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("ToolDef type must be non-empty")
        if self.max_durability <= 0:
            raise ValueError(
                f"max_durability must be > 0, got {self.max_durability}"
            )
        if self.efficiency <= 0:
            raise ValueError(f"efficiency must be > 0, got {self.efficiency}")


@dataclass(frozen=True)
class ResourceStack:
    """A quantity of one resource type occupying one inventory slot."""

    resource_type: str
    quantity: int
    max_stack: int

    def __post_init__(self) -> None:
        if not self.resource_type:
            raise ValueError("ResourceStack resource_type must be non-empty")
        if self.quantity <= 0:
            raise ValueError(f"quantity must be > 0, got {self.quantity}")
        if self.max_stack <= 0:
            raise ValueError(f"max_stack must be > 0, got {self.max_stack}")

    @property
    def overflowing(self) -> bool:
        return self.quantity > self.max_stack

    def with_quantity(self, quantity: int) -> ResourceStack:
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class Tool:
    """An equippable tool instance."""

    type: str
    durability: int
    max_durability: int
    efficiency: float = 1.0

    def __post_init__(self) -> None:
        if self.max_durability <= 0:
            raise ValueError(
                f"max_durability must be > 0, got {self.max_durability}"
            )
        if not 0 <= self.durability <= self.max_durability:
            raise ValueError(
                f"durability must be in [0, {self.max_durability}], got {self.durability}"
            )

    @property
    def broken(self) -> bool:
        return self.durability == 0

    def worn(self, uses: int = 1) -> Tool:
        """Return a copy with durability reduced by *uses*, floored at 0."""
        if uses < 0:
            raise ValueError(f"uses must be >= 0, got {uses}")
        return replace(self, durability=max(0, self.durability - uses))
