"""Inventory value type and helper functions."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from haven_resource.types import ResourceStack, StackPolicy

if TYPE_CHECKING:
    from haven_resource.registry import ResourceCatalog

DEFAULT_MAX_SLOTS = 20


class InsufficientResourcesError(ValueError):
    """Raised when consuming more of a resource than the inventory holds."""

    def __init__(self, resource_type: str, needed: int, available: int) -> None:
        self.resource_type = resource_type
        self.needed = needed
        self.available = available
        super().__init__(
            f"Cannot consume {needed} {resource_type}: only {available} held"
        )


@dataclass(frozen=True)
class Inventory:
    """Immutable inventory value.

    Attributes:
        stacks: Ordered stacks, at most one per resource type.
        max_slots: Maximum number of stacks.
    """

    stacks: tuple[ResourceStack, ...] = field(default_factory=tuple)
    max_slots: int = DEFAULT_MAX_SLOTS

    def __post_init__(self) -> None:
        if self.max_slots <= 0:
            raise ValueError(f"max_slots must be > 0, got {self.max_slots}")
        seen: set[str] = set()
        for stack in self.stacks:
            if stack.resource_type in seen:
                raise ValueError(f"duplicate stack for {stack.resource_type!r}")
            seen.add(stack.resource_type)
        if len(self.stacks) > self.max_slots:
            raise ValueError(
                f"{len(self.stacks)} stacks exceed max_slots={self.max_slots}"
            )


class InventoryHelper:
    """Pure functions for inventory manipulation. Every mutator returns a new Inventory."""

    @staticmethod
    def find(inv: Inventory, resource_type: str) -> ResourceStack | None:
        for stack in inv.stacks:
            if stack.resource_type == resource_type:
                return stack
        return None

    @staticmethod
    def count(inv: Inventory, resource_type: str) -> int:
        """Get current quantity of a resource."""
        stack = InventoryHelper.find(inv, resource_type)
        return 0 if stack is None else stack.quantity

    @staticmethod
    def total(inv: Inventory) -> int:
        """Get total quantity across all resource types."""
        return sum(stack.quantity for stack in inv.stacks)

    @staticmethod
    def slots_used(inv: Inventory) -> int:
        return len(inv.stacks)

    @staticmethod
    def is_full(inv: Inventory) -> bool:
        return len(inv.stacks) >= inv.max_slots

    @staticmethod
    def names(inv: Inventory) -> list[str]:
        return [stack.resource_type for stack in inv.stacks]

    @staticmethod
    def has(inv: Inventory, resource_type: str, amount: int = 1) -> bool:
        """Check if at least *amount* of resource exists."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        return InventoryHelper.count(inv, resource_type) >= amount

    @staticmethod
    def can_afford(inv: Inventory, requirements: dict[str, int]) -> bool:
        """Check if all requirements are met."""
        for resource_type, needed in requirements.items():
            if InventoryHelper.count(inv, resource_type) < needed:
                return False
        return True

    @staticmethod
    def apply_gain(
        inv: Inventory,
        gains: Iterable[tuple[str, int]],
        catalog: ResourceCatalog,
        policy: StackPolicy = StackPolicy.UNBOUNDED,
    ) -> Inventory:
        """Add each ``(resource_type, quantity)`` gain.

        Gains for a type already held merge into its stack. A new type
        takes a new slot when one is free; with every slot taken the gain
        is dropped without error.
        """
        stacks = list(inv.stacks)
        for resource_type, quantity in gains:
            if quantity < 0:
                raise ValueError(f"quantity must be >= 0, got {quantity}")
            if quantity == 0:
                continue
            index = _index_of(stacks, resource_type)
            if index is not None:
                stack = stacks[index]
                merged = stack.quantity + quantity
                if policy is StackPolicy.CLAMPED:
                    merged = min(merged, max(stack.max_stack, stack.quantity))
                stacks[index] = stack.with_quantity(merged)
                continue
            if len(stacks) >= inv.max_slots:
                continue
            defn = catalog.lookup(resource_type)
            amount = quantity
            if policy is StackPolicy.CLAMPED:
                amount = min(amount, defn.max_stack)
            stacks.append(
                ResourceStack(
                    resource_type=resource_type,
                    quantity=amount,
                    max_stack=defn.max_stack,
                )
            )
        return replace(inv, stacks=tuple(stacks))

    @staticmethod
    def consume(inv: Inventory, resource_type: str, amount: int = 1) -> Inventory:
        """Remove *amount* of a resource. Raises InsufficientResourcesError if not held."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount == 0:
            return inv
        stacks = list(inv.stacks)
        index = _index_of(stacks, resource_type)
        available = 0 if index is None else stacks[index].quantity
        if index is None or available < amount:
            raise InsufficientResourcesError(resource_type, amount, available)

        remaining = available - amount
        if remaining == 0:
            del stacks[index]
        else:
            stacks[index] = stacks[index].with_quantity(remaining)
        return replace(inv, stacks=tuple(stacks))

    @staticmethod
    def consume_all(inv: Inventory, requirements: dict[str, int]) -> Inventory:
        """Verify every requirement, then remove them all."""
        for resource_type, needed in requirements.items():
            available = InventoryHelper.count(inv, resource_type)
            if available < needed:
                raise InsufficientResourcesError(resource_type, needed, available)
        for resource_type, needed in requirements.items():
            inv = InventoryHelper.consume(inv, resource_type, needed)
        return inv


def starting_inventory(
    catalog: ResourceCatalog,
    entries: Iterable[tuple[str, int]],
    max_slots: int = DEFAULT_MAX_SLOTS,
) -> Inventory:
    """Build the inventory a new player starts with."""
    return InventoryHelper.apply_gain(Inventory(max_slots=max_slots), entries, catalog)


def _index_of(stacks: list[ResourceStack], resource_type: str) -> int | None:
    for i, stack in enumerate(stacks):
        if stack.resource_type == resource_type:
            return i
    return None
