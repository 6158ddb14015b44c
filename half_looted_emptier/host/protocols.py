"""
Host protocols for Half Looted Emptier.

Explicit typing.Protocol definitions for what the plugin needs from the game
server. The tracker depends on these contracts rather than on any concrete
engine types, which keeps it testable with plain doubles.
"""

# pylint: disable=unnecessary-ellipsis  # Reason: Protocol method bodies use ... per typing.Protocol convention

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any, Protocol


class LootContainerRef(Protocol):
    """
    A live loot container as the host exposes it.

    net_id is None while the container has no network identity (not yet
    spawned, or already torn down).
    """

    net_id: Hashable | None

    @property
    def is_destroyed(self) -> bool:
        """True once the host has killed or unloaded the container."""
        ...

    def items(self) -> Iterable[tuple[str, int]] | None:
        """Current contents as (item_kind, quantity) pairs, or None if unavailable."""
        ...

    def drop_position(self) -> Any:
        """World position where dropped items should spawn."""
        ...


class ContainerHost(Protocol):
    """Container lookup and effectors provided by the host."""

    def resolve_container(self, container_id: Hashable) -> LootContainerRef | None:
        """Return the live container for an id, or None if it no longer exists."""
        ...

    def drop_items(self, container: LootContainerRef, position: Any) -> None:
        """Drop every item in the container's inventory at position."""
        ...

    def clear_inventory(self, container: LootContainerRef) -> None:
        """Remove every item from the container's inventory."""
        ...

    def destroy_container(self, container: LootContainerRef, with_effects: bool = True) -> None:
        """Destroy the container, with gib effects when with_effects is set."""
        ...
