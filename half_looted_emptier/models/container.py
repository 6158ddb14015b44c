"""
Container tracking models.

An ItemSnapshot records what a container held when looting began. It is built
from immutable ItemStack values so nothing the host does to the live
inventory afterwards can change it.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..services.action_scheduler import ScheduledAction

ContainerId: TypeAlias = Hashable


class ItemStack(BaseModel):
    """A single stack of items: what it is and how many."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    item_kind: str = Field(..., min_length=1, description="Item short name as reported by the host")
    quantity: int = Field(..., ge=1, description="Number of items in the stack")


ItemSnapshot: TypeAlias = tuple[ItemStack, ...]

ContentsSource: TypeAlias = Mapping[str, int] | Iterable[ItemStack | tuple[str, int]]


def _iter_pairs(contents: Any) -> Iterable[tuple[str, int]]:
    if isinstance(contents, Mapping):
        yield from contents.items()
        return
    for entry in contents:
        if isinstance(entry, ItemStack):
            yield entry.item_kind, entry.quantity
        else:
            item_kind, quantity = entry
            yield item_kind, quantity


def capture_snapshot(contents: ContentsSource) -> ItemSnapshot:
    """
    Copy container contents into an immutable snapshot.

    Entries with a non-positive quantity or an empty kind are not items and
    are skipped.

    Args:
        contents: Mapping of item kind to quantity, or an iterable of
            (item_kind, quantity) pairs / ItemStack values

    Returns:
        ItemSnapshot: Stacks in the order the host reported them
    """
    return tuple(
        ItemStack(item_kind=str(item_kind), quantity=int(quantity))
        for item_kind, quantity in _iter_pairs(contents)
        if int(quantity) > 0 and str(item_kind)
    )


class ContainerState(str, Enum):
    """Tracking state of a single container."""

    UNTRACKED = "untracked"
    TRACKING = "tracking"
    SCHEDULED = "scheduled"


@dataclass
class TrackedContainer:
    """Live tracking state for one container between open and empty."""

    container_id: ContainerId
    original_items: ItemSnapshot
    pending_action: ScheduledAction | None = None

    @property
    def original_count(self) -> int:
        return len(self.original_items)

    @property
    def state(self) -> ContainerState:
        if self.pending_action is not None:
            return ContainerState.SCHEDULED
        return ContainerState.TRACKING
