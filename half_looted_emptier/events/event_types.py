"""
Event types for Half Looted Emptier.

Each host hook the plugin listens to has a matching event class, so hosts
that deliver events as objects can hand them to HalfLootedEmptierPlugin.dispatch.
References may be None; the plugin treats that as "ignore this event".
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _default_timestamp() -> datetime:
    """Factory function for default timestamp."""
    return datetime.now(UTC)


@dataclass
class BaseEvent:
    """Base class for all host events."""

    timestamp: datetime = field(default_factory=_default_timestamp, init=False)
    event_type: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.event_type = type(self).__name__


@dataclass
class LootOpened(BaseEvent):
    """A player started looting a container."""

    player: Any
    container: Any


@dataclass
class LootClosed(BaseEvent):
    """A player stopped looting a container."""

    player: Any
    container: Any


@dataclass
class ContainerDestroyed(BaseEvent):
    """The host killed or unloaded a container."""

    container: Any
