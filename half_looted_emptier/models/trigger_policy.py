"""
Trigger policies and the empty action.

A trigger policy decides, when a player closes a container, whether what they
left behind qualifies the container for delayed emptying. Counts are item
stacks, the way the host counts entries in a container's item list.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TriggerMode(str, Enum):
    """Emptying trigger mode as stored in the configuration file."""

    REMAINING = "Remaining"
    LOOTED = "Looted"


class TriggerPolicy(Protocol):
    """Decides whether a closed container should be emptied."""

    threshold: int

    def should_trigger(self, original_count: int, remaining_count: int) -> bool:
        """Return True when the container qualifies for emptying."""
        ...


def _validate_threshold(threshold: int) -> None:
    if threshold < 1:
        raise ValueError("Trigger threshold must be at least 1")


@dataclass(frozen=True)
class LootedCountPolicy:
    """Fire once at least `threshold` items were taken out."""

    threshold: int

    def __post_init__(self) -> None:
        _validate_threshold(self.threshold)

    def should_trigger(self, original_count: int, remaining_count: int) -> bool:
        looted_count = original_count - remaining_count
        return looted_count >= self.threshold


@dataclass(frozen=True)
class RemainingCountPolicy:
    """Fire when some items remain but no more than `threshold`."""

    threshold: int

    def __post_init__(self) -> None:
        _validate_threshold(self.threshold)

    def should_trigger(self, original_count: int, remaining_count: int) -> bool:
        return 0 < remaining_count <= self.threshold


def build_trigger_policy(mode: TriggerMode | str, threshold: int) -> TriggerPolicy:
    """
    Build the policy for a configured trigger mode.

    Args:
        mode: TriggerMode or its string value ("Remaining" / "Looted")
        threshold: Number of items that triggers emptying

    Returns:
        TriggerPolicy: LootedCountPolicy or RemainingCountPolicy

    Raises:
        ValueError: If the mode is unknown or the threshold is below 1
    """
    mode = TriggerMode(mode)
    if mode is TriggerMode.LOOTED:
        return LootedCountPolicy(threshold)
    return RemainingCountPolicy(threshold)


@dataclass(frozen=True)
class EmptyAction:
    """What happens to a qualifying container once its delay elapses."""

    delay_seconds: float
    remove_instead_of_drop: bool = False

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError("Emptying delay cannot be negative")
