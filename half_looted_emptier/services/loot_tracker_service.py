"""
Container loot tracker service.

Tracks containers between a player opening and closing them and decides,
per container, whether a delayed empty-and-destroy action is scheduled,
cancelled, or never needed. All state lives on the tracker instance; the
plugin constructs one at startup and shuts it down on unload.
"""

from __future__ import annotations

from collections.abc import Hashable

from ..host.protocols import ContainerHost
from ..models.container import (
    ContainerState,
    ContentsSource,
    ItemSnapshot,
    TrackedContainer,
    capture_snapshot,
)
from ..models.trigger_policy import EmptyAction, TriggerPolicy
from ..structured_logging.enhanced_logging_config import get_logger
from .action_scheduler import ActionScheduler

logger = get_logger(__name__)


class ContainerLootTracker:
    """
    Per-container state machine for half-looted containers.

    Untracked --open--> Tracking --close--> Untracked | Scheduled;
    Scheduled --timer--> Untracked; destroyed --> Untracked from any state;
    open from any state starts a fresh Tracking cycle, cancelling a pending
    action first.
    """

    def __init__(
        self,
        host: ContainerHost,
        scheduler: ActionScheduler,
        policy: TriggerPolicy,
        empty_action: EmptyAction,
    ):
        """
        Initialize the tracker.

        Args:
            host: Container lookup and effectors
            scheduler: Delayed-action scheduler shared with the host
            policy: Trigger policy evaluated when a container is closed
            empty_action: Delay and drop/remove behaviour for emptying
        """
        self.host = host
        self.scheduler = scheduler
        self.policy = policy
        self.empty_action = empty_action
        self._tracked: dict[Hashable, TrackedContainer] = {}

    # Event entry points

    def on_loot_opened(self, container_id: Hashable, contents: ContentsSource) -> None:
        """
        Start a tracking cycle for a container a player just opened.

        Args:
            container_id: Stable container identity
            contents: Current contents; copied by value
        """
        previous = self._tracked.get(container_id)
        if previous is not None and previous.pending_action is not None:
            self.scheduler.cancel(previous.pending_action)
            logger.info("Pending empty action cancelled; container reopened", container_id=container_id)

        original_items = capture_snapshot(contents)
        self._tracked[container_id] = TrackedContainer(container_id=container_id, original_items=original_items)
        logger.debug("Tracking container", container_id=container_id, original_count=len(original_items))

    def on_loot_closed(self, container_id: Hashable, remaining_contents: ContentsSource) -> None:
        """
        Decide what happens to a container a player just closed.

        Schedules the empty action when the trigger policy fires, otherwise
        ends tracking. Closing an untracked or already scheduled container is
        a no-op.

        Args:
            container_id: Stable container identity
            remaining_contents: Contents left at close time
        """
        tracked = self._tracked.get(container_id)
        if tracked is None:
            logger.debug("Close ignored; container not tracked", container_id=container_id)
            return
        if tracked.pending_action is not None:
            logger.debug("Close ignored; empty action already pending", container_id=container_id)
            return

        remaining_count = len(capture_snapshot(remaining_contents))
        original_count = tracked.original_count

        if not self.policy.should_trigger(original_count, remaining_count):
            del self._tracked[container_id]
            logger.debug(
                "Container left alone; tracking ended",
                container_id=container_id,
                original_count=original_count,
                remaining_count=remaining_count,
            )
            return

        tracked.pending_action = self.scheduler.schedule(
            self.empty_action.delay_seconds,
            lambda: self._run_empty_action(container_id),
            name=f"empty_container:{container_id}",
        )
        logger.info(
            "Empty action scheduled",
            container_id=container_id,
            original_count=original_count,
            remaining_count=remaining_count,
            delay_seconds=self.empty_action.delay_seconds,
        )

    def on_container_destroyed(self, container_id: Hashable) -> None:
        """
        Forget a container the host destroyed, cancelling any pending action.

        Args:
            container_id: Stable container identity
        """
        tracked = self._tracked.pop(container_id, None)
        if tracked is None:
            return
        if tracked.pending_action is not None:
            self.scheduler.cancel(tracked.pending_action)
            logger.info("Pending empty action cancelled; container destroyed", container_id=container_id)
        else:
            logger.debug("Tracking ended; container destroyed", container_id=container_id)

    # Scheduled callback

    def _run_empty_action(self, container_id: Hashable) -> None:
        """Empty and destroy a container whose delay elapsed."""
        # Reopening or destroying cancels this action, so the entry is still ours
        self._tracked.pop(container_id, None)

        container = self.host.resolve_container(container_id)
        if container is None or container.is_destroyed:
            logger.info("Empty action aborted; container no longer exists", container_id=container_id)
            return

        if self.empty_action.remove_instead_of_drop:
            self.host.clear_inventory(container)
        else:
            self.host.drop_items(container, container.drop_position())

        self.host.destroy_container(container, with_effects=True)
        logger.info(
            "Half-looted container emptied",
            container_id=container_id,
            removed=self.empty_action.remove_instead_of_drop,
        )

    # Lifecycle

    def shutdown(self) -> int:
        """
        Cancel every pending action and drop all tracking state.

        Returns:
            int: Number of pending actions cancelled
        """
        cancelled = 0
        for tracked in self._tracked.values():
            if tracked.pending_action is not None and self.scheduler.cancel(tracked.pending_action):
                cancelled += 1
        self._tracked.clear()
        logger.info("Container loot tracker shut down", cancelled_actions=cancelled)
        return cancelled

    # Introspection

    def state_of(self, container_id: Hashable) -> ContainerState:
        tracked = self._tracked.get(container_id)
        if tracked is None:
            return ContainerState.UNTRACKED
        return tracked.state

    def is_tracking(self, container_id: Hashable) -> bool:
        return container_id in self._tracked

    def has_pending_action(self, container_id: Hashable) -> bool:
        return self.state_of(container_id) is ContainerState.SCHEDULED

    def original_items(self, container_id: Hashable) -> ItemSnapshot | None:
        tracked = self._tracked.get(container_id)
        return tracked.original_items if tracked is not None else None

    @property
    def tracked_count(self) -> int:
        return len(self._tracked)

    @property
    def pending_count(self) -> int:
        return sum(1 for tracked in self._tracked.values() if tracked.pending_action is not None)
