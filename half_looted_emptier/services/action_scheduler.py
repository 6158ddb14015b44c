"""
Delayed-action schedulers.

Both schedulers run callbacks on the host's single cooperative thread and
share one contract: schedule() returns a ScheduledAction handle, cancel() is
idempotent, and a cancelled action's callback never runs.
"""

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class ScheduledAction:
    """Cancellable handle for a callback due at a point on the scheduler's clock."""

    def __init__(self, callback: Callable[[], None], due_at: float, name: str | None = None):
        self._callback = callback
        self.due_at = due_at
        self.name = name or getattr(callback, "__name__", "scheduled_action")
        self.cancelled = False
        self.fired = False
        self._timer_handle: asyncio.TimerHandle | None = None

    @property
    def active(self) -> bool:
        """True until the action has fired or been cancelled."""
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """
        Cancel the action.

        Returns:
            bool: True if the action was still pending, False if it had already
            fired or been cancelled
        """
        if not self.active:
            return False
        self.cancelled = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None
        return True

    def run(self) -> None:
        """Invoke the callback once, unless the action was cancelled."""
        if not self.active:
            return
        self.fired = True
        self._timer_handle = None
        try:
            self._callback()
        except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: a failing action must not stop the host's timer processing
            logger.error("Scheduled action failed", action=self.name, error=str(e), exc_info=True)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"<ScheduledAction {self.name} due_at={self.due_at:.3f} {state}>"


class ActionScheduler(Protocol):
    """Delayed-action scheduler contract."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None], name: str | None = None) -> ScheduledAction:
        """Run callback once after delay_seconds."""
        ...

    def cancel(self, action: ScheduledAction | None) -> bool:
        """Cancel a scheduled action; safe on fired, cancelled or None handles."""
        ...


def _validate_delay(delay_seconds: float) -> None:
    if delay_seconds < 0:
        raise ValueError("Delay must not be negative")


class AsyncioActionScheduler:
    """
    Scheduler backed by the asyncio event loop.

    The event loop is the cooperative thread: callbacks run between event
    handlers, never alongside them.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """
        Initialize the scheduler.

        Args:
            loop: Event loop to schedule on (defaults to the running loop at
                schedule time)
        """
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, delay_seconds: float, callback: Callable[[], None], name: str | None = None) -> ScheduledAction:
        _validate_delay(delay_seconds)
        loop = self._get_loop()
        action = ScheduledAction(callback, loop.time() + delay_seconds, name)
        action._timer_handle = loop.call_later(delay_seconds, action.run)  # pylint: disable=protected-access
        logger.debug("Action scheduled on event loop", action=action.name, delay_seconds=delay_seconds)
        return action

    def cancel(self, action: ScheduledAction | None) -> bool:
        if action is None:
            return False
        return action.cancel()


class TickActionScheduler:
    """
    Scheduler driven by the host's frame or tick loop.

    The host calls advance() with the time elapsed since the previous call;
    due callbacks run in due order, ties in scheduling order.
    """

    def __init__(self, start_time: float = 0.0):
        self.now = start_time
        self._queue: list[tuple[float, int, ScheduledAction]] = []
        self._sequence = itertools.count()

    @property
    def pending_count(self) -> int:
        """Number of actions that are neither fired nor cancelled."""
        return sum(1 for _, _, action in self._queue if action.active)

    def schedule(self, delay_seconds: float, callback: Callable[[], None], name: str | None = None) -> ScheduledAction:
        _validate_delay(delay_seconds)
        action = ScheduledAction(callback, self.now + delay_seconds, name)
        heapq.heappush(self._queue, (action.due_at, next(self._sequence), action))
        return action

    def cancel(self, action: ScheduledAction | None) -> bool:
        if action is None:
            return False
        return action.cancel()

    def advance(self, elapsed_seconds: float) -> int:
        """
        Move the clock forward and run every action that came due.

        Args:
            elapsed_seconds: Time since the previous advance

        Returns:
            int: Number of callbacks that ran
        """
        _validate_delay(elapsed_seconds)
        target = self.now + elapsed_seconds
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            due_at, _, action = heapq.heappop(self._queue)
            if not action.active:
                continue
            self.now = due_at
            action.run()
            ran += 1

        self.now = target
        return ran
