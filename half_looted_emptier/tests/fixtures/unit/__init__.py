"""
Unit-tier fixtures with in-memory host fakes and a manually driven clock.
"""

from collections.abc import Callable
from typing import Any

import pytest

from half_looted_emptier.models.trigger_policy import EmptyAction, TriggerMode, build_trigger_policy
from half_looted_emptier.services.action_scheduler import TickActionScheduler
from half_looted_emptier.services.loot_tracker_service import ContainerLootTracker

from .host_fakes import FakeContainerHost, FakeLootContainer


@pytest.fixture
def scheduler() -> TickActionScheduler:
    """Provide a scheduler whose clock only moves when the test advances it."""
    return TickActionScheduler()


@pytest.fixture
def container_host() -> FakeContainerHost:
    """Provide an empty in-memory container host."""
    return FakeContainerHost()


@pytest.fixture
def make_container(container_host: FakeContainerHost) -> Callable[..., FakeLootContainer]:
    """Factory that registers a container with the fake host."""

    def _make(net_id: Any, contents: dict[str, int] | None = None, **kwargs: Any) -> FakeLootContainer:
        return container_host.add(FakeLootContainer(net_id=net_id, contents=dict(contents or {}), **kwargs))

    return _make


@pytest.fixture
def make_tracker(container_host: FakeContainerHost, scheduler: TickActionScheduler) -> Callable[..., ContainerLootTracker]:
    """Factory for trackers wired to the fake host and the manual scheduler."""

    def _make(
        mode: TriggerMode = TriggerMode.LOOTED,
        threshold: int = 1,
        delay: float = 30.0,
        remove_instead_of_drop: bool = False,
    ) -> ContainerLootTracker:
        return ContainerLootTracker(
            host=container_host,
            scheduler=scheduler,
            policy=build_trigger_policy(mode, threshold),
            empty_action=EmptyAction(delay_seconds=delay, remove_instead_of_drop=remove_instead_of_drop),
        )

    return _make
