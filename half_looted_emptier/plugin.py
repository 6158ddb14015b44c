"""
Half Looted Emptier plugin entry point.

HalfLootedEmptierPlugin is what the host game server loads. It owns the
configuration and the ContainerLootTracker for the lifetime of the plugin,
filters out events with unusable references, and forwards the rest to the
tracker keyed by the container's network id.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from . import __description__, __title__, __version__
from .config import EmptierConfig, PluginSettings, get_settings, load_config
from .events.event_types import BaseEvent, ContainerDestroyed, LootClosed, LootOpened
from .host.protocols import ContainerHost
from .services.action_scheduler import ActionScheduler
from .services.loot_tracker_service import ContainerLootTracker
from .structured_logging.enhanced_logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class HalfLootedEmptierPlugin:
    """
    Host-facing plugin object.

    Lifecycle: construct, init() once the host is ready, unload() when the
    host unloads the plugin or shuts down. Hooks called outside that window
    are ignored.
    """

    title = __title__
    version = __version__
    description = __description__

    def __init__(
        self,
        host: ContainerHost,
        scheduler: ActionScheduler,
        config: EmptierConfig | None = None,
        settings: PluginSettings | None = None,
    ):
        """
        Initialize the plugin.

        Args:
            host: Container lookup and effectors
            scheduler: Delayed-action scheduler provided by the host
            config: Preloaded configuration (skips reading the config file)
            settings: Runtime settings (defaults to get_settings())
        """
        self.host = host
        self.scheduler = scheduler
        self.config = config
        self.settings = settings
        self.tracker: ContainerLootTracker | None = None

    @property
    def is_loaded(self) -> bool:
        return self.tracker is not None

    def init(self) -> None:
        """Load configuration and start tracking."""
        if self.is_loaded:
            logger.warning("Plugin already initialized", plugin=self.title)
            return

        if self.settings is None:
            self.settings = get_settings()
        setup_logging(self.settings)

        if self.config is None:
            self.config = load_config(self.settings.config_path)

        self.tracker = ContainerLootTracker(
            host=self.host,
            scheduler=self.scheduler,
            policy=self.config.trigger_policy(),
            empty_action=self.config.empty_action(),
        )
        logger.info(
            "Plugin initialized",
            trigger_mode=self.config.emptying_trigger_mode.value,
            threshold=self.config.number_of_items_to_trigger_emptying,
            delay_seconds=self.config.delay_before_emptying_container_seconds,
            remove_items=self.config.remove_items_instead_of_dropping,
        )

    def unload(self) -> int:
        """
        Stop tracking and cancel every pending empty action.

        Returns:
            int: Number of pending actions cancelled
        """
        if self.tracker is None:
            return 0
        cancelled = self.tracker.shutdown()
        self.tracker = None
        self.config = None
        logger.info("Plugin unloaded", cancelled_actions=cancelled)
        return cancelled

    # Host hooks

    def on_loot_entity(self, player: Any, container: Any) -> None:
        """A player started looting a container."""
        container_id = self._resolve_event_container(player, container, require_player=True)
        if container_id is None:
            return
        contents = container.items()
        if contents is None:
            logger.debug("Loot start ignored; contents unavailable", container_id=container_id)
            return
        self.tracker.on_loot_opened(container_id, contents)

    def on_loot_entity_end(self, player: Any, container: Any) -> None:
        """A player stopped looting a container."""
        container_id = self._resolve_event_container(player, container, require_player=True)
        if container_id is None:
            return
        remaining = container.items()
        if remaining is None:
            logger.debug("Loot end ignored; contents unavailable", container_id=container_id)
            return
        self.tracker.on_loot_closed(container_id, remaining)

    def on_entity_kill(self, container: Any) -> None:
        """The host destroyed a container."""
        container_id = self._resolve_event_container(None, container, require_player=False)
        if container_id is None:
            return
        self.tracker.on_container_destroyed(container_id)

    def dispatch(self, event: BaseEvent) -> None:
        """Route a typed host event to the matching hook."""
        if isinstance(event, LootOpened):
            self.on_loot_entity(event.player, event.container)
        elif isinstance(event, LootClosed):
            self.on_loot_entity_end(event.player, event.container)
        elif isinstance(event, ContainerDestroyed):
            self.on_entity_kill(event.container)
        else:
            logger.debug("Unhandled event type ignored", event_type=getattr(event, "event_type", type(event).__name__))

    def _resolve_event_container(self, player: Any, container: Any, *, require_player: bool) -> Hashable | None:
        """Return the container's network id, or None when the event should be ignored."""
        if self.tracker is None:
            return None
        if require_player and player is None:
            return None
        if container is None:
            return None
        return getattr(container, "net_id", None)
