"""
Half Looted Emptier.

Empties loot containers that players leave half-looted. The plugin watches
loot-opened, loot-closed and container-destroyed events from the host game
server and, after a configurable delay, drops or removes whatever a player
left behind and destroys the container.
"""

__title__ = "Half Looted Emptier"
__author__ = "VisEntities"
__version__ = "1.1.0"
__description__ = "Empties loot containers that players leave half-looted."

__all__ = ["__title__", "__author__", "__version__", "__description__"]
