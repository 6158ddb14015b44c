"""Services: the container loot tracker and the delayed-action schedulers."""
