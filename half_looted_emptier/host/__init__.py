"""Contracts the host game server implements for the plugin."""
