"""Typed host events consumed by the plugin."""
