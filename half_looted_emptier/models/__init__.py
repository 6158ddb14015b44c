"""Domain models for container tracking, trigger policies and empty actions."""
