"""Utility helpers for Half Looted Emptier."""
