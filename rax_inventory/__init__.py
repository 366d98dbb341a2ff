"""Inventory snapshot runner built on the raxcloud clients."""

__all__ = [
    "config",
    "session",
    "resources",
    "parser",
    "inventory",
]
