"""Resolve pointer gestures into multi-region text selections."""

__all__ = [
    "buffer",
    "selection",
    "gestures",
    "runtime",
]

__version__ = "0.1.0"
