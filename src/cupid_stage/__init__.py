"""Cupid Stage: swipe, match and realtime messaging backend."""

__version__ = "0.1.0"
