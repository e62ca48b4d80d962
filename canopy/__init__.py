"""Canopy: a threaded comment tree store with debounced persistence."""

__version__ = "0.1.0"
