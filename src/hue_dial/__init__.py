"""Dual-handle hue dial control for GTK 4."""

__version__ = "0.1.0"
