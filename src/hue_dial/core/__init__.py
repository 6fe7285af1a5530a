"""Geometry, interaction and rendering engine of the dial."""
