"""Geometry, rewriting systems and the fractal engines."""
