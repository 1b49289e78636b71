"""A textured raycasting maze game built on pygame."""

__version__ = "0.1.0"