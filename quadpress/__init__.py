"""Quadtree-based image compression with an interactive command."""

__version__ = "0.1.0"