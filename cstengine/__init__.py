"""Geometry kernel: vector math, half-edge topology, tessellation, camera and scene export."""

__version__ = "0.1.0"