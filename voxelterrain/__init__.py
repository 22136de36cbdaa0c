"""Chunked marching-cubes voxel terrain: noise heightmaps, meshing, digging and foliage."""

__version__ = "0.1.0"
__all__ = ["chunk", "noise", "tables", "terrain"]