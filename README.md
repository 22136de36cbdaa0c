# voxelterrain

Procedural voxel terrain built with the marching cubes algorithm.

A 3D density field is filled from a 2D Perlin heightmap, split into chunks
along X and Y, and each chunk is turned into a triangle mesh with vertices,
triangles, smoothed normals, UVs, per-vertex colours and tangents. Holes can
be dug into the terrain with a spherical brush; the chunks it touches are
rebuilt and any foliage instance within the brush radius is removed. Foliage
is scattered over the surface in proportion to triangle area.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Modules

- `voxelterrain.tables` – `CORNER_OFFSETS`, `EDGE_OFFSETS`, `EDGE_CORNERS`
  and `TRIANGLE_TABLE`; `edges_for_configuration(config_index)` returns the
  triangles of one of the 256 cube configurations as triples of edge indices
  and raises `ValueError` outside 0..255.
- `voxelterrain.noise` – `perlin_noise_2d(x, y)`, gradient noise in `[-1, 1]`,
  zero at integer lattice points and repeating every 256 units.
- `voxelterrain.chunk` – `Chunk`, `MeshSection`, `FoliageLayer`,
  `GrassInstance` and `MeshInstanceData`: per-chunk mesh and foliage state.
- `voxelterrain.terrain` – `TerrainSettings`, `TerrainCell` and
  `MarchingTerrain`, which generates, meshes and edits the terrain.

## Usage

```python
import random

from voxelterrain.chunk import MeshInstanceData
from voxelterrain.terrain import MarchingTerrain, TerrainSettings

settings = TerrainSettings(
    static_meshes=[MeshInstanceData(mesh="grass", min_scale=0.8, max_scale=1.2)],
    density=0.5,
)
terrain = MarchingTerrain(settings, rng=random.Random(1))
terrain.generate_terrain()

for coord, chunk in terrain.chunks.items():
    print(coord, len(chunk.vertices), len(chunk.triangles) // 3, len(chunk.mesh_ids))

# Dig a hole around a world-space point, radius in voxels.
if terrain.generate_hole((500.0, 500.0, 700.0), 5):
    print("hole dug")

terrain.delete_terrain()
```

World coordinates are voxel coordinates multiplied by
`TerrainSettings.triangle_scale`. `generate_hole` returns `False` and leaves
the terrain unchanged when the point lies outside the grid, and raises
`ValueError` for a radius below one voxel. `generate_terrain` raises
`ValueError` when the grid or chunk size is not positive.

Each chunk's finished mesh is stored in `Chunk.mesh` as a `MeshSection`;
`MarchingTerrain.build_mesh(chunk_coord)` also returns it. Pass a seeded
`random.Random` as `rng` for repeatable foliage placement.

## What it does not do

The package produces mesh and foliage data only. It does not render
anything, open a window, handle mouse or touch input, or cast rays into a
scene; the caller supplies hit positions to `generate_hole` and draws the
`MeshSection` data with whatever renderer it uses. It has no command-line
tool and does not save terrain to disk.