"""Voxel terrain generated from noise and meshed with marching cubes."""

from __future__ import annotations

import itertools
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from voxelterrain.chunk import Chunk, FoliageLayer, MeshInstanceData, MeshSection, Vec3
from voxelterrain.noise import perlin_noise_2d
from voxelterrain.tables import CORNER_OFFSETS, EDGE_OFFSETS, edges_for_configuration

log = logging.getLogger(__name__)

_SMALL_NUMBER = 1e-8
_SNAP = 0.01
_HOLE_STRENGTH = 5.0


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a: Sequence[float], k: float) -> Vec3:
    return (a[0] * k, a[1] * k, a[2] * k)


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Sequence[float]) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def _safe_normal(a: Vec3) -> Vec3:
    square = a[0] * a[0] + a[1] * a[1] + a[2] * a[2]
    if square <= _SMALL_NUMBER:
        return (0.0, 0.0, 0.0)
    return _scale(a, 1.0 / math.sqrt(square))


def _normalized_or_same(a: Vec3) -> Vec3:
    square = a[0] * a[0] + a[1] * a[1] + a[2] * a[2]
    if square > _SMALL_NUMBER:
        return _scale(a, 1.0 / math.sqrt(square))
    return a


def _triples(values: Iterable[int]):
    it = iter(values)
    return zip(it, it, it)


def _snap_key(vertex: Vec3) -> tuple[int, int, int]:
    return tuple(math.floor(c / _SNAP + 0.5) for c in vertex)


@dataclass
class TerrainSettings:
    """Parameters of the terrain volume, its chunking and its foliage."""

    grid_size: tuple[int, int, int] = (30, 30, 30)
    triangle_scale: float = 50.0
    collision_mesh: bool = True
    chunk_size: tuple[int, int] = (20, 10)
    surface_level: float = 0.0
    noise_scale: float = 1.0
    density: float = 0.0
    density_multiplier: float = 0.1
    static_meshes: list[MeshInstanceData] = field(default_factory=list)


@dataclass
class TerrainCell:
    """Density and colour weight stored at one lattice point."""

    value: float = 0.0
    vertex_color: float = 0.0


class MarchingTerrain:
    """A density volume split into chunks, each meshed with marching cubes."""

    def __init__(self, settings: TerrainSettings | None = None, rng: random.Random | None = None):
        self.settings = settings if settings is not None else TerrainSettings()
        self.rng = rng if rng is not None else random.Random()
        self.terrain_map: list[TerrainCell] = []
        self.chunks: dict[tuple[int, int], Chunk] = {}
        self.chunk_size: tuple[int, int] = self.settings.chunk_size
        self.num_chunks: tuple[int, int] = (0, 0)
        self.remainder: tuple[int, int] = (0, 0)

    # --- whole-terrain operations -------------------------------------

    def generate_terrain(self) -> None:
        """Fill the density volume and build every chunk with its foliage."""
        gx, gy, gz = self.settings.grid_size
        if min(gx, gy, gz) < 1:
            raise ValueError(f"grid size must be positive: {self.settings.grid_size}")
        if min(self.settings.chunk_size) < 1:
            raise ValueError(f"chunk size must be positive: {self.settings.chunk_size}")

        self.delete_terrain()
        self.terrain_map = [TerrainCell() for _ in range((gx + 1) * (gy + 1) * (gz + 1))]
        self._create_terrain()
        log.debug("terrain map holds %d cells", len(self.terrain_map))

        cx = min(gx, self.settings.chunk_size[0])
        cy = min(gy, self.settings.chunk_size[1])
        self.chunk_size = (cx, cy)
        self.num_chunks = ((gx + cx - 1) // cx, (gy + cy - 1) // cy)
        self.remainder = (gx % cx, gy % cy)
        self._cube_iteration(generate_foliage=True)

    def delete_terrain(self) -> None:
        """Drop the density volume, all chunks and their foliage."""
        self.terrain_map = []
        for chunk in self.chunks.values():
            chunk.mesh = None
            for layer in chunk.grass_layers:
                layer.clear()
            chunk.grass_layers.clear()
        self.chunks.clear()

    def _create_terrain(self) -> None:
        gx, gy, gz = self.settings.grid_size
        scale = self.settings.noise_scale
        for x in range(gx + 1):
            for y in range(gy + 1):
                height = perlin_noise_2d(
                    (x / 16.0 * 1.5 + 0.001) * scale,
                    (y / 16.0 * 1.5 + 0.001) * scale,
                )
                height = (height + 1.0) * 0.5 * gz
                for z in range(gz + 1):
                    # Positive density is air, negative is solid.
                    self.terrain_map[self.terrain_index(x, y, z)].value = z - height

    def _generate_chunk(self, coord: tuple[int, int], local_size: tuple[int, int]) -> Chunk:
        chunk = Chunk(local_size=local_size)
        chunk.grass_layers = [FoliageLayer(data) for data in self.settings.static_meshes]
        self.chunks[coord] = chunk
        return chunk

    def _cube_iteration(self, generate_foliage: bool) -> None:
        nx, ny = self.num_chunks
        rx, ry = self.remainder
        for i in range(nx):
            for j in range(ny):
                lx, ly = self.chunk_size
                if i == nx - 1 and rx > 0:
                    lx = rx
                if j == ny - 1 and ry > 0:
                    ly = ry
                coord = (i, j)
                self._generate_chunk(coord, (lx, ly))
                self.iterate_chunk_voxels(i, j, (lx, ly))
                self.build_mesh(coord)
                if generate_foliage:
                    self.generate_foliage(coord)

    # --- holes ----------------------------------------------------------

    def generate_hole(self, hit_location, radius) -> bool:
        """Carve a spherical hole around a world position and rebuild nearby chunks.

        Returns False, changing nothing, when the position lies outside the grid.
        """
        voxel_radius = int(radius)
        if voxel_radius < 1:
            raise ValueError(f"hole radius must be at least one voxel: {radius}")
        local = _scale(hit_location, 1.0 / self.settings.triangle_scale)
        cx, cy, cz = (math.floor(c) for c in local)
        if not self.is_in_bounds(cx, cy, cz):
            return False
        self.apply_spherical_hole(cx, cy, cz, voxel_radius)
        self.update_chunks_affected_by_hole(hit_location, cx, cy, voxel_radius)
        return True

    def update_chunks_affected_by_hole(self, hit_location, center_x, center_y, radius) -> None:
        """Remove foliage inside the hole and rebuild the meshes of touched chunks."""
        radius = int(radius)
        csx, csy = self.chunk_size
        min_x = math.floor((center_x - radius) / csx)
        max_x = math.floor((center_x + radius) / csx)
        min_y = math.floor((center_y - radius) / csy)
        max_y = math.floor((center_y + radius) / csy)
        limit = radius * self.settings.triangle_scale
        hit = tuple(float(c) for c in hit_location)

        for chunk_x in range(min_x, max_x + 1):
            for chunk_y in range(min_y, max_y + 1):
                chunk = self.chunks.get((chunk_x, chunk_y))
                if chunk is None:
                    continue
                for layer in chunk.grass_layers:
                    doomed = [
                        index
                        for index, instance in enumerate(layer.instances)
                        if math.dist(instance.location, hit) <= limit
                    ]
                    # Highest index first so earlier indices stay valid.
                    for index in reversed(doomed):
                        layer.remove_instance(index)
                        if index < len(chunk.grass_instance_positions):
                            del chunk.grass_instance_positions[index]
                        if index < len(chunk.mesh_ids):
                            del chunk.mesh_ids[index]
                chunk.mesh = None
                chunk.reset_mesh_data()
                self.iterate_chunk_voxels(chunk_x, chunk_y, chunk.local_size)
                self.build_mesh((chunk_x, chunk_y))

    def is_in_bounds(self, x, y, z) -> bool:
        """Whether a voxel lies inside the grid."""
        gx, gy, gz = self.settings.grid_size
        return 0 <= x < gx and 0 <= y < gy and 0 <= z < gz

    def apply_spherical_hole(self, center_x, center_y, center_z, radius) -> None:
        """Raise density inside a sphere, most at the centre, fading to the rim."""
        radius = int(radius)
        if radius < 1:
            raise ValueError(f"hole radius must be at least one voxel: {radius}")
        span = lambda c: range(c - radius, c + radius + 1)  # noqa: E731
        for x, y, z in itertools.product(span(center_x), span(center_y), span(center_z)):
            if not self.is_in_bounds(x, y, z):
                continue
            dist_squared = (x - center_x) ** 2 + (y - center_y) ** 2 + (z - center_z) ** 2
            if dist_squared > radius * radius:
                continue
            t = 1.0 - math.sqrt(dist_squared) / radius
            index = self.terrain_index(x, y, z)
            if 0 <= index < len(self.terrain_map):
                cell = self.terrain_map[index]
                cell.value += t * _HOLE_STRENGTH
                cell.vertex_color = t

    # --- marching cubes -------------------------------------------------

    def terrain_index(self, x, y, z) -> int:
        """Position in the flat terrain map of lattice point ``(x, y, z)``."""
        gx, gy, _ = self.settings.grid_size
        return x + y * (gx + 1) + z * (gx + 1) * (gy + 1)

    def configuration_index(self, cube) -> int:
        """The 8-bit case index: bit ``i`` is set when corner ``i`` is above the surface."""
        if len(cube) != len(CORNER_OFFSETS):
            raise ValueError(f"a cube has {len(CORNER_OFFSETS)} corners, got {len(cube)}")
        level = self.settings.surface_level
        return sum(1 << i for i, value in enumerate(cube) if value > level)

    def _cell(self, point: Sequence[float]) -> TerrainCell:
        return self.terrain_map[self.terrain_index(int(point[0]), int(point[1]), int(point[2]))]

    def _edge_vertex(self, chunk: Chunk, position: Sequence[float], edge: int) -> int:
        start, end = EDGE_OFFSETS[edge]
        p1 = _add(position, start)
        p2 = _add(position, end)
        c1 = self._cell(p1)
        c2 = self._cell(p2)
        color = max(c1.vertex_color, c2.vertex_color)
        t = (self.settings.surface_level - c1.value) / (c2.value - c1.value)
        vertex = _add(p1, _scale(_sub(p2, p1), t))
        key = _snap_key(vertex)
        existing = chunk.vertex_map.get(key)
        if existing is not None:
            return existing
        chunk.vertices.append(_scale(vertex, self.settings.triangle_scale))
        chunk.vertex_colors.append((color, 0.0, 0.0, 1.0))
        index = len(chunk.vertices) - 1
        chunk.vertex_map[key] = index
        return index

    def march_cube(self, position, cube, chunk_coord) -> None:
        """Add the surface triangles of one cube to a chunk."""
        config = self.configuration_index(cube)
        if config in (0, 255):
            return
        chunk = self.chunks[chunk_coord]
        for triangle in edges_for_configuration(config):
            a, b, c = (self._edge_vertex(chunk, position, edge) for edge in triangle)
            chunk.triangles.extend((a, c, b))

    def iterate_chunk_voxels(self, i, j, local_size) -> None:
        """March every cube of chunk ``(i, j)``."""
        csx, csy = self.chunk_size
        start_x = i * csx
        start_y = j * csy
        gz = self.settings.grid_size[2]
        for x in range(start_x, start_x + local_size[0]):
            for y in range(start_y, start_y + local_size[1]):
                for z in range(gz):
                    origin = (x, y, z)
                    cube = [self._cell(_add(origin, corner)).value for corner in CORNER_OFFSETS]
                    self.march_cube(origin, cube, (i, j))

    def build_mesh(self, chunk_coord) -> MeshSection:
        """Compute normals, UVs and tangents for a chunk and store its mesh."""
        chunk = self.chunks[chunk_coord]
        vertices = chunk.vertices
        normals: list[Vec3] = [(0.0, 0.0, 0.0)] * len(vertices)
        for a, b, c in _triples(chunk.triangles):
            face = _safe_normal(_cross(_sub(vertices[b], vertices[a]), _sub(vertices[c], vertices[a])))
            for index in (a, b, c):
                normals[index] = _sub(normals[index], face)
        normals = [_normalized_or_same(n) for n in normals]

        scale = self.settings.triangle_scale
        csx, csy = self.chunk_size
        origin = (chunk_coord[0] * csx * scale, chunk_coord[1] * csy * scale, 0.0)
        uvs = []
        for vertex in vertices:
            local = _sub(vertex, origin)
            uvs.append((local[0] / (csx * scale), local[1] / (csy * scale)))

        section = MeshSection(
            vertices=list(vertices),
            triangles=list(chunk.triangles),
            normals=normals,
            uvs=uvs,
            colors=list(chunk.vertex_colors),
            tangents=[(1.0, 0.0, 0.0)] * len(vertices),
            collision=self.settings.collision_mesh,
        )
        chunk.mesh = section
        return section

    # --- foliage --------------------------------------------------------

    def generate_foliage(self, chunk_coord) -> None:
        """Scatter foliage over a chunk's triangles in proportion to their area."""
        meshes = self.settings.static_meshes
        chunk = self.chunks.get(chunk_coord)
        if not meshes or chunk is None or not chunk.grass_layers:
            return
        vertices = chunk.vertices
        chunk.grass_instance_positions.clear()
        per_area = self.settings.density * self.settings.density_multiplier
        for a, b, c in _triples(chunk.triangles):
            v1, v2, v3 = vertices[a], vertices[b], vertices[c]
            edge1 = _sub(v2, v1)
            edge2 = _sub(v3, v1)
            area = 0.5 * _length(_cross(edge1, edge2))
            for _ in range(int(area * per_area)):
                layer = chunk.grass_layers[self.rng.randint(0, len(meshes) - 1)]
                u = self.rng.random()
                v = self.rng.random()
                if u + v > 1.0:
                    u, v = 1.0 - u, 1.0 - v
                point = _add(v1, _add(_scale(edge1, u), _scale(edge2, v)))
                self.add_instance_grass(chunk, layer, point)

    def add_instance_grass(self, chunk, layer, location) -> int:
        """Place one randomly turned and scaled instance; return its id."""
        rotation = self.rng.uniform(0.0, 360.0)
        scale = self.rng.uniform(layer.data.min_scale, layer.data.max_scale)
        instance_id = layer.add_instance(location, rotation, scale)
        chunk.mesh_ids.append(instance_id)
        chunk.grass_instance_positions.append(tuple(float(c) for c in location))
        return instance_id