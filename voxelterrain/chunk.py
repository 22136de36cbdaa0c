"""Per-chunk mesh and foliage data for a voxel terrain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Vec3 = tuple[float, float, float]
Color = tuple[float, float, float, float]


@dataclass
class MeshInstanceData:
    """A foliage mesh and the range its instances are scaled within."""

    mesh: Any = None
    min_scale: float = 1.0
    max_scale: float = 1.0


@dataclass(frozen=True)
class GrassInstance:
    """One placed foliage instance."""

    location: Vec3
    rotation_degrees: float
    scale: float


@dataclass
class FoliageLayer:
    """All instances of one foliage mesh inside a chunk."""

    data: MeshInstanceData
    instances: list[GrassInstance] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.instances)

    def add_instance(self, location, rotation_degrees, scale) -> int:
        """Add an instance and return its index."""
        self.instances.append(
            GrassInstance(tuple(float(c) for c in location), float(rotation_degrees), float(scale))
        )
        return len(self.instances) - 1

    def remove_instance(self, index: int) -> None:
        """Remove the instance at ``index``; later instances shift down by one."""
        if not 0 <= index < len(self.instances):
            raise IndexError(f"no foliage instance at index {index}")
        del self.instances[index]

    def clear(self) -> None:
        """Remove every instance."""
        self.instances.clear()


@dataclass
class MeshSection:
    """A finished mesh ready for rendering."""

    vertices: list[Vec3]
    triangles: list[int]
    normals: list[Vec3]
    uvs: list[tuple[float, float]]
    colors: list[Color]
    tangents: list[Vec3]
    collision: bool = True


@dataclass
class Chunk:
    """Mesh data being built for one rectangular column of the terrain."""

    local_size: tuple[int, int] = (0, 0)
    mesh: MeshSection | None = None
    vertices: list[Vec3] = field(default_factory=list)
    triangles: list[int] = field(default_factory=list)
    vertex_colors: list[Color] = field(default_factory=list)
    vertex_map: dict[tuple[int, int, int], int] = field(default_factory=dict)
    mesh_ids: list[int] = field(default_factory=list)
    grass_instance_positions: list[Vec3] = field(default_factory=list)
    grass_layers: list[FoliageLayer] = field(default_factory=list)

    def reset_mesh_data(self) -> None:
        """Forget the generated geometry, keeping foliage and size."""
        self.vertices.clear()
        self.triangles.clear()
        self.vertex_map.clear()
        self.vertex_colors.clear()