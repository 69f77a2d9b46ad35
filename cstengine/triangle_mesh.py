"""Indexed triangle meshes ready for rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from cstengine.aabb import Aabb3
from cstengine.vector import Vec2, Vec3


@dataclass
class TriangleMesh:
    """Triangle mesh with per-vertex positions, normals and UVs."""

    positions: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    uvs: List[Vec2] = field(default_factory=list)

    def vertex_count(self) -> int:
        return len(self.positions)

    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def merge(self, other: TriangleMesh) -> None:
        """Append ``other`` to this mesh, offsetting its indices."""
        offset = len(self.positions)
        self.positions.extend(other.positions)
        self.normals.extend(other.normals)
        self.uvs.extend(other.uvs)
        self.indices.extend(i + offset for i in other.indices)

    def compute_normals(self) -> None:
        """Recompute vertex normals by summing adjacent face normals and normalising."""
        normals = [Vec3.ZERO] * len(self.positions)
        it = iter(self.indices)
        for i0, i1, i2 in zip(it, it, it):
            p0 = self.positions[i0]
            face_normal = (self.positions[i1] - p0).cross(self.positions[i2] - p0)
            normals[i0] = normals[i0] + face_normal
            normals[i1] = normals[i1] + face_normal
            normals[i2] = normals[i2] + face_normal

        def unit(n: Vec3) -> Vec3:
            length = n.length()
            return n / length if length > 1e-12 else n

        self.normals = [unit(n) for n in normals]

    def bounding_box(self) -> Aabb3:
        """Bounds of all positions; a zero-size box at the origin when empty."""
        box = Aabb3.from_points(self.positions)
        return box if box is not None else Aabb3(Vec3.ZERO, Vec3.ZERO)