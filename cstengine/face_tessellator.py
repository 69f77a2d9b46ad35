"""Tessellation of planar polygons and parametric surfaces."""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple

from cstengine.triangle_mesh import TriangleMesh
from cstengine.vector import Vec2, Vec3


class Surface(Protocol):
    """A parametric surface evaluated over a rectangular UV domain."""

    def domain_u(self) -> Tuple[float, float]: ...

    def domain_v(self) -> Tuple[float, float]: ...

    def point_at(self, u: float, v: float) -> Vec3: ...

    def normal_at(self, u: float, v: float) -> Vec3: ...


def tessellate_planar_face(vertices: Sequence[Vec3]) -> TriangleMesh:
    """Fan-triangulate a polygon from its first vertex.

    Raises ValueError when fewer than three vertices are given.
    """
    positions = list(vertices)
    if len(positions) < 3:
        raise ValueError("Need at least 3 vertices for tessellation")

    indices = [
        index
        for i in range(1, len(positions) - 1)
        for index in (0, i, i + 1)
    ]
    mesh = TriangleMesh(positions=positions, indices=indices)
    mesh.compute_normals()
    return mesh


def tessellate_surface(surface: Surface, u_divs: int, v_divs: int) -> TriangleMesh:
    """Uniformly sample a surface on a ``(u_divs+1) x (v_divs+1)`` grid."""
    if u_divs < 1 or v_divs < 1:
        raise ValueError("Subdivision counts must be at least 1")

    u_min, u_max = surface.domain_u()
    v_min, v_max = surface.domain_v()
    v_count = v_divs + 1

    mesh = TriangleMesh()
    for i in range(u_divs + 1):
        u = u_min + (u_max - u_min) * i / u_divs
        for j in range(v_count):
            v = v_min + (v_max - v_min) * j / v_divs
            mesh.positions.append(surface.point_at(u, v))
            mesh.normals.append(surface.normal_at(u, v))
            mesh.uvs.append(Vec2(i / u_divs, j / v_divs))

    def idx(ii: int, jj: int) -> int:
        return ii * v_count + jj

    for i in range(u_divs):
        for j in range(v_divs):
            mesh.indices.extend(
                (
                    idx(i, j), idx(i + 1, j), idx(i + 1, j + 1),
                    idx(i, j), idx(i + 1, j + 1), idx(i, j + 1),
                )
            )
    return mesh