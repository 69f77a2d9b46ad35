"""Curvature-driven tessellation of parametric surfaces."""

from __future__ import annotations

from cstengine.face_tessellator import Surface
from cstengine.triangle_mesh import TriangleMesh
from cstengine.vector import Vec2

_MAX_DEPTH = 8
_INITIAL_DIVISIONS = 4


class _AdaptiveBuilder:
    def __init__(self, surface: Surface, tolerance: float) -> None:
        self.surface = surface
        self.tolerance = tolerance
        self.u_domain = surface.domain_u()
        self.v_domain = surface.domain_v()
        self.mesh = TriangleMesh()

    def subdivide(self, u0: float, u1: float, v0: float, v1: float, depth: int) -> None:
        u_mid = (u0 + u1) * 0.5
        v_mid = (v0 + v1) * 0.5
        point_at = self.surface.point_at
        approx = (point_at(u0, v0) + point_at(u1, v0) + point_at(u0, v1) + point_at(u1, v1)) * 0.25
        deviation = (point_at(u_mid, v_mid) - approx).length()

        if deviation > self.tolerance and depth < _MAX_DEPTH:
            self.subdivide(u0, u_mid, v0, v_mid, depth + 1)
            self.subdivide(u_mid, u1, v0, v_mid, depth + 1)
            self.subdivide(u0, u_mid, v_mid, v1, depth + 1)
            self.subdivide(u_mid, u1, v_mid, v1, depth + 1)
        else:
            self.emit_quad(u0, u1, v0, v1)

    def emit_quad(self, u0: float, u1: float, v0: float, v1: float) -> None:
        mesh = self.mesh
        base = len(mesh.positions)
        u_start, u_end = self.u_domain
        v_start, v_end = self.v_domain
        for u, v in ((u0, v0), (u1, v0), (u1, v1), (u0, v1)):
            mesh.positions.append(self.surface.point_at(u, v))
            mesh.normals.append(self.surface.normal_at(u, v))
            mesh.uvs.append(
                Vec2((u - u_start) / (u_end - u_start), (v - v_start) / (v_end - v_start))
            )
        mesh.indices.extend((base, base + 1, base + 2, base, base + 2, base + 3))


def adaptive_tessellate_surface(surface: Surface, tolerance: float) -> TriangleMesh:
    """Tessellate a surface, subdividing a 4x4 UV grid where it deviates beyond ``tolerance``."""
    u_min, u_max = surface.domain_u()
    v_min, v_max = surface.domain_v()
    builder = _AdaptiveBuilder(surface, tolerance)
    n = _INITIAL_DIVISIONS
    for i in range(n):
        u0 = u_min + (u_max - u_min) * i / n
        u1 = u_min + (u_max - u_min) * (i + 1) / n
        for j in range(n):
            v0 = v_min + (v_max - v_min) * j / n
            v1 = v_min + (v_max - v_min) * (j + 1) / n
            builder.subdivide(u0, u1, v0, v1, 0)
    return builder.mesh