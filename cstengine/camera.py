"""Perspective camera with look-at, orbit, zoom and pan controls."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from cstengine.aabb import Aabb3
from cstengine.vector import Vec3

Row4 = Tuple[float, float, float, float]
Matrix4 = Tuple[Row4, Row4, Row4, Row4]


def _multiply(a: Matrix4, b: Matrix4) -> Matrix4:
    """Product of two row-major 4x4 matrices."""
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns)
        for row in a
    )


@dataclass
class Camera:
    """A 3D perspective camera; defaults look at the origin from (0, 0, 5)."""

    eye: Vec3 = Vec3(0.0, 0.0, 5.0)
    target: Vec3 = Vec3(0.0, 0.0, 0.0)
    up: Vec3 = Vec3(0.0, 1.0, 0.0)
    fov_y: float = math.pi / 4
    aspect: float = 16.0 / 9.0
    near: float = 0.1
    far: float = 100.0

    def _basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        forward = (self.target - self.eye).normalize()
        right = forward.cross(self.up).normalize()
        up = right.cross(forward)
        return forward, right, up

    def view_matrix(self) -> Matrix4:
        """World-to-camera matrix, row-major; the camera looks down -Z."""
        forward, right, up = self._basis()
        f = -forward
        return (
            (right.x, right.y, right.z, -right.dot(self.eye)),
            (up.x, up.y, up.z, -up.dot(self.eye)),
            (f.x, f.y, f.z, -f.dot(self.eye)),
            (0.0, 0.0, 0.0, 1.0),
        )

    def projection_matrix(self) -> Matrix4:
        """Perspective projection, row-major, with OpenGL depth range -1..1."""
        f = 1.0 / math.tan(self.fov_y / 2.0)
        depth = self.near - self.far
        return (
            (f / self.aspect, 0.0, 0.0, 0.0),
            (0.0, f, 0.0, 0.0),
            (0.0, 0.0, (self.far + self.near) / depth, 2.0 * self.far * self.near / depth),
            (0.0, 0.0, -1.0, 0.0),
        )

    def view_projection(self) -> Matrix4:
        """Projection times view."""
        return _multiply(self.projection_matrix(), self.view_matrix())

    def orbit(self, delta_x: float, delta_y: float) -> None:
        """Rotate the eye around the target by azimuth and polar deltas in radians."""
        offset = self.eye - self.target
        radius = offset.length()
        theta = math.atan2(offset.z, offset.x)
        phi = math.acos(max(-1.0, min(1.0, offset.y / radius)))

        new_theta = theta + delta_x
        new_phi = min(max(phi + delta_y, 0.01), math.pi - 0.01)

        self.eye = self.target + Vec3(
            radius * math.sin(new_phi) * math.cos(new_theta),
            radius * math.cos(new_phi),
            radius * math.sin(new_phi) * math.sin(new_theta),
        )

    def zoom(self, delta: float) -> None:
        """Move towards the target by ``delta``; refuses to come within 0.1 of it."""
        direction = (self.target - self.eye).normalize()
        new_eye = self.eye + direction * delta
        if (self.target - new_eye).length() > 0.1:
            self.eye = new_eye

    def pan(self, dx: float, dy: float) -> None:
        """Shift eye and target together within the view plane."""
        _, right, up = self._basis()
        offset = right * dx + up * dy
        self.eye = self.eye + offset
        self.target = self.target + offset

    def fit_to_aabb(self, aabb: Aabb3) -> None:
        """Aim at the box centre and back off far enough to see all of it."""
        center = aabb.center()
        size = aabb.extents()
        max_dim = max(size.x, size.y, size.z)
        distance = max_dim / (2.0 * math.tan(self.fov_y / 2.0))
        view_dir = (self.target - self.eye).normalize()
        self.target = center
        self.eye = center - view_dir * (distance * 1.5)