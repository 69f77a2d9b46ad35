"""Affine transforms stored as column-major 4x4 matrices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from cstengine.vector import Vec3

_IDENTITY = tuple(float(v) for v in np.eye(4).flatten(order="F"))


@dataclass(frozen=True, slots=True)
class Transform:
    """A 4x4 transform whose 16 entries are kept in column-major order."""

    matrix: Tuple[float, ...] = field(default=_IDENTITY)

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.matrix)
        if len(values) != 16:
            raise ValueError(f"a transform needs 16 values, got {len(values)}")
        object.__setattr__(self, "matrix", values)

    @classmethod
    def identity(cls) -> Transform:
        return cls(_IDENTITY)

    @classmethod
    def from_translation(cls, t: Vec3) -> Transform:
        m = np.eye(4)
        m[:3, 3] = (t.x, t.y, t.z)
        return cls.from_mat4(m)

    @classmethod
    def from_mat4(cls, m) -> Transform:
        """Build from a 4x4 array indexed as ``m[row, column]``."""
        arr = np.asarray(m, dtype=float)
        if arr.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
        return cls(tuple(arr.flatten(order="F")))

    def to_mat4(self) -> np.ndarray:
        """The matrix as a 4x4 array indexed as ``[row, column]``."""
        return np.array(self.matrix, dtype=float).reshape((4, 4), order="F")

    def transform_point(self, p: Vec3) -> Vec3:
        """Apply rotation, scale and translation to a point (affine, no divide)."""
        m = self.to_mat4()
        r = m[:3, :3] @ np.array([p.x, p.y, p.z]) + m[:3, 3]
        return Vec3(float(r[0]), float(r[1]), float(r[2]))

    def transform_vector(self, v: Vec3) -> Vec3:
        """Apply the linear part only; translation is ignored."""
        r = self.to_mat4()[:3, :3] @ np.array([v.x, v.y, v.z])
        return Vec3(float(r[0]), float(r[1]), float(r[2]))

    def then(self, other: Transform) -> Transform:
        """This transform followed by ``other``."""
        return Transform.from_mat4(other.to_mat4() @ self.to_mat4())

    def inverse(self) -> Optional[Transform]:
        """The inverse, or None when the matrix is singular."""
        m = self.to_mat4()
        if abs(np.linalg.det(m)) < 1e-15:
            return None
        return Transform.from_mat4(np.linalg.inv(m))