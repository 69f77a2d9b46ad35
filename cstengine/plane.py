"""Infinite planes defined by an origin and a unit normal."""

from __future__ import annotations

from dataclasses import dataclass

from cstengine.vector import Vec3


@dataclass(frozen=True, slots=True)
class Plane:
    """A plane through ``origin``; the normal is normalised on construction."""

    origin: Vec3
    normal: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", self.normal.normalize())

    @classmethod
    def xy(cls) -> Plane:
        return cls(Vec3.ZERO, Vec3.Z)

    @classmethod
    def xz(cls) -> Plane:
        return cls(Vec3.ZERO, Vec3.Y)

    @classmethod
    def yz(cls) -> Plane:
        return cls(Vec3.ZERO, Vec3.X)

    def signed_distance(self, point: Vec3) -> float:
        """Signed distance from ``point``, positive on the normal's side."""
        return (point - self.origin).dot(self.normal)

    def project_point(self, point: Vec3) -> Vec3:
        """Orthogonal projection of ``point`` onto the plane."""
        return point - self.normal * self.signed_distance(point)