"""Half-infinite rays."""

from __future__ import annotations

from dataclasses import dataclass

from cstengine.vector import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray from ``origin``; the direction is normalised on construction."""

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    def at(self, t: float) -> Vec3:
        """Point along the ray at parameter ``t``."""
        return self.origin + self.direction * t

    def closest_point(self, point: Vec3) -> Vec3:
        """Closest point on the ray to ``point``, never behind the origin."""
        t = max((point - self.origin).dot(self.direction), 0.0)
        return self.at(t)

    def distance_to_point(self, point: Vec3) -> float:
        return (point - self.closest_point(point)).length()