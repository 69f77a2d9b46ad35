"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from cstengine.vector import Vec3


@dataclass(frozen=True, slots=True)
class Aabb3:
    """Axis-aligned bounding box in 3D space."""

    min: Vec3
    max: Vec3

    @classmethod
    def from_points(cls, points: Iterable[Vec3]) -> Optional[Aabb3]:
        """Smallest box holding all points, or None when there are none."""
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            return None
        lo = hi = first
        for p in it:
            lo = lo.min(p)
            hi = hi.max(p)
        return cls(lo, hi)

    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def extents(self) -> Vec3:
        return self.max - self.min

    def contains_point(self, p: Vec3) -> bool:
        return (
            self.min.x <= p.x <= self.max.x
            and self.min.y <= p.y <= self.max.y
            and self.min.z <= p.z <= self.max.z
        )

    def intersects(self, other: Aabb3) -> bool:
        return (
            self.min.x <= other.max.x
            and self.max.x >= other.min.x
            and self.min.y <= other.max.y
            and self.max.y >= other.min.y
            and self.min.z <= other.max.z
            and self.max.z >= other.min.z
        )

    def merge(self, other: Aabb3) -> Aabb3:
        return Aabb3(self.min.min(other.min), self.max.max(other.max))

    def expand(self, amount: float) -> Aabb3:
        offset = Vec3.splat(amount)
        return Aabb3(self.min - offset, self.max + offset)