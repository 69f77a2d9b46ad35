"""Scenes of named, coloured meshes and their compact binary export."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from cstengine.aabb import Aabb3
from cstengine.triangle_mesh import TriangleMesh

Color = Tuple[float, float, float]
Matrix16 = Tuple[float, ...]

_PALETTE: Tuple[Color, ...] = (
    (0.7, 0.8, 0.9),  # light blue
    (0.9, 0.7, 0.7),  # light red
    (0.7, 0.9, 0.7),  # light green
    (0.9, 0.9, 0.7),  # yellow
    (0.9, 0.7, 0.9),  # pink
    (0.7, 0.9, 0.9),  # cyan
    (0.8, 0.8, 0.8),  # gray
    (0.9, 0.8, 0.7),  # orange
    (0.8, 0.7, 0.9),  # purple
    (0.7, 0.9, 0.8),  # teal
)


def _color(value: Sequence[float]) -> Color:
    rgb = tuple(float(c) for c in value)
    if len(rgb) != 3:
        raise ValueError(f"a colour needs 3 components, got {len(rgb)}")
    return rgb  # type: ignore[return-value]


def _matrix(value: Sequence[float]) -> Matrix16:
    values = tuple(float(v) for v in value)
    if len(values) != 16:
        raise ValueError(f"a transform needs 16 values, got {len(values)}")
    return values


@dataclass
class SceneMesh:
    """A named mesh drawn in a single colour."""

    name: str
    mesh: TriangleMesh
    color: Color


@dataclass
class InstancedGroup:
    """One base geometry drawn at several placements.

    Each transform is a 4x4 matrix given as 16 values in column-major order.
    """

    name: str
    mesh: TriangleMesh
    color: Color
    transforms: List[Matrix16] = field(default_factory=list)


def _pack_header(name: str, color: Color) -> bytes:
    name_bytes = name.encode("utf-8")
    return (
        struct.pack("<I", len(name_bytes))
        + name_bytes
        + struct.pack("<3f", *color)
    )


def _pack_geometry(mesh: TriangleMesh) -> bytes:
    positions = b"".join(struct.pack("<3f", p.x, p.y, p.z) for p in mesh.positions)
    indices = struct.pack(f"<{len(mesh.indices)}I", *mesh.indices)
    return positions + indices


@dataclass
class Scene:
    """A 3D scene for visualisation."""

    meshes: List[SceneMesh] = field(default_factory=list)
    instanced_groups: List[InstancedGroup] = field(default_factory=list)

    def add_mesh(self, name: str, mesh: TriangleMesh, color: Sequence[float]) -> None:
        self.meshes.append(SceneMesh(name, mesh, _color(color)))

    def add_mesh_auto_color(self, name: str, mesh: TriangleMesh) -> None:
        """Add a mesh coloured from a fixed palette, cycling by mesh count."""
        self.add_mesh(name, mesh, _PALETTE[len(self.meshes) % len(_PALETTE)])

    def add_instanced_group(
        self,
        name: str,
        mesh: TriangleMesh,
        color: Sequence[float],
        transforms: Iterable[Sequence[float]],
    ) -> None:
        self.instanced_groups.append(
            InstancedGroup(name, mesh, _color(color), [_matrix(t) for t in transforms])
        )

    def bounds(self) -> Optional[Aabb3]:
        """Bounds of every position in the scene, or None when nothing is in it."""
        if not self.meshes and not self.instanced_groups:
            return None
        points = [p for sm in self.meshes for p in sm.mesh.positions]
        points.extend(p for ig in self.instanced_groups for p in ig.mesh.positions)
        return Aabb3.from_points(points)

    def total_triangles(self) -> int:
        """Triangle count over the regular meshes."""
        return sum(len(sm.mesh.indices) // 3 for sm in self.meshes)

    def to_binary_mesh(self) -> bytes:
        """The scene in the compact little-endian streaming format.

        Version 2 holds ``[u8 version][u32 mesh_count]``; version 3, used when
        there are instanced groups, holds ``[u8 version][u32 mesh_count]
        [u32 group_count]``. Each mesh follows as name length, UTF-8 name,
        RGB f32, vertex and index counts, f32 positions and u32 indices; each
        group also carries an instance count after the index count and 16 f32
        values per transform after its indices.
        """
        parts: List[bytes] = []
        if self.instanced_groups:
            parts.append(struct.pack("<BII", 3, len(self.meshes), len(self.instanced_groups)))
        else:
            parts.append(struct.pack("<BI", 2, len(self.meshes)))

        for sm in self.meshes:
            parts.append(_pack_header(sm.name, sm.color))
            parts.append(struct.pack("<II", len(sm.mesh.positions), len(sm.mesh.indices)))
            parts.append(_pack_geometry(sm.mesh))

        for ig in self.instanced_groups:
            parts.append(_pack_header(ig.name, ig.color))
            parts.append(
                struct.pack(
                    "<III", len(ig.mesh.positions), len(ig.mesh.indices), len(ig.transforms)
                )
            )
            parts.append(_pack_geometry(ig.mesh))
            parts.extend(struct.pack("<16f", *t) for t in ig.transforms)

        return b"".join(parts)

    def export_binary_mesh(self, path: Union[str, os.PathLike]) -> None:
        """Write :meth:`to_binary_mesh` to ``path``."""
        with open(path, "wb") as fh:
            fh.write(self.to_binary_mesh())