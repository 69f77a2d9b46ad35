"""Conversion of triangle meshes and cameras to GPU-ready buffers."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from cstengine.camera import Camera
from cstengine.triangle_mesh import TriangleMesh
from cstengine.vector import Vec2, Vec3

F32Matrix = Tuple[Tuple[float, float, float, float], ...]


def _f32(values: Iterable[float]) -> Tuple[float, ...]:
    """Round values to single precision."""
    return tuple(float(v) for v in np.asarray(list(values), dtype=np.float32))


def _matrix_f32(matrix: Sequence[Sequence[float]]) -> F32Matrix:
    return tuple(_f32(row) for row in matrix)


@dataclass(frozen=True)
class GpuVertex:
    """A vertex packed as single-precision floats: 3 position, 3 normal, 2 UV."""

    position: Tuple[float, float, float]
    normal: Tuple[float, float, float]
    uv: Tuple[float, float]

    @classmethod
    def from_mesh_vertex(cls, pos: Vec3, normal: Vec3, uv: Vec2) -> GpuVertex:
        return cls(_f32(pos), _f32(normal), _f32(uv))


def vertices_to_bytes(vertices: Iterable[GpuVertex]) -> bytes:
    """Little-endian float32 bytes, 32 per vertex."""
    rows = [(*v.position, *v.normal, *v.uv) for v in vertices]
    return np.array(rows, dtype="<f4").reshape(-1, 8).tobytes()


def _indices_to_bytes(indices: Iterable[int]) -> bytes:
    return np.array(list(indices), dtype="<u4").tobytes()


@dataclass
class RenderMesh:
    """Vertex and index data together with their upload buffers."""

    vertices: List[GpuVertex]
    indices: List[int]
    vertex_buffer_bytes: bytes
    index_buffer_bytes: bytes


def prepare_mesh(mesh: TriangleMesh) -> RenderMesh:
    """Pack a mesh for upload; missing normals default to +Y and missing UVs to zero."""
    normals = itertools.chain(mesh.normals, itertools.repeat(Vec3.Y))
    uvs = itertools.chain(mesh.uvs, itertools.repeat(Vec2.ZERO))
    vertices = [
        GpuVertex.from_mesh_vertex(pos, normal, uv)
        for pos, normal, uv in zip(mesh.positions, normals, uvs)
    ]
    return RenderMesh(
        vertices=vertices,
        indices=list(mesh.indices),
        vertex_buffer_bytes=vertices_to_bytes(vertices),
        index_buffer_bytes=_indices_to_bytes(mesh.indices),
    )


@dataclass(frozen=True)
class CameraUniforms:
    """Camera matrices (row-major) and eye position in single precision."""

    view: F32Matrix
    projection: F32Matrix
    view_projection: F32Matrix
    eye_position: Tuple[float, float, float, float]

    @classmethod
    def from_camera(cls, camera: Camera) -> CameraUniforms:
        return cls(
            view=_matrix_f32(camera.view_matrix()),
            projection=_matrix_f32(camera.projection_matrix()),
            view_projection=_matrix_f32(camera.view_projection()),
            eye_position=_f32((camera.eye.x, camera.eye.y, camera.eye.z, 1.0)),
        )