import struct

import numpy as np
import pytest

from cstengine.camera import Camera
from cstengine.pipeline import (
    CameraUniforms,
    GpuVertex,
    prepare_mesh,
    vertices_to_bytes,
)
from cstengine.triangle_mesh import TriangleMesh
from cstengine.vector import Vec2, Vec3


def create_test_mesh():
    return TriangleMesh(
        positions=[Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)],
        normals=[Vec3(0.0, 0.0, 1.0)] * 3,
        indices=[0, 1, 2],
        uvs=[Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0)],
    )


def test_gpu_vertex_size():
    vertex = GpuVertex.from_mesh_vertex(Vec3(1.0, 2.0, 3.0), Vec3.Y, Vec2(0.5, 0.5))
    assert len(vertices_to_bytes([vertex])) == 32


def test_prepare_mesh_vertex_count():
    assert len(prepare_mesh(create_test_mesh()).vertices) == 3


def test_prepare_mesh_index_count():
    assert len(prepare_mesh(create_test_mesh()).indices) == 3


def test_buffer_byte_sizes():
    render = prepare_mesh(create_test_mesh())
    assert len(render.vertex_buffer_bytes) == 3 * 32
    assert len(render.index_buffer_bytes) == 3 * 4


def test_index_buffer_is_little_endian_u32():
    render = prepare_mesh(create_test_mesh())
    assert render.index_buffer_bytes[:4] == b"\x00\x00\x00\x00"
    assert struct.unpack("<3I", render.index_buffer_bytes) == (0, 1, 2)


def test_vertex_buffer_round_trip():
    render = prepare_mesh(create_test_mesh())
    rows = np.frombuffer(render.vertex_buffer_bytes, dtype="<f4").reshape(-1, 8)
    assert rows[1].tolist() == [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0]
    assert rows[2].tolist() == [0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 1.0]


def test_empty_vertex_list_gives_no_bytes():
    assert vertices_to_bytes([]) == b""


def test_camera_uniforms_from_camera():
    uniforms = CameraUniforms.from_camera(Camera())
    assert uniforms.eye_position == pytest.approx((0.0, 0.0, 5.0, 1.0), abs=1e-6)
    view_sum = sum(v for row in uniforms.view for v in row)
    proj_sum = sum(v for row in uniforms.projection for v in row)
    assert abs(view_sum) > 0.1
    assert abs(proj_sum) > 0.1


def test_camera_uniforms_match_camera_matrices():
    camera = Camera(eye=Vec3(1.0, 2.0, 6.0))
    uniforms = CameraUniforms.from_camera(camera)
    for got, expected in zip(uniforms.view_projection, camera.view_projection()):
        assert got == pytest.approx(expected, rel=1e-6, abs=1e-6)


def test_gpu_vertex_from_mesh_vertex():
    vertex = GpuVertex.from_mesh_vertex(
        Vec3(1.0, 2.0, 3.0), Vec3(0.0, 1.0, 0.0), Vec2(0.5, 0.5)
    )
    assert vertex.position == (1.0, 2.0, 3.0)
    assert vertex.normal == (0.0, 1.0, 0.0)
    assert vertex.uv == (0.5, 0.5)


def test_gpu_vertex_rounds_to_single_precision():
    vertex = GpuVertex.from_mesh_vertex(Vec3(0.1, 0.0, 0.0), Vec3.Y, Vec2(0.0, 0.0))
    assert vertex.position[0] == float(np.float32(0.1))


def test_mesh_with_missing_data():
    mesh = TriangleMesh(
        positions=[Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0)],
        indices=[0, 1],
    )
    render = prepare_mesh(mesh)
    assert len(render.vertices) == 2
    assert render.vertices[0].normal == (0.0, 1.0, 0.0)
    assert render.vertices[0].uv == (0.0, 0.0)