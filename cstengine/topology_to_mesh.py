"""Conversion of half-edge topology to triangle meshes."""

from __future__ import annotations

from cstengine.face_tessellator import tessellate_planar_face
from cstengine.halfedge import Mesh, NotFoundError
from cstengine.triangle_mesh import TriangleMesh


def topology_mesh_to_triangles(mesh: Mesh) -> TriangleMesh:
    """Fan-triangulate every face independently and merge the results."""
    result = TriangleMesh()
    for face_id in mesh.faces:
        try:
            vertex_ids = list(mesh.face_vertices(face_id))
        except NotFoundError:
            continue
        positions = [mesh.vertices[vid].position for vid in vertex_ids]
        if len(positions) < 3:
            continue
        result.merge(tessellate_planar_face(positions))
    return result