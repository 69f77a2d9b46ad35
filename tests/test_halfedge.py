import pytest

from cstengine.halfedge import Mesh, NotFoundError, TopologyError
from cstengine.vector import Vec3


def make_triangle_mesh():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    v1 = mesh.add_vertex(Vec3(1.0, 0.0, 0.0))
    v2 = mesh.add_vertex(Vec3(0.0, 1.0, 0.0))
    return mesh, v0, v1, v2


def test_single_triangle_creation():
    mesh, v0, v1, v2 = make_triangle_mesh()
    face_id = mesh.make_triangle(v0, v1, v2)
    assert face_id in mesh.faces
    assert len(mesh.vertices) == 3
    assert len(mesh.faces) == 1
    assert len(mesh.edges) == 3
    assert len(mesh.halfedges) == 6
    assert mesh.validate() is None


def test_triangle_face_halfedge_traversal():
    mesh, v0, v1, v2 = make_triangle_mesh()
    face_id = mesh.make_triangle(v0, v1, v2)
    halfedges = list(mesh.face_halfedges(face_id))
    assert len(halfedges) == 3
    for he_id in halfedges:
        assert mesh.halfedges[he_id].face == face_id


def test_triangle_face_vertex_traversal():
    mesh, v0, v1, v2 = make_triangle_mesh()
    face_id = mesh.make_triangle(v0, v1, v2)
    vertices = list(mesh.face_vertices(face_id))
    assert len(vertices) == 3
    assert v0 in vertices
    assert v1 in vertices
    assert v2 in vertices
    assert vertices == [v0, v1, v2]


def test_quad_face_creation():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    v1 = mesh.add_vertex(Vec3(1.0, 0.0, 0.0))
    v2 = mesh.add_vertex(Vec3(1.0, 1.0, 0.0))
    v3 = mesh.add_vertex(Vec3(0.0, 1.0, 0.0))
    face_id = mesh.make_face([v0, v1, v2, v3])

    assert len(mesh.vertices) == 4
    assert len(mesh.faces) == 1
    assert len(mesh.edges) == 4
    assert len(mesh.halfedges) == 8
    assert len(list(mesh.face_vertices(face_id))) == 4
    assert mesh.validate() is None


def test_two_adjacent_triangles_shared_edge():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    v1 = mesh.add_vertex(Vec3(1.0, 0.0, 0.0))
    v2 = mesh.add_vertex(Vec3(0.5, 1.0, 0.0))
    v3 = mesh.add_vertex(Vec3(0.5, -1.0, 0.0))

    f1 = mesh.make_face([v0, v1, v2])
    f2 = mesh.make_face([v1, v0, v3])

    assert len(mesh.vertices) == 4
    assert len(mesh.faces) == 2
    assert len(mesh.edges) == 5
    assert len(mesh.halfedges) == 10

    shared = [
        e for e in mesh.edges
        if all(f is not None for f in mesh.edge_faces(e))
    ]
    assert len(shared) == 1
    fa, fb = mesh.edge_faces(shared[0])
    assert {fa, fb} == {f1, f2}
    assert mesh.validate() is None


def test_vertex_outgoing_iteration():
    mesh, v0, v1, v2 = make_triangle_mesh()
    mesh.make_triangle(v0, v1, v2)
    outgoing = list(mesh.vertex_outgoing(v0))
    assert len(outgoing) >= 1
    assert all(mesh.halfedges[he].origin == v0 for he in outgoing)


def test_vertex_outgoing_without_edges_is_empty():
    mesh = Mesh()
    v = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    assert list(mesh.vertex_outgoing(v)) == []


def test_halfedge_target():
    mesh, v0, v1, v2 = make_triangle_mesh()
    mesh.make_triangle(v0, v1, v2)
    he_id = mesh.vertices[v0].halfedge
    assert mesh.halfedges[he_id].origin == v0
    target = mesh.halfedge_target(he_id)
    assert target in (v1, v2)


def test_validate_fails_for_broken_twin():
    mesh, v0, v1, v2 = make_triangle_mesh()
    mesh.make_triangle(v0, v1, v2)
    first_he = next(iter(mesh.halfedges))
    mesh.halfedges[first_he].twin = None
    with pytest.raises(TopologyError):
        mesh.validate()


def test_validate_fails_for_broken_loop():
    mesh, v0, v1, v2 = make_triangle_mesh()
    face_id = mesh.make_triangle(v0, v1, v2)
    he_id = next(mesh.face_halfedges(face_id))
    mesh.halfedges[he_id].next = None
    with pytest.raises(TopologyError, match="no next pointer"):
        mesh.validate()


def test_bounding_box():
    mesh = Mesh()
    mesh.add_vertex(Vec3(1.0, 2.0, 3.0))
    mesh.add_vertex(Vec3(-1.0, -2.0, -3.0))
    mesh.add_vertex(Vec3(5.0, 0.0, 1.0))
    lo, hi = mesh.bounding_box()
    assert lo == Vec3(-1.0, -2.0, -3.0)
    assert hi == Vec3(5.0, 2.0, 3.0)


def test_bounding_box_empty_mesh():
    lo, hi = Mesh().bounding_box()
    assert lo == Vec3.ZERO
    assert hi == Vec3.ZERO


def test_make_face_too_few_vertices():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    v1 = mesh.add_vertex(Vec3(1.0, 0.0, 0.0))
    with pytest.raises(TopologyError):
        mesh.make_face([v0, v1])


def test_make_face_unknown_vertex():
    mesh, v0, v1, _ = make_triangle_mesh()
    with pytest.raises(NotFoundError):
        mesh.make_face([v0, v1, 999])


def test_make_face_twice_is_non_manifold():
    mesh, v0, v1, v2 = make_triangle_mesh()
    mesh.make_triangle(v0, v1, v2)
    with pytest.raises(TopologyError, match="non-manifold"):
        mesh.make_triangle(v0, v1, v2)


def test_edge_faces_boundary_edge():
    mesh, v0, v1, v2 = make_triangle_mesh()
    mesh.make_triangle(v0, v1, v2)
    for edge_id in mesh.edges:
        fa, fb = mesh.edge_faces(edge_id)
        assert (fa is None) != (fb is None)


def test_edge_faces_unknown_edge():
    mesh = Mesh()
    assert mesh.edge_faces(42) == (None, None)


def test_make_edge_standalone():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    v1 = mesh.add_vertex(Vec3(1.0, 0.0, 0.0))
    edge_id = mesh.make_edge(v0, v1)
    assert len(mesh.edges) == 1
    assert len(mesh.halfedges) == 2

    edge = mesh.edges[edge_id]
    he_a = mesh.halfedges[edge.halfedge_a]
    he_b = mesh.halfedges[edge.halfedge_b]
    assert he_a.origin == v0
    assert he_b.origin == v1
    assert he_a.twin == edge.halfedge_b
    assert he_b.twin == edge.halfedge_a


def test_make_edge_unknown_vertex():
    mesh = Mesh()
    v0 = mesh.add_vertex(Vec3(0.0, 0.0, 0.0))
    with pytest.raises(NotFoundError):
        mesh.make_edge(v0, 7)


def test_face_vertices_unknown_face():
    mesh = Mesh()
    with pytest.raises(NotFoundError):
        mesh.face_vertices(3)