"""Half-edge boundary representation: vertices, half-edges, edges, loops and faces."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NewType, Optional, Tuple

from cstengine.vector import Vec3

VertexId = NewType("VertexId", int)
HalfEdgeId = NewType("HalfEdgeId", int)
EdgeId = NewType("EdgeId", int)
LoopId = NewType("LoopId", int)
FaceId = NewType("FaceId", int)
ShellId = NewType("ShellId", int)
SolidId = NewType("SolidId", int)


class TopologyError(Exception):
    """The mesh connectivity is invalid or an operation would make it so."""


class NotFoundError(LookupError):
    """A referenced topological entity does not exist."""


@dataclass
class Vertex:
    position: Vec3
    halfedge: Optional[HalfEdgeId] = None


@dataclass
class HalfEdge:
    origin: VertexId
    twin: Optional[HalfEdgeId] = None
    next: Optional[HalfEdgeId] = None
    prev: Optional[HalfEdgeId] = None
    face: Optional[FaceId] = None
    edge: Optional[EdgeId] = None
    loop_id: Optional[LoopId] = None


@dataclass
class Edge:
    halfedge_a: HalfEdgeId
    halfedge_b: HalfEdgeId


@dataclass
class Loop:
    halfedge: HalfEdgeId
    face: Optional[FaceId] = None


@dataclass
class Face:
    outer_loop: LoopId
    inner_loops: List[LoopId] = field(default_factory=list)
    surface_reversed: bool = False


@dataclass
class Shell:
    faces: List[FaceId] = field(default_factory=list)


@dataclass
class Solid:
    outer_shell: ShellId
    inner_shells: List[ShellId] = field(default_factory=list)


class Mesh:
    """A half-edge mesh; entities live in dicts keyed by integer ids in creation order."""

    def __init__(self) -> None:
        self.vertices: Dict[VertexId, Vertex] = {}
        self.halfedges: Dict[HalfEdgeId, HalfEdge] = {}
        self.edges: Dict[EdgeId, Edge] = {}
        self.loops: Dict[LoopId, Loop] = {}
        self.faces: Dict[FaceId, Face] = {}
        self._vertex_ids = itertools.count()
        self._halfedge_ids = itertools.count()
        self._edge_ids = itertools.count()
        self._loop_ids = itertools.count()
        self._face_ids = itertools.count()

    # --- construction -------------------------------------------------

    def add_vertex(self, position: Vec3) -> VertexId:
        vid = VertexId(next(self._vertex_ids))
        self.vertices[vid] = Vertex(position)
        return vid

    def _new_halfedge(self, he: HalfEdge) -> HalfEdgeId:
        hid = HalfEdgeId(next(self._halfedge_ids))
        self.halfedges[hid] = he
        return hid

    def make_edge(self, v1: VertexId, v2: VertexId) -> EdgeId:
        """Create an edge with two twin half-edges between ``v1`` and ``v2``."""
        if v1 not in self.vertices or v2 not in self.vertices:
            raise NotFoundError("Vertex not found")

        he_a = self._new_halfedge(HalfEdge(origin=v1))
        he_b = self._new_halfedge(HalfEdge(origin=v2, twin=he_a))
        self.halfedges[he_a].twin = he_b

        edge_id = EdgeId(next(self._edge_ids))
        self.edges[edge_id] = Edge(he_a, he_b)
        self.halfedges[he_a].edge = edge_id
        self.halfedges[he_b].edge = edge_id

        if self.vertices[v1].halfedge is None:
            self.vertices[v1].halfedge = he_a
        if self.vertices[v2].halfedge is None:
            self.vertices[v2].halfedge = he_b
        return edge_id

    def make_face(self, vertices: List[VertexId]) -> FaceId:
        """Create a face from vertices in CCW order, reusing existing edges."""
        vertices = list(vertices)
        n = len(vertices)
        if n < 3:
            raise TopologyError("A face requires at least 3 vertices")
        if any(v not in self.vertices for v in vertices):
            raise NotFoundError("Vertex not found")

        face_halfedges: List[HalfEdgeId] = []
        for v_from, v_to in zip(vertices, vertices[1:] + vertices[:1]):
            existing = self._find_halfedge(v_from, v_to)
            if existing is not None:
                if self.halfedges[existing].face is not None:
                    raise TopologyError("Half-edge already belongs to a face (non-manifold)")
                face_halfedges.append(existing)
                continue

            reverse = self._find_halfedge(v_to, v_from)
            if reverse is not None:
                twin = self.halfedges[reverse].twin
                if twin is None:
                    raise TopologyError("Edge exists but twin is missing")
                if self.halfedges[twin].face is not None:
                    raise TopologyError("Half-edge already belongs to a face (non-manifold)")
                face_halfedges.append(twin)
            else:
                edge_id = self.make_edge(v_from, v_to)
                face_halfedges.append(self.edges[edge_id].halfedge_a)

        loop_id = LoopId(next(self._loop_ids))
        self.loops[loop_id] = Loop(face_halfedges[0])
        face_id = FaceId(next(self._face_ids))
        self.faces[face_id] = Face(loop_id)
        self.loops[loop_id].face = face_id

        for i, he_id in enumerate(face_halfedges):
            he = self.halfedges[he_id]
            he.next = face_halfedges[(i + 1) % n]
            he.prev = face_halfedges[i - 1]
            he.face = face_id
            he.loop_id = loop_id
        return face_id

    def make_triangle(self, v1: VertexId, v2: VertexId, v3: VertexId) -> FaceId:
        return self.make_face([v1, v2, v3])

    def _find_halfedge(self, origin: VertexId, target: VertexId) -> Optional[HalfEdgeId]:
        for he_id, he in self.halfedges.items():
            if he.origin == origin and he.twin is not None:
                if self.halfedges[he.twin].origin == target:
                    return he_id
        return None

    # --- queries ------------------------------------------------------

    def halfedge_target(self, he_id: HalfEdgeId) -> Optional[VertexId]:
        """Destination vertex of a half-edge, or None when it has no twin."""
        he = self.halfedges.get(he_id)
        if he is None:
            raise NotFoundError(f"HalfEdge {he_id} not found")
        if he.twin is None:
            return None
        twin = self.halfedges.get(he.twin)
        return None if twin is None else twin.origin

    def edge_faces(self, edge_id: EdgeId) -> Tuple[Optional[FaceId], Optional[FaceId]]:
        """Faces on either side of an edge; (None, None) for an unknown edge."""
        edge = self.edges.get(edge_id)
        if edge is None:
            return (None, None)
        he_a = self.halfedges.get(edge.halfedge_a)
        he_b = self.halfedges.get(edge.halfedge_b)
        return (
            he_a.face if he_a is not None else None,
            he_b.face if he_b is not None else None,
        )

    # --- traversal ----------------------------------------------------

    def _face_start(self, face_id: FaceId) -> HalfEdgeId:
        face = self.faces.get(face_id)
        if face is None:
            raise NotFoundError(f"Face {face_id} not found")
        lp = self.loops.get(face.outer_loop)
        if lp is None:
            raise NotFoundError(f"Loop {face.outer_loop} not found")
        return lp.halfedge

    def _walk_loop(self, start: HalfEdgeId) -> Iterator[HalfEdgeId]:
        current: Optional[HalfEdgeId] = start
        while current is not None:
            he = self.halfedges.get(current)
            if he is None:
                return
            yield current
            current = he.next
            if current == start:
                return

    def face_halfedges(self, face_id: FaceId) -> Iterator[HalfEdgeId]:
        """Half-edges around a face, following ``next`` pointers."""
        return self._walk_loop(self._face_start(face_id))

    def face_vertices(self, face_id: FaceId) -> Iterator[VertexId]:
        """Origin vertices of the half-edges around a face."""
        start = self._face_start(face_id)
        return (self.halfedges[he_id].origin for he_id in self._walk_loop(start))

    def vertex_outgoing(self, vertex_id: VertexId) -> Iterator[HalfEdgeId]:
        """Outgoing half-edges of a vertex, circulating via twin then next."""
        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            raise NotFoundError(f"Vertex {vertex_id} not found")
        return self._walk_outgoing(vertex.halfedge)

    def _walk_outgoing(self, start: Optional[HalfEdgeId]) -> Iterator[HalfEdgeId]:
        current = start
        while current is not None:
            he = self.halfedges.get(current)
            if he is None or he.twin is None:
                return
            twin = self.halfedges.get(he.twin)
            if twin is None:
                return
            yield current
            current = twin.next
            if current == start:
                return

    # --- checks -------------------------------------------------------

    def validate(self) -> None:
        """Check twin symmetry, closed face loops and edge consistency."""
        for he_id, he in self.halfedges.items():
            if he.twin is None:
                continue
            twin = self.halfedges.get(he.twin)
            if twin is None:
                raise TopologyError(
                    f"HalfEdge {he_id} has twin {he.twin} that does not exist"
                )
            if twin.twin != he_id:
                raise TopologyError(
                    f"Twin symmetry violated: {he_id}.twin = {he.twin}, "
                    f"but {he.twin}.twin = {twin.twin}"
                )
            if he.origin == twin.origin:
                raise TopologyError(
                    f"HalfEdge {he_id} and its twin {he.twin} have the same origin"
                )

        for face_id, face in self.faces.items():
            lp = self.loops.get(face.outer_loop)
            if lp is None:
                raise TopologyError(f"Face {face_id} references non-existent loop")
            start = current = lp.halfedge
            count = 0
            max_iter = len(self.halfedges) + 1
            while True:
                he = self.halfedges.get(current)
                if he is None:
                    raise TopologyError(
                        f"HalfEdge {current} in face {face_id} loop does not exist"
                    )
                if he.face != face_id:
                    raise TopologyError(
                        f"HalfEdge {current} in face {face_id} loop has wrong "
                        f"face assignment: {he.face}"
                    )
                if he.next is None:
                    raise TopologyError(
                        f"HalfEdge {current} in face {face_id} has no next pointer"
                    )
                next_he = self.halfedges.get(he.next)
                if next_he is None:
                    raise TopologyError(
                        f"HalfEdge {current}.next = {he.next} does not exist"
                    )
                if next_he.prev != current:
                    raise TopologyError(
                        f"next/prev mismatch: {current}.next = {he.next}, "
                        f"but {he.next}.prev = {next_he.prev}"
                    )
                count += 1
                if count > max_iter:
                    raise TopologyError(
                        f"Face {face_id} loop does not close (infinite chain detected)"
                    )
                current = he.next
                if current == start:
                    break
            if count < 3:
                raise TopologyError(
                    f"Face {face_id} loop has fewer than 3 half-edges ({count})"
                )

        for edge_id, edge in self.edges.items():
            he_a = self.halfedges.get(edge.halfedge_a)
            if he_a is None:
                raise TopologyError(
                    f"Edge {edge_id} references non-existent halfedge_a {edge.halfedge_a}"
                )
            he_b = self.halfedges.get(edge.halfedge_b)
            if he_b is None:
                raise TopologyError(
                    f"Edge {edge_id} references non-existent halfedge_b {edge.halfedge_b}"
                )
            if he_a.twin != edge.halfedge_b or he_b.twin != edge.halfedge_a:
                raise TopologyError(
                    f"Edge {edge_id} half-edges are not twins of each other"
                )

    def bounding_box(self) -> Tuple[Vec3, Vec3]:
        """Component-wise (min, max) of vertex positions; zeros when empty."""
        if not self.vertices:
            return (Vec3.ZERO, Vec3.ZERO)
        lo = Vec3.splat(float("inf"))
        hi = Vec3.splat(float("-inf"))
        for vertex in self.vertices.values():
            lo = lo.min(vertex.position)
            hi = hi.max(vertex.position)
        return (lo, hi)