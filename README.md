# cstengine

A small geometry kernel for building, tessellating and exporting 3D models.

## What is in it

- `cstengine.vector`: immutable `Vec2` and `Vec3` with arithmetic, `dot`, `cross`,
  `length`, `normalize`, component-wise `min`/`max` and `Vec3.splat`.
- `cstengine.aabb`: `Aabb3`, an axis-aligned box with `from_points`, `center`,
  `extents`, `contains_point`, `intersects`, `merge` and `expand`.
- `cstengine.plane`: `Plane` (normal normalised on construction) with `xy`, `xz`,
  `yz`, `signed_distance` and `project_point`.
- `cstengine.ray`: `Ray` with `at`, `closest_point` and `distance_to_point`.
- `cstengine.transform`: `Transform`, a 4x4 matrix kept in column-major order, with
  `identity`, `from_translation`, `from_mat4`, `to_mat4`, `transform_point`,
  `transform_vector`, `then` and `inverse` (which returns `None` for a singular matrix).
- `cstengine.halfedge`: a half-edge `Mesh` of vertices, half-edges, edges, loops and
  faces. It builds with `add_vertex`, `make_edge`, `make_face` and `make_triangle`
  (existing edges are reused), walks with `face_halfedges`, `face_vertices` and
  `vertex_outgoing`, answers `halfedge_target` and `edge_faces`, checks itself with
  `validate` and reports `bounding_box`. Invalid connectivity raises
  `TopologyError`; references to entities that do not exist raise `NotFoundError`.
- `cstengine.triangle_mesh`: `TriangleMesh` with positions, normals, indices and UVs,
  plus `vertex_count`, `triangle_count`, `merge`, `compute_normals` and
  `bounding_box`.
- `cstengine.face_tessellator`: `tessellate_planar_face` (fan triangulation; fewer
  than three vertices raises `ValueError`) and `tessellate_surface` (uniform UV grid)
  for any object that follows the `Surface` protocol (`domain_u`, `domain_v`,
  `point_at`, `normal_at`).
- `cstengine.adaptive`: `adaptive_tessellate_surface`, which starts from a 4x4 UV grid
  and subdivides patches whose midpoint strays beyond a tolerance.
- `cstengine.topology_to_mesh`: `topology_mesh_to_triangles`, turning a half-edge
  `Mesh` into a `TriangleMesh`.
- `cstengine.camera`: a look-at perspective `Camera` with `view_matrix`,
  `projection_matrix`, `view_projection`, `orbit`, `zoom`, `pan` and `fit_to_aabb`.
- `cstengine.pipeline`: `GpuVertex`, `vertices_to_bytes`, `prepare_mesh` (producing a
  `RenderMesh` with little-endian float32 vertex and uint32 index buffers) and
  `CameraUniforms.from_camera`.
- `cstengine.scene`: a `Scene` of named, coloured `SceneMesh`es and
  `InstancedGroup`s, with `add_mesh`, `add_mesh_auto_color`, `add_instanced_group`,
  `bounds`, `total_triangles`, `to_binary_mesh` and `export_binary_mesh`.
- `cstengine.gltf_export`: `export_gltf_json`, a glTF 2.0 JSON document for the
  scene's regular meshes with the binary data embedded as base64.
- `cstengine.html_export`: `export_html`, a standalone HTML page that draws the
  scene's regular meshes with Three.js loaded from a CDN.

## Installation

```
pip install cstengine
```

To run the test suite:

```
pip install "cstengine[test]"
pytest
```

## Example

```python
from cstengine.vector import Vec3
from cstengine.halfedge import Mesh
from cstengine.topology_to_mesh import topology_mesh_to_triangles
from cstengine.scene import Scene
from cstengine.gltf_export import export_gltf_json

topo = Mesh()
v0 = topo.add_vertex(Vec3(0.0, 0.0, 0.0))
v1 = topo.add_vertex(Vec3(1.0, 0.0, 0.0))
v2 = topo.add_vertex(Vec3(1.0, 1.0, 0.0))
v3 = topo.add_vertex(Vec3(0.0, 1.0, 0.0))
topo.make_face([v0, v1, v2, v3])
topo.validate()

triangles = topology_mesh_to_triangles(topo)
print(triangles.triangle_count())  # 2

scene = Scene()
scene.add_mesh("Quad", triangles, (0.8, 0.2, 0.3))
gltf_text = export_gltf_json(scene)
scene.export_binary_mesh("mesh.bin")
```

## What it does not do

This is a library only. It has no command-line tool, it does not read IFC or any
other building-model file, and it does not open a window or render on a GPU itself:
`prepare_mesh` and `CameraUniforms` only prepare the data, and the HTML and glTF
exports leave the drawing to a browser or another viewer. The glTF and HTML exports
cover regular meshes only; instanced groups go into the binary format alone.