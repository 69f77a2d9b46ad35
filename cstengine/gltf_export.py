"""Export of a scene as a self-contained glTF 2.0 JSON document."""

from __future__ import annotations

import base64
import json
import struct
from typing import Any, Dict, List

import numpy as np

from cstengine.aabb import Aabb3
from cstengine.scene import Scene, SceneMesh
from cstengine.vector import Vec3

_FLOAT = 5126
_UNSIGNED_INT = 5125
_ARRAY_BUFFER = 34962
_ELEMENT_ARRAY_BUFFER = 34963


def _short_f32(value: float) -> float:
    """The shortest decimal that round-trips the single-precision value."""
    return float(str(np.float32(value)))


def _mesh_bounds(scene_mesh: SceneMesh) -> Aabb3:
    box = Aabb3.from_points(scene_mesh.mesh.positions)
    return box if box is not None else Aabb3(Vec3.ZERO, Vec3.splat(1.0))


def _binary_buffer(scene: Scene) -> bytes:
    parts: List[bytes] = []
    for sm in scene.meshes:
        mesh = sm.mesh
        parts.extend(struct.pack("<3f", p.x, p.y, p.z) for p in mesh.positions)
        parts.extend(struct.pack("<3f", n.x, n.y, n.z) for n in mesh.normals)
        parts.append(struct.pack(f"<{len(mesh.indices)}I", *mesh.indices))
    return b"".join(parts)


def export_gltf_json(scene: Scene) -> str:
    """glTF 2.0 JSON for the scene's regular meshes, with data embedded as base64."""
    nodes: List[Dict[str, Any]] = []
    meshes: List[Dict[str, Any]] = []
    materials: List[Dict[str, Any]] = []
    accessors: List[Dict[str, Any]] = []
    buffer_views: List[Dict[str, Any]] = []
    offset = 0

    for i, sm in enumerate(scene.meshes):
        nodes.append({"name": sm.name, "mesh": i})
        meshes.append(
            {
                "name": sm.name,
                "primitives": [
                    {
                        "attributes": {"POSITION": i * 3, "NORMAL": i * 3 + 1},
                        "indices": i * 3 + 2,
                        "material": i,
                    }
                ],
            }
        )
        materials.append(
            {
                "name": f"{sm.name}_Material",
                "pbrMetallicRoughness": {
                    "baseColorFactor": [*(_short_f32(c) for c in sm.color), 1.0],
                    "metallicFactor": 0.0,
                    "roughnessFactor": 0.5,
                },
                "doubleSided": True,
            }
        )

        vertex_count = len(sm.mesh.positions)
        bounds = _mesh_bounds(sm)
        accessors.extend(
            [
                {
                    "bufferView": i * 3,
                    "componentType": _FLOAT,
                    "count": vertex_count,
                    "type": "VEC3",
                    "max": list(bounds.max),
                    "min": list(bounds.min),
                },
                {
                    "bufferView": i * 3 + 1,
                    "componentType": _FLOAT,
                    "count": vertex_count,
                    "type": "VEC3",
                },
                {
                    "bufferView": i * 3 + 2,
                    "componentType": _UNSIGNED_INT,
                    "count": len(sm.mesh.indices),
                    "type": "SCALAR",
                },
            ]
        )

        for length, target in (
            (len(sm.mesh.positions) * 12, _ARRAY_BUFFER),
            (len(sm.mesh.normals) * 12, _ARRAY_BUFFER),
            (len(sm.mesh.indices) * 4, _ELEMENT_ARRAY_BUFFER),
        ):
            buffer_views.append(
                {"buffer": 0, "byteOffset": offset, "byteLength": length, "target": target}
            )
            offset += length

    data = base64.b64encode(_binary_buffer(scene)).decode("ascii")
    document = {
        "asset": {"version": "2.0", "generator": "CSTEngine"},
        "scene": 0,
        "scenes": [{"nodes": list(range(len(scene.meshes)))}],
        "nodes": nodes,
        "meshes": meshes,
        "materials": materials,
        "accessors": accessors,
        "bufferViews": buffer_views,
        "buffers": [
            {
                "byteLength": offset,
                "uri": f"data:application/octet-stream;base64,{data}",
            }
        ],
    }
    return json.dumps(document, indent=2)