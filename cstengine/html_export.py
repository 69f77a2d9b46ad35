"""Export of a scene as a standalone HTML page with an embedded Three.js viewer."""

from __future__ import annotations

import os
from string import Template
from typing import Dict, Iterable, List, Union

import numpy as np

from cstengine.aabb import Aabb3
from cstengine.scene import Scene, SceneMesh
from cstengine.vector import Vec3

_THREE_JS = "https://cdnjs.cloudflare.com/ajax/libs/three.js/r128/three.min.js"

_STYLES: Dict[str, Dict[str, str]] = {
    "body": {
        "margin": "0",
        "overflow": "hidden",
        "font-family": "'Segoe UI', Tahoma, Geneva, Verdana, sans-serif",
        "background": "#1a1a1a",
    },
    "#container": {"width": "100vw", "height": "100vh"},
    "#info": {
        "position": "absolute",
        "top": "10px",
        "left": "10px",
        "background": "rgba(0, 0, 0, 0.7)",
        "color": "white",
        "padding": "15px",
        "border-radius": "5px",
        "font-size": "14px",
        "max-width": "300px",
        "max-height": "calc(100vh - 40px)",
        "overflow-y": "auto",
    },
    "#info h3": {
        "margin": "0 0 10px 0",
        "font-size": "16px",
        "border-bottom": "1px solid #666",
        "padding-bottom": "5px",
    },
    "#info .mesh-item": {
        "margin": "5px 0",
        "padding": "5px",
        "background": "rgba(255, 255, 255, 0.1)",
        "border-radius": "3px",
    },
    "#info .mesh-name": {"font-weight": "bold", "color": "#4fc3f7"},
    "#info .mesh-stats": {"font-size": "12px", "color": "#aaa"},
    "#error": {
        "position": "absolute",
        "top": "50%",
        "left": "50%",
        "transform": "translate(-50%, -50%)",
        "background": "rgba(200, 0, 0, 0.9)",
        "color": "white",
        "padding": "20px",
        "border-radius": "5px",
        "display": "none",
    },
}

_VIEWER_SCRIPT = Template(
    """        function initScene() {
            const scene = new THREE.Scene();
            scene.background = new THREE.Color(0x1a1a1a);
            const camera = new THREE.PerspectiveCamera(60, innerWidth / innerHeight, 0.1, 10000);
            const renderer = new THREE.WebGLRenderer({ antialias: true });
            renderer.setSize(innerWidth, innerHeight);
            document.getElementById('container').appendChild(renderer.domElement);

            scene.add(new THREE.AmbientLight(0x404040, 2));
            for (const [intensity, d] of [[1, 1], [0.5, -1]]) {
                const light = new THREE.DirectionalLight(0xffffff, intensity);
                light.position.set(d, d, d);
                scene.add(light);
            }

            for (const data of meshData) {
                const geom = new THREE.BufferGeometry();
                geom.setAttribute('position', new THREE.Float32BufferAttribute(data.positions, 3));
                geom.setAttribute('normal', new THREE.Float32BufferAttribute(data.normals, 3));
                geom.setIndex(data.indices);
                const [r, g, b] = data.color;
                const mat = new THREE.MeshPhongMaterial({
                    color: new THREE.Color(r, g, b), shininess: 30, side: THREE.DoubleSide
                });
                scene.add(new THREE.Mesh(geom, mat));
            }

            const gridSize = $grid_size;
            const grid = new THREE.GridHelper(gridSize * 2, 20, 0x444444, 0x222222);
            grid.position.y = $grid_y;
            scene.add(grid);
            scene.add(new THREE.AxesHelper(gridSize * 0.5));

            const center = new THREE.Vector3($center_x, $center_y, $center_z);
            const distance = $distance;
            camera.position.copy(center).addScalar(distance * 0.7);
            camera.lookAt(center);

            const orbit = { theta: Math.PI / 4, phi: Math.PI / 4, radius: distance, drag: null };
            const place = () => {
                const s = Math.sin(orbit.phi);
                camera.position.set(
                    center.x + orbit.radius * s * Math.cos(orbit.theta),
                    center.y + orbit.radius * Math.cos(orbit.phi),
                    center.z + orbit.radius * s * Math.sin(orbit.theta)
                );
                camera.lookAt(center);
            };

            const canvas = renderer.domElement;
            canvas.addEventListener('mousedown', e => { orbit.drag = { x: e.clientX, y: e.clientY }; });
            canvas.addEventListener('mouseup', () => { orbit.drag = null; });
            canvas.addEventListener('mousemove', e => {
                if (!orbit.drag) return;
                orbit.theta -= (e.clientX - orbit.drag.x) * 0.01;
                orbit.phi = Math.min(Math.PI - 0.1, Math.max(0.1, orbit.phi + (e.clientY - orbit.drag.y) * 0.01));
                orbit.drag = { x: e.clientX, y: e.clientY };
                place();
            });
            canvas.addEventListener('wheel', e => {
                e.preventDefault();
                orbit.radius = Math.max(1, orbit.radius + e.deltaY * 0.01);
                place();
            });

            addEventListener('resize', () => {
                camera.aspect = innerWidth / innerHeight;
                camera.updateProjectionMatrix();
                renderer.setSize(innerWidth, innerHeight);
            });

            (function frame() {
                requestAnimationFrame(frame);
                renderer.render(scene, camera);
            })();
        }

        if (typeof THREE !== 'undefined') initScene();
"""
)


def _shortest_f32(value: float) -> str:
    """Shortest positional decimal that round-trips the single-precision value."""
    return np.format_float_positional(np.float32(value), trim="-")


def _fixed2(value: float) -> str:
    return f"{value:.2f}"


def _vectors_f32(vectors: Iterable[Vec3]) -> str:
    return ",".join(
        ",".join(_fixed2(float(np.float32(c))) for c in (v.x, v.y, v.z)) for v in vectors
    )


def _stylesheet() -> str:
    blocks = []
    for selector, props in _STYLES.items():
        body = "".join(f"            {key}: {value};\n" for key, value in props.items())
        blocks.append(f"        {selector} {{\n{body}        }}\n")
    return "".join(blocks)


def _head() -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        "    <title>CSTEngine Scene Viewer</title>\n"
        f"    <style>\n{_stylesheet()}    </style>\n"
        "</head>\n"
    )


def _info_panel(scene: Scene) -> str:
    items = "".join(
        '        <div class="mesh-item">\n'
        f'            <div class="mesh-name">{sm.name}</div>\n'
        f'            <div class="mesh-stats">{len(sm.mesh.indices) // 3} triangles</div>\n'
        "        </div>\n"
        for sm in scene.meshes
    )
    return (
        '    <div id="container"></div>\n'
        '    <div id="info">\n'
        "        <h3>CSTEngine Scene</h3>\n"
        f"        <div>Meshes: {len(scene.meshes)}</div>\n"
        f"        <div>Triangles: {scene.total_triangles()}</div>\n"
        '        <hr style="border: 1px solid #666; margin: 10px 0;">\n'
        f"{items}"
        "    </div>\n"
        '    <div id="error">Failed to load Three.js from CDN. '
        "Please check your internet connection.</div>\n"
    )


def _mesh_entry(scene_mesh: SceneMesh) -> str:
    mesh = scene_mesh.mesh
    color = ", ".join(_shortest_f32(c) for c in scene_mesh.color)
    fields = [
        f'name: "{scene_mesh.name}"',
        f"color: [{color}]",
        f"positions: [{_vectors_f32(mesh.positions)}]",
        f"normals: [{_vectors_f32(mesh.normals)}]",
        f"indices: [{','.join(str(i) for i in mesh.indices)}]",
    ]
    inner = ",\n".join(" " * 16 + field for field in fields)
    return " " * 12 + "{\n" + inner + "\n" + " " * 12 + "}"


def _mesh_data(scene: Scene) -> str:
    entries = ",\n".join(_mesh_entry(sm) for sm in scene.meshes)
    body = entries + "\n" if entries else ""
    return f"        const meshData = [\n{body}        ];\n\n"


def _render_html(scene: Scene) -> str:
    bounds = scene.bounds()
    if bounds is None:
        bounds = Aabb3(Vec3.ZERO, Vec3.splat(1.0))
    center = bounds.center()
    size = bounds.extents()

    script = _VIEWER_SCRIPT.substitute(
        grid_size=_fixed2(max(size.length(), 10.0)),
        grid_y=_fixed2(bounds.min.y),
        center_x=_fixed2(center.x),
        center_y=_fixed2(center.y),
        center_z=_fixed2(center.z),
        distance=_fixed2(size.length() * 1.5),
    )

    parts: List[str] = [
        _head(),
        "<body>\n",
        _info_panel(scene),
        "\n",
        f'    <script src="{_THREE_JS}"></script>\n',
        "    <script>\n",
        "        if (typeof THREE === 'undefined') "
        "document.getElementById('error').style.display='block';\n",
        _mesh_data(scene),
        script,
        "    </script>\n",
        "</body>\n",
        "</html>\n",
    ]
    return "".join(parts)


def export_html(scene: Scene, path: Union[str, os.PathLike]) -> None:
    """Write the scene to ``path`` as an HTML page that renders it with Three.js."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(_render_html(scene))