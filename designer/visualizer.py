# designer/visualizer.py

import json
import logging

import streamlit as st
import streamlit.components.v1 as components

from designer.model_exporter import export_scene_glb, glb_filename
from designer.room_templates import RoomTemplate
from designer.scene_graph import RoomScene, build_room_scene

logger = logging.getLogger(__name__)

THREE_JS_URL = "https://cdnjs.cloudflare.com/ajax/libs/three.js/r128/three.min.js"
ORBIT_CONTROLS_URL = "https://cdn.jsdelivr.net/npm/three@0.128.0/examples/js/controls/OrbitControls.js"

# Session state keys: f"{SCENE_KEY_PREFIX}{view key}" and f"{view key}{GLB_KEY_SUFFIX}"
SCENE_KEY_PREFIX = "room_scene::"
GLB_KEY_SUFFIX = "::glb"


def _payload_json(scene: RoomScene) -> str:
    # keep '</script>' inside string values from closing the tag
    return json.dumps(scene.to_payload()).replace("</", "<\\/")


def render_room_html(scene: RoomScene, height=600):
    """Self-contained three.js page for one room scene."""
    payload = _payload_json(scene)
    title = scene.template.title
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <script src="{THREE_JS_URL}"></script>
        <script src="{ORBIT_CONTROLS_URL}"></script>
        <style>
            body {{
                margin: 0;
                font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
                overflow: hidden;
            }}
            #container {{
                width: 100%;
                height: {height}px;
                position: relative;
                cursor: grab;
            }}
            #container:active {{
                cursor: grabbing;
            }}
            #room-label {{
                position: absolute;
                top: 12px;
                left: 12px;
                color: #ffffff;
                background: rgba(0, 0, 0, 0.55);
                padding: 6px 14px;
                border-radius: 14px;
                font-size: 13px;
                letter-spacing: 0.5px;
            }}
            #hint {{
                position: absolute;
                bottom: 12px;
                left: 50%;
                transform: translateX(-50%);
                color: #e5e7eb;
                background: rgba(0, 0, 0, 0.45);
                padding: 5px 12px;
                border-radius: 12px;
                font-size: 11px;
            }}
        </style>
    </head>
    <body>
        <div id="container">
            <div id="room-label">{title} Room</div>
            <div id="hint">Drag to orbit • Scroll to zoom</div>
        </div>
        <script>
            const roomData = {payload};
            let scene, camera, renderer, controls, frameId;

            function buildGeometry(mesh) {{
                const s = mesh.size;
                switch (mesh.kind) {{
                    case 'box': return new THREE.BoxGeometry(s[0], s[1], s[2]);
                    case 'plane': return new THREE.PlaneGeometry(s[0], s[1]);
                    case 'cylinder': return new THREE.CylinderGeometry(s[0], s[1], s[2], s[3] || 16);
                    case 'cone': return new THREE.ConeGeometry(s[0], s[1], s[2] || 16);
                    case 'sphere': return new THREE.SphereGeometry(s[0], s[1] || 16, s[2] || 16);
                    default: return new THREE.BoxGeometry(1, 1, 1);
                }}
            }}

            function buildMaterials() {{
                const materials = {{}};
                Object.entries(roomData.materials).forEach(([key, mat]) => {{
                    materials[key] = new THREE.MeshStandardMaterial({{
                        color: new THREE.Color(mat.color),
                        roughness: mat.roughness,
                        metalness: mat.metalness,
                        side: mat.doubleSided ? THREE.DoubleSide : THREE.FrontSide
                    }});
                }});
                return materials;
            }}

            function addLights() {{
                roomData.lights.forEach(spec => {{
                    let light;
                    if (spec.kind === 'ambient') {{
                        light = new THREE.AmbientLight(spec.color, spec.intensity);
                    }} else if (spec.kind === 'hemisphere') {{
                        light = new THREE.HemisphereLight(spec.color, spec.groundColor || '#444444', spec.intensity);
                    }} else if (spec.kind === 'point') {{
                        light = new THREE.PointLight(spec.color, spec.intensity, spec.distance || 0);
                    }} else {{
                        light = new THREE.DirectionalLight(spec.color, spec.intensity);
                    }}
                    if (spec.position) light.position.set(...spec.position);
                    if (spec.castShadow) {{
                        light.castShadow = true;
                        light.shadow.mapSize.width = 2048;
                        light.shadow.mapSize.height = 2048;
                    }}
                    scene.add(light);
                }});
            }}

            function addGroups(materials) {{
                roomData.groups.forEach(groupSpec => {{
                    const group = new THREE.Group();
                    group.name = groupSpec.name;
                    group.position.set(...groupSpec.position);
                    group.visible = groupSpec.visible;
                    groupSpec.meshes.forEach(meshSpec => {{
                        const mesh = new THREE.Mesh(buildGeometry(meshSpec), materials[meshSpec.material]);
                        mesh.name = meshSpec.name;
                        mesh.position.set(...meshSpec.position);
                        mesh.rotation.set(...meshSpec.rotation);
                        mesh.castShadow = true;
                        mesh.receiveShadow = true;
                        group.add(mesh);
                    }});
                    scene.add(group);
                }});
            }}

            function onResize() {{
                if (!renderer) return;
                const container = document.getElementById('container');
                camera.aspect = container.clientWidth / container.clientHeight;
                camera.updateProjectionMatrix();
                renderer.setSize(container.clientWidth, container.clientHeight);
            }}

            function animate() {{
                frameId = requestAnimationFrame(animate);
                controls.update();
                renderer.render(scene, camera);
            }}

            function dispose() {{
                if (!renderer) return;
                cancelAnimationFrame(frameId);
                window.removeEventListener('resize', onResize);
                scene.traverse(obj => {{
                    if (obj.isMesh) obj.geometry.dispose();
                }});
                Object.values(materials).forEach(material => material.dispose());
                controls.dispose();
                renderer.dispose();
            }}

            let materials = {{}};

            function init() {{
                const container = document.getElementById('container');
                scene = new THREE.Scene();
                scene.background = new THREE.Color(roomData.background);

                const cam = roomData.camera;
                camera = new THREE.PerspectiveCamera(cam.fov, container.clientWidth / container.clientHeight, cam.near, cam.far);
                camera.position.set(...cam.position);

                renderer = new THREE.WebGLRenderer({{ antialias: true }});
                renderer.setPixelRatio(window.devicePixelRatio);
                renderer.setSize(container.clientWidth, container.clientHeight);
                renderer.shadowMap.enabled = true;
                renderer.shadowMap.type = THREE.PCFSoftShadowMap;
                container.appendChild(renderer.domElement);

                const ctl = roomData.controls;
                controls = new THREE.OrbitControls(camera, renderer.domElement);
                controls.enableDamping = true;
                controls.dampingFactor = ctl.dampingFactor;
                controls.minDistance = ctl.minDistance;
                controls.maxDistance = ctl.maxDistance;
                controls.maxPolarAngle = ctl.maxPolarAngle;
                controls.enablePan = ctl.enablePan;
                controls.target.set(...ctl.target);
                controls.update();

                materials = buildMaterials();
                addLights();
                addGroups(materials);
                animate();
            }}

            window.addEventListener('load', init);
            window.addEventListener('resize', onResize);
            window.addEventListener('unload', dispose);
        </script>
    </body>
    </html>
    """


def _toggle_part(scene: RoomScene, part, glb_key):
    scene.toggle(part)
    # a prepared export no longer matches the scene
    st.session_state.pop(glb_key, None)


def _export_glb(scene: RoomScene, state_key):
    try:
        data = export_scene_glb(scene)
    except Exception as e:
        logger.error(f"GLB export failed for {scene.style} room: {e}", exc_info=True)
        st.toast("❌ Error exporting 3D model. Please try again.")
        return
    st.session_state[state_key] = (glb_filename(scene.style), data)
    st.toast("✅ 3D model ready to download!")


def release_room_views(state, active_prefix):
    """
    Drop the cached scenes and prepared GLB files of every view whose key does
    not start with `active_prefix`. Returns the released state keys.
    """
    stale = []
    for state_key in list(state.keys()):
        if state_key.startswith(SCENE_KEY_PREFIX):
            view_key = state_key[len(SCENE_KEY_PREFIX):]
        elif state_key.endswith(GLB_KEY_SUFFIX):
            view_key = state_key
        else:
            continue
        if not view_key.startswith(active_prefix):
            stale.append(state_key)
    for state_key in stale:
        state.pop(state_key, None)
    return stale


def get_room_scene(key, template: RoomTemplate, colors=None) -> RoomScene:
    """
    The scene for one rendered component, built once per session key. On later
    reruns only the colors are synced from the latest props.
    """
    state_key = f"{SCENE_KEY_PREFIX}{key}"
    scene = st.session_state.get(state_key)
    if scene is None or scene.style != template.style:
        scene = build_room_scene(template, colors)
        st.session_state[state_key] = scene
        logger.info(f"Built {template.style} room scene for {key}")
    elif colors and scene.apply_colors(colors):
        st.session_state.pop(f"{key}{GLB_KEY_SUFFIX}", None)
    return scene


def create_room_view(key, template: RoomTemplate, colors=None, height=600):
    """3D preview with furniture toggles and GLB export."""
    scene = get_room_scene(key, template, colors)
    visibility = scene.visibility
    glb_key = f"{key}{GLB_KEY_SUFFIX}"
    labels = {group.name: group.label for group in scene.groups}

    if visibility:
        st.caption("Toggle furniture")
        toggle_cols = st.columns(min(len(visibility), 6))
        for index, (part, visible) in enumerate(visibility.items()):
            with toggle_cols[index % len(toggle_cols)]:
                st.button(
                    f"{'👁️' if visible else '🚫'} {labels.get(part, part)}",
                    key=f"{key}::toggle::{part}",
                    on_click=_toggle_part,
                    args=(scene, part, glb_key),
                    type="primary" if visible else "secondary",
                    use_container_width=True,
                )

    components.html(render_room_html(scene, height), height=height, scrolling=False)

    col1, col2 = st.columns(2)
    with col1:
        st.button("📦 Export GLB", key=f"{key}::export", on_click=_export_glb,
                  args=(scene, glb_key), use_container_width=True)
    with col2:
        prepared = st.session_state.get(glb_key)
        if prepared:
            filename, data = prepared
            st.download_button(
                label="⬇️ Download .glb",
                data=data,
                file_name=filename,
                mime="model/gltf-binary",
                key=f"{key}::download",
                use_container_width=True,
            )
    return scene
