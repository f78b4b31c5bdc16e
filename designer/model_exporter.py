# designer/model_exporter.py
# Binary glTF export of a RoomScene with trimesh.

import logging
import math
from datetime import datetime
from typing import Optional

import numpy as np
import trimesh

from designer.errors import ExportError
from designer.scene_graph import Mesh, RoomScene
from designer.utils import hex_to_rgba, timestamp_ms

logger = logging.getLogger(__name__)

# trimesh builds round primitives along +Z, three.js along +Y
_Z_TO_Y = trimesh.transformations.rotation_matrix(-math.pi / 2, [1, 0, 0])


def glb_filename(style: str, now: Optional[datetime] = None) -> str:
    return f"room_{style}_{timestamp_ms(now)}.glb"


def _primitive(mesh: Mesh) -> trimesh.Trimesh:
    kind, size = mesh.kind, mesh.size
    if kind == 'box':
        return trimesh.creation.box(extents=size[:3])
    if kind == 'plane':
        return trimesh.creation.box(extents=[size[0], size[1], 0.002])
    if kind == 'cylinder':
        radius_top, radius_bottom, height = size[:3]
        segments = int(size[3]) if len(size) > 3 else 16
        solid = trimesh.creation.cylinder(radius=(radius_top + radius_bottom) / 2,
                                          height=height, sections=segments)
        solid.apply_transform(_Z_TO_Y)
        return solid
    if kind == 'cone':
        radius, height = size[:2]
        segments = int(size[2]) if len(size) > 2 else 16
        solid = trimesh.creation.cone(radius=radius, height=height, sections=segments)
        # trimesh cones sit on z=0; three.js cones are centred on the origin
        solid.apply_translation([0, 0, -height / 2])
        solid.apply_transform(_Z_TO_Y)
        return solid
    if kind == 'sphere':
        return trimesh.creation.icosphere(subdivisions=2, radius=size[0])
    raise ExportError(f"Unsupported primitive '{kind}' in {mesh.name}")


def _world_transform(group_position, mesh: Mesh) -> np.ndarray:
    rx, ry, rz = mesh.rotation
    # three.js applies Euler 'XYZ' as intrinsic rotations
    matrix = trimesh.transformations.euler_matrix(rx, ry, rz, 'rxyz')
    matrix[:3, 3] = np.add(group_position, mesh.position)
    return matrix


def scene_to_trimesh(scene: RoomScene) -> trimesh.Scene:
    """Visible meshes only, with world transforms baked in and flat colors."""
    export = trimesh.Scene()
    for group, mesh in scene.iter_meshes(visible_only=True):
        solid = _primitive(mesh)
        solid.apply_transform(_world_transform(group.position, mesh))
        solid.visual = trimesh.visual.ColorVisuals(
            mesh=solid, face_colors=hex_to_rgba(mesh.material.color))
        export.add_geometry(solid, node_name=mesh.name, geom_name=mesh.name)
    return export


def export_scene_glb(scene: RoomScene) -> bytes:
    """Serialize the current scene graph to .glb bytes."""
    try:
        data = scene_to_trimesh(scene).export(file_type='glb')
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"GLB export failed for the {scene.style} room: {e}") from e
    logger.info(f"Exported {scene.style} room as GLB ({len(data)} bytes)")
    return data
