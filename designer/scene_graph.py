# designer/scene_graph.py
# Scene graph for the room previews: groups of meshes sharing paint-slot
# materials, a visibility map for the toggleable furniture, and in-place
# re-coloring. Rendering is done in the browser (designer.visualizer) and
# binary export by designer.model_exporter.

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from designer.room_templates import MaterialSpec, RoomTemplate, Vec3, color_prop
from designer.utils import normalize_hex

logger = logging.getLogger(__name__)


@dataclass
class Material:
    key: str
    color: str
    roughness: float = 1.0
    metalness: float = 0.0
    double_sided: bool = False
    slot: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'color': self.color,
            'roughness': self.roughness,
            'metalness': self.metalness,
            'doubleSided': self.double_sided,
        }


@dataclass
class Mesh:
    name: str
    kind: str
    size: Tuple[float, ...]
    position: Vec3
    rotation: Vec3
    material: Material

    def geometry(self) -> Tuple:
        """Everything about the mesh except its material."""
        return (self.name, self.kind, self.size, self.position, self.rotation)


@dataclass
class Group:
    name: str
    label: str
    position: Vec3
    meshes: List[Mesh] = field(default_factory=list)
    toggleable: bool = False
    visible: bool = True


@dataclass
class SceneObjectRegistry:
    """Lookup tables from semantic part names to constructed objects."""
    materials: Dict[str, Material] = field(default_factory=dict)
    groups: Dict[str, Group] = field(default_factory=dict)


class RoomScene:
    """A furnished room built once from a RoomTemplate."""

    def __init__(self, template: RoomTemplate, registry: SceneObjectRegistry,
                 fixed_materials: List[Material]):
        self.template = template
        self.registry = registry
        self._fixed_materials = fixed_materials
        self._visibility: Dict[str, bool] = {
            name: group.visible for name, group in registry.groups.items() if group.toggleable
        }

    @property
    def style(self) -> str:
        return self.template.style

    @property
    def visibility(self) -> Dict[str, bool]:
        """Copy of the furniture visibility map."""
        return dict(self._visibility)

    @property
    def groups(self) -> List[Group]:
        return list(self.registry.groups.values())

    def iter_meshes(self, visible_only: bool = False) -> Iterator[Tuple[Group, Mesh]]:
        for group in self.registry.groups.values():
            if visible_only and not group.visible:
                continue
            for mesh in group.meshes:
                yield group, mesh

    # ---------- visibility ----------

    def toggle(self, part: str) -> bool:
        """Flip one furniture part's visibility and return the new value."""
        if part not in self._visibility:
            raise KeyError(f"'{part}' is not a toggleable part of the {self.style} room")
        return self.set_visibility(part, not self._visibility[part])

    def set_visibility(self, part: str, visible: bool) -> bool:
        if part not in self._visibility:
            raise KeyError(f"'{part}' is not a toggleable part of the {self.style} room")
        visible = bool(visible)
        self._visibility[part] = visible
        self.registry.groups[part].visible = visible
        logger.debug(f"{self.style} room: {part} visible={visible}")
        return visible

    # ---------- colors ----------

    def colors(self) -> Dict[str, str]:
        return {slot: material.color for slot, material in self.registry.materials.items()}

    def color_props(self) -> Dict[str, str]:
        return {color_prop(slot): color for slot, color in self.colors().items()}

    def apply_colors(self, colors: Mapping[str, str]) -> List[str]:
        """
        Update paint-slot material colors in place.

        Keys may be slot names ('sofa') or color props ('sofa_color'); keys
        naming no slot are ignored. Geometry and visibility are untouched.
        Returns the slots whose color actually changed.
        """
        updates = {}
        for key, value in colors.items():
            slot = _slot_for(key)
            if slot not in self.registry.materials or value is None:
                continue
            updates[slot] = normalize_hex(value)

        changed = []
        for slot, color in updates.items():
            material = self.registry.materials[slot]
            if material.color != color:
                material.color = color
                changed.append(slot)
        if changed:
            logger.debug(f"{self.style} room: recolored {', '.join(changed)}")
        return changed

    # ---------- serialization ----------

    def all_materials(self) -> List[Material]:
        return list(self.registry.materials.values()) + list(self._fixed_materials)

    def to_payload(self) -> Dict:
        """JSON-serializable description consumed by the three.js page."""
        template = self.template
        return {
            'style': template.style,
            'background': template.background,
            'camera': {
                'fov': template.camera.fov,
                'position': list(template.camera.position),
                'near': template.camera.near,
                'far': template.camera.far,
            },
            'controls': {
                'minDistance': template.controls.min_distance,
                'maxDistance': template.controls.max_distance,
                'maxPolarAngle': template.controls.max_polar_angle,
                'dampingFactor': template.controls.damping_factor,
                'target': list(template.controls.target),
                'enablePan': template.controls.enable_pan,
            },
            'lights': [
                {
                    'kind': light.kind,
                    'color': light.color,
                    'intensity': light.intensity,
                    'position': list(light.position) if light.position else None,
                    'distance': light.distance,
                    'groundColor': light.ground_color,
                    'castShadow': light.cast_shadow,
                }
                for light in template.lights
            ],
            'materials': {material.key: material.to_dict() for material in self.all_materials()},
            'groups': [
                {
                    'name': group.name,
                    'position': list(group.position),
                    'visible': group.visible,
                    'meshes': [
                        {
                            'name': mesh.name,
                            'kind': mesh.kind,
                            'size': list(mesh.size),
                            'position': list(mesh.position),
                            'rotation': list(mesh.rotation),
                            'material': mesh.material.key,
                        }
                        for mesh in group.meshes
                    ],
                }
                for group in self.registry.groups.values()
            ],
        }


def _slot_for(key: str) -> str:
    return key[:-len('_color')] if key.endswith('_color') else key


def build_room_scene(template: RoomTemplate, colors: Optional[Mapping[str, str]] = None) -> RoomScene:
    """Construct the scene graph for a template, optionally overriding slot colors."""
    overrides = {}
    for key, value in (colors or {}).items():
        slot = _slot_for(key)
        if slot in template.paint_slots and value is not None:
            overrides[slot] = normalize_hex(value)

    registry = SceneObjectRegistry()
    for slot, paint in template.paint_slots.items():
        registry.materials[slot] = Material(
            key=slot,
            color=overrides.get(slot, normalize_hex(paint.color)),
            roughness=paint.roughness,
            metalness=paint.metalness,
            double_sided=paint.double_sided,
            slot=slot,
        )

    fixed: Dict[MaterialSpec, Material] = {}

    def material_for(ref) -> Material:
        if isinstance(ref, str):
            return registry.materials[ref]
        if ref not in fixed:
            fixed[ref] = Material(
                key=f"fixed_{len(fixed)}",
                color=normalize_hex(ref.color),
                roughness=ref.roughness,
                metalness=ref.metalness,
                double_sided=ref.double_sided,
            )
        return fixed[ref]

    for toggleable, parts in ((False, template.fixtures), (True, template.furniture)):
        for part in parts:
            group = Group(part.name, part.label, tuple(part.position), toggleable=toggleable)
            for index, primitive in enumerate(part.primitives):
                group.meshes.append(Mesh(
                    name=f"{part.name}.{primitive.name or index}",
                    kind=primitive.kind,
                    size=tuple(primitive.size),
                    position=tuple(primitive.position),
                    rotation=tuple(primitive.rotation),
                    material=material_for(primitive.material),
                ))
            registry.groups[part.name] = group

    logger.debug(f"Built {template.style} room: {len(registry.groups)} groups, "
                 f"{len(registry.materials)} paint slots")
    return RoomScene(template, registry, list(fixed.values()))
