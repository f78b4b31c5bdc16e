# designer/room_templates.py
# Declarative room templates for the 3D previews. Every room style is described
# here once and built by designer.scene_graph.build_room_scene.

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

Vec3 = Tuple[float, float, float]

WALL_HEIGHT = 6.0
WALL_THICKNESS = 0.25
ROOM_SIZE = 14.0
FLAT = (-math.pi / 2, 0.0, 0.0)


@dataclass(frozen=True)
class MaterialSpec:
    color: str
    roughness: float = 1.0
    metalness: float = 0.0
    double_sided: bool = False


@dataclass(frozen=True)
class Primitive:
    """One mesh. `material` is a paint slot name or a fixed MaterialSpec."""
    kind: str  # box | plane | cylinder | cone | sphere
    size: Tuple[float, ...]
    material: Union[str, MaterialSpec]
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    name: Optional[str] = None


@dataclass(frozen=True)
class PartSpec:
    name: str
    label: str
    primitives: Tuple[Primitive, ...]
    position: Vec3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class LightSpec:
    kind: str  # ambient | directional | point | hemisphere
    color: str
    intensity: float
    position: Optional[Vec3] = None
    distance: float = 0.0
    ground_color: Optional[str] = None
    cast_shadow: bool = False


@dataclass(frozen=True)
class CameraSpec:
    fov: float = 55.0
    position: Vec3 = (8.0, 5.0, 10.0)
    near: float = 0.1
    far: float = 100.0


@dataclass(frozen=True)
class ControlsSpec:
    min_distance: float = 6.0
    max_distance: float = 14.0
    max_polar_angle: float = math.pi / 2.2
    damping_factor: float = 0.08
    target: Vec3 = (0.0, 2.3, -2.0)
    enable_pan: bool = False


@dataclass(frozen=True)
class RoomTemplate:
    style: str
    title: str
    background: str
    paint_slots: Dict[str, MaterialSpec]
    fixtures: Tuple[PartSpec, ...]
    furniture: Tuple[PartSpec, ...]
    lights: Tuple[LightSpec, ...]
    camera: CameraSpec = field(default_factory=CameraSpec)
    controls: ControlsSpec = field(default_factory=ControlsSpec)

    @property
    def furniture_names(self) -> List[str]:
        return [part.name for part in self.furniture]

    def default_colors(self) -> Dict[str, str]:
        return {slot: spec.color for slot, spec in self.paint_slots.items()}


def color_prop(slot: str) -> str:
    """Paint slot name -> public color prop name ('accent_wall' -> 'accent_wall_color')."""
    return f"{slot}_color"


def box(size, material, position=(0, 0, 0), rotation=(0, 0, 0), name=None):
    return Primitive('box', tuple(size), material, tuple(position), tuple(rotation), name)


def plane(width, depth, material, position=(0, 0, 0), name=None):
    return Primitive('plane', (width, depth), material, tuple(position), FLAT, name)


def cylinder(radius_top, radius_bottom, height, material, position=(0, 0, 0),
             segments=16, rotation=(0, 0, 0), name=None):
    return Primitive('cylinder', (radius_top, radius_bottom, height, segments),
                     material, tuple(position), tuple(rotation), name)


def cone(radius, height, material, position=(0, 0, 0), segments=16, name=None):
    return Primitive('cone', (radius, height, segments), material, tuple(position), (0, 0, 0), name)


def sphere(radius, material, position=(0, 0, 0), segments=16, name=None):
    return Primitive('sphere', (radius, segments, segments), material, tuple(position), (0, 0, 0), name)


def _shell(trim: Optional[MaterialSpec] = None, trim_start: float = 0.0, trim_step: float = 1.0,
           trim_size: Vec3 = (0.0, 0.0, 0.0), trim_y: float = 0.0) -> List[PartSpec]:
    """Floor, accent back wall with optional vertical trim, plain left wall."""
    half = ROOM_SIZE / 2
    trims = []
    x = trim_start
    while trim is not None and x <= -trim_start + 1e-9:
        trims.append(box(trim_size, trim, (round(x, 3), trim_y, -half + 0.01)))
        x += trim_step
    return [
        PartSpec('floor', 'Floor', (plane(ROOM_SIZE, ROOM_SIZE, 'floor'),)),
        PartSpec('back_wall', 'Back wall', (
            box((ROOM_SIZE, WALL_HEIGHT, WALL_THICKNESS), 'accent_wall',
                (0, WALL_HEIGHT / 2, -half - WALL_THICKNESS / 2)),
            *trims,
        )),
        PartSpec('left_wall', 'Left wall', (
            box((WALL_THICKNESS, WALL_HEIGHT, ROOM_SIZE), 'wall',
                (-half - WALL_THICKNESS / 2, WALL_HEIGHT / 2, 0)),
        )),
    ]


# ==================== LUXURY ====================

_BRASS = MaterialSpec('#b5a642', roughness=0.2, metalness=0.8)

LUXURY = RoomTemplate(
    style='luxury',
    title='Luxury',
    background='#2a2a2a',
    paint_slots={
        'wall': MaterialSpec('#faf8f3', roughness=0.7),
        'accent_wall': MaterialSpec('#d4c4b0', roughness=0.65),
        'floor': MaterialSpec('#6b5344', roughness=0.6, metalness=0.1),
        'bed': MaterialSpec('#2c2c2c', roughness=0.5, metalness=0.1),
        'sofa': MaterialSpec('#3a3a3a', roughness=0.4, metalness=0.15),
        'table': MaterialSpec('#f5f5f5', roughness=0.3),
        'lamp': MaterialSpec('#d4af37', roughness=0.2, metalness=0.7),
        'plant': MaterialSpec('#5f8f5f'),
    },
    fixtures=tuple(_shell(MaterialSpec('#e6d7c3', roughness=0.6, metalness=0.1),
                          trim_start=-5.0, trim_step=2.8,
                          trim_size=(0.15, 4.2, 0.015), trim_y=2.5)),
    furniture=(
        PartSpec('bed', 'Bed', (
            box((2.6, 0.5, 3.0), 'bed', (0, 0.7, -2), name='mattress'),
            box((2.8, 0.4, 3.2), MaterialSpec('#1a1a1a', roughness=0.5, metalness=0.2), (0, 0.2, -2), name='base'),
            box((2.8, 1.6, 0.15), MaterialSpec('#2a2a2a', roughness=0.6, metalness=0.1), (0, 1.1, -3.5), name='headboard'),
        ), position=(1.5, 0, -3)),
        PartSpec('sofa', 'Sofa', (
            box((4.0, 0.5, 1.3), 'sofa', (0, 0.3, 0), name='base'),
            box((3.8, 0.7, 1.1), 'sofa', (0, 0.9, 0), name='cushion'),
            box((3.8, 1.5, 0.4), 'sofa', (0, 1.5, -0.6), name='backrest'),
            *(cylinder(0.08, 0.08, 0.3, _BRASS, (x, 0.15, z), segments=12)
              for x in (-1.8, 1.8) for z in (0.5, -0.7)),
        ), position=(-2, 0, 2)),
        PartSpec('table', 'Coffee table', (
            box((1.3, 0.04, 1.0), 'table', (0, 0.5, 0), name='top'),
            *(box((0.1, 0.5, 0.08), MaterialSpec('#b5a642', roughness=0.15, metalness=0.85), (x, 0.25, z))
              for x in (-0.55, 0.55) for z in (-0.4, 0.4)),
        ), position=(0, 0, 0.8)),
        PartSpec('lamp', 'Floor lamp', (
            cylinder(0.18, 0.22, 0.12, 'lamp', (0, 0.06, 0), segments=24, name='base'),
            cylinder(0.025, 0.025, 1.8, 'lamp', (0, 1.0, 0), name='pole'),
            cone(0.35, 0.5, MaterialSpec('#f0e8d8', roughness=0.7, double_sided=True), (0, 1.8, 0),
                 segments=20, name='shade'),
        ), position=(3.5, 0, -2)),
        PartSpec('plant', 'Plant', (
            cylinder(0.3, 0.35, 0.5, MaterialSpec('#a68b6a', roughness=0.5, metalness=0.1), (0, 0.25, 0), name='pot'),
            sphere(0.75, 'plant', (0, 1.1, 0), name='foliage'),
        ), position=(-5.5, 0, -1.5)),
    ),
    lights=(
        LightSpec('ambient', '#ffffff', 0.4),
        LightSpec('directional', '#fff1d6', 1.3, (6, 8, 4), cast_shadow=True),
        LightSpec('directional', '#ffe8cc', 0.6, (-5, 5, 3)),
        LightSpec('point', '#ffd699', 0.9, (3.5, 1.8, -2), distance=10),
    ),
)


# ==================== BUDGET ====================

_DOOR_WOOD = MaterialSpec('#8b6b4f', roughness=0.55)

BUDGET = RoomTemplate(
    style='budget',
    title='Budget',
    background='#f3f3f3',
    paint_slots={
        'wall': MaterialSpec('#e6ddd3', roughness=0.85),
        'accent_wall': MaterialSpec('#c4b29f', roughness=0.8),
        'floor': MaterialSpec('#d2b48c', roughness=0.65, metalness=0.05),
        'rug': MaterialSpec('#bfa58a', roughness=0.9),
        'bed': MaterialSpec('#f5f5f5', roughness=0.8),
        'bed_base': MaterialSpec('#7a5c43', roughness=0.6),
        'headboard': MaterialSpec('#6b4f3a'),
        'sofa': MaterialSpec('#5a5a5a', roughness=0.7),
        'table': MaterialSpec('#8a6a4f'),
        'lamp': MaterialSpec('#ffd700', roughness=0.2, metalness=0.4),
        'plant': MaterialSpec('#5f8f5f'),
        'pot': MaterialSpec('#c9b29b'),
    },
    fixtures=(
        *_shell(MaterialSpec('#f3eee8', roughness=0.7),
                trim_start=-5.4, trim_step=2.4,
                trim_size=(0.18, 4.6, 0.02), trim_y=2.3),
        PartSpec('rug', 'Rug', (plane(4.0, 5.0, 'rug', (1.5, 0.01, -4.2)),)),
        PartSpec('door', 'Door', (
            box((0.12, 2.8, 0.18), _DOOR_WOOD, (0, 1.4, -0.7), name='frame_left'),
            box((0.12, 2.8, 0.18), _DOOR_WOOD, (0, 1.4, 0.7), name='frame_right'),
            box((0.12, 0.12, 1.6), _DOOR_WOOD, (0, 2.86, 0), name='frame_top'),
            box((0.06, 2.65, 1.2), _DOOR_WOOD, (0.12, 1.325, 0), name='panel'),
            cylinder(0.035, 0.035, 0.22, MaterialSpec('#c2a46d', roughness=0.3, metalness=0.6),
                     (0.18, 1.26, 0.45), segments=20, rotation=(0, 0, math.pi / 2), name='handle'),
        ), position=(-7.0, 0, 5.0)),
        PartSpec('window', 'Window', (
            box((2.5, 1.6, 0.1), MaterialSpec('#eaeaea'), (3.5, 3.5, -6.9)),
        )),
    ),
    furniture=(
        PartSpec('bed', 'Bed', (
            box((2.4, 0.4, 3.2), 'bed', (0, 0.6, -1.8), name='mattress'),
            box((2.6, 0.4, 3.4), 'bed_base', (0, 0.2, -1.7), name='base'),
            box((2.6, 1.4, 0.2), 'headboard', (0, 1.0, -3.5), name='headboard'),
        ), position=(1.5, 0, -3)),
        PartSpec('sofa', 'Sofa', (
            box((3.5, 0.4, 1.2), 'sofa', (0, 0.2, 0), name='base'),
            box((3.4, 0.5, 1.0), 'sofa', (0, 0.65, 0), name='cushion'),
            box((3.4, 1.2, 0.3), 'sofa', (0, 1.3, -0.5), name='backrest'),
            box((0.3, 0.8, 1.0), 'sofa', (-1.8, 0.7, 0), name='arm_left'),
            box((0.3, 0.8, 1.0), 'sofa', (1.8, 0.7, 0), name='arm_right'),
        ), position=(-2.5, 0, 2)),
        PartSpec('table', 'Side table', (
            box((0.6, 0.5, 0.6), 'table', (0, 0.25, 0)),
        ), position=(3.2, 0, -6.1)),
        PartSpec('lamp', 'Floor lamp', (
            cylinder(0.15, 0.2, 0.1, 'lamp', (0, 0.05, 0), segments=32, name='base'),
            cylinder(0.02, 0.02, 1.5, 'lamp', (0, 0.8, 0), name='pole'),
            cylinder(0.28, 0.25, 0.35, 'lamp', (0, 1.45, 0), segments=32, name='shade_bottom'),
            cone(0.25, 0.4, 'lamp', (0, 1.8, 0), segments=32, name='shade_top'),
        ), position=(-0.3, 0, -6.2)),
        PartSpec('plant', 'Plant', (
            cylinder(0.25, 0.3, 0.4, 'pot', (0, 0.2, 0), name='pot'),
            sphere(0.6, 'plant', (0, 1.0, 0), name='foliage'),
        ), position=(-5.5, 0, -2)),
    ),
    lights=(
        LightSpec('ambient', '#ffffff', 0.35),
        LightSpec('directional', '#fff1d6', 1.2, (6, 8, 4), cast_shadow=True),
        LightSpec('directional', '#dde7ff', 0.4, (-6, 4, 3)),
        LightSpec('directional', '#ffead2', 0.45, (0, 4, -2)),
        LightSpec('point', '#ffddaa', 0.8, (-0.3, 2, -6.2), distance=8),
    ),
)


# ==================== MINIMALIST ====================

MINIMALIST = RoomTemplate(
    style='minimalist',
    title='Minimalist',
    background='#fafafa',
    paint_slots={
        'wall': MaterialSpec('#ffffff', roughness=0.95),
        'accent_wall': MaterialSpec('#f5f5f5', roughness=0.95),
        'floor': MaterialSpec('#e8e8e8', roughness=0.9),
        'bed': MaterialSpec('#d0d0d0', roughness=0.8),
        'sofa': MaterialSpec('#a8a8a8', roughness=0.75),
        'table': MaterialSpec('#c4a574', roughness=0.7),
        'lamp': MaterialSpec('#e0e0e0', roughness=0.9),
        'plant': MaterialSpec('#6fa876'),
    },
    fixtures=tuple(_shell()),
    furniture=(
        PartSpec('bed', 'Platform bed', (
            box((2.4, 0.3, 2.8), 'bed', (0, 0.15, -2), name='platform'),
        ), position=(1.5, 0, -3)),
        PartSpec('sofa', 'Modular sofa', tuple(
            box((1.2, 0.8, 1.0), 'sofa', (x, 0.4, 0), name=f'module_{i + 1}')
            for i, x in enumerate((-1.2, 0.0, 1.2))
        ), position=(0, 0, 2)),
        PartSpec('table', 'Coffee table', (
            box((1.0, 0.03, 1.0), 'table', (0, 0.45, 0), name='top'),
            *(cylinder(0.04, 0.04, 0.45, MaterialSpec('#888888', roughness=0.8), (x, 0.225, z), segments=8)
              for x in (-0.4, 0.4) for z in (-0.4, 0.4)),
        ), position=(0, 0, 0.5)),
        PartSpec('lamp', 'Paper lamp', (
            cylinder(0.1, 0.1, 0.05, 'lamp', (0, 0.025, 0), name='base'),
            cylinder(0.015, 0.015, 1.2, 'lamp', (0, 0.65, 0), segments=12, name='pole'),
            cone(0.25, 0.4, MaterialSpec('#f5f5f5', roughness=0.95), (0, 1.35, 0), name='shade'),
        ), position=(-3, 0, 1.5)),
        PartSpec('plant', 'Plant', (
            cylinder(0.2, 0.25, 0.35, MaterialSpec('#c9b29b', roughness=0.8), (0, 0.175, 0), name='pot'),
            sphere(0.5, 'plant', (0, 0.75, 0), segments=12, name='foliage'),
        ), position=(4, 0, -2)),
    ),
    lights=(
        LightSpec('ambient', '#ffffff', 0.5),
        LightSpec('directional', '#ffffff', 0.8, (6, 8, 4), cast_shadow=True),
        LightSpec('point', '#ffe8cc', 0.6, (-3, 1.5, 1.5), distance=6),
    ),
)


ROOM_TEMPLATES = {template.style: template for template in (LUXURY, BUDGET, MINIMALIST)}


# ==================== AR (built from props) ====================

DEFAULT_AR_ITEMS = [
    {'name': 'Sofa', 'position': [0, 0, 0], 'size': [3.5, 1.2, 1.2], 'color': '#5a5a5a'},
    {'name': 'Table', 'position': [0, 0, 2], 'size': [0.6, 0.5, 0.6], 'color': '#8a6a4f'},
    {'name': 'Lamp', 'position': [2, 0, 1.5], 'size': [0.3, 1.8, 0.3], 'color': '#ffd700'},
]


def part_key(name: str) -> str:
    """'Coffee Table' -> 'coffee_table'"""
    key = re.sub(r'[^0-9a-z]+', '_', str(name).lower()).strip('_')
    if key.endswith('_color'):
        # "x_color" is read as the color prop of slot "x"
        key = f"{key}_item"
    return key or 'item'


def ar_template(items: Sequence[dict], floor_color: str = '#d2b48c') -> RoomTemplate:
    """
    Template for the AR preview. Each furniture item becomes a toggleable box
    with its own paint slot; `position` is the centre of the item's footprint
    on the floor.
    """
    slots = {'floor': MaterialSpec(floor_color, roughness=0.8)}
    furniture = []
    for item in items:
        key = part_key(item['name'])
        suffix = 2
        base_key = key
        while key in slots:
            key = f"{base_key}_{suffix}"
            suffix += 1
        width, height, depth = (float(v) for v in item['size'])
        slots[key] = MaterialSpec(item['color'], roughness=0.6, metalness=0.2)
        x, y, z = (float(v) for v in item['position'])
        furniture.append(PartSpec(key, item['name'], (
            box((width, height, depth), key, (0, height / 2, 0)),
        ), position=(x, y, z)))

    return RoomTemplate(
        style='ar',
        title='AR',
        background='#1f2937',
        paint_slots=slots,
        fixtures=(PartSpec('floor', 'Floor', (plane(10.0, 10.0, 'floor', (0, -0.01, 0)),)),),
        furniture=tuple(furniture),
        lights=(
            LightSpec('hemisphere', '#ffffff', 1.0, ground_color='#bbbbff'),
            LightSpec('directional', '#ffffff', 0.5, (5, 5, 5)),
        ),
        camera=CameraSpec(fov=75.0, position=(4.0, 3.0, 6.0), far=1000.0),
        controls=ControlsSpec(min_distance=2.0, max_distance=12.0, target=(0.0, 0.5, 0.0)),
    )


def get_template(style: str) -> RoomTemplate:
    try:
        return ROOM_TEMPLATES[style]
    except KeyError:
        raise KeyError(f"Unknown room style: {style}") from None
