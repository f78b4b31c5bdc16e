import json

import pytest

from designer.errors import InvalidColorError
from designer.room_templates import BUDGET, DEFAULT_AR_ITEMS, LUXURY, MINIMALIST, ar_template
from designer.scene_graph import build_room_scene


def _geometry(scene):
    return [mesh.geometry() for _, mesh in scene.iter_meshes()]


@pytest.fixture
def luxury():
    return build_room_scene(LUXURY)


def test_visibility_map_starts_all_visible(luxury):
    assert luxury.visibility == {name: True for name in LUXURY.furniture_names}


def test_fixtures_are_not_toggleable(luxury):
    assert 'floor' not in luxury.visibility
    with pytest.raises(KeyError):
        luxury.toggle('floor')


def test_toggle_flips_exactly_one_part(luxury):
    before = luxury.visibility
    assert luxury.toggle('sofa') is False
    after = luxury.visibility
    assert after['sofa'] is False
    assert {k: v for k, v in after.items() if k != 'sofa'} == {k: v for k, v in before.items() if k != 'sofa'}
    assert luxury.registry.groups['sofa'].visible is False
    assert luxury.toggle('sofa') is True


def test_toggle_unknown_part_raises(luxury):
    with pytest.raises(KeyError):
        luxury.toggle('piano')


def test_set_visibility_is_idempotent(luxury):
    luxury.set_visibility('bed', False)
    luxury.set_visibility('bed', False)
    assert luxury.visibility['bed'] is False


def test_visibility_property_is_a_copy(luxury):
    luxury.visibility['bed'] = False
    assert luxury.visibility['bed'] is True


def test_paint_slot_material_is_shared_between_meshes(luxury):
    sofa_meshes = [mesh for group, mesh in luxury.iter_meshes() if group.name == 'sofa' and mesh.material.slot == 'sofa']
    assert len(sofa_meshes) == 3
    assert all(mesh.material is luxury.registry.materials['sofa'] for mesh in sofa_meshes)


def test_apply_colors_changes_materials_only(luxury):
    luxury.toggle('lamp')
    geometry_before = _geometry(luxury)
    visibility_before = luxury.visibility

    changed = luxury.apply_colors({'sofa_color': '#FF0000', 'wall': '#0f0', 'not_a_slot': '#000000'})

    assert sorted(changed) == ['sofa', 'wall']
    assert luxury.colors()['sofa'] == '#ff0000'
    assert luxury.colors()['wall'] == '#00ff00'
    assert _geometry(luxury) == geometry_before
    assert luxury.visibility == visibility_before


def test_apply_same_colors_reports_no_change(luxury):
    assert luxury.apply_colors(luxury.color_props()) == []


def test_apply_colors_rejects_invalid_hex(luxury):
    with pytest.raises(InvalidColorError):
        luxury.apply_colors({'sofa': 'blue-ish'})


def test_build_with_color_overrides():
    scene = build_room_scene(BUDGET, {'rug_color': '#123456', 'unknown_color': '#ffffff'})
    assert scene.colors()['rug'] == '#123456'
    assert scene.colors()['floor'] == '#d2b48c'


def test_mesh_names_are_unique_within_each_room():
    for template in (LUXURY, BUDGET, MINIMALIST):
        names = [mesh.name for _, mesh in build_room_scene(template).iter_meshes()]
        assert len(names) == len(set(names))


def test_fixed_materials_are_deduplicated():
    scene = build_room_scene(LUXURY)
    keys = [material.key for material in scene.all_materials()]
    assert len(keys) == len(set(keys))
    legs = [mesh for group, mesh in scene.iter_meshes() if group.name == 'sofa' and mesh.kind == 'cylinder']
    assert len({id(mesh.material) for mesh in legs}) == 1


def test_payload_is_json_serializable_and_complete(luxury):
    luxury.toggle('plant')
    payload = json.loads(json.dumps(luxury.to_payload()))
    assert payload['style'] == 'luxury'
    assert payload['controls']['enablePan'] is False
    groups = {group['name']: group for group in payload['groups']}
    assert groups['plant']['visible'] is False
    for group in payload['groups']:
        for mesh in group['meshes']:
            assert mesh['material'] in payload['materials']


def test_ar_scene_from_items():
    scene = build_room_scene(ar_template(DEFAULT_AR_ITEMS, floor_color='#ABCDEF'))
    assert scene.colors()['floor'] == '#abcdef'
    assert set(scene.visibility) == {'sofa', 'table', 'lamp'}


def test_ar_item_named_like_a_color_prop_recolors_itself():
    items = [{'name': 'Floor Color', 'position': [0, 0, 0], 'size': [1, 1, 1], 'color': '#111111'}]
    scene = build_room_scene(ar_template(items, floor_color='#d2b48c'))
    assert scene.apply_colors({'floor_color_item': '#222222'}) == ['floor_color_item']
    assert scene.colors()['floor_color_item'] == '#222222'
    assert scene.colors()['floor'] == '#d2b48c'
