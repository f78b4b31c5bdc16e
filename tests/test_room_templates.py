import pytest
from pydantic import ValidationError

from designer.room_templates import (
    BUDGET, DEFAULT_AR_ITEMS, LUXURY, MINIMALIST, ROOM_TEMPLATES, ar_template, color_prop,
    get_template, part_key,
)
from designer.schemas import (
    ColorPaletteProps, DesignComparisonProps, FurnitureGridProps, Room3DBudgetProps,
    Room3DLuxuryProps, Room3DMinimalistProps, RoomARProps,
)


ROOM_SCHEMAS = [(LUXURY, Room3DLuxuryProps), (BUDGET, Room3DBudgetProps), (MINIMALIST, Room3DMinimalistProps)]


def test_every_style_has_the_same_furniture_parts():
    for template in ROOM_TEMPLATES.values():
        assert template.furniture_names == ['bed', 'sofa', 'table', 'lamp', 'plant']


def test_color_prop_naming():
    assert color_prop('accent_wall') == 'accent_wall_color'


def test_get_template_unknown_style():
    assert get_template('luxury') is LUXURY
    with pytest.raises(KeyError):
        get_template('gothic')


def test_furniture_slots_reference_declared_paint_slots():
    for template in ROOM_TEMPLATES.values():
        for part in template.fixtures + template.furniture:
            for primitive in part.primitives:
                if isinstance(primitive.material, str):
                    assert primitive.material in template.paint_slots


@pytest.mark.parametrize("template, schema", ROOM_SCHEMAS)
def test_schema_defaults_match_template_colors(template, schema):
    props = schema()
    assert props.colors() == {color_prop(slot): color for slot, color in template.default_colors().items()}


def test_room_schema_accepts_camel_case_and_normalizes_hex():
    props = Room3DLuxuryProps.model_validate({'accentWallColor': '#ABC', 'sofa_color': '#112233'})
    assert props.accent_wall_color == '#aabbcc'
    assert props.sofa_color == '#112233'
    assert props.wall_color == '#faf8f3'


def test_room_schema_rejects_bad_hex():
    with pytest.raises(ValidationError):
        Room3DMinimalistProps.model_validate({'floorColor': 'wood'})


def test_budget_schema_accepts_furniture_color_for_side_table():
    props = Room3DBudgetProps.model_validate({'furnitureColor': '#000000'})
    assert props.table_color == '#000000'


def test_catalog_schema_uses_camel_case_names():
    schema = Room3DBudgetProps.model_json_schema(by_alias=True)
    assert 'accentWallColor' in schema['properties']
    assert 'bedBaseColor' in schema['properties']


def test_part_key_slugifies():
    assert part_key('Coffee Table') == 'coffee_table'
    assert part_key('***') == 'item'


def test_part_key_never_looks_like_a_color_prop():
    assert part_key('Floor Color') == 'floor_color_item'
    assert part_key('Colorful Rug') == 'colorful_rug'


def test_ar_template_one_slot_and_part_per_item():
    template = ar_template(DEFAULT_AR_ITEMS)
    assert template.style == 'ar'
    assert template.furniture_names == ['sofa', 'table', 'lamp']
    assert set(template.paint_slots) == {'floor', 'sofa', 'table', 'lamp'}


def test_ar_template_deduplicates_names():
    items = [
        {'name': 'Chair', 'position': [0, 0, 0], 'size': [1, 1, 1], 'color': '#111111'},
        {'name': 'Chair', 'position': [1, 0, 0], 'size': [1, 1, 1], 'color': '#222222'},
    ]
    template = ar_template(items)
    assert template.furniture_names == ['chair', 'chair_2']


def test_ar_boxes_sit_on_the_floor():
    template = ar_template([{'name': 'Lamp', 'position': [2, 0, 1.5], 'size': [0.3, 1.8, 0.3], 'color': '#ffd700'}])
    (primitive,) = template.furniture[0].primitives
    assert primitive.position == (0, 0.9, 0)
    assert template.furniture[0].position == (2.0, 0.0, 1.5)


def test_ar_props_default_items_and_validation():
    props = RoomARProps()
    assert [item.name for item in props.furniture_items] == ['Sofa', 'Table', 'Lamp']
    with pytest.raises(ValidationError):
        RoomARProps.model_validate({'furnitureItems': [{'name': 'x', 'position': [0, 0], 'size': [1, 1, 1],
                                                        'color': '#fff'}]})


def test_furniture_grid_defaults_and_column_bounds():
    props = FurnitureGridProps()
    assert props.columns == 3
    assert len(props.items) == 3
    with pytest.raises(ValidationError):
        FurnitureGridProps(columns=5)


def test_palette_defaults():
    props = ColorPaletteProps()
    assert props.primary == '#3b82f6'
    assert props.palette_name == 'Modern Blue'


def test_comparison_overrides_normalize_colors():
    props = DesignComparisonProps.model_validate(
        {'roomName': 'Office', 'luxuryDesign': {'totalPrice': 9000, 'colors': {'primary': '#FFF'}}})
    assert props.luxury_design.total_price == 9000
    assert props.luxury_design.colors == {'primary': '#ffffff'}
    assert props.budget_design.total_price is None


def test_ar_position_description_states_floor_convention():
    schema = RoomARProps.model_json_schema(by_alias=True)
    position = schema['$defs']['ARFurnitureItem']['properties']['position']
    assert 'floor level' in position['description']
