import json

import pytest
from pydantic import ValidationError

from designer.component_registry import COMPONENT_REGISTRY, catalog_prompt, get_entry, validate_props
from designer.errors import UnknownComponentError
from designer.schemas import RoomARProps


def test_registry_lists_every_component():
    assert list(COMPONENT_REGISTRY) == [
        "Room3DLuxury", "Room3DBudget", "Room3DMinimalist", "RoomAR",
        "BudgetBreakdown", "FurnitureGrid", "ColorPalette", "DesignComparison",
    ]
    for name, entry in COMPONENT_REGISTRY.items():
        assert entry.name == name
        assert entry.description
        assert callable(entry.render)


def test_every_schema_validates_empty_props():
    for name in COMPONENT_REGISTRY:
        assert validate_props(name, {}) is not None


def test_get_entry_unknown_name():
    with pytest.raises(UnknownComponentError) as excinfo:
        get_entry("Hologram")
    assert str(excinfo.value) == "Unknown component: Hologram"
    assert isinstance(excinfo.value, KeyError)


def test_validate_props_returns_schema_instance():
    props = validate_props("RoomAR", {"floorColor": "#FFF"})
    assert isinstance(props, RoomARProps)
    assert props.floor_color == "#ffffff"


def test_validate_props_raises_on_bad_input():
    with pytest.raises(ValidationError):
        validate_props("BudgetBreakdown", {"totalBudget": -5})


def test_catalog_prompt_embeds_schemas():
    prompt = catalog_prompt()
    assert '"components"' in prompt
    for name in COMPONENT_REGISTRY:
        assert f"### {name}" in prompt
    luxury_section = prompt.split("### Room3DLuxury\n", 1)[1].split("### ", 1)[0]
    schema_text = luxury_section.split("Props schema:\n", 1)[1]
    schema = json.loads(schema_text)
    assert "sofaColor" in schema["properties"]


def test_validate_props_against_a_custom_registry():
    registry = {"RoomAR": COMPONENT_REGISTRY["RoomAR"]}
    assert isinstance(validate_props("RoomAR", None, registry), RoomARProps)
    with pytest.raises(UnknownComponentError):
        validate_props("ColorPalette", {}, registry)
