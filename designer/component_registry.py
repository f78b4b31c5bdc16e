# designer/component_registry.py
# Components the model may render, and the catalog prompt that describes them.

import json
from dataclasses import dataclass
from typing import Callable, Dict, Type

from pydantic import BaseModel

from designer import schemas, ui_components
from designer.errors import UnknownComponentError


@dataclass(frozen=True)
class ComponentRegistryEntry:
    name: str
    description: str
    render: Callable
    props_schema: Type[BaseModel]


_ENTRIES = [
    ComponentRegistryEntry(
        "Room3DLuxury",
        "Interactive 3D luxury room (bed, sofa, coffee table, floor lamp, plant) with "
        "premium materials. Use for high-end or premium designs. Every color prop is optional.",
        ui_components.render_room_luxury,
        schemas.Room3DLuxuryProps,
    ),
    ComponentRegistryEntry(
        "Room3DBudget",
        "Interactive 3D budget-friendly room with rug, door and window. Use for affordable "
        "or value designs. Every color prop is optional.",
        ui_components.render_room_budget,
        schemas.Room3DBudgetProps,
    ),
    ComponentRegistryEntry(
        "Room3DMinimalist",
        "Interactive 3D minimalist room with only essential furniture and a clean palette. "
        "Use for minimalist, Scandinavian or zen requests.",
        ui_components.render_room_minimalist,
        schemas.Room3DMinimalistProps,
    ),
    ComponentRegistryEntry(
        "RoomAR",
        "AR furniture placement preview. Each furniture item is a box with a name, "
        "position [x, y, z], size [width, height, depth] in metres and a hex color.",
        ui_components.render_room_ar,
        schemas.RoomARProps,
    ),
    ComponentRegistryEntry(
        "BudgetBreakdown",
        "Budget breakdown with pie chart, full report and PDF/Excel export. Use whenever "
        "the user mentions a budget, costs or prices for a room.",
        ui_components.render_budget_breakdown,
        schemas.BudgetBreakdownProps,
    ),
    ComponentRegistryEntry(
        "FurnitureGrid",
        "Grid of recommended furniture products with image URL, price, rating and store.",
        ui_components.render_furniture_grid,
        schemas.FurnitureGridProps,
    ),
    ComponentRegistryEntry(
        "ColorPalette",
        "Five-color interior palette (primary, secondary, accent, neutral, dark) with "
        "TXT, JSON, PNG and PDF export.",
        ui_components.render_color_palette,
        schemas.ColorPaletteProps,
    ),
    ComponentRegistryEntry(
        "DesignComparison",
        "Side-by-side comparison of luxury, budget and minimalist versions of one room, "
        "with optional price and color overrides per design.",
        ui_components.render_design_comparison,
        schemas.DesignComparisonProps,
    ),
]

COMPONENT_REGISTRY: Dict[str, ComponentRegistryEntry] = {entry.name: entry for entry in _ENTRIES}

SYSTEM_PROMPT = """You are an expert interior designer helping users plan rooms.
Reply ONLY with a JSON object of this shape:
{"message": "<short friendly reply>", "components": [{"name": "<component name>", "props": {...}}]}

Rules:
- "components" may be empty when no visual helps the answer.
- Use only the component names listed below, with props matching their JSON schema.
- Colors are hex codes like "#a1b2c3". Prop names use camelCase.
- Prefer one or two components per reply; put the most important one first.

Available components:
"""


def get_entry(name, registry=None) -> ComponentRegistryEntry:
    registry = registry if registry is not None else COMPONENT_REGISTRY
    try:
        return registry[name]
    except KeyError:
        raise UnknownComponentError(name) from None


def validate_props(name, props, registry=None) -> BaseModel:
    """Validate raw props for a registered component; raises pydantic.ValidationError."""
    return get_entry(name, registry).props_schema.model_validate(props or {})


def catalog_prompt(registry=None) -> str:
    """System instruction listing each component with its props JSON schema."""
    registry = registry if registry is not None else COMPONENT_REGISTRY
    sections = []
    for entry in registry.values():
        schema = entry.props_schema.model_json_schema(by_alias=True)
        sections.append(
            f"### {entry.name}\n{entry.description}\nProps schema:\n{json.dumps(schema, indent=2)}"
        )
    return SYSTEM_PROMPT + "\n\n".join(sections)
