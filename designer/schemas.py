# designer/schemas.py
# Prop schemas for every component the model may render. The JSON schema of
# each model is shown to Gemini; the same model validates what it sends back.

from typing import Dict, List, Optional, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, HttpUrl, create_model, field_validator
from pydantic.alias_generators import to_camel

from designer.room_templates import (
    BUDGET, DEFAULT_AR_ITEMS, LUXURY, MINIMALIST, RoomTemplate, color_prop,
)
from designer.utils import normalize_hex


class PropsModel(BaseModel):
    """Accepts camelCase (as the model tends to write) or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)


class RoomColorProps(PropsModel):
    """Base for the 3D room schemas; every field is a `<slot>_color` hex string."""

    @field_validator('*')
    @classmethod
    def _hex(cls, value):
        return normalize_hex(value)

    def colors(self) -> Dict[str, str]:
        return self.model_dump()


def _slot_description(slot: str) -> str:
    return f"{slot.replace('_', ' ').capitalize()} color hex code"


def room_props_model(template: RoomTemplate, name: str,
                     extra_aliases: Optional[Dict[str, str]] = None) -> Type[RoomColorProps]:
    """One optional `<slot>_color` field per paint slot; `extra_aliases` maps a slot to an additional accepted key."""
    extra_aliases = extra_aliases or {}
    fields = {}
    for slot, spec in template.paint_slots.items():
        prop = color_prop(slot)
        options = {}
        if slot in extra_aliases:
            options['validation_alias'] = AliasChoices(to_camel(prop), prop, extra_aliases[slot])
        fields[prop] = (str, Field(default=spec.color, description=_slot_description(slot), **options))
    return create_model(name, __base__=RoomColorProps, **fields)


Room3DLuxuryProps = room_props_model(LUXURY, 'Room3DLuxuryProps')
Room3DBudgetProps = room_props_model(BUDGET, 'Room3DBudgetProps', extra_aliases={'table': 'furnitureColor'})
Room3DMinimalistProps = room_props_model(MINIMALIST, 'Room3DMinimalistProps')


class ARFurnitureItem(PropsModel):
    name: str
    position: List[float] = Field(
        min_length=3, max_length=3,
        description="[x, y, z] of the centre of the item's footprint. y is the floor level the "
                    "item stands on (usually 0), not the middle of its height; the box is raised "
                    "by half its height automatically",
    )
    size: List[float] = Field(min_length=3, max_length=3, description="[width, height, depth]")
    color: str = Field(description="Hex color")

    @field_validator('color')
    @classmethod
    def _hex(cls, value):
        return normalize_hex(value)


class RoomARProps(PropsModel):
    furniture_items: List[ARFurnitureItem] = Field(
        default_factory=lambda: [ARFurnitureItem(**item) for item in DEFAULT_AR_ITEMS],
        description="Furniture boxes to place in the AR preview",
    )
    floor_color: str = Field(default='#d2b48c', description="Floor color hex code")

    @field_validator('floor_color')
    @classmethod
    def _hex(cls, value):
        return normalize_hex(value)


class BudgetBreakdownProps(PropsModel):
    total_budget: float = Field(default=2000, ge=0, description="Total budget in USD")
    spent: float = Field(default=1450, ge=0, description="Amount spent so far")
    furniture: float = Field(default=1200, ge=0, description="Furniture spend")
    decor: float = Field(default=500, ge=0, description="Decor and accessories spend")
    labor: float = Field(default=300, ge=0, description="Installation / labor spend")
    room_name: str = Field(default="Bedroom", description="Name of the room")
    design_type: str = Field(default="Luxury", description="Design style, e.g. Luxury, Budget, Minimalist")


class FurnitureItem(PropsModel):
    id: int
    name: str
    price: float
    image: HttpUrl
    rating: float
    store: str


_SAMPLE_IMAGE = "https://images.unsplash.com/photo-1555041469-a586c61ea9bc?w=300&h=300&fit=crop"

DEFAULT_FURNITURE = [
    {"id": 1, "name": "Modern Sofa", "price": 899, "image": _SAMPLE_IMAGE, "rating": 4.8, "store": "Wayfair"},
    {"id": 2, "name": "Coffee Table", "price": 299, "image": _SAMPLE_IMAGE, "rating": 4.5, "store": "Amazon"},
    {"id": 3, "name": "Floor Lamp", "price": 199, "image": _SAMPLE_IMAGE, "rating": 4.3, "store": "IKEA"},
]


class FurnitureGridProps(PropsModel):
    columns: int = Field(default=3, ge=1, le=4, description="Number of columns (1-4)")
    items: List[FurnitureItem] = Field(
        default_factory=lambda: [FurnitureItem(**item) for item in DEFAULT_FURNITURE],
        description="Array of furniture items",
    )
    title: str = Field(default="Recommended Furniture", description="Section title")


class ColorPaletteProps(PropsModel):
    primary: str = Field(default="#3B82F6", description="Primary color hex code")
    secondary: str = Field(default="#6366F1", description="Secondary color hex code")
    accent: str = Field(default="#EC4899", description="Accent color hex code")
    neutral: str = Field(default="#F3F4F6", description="Neutral background color")
    dark: str = Field(default="#1F2937", description="Dark text color")
    palette_name: str = Field(default="Modern Blue", description="Name of the palette")

    @field_validator('primary', 'secondary', 'accent', 'neutral', 'dark')
    @classmethod
    def _hex(cls, value):
        return normalize_hex(value)


class DesignOverride(PropsModel):
    total_price: Optional[float] = Field(default=None, ge=0)
    colors: Optional[Dict[str, str]] = None

    @field_validator('colors')
    @classmethod
    def _hex_values(cls, value):
        if value is None:
            return None
        return {name: normalize_hex(color) for name, color in value.items()}


class DesignComparisonProps(PropsModel):
    room_name: str = Field(default="Bedroom", description="Name of the room")
    luxury_design: DesignOverride = Field(default_factory=DesignOverride)
    budget_design: DesignOverride = Field(default_factory=DesignOverride)
    minimalist_design: DesignOverride = Field(default_factory=DesignOverride)
