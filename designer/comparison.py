# designer/comparison.py
# Data behind the Luxury / Budget / Minimalist comparison widget.

from dataclasses import dataclass
from typing import Dict, List, Optional

from designer.schemas import DesignComparisonProps, DesignOverride


@dataclass(frozen=True)
class DesignOption:
    key: str
    name: str
    icon: str
    description: str
    price: float
    colors: Dict[str, str]
    highlights: List[str]
    best_for: str


DESIGN_PRESETS = {
    'luxury': {
        'name': "Luxury", 'icon': "👑",
        'description': "Premium materials, designer pieces",
        'price': 8500,
        'colors': {'primary': "#faf8f3", 'secondary': "#d4c4b0", 'accent': "#b5a642"},
        'highlights': ["Italian leather sofa", "Marble accents", "Designer lighting",
                       "Premium finishes", "Luxury bedding"],
        'best_for': "Those who want the best",
    },
    'budget': {
        'name': "Budget", 'icon': "💰",
        'description': "Smart choices, great value",
        'price': 1350,
        'colors': {'primary': "#f0f0f0", 'secondary': "#e0e0e0", 'accent': "#606060"},
        'highlights': ["Quality affordable furniture", "Smart storage", "Functional design",
                       "Great value for money", "Easy maintenance"],
        'best_for': "Budget-conscious shoppers",
    },
    'minimalist': {
        'name': "Minimalist", 'icon': "📐",
        'description': "Essential items, clean aesthetic",
        'price': 630,
        'colors': {'primary': "#ffffff", 'secondary': "#f5f5f5", 'accent': "#000000"},
        'highlights': ["Minimal clutter", "Zen aesthetic", "Space-saving design",
                       "Easy to clean", "Peaceful atmosphere"],
        'best_for': "Simplicity lovers",
    },
}

COMPARISON_ASPECTS = {
    'Best For': {'luxury': "Premium taste", 'budget': "Value seekers", 'minimalist': "Minimalists"},
    'Design Feel': {'luxury': "Opulent", 'budget': "Practical", 'minimalist': "Zen"},
    'Maintenance': {'luxury': "High", 'budget': "Medium", 'minimalist': "Easy"},
}


def _resolve(key, override: Optional[DesignOverride]) -> DesignOption:
    preset = DESIGN_PRESETS[key]
    price = preset['price']
    colors = dict(preset['colors'])
    if override is not None:
        if override.total_price is not None:
            price = override.total_price
        if override.colors:
            colors = dict(override.colors)
    return DesignOption(
        key=key,
        name=preset['name'],
        icon=preset['icon'],
        description=preset['description'],
        price=price,
        colors=colors,
        highlights=list(preset['highlights']),
        best_for=preset['best_for'],
    )


def resolve_designs(props: DesignComparisonProps) -> List[DesignOption]:
    """The three designs in display order, with any model overrides applied."""
    return [
        _resolve('luxury', props.luxury_design),
        _resolve('budget', props.budget_design),
        _resolve('minimalist', props.minimalist_design),
    ]


def comparison_rows(designs: List[DesignOption]) -> List[Dict]:
    rows = [{'Aspect': 'Price', **{f"{d.icon} {d.name}": f"${d.price:,.0f}" for d in designs}}]
    for aspect, values in COMPARISON_ASPECTS.items():
        rows.append({'Aspect': aspect, **{f"{d.icon} {d.name}": values[d.key] for d in designs}})
    return rows
