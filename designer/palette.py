# designer/palette.py

import json
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import List

from PIL import Image, ImageDraw, ImageFont

from designer.utils import normalize_hex

logger = logging.getLogger(__name__)

SWATCH_USAGE = [
    ("Primary", "Main color for walls"),
    ("Secondary", "Accent walls"),
    ("Accent", "Decorative elements"),
    ("Neutral", "Background surfaces"),
    ("Dark", "Text and details"),
]


@dataclass(frozen=True)
class Swatch:
    name: str
    hex: str
    description: str


@dataclass(frozen=True)
class ColorPalette:
    name: str
    swatches: List[Swatch]

    @classmethod
    def from_props(cls, primary, secondary, accent, neutral, dark, palette_name="Modern Blue"):
        hexes = [primary, secondary, accent, neutral, dark]
        swatches = [
            Swatch(name, normalize_hex(value), description)
            for (name, description), value in zip(SWATCH_USAGE, hexes)
        ]
        return cls(palette_name, swatches)


def palette_text(palette: ColorPalette) -> str:
    return '\n'.join(f"{s.name}: {s.hex} ({s.description})" for s in palette.swatches)


def palette_json(palette: ColorPalette) -> str:
    data = {
        'paletteName': palette.name,
        'colors': {
            s.name.lower(): {'hex': s.hex, 'description': s.description}
            for s in palette.swatches
        },
    }
    return json.dumps(data, indent=2)


def text_filename(palette: ColorPalette) -> str:
    return f"{palette.name}-ColorCodes.txt"


def json_filename(palette: ColorPalette) -> str:
    return f"{palette.name}-ColorPalette.json"


def png_filename(palette: ColorPalette) -> str:
    return f"{palette.name}-ColorPalette.png"


def pdf_filename(palette: ColorPalette) -> str:
    return f"{palette.name}-ColorPalette.pdf"


def _load_font(size, bold=False):
    """Try to load a TrueType font, falling back to Pillow's default bitmap font."""
    candidates = ["DejaVuSans-Bold.ttf", "arialbd.ttf"] if bold else ["DejaVuSans.ttf", "arial.ttf"]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except (OSError, IOError):
            continue
    return ImageFont.load_default()


def palette_png(palette: ColorPalette, width=1200, height=800) -> bytes:
    """
    Draw the palette as a shareable image.

    Layout: title and subtitle, a divider, one swatch per color with its name
    and hex below, a usage guide and the 60-30-10 tip at the bottom.
    """
    img = Image.new('RGB', (width, height), '#ffffff')
    draw = ImageDraw.Draw(img)

    title_font = _load_font(48, bold=True)
    subtitle_font = _load_font(20)
    label_font = _load_font(16, bold=True)
    body_font = _load_font(16)
    small_font = _load_font(14)

    draw.text((50, 20), f"{palette.name} Color Palette", fill='#1f2937', font=title_font)
    draw.text((50, 78), "Professional Color Scheme", fill='#6b7280', font=subtitle_font)
    draw.line([(50, 110), (width - 50, 110)], fill='#d1d5db', width=2)

    swatch_size, spacing, start_x, start_y = 140, 20, 50, 150
    for index, swatch in enumerate(palette.swatches):
        x = start_x + index * (swatch_size + spacing)
        draw.rectangle([x, start_y, x + swatch_size, start_y + swatch_size],
                       fill=swatch.hex, outline='#d1d5db', width=2)
        draw.text((x, start_y + swatch_size + 14), swatch.name, fill='#1f2937', font=label_font)
        draw.text((x, start_y + swatch_size + 40), swatch.hex, fill='#6b7280', font=small_font)

    draw.text((50, 415), "Usage Guide", fill='#1f2937', font=_load_font(32, bold=True))
    for index, swatch in enumerate(palette.swatches):
        draw.text((70, 475 + index * 35), f"{swatch.name}: {swatch.description}",
                  fill='#4b5563', font=body_font)

    draw.text((50, 735), "Pro Tip: 60-30-10 Rule", fill='#7c3aed', font=_load_font(18, bold=True))
    draw.text((300, 738), "60% Primary / 30% Secondary / 10% Accent", fill='#4b5563', font=small_font)

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    logger.info(f"Rendered palette image for {palette.name}")
    return buffer.getvalue()
