# designer/pdf_reports.py
# Fixed-layout PDF exports (budget breakdown, full budget report, palette guide)

import logging
from io import BytesIO
from typing import Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from designer.budget import COST_RECOMMENDATIONS, BudgetSummary
from designer.utils import format_currency, hex_to_rgb

logger = logging.getLogger(__name__)

FOOTER_TEXT = "Generated by AI Interior Designer"

DARK = (51, 51, 51)
MUTED = (100, 100, 100)
BODY = (80, 80, 80)
FAINT = (150, 150, 150)


class _Page:
    """
    Thin wrapper over a ReportLab canvas that takes millimetres measured
    from the top-left corner, like the on-screen layout.
    """

    def __init__(self, buffer: BytesIO, title: str):
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.canvas.setTitle(title)
        self.width_mm = A4[0] / mm
        self.height_mm = A4[1] / mm

    def font(self, size: float, bold: bool = False):
        self.canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)

    def color(self, rgb: Tuple[int, int, int]):
        self.canvas.setFillColorRGB(*(c / 255 for c in rgb))

    def text(self, x: float, y: float, value: str):
        self.canvas.drawString(x * mm, (self.height_mm - y) * mm, value)

    def line(self, x1: float, y1: float, x2: float, y2: float, rgb=(180, 180, 180)):
        self.canvas.setStrokeColorRGB(*(c / 255 for c in rgb))
        self.canvas.line(x1 * mm, (self.height_mm - y1) * mm, x2 * mm, (self.height_mm - y2) * mm)

    def fill_rect(self, x: float, y: float, w: float, h: float, rgb: Tuple[int, int, int]):
        self.canvas.saveState()
        self.canvas.setFillColorRGB(*(c / 255 for c in rgb))
        self.canvas.rect(x * mm, (self.height_mm - y - h) * mm, w * mm, h * mm, stroke=0, fill=1)
        self.canvas.restoreState()

    def swatch(self, x: float, y: float, w: float, h: float, hex_color: str):
        self.canvas.saveState()
        self.canvas.setFillColorRGB(*(c / 255 for c in hex_to_rgb(hex_color)))
        self.canvas.setStrokeColorRGB(0.82, 0.84, 0.86)
        self.canvas.rect(x * mm, (self.height_mm - y - h) * mm, w * mm, h * mm, stroke=1, fill=1)
        self.canvas.restoreState()

    def footer(self, value: str, from_bottom: float = 15):
        self.font(9)
        self.color(FAINT)
        self.text(20, self.height_mm - from_bottom, value)

    def finish(self):
        self.canvas.showPage()
        self.canvas.save()


def _category_table(page: _Page, summary: BudgetSummary, y: float, pct_header: str) -> float:
    page.font(10, bold=True)
    page.fill_rect(20, y - 5, page.width_mm - 40, 8, (240, 240, 240))
    page.color(DARK)
    page.text(25, y, "Category")
    page.text(100, y, "Amount")
    page.text(150, y, pct_header)

    y += 10
    page.font(10)
    for index, line in enumerate(summary.lines):
        if index % 2 == 0:
            page.fill_rect(20, y - 5, page.width_mm - 40, 8, (250, 250, 250))
        page.color(BODY)
        page.text(25, y, line.name)
        page.text(100, y, format_currency(line.value))
        page.text(150, y, f"{line.pct_of_total}%")
        y += 8
    return y


def build_budget_pdf(summary: BudgetSummary, room_name: str, design_type: str) -> bytes:
    """Single-page budget breakdown."""
    buffer = BytesIO()
    page = _Page(buffer, f"{room_name} - {design_type} Budget Breakdown")
    y = 20

    page.font(24, bold=True)
    page.color(DARK)
    page.text(20, y, f"{room_name} - {design_type}")

    y += 12
    page.font(14)
    page.color(MUTED)
    page.text(20, y, "Budget Breakdown Report")

    y += 10
    page.line(20, y, page.width_mm - 20, y)

    y += 15
    for label, value, rgb in (
        ("Total Budget:", summary.total_budget, DARK),
        ("Amount Spent:", summary.spent, (200, 120, 0)),
        ("Remaining:", summary.remaining, (34, 197, 94) if summary.remaining >= 0 else (220, 38, 38)),
    ):
        page.font(12, bold=True)
        page.color(DARK)
        page.text(20, y, label)
        page.font(16)
        page.color(rgb)
        page.text(80, y, format_currency(value))
        y += 12

    y += 3
    page.font(10)
    page.color(MUTED)
    page.text(20, y, f"Budget Usage: {summary.utilization_pct}% of total budget")

    y += 15
    page.font(12, bold=True)
    page.color(DARK)
    page.text(20, y, "Budget Breakdown")

    y = _category_table(page, summary, y + 10, "Percentage")

    y += 3
    page.line(20, y, page.width_mm - 20, y, rgb=FAINT)
    y += 8
    page.font(11, bold=True)
    page.color(DARK)
    page.text(25, y, "TOTAL:")
    page.text(100, y, format_currency(summary.spent))
    page.text(150, y, f"{summary.utilization_pct}%")

    y += 20
    page.font(10)
    page.color(MUTED)
    page.text(20, y, "Notes:")
    y += 6
    page.font(9)
    for note in summary.notes(room_name, design_type):
        page.text(25, y, note)
        y += 6

    page.footer(FOOTER_TEXT)
    page.finish()
    logger.info(f"Built budget PDF for {room_name} ({design_type})")
    return buffer.getvalue()


def build_full_report_pdf(summary: BudgetSummary, room_name: str, design_type: str) -> bytes:
    """Statistics, category breakdown and cost recommendations."""
    buffer = BytesIO()
    page = _Page(buffer, f"{room_name} - {design_type} Full Budget Report")
    y = 20

    page.font(20, bold=True)
    page.color(DARK)
    page.text(20, y, "Full Budget Report")

    y += 10
    page.font(12)
    page.color(MUTED)
    page.text(20, y, f"{room_name} - {design_type} Design")

    y += 15
    page.line(20, y, page.width_mm - 20, y)

    y += 12
    page.font(14, bold=True)
    page.color(DARK)
    page.text(20, y, "Key Statistics")

    y += 10
    page.font(10)
    for stat in summary.key_statistics():
        page.text(25, y, stat)
        y += 6

    y += 8
    page.font(14, bold=True)
    page.color(DARK)
    page.text(20, y, "Category Breakdown")
    y = _category_table(page, summary, y + 10, "% of Total")

    y += 12
    page.font(14, bold=True)
    page.color(DARK)
    page.text(20, y, "Cost Optimization Recommendations")

    y += 10
    page.font(9)
    for index, rec in enumerate(COST_RECOMMENDATIONS, start=1):
        page.color(BODY)
        page.text(25, y, f"{index}. {rec['title']}")
        y += 5
        page.color(MUTED)
        page.text(25, y, f"   Potential Saving: {format_currency(rec['saving'])} - {rec['impact']}")
        y += 5

    page.footer(f"{FOOTER_TEXT} • Full Budget Report", from_bottom=10)
    page.finish()
    logger.info(f"Built full budget report PDF for {room_name} ({design_type})")
    return buffer.getvalue()


def build_palette_pdf(palette) -> bytes:
    """Palette guide: swatches with hex codes and usage notes."""
    buffer = BytesIO()
    page = _Page(buffer, f"{palette.name} Color Palette")
    y = 20

    page.font(24, bold=True)
    page.color(DARK)
    page.text(20, y, palette.name)

    y += 12
    page.font(12)
    page.color(MUTED)
    page.text(20, y, "Color Palette Guide")

    y += 8
    page.line(20, y, page.width_mm - 20, y)

    y += 10
    for swatch in palette.swatches:
        page.swatch(20, y, 30, 20, swatch.hex)
        page.font(12, bold=True)
        page.color(DARK)
        page.text(58, y + 6, swatch.name)
        page.font(10)
        page.color(MUTED)
        page.text(58, y + 12, swatch.hex.upper())
        page.text(58, y + 18, swatch.description)
        y += 28

    y += 4
    page.font(12, bold=True)
    page.color((124, 58, 237))
    page.text(20, y, "Pro Tip: 60-30-10 Rule")
    y += 7
    page.font(10)
    page.color(BODY)
    page.text(20, y, "60% Primary • 30% Secondary • 10% Accent")

    page.footer(FOOTER_TEXT)
    page.finish()
    logger.info(f"Built palette PDF for {palette.name}")
    return buffer.getvalue()
