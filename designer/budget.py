# designer/budget.py
# Budget math behind the BudgetBreakdown component and its exports.

from dataclasses import dataclass, field
from typing import Dict, List

from designer.utils import format_currency, percentage, round_half_up

CATEGORY_COLORS = {
    'Furniture': '#3B82F6',
    'Decor': '#6366F1',
    'Labor': '#EC4899',
}

# Typical allocation for a single furnished room, used for the comparison tab
RECOMMENDED_SPEND = {
    'Furniture': 1000,
    'Decor': 400,
    'Labor': 250,
}

COST_RECOMMENDATIONS = [
    {'title': "Consider alternative furniture", 'saving': 200, 'impact': "Same quality, better price"},
    {'title': "Seasonal decor sales", 'saving': 150, 'impact': "Premium items available"},
    {'title': "Bulk discounts available", 'saving': 100, 'impact': "Save on accessories"},
    {'title': "Labor rate optimization", 'saving': 50, 'impact': "Negotiate better rates"},
]

SPENDING_TREND = [
    {'period': "Week 1", 'spent': 300, 'budget': 500},
    {'period': "Week 2", 'spent': 700, 'budget': 1000},
    {'period': "Week 3", 'spent': 350, 'budget': 1500},
    {'period': "Week 4", 'spent': 100, 'budget': 2000},
]


@dataclass(frozen=True)
class BudgetLine:
    name: str
    value: float
    color: str
    pct_of_total: int


@dataclass
class BudgetSummary:
    total_budget: float
    spent: float
    lines: List[BudgetLine] = field(default_factory=list)

    @classmethod
    def from_props(cls, total_budget=2000, spent=1450, furniture=1200, decor=500, labor=300) -> "BudgetSummary":
        values = {'Furniture': furniture, 'Decor': decor, 'Labor': labor}
        lines = [
            BudgetLine(name, value, CATEGORY_COLORS[name], percentage(value, total_budget))
            for name, value in values.items()
        ]
        return cls(total_budget=total_budget, spent=spent, lines=lines)

    @property
    def remaining(self) -> float:
        return self.total_budget - self.spent

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0

    @property
    def utilization_pct(self) -> int:
        """Share of the total budget already spent, as a whole percentage."""
        return percentage(self.spent, self.total_budget)

    @property
    def progress_fraction(self) -> float:
        """Spent / total clamped to [0, 1] for progress bars."""
        if not self.total_budget:
            return 0.0
        return max(0.0, min(1.0, self.spent / self.total_budget))

    @property
    def category_total(self) -> float:
        return sum(line.value for line in self.lines)

    @property
    def average_category_cost(self) -> int:
        if not self.lines:
            return 0
        return round_half_up(self.spent / len(self.lines))

    def status_message(self) -> str:
        if self.remaining >= 0:
            return f"You have {format_currency(self.remaining)} left to spend"
        return f"Budget exceeded by {format_currency(abs(self.remaining))}"

    def key_statistics(self) -> List[str]:
        return [
            f"Total Budget: {format_currency(self.total_budget)}",
            f"Amount Spent: {format_currency(self.spent)}",
            f"Remaining Balance: {format_currency(self.remaining)}",
            f"Budget Utilization: {self.utilization_pct}%",
            f"Average Item Cost: {format_currency(self.average_category_cost)}",
            f"Number of Categories: {len(self.lines)}",
        ]

    def category_comparison(self) -> List[Dict]:
        rows = []
        for line in self.lines:
            recommended = RECOMMENDED_SPEND.get(line.name, 0)
            difference = line.value - recommended
            rows.append({
                'category': line.name,
                'actual': line.value,
                'recommended': recommended,
                'difference': f"{'+' if difference >= 0 else '-'}{abs(difference):,.0f}",
            })
        return rows

    def notes(self, room_name: str, design_type: str) -> List[str]:
        values = {line.name: line.value for line in self.lines}
        return [
            f"• Total investment for your {design_type} {room_name} design",
            f"• Furniture costs: {format_currency(values.get('Furniture', 0))}",
            f"• Decor and accessories: {format_currency(values.get('Decor', 0))}",
            f"• Professional installation/labor: {format_currency(values.get('Labor', 0))}",
            f"• Remaining budget available: {format_currency(self.remaining)}",
        ]

    def to_records(self) -> List[Dict]:
        """Rows for the breakdown table / dataframe."""
        return [
            {'Category': line.name, 'Amount': line.value, '% of Total': line.pct_of_total}
            for line in self.lines
        ]


def budget_pdf_filename(room_name: str, design_type: str) -> str:
    return f"{room_name}-{design_type}-Budget-Breakdown.pdf"


def full_report_pdf_filename(room_name: str, design_type: str) -> str:
    return f"{room_name}-{design_type}-Full-Budget-Report.pdf"


def budget_excel_filename(room_name: str, design_type: str) -> str:
    return f"{room_name}-{design_type}-Budget-Breakdown.xlsx"
