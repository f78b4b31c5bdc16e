from io import BytesIO

import openpyxl
import pytest

from designer.budget import (
    BudgetSummary, budget_excel_filename, budget_pdf_filename, full_report_pdf_filename,
)
from designer.charts import budget_pie_chart, comparison_bar_chart, spending_trend_chart
from designer.excel_generator import generate_budget_excel
from designer.pdf_reports import build_budget_pdf, build_full_report_pdf


@pytest.fixture
def summary():
    return BudgetSummary.from_props(total_budget=2000, spent=1450, furniture=1200, decor=500, labor=300)


def test_utilization_rounds_half_up(summary):
    assert summary.utilization_pct == 73
    assert summary.remaining == 550
    assert not summary.is_over_budget


def test_category_percentages_of_total(summary):
    assert [(line.name, line.pct_of_total) for line in summary.lines] == [
        ('Furniture', 60), ('Decor', 25), ('Labor', 15)]


def test_zero_budget_does_not_divide_by_zero():
    empty = BudgetSummary.from_props(total_budget=0, spent=0, furniture=0, decor=0, labor=0)
    assert empty.utilization_pct == 0
    assert empty.progress_fraction == 0.0


def test_over_budget_status():
    over = BudgetSummary.from_props(total_budget=1000, spent=1250)
    assert over.is_over_budget
    assert over.status_message() == "Budget exceeded by $250"
    assert over.progress_fraction == 1.0


def test_status_message_with_money_left(summary):
    assert summary.status_message() == "You have $550 left to spend"


def test_key_statistics(summary):
    stats = summary.key_statistics()
    assert "Budget Utilization: 73%" in stats
    assert "Average Item Cost: $483" in stats
    assert "Number of Categories: 3" in stats


def test_category_comparison_against_recommended(summary):
    rows = {row['category']: row for row in summary.category_comparison()}
    assert rows['Furniture']['recommended'] == 1000
    assert rows['Furniture']['difference'] == "+200"
    assert rows['Labor']['difference'] == "+50"


def test_filenames():
    assert budget_pdf_filename("Bedroom", "Luxury") == "Bedroom-Luxury-Budget-Breakdown.pdf"
    assert full_report_pdf_filename("Bedroom", "Luxury") == "Bedroom-Luxury-Full-Budget-Report.pdf"
    assert budget_excel_filename("Living Room", "Budget") == "Living Room-Budget-Budget-Breakdown.xlsx"


def test_budget_pdf_bytes(summary):
    data = build_budget_pdf(summary, "Bedroom", "Luxury")
    assert data.startswith(b"%PDF")


def test_full_report_pdf_bytes(summary):
    data = build_full_report_pdf(summary, "Bedroom", "Luxury")
    assert data.startswith(b"%PDF")


def test_excel_workbook_contents(summary):
    workbook = openpyxl.load_workbook(BytesIO(generate_budget_excel(summary, "Bedroom", "Luxury")))
    assert workbook.sheetnames == ["Summary", "Breakdown"]

    overview = workbook["Summary"]
    assert overview["A1"].value == "Bedroom - Luxury"
    assert overview["B5"].value == 2000
    assert overview["B7"].value == 550

    breakdown = workbook["Breakdown"]
    assert [breakdown.cell(row=r, column=1).value for r in range(3, 7)] == [
        "Furniture", "Decor", "Labor", "TOTAL"]
    assert breakdown["B6"].value == 1450


def test_charts_have_one_trace_per_series(summary):
    pie = budget_pie_chart(summary)
    assert list(pie.data[0].labels) == ['Furniture', 'Decor', 'Labor']
    assert len(spending_trend_chart().data) == 2
    assert [trace.name for trace in comparison_bar_chart(summary).data] == ['Actual', 'Recommended']
