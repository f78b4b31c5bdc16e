# designer/excel_generator.py
# Budget workbook export: summary sheet, category breakdown, recommendations

from datetime import datetime
from io import BytesIO

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from designer.budget import COST_RECOMMENDATIONS, BudgetSummary


# ==================== STYLE DEFINITIONS ====================
def _define_styles():
    """Defines the styles shared by every sheet."""
    thin_border_side = Side(style='thin')
    thin_border = Border(
        left=thin_border_side,
        right=thin_border_side,
        top=thin_border_side,
        bottom=thin_border_side
    )

    return {
        "header_fill": PatternFill(start_color="1F2937", end_color="1F2937", fill_type="solid"),
        "label_fill": PatternFill(start_color="EFF6FF", end_color="EFF6FF", fill_type="solid"),
        "stripe_fill": PatternFill(start_color="FAFAFA", end_color="FAFAFA", fill_type="solid"),
        "total_fill": PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
        "header_font": Font(bold=True, color="FFFFFF"),
        "bold_font": Font(bold=True),
        "thin_border": thin_border,
        "currency_format": "$#,##0",
        "percent_format": "0%",
    }


def _section_header(sheet, row, text, styles, last_col='D'):
    sheet.merge_cells(f'A{row}:{last_col}{row}')
    cell = sheet[f'A{row}']
    cell.value, cell.fill, cell.font = text, styles['header_fill'], styles['header_font']
    cell.alignment = Alignment(horizontal='center', vertical='center')
    sheet.row_dimensions[row].height = 22


# ==================== SUMMARY SHEET ====================
def _add_summary_sheet(workbook, summary: BudgetSummary, room_name, design_type, styles):
    sheet = workbook.active
    sheet.title = "Summary"
    sheet.sheet_view.showGridLines = False

    sheet['A1'].value = f"{room_name} - {design_type}"
    sheet['A1'].font = Font(bold=True, size=18)
    sheet['A2'].value = "Budget Breakdown Report"
    sheet['A2'].font = Font(size=12, color="646464")

    _section_header(sheet, 4, "BUDGET OVERVIEW", styles)
    overview = [
        ("Total Budget", summary.total_budget, styles['currency_format']),
        ("Amount Spent", summary.spent, styles['currency_format']),
        ("Remaining", summary.remaining, styles['currency_format']),
        ("Budget Utilization", summary.utilization_pct / 100, styles['percent_format']),
        ("Report Date", datetime.now().strftime("%d-%b-%Y"), None),
    ]
    row = 5
    for label, value, number_format in overview:
        label_cell = sheet[f'A{row}']
        label_cell.value, label_cell.font, label_cell.fill = label, styles['bold_font'], styles['label_fill']
        label_cell.border = styles['thin_border']
        value_cell = sheet[f'B{row}']
        value_cell.value, value_cell.border = value, styles['thin_border']
        value_cell.alignment = Alignment(horizontal='right')
        if number_format:
            value_cell.number_format = number_format
        row += 1

    row += 1
    sheet[f'A{row}'].value = summary.status_message()
    sheet[f'A{row}'].font = Font(italic=True, color="B91C1C" if summary.is_over_budget else "15803D")

    for col, width in {'A': 28, 'B': 18, 'C': 18, 'D': 18}.items():
        sheet.column_dimensions[col].width = width


# ==================== BREAKDOWN SHEET ====================
def _add_breakdown_sheet(workbook, summary: BudgetSummary, styles):
    sheet = workbook.create_sheet(title="Breakdown")
    sheet.sheet_view.showGridLines = False

    _section_header(sheet, 1, "CATEGORY BREAKDOWN", styles)
    headers = ['Category', 'Amount', '% of Total', 'Recommended']
    for col_idx, header_text in enumerate(headers, 1):
        cell = sheet.cell(row=2, column=col_idx)
        cell.value, cell.font, cell.fill, cell.border = header_text, styles['bold_font'], styles['label_fill'], styles['thin_border']
        cell.alignment = Alignment(horizontal='center', vertical='center')

    row = 3
    comparison = {item['category']: item['recommended'] for item in summary.category_comparison()}
    for index, line in enumerate(summary.lines):
        values = [line.name, line.value, line.pct_of_total / 100, comparison.get(line.name)]
        for col_idx, value in enumerate(values, 1):
            cell = sheet.cell(row=row, column=col_idx)
            cell.value, cell.border = value, styles['thin_border']
            if index % 2 == 0:
                cell.fill = styles['stripe_fill']
            if col_idx in (2, 4):
                cell.number_format = styles['currency_format']
            elif col_idx == 3:
                cell.number_format = styles['percent_format']
        row += 1

    totals = ["TOTAL", summary.spent, summary.utilization_pct / 100, None]
    for col_idx, value in enumerate(totals, 1):
        cell = sheet.cell(row=row, column=col_idx)
        cell.value, cell.font, cell.fill, cell.border = value, styles['bold_font'], styles['total_fill'], styles['thin_border']
        if col_idx == 2:
            cell.number_format = styles['currency_format']
        elif col_idx == 3:
            cell.number_format = styles['percent_format']

    row += 3
    _section_header(sheet, row, "COST OPTIMIZATION RECOMMENDATIONS", styles)
    row += 1
    for index, rec in enumerate(COST_RECOMMENDATIONS, start=1):
        sheet[f'A{row}'].value = f"{index}. {rec['title']}"
        sheet[f'B{row}'].value = rec['saving']
        sheet[f'B{row}'].number_format = styles['currency_format']
        sheet.merge_cells(f'C{row}:D{row}')
        sheet[f'C{row}'].value = rec['impact']
        row += 1

    for col, width in {'A': 34, 'B': 16, 'C': 16, 'D': 18}.items():
        sheet.column_dimensions[col].width = width


# ==================== MAIN ENTRY POINT ====================
def generate_budget_excel(summary: BudgetSummary, room_name, design_type):
    """Generate the budget workbook and return it as bytes."""
    workbook = openpyxl.Workbook()
    styles = _define_styles()

    _add_summary_sheet(workbook, summary, room_name, design_type, styles)
    _add_breakdown_sheet(workbook, summary, styles)

    workbook.active = workbook["Summary"]
    excel_buffer = BytesIO()
    workbook.save(excel_buffer)
    excel_buffer.seek(0)

    return excel_buffer.getvalue()
