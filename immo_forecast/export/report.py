"""Forecast report export - tables and Excel workbook.

Flattens depreciation schedules, cashflow projections and their summaries
into pandas DataFrames and a styled Excel workbook. Values are kept at full
precision by the engine and rounded to cents only here.
"""

import io
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils.dataframe import dataframe_to_rows

from ..calculations.depreciation import DepreciationSchedule
from ..calculations.metrics import DepreciationSummary, ProjectionSummary
from ..calculations.projection import ProjectionResult


@dataclass
class ReportConfig:
    """Configuration for report generation."""
    include_summary: bool = True
    include_projection: bool = True
    include_depreciation: bool = True
    property_name: str = "Property"
    scenario_name: str = "Forecast"


def round_for_display(value: Optional[float], digits: int = 2) -> Optional[float]:
    """Round an amount for display; None passes through."""
    if value is None:
        return None
    return round(value, digits)


def _format_eur(value: Optional[float]) -> str:
    """Format a currency amount for display in reports."""
    if value is None:
        return "-"
    return f"{value:,.0f} €"


def depreciation_to_dataframe(schedule: DepreciationSchedule) -> pd.DataFrame:
    """Flatten a depreciation schedule into a DataFrame indexed by year.

    Args:
        schedule: Generated depreciation schedule.

    Returns:
        DataFrame with one row per year, amounts rounded to cents.
    """
    df = pd.DataFrame([asdict(record) for record in schedule.years])
    if df.empty:
        return df
    return df.set_index("year").round(2)


def projection_to_dataframe(
    result: ProjectionResult,
    columns: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Flatten a cashflow projection into a DataFrame indexed by year.

    Args:
        result: Cashflow projection.
        columns: Optional subset of record fields to keep.

    Returns:
        DataFrame with one row per projection year, amounts rounded to cents.
    """
    df = pd.DataFrame([asdict(record) for record in result.years])
    if df.empty:
        return df
    df = df.set_index("year")
    if columns is not None:
        df = df[columns]
    return df.round(2)


def _summary_rows(
    result: ProjectionResult,
    depreciation_summary: Optional[DepreciationSummary],
    projection_summary: Optional[ProjectionSummary],
) -> List[Tuple[str, str]]:
    first = result.years[0]
    rows = [
        ("Loan Amount", _format_eur(result.original_principal)),
        ("Equity", _format_eur(result.initial_equity)),
        (
            "Monthly Annuity",
            _format_eur(result.fixed_monthly_payment) if result.fixed_monthly_payment else "-",
        ),
        ("", ""),
        ("Cashflow before Tax (Year 1, monthly)", _format_eur(first.cashflow_pre_tax)),
        ("Cashflow after Tax (Year 1, monthly)", _format_eur(first.cashflow_after_tax)),
        ("Remaining Principal (final year)", _format_eur(result.final_year.remaining_principal)),
        ("Total Equity (final year)", _format_eur(result.final_year.total_equity)),
    ]

    if depreciation_summary is not None:
        rows += [
            ("", ""),
            ("Total Depreciation", _format_eur(depreciation_summary.total_depreciation)),
            ("Tax Saving from Depreciation", _format_eur(depreciation_summary.total_tax_saving)),
            ("Average Depreciation Rate", f"{depreciation_summary.average_rate_percent:.2f}%"),
            ("Year-1 Depreciation Rate", f"{depreciation_summary.first_year_rate_percent:.2f}%"),
            ("Years with Special Allowance", str(depreciation_summary.years_with_special_allowance)),
            ("Switch to Linear", str(depreciation_summary.switch_year or "-")),
            ("Book Value at Switch", _format_eur(depreciation_summary.switch_book_value)),
        ]

    if projection_summary is not None:
        rows += [
            ("", ""),
            ("Half of Loan Repaid", str(projection_summary.half_debt_year or "-")),
            ("Self-Financed", str(projection_summary.self_financed_year or "-")),
            ("First Positive Cashflow", str(projection_summary.first_positive_cashflow_year or "-")),
            ("Sale Break-Even", str(projection_summary.sale_break_even_year or "-")),
        ]
        for scenario in projection_summary.sale_scenarios:
            rows.append((f"Sale Result {scenario.year}", _format_eur(scenario.total_result)))

    return rows


def _add_header_style(ws, row: int, cols: int) -> None:
    """Apply header styling to a row."""
    header_fill = PatternFill(start_color="001D3D", end_color="001D3D", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for col in range(1, cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")


def _add_section_header(ws, title: str, row: int) -> int:
    """Add a section header and return next row."""
    ws.cell(row=row, column=1, value=title)
    ws.cell(row=row, column=1).font = Font(bold=True, size=14)
    return row + 1


def _write_dataframe(ws, df: pd.DataFrame, title: str) -> None:
    """Write a year-indexed DataFrame below a section header."""
    row = _add_section_header(ws, title, 1)
    row += 1

    for values in dataframe_to_rows(df.reset_index(), index=False, header=True):
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value)
        if row == 3:
            _add_header_style(ws, row, len(values))
        row += 1

    for col in range(1, len(df.columns) + 2):
        ws.column_dimensions[ws.cell(row=3, column=col).column_letter].width = 18


def generate_projection_excel(
    result: ProjectionResult,
    config: Optional[ReportConfig] = None,
    depreciation_summary: Optional[DepreciationSummary] = None,
    projection_summary: Optional[ProjectionSummary] = None,
) -> bytes:
    """Generate an Excel report of a forecast.

    Args:
        result: Cashflow projection from project_cashflows().
        config: Optional configuration for the report.
        depreciation_summary: Optional depreciation KPIs for the summary sheet.
        projection_summary: Optional milestones for the summary sheet.

    Returns:
        Excel file as bytes
    """
    if config is None:
        config = ReportConfig()

    wb = Workbook()

    # Remove default sheet
    wb.remove(wb.active)

    if config.include_summary and result.years:
        ws = wb.create_sheet("Summary")
        row = 1
        ws.cell(row=row, column=1, value=f"Forecast: {config.property_name}")
        ws.cell(row=row, column=1).font = Font(bold=True, size=16)
        row += 1
        ws.cell(row=row, column=1, value=f"Scenario: {config.scenario_name}")
        row += 1
        ws.cell(row=row, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        row += 2

        row = _add_section_header(ws, "Key Figures", row)
        row += 1
        for label, value in _summary_rows(result, depreciation_summary, projection_summary):
            if label:
                ws.cell(row=row, column=1, value=label)
                ws.cell(row=row, column=2, value=value)
            row += 1

        ws.column_dimensions['A'].width = 40
        ws.column_dimensions['B'].width = 20

    if config.include_projection:
        ws = wb.create_sheet("Projection")
        _write_dataframe(ws, projection_to_dataframe(result), "Year-by-Year Projection")

    if config.include_depreciation and result.depreciation_schedule is not None:
        ws = wb.create_sheet("Depreciation")
        _write_dataframe(
            ws,
            depreciation_to_dataframe(result.depreciation_schedule),
            "Depreciation Schedule",
        )

    # Save to bytes
    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()
