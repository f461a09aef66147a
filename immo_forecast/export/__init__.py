"""Export module for forecast tables and reports."""

from .report import (
    ReportConfig,
    round_for_display,
    depreciation_to_dataframe,
    projection_to_dataframe,
    generate_projection_excel,
)

__all__ = [
    "ReportConfig",
    "round_for_display",
    "depreciation_to_dataframe",
    "projection_to_dataframe",
    "generate_projection_excel",
]
