"""Calculation modules for the property purchase forecast."""

from .eligibility import (
    evaluate_eligibility,
    default_depreciation_model,
    EligibilityResult,
)
from .depreciation import (
    generate_depreciation_schedule,
    optimal_switch_year,
    depreciation_tax_saving,
    DepreciationSchedule,
    DepreciationYearRecord,
)
from .loan import (
    calculate_annuity_payment,
    split_annual_payment,
    PrincipalSplit,
)
from .projection import (
    project_cashflows,
    ProjectionResult,
    ProjectionYearRecord,
)
from .metrics import (
    summarize_depreciation,
    summarize_projection,
    calculate_sale_scenarios,
    format_projection_table,
    DepreciationSummary,
    ProjectionSummary,
    SaleScenario,
)
from .kpis import (
    calculate_purchase_costs,
    calculate_gross_rental_yield,
    calculate_net_rental_yield,
    calculate_dscr,
    calculate_break_even_years,
    calculate_investment_score,
    PurchaseCosts,
)

__all__ = [
    # Eligibility
    "evaluate_eligibility",
    "default_depreciation_model",
    "EligibilityResult",
    # Depreciation
    "generate_depreciation_schedule",
    "optimal_switch_year",
    "depreciation_tax_saving",
    "DepreciationSchedule",
    "DepreciationYearRecord",
    # Loan
    "calculate_annuity_payment",
    "split_annual_payment",
    "PrincipalSplit",
    # Projection
    "project_cashflows",
    "ProjectionResult",
    "ProjectionYearRecord",
    # Summaries
    "summarize_depreciation",
    "summarize_projection",
    "calculate_sale_scenarios",
    "format_projection_table",
    "DepreciationSummary",
    "ProjectionSummary",
    "SaleScenario",
    # KPIs
    "calculate_purchase_costs",
    "calculate_gross_rental_yield",
    "calculate_net_rental_yield",
    "calculate_dscr",
    "calculate_break_even_years",
    "calculate_investment_score",
    "PurchaseCosts",
]
