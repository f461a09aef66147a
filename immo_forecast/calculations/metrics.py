"""Summary metrics over depreciation schedules and cashflow projections."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .depreciation import DepreciationSchedule, depreciation_tax_saving
from .projection import ProjectionResult, ProjectionYearRecord
from ..models.lookups import DEFAULT_SALE_SCENARIO_YEARS


@dataclass(frozen=True)
class DepreciationSummary:
    """Depreciation KPIs over the schedule horizon."""

    total_depreciation: float
    total_tax_saving: float
    average_rate_percent: float  # Average effective rate per year
    years_with_special_allowance: int
    first_year_rate_percent: float
    switch_year: Optional[int]  # Degressive → linear, as decided by the generator
    switch_book_value: Optional[float]  # Remaining book value when switching


@dataclass(frozen=True)
class SaleScenario:
    """Outcome of selling the property at a given point of the projection."""

    year: int
    remaining_principal: float
    property_value: float
    sale_costs: float
    equity_on_sale: float  # Value − sale costs − remaining principal
    cumulative_cashflow: float  # After tax
    total_result: float  # Equity on sale + cumulative cashflow − initial equity


@dataclass(frozen=True)
class ProjectionSummary:
    """Milestones and sale outcomes of a projection."""

    total_interest: float
    total_principal_repaid: float
    final_remaining_principal: float
    half_debt_year: Optional[int]  # Balance at or below half the original loan
    self_financed_year: Optional[int]  # Cumulative cashflow covers the remaining loan
    equity_exceeds_price_year: Optional[int]  # Total equity ≥ purchase price
    first_positive_cashflow_year: Optional[int]  # After tax, without extra principal
    sale_scenarios: List[SaleScenario]
    sale_break_even_year: Optional[int]


def summarize_depreciation(
    schedule: DepreciationSchedule,
    marginal_tax_rate_percent: float,
) -> DepreciationSummary:
    """Reduce a depreciation schedule to KPIs.

    The switch year comes straight from the schedule.

    Args:
        schedule: Generated depreciation schedule.
        marginal_tax_rate_percent: Marginal income tax rate in percent.

    Returns:
        DepreciationSummary.
    """
    total = schedule.total_depreciation
    building_value = schedule.building_value
    horizon = len(schedule)

    average_rate = (
        (total / building_value * 100) / horizon
        if building_value > 0 and horizon > 0
        else 0.0
    )

    return DepreciationSummary(
        total_depreciation=total,
        total_tax_saving=depreciation_tax_saving(total, marginal_tax_rate_percent),
        average_rate_percent=average_rate,
        years_with_special_allowance=sum(1 for r in schedule if r.special_amount > 0),
        first_year_rate_percent=schedule[0].effective_rate_percent if horizon > 0 else 0.0,
        switch_year=schedule.switch_year,
        switch_book_value=schedule.switch_book_value,
    )


def _first_year(records: Sequence[ProjectionYearRecord], predicate) -> Optional[int]:
    for record in records:
        if predicate(record):
            return record.year
    return None


def _sale_outcome(
    record: ProjectionYearRecord,
    purchase_price: float,
    initial_equity: float,
) -> SaleScenario:
    # Without sale modeling the property is assumed to keep its purchase price
    property_value = record.property_value if record.property_value is not None else purchase_price
    sale_costs = record.sale_costs if record.sale_costs is not None else 0.0
    equity_on_sale = property_value - sale_costs - record.remaining_principal
    total_result = equity_on_sale + record.cumulative_cashflow_after_tax - initial_equity

    return SaleScenario(
        year=record.year,
        remaining_principal=record.remaining_principal,
        property_value=property_value,
        sale_costs=sale_costs,
        equity_on_sale=equity_on_sale,
        cumulative_cashflow=record.cumulative_cashflow_after_tax,
        total_result=total_result,
    )


def calculate_sale_scenarios(
    result: ProjectionResult,
    purchase_price: float,
    sale_years: Sequence[int] = DEFAULT_SALE_SCENARIO_YEARS,
) -> List[SaleScenario]:
    """Evaluate a sale after a number of years from the start.

    Args:
        result: Cashflow projection.
        purchase_price: Fallback property value when sale modeling is off.
        sale_years: Holding periods in years (index into the projection).

    Returns:
        One SaleScenario per holding period inside the projection horizon.
    """
    return [
        _sale_outcome(result[offset], purchase_price, result.initial_equity)
        for offset in sale_years
        if 0 <= offset < len(result)
    ]


def summarize_projection(
    result: ProjectionResult,
    purchase_price: float,
    sale_years: Sequence[int] = DEFAULT_SALE_SCENARIO_YEARS,
) -> ProjectionSummary:
    """Reduce a cashflow projection to milestones and sale outcomes.

    Args:
        result: Cashflow projection.
        purchase_price: Purchase price, for the equity milestone and as
            the property value when sale modeling is off.
        sale_years: Holding periods for the sale scenarios.

    Returns:
        ProjectionSummary.
    """
    records = result.years
    half_debt = result.original_principal / 2
    initial_equity = result.initial_equity

    final_remaining = records[-1].remaining_principal if records else result.original_principal

    def breaks_even(record: ProjectionYearRecord) -> bool:
        return _sale_outcome(record, purchase_price, initial_equity).total_result >= 0

    return ProjectionSummary(
        total_interest=sum(r.annual_interest for r in records),
        total_principal_repaid=sum(r.principal_paid for r in records),
        final_remaining_principal=final_remaining,
        half_debt_year=_first_year(records, lambda r: r.remaining_principal <= half_debt),
        self_financed_year=_first_year(
            records, lambda r: r.cumulative_cashflow_after_tax >= r.remaining_principal
        ),
        equity_exceeds_price_year=_first_year(records, lambda r: r.total_equity >= purchase_price),
        first_positive_cashflow_year=_first_year(
            records, lambda r: r.cashflow_after_tax_without_extra > 0
        ),
        sale_scenarios=calculate_sale_scenarios(result, purchase_price, sale_years),
        sale_break_even_year=_first_year(records, breaks_even),
    )


def format_projection_table(result: ProjectionResult, every: int = 5) -> str:
    """Format selected projection years as a text table.

    Args:
        result: Cashflow projection.
        every: Show every n-th year (the final year is always shown).

    Returns:
        Formatted string table.
    """
    lines = [
        "=" * 86,
        f"{'Year':<6} {'Balance':>12} {'Interest':>10} {'CF pre-tax':>11} {'Tax':>9} "
        f"{'CF after tax':>13} {'Cum. CF':>11} {'Equity':>11}",
        "-" * 86,
    ]
    last_index = len(result) - 1
    for i, r in enumerate(result):
        if i % every != 0 and i != last_index:
            continue
        lines.append(
            f"{r.year:<6} {r.remaining_principal:>12,.0f} {r.annual_interest:>10,.0f} "
            f"{r.cashflow_pre_tax:>11,.0f} {r.tax:>9,.0f} {r.cashflow_after_tax:>13,.0f} "
            f"{r.cumulative_cashflow_after_tax:>11,.0f} {r.total_equity:>11,.0f}"
        )
    lines.append("=" * 86)
    return "\n".join(lines)
