"""Year-by-year loan amortization and cashflow projection.

Combines the loan schedule, inflated rent and running costs, depreciation
and income tax into one record per year, from the purchase year (index 0)
through the end of the horizon. Cashflow figures are monthly amounts for
the respective year; cumulative figures are annual sums.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .depreciation import (
    DepreciationSchedule,
    depreciation_tax_saving,
    generate_depreciation_schedule,
)
from .loan import calculate_annuity_payment, split_annual_payment
from ..models.financing import ProjectionConfig
from ..models.lookups import LoanType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionYearRecord:
    """Projection of a single year.

    Balances and equity reflect the start of the year; cashflows are
    monthly amounts during the year.
    """

    year: int

    # Loan
    remaining_principal: float
    annual_interest: float
    regular_principal: float
    extra_principal: float
    principal_paid: float
    equity_from_amortization: float
    total_equity: float

    # Rent and running costs (monthly, inflated)
    warm_rent: float
    service_charges: float
    calculative_costs: float

    # Cashflow before tax (monthly)
    cashflow_pre_tax: float
    cashflow_pre_tax_without_extra: float

    # Tax (monthly)
    depreciation_annual: float
    depreciation_monthly: float
    taxable_cashflow: float
    tax: float  # Negative values are a tax benefit
    depreciation_tax_saving: float  # Annual tax saved by depreciation alone

    # Cashflow after tax (monthly)
    cashflow_after_tax: float
    cashflow_after_tax_without_extra: float

    # Running totals (annual sums, this year included)
    cumulative_cashflow_pre_tax: float
    cumulative_cashflow_pre_tax_without_extra: float
    cumulative_cashflow_after_tax: float
    cumulative_cashflow_after_tax_without_extra: float

    # Sale (only when sale modeling is enabled)
    property_value: Optional[float] = None
    sale_costs: Optional[float] = None
    net_sale_proceeds: Optional[float] = None  # Value − sale costs − remaining principal

    @property
    def monthly_interest(self) -> float:
        return self.annual_interest / 12


@dataclass(frozen=True)
class ProjectionResult:
    """Ordered projection series with the run's fixed parameters.

    Behaves as a read-only sequence of ProjectionYearRecord with
    `horizon_years + 1` entries.
    """

    years: List[ProjectionYearRecord]
    original_principal: float
    initial_equity: float
    fixed_monthly_payment: float  # 0 for declining-balance loans
    depreciation_schedule: Optional[DepreciationSchedule] = None

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self) -> Iterator[ProjectionYearRecord]:
        return iter(self.years)

    def __getitem__(self, index):
        return self.years[index]

    @property
    def final_year(self) -> ProjectionYearRecord:
        return self.years[-1]

    def get_year(self, year: int) -> ProjectionYearRecord:
        """Get the record for a calendar year."""
        for record in self.years:
            if record.year == year:
                return record
        raise IndexError(f"Year {year} not in projection")


def _annual_depreciation(
    config: ProjectionConfig,
    schedule: Optional[DepreciationSchedule],
    year_index: int,
) -> float:
    if schedule is not None:
        return schedule[year_index].total_amount
    if year_index < config.legacy_depreciation_years:
        return config.legacy_annual_depreciation
    return 0.0


def project_cashflows(config: ProjectionConfig) -> ProjectionResult:
    """Project loan balance, cashflows, tax and equity year by year.

    For each year index i in 0..horizon:
    1. Rent inflates with the rent rate, service charges and calculative
       costs with the cost rate: x × (1 + p/100)^i.
    2. Interest = balance × rate (simple, on the start-of-year balance).
    3. Principal from the annuity payment or the declining-balance rate,
       plus the extra annual repayment, capped at the balance.
    4. Cashflow before tax = rent − service charges − calculative costs −
       interest − principal, with and without the extra repayment.
    5. Taxable cashflow = rent − service charges − interest − depreciation.
       Calculative costs are not tax deductible and stay out of the base.
    6. Tax = taxable cashflow × marginal rate, the same for both variants.
    7. The record shows the start-of-year balance; the principal paid is
       deducted afterwards.

    Args:
        config: Complete projection inputs.

    Returns:
        ProjectionResult with `horizon_years + 1` records.

    Example:
        >>> result = project_cashflows(ProjectionConfig(
        ...     loan=LoanProjectionInput(
        ...         loan_principal=300_000,
        ...         interest_rate_percent=3.5,
        ...         amortization_rate_percent=2.0,
        ...         loan_type=LoanType.DECLINING_BALANCE,
        ...         horizon_years=1,
        ...     ),
        ... ))
        >>> round(result[0].annual_interest, 2), round(result[0].regular_principal, 2)
        (10500.0, 6000.0)
    """
    loan = config.loan
    rent_costs = config.rent_costs
    horizon = loan.horizon_years

    original_principal = max(0.0, loan.loan_principal)
    remaining = original_principal

    fixed_monthly_payment = 0.0
    if loan.loan_type == LoanType.ANNUITY:
        fixed_monthly_payment = calculate_annuity_payment(
            principal=original_principal,
            interest_rate_percent=loan.interest_rate_percent,
            horizon_years=horizon,
        )

    schedule: Optional[DepreciationSchedule] = None
    if config.uses_depreciation_schedule:
        schedule = generate_depreciation_schedule(config.depreciation, horizon + 1)
        logger.debug("Using depreciation schedule (%s)", config.depreciation.model.value)
    else:
        logger.debug(
            "Using flat depreciation of %.2f for %d years",
            config.legacy_annual_depreciation,
            config.legacy_depreciation_years,
        )

    tax_rate = config.tax.marginal_tax_rate_percent / 100
    rent_growth = 1 + rent_costs.rent_inflation_percent / 100
    cost_growth = 1 + rent_costs.cost_inflation_percent / 100

    cumulative_pre_tax = 0.0
    cumulative_pre_tax_without_extra = 0.0
    cumulative_after_tax = 0.0
    cumulative_after_tax_without_extra = 0.0

    years: List[ProjectionYearRecord] = []

    for i in range(horizon + 1):
        # Rent and costs
        warm_rent = rent_costs.base_warm_rent * rent_growth ** i
        service_charges = rent_costs.service_charges * cost_growth ** i
        calculative_costs = rent_costs.calculative_costs * cost_growth ** i

        # Debt service
        split = split_annual_payment(
            balance=remaining,
            interest_rate_percent=loan.interest_rate_percent,
            amortization_rate_percent=loan.amortization_rate_percent,
            loan_type=loan.loan_type,
            fixed_monthly_payment=fixed_monthly_payment,
            extra_annual_principal=loan.extra_annual_principal,
        )
        monthly_interest = split.annual_interest / 12

        # Cashflow before tax
        operating = warm_rent - service_charges - calculative_costs - monthly_interest
        cashflow_pre_tax = operating - split.principal_paid / 12
        cashflow_pre_tax_without_extra = operating - split.principal_paid_without_extra / 12

        # Tax
        depreciation_annual = _annual_depreciation(config, schedule, i)
        depreciation_monthly = depreciation_annual / 12
        taxable_cashflow = warm_rent - service_charges - monthly_interest - depreciation_monthly
        tax = taxable_cashflow * tax_rate

        cashflow_after_tax = cashflow_pre_tax - tax
        cashflow_after_tax_without_extra = cashflow_pre_tax_without_extra - tax

        cumulative_pre_tax += cashflow_pre_tax * 12
        cumulative_pre_tax_without_extra += cashflow_pre_tax_without_extra * 12
        cumulative_after_tax += cashflow_after_tax * 12
        cumulative_after_tax_without_extra += cashflow_after_tax_without_extra * 12

        # Equity
        equity_from_amortization = original_principal - remaining
        total_equity = loan.equity + equity_from_amortization

        # Sale
        property_value = None
        sale_costs = None
        net_sale_proceeds = None
        if config.sale is not None:
            property_value = (
                config.sale.initial_property_value
                * (1 + config.sale.annual_appreciation_percent / 100) ** i
            )
            sale_costs = property_value * config.sale.sale_cost_percent / 100
            net_sale_proceeds = property_value - sale_costs - remaining

        years.append(ProjectionYearRecord(
            year=config.start_year + i,
            remaining_principal=remaining,
            annual_interest=split.annual_interest,
            regular_principal=split.regular_principal,
            extra_principal=split.extra_principal,
            principal_paid=split.principal_paid,
            equity_from_amortization=equity_from_amortization,
            total_equity=total_equity,
            warm_rent=warm_rent,
            service_charges=service_charges,
            calculative_costs=calculative_costs,
            cashflow_pre_tax=cashflow_pre_tax,
            cashflow_pre_tax_without_extra=cashflow_pre_tax_without_extra,
            depreciation_annual=depreciation_annual,
            depreciation_monthly=depreciation_monthly,
            taxable_cashflow=taxable_cashflow,
            tax=tax,
            depreciation_tax_saving=depreciation_tax_saving(
                depreciation_annual, config.tax.marginal_tax_rate_percent
            ),
            cashflow_after_tax=cashflow_after_tax,
            cashflow_after_tax_without_extra=cashflow_after_tax_without_extra,
            cumulative_cashflow_pre_tax=cumulative_pre_tax,
            cumulative_cashflow_pre_tax_without_extra=cumulative_pre_tax_without_extra,
            cumulative_cashflow_after_tax=cumulative_after_tax,
            cumulative_cashflow_after_tax_without_extra=cumulative_after_tax_without_extra,
            property_value=property_value,
            sale_costs=sale_costs,
            net_sale_proceeds=net_sale_proceeds,
        ))

        # Balance carried into next year
        if remaining > 0 and remaining - split.principal_paid <= 0:
            logger.debug("Loan fully repaid in %d", config.start_year + i)
        remaining = max(0.0, remaining - split.principal_paid)

    return ProjectionResult(
        years=years,
        original_principal=original_principal,
        initial_equity=loan.equity,
        fixed_monthly_payment=fixed_monthly_payment,
        depreciation_schedule=schedule,
    )
