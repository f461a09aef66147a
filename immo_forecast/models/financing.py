"""Financing, rent, tax and sale inputs for the cashflow projection."""

from dataclasses import dataclass, field
from typing import Optional

from .lookups import LoanType, LEGACY_DEPRECIATION_YEARS, DEFAULT_HORIZON_YEARS
from .property import DepreciationParams, coerce_enum


@dataclass(frozen=True)
class LoanProjectionInput:
    """Loan terms and projection horizon."""

    loan_principal: float
    equity: float = 0.0
    interest_rate_percent: float = 0.0
    amortization_rate_percent: float = 0.0  # Initial repayment rate, declining balance only
    loan_type: LoanType = LoanType.ANNUITY
    extra_annual_principal: float = 0.0  # Voluntary repayment per year
    horizon_years: int = DEFAULT_HORIZON_YEARS

    def __post_init__(self) -> None:
        coerce_enum(self, "loan_type", LoanType)
        if self.horizon_years < 0:
            raise ValueError(f"Horizon must not be negative, got {self.horizon_years}")


@dataclass(frozen=True)
class RentCostInput:
    """Monthly rent and running costs with their annual inflation rates."""

    base_warm_rent: float = 0.0  # Cold rent + recoverable advance payments
    service_charges: float = 0.0  # Hausgeld, recoverable and non-recoverable
    calculative_costs: float = 0.0  # Maintenance reserve + vacancy allowance
    rent_inflation_percent: float = 0.0
    cost_inflation_percent: float = 0.0


@dataclass(frozen=True)
class TaxInput:
    """Personal income tax situation."""

    marginal_tax_rate_percent: float = 0.0


@dataclass(frozen=True)
class SaleInput:
    """Property value development and sale economics."""

    initial_property_value: float
    annual_appreciation_percent: float = 0.0
    sale_cost_percent: float = 0.0


@dataclass(frozen=True)
class ProjectionConfig:
    """Complete input for a cashflow projection run.

    Depreciation comes from exactly one source: the full schedule when
    `depreciation` is given, otherwise the flat `legacy_annual_depreciation`
    for the first `legacy_depreciation_years` years.
    """

    loan: LoanProjectionInput
    rent_costs: RentCostInput = field(default_factory=RentCostInput)
    tax: TaxInput = field(default_factory=TaxInput)
    sale: Optional[SaleInput] = None
    depreciation: Optional[DepreciationParams] = None
    legacy_annual_depreciation: float = 0.0
    legacy_depreciation_years: int = LEGACY_DEPRECIATION_YEARS
    start_year: int = 2025

    def __post_init__(self) -> None:
        if self.legacy_depreciation_years < 0:
            raise ValueError(
                f"Legacy depreciation duration must not be negative, got {self.legacy_depreciation_years}"
            )
        # Depreciation years are paired with projection years by index
        if self.depreciation is not None and self.depreciation.start_year != self.start_year:
            raise ValueError(
                f"Depreciation start year {self.depreciation.start_year} does not match "
                f"projection start year {self.start_year}"
            )

    @property
    def horizon_years(self) -> int:
        return self.loan.horizon_years

    @property
    def uses_depreciation_schedule(self) -> bool:
        """True when the full depreciation schedule drives the tax base."""
        return self.depreciation is not None
