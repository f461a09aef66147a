"""Purchase cost, yield, coverage and scoring KPIs.

These are the scalar figures read by dashboards and commentary generators:
incidental purchase costs, gross and net rental yield, debt-service
coverage, break-even and a weighted 0-100 investment score.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..models.lookups import DEFAULT_PURCHASE_COST_RATES


@dataclass(frozen=True)
class PurchaseCosts:
    """Incidental purchase costs, each rounded to whole currency units."""

    land_transfer_tax: float
    notary: float
    broker: float

    @property
    def total(self) -> float:
        return self.land_transfer_tax + self.notary + self.broker


def _round_half_up(value: float) -> float:
    # Halves round up, not to even
    return float(math.floor(value + 0.5))


def calculate_purchase_costs(
    purchase_price: float,
    land_transfer_tax_pct: float = DEFAULT_PURCHASE_COST_RATES["land_transfer_tax"],
    notary_pct: float = DEFAULT_PURCHASE_COST_RATES["notary"],
    broker_pct: float = DEFAULT_PURCHASE_COST_RATES["broker"],
) -> PurchaseCosts:
    """Calculate incidental purchase costs from percentage rates.

    Args:
        purchase_price: Purchase price.
        land_transfer_tax_pct: Land transfer tax in percent.
        notary_pct: Notary and land registry in percent.
        broker_pct: Broker commission in percent.

    Returns:
        PurchaseCosts with each component and the total.
    """
    return PurchaseCosts(
        land_transfer_tax=_round_half_up(land_transfer_tax_pct / 100 * purchase_price),
        notary=_round_half_up(notary_pct / 100 * purchase_price),
        broker=_round_half_up(broker_pct / 100 * purchase_price),
    )


def calculate_gross_rental_yield(monthly_cold_rent: float, purchase_price: float) -> float:
    """Annual cold rent as a percentage of the purchase price."""
    if purchase_price <= 0:
        return 0.0
    return monthly_cold_rent * 12 / purchase_price * 100


def calculate_net_rental_yield(
    monthly_cold_rent: float,
    monthly_non_recoverable_costs: float,
    purchase_price: float,
    purchase_costs: Optional[PurchaseCosts] = None,
) -> float:
    """Net rental yield in percent of the total investment.

    Net yield = (annual rent − annual non-recoverable costs) /
    (purchase price + incidental costs) × 100

    Args:
        monthly_cold_rent: Monthly cold rent.
        monthly_non_recoverable_costs: Monthly costs the landlord bears.
        purchase_price: Purchase price.
        purchase_costs: Incidental costs; defaults to the standard rates.

    Returns:
        Net yield in percent, 0 without an investment.
    """
    if purchase_costs is None:
        purchase_costs = calculate_purchase_costs(purchase_price)
    investment = purchase_price + purchase_costs.total
    if investment <= 0:
        return 0.0
    annual_net = (monthly_cold_rent - monthly_non_recoverable_costs) * 12
    return annual_net / investment * 100


def calculate_dscr(annual_net_operating_income: float, annual_debt_service: float) -> float:
    """Debt-service coverage ratio: NOI / (interest + principal)."""
    if annual_debt_service <= 0:
        return 0.0
    return annual_net_operating_income / annual_debt_service


def calculate_break_even_years(equity: float, monthly_after_tax_cashflow: float) -> float:
    """Years until the after-tax cashflow has paid back the equity."""
    if monthly_after_tax_cashflow <= 0:
        return math.inf
    return equity / (monthly_after_tax_cashflow * 12)


def calculate_investment_score(
    net_yield_percent: float,
    monthly_cashflow: float,
    equity: float,
    annual_debt_service: float,
    break_even_years: float,
) -> int:
    """Weighted 0-100 score from yield, cash-on-equity, DSCR and break-even.

    Component scores, each capped at 100:
    - Net yield: 10% = 100 points (weight 0.4)
    - Annual cashflow / equity: 5% = 100 points (weight 0.3)
    - Annual cashflow / debt service: 2.0 = 100 points (weight 0.2)
    - Break-even: ≤5 years = 100, ≥20 years = 0, linear between (weight 0.1)

    Args:
        net_yield_percent: Net rental yield in percent (e.g., 4.5).
        monthly_cashflow: Monthly cashflow.
        equity: Equity invested.
        annual_debt_service: Annual interest + principal.
        break_even_years: Years to recover the equity.

    Returns:
        Integer score between 0 and 100.
    """
    yield_score = min(net_yield_percent / 10, 1) * 100

    equity_return = monthly_cashflow * 12 / equity if equity > 0 else 0.0
    equity_score = min(equity_return / 0.05, 1) * 100

    coverage = monthly_cashflow * 12 / annual_debt_service if annual_debt_service > 0 else 0.0
    coverage_score = min(coverage / 2, 1) * 100

    if break_even_years <= 5:
        break_even_norm = 1.0
    elif break_even_years >= 20:
        break_even_norm = 0.0
    else:
        break_even_norm = 1 - (break_even_years - 5) / 15
    break_even_score = break_even_norm * 100

    total = (
        0.4 * yield_score
        + 0.3 * equity_score
        + 0.2 * coverage_score
        + 0.1 * break_even_score
    )
    return round(max(0.0, min(100.0, total)))
