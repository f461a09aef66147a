#!/usr/bin/env python3
"""Example script to run a property purchase forecast with sample inputs."""

import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from immo_forecast.models.lookups import (
    DepreciationModel,
    EnergyStandard,
    LoanType,
    PropertyType,
    DEPRECIATION_MODEL_PARAMS,
    get_first_year_rate_percent,
)
from immo_forecast.models.property import DepreciationParams, EligibilityFacts
from immo_forecast.models.financing import (
    LoanProjectionInput,
    ProjectionConfig,
    RentCostInput,
    SaleInput,
    TaxInput,
)
from immo_forecast.calculations.eligibility import evaluate_eligibility, default_depreciation_model
from immo_forecast.calculations.depreciation import generate_depreciation_schedule
from immo_forecast.calculations.projection import project_cashflows
from immo_forecast.calculations.metrics import (
    summarize_depreciation,
    summarize_projection,
    format_projection_table,
)
from immo_forecast.calculations.kpis import (
    calculate_purchase_costs,
    calculate_net_rental_yield,
    calculate_break_even_years,
    calculate_investment_score,
)
from immo_forecast.export.report import ReportConfig, generate_projection_excel

PURCHASE_PRICE = 420_000
LAND_VALUE = 95_000
LIVING_AREA = 92
MARGINAL_TAX_RATE = 42.0
START_YEAR = 2025


def get_sample_facts() -> EligibilityFacts:
    """EH40 new-build apartment with QNG seal."""
    return EligibilityFacts(
        property_type=PropertyType.NEW_BUILD,
        purchase_date=date(2025, 4, 1),
        construction_application_date=date(2024, 11, 15),
        energy_standard=EnergyStandard.EH40,
        has_quality_seal=True,
        purchase_price=PURCHASE_PRICE,
        living_area=LIVING_AREA,
    )


def get_sample_config(model: DepreciationModel, use_special_allowance: bool) -> ProjectionConfig:
    """Annuity-financed purchase, rented out from the first year."""
    return ProjectionConfig(
        loan=LoanProjectionInput(
            loan_principal=340_000,
            equity=80_000 + calculate_purchase_costs(PURCHASE_PRICE).total,
            interest_rate_percent=3.6,
            loan_type=LoanType.ANNUITY,
            extra_annual_principal=2_000,
            horizon_years=30,
        ),
        rent_costs=RentCostInput(
            base_warm_rent=1_480.0,
            service_charges=340.0,
            calculative_costs=95.0,
            rent_inflation_percent=2.0,
            cost_inflation_percent=2.5,
        ),
        tax=TaxInput(marginal_tax_rate_percent=MARGINAL_TAX_RATE),
        sale=SaleInput(
            initial_property_value=PURCHASE_PRICE,
            annual_appreciation_percent=1.5,
            sale_cost_percent=7.0,
        ),
        depreciation=DepreciationParams(
            purchase_price=PURCHASE_PRICE,
            land_value=LAND_VALUE,
            living_area=LIVING_AREA,
            model=model,
            use_special_allowance=use_special_allowance,
            start_year=START_YEAR,
        ),
        start_year=START_YEAR,
    )


def run_forecast(excel_path=None):
    """Run eligibility, depreciation and cashflow projection."""
    print("\n" + "=" * 60)
    print("PROPERTY PURCHASE FORECAST")
    print("=" * 60 + "\n")

    facts = get_sample_facts()
    eligibility = evaluate_eligibility(facts)

    print("Depreciation options:")
    for model in DepreciationModel:
        status = "yes" if eligibility.is_model_eligible(model) else "no"
        first_year = get_first_year_rate_percent(model, eligibility.special_allowance)
        print(f"  {DEPRECIATION_MODEL_PARAMS[model].label:<38} {status:<4} year 1: {first_year:.0f}%")
    print(f"  {'Special allowance (7b)':<38} {'yes' if eligibility.special_allowance else 'no'}")
    for name, reason in eligibility.reasons.items():
        print(f"    {name}: {reason}")

    model = default_depreciation_model(facts)
    config = get_sample_config(model, eligibility.special_allowance)

    schedule = generate_depreciation_schedule(config.depreciation, config.horizon_years)
    depreciation_summary = summarize_depreciation(schedule, MARGINAL_TAX_RATE)

    print(f"\nModel: {model.value}  (special allowance: {eligibility.special_allowance})")
    print(f"{'Total depreciation':<30} {depreciation_summary.total_depreciation:>14,.0f}")
    print(f"{'Tax saving':<30} {depreciation_summary.total_tax_saving:>14,.0f}")
    print(f"{'Year-1 rate':<30} {depreciation_summary.first_year_rate_percent:>13.2f}%")
    print(f"{'Switch to linear':<30} {depreciation_summary.switch_year or '-':>14}")

    result = project_cashflows(config)
    projection_summary = summarize_projection(result, PURCHASE_PRICE)

    print("\n" + format_projection_table(result))

    print(f"\n{'Half of loan repaid':<30} {projection_summary.half_debt_year or '-':>14}")
    print(f"{'Self-financed':<30} {projection_summary.self_financed_year or '-':>14}")
    print(f"{'First positive cashflow':<30} {projection_summary.first_positive_cashflow_year or '-':>14}")
    print(f"{'Sale break-even':<30} {projection_summary.sale_break_even_year or '-':>14}")
    for scenario in projection_summary.sale_scenarios:
        print(f"{'Sale result ' + str(scenario.year):<30} {scenario.total_result:>14,.0f}")

    # Year-1 KPIs
    first = result[0]
    costs = calculate_purchase_costs(PURCHASE_PRICE)
    net_yield = calculate_net_rental_yield(
        first.warm_rent - first.service_charges,
        first.calculative_costs,
        PURCHASE_PRICE,
        costs,
    )
    break_even = calculate_break_even_years(result.initial_equity, first.cashflow_after_tax)
    score = calculate_investment_score(
        net_yield_percent=net_yield,
        monthly_cashflow=first.cashflow_after_tax,
        equity=result.initial_equity,
        annual_debt_service=first.annual_interest + first.principal_paid,
        break_even_years=break_even,
    )

    print(f"\n{'Purchase costs':<30} {costs.total:>14,.0f}")
    print(f"{'Net yield':<30} {net_yield:>13.2f}%")
    print(f"{'Investment score':<30} {score:>14d}")

    if excel_path:
        content = generate_projection_excel(
            result,
            ReportConfig(property_name="Sample new build"),
            depreciation_summary=depreciation_summary,
            projection_summary=projection_summary,
        )
        Path(excel_path).write_bytes(content)
        print(f"\nExcel report written to {excel_path}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Property Purchase Forecast")
    parser.add_argument(
        "--excel",
        metavar="PATH",
        help="Write an Excel report to PATH",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging of the calculation steps",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    run_forecast(args.excel)

    print("\nDone.")


if __name__ == "__main__":
    main()
