"""Lookup tables for depreciation models, statutory thresholds, and purchase costs."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Tuple


class DepreciationModel(Enum):
    """Depreciation (AfA) model applied to the building value."""

    LINEAR_2 = "linear_2"  # § 7 Abs. 4 EStG, buildings before 2023
    LINEAR_3 = "linear_3"  # § 7 Abs. 4 EStG, from 2023
    DEGRESSIVE_5 = "degressive_5"  # § 7 Abs. 5a EStG, new builds 10/2023 - 09/2029


class PropertyType(Enum):
    """Whether the property is an existing building or a new build."""

    EXISTING = "existing"
    NEW_BUILD = "newBuild"


class EnergyStandard(Enum):
    """KfW efficiency house standard."""

    EH40 = "EH40"
    EH55 = "EH55"
    NONE = "none"


class LoanType(Enum):
    """Repayment scheme of the purchase loan."""

    ANNUITY = "annuity"  # Fixed monthly payment over the horizon
    DECLINING_BALANCE = "decliningBalance"  # (interest + amortization) % of the balance


@dataclass(frozen=True)
class DepreciationModelParams:
    """Statutory parameters for a depreciation model."""

    rate: float  # Annual rate (0-1), on building value or remaining book value
    on_book_value: bool  # True if the rate applies to the remaining book value
    label: str


DEPRECIATION_MODEL_PARAMS: Dict[DepreciationModel, DepreciationModelParams] = {
    DepreciationModel.LINEAR_2: DepreciationModelParams(
        rate=0.02,
        on_book_value=False,
        label="Linear 2% (50 years)",
    ),
    DepreciationModel.LINEAR_3: DepreciationModelParams(
        rate=0.03,
        on_book_value=False,
        label="Linear 3% (33 years)",
    ),
    DepreciationModel.DEGRESSIVE_5: DepreciationModelParams(
        rate=0.05,
        on_book_value=True,
        label="Degressive 5% with switch to linear",
    ),
}

# Useful life underlying the ~3% straight-line rate; drives the crossover test
ASSUMED_USEFUL_LIFE_YEARS = 33

# Special allowance (§ 7b EStG)
SPECIAL_ALLOWANCE_RATE = 0.05
SPECIAL_ALLOWANCE_YEARS = 4
SPECIAL_ALLOWANCE_BASE_CAP_PER_SQM = 4000.0  # Max assessment base per m²
SPECIAL_ALLOWANCE_COST_CEILING_PER_SQM = 5200.0  # Max purchase price per m²

# Degressive depreciation window for the construction application, [start, end)
DEGRESSIVE_WINDOW: Tuple[date, date] = (date(2023, 10, 1), date(2029, 10, 1))

LINEAR_3_FIRST_PURCHASE_YEAR = 2023

# Book values within this distance of zero count as fully depreciated
BOOK_VALUE_TOLERANCE = 1e-6

# Legacy flat depreciation is only valid for the 2% life span
LEGACY_DEPRECIATION_YEARS = 50

DEFAULT_HORIZON_YEARS = 30
DEFAULT_SALE_SCENARIO_YEARS: Tuple[int, ...] = (10, 20, 30)


# Default incidental purchase costs (percent of purchase price)
DEFAULT_PURCHASE_COST_RATES: Dict[str, float] = {
    "land_transfer_tax": 6.5,
    "notary": 2.0,
    "broker": 3.57,
}


def get_depreciation_rate(model: DepreciationModel) -> float:
    """Get the nominal annual rate for a depreciation model.

    Args:
        model: Depreciation model.

    Returns:
        Annual rate as a decimal (e.g., 0.03 for 3%).
    """
    return DEPRECIATION_MODEL_PARAMS[model].rate


def get_first_year_rate_percent(model: DepreciationModel, use_special_allowance: bool) -> float:
    """Nominal first-year rate in percent, for display next to the model choice."""
    rate = get_depreciation_rate(model) * 100
    if use_special_allowance:
        rate += SPECIAL_ALLOWANCE_RATE * 100
    return rate
