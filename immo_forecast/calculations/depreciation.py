"""Tax depreciation (AfA) schedule for residential buildings.

Implements the year-by-year depreciation of the building value under the
linear 2%, linear 3% and degressive 5% models, with the optional § 7b
special allowance on top. The degressive model switches to straight-line
once that yields at least as much (§ 7a Abs. 9 EStG); the switch year is
decided here and reported on the schedule.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..models.lookups import (
    DepreciationModel,
    DEPRECIATION_MODEL_PARAMS,
    ASSUMED_USEFUL_LIFE_YEARS,
    BOOK_VALUE_TOLERANCE,
    DEFAULT_HORIZON_YEARS,
    SPECIAL_ALLOWANCE_BASE_CAP_PER_SQM,
    SPECIAL_ALLOWANCE_RATE,
    SPECIAL_ALLOWANCE_YEARS,
)
from ..models.property import DepreciationParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepreciationYearRecord:
    """Depreciation of a single calendar year."""

    year: int
    linear_amount: float  # Main model amount (linear or degressive)
    special_amount: float  # § 7b special allowance
    total_amount: float
    remaining_book_value: float  # After this year's depreciation
    effective_rate_percent: float  # total_amount / building_value × 100
    cumulative_amount: float


@dataclass(frozen=True)
class DepreciationSchedule:
    """Ordered depreciation series plus the decisions behind it.

    Behaves as a read-only sequence of DepreciationYearRecord.
    """

    years: List[DepreciationYearRecord]
    building_value: float
    model: DepreciationModel
    special_allowance_base: float
    switch_year: Optional[int] = None  # Degressive → linear crossover year
    switch_book_value: Optional[float] = None  # Book value at the start of the switch year

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self) -> Iterator[DepreciationYearRecord]:
        return iter(self.years)

    def __getitem__(self, index):
        return self.years[index]

    @property
    def total_depreciation(self) -> float:
        """Depreciation claimed over the whole schedule."""
        return self.years[-1].cumulative_amount if self.years else 0.0

    @property
    def exhausted_year(self) -> Optional[int]:
        """First year after which the book value is zero, if within the schedule."""
        if self.building_value <= 0:
            return None
        for record in self.years:
            if record.remaining_book_value <= 0:
                return record.year
        return None

    def get_year(self, year: int) -> DepreciationYearRecord:
        """Get the record for a calendar year."""
        for record in self.years:
            if record.year == year:
                return record
        raise IndexError(f"Year {year} not in depreciation schedule")


def _zero_record(year: int, cumulative_amount: float = 0.0) -> DepreciationYearRecord:
    return DepreciationYearRecord(
        year=year,
        linear_amount=0.0,
        special_amount=0.0,
        total_amount=0.0,
        remaining_book_value=0.0,
        effective_rate_percent=0.0,
        cumulative_amount=cumulative_amount,
    )


def generate_depreciation_schedule(
    params: DepreciationParams,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> DepreciationSchedule:
    """Generate the year-by-year depreciation schedule.

    Per year:
    1. Special allowance: 5% of min(4,000 × m², building value) in the
       first four years, capped at the remaining book value.
    2. Main amount: 2% / 3% of the building value, or 5% of the remaining
       book value until straight-line over the remaining useful life
       (33 − year index) is at least as large; that linear amount is then
       frozen for all later years.
    3. Main + special is capped at the remaining book value; both parts
       are scaled down by the same factor when the cap applies. A year
       within BOOK_VALUE_TOLERANCE of the remaining book value exhausts it.

    Amounts are kept at full precision. Once the book value reaches zero
    all later years are zero records.

    Args:
        params: Depreciation inputs.
        horizon_years: Number of years to generate.

    Returns:
        DepreciationSchedule with exactly `horizon_years` records.

    Example:
        >>> schedule = generate_depreciation_schedule(DepreciationParams(
        ...     purchase_price=400_000,
        ...     land_value=80_000,
        ...     living_area=100,
        ...     model=DepreciationModel.DEGRESSIVE_5,
        ...     start_year=2024,
        ... ))
        >>> schedule[0].total_amount
        16000.0
        >>> len(schedule)
        30
    """
    if horizon_years < 0:
        raise ValueError(f"Horizon must not be negative, got {horizon_years}")

    building_value = params.building_value
    start_year = params.start_year

    if building_value <= 0:
        return DepreciationSchedule(
            years=[_zero_record(start_year + i) for i in range(horizon_years)],
            building_value=0.0,
            model=params.model,
            special_allowance_base=0.0,
        )

    special_base = (
        min(SPECIAL_ALLOWANCE_BASE_CAP_PER_SQM * params.living_area, building_value)
        if params.use_special_allowance
        else 0.0
    )
    model_params = DEPRECIATION_MODEL_PARAMS[params.model]
    model_rate = model_params.rate

    years: List[DepreciationYearRecord] = []
    remaining = building_value
    cumulative = 0.0

    switched = False
    frozen_linear_amount = 0.0
    switch_year: Optional[int] = None
    switch_book_value: Optional[float] = None

    for i in range(horizon_years):
        year = start_year + i

        if remaining <= 0:
            years.append(_zero_record(year, cumulative))
            continue

        special_amount = 0.0
        if params.use_special_allowance and i < SPECIAL_ALLOWANCE_YEARS:
            special_amount = min(special_base * SPECIAL_ALLOWANCE_RATE, remaining)

        if model_params.on_book_value:
            if not switched:
                candidate_degressive = remaining * model_rate
                candidate_linear = remaining / max(1, ASSUMED_USEFUL_LIFE_YEARS - i)
                if candidate_linear >= candidate_degressive:
                    switched = True
                    frozen_linear_amount = candidate_linear
                    switch_year = year
                    switch_book_value = remaining
                    logger.debug(
                        "Degressive depreciation switches to linear in %d at %.2f per year",
                        year,
                        candidate_linear,
                    )
            main_amount = frozen_linear_amount if switched else remaining * model_rate
        else:
            main_amount = building_value * model_rate

        # Cap at the remaining book value, keeping the ratio of both parts
        unclamped = main_amount + special_amount
        if unclamped >= remaining or math.isclose(unclamped, remaining, abs_tol=BOOK_VALUE_TOLERANCE):
            factor = remaining / unclamped
            main_amount *= factor
            special_amount *= factor
            total = remaining
            cumulative = building_value
            remaining = 0.0
        else:
            total = unclamped
            cumulative += total
            remaining = max(0.0, building_value - cumulative)

        years.append(DepreciationYearRecord(
            year=year,
            linear_amount=main_amount,
            special_amount=special_amount,
            total_amount=total,
            remaining_book_value=remaining,
            effective_rate_percent=total / building_value * 100,
            cumulative_amount=cumulative,
        ))

        if remaining <= 0:
            logger.debug("Building value of %.2f fully depreciated in %d", building_value, year)

    return DepreciationSchedule(
        years=years,
        building_value=building_value,
        model=params.model,
        special_allowance_base=special_base,
        switch_year=switch_year,
        switch_book_value=switch_book_value,
    )


def optimal_switch_year(building_value: float, start_year: int) -> Optional[int]:
    """Year in which plain degressive depreciation switches to linear.

    Reads the decision from the schedule generator so there is a single
    crossover rule.

    Args:
        building_value: Depreciable base.
        start_year: First depreciation year.

    Returns:
        Calendar year of the switch, or None without a building value.
    """
    if building_value <= 0:
        return None
    schedule = generate_depreciation_schedule(
        DepreciationParams(
            purchase_price=building_value,
            land_value=0.0,
            living_area=0.0,
            model=DepreciationModel.DEGRESSIVE_5,
            start_year=start_year,
        ),
        horizon_years=ASSUMED_USEFUL_LIFE_YEARS,
    )
    return schedule.switch_year


def depreciation_tax_saving(depreciation_amount: float, marginal_tax_rate_percent: float) -> float:
    """Income tax saved by a depreciation amount at the marginal rate."""
    return depreciation_amount * (marginal_tax_rate_percent / 100)
