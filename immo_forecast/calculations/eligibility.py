"""Eligibility of a property for the depreciation models and the special allowance.

Encodes the German rules for residential buildings:

- § 7 Abs. 4 EStG: linear 2% always, linear 3% for purchases from 2023
- § 7 Abs. 5a EStG: degressive 5% for new builds whose construction
  application falls between 10/2023 and 09/2029
- § 7b EStG: special allowance of 5% for four years, on top of the main
  model, for EH40 new builds with a QNG seal and a purchase price of at
  most 5,200 per m²
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..models.lookups import (
    DepreciationModel,
    EnergyStandard,
    PropertyType,
    DEGRESSIVE_WINDOW,
    LINEAR_3_FIRST_PURCHASE_YEAR,
    SPECIAL_ALLOWANCE_COST_CEILING_PER_SQM,
)
from ..models.property import EligibilityFacts


REASON_PURCHASED_BEFORE_2023 = (
    f"Linear 3% requires a purchase in {LINEAR_3_FIRST_PURCHASE_YEAR} or later"
)
REASON_NOT_NEW_BUILD = "Only available for new builds"
REASON_WINDOW_MISSED = (
    "Construction application must fall between "
    f"{DEGRESSIVE_WINDOW[0]:%m/%Y} and 09/{DEGRESSIVE_WINDOW[1].year}"
)
REASON_NO_EH40 = "Requires the EH40 efficiency house standard"
REASON_NO_QUALITY_SEAL = "Requires the QNG quality seal"
REASON_OVER_COST_CEILING = (
    f"Purchase price exceeds {SPECIAL_ALLOWANCE_COST_CEILING_PER_SQM:,.0f} per m²"
)


@dataclass(frozen=True)
class EligibilityResult:
    """Which depreciation options are legally available.

    Every False flag carries exactly one reason; True flags carry None.
    """

    linear_2: bool
    linear_3: bool
    degressive_5: bool
    special_allowance: bool

    linear_3_reason: Optional[str] = None
    degressive_5_reason: Optional[str] = None
    special_allowance_reason: Optional[str] = None

    @property
    def reasons(self) -> Dict[str, str]:
        """Ineligibility reasons keyed by option name."""
        candidates = {
            "linear_3": self.linear_3_reason,
            "degressive_5": self.degressive_5_reason,
            "special_allowance": self.special_allowance_reason,
        }
        return {name: reason for name, reason in candidates.items() if reason is not None}

    def is_model_eligible(self, model: DepreciationModel) -> bool:
        """Check a single depreciation model."""
        return getattr(self, model.value)


def is_in_degressive_window(facts: EligibilityFacts) -> bool:
    """Check the construction application date against the half-open window."""
    start, end = DEGRESSIVE_WINDOW
    return start <= facts.relevant_application_date < end


def cost_per_sqm(purchase_price: float, living_area: float) -> float:
    """Purchase price per m²; infinite for a zero living area."""
    if living_area <= 0:
        return float("inf")
    return purchase_price / living_area


def evaluate_eligibility(facts: EligibilityFacts) -> EligibilityResult:
    """Determine which depreciation models and the special allowance apply.

    Preconditions of the special allowance are checked in a fixed order and
    only the first failing one is reported: not a new build → window missed
    → no EH40 → no QNG seal → over the cost ceiling.

    Args:
        facts: Legal and physical facts about the property.

    Returns:
        EligibilityResult with flags and ineligibility reasons.

    Example:
        >>> result = evaluate_eligibility(EligibilityFacts(
        ...     property_type=PropertyType.NEW_BUILD,
        ...     purchase_date=date(2024, 3, 1),
        ...     construction_application_date=date(2024, 1, 15),
        ...     energy_standard=EnergyStandard.EH40,
        ...     has_quality_seal=True,
        ...     purchase_price=400_000,
        ...     living_area=100,
        ... ))
        >>> result.special_allowance
        True
    """
    # Linear 3%
    linear_3 = facts.purchase_date.year >= LINEAR_3_FIRST_PURCHASE_YEAR
    linear_3_reason = None if linear_3 else REASON_PURCHASED_BEFORE_2023

    # Degressive 5%
    is_new_build = facts.property_type == PropertyType.NEW_BUILD
    in_window = is_in_degressive_window(facts)
    if not is_new_build:
        degressive_5_reason = REASON_NOT_NEW_BUILD
    elif not in_window:
        degressive_5_reason = REASON_WINDOW_MISSED
    else:
        degressive_5_reason = None
    degressive_5 = degressive_5_reason is None

    # Special allowance builds on the degressive preconditions
    if degressive_5_reason is not None:
        special_reason = degressive_5_reason
    elif facts.energy_standard != EnergyStandard.EH40:
        special_reason = REASON_NO_EH40
    elif not facts.has_quality_seal:
        special_reason = REASON_NO_QUALITY_SEAL
    elif cost_per_sqm(facts.purchase_price, facts.living_area) > SPECIAL_ALLOWANCE_COST_CEILING_PER_SQM:
        special_reason = REASON_OVER_COST_CEILING
    else:
        special_reason = None

    return EligibilityResult(
        linear_2=True,
        linear_3=linear_3,
        degressive_5=degressive_5,
        special_allowance=special_reason is None,
        linear_3_reason=linear_3_reason,
        degressive_5_reason=degressive_5_reason,
        special_allowance_reason=special_reason,
    )


def default_depreciation_model(facts: EligibilityFacts) -> DepreciationModel:
    """Pick the most favourable eligible model for a property.

    Degressive 5% beats linear 3%, which beats linear 2%.
    """
    result = evaluate_eligibility(facts)
    if result.degressive_5:
        return DepreciationModel.DEGRESSIVE_5
    if result.linear_3:
        return DepreciationModel.LINEAR_3
    return DepreciationModel.LINEAR_2
