"""Property facts and depreciation parameters."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .lookups import DepreciationModel, EnergyStandard, PropertyType


def coerce_enum(instance, field_name: str, enum_cls):
    """Convert a raw string field of a frozen dataclass into its enum member.

    Raises:
        ValueError: If the value is not a member of the enum.
    """
    value = getattr(instance, field_name)
    if isinstance(value, enum_cls):
        return
    try:
        member = enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"Unrecognized {field_name} {value!r}; expected one of: {allowed}"
        ) from None
    object.__setattr__(instance, field_name, member)


@dataclass(frozen=True)
class EligibilityFacts:
    """Legal and physical facts that decide which depreciation models apply."""

    property_type: PropertyType
    purchase_date: date
    construction_application_date: Optional[date] = None
    energy_standard: Optional[EnergyStandard] = None
    has_quality_seal: bool = False  # QNG seal
    purchase_price: float = 0.0
    living_area: float = 0.0  # m²

    def __post_init__(self) -> None:
        coerce_enum(self, "property_type", PropertyType)
        if self.energy_standard is not None:
            coerce_enum(self, "energy_standard", EnergyStandard)
        if self.living_area < 0:
            raise ValueError(f"Living area must not be negative, got {self.living_area}")

    @property
    def relevant_application_date(self) -> date:
        """Construction application date, falling back to the purchase date."""
        return self.construction_application_date or self.purchase_date


@dataclass(frozen=True)
class DepreciationParams:
    """Inputs for the depreciation schedule.

    The depreciable base is the building value, i.e. the purchase price
    minus the (non-depreciable) land value.
    """

    purchase_price: float
    land_value: float
    living_area: float
    model: DepreciationModel
    use_special_allowance: bool = False
    start_year: int = 2025

    def __post_init__(self) -> None:
        coerce_enum(self, "model", DepreciationModel)
        if self.living_area < 0:
            raise ValueError(f"Living area must not be negative, got {self.living_area}")

    @property
    def building_value(self) -> float:
        """Depreciable base: purchase price minus land value, floored at zero."""
        return max(0.0, self.purchase_price - self.land_value)
