"""Data models for the property purchase forecast engine."""

from .lookups import (
    DepreciationModel,
    DepreciationModelParams,
    PropertyType,
    EnergyStandard,
    LoanType,
    DEPRECIATION_MODEL_PARAMS,
    DEFAULT_PURCHASE_COST_RATES,
)
from .property import (
    EligibilityFacts,
    DepreciationParams,
)
from .financing import (
    LoanProjectionInput,
    RentCostInput,
    TaxInput,
    SaleInput,
    ProjectionConfig,
)

__all__ = [
    "DepreciationModel",
    "DepreciationModelParams",
    "PropertyType",
    "EnergyStandard",
    "LoanType",
    "DEPRECIATION_MODEL_PARAMS",
    "DEFAULT_PURCHASE_COST_RATES",
    "EligibilityFacts",
    "DepreciationParams",
    "LoanProjectionInput",
    "RentCostInput",
    "TaxInput",
    "SaleInput",
    "ProjectionConfig",
]
