"""Nitrogen balance calculations for agricultural fields and farms.

This package computes a field- and farm-level nitrogen mass balance from
fertilizer applications, cultivations, harvests and soil analyses:
supply (fertilizers, fixation, deposition, mineralization), removal
(harvests) and emission (ammonia, nitrate).

Subpackages:
- nbalance.core: Configuration, decimals, errors and raster access
- nbalance.data: Input records, soil merging and input collection
- nbalance.nitrogen: Calculators and the balance aggregator
"""

# Re-export common items for convenience
from nbalance.core import NitrogenBalanceError, RasterCache, settings
from nbalance.data import (
    Catalogue,
    Cultivation,
    CultivationDetail,
    FertilizerApplication,
    FertilizerDetail,
    Field,
    FieldInput,
    Harvest,
    HarvestableAnalysis,
    NitrogenBalanceInput,
    SoilAnalysis,
    TimeFrame,
    collect_input_for_nitrogen_balance,
)
from nbalance.nitrogen import (
    NitrogenBalance,
    calculate_nitrogen_balance,
    calculate_nitrogen_balance_field,
    convert_balance_to_numeric,
)

__all__ = [
    "settings",
    "RasterCache",
    "NitrogenBalanceError",
    "Field",
    "Cultivation",
    "Harvest",
    "HarvestableAnalysis",
    "FertilizerApplication",
    "FertilizerDetail",
    "CultivationDetail",
    "SoilAnalysis",
    "Catalogue",
    "TimeFrame",
    "FieldInput",
    "NitrogenBalanceInput",
    "collect_input_for_nitrogen_balance",
    "NitrogenBalance",
    "calculate_nitrogen_balance",
    "calculate_nitrogen_balance_field",
    "convert_balance_to_numeric",
]

__version__ = "0.1.0"
