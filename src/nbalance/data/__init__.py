"""Data modules - input records, soil merging, input collection."""

from nbalance.data.collect import DataAccess, collect_input_for_nitrogen_balance
from nbalance.data.models import (
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
)
from nbalance.data.soil import SoilParameters, combine_soil_analyses

__all__ = [
    "Field",
    "Cultivation",
    "HarvestableAnalysis",
    "Harvest",
    "FertilizerApplication",
    "SoilAnalysis",
    "FertilizerDetail",
    "CultivationDetail",
    "Catalogue",
    "TimeFrame",
    "FieldInput",
    "NitrogenBalanceInput",
    "SoilParameters",
    "combine_soil_analyses",
    "DataAccess",
    "collect_input_for_nitrogen_balance",
]
