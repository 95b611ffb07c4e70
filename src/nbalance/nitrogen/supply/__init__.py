"""Nitrogen supply - fertilizers, fixation, deposition, mineralization."""

from collections.abc import Iterable

from nbalance.data.models import (
    Catalogue,
    Cultivation,
    CultivationDetail,
    FertilizerApplication,
    FertilizerDetail,
    TimeFrame,
)
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.supply.deposition import (
    calculate_all_fields_nitrogen_supply_by_deposition,
    calculate_field_deposition,
)
from nbalance.nitrogen.supply.fertilizers import calculate_nitrogen_supply_by_fertilizers
from nbalance.nitrogen.supply.fixation import calculate_nitrogen_fixation
from nbalance.nitrogen.supply.mineralization import (
    calculate_minip_mineralization,
    calculate_nitrogen_supply_by_soil_mineralization,
)
from nbalance.nitrogen.types import DepositionSupply, NitrogenSupply


def calculate_nitrogen_supply(
    cultivations: Iterable[Cultivation],
    fertilizer_applications: Iterable[FertilizerApplication],
    soil: SoilParameters,
    cultivation_details: Catalogue[CultivationDetail],
    fertilizer_details: Catalogue[FertilizerDetail],
    deposition: DepositionSupply,
    time_frame: TimeFrame,
) -> NitrogenSupply:
    """
    Total nitrogen supply of a field.

    Deposition is computed beforehand for all fields at once and passed in.
    The time frame is the field-local one.
    """
    return NitrogenSupply(
        fertilizers=calculate_nitrogen_supply_by_fertilizers(fertilizer_applications, fertilizer_details),
        fixation=calculate_nitrogen_fixation(cultivations, cultivation_details),
        deposition=deposition,
        mineralisation=calculate_nitrogen_supply_by_soil_mineralization(soil, time_frame),
    )


__all__ = [
    "calculate_nitrogen_supply",
    "calculate_nitrogen_supply_by_fertilizers",
    "calculate_nitrogen_fixation",
    "calculate_field_deposition",
    "calculate_all_fields_nitrogen_supply_by_deposition",
    "calculate_minip_mineralization",
    "calculate_nitrogen_supply_by_soil_mineralization",
]
