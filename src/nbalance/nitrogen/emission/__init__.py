"""Nitrogen emission - ammonia volatilization and nitrate leaching."""

from collections.abc import Sequence

from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, FertilizerApplication, FertilizerDetail, Harvest
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.emission.ammonia import calculate_nitrogen_emission_via_ammonia
from nbalance.nitrogen.emission.nitrate import calculate_nitrogen_emission_via_nitrate
from nbalance.nitrogen.types import NitrogenEmission


def calculate_nitrogen_emission(
    cultivations: Sequence[Cultivation],
    harvests: Sequence[Harvest],
    fertilizer_applications: Sequence[FertilizerApplication],
    soil: SoilParameters,
    cultivation_details: Catalogue[CultivationDetail],
    fertilizer_details: Catalogue[FertilizerDetail],
) -> NitrogenEmission:
    """Total nitrogen emission of a field (negative kg N/ha)."""
    ammonia = calculate_nitrogen_emission_via_ammonia(
        cultivations, harvests, fertilizer_applications, cultivation_details, fertilizer_details
    )
    nitrate = calculate_nitrogen_emission_via_nitrate(cultivations, soil, cultivation_details)
    return NitrogenEmission(ammonia=ammonia, nitrate=nitrate)


__all__ = [
    "calculate_nitrogen_emission",
    "calculate_nitrogen_emission_via_ammonia",
    "calculate_nitrogen_emission_via_nitrate",
]
