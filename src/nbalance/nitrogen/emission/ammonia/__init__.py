"""Ammonia emission - fertilizers and crop residues."""

from collections.abc import Sequence

from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, FertilizerApplication, FertilizerDetail, Harvest
from nbalance.nitrogen.emission.ammonia.fertilizers import (
    calculate_nitrogen_emission_via_ammonia_by_fertilizers,
    determine_mineral_ammonia_emission_factor,
)
from nbalance.nitrogen.emission.ammonia.residues import (
    calculate_nitrogen_emission_via_ammonia_by_residues,
    determine_residue_ammonia_emission_factor,
)
from nbalance.nitrogen.types import AmmoniaEmission


def calculate_nitrogen_emission_via_ammonia(
    cultivations: Sequence[Cultivation],
    harvests: Sequence[Harvest],
    fertilizer_applications: Sequence[FertilizerApplication],
    cultivation_details: Catalogue[CultivationDetail],
    fertilizer_details: Catalogue[FertilizerDetail],
) -> AmmoniaEmission:
    """Ammonia emission of a field. Grazing is not modelled."""
    return AmmoniaEmission(
        fertilizers=calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            cultivations, fertilizer_applications, cultivation_details, fertilizer_details
        ),
        residues=calculate_nitrogen_emission_via_ammonia_by_residues(cultivations, harvests, cultivation_details),
    )


__all__ = [
    "calculate_nitrogen_emission_via_ammonia",
    "calculate_nitrogen_emission_via_ammonia_by_fertilizers",
    "calculate_nitrogen_emission_via_ammonia_by_residues",
    "determine_mineral_ammonia_emission_factor",
    "determine_residue_ammonia_emission_factor",
]
