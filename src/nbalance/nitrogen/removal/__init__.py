"""Nitrogen removal - harvested products."""

from collections.abc import Iterable, Sequence

from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, Harvest
from nbalance.nitrogen.removal.harvests import calculate_harvest_removal, calculate_nitrogen_removal_by_harvests
from nbalance.nitrogen.types import NitrogenRemoval


def calculate_nitrogen_removal(
    cultivations: Sequence[Cultivation],
    harvests: Iterable[Harvest],
    cultivation_details: Catalogue[CultivationDetail],
) -> NitrogenRemoval:
    """Total nitrogen removal of a field (negative kg N/ha)."""
    return NitrogenRemoval(harvests=calculate_nitrogen_removal_by_harvests(cultivations, harvests, cultivation_details))


__all__ = [
    "calculate_nitrogen_removal",
    "calculate_nitrogen_removal_by_harvests",
    "calculate_harvest_removal",
]
