"""Ammonia volatilization from crop residues left on the field."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from nbalance.core.decimals import ONE, ZERO, clamp, decimal_sum, to_decimal
from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, Harvest
from nbalance.nitrogen.types import Contribution, ResidueEmission


def determine_residue_ammonia_emission_factor(n_residue: Decimal) -> Decimal:
    """Fraction of residue N volatilized: (0.41 x N_residue - 5.42) %, clamped to [0, 1]."""
    factor = (Decimal("0.41") * n_residue - Decimal("5.42")) / 100
    return clamp(factor, ZERO, ONE)


def average_cultivation_yield(
    cultivation: Cultivation, harvests: Iterable[Harvest], detail: CultivationDetail
) -> Decimal:
    """
    Mean yield (kg/ha) over the cultivation's harvests.

    A harvest without an analysis reporting yield counts at the catalogue
    default; a cultivation without harvests gets the catalogue default.
    """
    default_yield = to_decimal(detail.default_yield)
    yields = []
    for harvest in harvests:
        if harvest.cultivation_id != cultivation.id:
            continue
        observed = next((a.yield_kg_ha for a in harvest.analyses if a.yield_kg_ha is not None), None)
        yields.append(default_yield if observed is None else to_decimal(observed))

    if not yields:
        return default_yield
    return decimal_sum(yields) / len(yields)


def calculate_residue_emission(
    cultivation: Cultivation, harvests: Sequence[Harvest], detail: CultivationDetail
) -> Decimal:
    if not cultivation.crop_residue:
        return ZERO

    harvest_index = to_decimal(detail.harvest_index)
    if harvest_index == 0:
        return ZERO

    crop_yield = average_cultivation_yield(cultivation, harvests, detail)
    n_residue = to_decimal(detail.n_residue)
    factor = determine_residue_ammonia_emission_factor(n_residue)

    residue_mass = crop_yield / harvest_index * (1 - harvest_index)
    return residue_mass * n_residue * factor / 1000 * -1


def calculate_nitrogen_emission_via_ammonia_by_residues(
    cultivations: Iterable[Cultivation],
    harvests: Sequence[Harvest],
    cultivation_details: Catalogue[CultivationDetail],
) -> ResidueEmission:
    """
    Residue ammonia emission per cultivation (negative kg N/ha).

    Only cultivations that leave their residue on the field contribute.

    Raises:
        MissingReferenceError: If a cultivation is not in the catalogue
    """
    contributions = []
    for cultivation in cultivations:
        detail = cultivation_details.resolve(cultivation.catalogue_id, f"Cultivation {cultivation.id}")
        value = calculate_residue_emission(cultivation, harvests, detail)
        contributions.append(Contribution(id=cultivation.id, value=value))

    return ResidueEmission(cultivations=tuple(contributions))
