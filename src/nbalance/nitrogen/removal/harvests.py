"""Nitrogen removed with harvested products."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from nbalance.core.decimals import decimal_sum, to_decimal
from nbalance.core.errors import MissingReferenceError
from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, Harvest, HarvestableAnalysis
from nbalance.nitrogen.types import Contribution, HarvestRemoval


def _removal_per_analysis(analysis: HarvestableAnalysis, detail: CultivationDetail) -> Decimal:
    # Observed values win; missing or zero falls back to the catalogue default
    yield_kg_ha = analysis.yield_kg_ha or detail.default_yield
    n_content = analysis.n_content or detail.n_harvestable
    return to_decimal(yield_kg_ha) * to_decimal(n_content) / 1000 * -1


def calculate_harvest_removal(harvest: Harvest, detail: CultivationDetail) -> Decimal:
    """Removal of one harvest (negative kg N/ha), averaged over its analyses."""
    analyses = harvest.analyses or (HarvestableAnalysis(),)
    removals = [_removal_per_analysis(analysis, detail) for analysis in analyses]
    if len(removals) == 1:
        return removals[0]
    return decimal_sum(removals) / len(removals)


def calculate_nitrogen_removal_by_harvests(
    cultivations: Sequence[Cultivation],
    harvests: Iterable[Harvest],
    cultivation_details: Catalogue[CultivationDetail],
) -> HarvestRemoval:
    """
    Nitrogen removal per harvest: yield (kg/ha) x N content (g N/kg) / 1000.

    Raises:
        MissingReferenceError: If a harvest's cultivation is not on the field,
            or that cultivation is not in the catalogue
    """
    cultivations_by_id = {cultivation.id: cultivation for cultivation in cultivations}

    contributions = []
    for harvest in harvests:
        cultivation = cultivations_by_id.get(harvest.cultivation_id)
        if cultivation is None:
            raise MissingReferenceError(
                f"Harvest {harvest.id}: cultivation '{harvest.cultivation_id}' not found",
                harvest_id=harvest.id,
                cultivation_id=harvest.cultivation_id,
            )
        detail = cultivation_details.resolve(cultivation.catalogue_id, f"Cultivation {cultivation.id}")
        contributions.append(Contribution(id=harvest.id, value=calculate_harvest_removal(harvest, detail)))

    return HarvestRemoval(harvests=tuple(contributions))
