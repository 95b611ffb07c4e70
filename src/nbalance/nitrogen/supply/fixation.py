"""Nitrogen supplied by biological fixation of the cultivated crops."""

from collections.abc import Iterable

from nbalance.core.decimals import ZERO, to_decimal
from nbalance.data.models import Catalogue, Cultivation, CultivationDetail
from nbalance.nitrogen.types import Contribution, FixationSupply


def calculate_nitrogen_fixation(
    cultivations: Iterable[Cultivation],
    cultivation_details: Catalogue[CultivationDetail],
) -> FixationSupply:
    """
    Fixation per cultivation, taken from the catalogue rate (kg N/ha).

    An unset rate and a rate of zero both contribute zero.

    Raises:
        MissingReferenceError: If a cultivation is not in the catalogue
    """
    contributions = []
    for cultivation in cultivations:
        detail = cultivation_details.resolve(cultivation.catalogue_id, f"Cultivation {cultivation.id}")
        value = to_decimal(detail.n_fixation) if detail.n_fixation else ZERO
        contributions.append(Contribution(id=cultivation.id, value=value))

    return FixationSupply(cultivations=tuple(contributions))
