"""
Nitrate leaching.

Leaching is not calculated yet: the emission is always zero. The leaching
fractions it will need live in :mod:`nbalance.nitrogen.factors`.
"""

from collections.abc import Iterable

from nbalance.core.decimals import ZERO
from nbalance.data.models import Catalogue, Cultivation, CultivationDetail
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.types import NitrateEmission


def calculate_nitrogen_emission_via_nitrate(
    cultivations: Iterable[Cultivation],
    soil: SoilParameters,
    cultivation_details: Catalogue[CultivationDetail],
) -> NitrateEmission:
    """Nitrate emission of a field; currently always zero whatever the input."""
    return NitrateEmission(total=ZERO)
