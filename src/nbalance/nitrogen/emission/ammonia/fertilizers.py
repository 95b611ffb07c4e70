"""
Ammonia volatilization from fertilizer applications.

Mineral fertilizers use their predefined emission factor or, without one, an
empirical quadratic in the organic-N, nitrate-N x sulphur and ammonium-N
contents. Manure, compost and other organic fertilizers lose a fraction of
their ammonium-N that depends on application method and land cover.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from nbalance.core.decimals import ONE, ZERO, clamp, to_decimal
from nbalance.data.models import (
    Catalogue,
    Cultivation,
    CultivationDetail,
    FertilizerApplication,
    FertilizerDetail,
)
from nbalance.nitrogen.factors import get_manure_ammonia_factor
from nbalance.nitrogen.landcover import determine_land_cover
from nbalance.nitrogen.types import Contribution, FertilizerBreakdown

# Quadratic coefficients of the mineral fertilizer emission factor
ORGANIC_N_COEFFICIENT = Decimal("7.021e-5")
ORGANIC_N_COEFFICIENT_INHIBITOR = Decimal("3.166e-5")
NITRATE_SULPHUR_COEFFICIENT = Decimal("-4.308e-5")
AMMONIUM_COEFFICIENT = Decimal("2.498e-4")


def determine_mineral_ammonia_emission_factor(detail: FertilizerDetail, inhibitor: bool = False) -> Decimal:
    """
    Emission factor (fraction of total N) of a mineral fertilizer without a
    predefined factor.

    Args:
        detail: Fertilizer with N, NO3-N, NH4-N (g N/kg) and S (g SO3/kg) contents
        inhibitor: Whether a urease inhibitor is used. Fertilizer records do
            not carry inhibitor data yet, so callers pass False.
    """
    n_total = to_decimal(detail.n_total)
    n_nitrate = to_decimal(detail.n_nitrate)
    n_ammonium = to_decimal(detail.n_ammonium)
    n_organic = n_total - n_nitrate - n_ammonium
    sulphur = to_decimal(detail.s_content)

    coefficient = ORGANIC_N_COEFFICIENT_INHIBITOR if inhibitor else ORGANIC_N_COEFFICIENT
    a = n_organic**2 * coefficient
    b = n_nitrate * sulphur * NITRATE_SULPHUR_COEFFICIENT
    c = n_ammonium**2 * AMMONIUM_COEFFICIENT

    # The quadratic gives the factor in percent. Dividing by 100 keeps 1000 kg of
    # a 100 g N/kg fertilizer (50 NO3, 50 NH4, 10 SO3) at -0.60296 kg N emitted.
    return (a + b + c) / 100


def _mineral_emission(application: FertilizerApplication, detail: FertilizerDetail) -> Decimal:
    if detail.ef_ammonia is not None:
        factor = to_decimal(detail.ef_ammonia)
    else:
        factor = determine_mineral_ammonia_emission_factor(detail)
    factor = clamp(factor, ZERO, ONE)
    return to_decimal(application.amount) * to_decimal(detail.n_total) * factor / 1000 * -1


def _organic_emission(
    application: FertilizerApplication,
    detail: FertilizerDetail,
    cultivations: Sequence[Cultivation],
    cultivation_details: Catalogue[CultivationDetail],
) -> Decimal:
    land_cover = determine_land_cover(application.date, cultivations, cultivation_details)
    factor = get_manure_ammonia_factor(
        application.method,
        land_cover,
        fertilizer_name=application.name,
        fertilizer_id=application.fertilizer_id,
    )
    return to_decimal(application.amount) * to_decimal(detail.n_ammonium) * factor / 1000 * -1


def calculate_nitrogen_emission_via_ammonia_by_fertilizers(
    cultivations: Sequence[Cultivation],
    applications: Iterable[FertilizerApplication],
    cultivation_details: Catalogue[CultivationDetail],
    fertilizer_details: Catalogue[FertilizerDetail],
) -> FertilizerBreakdown:
    """
    Ammonia emission per application (negative kg N/ha), grouped by fertilizer class.

    Fertilizers that are neither mineral, manure nor compost are treated like manure.

    Raises:
        MissingReferenceError: If a fertilizer or active cultivation is not in its catalogue
        UnknownClassificationError: If an organic fertilizer's method has no factor
    """
    items = []
    for application in applications:
        detail = fertilizer_details.resolve(application.catalogue_id, f"Fertilizer application {application.id}")
        if detail.fertilizer_type == "mineral":
            value = _mineral_emission(application, detail)
        else:
            value = _organic_emission(application, detail, cultivations, cultivation_details)
        items.append((detail.fertilizer_type, Contribution(id=application.id, value=value)))

    return FertilizerBreakdown.from_applications(items)
