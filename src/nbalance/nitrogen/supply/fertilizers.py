"""Nitrogen supplied by fertilizer applications."""

from collections.abc import Iterable

from nbalance.core.decimals import to_decimal
from nbalance.data.models import Catalogue, FertilizerApplication, FertilizerDetail
from nbalance.nitrogen.types import Contribution, FertilizerBreakdown


def calculate_nitrogen_supply_by_fertilizers(
    applications: Iterable[FertilizerApplication],
    fertilizer_details: Catalogue[FertilizerDetail],
) -> FertilizerBreakdown:
    """
    Nitrogen supply per application, grouped by fertilizer class.

    amount (kg/ha) x total N content (g N/kg) / 1000 = kg N/ha. The formula is
    the same for every class; the class only decides the bucket.

    Raises:
        MissingReferenceError: If an application's fertilizer is not in the catalogue
    """
    items = []
    for application in applications:
        detail = fertilizer_details.resolve(application.catalogue_id, f"Fertilizer application {application.id}")
        value = to_decimal(application.amount) * to_decimal(detail.n_total) / 1000
        items.append((detail.fertilizer_type, Contribution(id=application.id, value=value)))

    return FertilizerBreakdown.from_applications(items)
