"""
Atmospheric nitrogen deposition at the field centroid.

Annual deposition (kg N/ha/year) is sampled from a published GeoTIFF and
scaled to the number of days the field exists within the time frame. Only the
2022 raster for the Netherlands is published, so every time frame uses it.
"""

import asyncio
import logging
from collections.abc import Sequence

from nbalance.core.config import get_deposition_url
from nbalance.core.decimals import ZERO, to_decimal
from nbalance.core.raster import RasterCache
from nbalance.data.models import Field, FieldInput, TimeFrame
from nbalance.nitrogen.types import DepositionSupply

LOGGER = logging.getLogger(__name__)


async def calculate_field_deposition(
    field: Field,
    time_frame: TimeFrame,
    raster_cache: RasterCache,
    url: str,
) -> DepositionSupply:
    """Deposition for one field; a pixel without data gives zero."""
    fraction = time_frame.for_field(field).year_fraction()

    longitude, latitude = field.centroid
    value = await raster_cache.sample(url, longitude, latitude)
    if value is None:
        LOGGER.debug("No deposition value at field %s (%s, %s)", field.id, longitude, latitude)
        return DepositionSupply(total=ZERO)

    return DepositionSupply(total=to_decimal(value) * fraction)


async def calculate_all_fields_nitrogen_supply_by_deposition(
    fields: Sequence[FieldInput],
    time_frame: TimeFrame,
    raster_cache: RasterCache,
    public_data_url: str | None = None,
) -> dict[str, DepositionSupply]:
    """
    Deposition for a batch of fields, keyed by field id.

    The raster is fetched once before any field is sampled; the fields are
    then evaluated concurrently against the cached raster.

    Raises:
        RasterSourceError: If the raster cannot be fetched or parsed
    """
    if not fields:
        return {}

    url = get_deposition_url(public_data_url)
    await raster_cache.get(url)

    results = await asyncio.gather(
        *(calculate_field_deposition(field_input.field, time_frame, raster_cache, url) for field_input in fields)
    )
    return {field_input.field.id: deposition for field_input, deposition in zip(fields, results)}
