"""
Nitrogen balance of a farm and its fields.

Per field: supply + removal + emission, with removal and emission already
negative. Farm values are area-weighted means (kg N/ha) over the fields that
could be calculated. A field that fails is reported with its error message
and left out of the farm means; it never aborts the other fields.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import asdict
from decimal import Decimal

from nbalance.core.config import settings
from nbalance.core.decimals import ZERO, decimal_context, decimal_sum, round_half_up, to_decimal
from nbalance.core.errors import NitrogenBalanceError
from nbalance.core.raster import RasterCache
from nbalance.data.models import (
    Catalogue,
    CultivationDetail,
    FertilizerDetail,
    FieldInput,
    NitrogenBalanceInput,
    TimeFrame,
)
from nbalance.data.soil import combine_soil_analyses
from nbalance.nitrogen.emission import calculate_nitrogen_emission
from nbalance.nitrogen.removal import calculate_nitrogen_removal
from nbalance.nitrogen.supply import calculate_all_fields_nitrogen_supply_by_deposition, calculate_nitrogen_supply
from nbalance.nitrogen.target import calculate_target_for_nitrogen_balance
from nbalance.nitrogen.types import (
    DepositionSupply,
    FarmAmmonia,
    FarmEmission,
    FarmFertilizerTotals,
    FarmRemoval,
    FarmSupply,
    FieldBalance,
    FieldBalanceResult,
    NitrogenBalance,
)

LOGGER = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Field level
# -----------------------------------------------------------------------------


def calculate_nitrogen_balance_field(
    field_input: FieldInput,
    fertilizer_details: Catalogue[FertilizerDetail],
    cultivation_details: Catalogue[CultivationDetail],
    time_frame: TimeFrame,
    deposition: DepositionSupply,
) -> FieldBalanceResult:
    """
    Nitrogen balance of one field.

    Buffer strips get an all-zero balance. Calculation errors are returned as
    the result's error_message instead of being raised.
    """
    field = field_input.field
    area = field.area or 0

    if field.buffer_strip:
        return FieldBalanceResult(field_id=field.id, area=area, balance=FieldBalance(field_id=field.id))

    cultivations = tuple(field_input.cultivations)
    harvests = tuple(field_input.harvests)
    applications = tuple(field_input.fertilizer_applications)

    try:
        with decimal_context():
            soil = combine_soil_analyses(field_input.soil_analyses)
            field_time_frame = time_frame.for_field(field)

            supply = calculate_nitrogen_supply(
                cultivations,
                applications,
                soil,
                cultivation_details,
                fertilizer_details,
                deposition,
                field_time_frame,
            )
            removal = calculate_nitrogen_removal(cultivations, harvests, cultivation_details)
            emission = calculate_nitrogen_emission(
                cultivations, harvests, applications, soil, cultivation_details, fertilizer_details
            )
            target = calculate_target_for_nitrogen_balance(
                cultivations, soil, cultivation_details, field_time_frame
            )
            balance = FieldBalance(
                field_id=field.id, supply=supply, removal=removal, emission=emission, target=target
            )
    except (NitrogenBalanceError, ArithmeticError) as e:
        LOGGER.warning("Nitrogen balance failed for field %s: %s", field.id, e)
        return FieldBalanceResult(field_id=field.id, area=area, error_message=str(e))

    return FieldBalanceResult(field_id=field.id, area=area, balance=balance)


# -----------------------------------------------------------------------------
# Farm level
# -----------------------------------------------------------------------------


def calculate_nitrogen_balances_field_to_farm(
    results: Sequence[FieldBalanceResult],
    fields: Sequence[FieldInput],
    field_error_messages: Sequence[str] = (),
) -> NitrogenBalance:
    """
    Aggregate field results to area-weighted farm means.

    Failed fields and buffer strips do not count towards the means; the area
    of the remaining fields is the denominator.
    """
    buffer_strips = {field_input.field.id for field_input in fields if field_input.field.buffer_strip}
    included = [r for r in results if r.ok and r.field_id not in buffer_strips]
    total_area = decimal_sum(to_decimal(r.area) for r in included)

    def mean(value: Callable[[FieldBalance], Decimal]) -> Decimal:
        if total_area == 0:
            return ZERO
        return decimal_sum(value(r.balance) * to_decimal(r.area) for r in included) / total_area

    with decimal_context():
        supply = FarmSupply(
            total=mean(lambda b: b.supply.total),
            deposition=mean(lambda b: b.supply.deposition.total),
            fixation=mean(lambda b: b.supply.fixation.total),
            mineralisation=mean(lambda b: b.supply.mineralisation.total),
            fertilizers=FarmFertilizerTotals(
                total=mean(lambda b: b.supply.fertilizers.total),
                mineral=mean(lambda b: b.supply.fertilizers.mineral.total),
                manure=mean(lambda b: b.supply.fertilizers.manure.total),
                compost=mean(lambda b: b.supply.fertilizers.compost.total),
                other=mean(lambda b: b.supply.fertilizers.other.total),
            ),
        )
        removal = FarmRemoval(
            total=mean(lambda b: b.removal.total),
            harvests=mean(lambda b: b.removal.harvests.total),
        )
        emission = FarmEmission(
            total=mean(lambda b: b.emission.total),
            ammonia=FarmAmmonia(
                total=mean(lambda b: b.emission.ammonia.total),
                fertilizers=FarmFertilizerTotals(
                    total=mean(lambda b: b.emission.ammonia.fertilizers.total),
                    mineral=mean(lambda b: b.emission.ammonia.fertilizers.mineral.total),
                    manure=mean(lambda b: b.emission.ammonia.fertilizers.manure.total),
                    compost=mean(lambda b: b.emission.ammonia.fertilizers.compost.total),
                    other=mean(lambda b: b.emission.ammonia.fertilizers.other.total),
                ),
                residues=mean(lambda b: b.emission.ammonia.residues.total),
            ),
            nitrate=mean(lambda b: b.emission.nitrate.total),
        )
        target = mean(lambda b: b.target)

    return NitrogenBalance(
        balance=supply.total + removal.total + emission.total,
        supply=supply,
        removal=removal,
        emission=emission,
        fields=tuple(results),
        target=target,
        has_errors=bool(field_error_messages) or any(not r.ok for r in results),
        field_error_messages=tuple(field_error_messages),
    )


async def calculate_nitrogen_balance(
    balance_input: NitrogenBalanceInput,
    raster_cache: RasterCache | None = None,
) -> NitrogenBalance:
    """
    Nitrogen balance of a farm.

    Deposition is sampled for all fields first, from a single fetch of the
    deposition raster. Fields are then evaluated concurrently in batches of
    ``settings.field_batch_size``.

    Args:
        balance_input: Fields with their records, catalogues and time frame
        raster_cache: Cache holding the deposition raster. Pass a long-lived
            cache to reuse the raster across calls. Without one, a temporary
            cache is created and closed once deposition has been sampled.

    Returns:
        NitrogenBalance with Decimal values

    Raises:
        RasterSourceError: If the deposition raster cannot be fetched or parsed
    """
    owns_cache = raster_cache is None
    cache = RasterCache() if owns_cache else raster_cache
    fields = list(balance_input.fields)
    fertilizer_details = balance_input.fertilizer_catalogue()
    cultivation_details = balance_input.cultivation_catalogue()
    time_frame = balance_input.time_frame

    try:
        deposition_by_field = await calculate_all_fields_nitrogen_supply_by_deposition(
            fields, time_frame, cache, balance_input.public_data_url
        )
    finally:
        if owns_cache:
            cache.close()

    results: list[FieldBalanceResult] = []
    field_error_messages: list[str] = []

    async def evaluate(field_input: FieldInput) -> FieldBalanceResult:
        field = field_input.field
        deposition = deposition_by_field.get(field.id)
        if deposition is None:
            return FieldBalanceResult(
                field_id=field.id,
                area=field.area or 0,
                error_message=f"Deposition data not found for field {field.id}",
            )
        return await asyncio.to_thread(
            calculate_nitrogen_balance_field,
            field_input,
            fertilizer_details,
            cultivation_details,
            time_frame,
            deposition,
        )

    batch_size = max(settings.field_batch_size, 1)
    for start in range(0, len(fields), batch_size):
        batch = fields[start : start + batch_size]
        results.extend(await asyncio.gather(*(evaluate(field_input) for field_input in batch)))

    for result in results:
        if result.error_message is not None:
            field_error_messages.append(f"Field {result.field_id}: {result.error_message}")

    LOGGER.debug("Nitrogen balance for %d fields, %d failed", len(results), len(field_error_messages))
    return calculate_nitrogen_balances_field_to_farm(results, fields, field_error_messages)


# -----------------------------------------------------------------------------
# Presentation
# -----------------------------------------------------------------------------


def _to_numeric(data):
    if isinstance(data, Decimal):
        return int(round_half_up(data))
    if isinstance(data, dict):
        return {key: _to_numeric(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_to_numeric(value) for value in data]
    return data


def convert_balance_to_numeric(balance: NitrogenBalance) -> dict:
    """Plain nested dict of the balance with every Decimal rounded half-up to an integer."""
    return _to_numeric(asdict(balance))
