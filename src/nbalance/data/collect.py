"""
Collect nitrogen balance input from a farm data store.

The data store is any object implementing :class:`DataAccess`. Records are
expected to be already scoped to what the principal may see; no permission
checks happen here.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from nbalance.core.errors import InputCollectionError
from nbalance.data.models import (
    Cultivation,
    CultivationDetail,
    FertilizerApplication,
    FertilizerDetail,
    Field,
    FieldInput,
    Harvest,
    NitrogenBalanceInput,
    SoilAnalysis,
    TimeFrame,
)

LOGGER = logging.getLogger(__name__)


class DataAccess(Protocol):
    """Read access to the farm records needed for a nitrogen balance."""

    async def get_fields(self, principal_id: str, farm_id: str, time_frame: TimeFrame) -> Sequence[Field]: ...

    async def get_cultivations(
        self, principal_id: str, field_id: str, time_frame: TimeFrame
    ) -> Sequence[Cultivation]: ...

    async def get_harvests(self, principal_id: str, cultivation_id: str, time_frame: TimeFrame) -> Sequence[Harvest]: ...

    async def get_soil_analyses(
        self, principal_id: str, field_id: str, time_frame: TimeFrame
    ) -> Sequence[SoilAnalysis]: ...

    async def get_fertilizer_applications(
        self, principal_id: str, field_id: str, time_frame: TimeFrame
    ) -> Sequence[FertilizerApplication]: ...

    async def get_fertilizers(self, principal_id: str, farm_id: str) -> Sequence[FertilizerDetail]: ...

    async def get_cultivations_from_catalogue(self, principal_id: str, farm_id: str) -> Sequence[CultivationDetail]: ...


async def _collect_field(
    data_access: DataAccess, principal_id: str, field: Field, time_frame: TimeFrame
) -> FieldInput:
    cultivations = await data_access.get_cultivations(principal_id, field.id, time_frame)

    harvest_lists = await asyncio.gather(
        *(data_access.get_harvests(principal_id, cultivation.id, time_frame) for cultivation in cultivations)
    )
    # Harvests detached from a cultivation cannot be attributed
    harvests = tuple(harvest for harvests in harvest_lists for harvest in harvests if harvest.cultivation_id)

    soil_analyses = await data_access.get_soil_analyses(principal_id, field.id, time_frame)
    applications = await data_access.get_fertilizer_applications(principal_id, field.id, time_frame)

    LOGGER.debug(
        "Collected field %s: %d cultivations, %d harvests, %d soil analyses, %d applications",
        field.id,
        len(cultivations),
        len(harvests),
        len(soil_analyses),
        len(applications),
    )

    return FieldInput(
        field=field,
        cultivations=tuple(cultivations),
        harvests=harvests,
        soil_analyses=tuple(soil_analyses),
        fertilizer_applications=tuple(applications),
    )


async def collect_input_for_nitrogen_balance(
    data_access: DataAccess,
    principal_id: str,
    farm_id: str,
    time_frame: TimeFrame,
    public_data_url: str | None = None,
) -> NitrogenBalanceInput:
    """
    Gather everything a farm's nitrogen balance needs.

    Fields are collected first, then the records of every field concurrently,
    then the fertilizer and cultivation catalogues of the farm.

    Args:
        data_access: The farm data store
        principal_id: Principal on whose behalf records are read
        farm_id: Farm to collect
        time_frame: Period of the balance
        public_data_url: Base URL of the public data bucket, passed through

    Returns:
        NitrogenBalanceInput ready for calculate_nitrogen_balance

    Raises:
        InputCollectionError: If any read from the data store fails
    """
    try:
        fields = await data_access.get_fields(principal_id, farm_id, time_frame)
        LOGGER.debug("Collecting nitrogen balance input for %d fields of farm %s", len(fields), farm_id)

        field_inputs = await asyncio.gather(
            *(_collect_field(data_access, principal_id, field, time_frame) for field in fields)
        )

        fertilizer_details = await data_access.get_fertilizers(principal_id, farm_id)
        cultivation_details = await data_access.get_cultivations_from_catalogue(principal_id, farm_id)
    except Exception as e:
        raise InputCollectionError(
            f"Failed to collect nitrogen balance input for farm {farm_id}: {e}",
            farm_id=farm_id,
        ) from e

    return NitrogenBalanceInput(
        fields=tuple(field_inputs),
        fertilizer_details=tuple(fertilizer_details),
        cultivation_details=tuple(cultivation_details),
        time_frame=time_frame,
        public_data_url=public_data_url,
    )
