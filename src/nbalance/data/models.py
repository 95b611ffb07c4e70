"""
Read-only input records for the nitrogen balance.

Units follow the farm record conventions:
- amounts, yields: kg / ha
- nitrogen contents of fertilizers and crops: g N / kg
- fixation, deposition: kg N / ha / year
- soil organic carbon: g C / kg, total soil nitrogen: mg N / kg,
  organic matter: %, bulk density: g / cm³
"""

import datetime
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Generic, TypeVar

from nbalance.core.decimals import ZERO
from nbalance.core.errors import MissingReferenceError

Number = Decimal | float | int

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Field records
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Field:
    id: str
    centroid: tuple[float, float]  # (longitude, latitude)
    area: float  # ha
    start: date | None = None
    end: date | None = None
    buffer_strip: bool = False


@dataclass(frozen=True)
class Cultivation:
    id: str
    catalogue_id: str
    start: date
    end: date | None = None  # None = still active
    crop_residue: bool | None = None  # residue left on the field after harvest
    name: str | None = None

    def is_active_on(self, day: date) -> bool:
        return self.start <= day and (self.end is None or self.end >= day)


@dataclass(frozen=True)
class HarvestableAnalysis:
    yield_kg_ha: Number | None = None
    n_content: Number | None = None  # g N / kg harvested product


@dataclass(frozen=True)
class Harvest:
    id: str
    cultivation_id: str
    analyses: tuple[HarvestableAnalysis, ...] = ()
    date: datetime.date | None = None


@dataclass(frozen=True)
class FertilizerApplication:
    id: str
    catalogue_id: str
    amount: Number  # kg / ha
    date: datetime.date
    method: str | None = None
    fertilizer_id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class SoilAnalysis:
    id: str
    sampling_date: date | None = None
    organic_carbon: Number | None = None
    cn_ratio: Number | None = None
    bulk_density: Number | None = None
    total_nitrogen: Number | None = None
    organic_matter: Number | None = None
    soil_type: str | None = None
    gwl_class: str | None = None


# -----------------------------------------------------------------------------
# Catalogue records
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FertilizerDetail:
    catalogue_id: str
    fertilizer_type: str | None = None  # mineral | manure | compost | anything else
    n_total: Number | None = None
    n_nitrate: Number | None = None
    n_ammonium: Number | None = None
    s_content: Number | None = None  # g SO3 / kg
    ef_ammonia: Number | None = None  # predefined ammonia emission factor


@dataclass(frozen=True)
class CultivationDetail:
    catalogue_id: str
    crop_rotation: str | None = None
    default_yield: Number | None = None
    harvest_index: Number | None = None
    n_harvestable: Number | None = None
    n_residue: Number | None = None
    n_fixation: Number | None = None


class Catalogue(Generic[T]):
    """
    Read-only lookup of catalogue records by catalogue id.

    Resolution never falls back to a default: an unknown key raises
    MissingReferenceError naming the record that asked for it.
    """

    def __init__(self, records: Iterable[T] = (), kind: str = "catalogue entry"):
        self.kind = kind
        self._records: dict[str, T] = {record.catalogue_id: record for record in records}

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records.values())

    def get(self, key: str) -> T | None:
        return self._records.get(key)

    def resolve(self, key: str, referrer: str) -> T:
        """Return the record for key, or raise naming the referrer."""
        record = self._records.get(key)
        if record is None:
            raise MissingReferenceError(
                f"{referrer} has no corresponding {self.kind} '{key}'",
                catalogue_id=key,
                referrer=referrer,
            )
        return record


# -----------------------------------------------------------------------------
# Time frame and balance input
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeFrame:
    start: date
    end: date

    def for_field(self, balance_field: Field) -> "TimeFrame":
        """Intersect with the period the field exists."""
        start = self.start if balance_field.start is None else max(self.start, balance_field.start)
        end = self.end if balance_field.end is None else min(self.end, balance_field.end)
        return TimeFrame(start=start, end=end)

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    def year_fraction(self) -> Decimal:
        """Inclusive day count divided by 365; zero for an empty window."""
        if self.days < 0:
            return ZERO
        return Decimal(self.days + 1) / Decimal(365)


@dataclass(frozen=True)
class FieldInput:
    field: Field
    cultivations: tuple[Cultivation, ...] = ()
    harvests: tuple[Harvest, ...] = ()
    soil_analyses: tuple[SoilAnalysis, ...] = ()
    fertilizer_applications: tuple[FertilizerApplication, ...] = ()


@dataclass(frozen=True)
class NitrogenBalanceInput:
    fields: tuple[FieldInput, ...]
    fertilizer_details: tuple[FertilizerDetail, ...]
    cultivation_details: tuple[CultivationDetail, ...]
    time_frame: TimeFrame
    public_data_url: str | None = None

    def fertilizer_catalogue(self) -> Catalogue[FertilizerDetail]:
        return Catalogue(self.fertilizer_details, kind="fertilizer detail")

    def cultivation_catalogue(self) -> Catalogue[CultivationDetail]:
        return Catalogue(self.cultivation_details, kind="cultivation detail")


__all__ = [
    "Field",
    "Cultivation",
    "HarvestableAnalysis",
    "Harvest",
    "FertilizerApplication",
    "SoilAnalysis",
    "FertilizerDetail",
    "CultivationDetail",
    "Catalogue",
    "TimeFrame",
    "FieldInput",
    "NitrogenBalanceInput",
]
