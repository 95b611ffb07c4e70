"""
Result records of the nitrogen balance.

All values are Decimal kg N / ha. Supply is positive; removal and emission
are negative. Every ``total`` is derived from the record's own breakdown in
``__post_init__`` and is never passed in, so a total always equals the sum of
its parts.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from nbalance.core.decimals import ZERO, decimal_sum

FERTILIZER_CLASSES = ("mineral", "manure", "compost", "other")


def _set_total(record, value: Decimal):
    object.__setattr__(record, "total", value)


@dataclass(frozen=True)
class Contribution:
    """One itemized value: an application, cultivation or harvest."""

    id: str
    value: Decimal


# -----------------------------------------------------------------------------
# Fertilizers (shared by supply and ammonia emission)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FertilizerClassTotal:
    applications: tuple[Contribution, ...] = ()
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, decimal_sum(a.value for a in self.applications))


@dataclass(frozen=True)
class FertilizerBreakdown:
    mineral: FertilizerClassTotal = field(default_factory=FertilizerClassTotal)
    manure: FertilizerClassTotal = field(default_factory=FertilizerClassTotal)
    compost: FertilizerClassTotal = field(default_factory=FertilizerClassTotal)
    other: FertilizerClassTotal = field(default_factory=FertilizerClassTotal)
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, self.mineral.total + self.manure.total + self.compost.total + self.other.total)

    @classmethod
    def from_applications(cls, items: Iterable[tuple[str | None, Contribution]]) -> "FertilizerBreakdown":
        """Bucket (fertilizer type, contribution) pairs; unknown types count as other."""
        buckets: dict[str, list[Contribution]] = {name: [] for name in FERTILIZER_CLASSES}
        for fertilizer_type, contribution in items:
            bucket = fertilizer_type if fertilizer_type in FERTILIZER_CLASSES else "other"
            buckets[bucket].append(contribution)
        return cls(**{name: FertilizerClassTotal(tuple(entries)) for name, entries in buckets.items()})


# -----------------------------------------------------------------------------
# Supply
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FixationSupply:
    cultivations: tuple[Contribution, ...] = ()
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, decimal_sum(c.value for c in self.cultivations))


@dataclass(frozen=True)
class DepositionSupply:
    total: Decimal = ZERO


@dataclass(frozen=True)
class MineralizationSupply:
    total: Decimal = ZERO


@dataclass(frozen=True)
class NitrogenSupply:
    fertilizers: FertilizerBreakdown = field(default_factory=FertilizerBreakdown)
    fixation: FixationSupply = field(default_factory=FixationSupply)
    deposition: DepositionSupply = field(default_factory=DepositionSupply)
    mineralisation: MineralizationSupply = field(default_factory=MineralizationSupply)
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(
            self,
            self.fertilizers.total + self.fixation.total + self.deposition.total + self.mineralisation.total,
        )


# -----------------------------------------------------------------------------
# Removal
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class HarvestRemoval:
    harvests: tuple[Contribution, ...] = ()
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, decimal_sum(h.value for h in self.harvests))


@dataclass(frozen=True)
class NitrogenRemoval:
    harvests: HarvestRemoval = field(default_factory=HarvestRemoval)
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, self.harvests.total)


# -----------------------------------------------------------------------------
# Emission
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ResidueEmission:
    cultivations: tuple[Contribution, ...] = ()
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, decimal_sum(c.value for c in self.cultivations))


@dataclass(frozen=True)
class AmmoniaEmission:
    fertilizers: FertilizerBreakdown = field(default_factory=FertilizerBreakdown)
    residues: ResidueEmission = field(default_factory=ResidueEmission)
    grazing: None = None  # not modelled
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, self.fertilizers.total + self.residues.total)


@dataclass(frozen=True)
class NitrateEmission:
    total: Decimal = ZERO


@dataclass(frozen=True)
class NitrogenEmission:
    ammonia: AmmoniaEmission = field(default_factory=AmmoniaEmission)
    nitrate: NitrateEmission = field(default_factory=NitrateEmission)
    total: Decimal = field(init=False)

    def __post_init__(self):
        _set_total(self, self.ammonia.total + self.nitrate.total)


# -----------------------------------------------------------------------------
# Field and farm balance
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldBalance:
    field_id: str
    supply: NitrogenSupply = field(default_factory=NitrogenSupply)
    removal: NitrogenRemoval = field(default_factory=NitrogenRemoval)
    emission: NitrogenEmission = field(default_factory=NitrogenEmission)
    target: Decimal = ZERO
    balance: Decimal = field(init=False)

    def __post_init__(self):
        # removal and emission are already negative
        object.__setattr__(self, "balance", self.supply.total + self.removal.total + self.emission.total)


@dataclass(frozen=True)
class FieldBalanceResult:
    field_id: str
    area: float
    balance: FieldBalance | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.balance is not None and self.error_message is None


@dataclass(frozen=True)
class FarmFertilizerTotals:
    total: Decimal = ZERO
    mineral: Decimal = ZERO
    manure: Decimal = ZERO
    compost: Decimal = ZERO
    other: Decimal = ZERO


@dataclass(frozen=True)
class FarmSupply:
    total: Decimal = ZERO
    deposition: Decimal = ZERO
    fixation: Decimal = ZERO
    mineralisation: Decimal = ZERO
    fertilizers: FarmFertilizerTotals = field(default_factory=FarmFertilizerTotals)


@dataclass(frozen=True)
class FarmRemoval:
    total: Decimal = ZERO
    harvests: Decimal = ZERO


@dataclass(frozen=True)
class FarmAmmonia:
    total: Decimal = ZERO
    fertilizers: FarmFertilizerTotals = field(default_factory=FarmFertilizerTotals)
    residues: Decimal = ZERO
    grazing: None = None  # not modelled


@dataclass(frozen=True)
class FarmEmission:
    total: Decimal = ZERO
    ammonia: FarmAmmonia = field(default_factory=FarmAmmonia)
    nitrate: Decimal = ZERO


@dataclass(frozen=True)
class NitrogenBalance:
    """Farm-level balance: area-weighted means over the computed fields."""

    balance: Decimal
    supply: FarmSupply
    removal: FarmRemoval
    emission: FarmEmission
    fields: tuple[FieldBalanceResult, ...]
    target: Decimal = ZERO
    has_errors: bool = False
    field_error_messages: tuple[str, ...] = ()
