"""
Merge a field's soil analyses into one set of soil parameters.

Each parameter takes its value from the most recent analysis that reports it.
A reported zero still counts as that analysis reporting it, and the merged
value is then treated as missing; older analyses are not consulted.
Parameters still missing afterwards are estimated with pedotransfer functions
where their inputs are available:

    organic carbon  <- organic matter (van Bemmelen factor 0.5)
    organic matter  <- organic carbon
    C:N ratio       <- organic carbon, total nitrogen
    bulk density    <- organic matter, soil type

No validation happens here; formulas that need a parameter raise
MissingSoilParameterError themselves.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from nbalance.core.decimals import clamp, to_decimal
from nbalance.data.models import SoilAnalysis

# Soil types using the sand/loess bulk density regression
LIGHT_SOIL_TYPES = frozenset({"dekzand", "dalgrond", "duinzand", "loess"})

MERGED_PARAMETERS = (
    "soil_type",
    "total_nitrogen",
    "organic_carbon",
    "cn_ratio",
    "bulk_density",
    "organic_matter",
    "gwl_class",
)


@dataclass(frozen=True)
class SoilParameters:
    organic_carbon: Decimal | None = None  # g C / kg
    cn_ratio: Decimal | None = None
    bulk_density: Decimal | None = None  # g / cm³
    total_nitrogen: Decimal | None = None  # mg N / kg
    organic_matter: Decimal | None = None  # %
    soil_type: str | None = None
    gwl_class: str | None = None


# -----------------------------------------------------------------------------
# Pedotransfer functions
# -----------------------------------------------------------------------------


def estimate_organic_carbon(organic_matter) -> Decimal | None:
    """Organic carbon (g C/kg) from organic matter (%), clamped to [0.1, 600]."""
    if not organic_matter:
        return None
    value = to_decimal(organic_matter) * Decimal("0.5") * 10
    return clamp(value, Decimal("0.1"), 600)


def estimate_organic_matter(organic_carbon) -> Decimal | None:
    """Organic matter (%) from organic carbon (g C/kg), clamped to [0.5, 75]."""
    if not organic_carbon:
        return None
    value = to_decimal(organic_carbon) / 10 / Decimal("0.5")
    return clamp(value, Decimal("0.5"), 75)


def estimate_cn_ratio(organic_carbon, total_nitrogen) -> Decimal | None:
    """C:N ratio from organic carbon (g C/kg) and total nitrogen (mg N/kg), clamped to [5, 40]."""
    if not organic_carbon or not total_nitrogen:
        return None
    value = to_decimal(organic_carbon) / (to_decimal(total_nitrogen) / 1000)
    return clamp(value, 5, 40)


def estimate_bulk_density(organic_matter, soil_type: str | None) -> Decimal | None:
    """
    Bulk density (g/cm³) from organic matter and soil type, clamped to [0.5, 3].

    Sandy and loess soils use a reciprocal regression on organic matter;
    clay and peat soils a fourth-order polynomial.
    """
    if not organic_matter or not soil_type:
        return None

    som = to_decimal(organic_matter)
    if soil_type in LIGHT_SOIL_TYPES:
        density = 1 / (som * Decimal("0.02525") + Decimal("0.6541"))
    else:
        density = (
            som**4 * Decimal("0.00000067")
            - som**3 * Decimal("0.00007792")
            + som**2 * Decimal("0.00314712")
            - som * Decimal("0.06039523")
            + Decimal("1.33932206")
        )
    return clamp(density, Decimal("0.5"), 3)


# -----------------------------------------------------------------------------
# Merging
# -----------------------------------------------------------------------------


def _most_recent_value(analyses: list[SoilAnalysis], parameter: str):
    for analysis in analyses:
        value = getattr(analysis, parameter)
        if value is not None:
            # A zero reading is treated as not measured
            return value or None
    return None


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else to_decimal(value)


def combine_soil_analyses(analyses: Iterable[SoilAnalysis]) -> SoilParameters:
    """
    Merge soil analyses, newest first, and fill the gaps with estimates.

    The input is not modified. Analyses without a sampling date are
    considered the oldest.
    """
    ordered = sorted(analyses, key=lambda a: a.sampling_date or date.min, reverse=True)
    merged = {name: _most_recent_value(ordered, name) for name in MERGED_PARAMETERS}

    organic_carbon = _optional_decimal(merged["organic_carbon"])
    organic_matter = _optional_decimal(merged["organic_matter"])
    total_nitrogen = _optional_decimal(merged["total_nitrogen"])
    cn_ratio = _optional_decimal(merged["cn_ratio"])
    bulk_density = _optional_decimal(merged["bulk_density"])
    soil_type = merged["soil_type"]

    if organic_carbon is None:
        organic_carbon = estimate_organic_carbon(organic_matter)
    if organic_matter is None:
        organic_matter = estimate_organic_matter(organic_carbon)
    if cn_ratio is None:
        cn_ratio = estimate_cn_ratio(organic_carbon, total_nitrogen)
    if bulk_density is None:
        bulk_density = estimate_bulk_density(organic_matter, soil_type)

    return SoilParameters(
        organic_carbon=organic_carbon,
        cn_ratio=cn_ratio,
        bulk_density=bulk_density,
        total_nitrogen=total_nitrogen,
        organic_matter=organic_matter,
        soil_type=soil_type,
        gwl_class=merged["gwl_class"],
    )
