"""
Emission factor tables.

Manure ammonia factors follow table B18.3 (column 2019-2022) of
"Emissies naar lucht uit de landbouw berekend met NEMA voor 1990-2022"
(Van Bruggen et al., 2024, WOT-technical report 264). Methods the table does
not list borrow the factor of the closest listed method.

Nitrate leaching fractions are per land cover, agricultural soil type and,
for sandy soils, groundwater level class.

The values are regulatory constants: keep them verbatim.
"""

from decimal import Decimal

from nbalance.core.errors import UnknownClassificationError
from nbalance.nitrogen.landcover import LandCover

# -----------------------------------------------------------------------------
# Ammonia volatilization from manure, compost and other organic fertilizers
# -----------------------------------------------------------------------------

_GRASSLAND = LandCover.GRASSLAND
_CROPLAND = LandCover.CROPLAND
_BARE_SOIL = LandCover.BARE_SOIL

MANURE_AMMONIA_FACTORS: dict[str, dict[LandCover, Decimal]] = {
    # sod injection on grassland
    "slotted coulter": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.24"), _BARE_SOIL: Decimal("0.24")},
    "incorporation": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.22"), _BARE_SOIL: Decimal("0.46")},
    "incorporation 2 tracks": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.46"), _BARE_SOIL: Decimal("0.46")},
    "injection": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.24"), _BARE_SOIL: Decimal("0.02")},
    "shallow injection": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.24"), _BARE_SOIL: Decimal("0.24")},
    "spraying": {_GRASSLAND: Decimal("0.68"), _CROPLAND: Decimal("0.69"), _BARE_SOIL: Decimal("0.69")},
    "broadcasting": {_GRASSLAND: Decimal("0.68"), _CROPLAND: Decimal("0.69"), _BARE_SOIL: Decimal("0.69")},
    "spoke wheel": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.24"), _BARE_SOIL: Decimal("0.24")},
    "pocket placement": {_GRASSLAND: Decimal("0.68"), _CROPLAND: Decimal("0.69"), _BARE_SOIL: Decimal("0.69")},
    "narrowband": {_GRASSLAND: Decimal("0.17"), _CROPLAND: Decimal("0.36"), _BARE_SOIL: Decimal("0.36")},
}


def get_manure_ammonia_factor(
    method: str | None,
    land_cover: LandCover,
    fertilizer_name: str | None = None,
    fertilizer_id: str | None = None,
) -> Decimal:
    """
    Ammonia emission factor (fraction of ammonium-N) for an organic fertilizer.

    Raises:
        UnknownClassificationError: If the method has no factor for the land cover
    """
    factors = MANURE_AMMONIA_FACTORS.get(method)
    factor = factors.get(land_cover) if factors else None
    if factor is None:
        raise UnknownClassificationError(
            f"Unsupported application method {method} for {fertilizer_name} ({fertilizer_id})",
            code="unknown_application_method",
            method=method,
            land_cover=land_cover.value,
            fertilizer_id=fertilizer_id,
        )
    return factor


# -----------------------------------------------------------------------------
# Nitrate leaching
# -----------------------------------------------------------------------------

SANDY_SOILS = frozenset({"dekzand", "dalgrond", "duinzand"})
CLAY_SOILS = frozenset({"zeeklei", "rivierklei", "maasklei", "moerige_klei"})
PEAT_SOILS = frozenset({"veen"})
LOESS_SOILS = frozenset({"loess"})

# (grassland, cropland)
CLAY_LEACHING = (Decimal("0.11"), Decimal("0.33"))
PEAT_LEACHING = (Decimal("0.06"), Decimal("0.17"))
LOESS_LEACHING = (Decimal("0.14"), Decimal("0.74"))

_SANDY_LEACHING_GROUPS: list[tuple[tuple[str, ...], tuple[Decimal, Decimal]]] = [
    (("I", "Ia", "Ic", "II", "IIa", "IIb", "IIc"), (Decimal("0.02"), Decimal("0.04"))),
    (("III", "IIIa"), (Decimal("0.03"), Decimal("0.07"))),
    (("IIIb",), (Decimal("0.1"), Decimal("0.28"))),
    (("IV", "IVu", "IVc"), (Decimal("0.14"), Decimal("0.38"))),
    (("V", "Va", "Vao", "Vad", "Vb", "Vbo", "Vbd", "sV", "sVb"), (Decimal("0.16"), Decimal("0.44"))),
    (("VI", "VIo", "VId"), (Decimal("0.21"), Decimal("0.58"))),
    (("VII", "VIIo", "VIId"), (Decimal("0.27"), Decimal("0.74"))),
    (("VIII", "VIIIo", "VIIId"), (Decimal("0.32"), Decimal("0.89"))),
]

SANDY_LEACHING_BY_GWL: dict[str, tuple[Decimal, Decimal]] = {
    gwl_class: factors for classes, factors in _SANDY_LEACHING_GROUPS for gwl_class in classes
}


def _as_land_cover(land_cover: LandCover | str) -> LandCover:
    if isinstance(land_cover, LandCover):
        return land_cover
    try:
        return LandCover(land_cover)
    except ValueError:
        raise UnknownClassificationError(
            f"Unknown land type: {land_cover}", code="unknown_land_type", land_cover=land_cover
        ) from None


def determine_nitrate_leaching_factor(
    land_cover: LandCover | str,
    soil_type: str | None,
    gwl_class: str | None,
) -> Decimal:
    """
    Fraction of the nitrogen surplus that leaches as nitrate.

    Bare soil uses the cropland fraction.

    Raises:
        UnknownClassificationError: For an unknown land cover, soil type, or
            groundwater class on sandy soil
    """
    cover = _as_land_cover(land_cover)
    column = 0 if cover is LandCover.GRASSLAND else 1

    if soil_type in SANDY_SOILS:
        factors = SANDY_LEACHING_BY_GWL.get(gwl_class)
        if factors is None:
            raise UnknownClassificationError(
                f"Unknown GWL class '{gwl_class}' for sandy soil '{soil_type}'",
                code="unknown_gwl_class",
                gwl_class=gwl_class,
                soil_type=soil_type,
            )
    elif soil_type in CLAY_SOILS:
        factors = CLAY_LEACHING
    elif soil_type in PEAT_SOILS:
        factors = PEAT_LEACHING
    elif soil_type in LOESS_SOILS:
        factors = LOESS_LEACHING
    else:
        raise UnknownClassificationError(
            f"Unknown soil type: {soil_type}", code="unknown_soil_type", soil_type=soil_type
        )

    return factors[column]
