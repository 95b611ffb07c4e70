"""
Target value for the nitrogen balance of a field (kg N/ha).

The target depends on land use, soil type and groundwater class:

    grassland on dry sandy soil          80
    grassland elsewhere                 125
    arable land on dry sandy soil        50
    arable land on other sandy soil      70
    arable land on wet sandy soil       125
    arable land on dry clay soil        115
    arable land elsewhere               125

The annual target is scaled by the year fraction of the field's time frame.
"""

from collections.abc import Iterable
from decimal import Decimal

from nbalance.data.models import Catalogue, Cultivation, CultivationDetail, TimeFrame
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.landcover import GRASSLAND_ROTATIONS

SANDY_SOIL_TYPES = frozenset({"dekzand", "dalgrond", "duinzand", "loess"})
CLAY_SOIL_TYPES = frozenset({"zeeklei", "rivierklei", "maasklei", "moerige_klei"})

DRY_GWL_CLASSES = frozenset({"VII", "VIIo", "VIId", "VIII", "VIIIo", "VIIId"})
WET_GWL_CLASSES = frozenset(
    {"I", "Ia", "Ic", "II", "IIa", "IIb", "IIc", "III", "IIIa", "IIIb", "IV", "IVu", "IVc"}
)

GRASSLAND_TARGET_DRY_SAND = Decimal(80)
ARABLE_TARGET_DRY_SAND = Decimal(50)
ARABLE_TARGET_SAND = Decimal(70)
ARABLE_TARGET_DRY_CLAY = Decimal(115)
DEFAULT_TARGET = Decimal(125)


def is_grassland(cultivations: Iterable[Cultivation], cultivation_details: Catalogue[CultivationDetail]) -> bool:
    """True when any of the cultivations is grass or clover."""
    for cultivation in cultivations:
        detail = cultivation_details.resolve(cultivation.catalogue_id, f"Cultivation {cultivation.id}")
        if detail.crop_rotation in GRASSLAND_ROTATIONS:
            return True
    return False


def annual_target(grassland: bool, soil_type: str | None, gwl_class: str | None) -> Decimal:
    sandy = soil_type in SANDY_SOIL_TYPES
    dry = gwl_class in DRY_GWL_CLASSES

    if grassland:
        return GRASSLAND_TARGET_DRY_SAND if sandy and dry else DEFAULT_TARGET

    if sandy:
        if dry:
            return ARABLE_TARGET_DRY_SAND
        if gwl_class in WET_GWL_CLASSES:
            return DEFAULT_TARGET
        return ARABLE_TARGET_SAND
    if soil_type in CLAY_SOIL_TYPES and dry:
        return ARABLE_TARGET_DRY_CLAY
    return DEFAULT_TARGET


def calculate_target_for_nitrogen_balance(
    cultivations: Iterable[Cultivation],
    soil: SoilParameters,
    cultivation_details: Catalogue[CultivationDetail],
    time_frame: TimeFrame,
) -> Decimal:
    """
    Target for the nitrogen balance over the time frame.

    Raises:
        MissingReferenceError: If a cultivation has no catalogue entry
    """
    grassland = is_grassland(cultivations, cultivation_details)
    return annual_target(grassland, soil.soil_type, soil.gwl_class) * time_frame.year_fraction()
