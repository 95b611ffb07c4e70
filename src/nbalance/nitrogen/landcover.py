"""Land cover of a field on a given day, derived from its active cultivations."""

from collections.abc import Iterable
from datetime import date
from enum import Enum

from nbalance.data.models import Catalogue, Cultivation, CultivationDetail


class LandCover(Enum):
    GRASSLAND = "grassland"
    CROPLAND = "cropland"
    BARE_SOIL = "bare soil"


GRASSLAND_ROTATIONS = frozenset({"grass", "clover"})

CROPLAND_ROTATIONS = frozenset(
    {
        "potato",
        "rapeseed",
        "starch",
        "maize",
        "cereal",
        "sugarbeet",
        "catchcrop",
        "alfalfa",
        "nature",
        "other",
    }
)

# Catalogue codes that leave the soil bare whatever their rotation category
BARE_SOIL_CATALOGUE_CODES = frozenset(
    {
        "nl_6794",
        "nl_662",
        "nl_6798",
        "nl_2300",
        "nl_3802",
        "nl_3801",
    }
)


def active_cultivations(cultivations: Iterable[Cultivation], day: date) -> list[Cultivation]:
    return [cultivation for cultivation in cultivations if cultivation.is_active_on(day)]


def determine_land_cover(
    day: date,
    cultivations: Iterable[Cultivation],
    cultivation_details: Catalogue[CultivationDetail],
) -> LandCover:
    """
    Classify the field on a day as grassland, cropland or bare soil.

    Grassland wins when grass and an arable crop are active together
    (undersowing). A day without active cultivation is bare soil.

    Raises:
        MissingReferenceError: If an active cultivation has no catalogue entry
    """
    has_grassland = False
    has_cropland = False

    for cultivation in active_cultivations(cultivations, day):
        detail = cultivation_details.resolve(cultivation.catalogue_id, f"Cultivation {cultivation.id}")
        if cultivation.catalogue_id in BARE_SOIL_CATALOGUE_CODES:
            continue
        if detail.crop_rotation in GRASSLAND_ROTATIONS:
            has_grassland = True
        elif detail.crop_rotation in CROPLAND_ROTATIONS:
            has_cropland = True

    if has_grassland:
        return LandCover.GRASSLAND
    if has_cropland:
        return LandCover.CROPLAND
    return LandCover.BARE_SOIL
