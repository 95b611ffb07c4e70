"""Tests for land-cover classification."""

from datetime import date

import pytest

from nbalance.core.errors import MissingReferenceError
from nbalance.data.models import Cultivation
from nbalance.nitrogen.landcover import LandCover, active_cultivations, determine_land_cover

DAY = date(2023, 6, 1)


def cultivation(id, catalogue_id, start=date(2023, 1, 1), end=None):
    return Cultivation(id=id, catalogue_id=catalogue_id, start=start, end=end)


class TestDetermineLandCover:
    """Tests for grassland / cropland / bare soil classification."""

    def test_no_cultivation_is_bare_soil(self, cultivation_details):
        assert determine_land_cover(DAY, [], cultivation_details) == LandCover.BARE_SOIL

    def test_grass_is_grassland(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_265")]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.GRASSLAND

    def test_clover_is_grassland(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_800")]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.GRASSLAND

    def test_maize_is_cropland(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_259")]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.CROPLAND

    def test_grassland_wins_over_cropland(self, cultivation_details):
        """Undersown grass counts as grassland."""
        cultivations = [cultivation("c1", "nl_259"), cultivation("c2", "nl_265", start=date(2023, 5, 1))]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.GRASSLAND

    def test_later_cropland_does_not_matter(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_265"), cultivation("c2", "nl_259", start=date(2023, 9, 1))]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.GRASSLAND

    def test_ended_cultivation_is_bare_soil(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_259", end=date(2023, 5, 31))]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.BARE_SOIL

    def test_end_date_is_inclusive(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_259", end=DAY)]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.CROPLAND

    def test_bare_soil_override_code(self, cultivation_details):
        """Catalogue codes for fallow land leave the soil bare despite their rotation."""
        cultivations = [cultivation("c1", "nl_6794")]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.BARE_SOIL

    def test_missing_detail_raises(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_unknown")]
        with pytest.raises(MissingReferenceError, match="Cultivation c1"):
            determine_land_cover(DAY, cultivations, cultivation_details)

    def test_inactive_cultivation_is_not_resolved(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_unknown", start=date(2024, 1, 1))]
        assert determine_land_cover(DAY, cultivations, cultivation_details) == LandCover.BARE_SOIL

    def test_is_deterministic(self, cultivation_details):
        cultivations = [cultivation("c1", "nl_259"), cultivation("c2", "nl_265")]
        results = {determine_land_cover(DAY, cultivations, cultivation_details) for _ in range(3)}
        assert results == {LandCover.GRASSLAND}


class TestActiveCultivations:
    def test_filters_by_day(self):
        cultivations = [
            cultivation("before", "nl_265", start=date(2022, 1, 1), end=date(2022, 12, 31)),
            cultivation("during", "nl_265"),
            cultivation("after", "nl_265", start=date(2023, 7, 1)),
        ]
        assert [c.id for c in active_cultivations(cultivations, DAY)] == ["during"]
