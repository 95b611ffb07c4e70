"""Tests for nitrogen emission: ammonia from fertilizers and residues, nitrate."""

from datetime import date
from decimal import Decimal

import pytest

from nbalance.core.errors import MissingReferenceError, UnknownClassificationError
from nbalance.data.models import (
    Catalogue,
    Cultivation,
    CultivationDetail,
    FertilizerApplication,
    FertilizerDetail,
    Harvest,
    HarvestableAnalysis,
)
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.emission import (
    calculate_nitrogen_emission,
    calculate_nitrogen_emission_via_ammonia,
    calculate_nitrogen_emission_via_nitrate,
)
from nbalance.nitrogen.emission.ammonia import (
    calculate_nitrogen_emission_via_ammonia_by_fertilizers,
    calculate_nitrogen_emission_via_ammonia_by_residues,
    determine_mineral_ammonia_emission_factor,
    determine_residue_ammonia_emission_factor,
)

APPLICATION_DAY = date(2023, 5, 1)

GRASS = Cultivation(id="grass", catalogue_id="nl_265", start=date(2023, 1, 1))
MAIZE = Cultivation(id="maize", catalogue_id="nl_259", start=date(2023, 4, 15), end=date(2023, 10, 1))


def application(id, catalogue_id, amount, method=None):
    return FertilizerApplication(
        id=id,
        catalogue_id=catalogue_id,
        amount=amount,
        date=APPLICATION_DAY,
        method=method,
        fertilizer_id=f"fert_{id}",
        name=catalogue_id,
    )


# -----------------------------------------------------------------------------
# Ammonia from fertilizers
# -----------------------------------------------------------------------------


class TestMineralAmmoniaFactor:
    def test_calcium_ammonium_nitrate(self):
        detail = FertilizerDetail(catalogue_id="x", n_total=100, n_nitrate=50, n_ammonium=50, s_content=10)
        assert determine_mineral_ammonia_emission_factor(detail) == Decimal("0.0060296")

    def test_factor_is_a_fraction_not_a_percentage(self):
        """The quadratic is in percent; the returned factor is the fraction of total N."""
        detail = FertilizerDetail(catalogue_id="x", n_total=100, n_nitrate=50, n_ammonium=50, s_content=10)
        factor = determine_mineral_ammonia_emission_factor(detail)
        assert factor * 100 == Decimal("0.60296")
        assert factor < Decimal("0.01")

    def test_organic_nitrogen_term(self):
        detail = FertilizerDetail(catalogue_id="x", n_total=100, n_nitrate=20, n_ammonium=30, s_content=5)
        assert determine_mineral_ammonia_emission_factor(detail) == Decimal("0.00396037")

    def test_inhibitor_lowers_organic_term(self):
        detail = FertilizerDetail(catalogue_id="x", n_total=100, n_nitrate=0, n_ammonium=0)
        without = determine_mineral_ammonia_emission_factor(detail)
        with_inhibitor = determine_mineral_ammonia_emission_factor(detail, inhibitor=True)
        assert without == Decimal("0.007021")
        assert with_inhibitor == Decimal("0.003166")


class TestFertilizerAmmonia:
    """Tests for ammonia emission per application."""

    def test_mineral_by_formula(self, cultivation_details, fertilizer_details):
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [], [application("app1", "mineral_can", 1000)], cultivation_details, fertilizer_details
        )
        assert result.mineral.total == Decimal("-0.60296")

    def test_mineral_predefined_factor(self, cultivation_details, fertilizer_details):
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [], [application("app1", "mineral_ef", 500)], cultivation_details, fertilizer_details
        )
        assert result.mineral.total == Decimal(-6)

    def test_mineral_factor_is_clamped(self, cultivation_details):
        fertilizer_details = Catalogue(
            [FertilizerDetail(catalogue_id="odd", fertilizer_type="mineral", n_total=100, ef_ammonia=1.5)]
        )
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [], [application("app1", "odd", 100)], cultivation_details, fertilizer_details
        )
        assert result.mineral.total == Decimal(-10)

    def test_manure_on_grassland(self, cultivation_details, fertilizer_details):
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [GRASS],
            [application("app1", "cattle_slurry", 2000, "broadcasting")],
            cultivation_details,
            fertilizer_details,
        )
        assert result.manure.total == Decimal("-27.2")

    def test_manure_on_cropland(self, cultivation_details, fertilizer_details):
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [MAIZE],
            [application("app1", "cattle_slurry", 1000, "incorporation")],
            cultivation_details,
            fertilizer_details,
        )
        assert result.manure.total == Decimal("-4.4")

    def test_compost_on_cropland(self, cultivation_details, fertilizer_details):
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [MAIZE],
            [application("app1", "green_compost", 1500, "incorporation")],
            cultivation_details,
            fertilizer_details,
        )
        assert result.compost.total == Decimal("-4.95")

    def test_other_on_bare_soil(self, cultivation_details, fertilizer_details):
        """Fertilizers of no known class are treated like manure."""
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [],
            [application("app1", "vinasse", 1000, "slotted coulter")],
            cultivation_details,
            fertilizer_details,
        )
        assert result.other.total == Decimal("-2.4")

    def test_land_cover_on_application_date(self, cultivation_details, fertilizer_details):
        """Maize sown after the application does not count."""
        late_maize = Cultivation(id="maize", catalogue_id="nl_259", start=date(2023, 5, 2))
        result = calculate_nitrogen_emission_via_ammonia_by_fertilizers(
            [late_maize],
            [application("app1", "cattle_slurry", 1000, "injection")],
            cultivation_details,
            fertilizer_details,
        )
        # bare soil injection factor 0.02
        assert result.manure.total == Decimal("-0.4")

    def test_unknown_method_raises(self, cultivation_details, fertilizer_details):
        with pytest.raises(UnknownClassificationError) as exc_info:
            calculate_nitrogen_emission_via_ammonia_by_fertilizers(
                [GRASS],
                [application("app1", "cattle_slurry", 1000, "helicopter")],
                cultivation_details,
                fertilizer_details,
            )
        assert exc_info.value.code == "unknown_application_method"
        assert str(exc_info.value) == "Unsupported application method helicopter for cattle_slurry (fert_app1)"

    def test_missing_fertilizer_raises(self, cultivation_details, fertilizer_details):
        with pytest.raises(MissingReferenceError):
            calculate_nitrogen_emission_via_ammonia_by_fertilizers(
                [], [application("app1", "unknown", 1000)], cultivation_details, fertilizer_details
            )


# -----------------------------------------------------------------------------
# Ammonia from crop residues
# -----------------------------------------------------------------------------


@pytest.fixture
def residue_details():
    return Catalogue(
        [
            CultivationDetail(
                catalogue_id="wheat", crop_rotation="cereal", default_yield=1000, harvest_index=0.4, n_residue=14
            ),
            CultivationDetail(
                catalogue_id="low_n", crop_rotation="cereal", default_yield=1000, harvest_index=0.4, n_residue=10
            ),
            CultivationDetail(
                catalogue_id="no_index", crop_rotation="other", default_yield=1000, harvest_index=0, n_residue=14
            ),
        ]
    )


def residue_cultivation(catalogue_id="wheat", crop_residue=True):
    return Cultivation(id="c1", catalogue_id=catalogue_id, start=date(2023, 3, 1), crop_residue=crop_residue)


class TestResidueAmmonia:
    """Tests for ammonia emission from residues left on the field."""

    def test_factor(self):
        assert determine_residue_ammonia_emission_factor(Decimal(14)) == Decimal("0.0032")
        assert determine_residue_ammonia_emission_factor(Decimal(10)) == Decimal(0)
        assert determine_residue_ammonia_emission_factor(Decimal(1000)) == Decimal(1)

    def test_default_yield(self, residue_details):
        result = calculate_nitrogen_emission_via_ammonia_by_residues([residue_cultivation()], [], residue_details)
        assert result.total == Decimal("-0.0672")

    def test_harvest_yield(self, residue_details):
        harvests = [Harvest(id="h1", cultivation_id="c1", analyses=(HarvestableAnalysis(yield_kg_ha=2000),))]
        result = calculate_nitrogen_emission_via_ammonia_by_residues(
            [residue_cultivation()], harvests, residue_details
        )
        assert result.total == Decimal("-0.1344")

    def test_harvest_without_yield_uses_default(self, residue_details):
        harvests = [
            Harvest(id="h1", cultivation_id="c1", analyses=(HarvestableAnalysis(yield_kg_ha=2000),)),
            Harvest(id="h2", cultivation_id="c1"),
        ]
        result = calculate_nitrogen_emission_via_ammonia_by_residues(
            [residue_cultivation()], harvests, residue_details
        )
        # mean yield 1500
        assert result.total == Decimal("-0.1008")

    @pytest.mark.parametrize("crop_residue", [None, False])
    def test_residue_removed(self, residue_details, crop_residue):
        result = calculate_nitrogen_emission_via_ammonia_by_residues(
            [residue_cultivation(crop_residue=crop_residue)], [], residue_details
        )
        assert result.total == Decimal(0)

    def test_zero_harvest_index(self, residue_details):
        result = calculate_nitrogen_emission_via_ammonia_by_residues(
            [residue_cultivation("no_index")], [], residue_details
        )
        assert result.total == Decimal(0)

    def test_low_residue_nitrogen(self, residue_details):
        result = calculate_nitrogen_emission_via_ammonia_by_residues(
            [residue_cultivation("low_n")], [], residue_details
        )
        assert result.total == Decimal(0)


# -----------------------------------------------------------------------------
# Nitrate and totals
# -----------------------------------------------------------------------------


class TestNitrate:
    def test_always_zero(self, cultivation_details):
        soil = SoilParameters(soil_type="dekzand", gwl_class="VII")
        result = calculate_nitrogen_emission_via_nitrate([GRASS], soil, cultivation_details)
        assert result.total == Decimal(0)


class TestNitrogenEmission:
    def test_total_is_sum_of_parts(self, cultivation_details, fertilizer_details):
        applications = [
            application("app1", "mineral_ef", 500),
            application("app2", "cattle_slurry", 2000, "broadcasting"),
        ]
        emission = calculate_nitrogen_emission(
            [GRASS], [], applications, SoilParameters(), cultivation_details, fertilizer_details
        )

        assert emission.ammonia.fertilizers.mineral.total == Decimal(-6)
        assert emission.ammonia.fertilizers.manure.total == Decimal("-27.2")
        assert emission.ammonia.residues.total == Decimal(0)
        assert emission.ammonia.grazing is None
        assert emission.nitrate.total == Decimal(0)
        assert emission.total == Decimal("-33.2")

    def test_ammonia_total(self, cultivation_details, fertilizer_details):
        ammonia = calculate_nitrogen_emission_via_ammonia(
            [GRASS], [], [application("app1", "mineral_ef", 500)], cultivation_details, fertilizer_details
        )
        assert ammonia.total == Decimal(-6)
