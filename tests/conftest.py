"""Shared test fixtures."""

import sys
from datetime import date
from pathlib import Path

import numpy as np
import pytest
import rasterio
import respx
from rasterio.transform import from_bounds

# Add src/ to path so tests can import nbalance
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nbalance.data.models import (  # noqa: E402
    Catalogue,
    CultivationDetail,
    FertilizerDetail,
    TimeFrame,
)

PUBLIC_DATA_BASE = "https://public-data.example.org"
PUBLIC_DATA_URL = f"{PUBLIC_DATA_BASE}/"
DEPOSITION_PATH = "/deposition/nl/ntot_2022.tiff"
DEPOSITION_URL = f"{PUBLIC_DATA_BASE}{DEPOSITION_PATH}"

NODATA = -9999.0

# 1° x 1° pixels over lon 3-8, lat 50-54; row 0 is the northern edge
DEPOSITION_GRID = [
    [1.0, 2.0, 3.0, 4.0, 5.0],
    [6.0, 7.0, 20.0, 9.0, 10.0],
    [11.0, 12.0, 13.0, 14.0, NODATA],
    [16.0, 17.0, 18.0, 19.0, float("nan")],
]
DEPOSITION_BOUNDS = (3.0, 50.0, 8.0, 54.0)

# Centroids (lon, lat) hitting known pixels of DEPOSITION_GRID
CENTROID_20 = (5.5, 52.5)
CENTROID_NODATA = (7.5, 51.5)
CENTROID_NAN = (7.5, 50.5)
CENTROID_OUTSIDE = (10.0, 52.0)


def write_geotiff(path: Path, grid, bounds=DEPOSITION_BOUNDS, nodata=NODATA) -> Path:
    data = np.asarray(grid, dtype="float32")
    height, width = data.shape
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        width=width,
        height=height,
        count=1,
        dtype="float32",
        crs="EPSG:4326",
        transform=from_bounds(*bounds, width, height),
        nodata=nodata,
    ) as dataset:
        dataset.write(data, 1)
    return path


@pytest.fixture
def deposition_tiff(tmp_path) -> bytes:
    """GeoTIFF bytes of DEPOSITION_GRID."""
    return write_geotiff(tmp_path / "ntot_2022.tiff", DEPOSITION_GRID).read_bytes()


@pytest.fixture
def mock_public_data():
    """Mock the public data bucket."""
    with respx.mock(base_url=PUBLIC_DATA_BASE) as mock:
        yield mock


@pytest.fixture
def year_2023():
    return TimeFrame(start=date(2023, 1, 1), end=date(2023, 12, 31))


@pytest.fixture
def cultivation_details():
    """Cultivation catalogue covering every land cover."""
    return Catalogue(
        [
            CultivationDetail(
                catalogue_id="nl_265",
                crop_rotation="grass",
                default_yield=10000,
                harvest_index=1,
                n_harvestable=25,
                n_residue=0,
            ),
            CultivationDetail(
                catalogue_id="nl_2014",
                crop_rotation="potato",
                default_yield=50000,
                harvest_index=0.6,
                n_harvestable=3.5,
                n_residue=2.5,
            ),
            CultivationDetail(
                catalogue_id="nl_259",
                crop_rotation="maize",
                default_yield=18000,
                harvest_index=0.9,
                n_harvestable=12,
                n_residue=10,
            ),
            CultivationDetail(
                catalogue_id="nl_800",
                crop_rotation="clover",
                default_yield=8000,
                harvest_index=1,
                n_harvestable=40,
                n_fixation=150,
            ),
            CultivationDetail(catalogue_id="nl_6794", crop_rotation="other", default_yield=0, harvest_index=0),
        ],
        kind="cultivation detail",
    )


@pytest.fixture
def fertilizer_details():
    """Fertilizer catalogue with one entry per fertilizer class."""
    return Catalogue(
        [
            FertilizerDetail(
                catalogue_id="mineral_can",
                fertilizer_type="mineral",
                n_total=100,
                n_nitrate=50,
                n_ammonium=50,
                s_content=10,
            ),
            FertilizerDetail(
                catalogue_id="mineral_ef",
                fertilizer_type="mineral",
                n_total=80,
                ef_ammonia=0.15,
            ),
            FertilizerDetail(catalogue_id="cattle_slurry", fertilizer_type="manure", n_total=40, n_ammonium=20),
            FertilizerDetail(catalogue_id="green_compost", fertilizer_type="compost", n_total=30, n_ammonium=15),
            FertilizerDetail(catalogue_id="vinasse", fertilizer_type=None, n_total=30, n_ammonium=10),
        ],
        kind="fertilizer detail",
    )
