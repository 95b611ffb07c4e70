"""Core module - configuration, decimals, errors and raster access."""

from nbalance.core import decimals
from nbalance.core.config import get_deposition_url, settings
from nbalance.core.errors import (
    InputCollectionError,
    MissingReferenceError,
    MissingSoilParameterError,
    NitrogenBalanceError,
    RasterSourceError,
    UnknownClassificationError,
)
from nbalance.core.raster import GeoTiffRaster, RasterCache

__all__ = [
    "decimals",
    "settings",
    "get_deposition_url",
    # Errors
    "NitrogenBalanceError",
    "MissingReferenceError",
    "MissingSoilParameterError",
    "UnknownClassificationError",
    "RasterSourceError",
    "InputCollectionError",
    # Raster access
    "GeoTiffRaster",
    "RasterCache",
]
