"""
Point sampling of single-band GeoTIFF rasters published over HTTP.

A raster is downloaded once per :class:`RasterCache`, opened in memory with
rasterio, and then serves any number of point queries. Each query reads only
the one-pixel window under the requested coordinate.
"""

import asyncio
import logging
import math

import httpx
from rasterio.errors import RasterioError
from rasterio.io import MemoryFile
from rasterio.windows import Window

from nbalance.core.config import settings
from nbalance.core.errors import RasterSourceError

LOGGER = logging.getLogger(__name__)


class GeoTiffRaster:
    """An opened raster answering nearest-pixel queries in lon/lat."""

    def __init__(self, content: bytes):
        self._memfile = MemoryFile(content)
        try:
            self._dataset = self._memfile.open()
        except RasterioError:
            self._memfile.close()
            raise
        self.width = self._dataset.width
        self.height = self._dataset.height
        self.bounds = self._dataset.bounds
        self.nodata = self._dataset.nodata

    def pixel_at(self, longitude: float, latitude: float) -> tuple[int, int] | None:
        """Column/row of the pixel containing the point, or None when outside the raster."""
        left, bottom, right, top = self.bounds
        width_pct = (longitude - left) / (right - left)
        height_pct = (latitude - bottom) / (top - bottom)
        x = math.floor(self.width * width_pct)
        y = math.floor(self.height * (1 - height_pct))

        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return None
        return x, y

    def sample(self, longitude: float, latitude: float) -> float | None:
        """
        Read the band-1 value at a coordinate.

        Returns:
            The pixel value, or None for points outside the raster, NaN pixels
            and pixels equal to the raster's no-data value.
        """
        pixel = self.pixel_at(longitude, latitude)
        if pixel is None:
            return None

        x, y = pixel
        data = self._dataset.read(1, window=Window(x, y, 1, 1))
        value = float(data[0][0])

        if math.isnan(value):
            return None
        if self.nodata is not None and not math.isnan(self.nodata) and value == self.nodata:
            return None
        return value

    def close(self):
        self._dataset.close()
        self._memfile.close()


class RasterCache:
    """
    Single-flight cache of opened rasters, keyed by URL.

    The first caller for a URL fetches and parses the raster; callers arriving
    while that fetch is in flight await the same task. A failed fetch is not
    cached, so a later call retries. Owned by whoever runs the balance
    computations (one per service instance, typically).
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else settings.raster_timeout_seconds
        self._rasters: dict[str, GeoTiffRaster] = {}
        self._pending: dict[str, asyncio.Future] = {}

    def __contains__(self, url: str) -> bool:
        return url in self._rasters

    async def get(self, url: str) -> GeoTiffRaster:
        """Return the cached raster for a URL, fetching it on first use.

        Raises:
            RasterSourceError: If the raster cannot be fetched or parsed
        """
        raster = self._rasters.get(url)
        if raster is not None:
            return raster

        pending = self._pending.get(url)
        if pending is None:
            pending = asyncio.ensure_future(self._load(url))
            self._pending[url] = pending

        try:
            raster = await pending
        finally:
            self._pending.pop(url, None)

        self._rasters[url] = raster
        return raster

    async def sample(self, url: str, longitude: float, latitude: float) -> float | None:
        raster = await self.get(url)
        return raster.sample(longitude, latitude)

    def invalidate(self, url: str | None = None):
        """Drop one cached raster, or all of them."""
        urls = [url] if url is not None else list(self._rasters)
        for key in urls:
            raster = self._rasters.pop(key, None)
            if raster is not None:
                raster.close()

    def close(self):
        self.invalidate()

    async def _load(self, url: str) -> GeoTiffRaster:
        LOGGER.info("Fetching raster %s", url)
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=self.timeout, follow_redirects=True)
                response.raise_for_status()
        except httpx.HTTPError as e:
            LOGGER.error("Failed to fetch raster %s: %s", url, e)
            raise RasterSourceError(f"Failed to fetch or parse GeoTIFF from {url}: {e}", url=url) from e

        try:
            raster = GeoTiffRaster(response.content)
        except RasterioError as e:
            LOGGER.error("Failed to parse raster %s: %s", url, e)
            raise RasterSourceError(f"Failed to fetch or parse GeoTIFF from {url}: {e}", url=url) from e

        LOGGER.debug("Raster %s opened (%dx%d px)", url, raster.width, raster.height)
        return raster
