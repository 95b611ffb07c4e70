from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Public data bucket holding the deposition rasters (trailing slash required)
    fdm_public_data_url: str = "https://storage.googleapis.com/fdm-public-data/"

    # Only one reference year is published so far
    deposition_year: str = "2022"
    deposition_region: str = "nl"

    # HTTP timeout for fetching the deposition raster (seconds)
    raster_timeout_seconds: float = 60.0

    # Fields evaluated concurrently per batch by the balance aggregator
    field_batch_size: int = 50


settings = Settings()


def get_deposition_url(public_data_url: str | None = None) -> str:
    """Build the URL of the deposition raster for the configured year and region."""
    base = public_data_url or settings.fdm_public_data_url
    return f"{base}deposition/{settings.deposition_region}/ntot_{settings.deposition_year}.tiff"
