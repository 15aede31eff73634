"""Source registry for FIRMS satellite fire-detection products."""

from __future__ import annotations

from dataclasses import dataclass

FIRMS_AREA_CSV_URL = "https://firms.modaps.eosdis.nasa.gov/api/area/csv"


@dataclass
class SourceConfig:
    """Configuration for a single FIRMS data product."""

    name: str                   # FIRMS source token, e.g. "VIIRS_SNPP_NRT"
    description: str
    base_url: str = FIRMS_AREA_CSV_URL
    timeout_seconds: float = 15.0
    format: str = "firms_csv"
    near_real_time: bool = True


SOURCES: dict[str, SourceConfig] = {
    "VIIRS_SNPP_NRT": SourceConfig(
        name="VIIRS_SNPP_NRT",
        description="VIIRS on Suomi NPP, 375 m, near real-time",
    ),
    "VIIRS_NOAA20_NRT": SourceConfig(
        name="VIIRS_NOAA20_NRT",
        description="VIIRS on NOAA-20, 375 m, near real-time",
    ),
    "VIIRS_NOAA21_NRT": SourceConfig(
        name="VIIRS_NOAA21_NRT",
        description="VIIRS on NOAA-21, 375 m, near real-time",
    ),
    "MODIS_NRT": SourceConfig(
        name="MODIS_NRT",
        description="MODIS on Terra/Aqua, 1 km, near real-time",
    ),
    "LANDSAT_NRT": SourceConfig(
        name="LANDSAT_NRT",
        description="Landsat 8/9 OLI, 30 m, US/Canada only",
    ),
    "VIIRS_SNPP_SP": SourceConfig(
        name="VIIRS_SNPP_SP",
        description="VIIRS on Suomi NPP, standard processing",
        near_real_time=False,
    ),
    "MODIS_SP": SourceConfig(
        name="MODIS_SP",
        description="MODIS on Terra/Aqua, standard processing",
        near_real_time=False,
    ),
}

# Higher resolution than MODIS and available worldwide
DEFAULT_SOURCE = "VIIRS_SNPP_NRT"
