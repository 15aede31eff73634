"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from fire_finder.geo import EARTH_RADIUS_MILES
from fire_finder.models import GeoPoint
from fire_finder.sources import DEFAULT_SOURCE, FIRMS_AREA_CSV_URL, SOURCES, SourceConfig


@dataclass(frozen=True)
class Settings:
    firms_map_key: str = ""
    firms_base_url: str = FIRMS_AREA_CSV_URL
    firms_source: str = DEFAULT_SOURCE
    time_window_days: int = 2
    timeout_seconds: float = 15.0
    earth_radius_miles: float = EARTH_RADIUS_MILES
    default_radius_miles: float = 100.0
    default_lat: float = 37.7749      # San Francisco
    default_lng: float = -122.4194

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            firms_map_key=os.getenv("FIRMS_MAP_KEY", "").strip(),
            firms_base_url=os.getenv("FIRMS_BASE_URL", FIRMS_AREA_CSV_URL),
            firms_source=os.getenv("FIRMS_SOURCE", DEFAULT_SOURCE),
            time_window_days=int(os.getenv("FIRMS_TIME_WINDOW_DAYS", "2")),
            timeout_seconds=float(os.getenv("FIRMS_TIMEOUT_SECONDS", "15")),
            default_radius_miles=float(os.getenv("FIRE_FINDER_DEFAULT_RADIUS_MILES", "100")),
            default_lat=float(os.getenv("FIRE_FINDER_DEFAULT_LAT", "37.7749")),
            default_lng=float(os.getenv("FIRE_FINDER_DEFAULT_LNG", "-122.4194")),
        )

    @property
    def default_center(self) -> GeoPoint:
        return GeoPoint(self.default_lat, self.default_lng)

    def source_config(self, name: str | None = None) -> SourceConfig:
        """SourceConfig for ``name`` (or the configured source) with URL/timeout overrides.

        Unknown names are passed through so new FIRMS products work without a
        registry update.
        """
        name = name or self.firms_source
        base = SOURCES.get(name) or SourceConfig(name=name, description="")
        return replace(base, base_url=self.firms_base_url, timeout_seconds=self.timeout_seconds)
