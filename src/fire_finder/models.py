"""Data models for fire-detection searches."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, asdict, field, replace
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """WGS84 point in decimal degrees."""

    latitude: float             # [-90, 90]
    longitude: float            # [-180, 180]


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def to_query(self) -> str:
        """Serialize as ``west,south,east,north`` with 4 decimals.

        Latitudes are clamped to the poles. A box that crosses the antimeridian
        asks for the full longitude band, so detections on the far side are
        still fetched; the distance filter discards the excess.
        """
        if self.min_lng < -180.0 or self.max_lng > 180.0:
            west, east = -180.0, 180.0
        else:
            west, east = self.min_lng, self.max_lng
        south = max(self.min_lat, -90.0)
        north = min(self.max_lat, 90.0)
        return f"{west:.4f},{south:.4f},{east:.4f},{north:.4f}"


@dataclass(frozen=True)
class SearchRequest:
    """One search invocation: where, how far, how many trailing days."""

    center: GeoPoint
    radius_miles: float
    time_window_days: int = 2

    def validate(self) -> list[str]:
        """Return a list of error messages (empty = valid)."""
        errors: list[str] = []
        lat, lng = self.center.latitude, self.center.longitude

        # NaN fails every comparison, so check finiteness first
        if not math.isfinite(lat) or not -90 <= lat <= 90:
            errors.append(f"latitude {lat} out of range [-90, 90]")
        if not math.isfinite(lng) or not -180 <= lng <= 180:
            errors.append(f"longitude {lng} out of range [-180, 180]")

        if not math.isfinite(self.radius_miles) or self.radius_miles <= 0:
            errors.append(f"radius_miles {self.radius_miles} must be a positive number")

        if not isinstance(self.time_window_days, int) or self.time_window_days < 1:
            errors.append(f"time_window_days {self.time_window_days} must be an integer >= 1")

        return errors


_HIGH_CONFIDENCE = ("h", "high")
_LOW_CONFIDENCE = ("l", "low")


@dataclass(frozen=True)
class FireRecord:
    """A single satellite fire detection."""

    location: GeoPoint
    acq_date: str                       # YYYY-MM-DD
    acq_time: str                       # HHMM, zero-padded, UTC
    confidence: str = "n"               # "h", "n", "l" or a provider word/number
    satellite: Optional[str] = None
    brightness: Optional[float] = None  # Kelvin
    frp: Optional[float] = None         # Fire radiative power, MW
    daynight: Optional[str] = None      # "D" or "N"

    # Set by the distance filter, never by the parser
    distance_miles: Optional[float] = None

    @property
    def latitude(self) -> float:
        return self.location.latitude

    @property
    def longitude(self) -> float:
        return self.location.longitude

    @property
    def confidence_level(self) -> str:
        """Fold provider tokens into "high", "nominal" or "low"."""
        token = self.confidence.lower()
        if token in _HIGH_CONFIDENCE:
            return "high"
        if token in _LOW_CONFIDENCE:
            return "low"
        return "nominal"

    def with_distance(self, distance: float) -> FireRecord:
        return replace(self, distance_miles=distance)


@dataclass(frozen=True)
class SearchSummary:
    center: GeoPoint
    radius_miles: float
    time_window_days: int
    count: int

    def describe(self) -> str:
        plural = "" if self.count == 1 else "s"
        return f"Found {self.count} fire detection{plural} within {self.radius_miles:g} miles"


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one completed search, records ascending by distance."""

    request: SearchRequest
    records: tuple[FireRecord, ...]
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def summary(self) -> SearchSummary:
        return SearchSummary(
            center=self.request.center,
            radius_miles=self.request.radius_miles,
            time_window_days=self.request.time_window_days,
            count=len(self.records),
        )

    @property
    def is_empty(self) -> bool:
        return not self.records

    def to_json(self) -> str:
        d = asdict(self)
        d["fetched_at"] = self.fetched_at.isoformat()
        d["summary"] = asdict(self.summary)
        return json.dumps(d)
