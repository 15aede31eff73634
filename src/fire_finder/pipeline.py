"""Search pipeline: validate → bounding box → fetch → parse → filter → sort.

The pipeline holds no state between runs. Its only side effect is the single
awaited fetch on the data source; every failure propagates to the caller.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterable, Protocol

from fire_finder.errors import ValidationError
from fire_finder.geo import EARTH_RADIUS_MILES, bounding_box, distance_miles
from fire_finder.models import BoundingBox, FireRecord, GeoPoint, SearchRequest, SearchResult
from fire_finder.parsers.base import RecordParser

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    async def fetch(
        self, bbox: BoundingBox, time_window_days: int, credential: str,
        end_date: date | None = None,
    ) -> str: ...


def filter_by_distance(
    records: Iterable[FireRecord],
    center: GeoPoint,
    radius_miles: float,
    earth_radius_miles: float = EARTH_RADIUS_MILES,
) -> list[FireRecord]:
    """Attach distance from ``center``, keep records within the radius, nearest first.

    Equal distances keep their input order.
    """
    nearby = [
        r.with_distance(distance_miles(center, r.location, earth_radius_miles))
        for r in records
    ]
    nearby = [r for r in nearby if r.distance_miles <= radius_miles]
    nearby.sort(key=lambda r: r.distance_miles)
    return nearby


def validate_request(request: SearchRequest) -> None:
    errors = request.validate()
    if errors:
        raise ValidationError(errors)


class SearchPipeline:
    """Runs one fire search against a data source."""

    def __init__(
        self,
        source: DataSource,
        parser: RecordParser,
        earth_radius_miles: float = EARTH_RADIUS_MILES,
    ):
        self.source = source
        self.parser = parser
        self.earth_radius_miles = earth_radius_miles

    async def run(
        self, request: SearchRequest, credential: str, end_date: date | None = None,
    ) -> SearchResult:
        validate_request(request)

        bbox = bounding_box(request.center, request.radius_miles)
        raw_text = await self.source.fetch(
            bbox, request.time_window_days, credential, end_date=end_date,
        )
        fetched_at = datetime.now(timezone.utc)

        records = self.parser.parse(raw_text)
        nearby = filter_by_distance(
            records, request.center, request.radius_miles, self.earth_radius_miles,
        )
        logger.info(
            "%d of %d detection(s) within %g mi of (%.4f, %.4f)",
            len(nearby), len(records), request.radius_miles,
            request.center.latitude, request.center.longitude,
        )

        return SearchResult(request=request, records=tuple(nearby), fetched_at=fetched_at)
