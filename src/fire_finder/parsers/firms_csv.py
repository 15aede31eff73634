"""Parser for FIRMS comma-delimited area responses (VIIRS, MODIS, Landsat)."""

from __future__ import annotations

import logging
import math

from fire_finder.models import FireRecord, GeoPoint
from fire_finder.parsers.base import RecordParser

logger = logging.getLogger(__name__)

# VIIRS reports I-4 brightness as "bright_ti4", MODIS as "brightness"
BRIGHTNESS_FIELDS = ("bright_ti4", "brightness")

DEFAULT_CONFIDENCE = "n"


class FIRMSCSVParser(RecordParser):
    """Parse FIRMS CSV text → list of FireRecord.

    The first line is the header. Quoting is not supported; FIRMS never quotes.
    Lines whose field count differs from the header, or whose coordinates are
    not numeric, are skipped.
    """

    def parse(self, raw_payload: str) -> list[FireRecord]:
        lines = raw_payload.strip().splitlines()
        if len(lines) < 2:
            return []

        headers = [h.strip() for h in lines[0].split(",")]
        records: list[FireRecord] = []
        skipped = 0

        for line in lines[1:]:
            if not line.strip():
                continue
            values = line.split(",")
            if len(values) != len(headers):
                skipped += 1
                continue
            row = {h: v.strip() for h, v in zip(headers, values)}
            try:
                records.append(self._parse_row(row))
            except (KeyError, ValueError):
                skipped += 1
                continue

        if skipped:
            logger.debug("Skipped %d malformed row(s) of %d", skipped, len(lines) - 1)
        return records

    @staticmethod
    def _parse_row(row: dict[str, str]) -> FireRecord:
        latitude = float(row["latitude"])
        longitude = float(row["longitude"])
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValueError(f"non-finite coordinates {latitude}, {longitude}")

        brightness = None
        for name in BRIGHTNESS_FIELDS:
            if row.get(name):
                brightness = _safe_float(row[name])
                break

        return FireRecord(
            location=GeoPoint(latitude, longitude),
            acq_date=row.get("acq_date", ""),
            acq_time=_pad_time(row.get("acq_time", "")),
            confidence=row.get("confidence") or DEFAULT_CONFIDENCE,
            satellite=row.get("satellite") or None,
            brightness=brightness,
            frp=_safe_float(row.get("frp")),
            daynight=row.get("daynight") or None,
        )


def _pad_time(val: str) -> str:
    # FIRMS drops leading zeros for early-morning passes ("130" → "0130")
    return val.zfill(4) if val.isdigit() else val


def _safe_float(val) -> float | None:
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None
