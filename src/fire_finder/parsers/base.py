"""Abstract base parser for provider responses."""

from __future__ import annotations

import abc

from fire_finder.models import FireRecord


class RecordParser(abc.ABC):
    """Abstract parser that converts raw provider text → list of FireRecord."""

    @abc.abstractmethod
    def parse(self, raw_payload: str) -> list[FireRecord]:
        """Parse a raw API response into fire records.

        Args:
            raw_payload: The raw response body (text).

        Returns:
            List of FireRecord instances without ``distance_miles``. Rows that
            cannot be parsed are dropped, never raised.
        """
