"""Presentation sink the search session drives."""

from __future__ import annotations

from typing import Protocol, Sequence

from fire_finder.models import FireRecord, GeoPoint, SearchSummary

# Zoom level used when centering on a searched point
SEARCH_ZOOM = 8


class Presenter(Protocol):
    """Anything that can show a search: a map widget, a terminal, a test double."""

    def set_map_view(self, point: GeoPoint, zoom: int) -> None: ...

    def render_user_marker(self, point: GeoPoint) -> None: ...

    def render_radius(self, point: GeoPoint, radius_miles: float) -> None: ...

    def clear_fire_markers(self) -> None: ...

    def render_fire_markers(self, records: Sequence[FireRecord]) -> None: ...

    def render_results_table(self, records: Sequence[FireRecord], summary: SearchSummary) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_notice(self, message: str) -> None: ...

    def show_loading(self, loading: bool) -> None: ...
