"""Terminal presenter built on rich."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table

from fire_finder.models import FireRecord, GeoPoint, SearchSummary

# Same palette as the map markers: red high, orange nominal, yellow low
_CONFIDENCE_COLOR = {
    "high": "red",
    "nominal": "dark_orange",
    "low": "yellow",
}


def _confidence_color(record: FireRecord) -> str:
    return _CONFIDENCE_COLOR[record.confidence_level]


def _fmt_brightness(val: Optional[float]) -> str:
    return f"{val:.1f}" if val is not None else "N/A"


class RichPresenter:
    """Renders searches to a rich Console. Holds only this view's state."""

    def __init__(self, console: Console | None = None, limit: int | None = None):
        self.console = console or Console()
        self.limit = limit
        self.view: Optional[tuple[GeoPoint, int]] = None
        self.user_marker: Optional[GeoPoint] = None
        self.radius: Optional[tuple[GeoPoint, float]] = None
        self.fire_markers: list[FireRecord] = []
        self._status: Optional[Status] = None

    def set_map_view(self, point: GeoPoint, zoom: int) -> None:
        self.view = (point, zoom)

    def render_user_marker(self, point: GeoPoint) -> None:
        self.user_marker = point

    def render_radius(self, point: GeoPoint, radius_miles: float) -> None:
        self.radius = (point, radius_miles)

    def clear_fire_markers(self) -> None:
        self.fire_markers = []

    def render_fire_markers(self, records: Sequence[FireRecord]) -> None:
        self.fire_markers = list(records)
        if not records:
            return
        counts = {level: 0 for level in _CONFIDENCE_COLOR}
        for r in records:
            counts[r.confidence_level] += 1
        self.console.print(
            "  ".join(
                f"[{color}]● {level}: {counts[level]}[/]"
                for level, color in _CONFIDENCE_COLOR.items()
            )
        )

    def render_results_table(self, records: Sequence[FireRecord], summary: SearchSummary) -> None:
        center = summary.center
        lines = [
            f"Center: [bold]{center.latitude:.4f}, {center.longitude:.4f}[/]",
            f"Radius: {summary.radius_miles:g} miles",
            f"Time window: Last {summary.time_window_days} days",
            f"Fires found: [bold]{summary.count}[/]",
        ]
        self.console.print(Panel("\n".join(lines), title="Query Summary", border_style="blue"))

        if not records:
            return

        shown = records[: self.limit] if self.limit else records
        table = Table(title=summary.describe(), expand=True)
        table.add_column("Time (UTC)", width=16)
        table.add_column("Distance (mi)", justify="right")
        table.add_column("Lat", justify="right")
        table.add_column("Lng", justify="right")
        table.add_column("Satellite")
        table.add_column("Confidence", justify="center")
        table.add_column("Brightness (K)", justify="right")

        for r in shown:
            color = _confidence_color(r)
            table.add_row(
                f"{r.acq_date} {r.acq_time}",
                f"{r.distance_miles:.1f}",
                f"{r.latitude:.4f}",
                f"{r.longitude:.4f}",
                escape(r.satellite or "N/A"),
                f"[{color}]{escape(r.confidence)}[/]",
                _fmt_brightness(r.brightness),
            )

        self.console.print(table)
        if len(shown) < len(records):
            self.console.print(f"[dim]… {len(records) - len(shown)} more not shown[/]")

    def show_error(self, message: str) -> None:
        self.console.print(Panel(f"[red]{escape(message)}[/]", title="Error", border_style="red"))

    def show_notice(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/]")

    def show_loading(self, loading: bool) -> None:
        if loading and self._status is None:
            self._status = self.console.status("Fetching fire data…")
            self._status.start()
        elif not loading and self._status is not None:
            self._status.stop()
            self._status = None
