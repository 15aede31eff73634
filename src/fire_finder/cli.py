"""CLI entrypoint for fire-finder."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import date, datetime

import click
from rich.console import Console
from rich.table import Table

from fire_finder.clients.firms_client import FIRMSClient
from fire_finder.config import Settings
from fire_finder.console import RichPresenter
from fire_finder.errors import ValidationError
from fire_finder.models import GeoPoint, SearchRequest, SearchResult
from fire_finder.parsers import PARSER_MAP
from fire_finder.pipeline import SearchPipeline, validate_request
from fire_finder.session import SearchSession
from fire_finder.sources import SOURCES

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _search_options(f):
    """Options shared by ``search`` and ``watch``."""
    options = [
        click.option("--lat", type=float, default=None, help="Center latitude (default from config)."),
        click.option("--lng", type=float, default=None, help="Center longitude (default from config)."),
        click.option("--radius", type=float, default=None, help="Search radius in miles."),
        click.option("--days", type=int, default=None, help="Trailing days of detections."),
        click.option("--source", default=None, help="FIRMS source, e.g. VIIRS_SNPP_NRT."),
        click.option("--date", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]),
                     default=None, help="Last day of the window (YYYY-MM-DD)."),
        click.option("--limit", default=50, help="Max table rows to display."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_request(settings: Settings, lat, lng, radius, days) -> SearchRequest:
    request = SearchRequest(
        center=GeoPoint(
            settings.default_lat if lat is None else lat,
            settings.default_lng if lng is None else lng,
        ),
        radius_miles=settings.default_radius_miles if radius is None else radius,
        time_window_days=settings.time_window_days if days is None else days,
    )
    try:
        validate_request(request)
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    return request


def _require_key(settings: Settings) -> None:
    if not settings.firms_map_key:
        raise click.ClickException(
            "FIRMS_MAP_KEY is not set. Get a key from https://firms.modaps.eosdis.nasa.gov/api/"
        )


async def _run_searches(
    settings: Settings,
    source: str | None,
    presenter: RichPresenter,
    request: SearchRequest,
    end_date: date | None,
    iterations: int = 1,
    refresh: float = 0,
) -> SearchResult | None:
    """Run ``iterations`` searches through one session (0 = forever)."""
    client = FIRMSClient(settings.source_config(source))
    pipeline = SearchPipeline(client, PARSER_MAP[client.config.format], settings.earth_radius_miles)
    session = SearchSession(pipeline, presenter, settings.firms_map_key)

    result = None
    count = 0
    try:
        while True:
            result = await session.search(request, end_date=end_date)
            count += 1
            if iterations and count >= iterations:
                return result
            await asyncio.sleep(refresh)
    finally:
        await client.close()


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    """Fire Finder — nearby satellite fire detections from NASA FIRMS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@cli.command()
@_search_options
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON on stdout.")
def search(lat, lng, radius, days, source, end_date, limit, as_json):
    """Find fire detections within a radius of a point."""
    settings = Settings.from_env()
    _require_key(settings)
    request = _build_request(settings, lat, lng, radius, days)

    # Keep stdout clean for JSON consumers
    presenter = RichPresenter(Console(stderr=as_json), limit=limit)
    result = asyncio.run(
        _run_searches(settings, source, presenter, request, _as_date(end_date))
    )
    if result is None:
        sys.exit(1)
    if as_json:
        click.echo(result.to_json())


@cli.command()
@_search_options
@click.option("--refresh", default=600, help="Refresh interval in seconds.")
@click.option("--iterations", default=0, help="Stop after N searches (0 = run until Ctrl-C).")
def watch(lat, lng, radius, days, source, end_date, limit, refresh, iterations):
    """Re-run a search on an interval."""
    settings = Settings.from_env()
    _require_key(settings)
    request = _build_request(settings, lat, lng, radius, days)
    presenter = RichPresenter(limit=limit)

    try:
        asyncio.run(_run_searches(
            settings, source, presenter, request, _as_date(end_date),
            iterations=iterations, refresh=refresh,
        ))
    except KeyboardInterrupt:
        click.echo("\nStopped.")


@cli.command()
def sources():
    """List known FIRMS satellite sources."""
    table = Table(title="FIRMS Sources")
    table.add_column("Source", style="bold")
    table.add_column("Description")
    table.add_column("NRT", justify="center")
    for config in SOURCES.values():
        table.add_row(config.name, config.description, "yes" if config.near_real_time else "no")
    Console().print(table)
