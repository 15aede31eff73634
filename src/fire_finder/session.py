"""Request-scoped search state that sits between the pipeline and a presenter."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional

from fire_finder.errors import FireFinderError
from fire_finder.models import GeoPoint, SearchRequest, SearchResult
from fire_finder.pipeline import SearchPipeline, validate_request
from fire_finder.presenter import SEARCH_ZOOM, Presenter

logger = logging.getLogger(__name__)

NO_DETECTIONS_MESSAGE = "No fires detected in this radius and time window"


class SearchSession:
    """Owns the current location, radius and last result for one presenter.

    Starting a search cancels any search still in flight. Each search carries
    a generation number; a search whose generation is no longer current never
    touches the presenter.
    """

    def __init__(self, pipeline: SearchPipeline, presenter: Presenter, credential: str):
        self.pipeline = pipeline
        self.presenter = presenter
        self.credential = credential

        self.current_location: Optional[GeoPoint] = None
        self.current_radius: Optional[float] = None
        self.last_result: Optional[SearchResult] = None

        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def cancel(self) -> None:
        """Abandon the in-flight search, if any."""
        self._generation += 1
        if self.busy:
            self._inflight.cancel()

    async def search(
        self, request: SearchRequest, end_date: date | None = None,
    ) -> Optional[SearchResult]:
        """Run ``request`` and render it.

        Returns the result, or None when the search failed (the presenter has
        already shown the error) or was superseded by a newer search.
        """
        try:
            validate_request(request)
        except FireFinderError as exc:
            logger.warning("%s", exc)
            self.presenter.show_error(str(exc))
            return None

        self.cancel()
        generation = self._generation

        self.current_location = request.center
        self.current_radius = request.radius_miles

        self.presenter.set_map_view(request.center, SEARCH_ZOOM)
        self.presenter.render_user_marker(request.center)
        self.presenter.render_radius(request.center, request.radius_miles)
        self.presenter.clear_fire_markers()
        self.presenter.show_loading(True)

        task = asyncio.ensure_future(
            self.pipeline.run(request, self.credential, end_date=end_date)
        )
        self._inflight = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Search for (%.4f, %.4f) superseded",
                            request.center.latitude, request.center.longitude)
                return None
            raise
        except FireFinderError as exc:
            if generation != self._generation:
                return None
            logger.error("Error fetching fire data: %s", exc)
            self.presenter.show_error(f"Error fetching fire data: {exc}")
            return None
        finally:
            if generation == self._generation:
                self._inflight = None
                self.presenter.show_loading(False)

        if generation != self._generation:
            return None

        self.last_result = result
        self.presenter.render_fire_markers(result.records)
        self.presenter.render_results_table(result.records, result.summary)
        if result.is_empty:
            self.presenter.show_notice(NO_DETECTIONS_MESSAGE)
        return result
