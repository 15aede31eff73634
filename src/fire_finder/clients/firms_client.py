"""Async client for the NASA FIRMS area API."""

from __future__ import annotations

import logging
from datetime import date

import httpx

from fire_finder.errors import NetworkError, ProviderError, ProviderErrorKind
from fire_finder.models import BoundingBox
from fire_finder.sources import SourceConfig

logger = logging.getLogger(__name__)

# FIRMS answers 200 with this text instead of CSV when the key is rejected
INVALID_KEY_MARKER = "Invalid MAP_KEY"


class FIRMSClient:
    """Async HTTP client for ``/api/area/csv/{key}/{source}/{bbox}/{days}[/{date}]``.

    One attempt per call; retry policy belongs to the caller.
    """

    def __init__(self, config: SourceConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def build_url(
        self, bbox: BoundingBox, time_window_days: int, credential: str,
        end_date: date | None = None,
    ) -> str:
        url = (
            f"{self.config.base_url.rstrip('/')}/{credential}/{self.config.name}"
            f"/{bbox.to_query()}/{time_window_days}"
        )
        if end_date is not None:
            url += f"/{end_date.isoformat()}"
        return url

    async def fetch(
        self,
        bbox: BoundingBox,
        time_window_days: int,
        credential: str,
        end_date: date | None = None,
    ) -> str:
        """Fetch fire detections inside ``bbox`` for the trailing day range.

        Args:
            bbox: Area to query.
            time_window_days: Number of trailing days of detections.
            credential: FIRMS MAP_KEY, treated as opaque.
            end_date: Last day of the window. Defaults to today on the provider side.

        Returns:
            Raw CSV text, header included.

        Raises:
            NetworkError: transport failure, timeout or non-2xx status.
            ProviderError: the provider rejected the credential.
        """
        url = self.build_url(bbox, time_window_days, credential, end_date)
        logger.info("Fetching from FIRMS: %s", _mask(url, credential))

        client = await self._get_client()
        try:
            resp = await client.get(url)
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"FIRMS API error: request timed out after {self.config.timeout_seconds:g}s"
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"FIRMS API error: {exc.__class__.__name__}: {exc}") from exc
        except httpx.InvalidURL as exc:
            # Raised before sending, e.g. a MAP_KEY with a stray control character
            raise NetworkError(
                f"FIRMS API error: invalid request URL ({_mask(str(exc), credential)})"
            ) from exc

        if not resp.is_success:
            raise NetworkError(
                f"FIRMS API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        text = resp.text
        if INVALID_KEY_MARKER in text:
            raise ProviderError(
                ProviderErrorKind.INVALID_CREDENTIAL,
                "Invalid FIRMS MAP_KEY. Set FIRMS_MAP_KEY to a key from "
                "https://firms.modaps.eosdis.nasa.gov/api/",
            )

        logger.debug("FIRMS returned %d bytes", len(text))
        return text


def _mask(url: str, credential: str) -> str:
    if not credential:
        return url
    return url.replace(credential, "***")
