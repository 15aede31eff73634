"""Tests for the FIRMS area API client."""

from __future__ import annotations

import asyncio
import logging
from datetime import date

import httpx
import pytest

from fire_finder.clients.firms_client import FIRMSClient
from fire_finder.config import Settings
from fire_finder.errors import NetworkError, ProviderError, ProviderErrorKind
from fire_finder.models import BoundingBox
from fire_finder.sources import SOURCES, SourceConfig

BBOX = BoundingBox(min_lat=37.0, max_lat=38.0, min_lng=-122.9, max_lng=-121.9)

CSV_BODY = (
    "latitude,longitude,bright_ti4,acq_date,acq_time,confidence\n"
    "37.5,-122.5,330.1,2024-01-15,0130,h\n"
)


def _client(handler, **config_overrides) -> FIRMSClient:
    config = SourceConfig(name="VIIRS_SNPP_NRT", description="", **config_overrides)
    return FIRMSClient(config, transport=httpx.MockTransport(handler))


def _fetch(client: FIRMSClient, **kwargs) -> str:
    async def run():
        try:
            return await client.fetch(BBOX, 2, "SECRETKEY", **kwargs)
        finally:
            await client.close()
    return asyncio.run(run())


class TestBuildURL:
    def test_path_layout(self):
        client = FIRMSClient(SOURCES["VIIRS_SNPP_NRT"])
        assert client.build_url(BBOX, 2, "KEY") == (
            "https://firms.modaps.eosdis.nasa.gov/api/area/csv/KEY/VIIRS_SNPP_NRT/"
            "-122.9000,37.0000,-121.9000,38.0000/2"
        )

    def test_end_date_appended(self):
        client = FIRMSClient(SOURCES["MODIS_NRT"])
        url = client.build_url(BBOX, 5, "KEY", end_date=date(2024, 1, 15))
        assert url.endswith("/MODIS_NRT/-122.9000,37.0000,-121.9000,38.0000/5/2024-01-15")

    def test_trailing_slash_in_base_url(self):
        config = SourceConfig(name="VIIRS_SNPP_NRT", description="", base_url="http://firms.test/csv/")
        assert FIRMSClient(config).build_url(BBOX, 1, "KEY").startswith("http://firms.test/csv/KEY/")


class TestFetch:
    def test_returns_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=CSV_BODY)

        assert _fetch(_client(handler)) == CSV_BODY
        assert len(seen) == 1
        path = seen[0].url.path
        assert "/SECRETKEY/VIIRS_SNPP_NRT/" in path
        assert path.endswith("/2")

    def test_http_error(self):
        def handler(request):
            return httpx.Response(500)

        with pytest.raises(NetworkError) as exc_info:
            _fetch(_client(handler))
        assert exc_info.value.status_code == 500
        assert "500 Internal Server Error" in str(exc_info.value)

    def test_no_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(NetworkError):
            _fetch(_client(handler))
        assert len(calls) == 1

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as exc_info:
            _fetch(_client(handler))
        assert exc_info.value.status_code is None
        assert "ConnectError" in str(exc_info.value)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(NetworkError, match="timed out after 3s"):
            _fetch(_client(handler, timeout_seconds=3))

    def test_control_character_in_key(self):
        def handler(request):
            return httpx.Response(200, text=CSV_BODY)

        async def run(client):
            try:
                return await client.fetch(BBOX, 2, "KEY\r")
            finally:
                await client.close()

        with pytest.raises(NetworkError, match="invalid request URL"):
            asyncio.run(run(_client(handler)))

    def test_invalid_key_marker(self):
        def handler(request):
            return httpx.Response(200, text="Invalid MAP_KEY.")

        with pytest.raises(ProviderError) as exc_info:
            _fetch(_client(handler))
        assert exc_info.value.kind is ProviderErrorKind.INVALID_CREDENTIAL
        assert "FIRMS_MAP_KEY" in str(exc_info.value)

    def test_credential_masked_in_logs(self, caplog):
        def handler(request):
            return httpx.Response(200, text=CSV_BODY)

        with caplog.at_level(logging.INFO, logger="fire_finder.clients.firms_client"):
            _fetch(_client(handler))
        assert "SECRETKEY" not in caplog.text
        assert "***/VIIRS_SNPP_NRT" in caplog.text


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("FIRMS_MAP_KEY", "FIRMS_BASE_URL", "FIRMS_SOURCE", "FIRMS_TIME_WINDOW_DAYS"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings.from_env()
        assert settings.firms_map_key == ""
        assert settings.firms_source == "VIIRS_SNPP_NRT"
        assert settings.time_window_days == 2
        assert settings.earth_radius_miles == 3958.8
        assert settings.default_center.latitude == 37.7749

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("FIRMS_MAP_KEY", "abc")
        monkeypatch.setenv("FIRMS_BASE_URL", "http://firms.test/csv")
        monkeypatch.setenv("FIRMS_TIME_WINDOW_DAYS", "5")
        monkeypatch.setenv("FIRMS_TIMEOUT_SECONDS", "4.5")
        settings = Settings.from_env()
        assert settings.firms_map_key == "abc"
        assert settings.time_window_days == 5

        config = settings.source_config("MODIS_NRT")
        assert config.name == "MODIS_NRT"
        assert config.base_url == "http://firms.test/csv"
        assert config.timeout_seconds == 4.5

    def test_key_whitespace_stripped(self, monkeypatch):
        monkeypatch.setenv("FIRMS_MAP_KEY", "abc\r\n")
        assert Settings.from_env().firms_map_key == "abc"

    def test_unknown_source_passthrough(self):
        config = Settings().source_config("VIIRS_NOAA22_NRT")
        assert config.name == "VIIRS_NOAA22_NRT"
        assert config.format == "firms_csv"
