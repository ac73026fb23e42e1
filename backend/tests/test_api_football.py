"""
Unit Tests for the API-Football data source

Requests are served by an httpx.MockTransport, no network involved.
"""

import asyncio

import httpx
import pytest

from phoenix.domain.exceptions import DataSourceNotConfiguredError, UpstreamFetchError
from phoenix.infrastructure.data_sources.api_football import APIFootballConfig, APIFootballSource


def make_source(handler, api_key="test-key", timezone="Africa/Casablanca"):
    config = APIFootballConfig(
        api_key=api_key,
        base_url="https://api.test",
        timezone=timezone,
        transport=httpx.MockTransport(handler),
    )
    return APIFootballSource(config)


class TestRequests:
    def test_daily_fixtures_sends_key_date_and_timezone(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"errors": [], "response": [{"fixture": {"id": 1}}]})

        source = make_source(handler)
        fixtures = asyncio.run(source.get_daily_fixtures("2026-10-18"))

        assert fixtures == [{"fixture": {"id": 1}}]
        request = seen[0]
        assert request.url.path == "/fixtures"
        assert request.headers["x-apisports-key"] == "test-key"
        assert request.url.params["date"] == "2026-10-18"
        assert request.url.params["timezone"] == "Africa/Casablanca"
        assert source.request_count == 1

    def test_team_last_fixtures_params(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"response": []})

        asyncio.run(make_source(handler).get_team_last_fixtures("33", last=10))

        assert seen[0].url.params["team"] == "33"
        assert seen[0].url.params["last"] == "10"

    def test_injuries_and_top_scorers_endpoints(self):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json={"response": []})

        source = make_source(handler)
        asyncio.run(source.get_fixture_injuries("100"))
        asyncio.run(source.get_top_scorers("39", 2026))

        assert paths == ["/injuries", "/players/topscorers"]

    def test_top_scorers_without_season_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        source = make_source(handler)

        assert asyncio.run(source.get_top_scorers("39", None)) == []
        assert source.request_count == 0

    def test_missing_response_field_is_empty(self):
        source = make_source(lambda request: httpx.Response(200, json={"results": 0}))

        assert asyncio.run(source.get_fixture_injuries("1")) == []


class TestFailures:
    def test_not_configured(self):
        source = make_source(lambda request: httpx.Response(200, json={}), api_key="")

        assert source.is_configured is False
        with pytest.raises(DataSourceNotConfiguredError):
            asyncio.run(source.get_daily_fixtures("2026-10-18"))

    def test_http_error_status(self):
        source = make_source(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(UpstreamFetchError) as exc_info:
            asyncio.run(source.get_daily_fixtures("2026-10-18"))
        assert exc_info.value.status_code == 503

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamFetchError):
            asyncio.run(make_source(handler).get_daily_fixtures("2026-10-18"))

    def test_api_errors_field(self):
        body = {"errors": {"token": "Error/Missing application key"}, "response": []}
        source = make_source(lambda request: httpx.Response(200, json=body))

        with pytest.raises(UpstreamFetchError):
            asyncio.run(source.get_daily_fixtures("2026-10-18"))

    def test_invalid_json(self):
        source = make_source(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamFetchError):
            asyncio.run(source.get_daily_fixtures("2026-10-18"))
