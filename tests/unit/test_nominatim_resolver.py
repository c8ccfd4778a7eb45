"""Tests for the NominatimResolver.

All lookups go through ``httpx.MockTransport``; no real network calls.

Covers:
- URL construction from the configured template
- Candidate selection under both policies
- Failure mapping: transport, empty/undecodable body, malformed shape,
  empty result list
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from poly_fetcher.core.config import FetcherConfig
from poly_fetcher.models.geometry import SelectedGeometry
from poly_fetcher.resolvers.base import (
    EmptyResponseError,
    LookupTransportError,
    MalformedResponseError,
    NoResultsError,
    ResolverError,
)
from poly_fetcher.resolvers.nominatim import NominatimResolver

ResolverFactory = Callable[..., NominatimResolver]


class TestBuildUrl:
    """Area names are substituted into the URL template."""

    def test_default_template(self) -> None:
        resolver = NominatimResolver(FetcherConfig())
        url = resolver.build_url("Frankfurt")
        assert url.startswith("https://nominatim.openstreetmap.org/search?q=Frankfurt&")
        assert "polygon_geojson=1" in url
        assert "format=json" in url

    def test_area_is_percent_encoded(self) -> None:
        resolver = NominatimResolver(FetcherConfig())
        url = resolver.build_url("New York/Queens & Co")
        assert "q=New%20York%2FQueens%20%26%20Co&" in url

    def test_custom_template(self) -> None:
        cfg = FetcherConfig(search_url_template="http://localhost:8080/search?format=json&q={area}")
        resolver = NominatimResolver(cfg)
        assert resolver.build_url("Wola") == "http://localhost:8080/search?format=json&q=Wola"


class TestResolveSelection:
    """A successful lookup yields at most one geometry."""

    @pytest.mark.asyncio()
    async def test_selects_administrative_polygon(
        self,
        make_resolver: ResolverFactory,
        frankfurt_payload: list[dict[str, Any]],
    ) -> None:
        geometry = await make_resolver().resolve("Frankfurt")
        assert isinstance(geometry, SelectedGeometry)
        assert geometry.area == "Frankfurt"
        assert geometry.geometry_type == "Polygon"
        assert geometry.coordinates == frankfurt_payload[1]["geojson"]["coordinates"]
        assert geometry.display_name == "Frankfurt am Main, Hessen"

    @pytest.mark.asyncio()
    async def test_selects_multipolygon(self, make_resolver: ResolverFactory) -> None:
        geometry = await make_resolver().resolve("Munich")
        assert geometry is not None
        assert geometry.geometry_type == "MultiPolygon"
        assert geometry.polygon_count == 2

    @pytest.mark.asyncio()
    async def test_point_only_yields_none(self, make_resolver: ResolverFactory) -> None:
        assert await make_resolver().resolve("Mysore") is None

    @pytest.mark.asyncio()
    async def test_first_policy_takes_first_candidate(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver(config=FetcherConfig(selection_policy="first"))
        geometry = await resolver.resolve("Frankfurt")
        assert geometry is not None
        assert geometry.geometry_type == "Point"
        assert geometry.coordinates == [8.68, 50.11]

    @pytest.mark.asyncio()
    async def test_sends_user_agent(
        self,
        frankfurt_payload: list[dict[str, Any]],
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=frankfurt_payload)

        cfg = FetcherConfig(user_agent="boundary-tests/1.0 (ops@example.com)")
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        await NominatimResolver(cfg, client=client).resolve("Frankfurt")

        assert len(seen) == 1
        assert seen[0].headers["User-Agent"] == "boundary-tests/1.0 (ops@example.com)"
        assert seen[0].url.params["q"] == "Frankfurt"


class TestResolveFailures:
    """Each failure mode maps to its own typed error."""

    @pytest.mark.asyncio()
    async def test_connection_error(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": httpx.ConnectError("connection refused")})
        with pytest.raises(LookupTransportError) as exc_info:
            await resolver.resolve("Frankfurt")
        err = exc_info.value
        assert err.message == "error while fetching the polygon from OSM"
        assert err.area == "Frankfurt"
        assert err.retryable is True
        assert err.category == "transient"
        assert isinstance(err.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio()
    async def test_timeout(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": httpx.ReadTimeout("timed out")})
        with pytest.raises(LookupTransportError):
            await resolver.resolve("Frankfurt")

    @pytest.mark.asyncio()
    async def test_http_error_status(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": httpx.Response(503, text="busy")})
        with pytest.raises(LookupTransportError):
            await resolver.resolve("Frankfurt")

    @pytest.mark.asyncio()
    async def test_empty_body(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": httpx.Response(200, content=b"")})
        with pytest.raises(EmptyResponseError, match="no data found in OSM"):
            await resolver.resolve("Frankfurt")

    @pytest.mark.asyncio()
    async def test_undecodable_body(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": httpx.Response(200, text="<html>oops</html>")})
        with pytest.raises(EmptyResponseError):
            await resolver.resolve("Frankfurt")

    @pytest.mark.asyncio()
    async def test_object_instead_of_list(self, make_resolver: ResolverFactory) -> None:
        resolver = make_resolver({"Frankfurt": {"error": "Unable to geocode"}})
        with pytest.raises(MalformedResponseError) as exc_info:
            await resolver.resolve("Frankfurt")
        assert exc_info.value.category == "contract"

    @pytest.mark.asyncio()
    async def test_wrongly_typed_geojson(self, make_resolver: ResolverFactory) -> None:
        payload = [{"type": "administrative", "geojson": {"type": "Polygon", "coordinates": 7}}]
        resolver = make_resolver({"Frankfurt": payload})
        with pytest.raises(MalformedResponseError):
            await resolver.resolve("Frankfurt")

    @pytest.mark.asyncio()
    async def test_empty_result_list(self, make_resolver: ResolverFactory) -> None:
        with pytest.raises(NoResultsError, match="no data available in OSM"):
            await make_resolver().resolve("asdasdasdasd")

    @pytest.mark.asyncio()
    async def test_all_failures_are_resolver_errors(self, make_resolver: ResolverFactory) -> None:
        with pytest.raises(ResolverError) as exc_info:
            await make_resolver().resolve("asdasdasdasd")
        assert str(exc_info.value) == "[nominatim] 'asdasdasdasd': no data available in OSM"
