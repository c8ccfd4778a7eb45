"""Shared pytest fixtures for the poly-fetcher test suite.

Nominatim is never contacted: resolvers get an ``httpx.AsyncClient``
backed by ``httpx.MockTransport`` which answers from a routing table
keyed by the ``q`` query parameter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from poly_fetcher.core.config import FetcherConfig
from poly_fetcher.resolvers.nominatim import NominatimResolver

# ---------------------------------------------------------------------------
# Sample geometry
# ---------------------------------------------------------------------------

FRANKFURT_RING = [[8.47, 50.02], [8.80, 50.02], [8.80, 50.23], [8.47, 50.23], [8.47, 50.02]]
MUNICH_NORTH_RING = [[11.36, 48.15], [11.72, 48.15], [11.72, 48.25], [11.36, 48.25], [11.36, 48.15]]
MUNICH_SOUTH_RING = [[11.36, 48.06], [11.72, 48.06], [11.72, 48.15], [11.36, 48.15], [11.36, 48.06]]
ROTTERDAM_RING = [[4.40, 51.88], [4.60, 51.88], [4.60, 51.98], [4.40, 51.98], [4.40, 51.88]]


def candidate(
    geometry_type: str,
    coordinates: list[Any],
    *,
    osm_type: str = "administrative",
    osm_class: str = "boundary",
    display_name: str = "",
) -> dict[str, Any]:
    """Build one Nominatim search candidate."""
    return {
        "place_id": 1,
        "class": osm_class,
        "type": osm_type,
        "display_name": display_name,
        "importance": 0.8,
        "geojson": {"type": geometry_type, "coordinates": coordinates},
    }


# ---------------------------------------------------------------------------
# Nominatim payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def frankfurt_payload() -> list[dict[str, Any]]:
    """A city node followed by its administrative Polygon boundary."""
    return [
        candidate(
            "Point",
            [8.68, 50.11],
            osm_type="city",
            osm_class="place",
            display_name="Frankfurt am Main",
        ),
        candidate("Polygon", [FRANKFURT_RING], display_name="Frankfurt am Main, Hessen"),
    ]


@pytest.fixture()
def munich_payload() -> list[dict[str, Any]]:
    """An administrative MultiPolygon boundary with two members."""
    return [
        candidate(
            "MultiPolygon",
            [[MUNICH_NORTH_RING], [MUNICH_SOUTH_RING]],
            display_name="München, Bayern",
        ),
    ]


@pytest.fixture()
def rotterdam_payload() -> list[dict[str, Any]]:
    """A single administrative Polygon boundary."""
    return [candidate("Polygon", [ROTTERDAM_RING], display_name="Rotterdam")]


@pytest.fixture()
def mysore_payload() -> list[dict[str, Any]]:
    """Only a Point candidate, no boundary geometry available."""
    return [
        candidate(
            "Point",
            [76.64, 12.30],
            osm_type="city",
            osm_class="place",
            display_name="Mysuru",
        ),
    ]


@pytest.fixture()
def routes(
    frankfurt_payload: list[dict[str, Any]],
    munich_payload: list[dict[str, Any]],
    rotterdam_payload: list[dict[str, Any]],
    mysore_payload: list[dict[str, Any]],
) -> dict[str, object]:
    """Default routing table: area name -> payload (unknown areas get ``[]``)."""
    return {
        "Frankfurt": frankfurt_payload,
        "Munich": munich_payload,
        "Rotterdam": rotterdam_payload,
        "Mysore": mysore_payload,
    }


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


def _handler_for(routes: dict[str, object]) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.params.get("q", ""), [])
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    return handler


@pytest.fixture()
def make_client() -> Callable[[dict[str, object]], httpx.AsyncClient]:
    """Factory for an ``AsyncClient`` answering from a routing table.

    A route value may be a JSON payload, an ``httpx.Response`` or an
    exception instance to raise from the transport.
    """

    def _factory(table: dict[str, object]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(_handler_for(table)))

    return _factory


@pytest.fixture()
def make_resolver(
    make_client: Callable[[dict[str, object]], httpx.AsyncClient],
    routes: dict[str, object],
) -> Callable[..., NominatimResolver]:
    """Factory for a ``NominatimResolver`` wired to the mock transport."""

    def _factory(
        table: dict[str, object] | None = None,
        config: FetcherConfig | None = None,
    ) -> NominatimResolver:
        return NominatimResolver(
            config or FetcherConfig(),
            client=make_client(routes if table is None else table),
        )

    return _factory
