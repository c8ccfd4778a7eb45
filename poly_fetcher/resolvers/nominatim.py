"""OpenStreetMap Nominatim resolver.

Concrete ``AreaResolver`` backed by the Nominatim search API with
``polygon_geojson=1``, so every candidate carries its full boundary
geometry.

Each lookup is a single ``GET``; there are no retries.  When no client
is injected a short-lived ``httpx.AsyncClient`` is opened per lookup,
which keeps concurrent lookups independent of each other.

Configuration:
    The URL template defaults to the public instance
    (``https://nominatim.openstreetmap.org/search``).  Override via
    ``FetcherConfig.search_url_template`` to point at a self-hosted one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
import pydantic

from poly_fetcher.core.constants import AREA_PLACEHOLDER, NOMINATIM
from poly_fetcher.core.log import get_logger
from poly_fetcher.models.geometry import SelectedGeometry
from poly_fetcher.models.nominatim import SearchResponse
from poly_fetcher.resolvers.base import (
    AreaResolver,
    EmptyResponseError,
    LookupTransportError,
    MalformedResponseError,
    NoResultsError,
)
from poly_fetcher.resolvers.selection import get_selection_policy

if TYPE_CHECKING:
    from poly_fetcher.core.config import FetcherConfig
    from poly_fetcher.models.nominatim import NominatimPlace


class NominatimResolver(AreaResolver):
    """Nominatim search adapter.

    Args:
        config: Fetcher configuration.
        client: Optional shared ``httpx.AsyncClient``.  The resolver does
            not close a client it did not create.
    """

    name = NOMINATIM

    def __init__(
        self,
        config: FetcherConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config)
        self._client = client
        self._select = get_selection_policy(config.selection_policy)
        self._log = get_logger(__name__, config.log_level_no)

    def build_url(self, area: str) -> str:
        """Substitute *area* into the search URL template."""
        return self.config.search_url_template.replace(AREA_PLACEHOLDER, quote(area, safe=""))

    async def resolve(self, area: str) -> SelectedGeometry | None:
        """Look up *area* on Nominatim and select one boundary geometry.

        Raises:
            LookupTransportError: Connection error, timeout or HTTP error status.
            EmptyResponseError: Empty or non-JSON body.
            MalformedResponseError: JSON that is not a list of candidates.
            NoResultsError: Empty candidate list.
        """
        body = await self._fetch(area)
        places = self._decode(area, body)

        if not places:
            raise NoResultsError(self.name, area)

        selected = self._select(places)
        if selected is None or selected.geojson is None:
            self._log.info(
                "No qualifying candidate | area=%s | candidates=%d | policy=%s",
                area,
                len(places),
                self.config.selection_policy,
            )
            return None

        self._log.debug(
            "Selected candidate | area=%s | type=%s | display_name=%s",
            area,
            selected.geojson.type,
            selected.display_name,
        )
        return SelectedGeometry(
            area=area,
            geometry_type=selected.geojson.type,
            coordinates=list(selected.geojson.coordinates),
            display_name=selected.display_name,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch(self, area: str) -> bytes:
        """GET the search URL for *area* and return the raw body."""
        url = self.build_url(area)
        headers = {"User-Agent": self.config.user_agent, "Accept": "application/json"}
        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self.config.request_timeout_s, follow_redirects=True
                ) as client:
                    response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._log.debug("Lookup failed | area=%s | url=%s | error=%s", area, url, exc)
            raise LookupTransportError(self.name, area) from exc

        return response.content

    def _decode(self, area: str, body: bytes) -> list[NominatimPlace]:
        """Decode and validate a search response body."""
        if not body.strip():
            raise EmptyResponseError(self.name, area)
        try:
            return SearchResponse.validate_json(body)
        except pydantic.ValidationError as exc:
            if any(err["type"] == "json_invalid" for err in exc.errors()):
                raise EmptyResponseError(self.name, area) from exc
            raise MalformedResponseError(
                self.name, area, f"{exc.error_count()} validation error(s)"
            ) from exc
