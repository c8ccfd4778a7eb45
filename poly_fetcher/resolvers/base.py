"""AreaResolver abstract base class.

Defines the contract every area resolver must implement.  The
aggregator talks exclusively to this interface; it never knows which
geocoding service is behind it.

A resolver turns one free-text area name into at most one geometry:

- a ``SelectedGeometry`` when a usable candidate was found,
- ``None`` when the lookup worked but no candidate qualified,
- a ``ResolverError`` subclass when the lookup itself failed.

Resolvers never retry; a single failed attempt is terminal for that area.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from poly_fetcher.core.exceptions import (
    ContractError,
    PermanentError,
    PolyFetchError,
    TransientError,
)

if TYPE_CHECKING:
    from poly_fetcher.core.config import FetcherConfig
    from poly_fetcher.models.geometry import SelectedGeometry


class AreaResolver(abc.ABC):
    """Abstract base class for area resolvers.

    The constructor receives the ``FetcherConfig`` carrying the search
    URL template, transport timeout and selection policy.

    Example usage::

        resolver = NominatimResolver(config)
        geometry = await resolver.resolve("Frankfurt")
    """

    #: Registry name of the resolver (override in subclasses).
    name: str = ""

    def __init__(self, config: FetcherConfig) -> None:
        self._config = config

    @property
    def config(self) -> FetcherConfig:
        """Return the fetcher configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    async def resolve(self, area: str) -> SelectedGeometry | None:
        """Look up *area* and select its boundary geometry.

        Args:
            area: Free-text place name, used verbatim.

        Returns:
            The selected geometry, or ``None`` if the service answered
            but no candidate qualified under the selection policy.

        Raises:
            ResolverError: On transport, decode or empty-result failures.
        """

    async def aclose(self) -> None:  # noqa: B027
        """Release any resources held by the resolver."""


# ---------------------------------------------------------------------------
# Resolver exceptions
# ---------------------------------------------------------------------------


class ResolverError(PolyFetchError):
    """Base exception for resolver errors.

    Attributes:
        resolver: Name of the resolver that raised the error.
        area: Area name that was being looked up.
    """

    default_stage = "resolve"
    default_code = "RESOLVER_ERROR"

    def __init__(
        self,
        resolver: str,
        area: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.resolver = resolver
        super().__init__(message, retryable=retryable, area=area)

    def __str__(self) -> str:
        return f"[{self.resolver}] {self.area!r}: {self.message}"


class LookupTransportError(ResolverError, TransientError):
    """Connection failure, timeout or HTTP error status from the service."""

    default_code = "OSM_TRANSPORT_FAILED"

    def __init__(self, resolver: str, area: str) -> None:
        super().__init__(
            resolver, area, "error while fetching the polygon from OSM", retryable=True
        )


class EmptyResponseError(ResolverError, PermanentError):
    """Response body was empty or could not be decoded as JSON."""

    default_code = "OSM_EMPTY_RESPONSE"

    def __init__(self, resolver: str, area: str) -> None:
        super().__init__(resolver, area, "no data found in OSM")


class MalformedResponseError(ResolverError, ContractError):
    """Response decoded as JSON but is not a list of candidate objects."""

    default_code = "OSM_MALFORMED_RESPONSE"

    def __init__(self, resolver: str, area: str, detail: str = "") -> None:
        message = "unexpected response shape from OSM"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(resolver, area, message)


class NoResultsError(ResolverError, PermanentError):
    """Service answered with an empty candidate list."""

    default_code = "OSM_NO_RESULTS"

    def __init__(self, resolver: str, area: str) -> None:
        super().__init__(resolver, area, "no data available in OSM")
