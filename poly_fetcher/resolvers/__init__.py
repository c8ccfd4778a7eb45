"""Area resolvers.

- AreaResolver: abstract interface the aggregator talks to
- NominatimResolver: OpenStreetMap Nominatim search (default)

Pass a different ``AreaResolver`` to ``PolygonFetcher(resolver=...)`` to
use another geocoder.
"""

from poly_fetcher.resolvers.base import (
    AreaResolver,
    EmptyResponseError,
    LookupTransportError,
    MalformedResponseError,
    NoResultsError,
    ResolverError,
)
from poly_fetcher.resolvers.nominatim import NominatimResolver

__all__ = [
    "AreaResolver",
    "EmptyResponseError",
    "LookupTransportError",
    "MalformedResponseError",
    "NoResultsError",
    "NominatimResolver",
    "ResolverError",
]
