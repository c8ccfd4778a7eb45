"""Data models.

- SelectedGeometry: The candidate geometry chosen for one area
- AreaOutcome / BatchStatus: Per-area lookup result and batch classification
- OutputGeometry: GeoJSON geometry handed back to callers
- NominatimPlace: Typed Nominatim search candidate
"""

from poly_fetcher.models.geometry import (
    AreaOutcome,
    BatchStatus,
    OutputGeometry,
    SelectedGeometry,
)
from poly_fetcher.models.nominatim import GeoJsonGeometry, NominatimPlace, SearchResponse

__all__ = [
    "AreaOutcome",
    "BatchStatus",
    "GeoJsonGeometry",
    "NominatimPlace",
    "OutputGeometry",
    "SearchResponse",
    "SelectedGeometry",
]
