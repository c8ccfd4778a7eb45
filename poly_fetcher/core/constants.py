"""Shared constants.

Centralises GeoJSON type names, Nominatim tags and service defaults that
are used by the resolvers, the merge step and the configuration layer.
"""

from __future__ import annotations

from poly_fetcher import __version__

# ---------------------------------------------------------------------------
# GeoJSON geometry types
# ---------------------------------------------------------------------------

POLYGON: str = "Polygon"
MULTIPOLYGON: str = "MultiPolygon"

POLYGONAL_TYPES: frozenset[str] = frozenset({POLYGON, MULTIPOLYGON})
"""Geometry types the pipeline knows how to merge."""

EMPTY_GEOMETRY_TYPE: str = ""
"""Type reported for an area with no usable polygonal geometry."""

# ---------------------------------------------------------------------------
# Nominatim
# ---------------------------------------------------------------------------

ADMINISTRATIVE: str = "administrative"
"""Tag Nominatim puts on political/administrative boundary candidates."""

DEFAULT_SEARCH_URL_TEMPLATE: str = (
    "https://nominatim.openstreetmap.org/search?q={area}&polygon_geojson=1&format=json"
)
"""Search endpoint; ``{area}`` is replaced by the percent-encoded area name."""

AREA_PLACEHOLDER: str = "{area}"

DEFAULT_USER_AGENT: str = f"poly-fetcher/{__version__}"
"""Nominatim's usage policy rejects requests without an identifying UA."""

DEFAULT_REQUEST_TIMEOUT_S: float = 30.0

# ---------------------------------------------------------------------------
# Resolver / selection names
# ---------------------------------------------------------------------------

NOMINATIM: str = "nominatim"

SELECT_LAST_ADMINISTRATIVE: str = "last_administrative"
SELECT_FIRST: str = "first"
