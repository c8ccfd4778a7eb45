"""Administrative boundary polygon fetcher.

Fetches boundary geometries for named places from OpenStreetMap
Nominatim, concurrently, and optionally merges several places into a
single MultiPolygon.
"""

__version__ = "0.1.0"

from poly_fetcher.api import combine_polygons, fetch_polygons  # noqa: E402
from poly_fetcher.core.config import ConfigValidationError, FetcherConfig  # noqa: E402
from poly_fetcher.core.exceptions import PolyFetchError  # noqa: E402
from poly_fetcher.models.geometry import OutputGeometry  # noqa: E402
from poly_fetcher.orchestrators.aggregator import (  # noqa: E402
    AllAreasFailedError,
    AreaValidationError,
    PolygonFetcher,
)

__all__ = [
    "AllAreasFailedError",
    "AreaValidationError",
    "ConfigValidationError",
    "FetcherConfig",
    "OutputGeometry",
    "PolyFetchError",
    "PolygonFetcher",
    "__version__",
    "combine_polygons",
    "fetch_polygons",
]
