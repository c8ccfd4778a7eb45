"""Synchronous entry points.

Thin wrappers that run one ``PolygonFetcher`` call to completion on a
fresh event loop.  Use ``PolygonFetcher`` directly from async code.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from poly_fetcher.core.config import FetcherConfig
from poly_fetcher.models.geometry import OutputGeometry
from poly_fetcher.orchestrators.aggregator import PolygonFetcher


def fetch_polygons(
    areas: Sequence[str],
    config: FetcherConfig | None = None,
) -> list[OutputGeometry]:
    """Fetch one boundary geometry per area.  See ``PolygonFetcher.fetch_polygons``."""
    return asyncio.run(PolygonFetcher(config).fetch_polygons(areas))


def combine_polygons(
    areas: Sequence[str],
    config: FetcherConfig | None = None,
) -> OutputGeometry:
    """Fetch and merge all areas into one geometry.  See ``PolygonFetcher.combine_polygons``."""
    return asyncio.run(PolygonFetcher(config).combine_polygons(areas))
