"""Structural merge of per-area geometries.

Combining is concatenation of coordinate arrays following GeoJSON
nesting rules, not a geometric union:

- a single-area request passes its geometry through untouched;
- otherwise Polygons are appended as one MultiPolygon member each and
  MultiPolygons are flattened one level, member by member, and the
  result is typed ``MultiPolygon``.

Members are appended to a plain list, so there are no placeholder slots
to trim and no upper bound on how many polygons can be merged.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from poly_fetcher.core.constants import EMPTY_GEOMETRY_TYPE, MULTIPOLYGON, POLYGON
from poly_fetcher.core.log import ThresholdLoggerAdapter, get_logger
from poly_fetcher.models.geometry import OutputGeometry, SelectedGeometry

logger = get_logger(__name__)


def append_polygons(
    members: list[Any],
    geometry: SelectedGeometry,
    log: ThresholdLoggerAdapter = logger,
) -> int:
    """Append *geometry*'s polygons to *members* and return how many were added."""
    if geometry.geometry_type == POLYGON:
        members.append(geometry.coordinates)
        return 1
    if geometry.geometry_type == MULTIPOLYGON:
        members.extend(geometry.coordinates)
        return len(geometry.coordinates)
    log.debug(
        "Skipping non-polygonal geometry | area=%s | type=%s",
        geometry.area,
        geometry.geometry_type,
    )
    return 0


def merge_geometries(
    geometries: Sequence[SelectedGeometry | None],
    *,
    total_areas: int,
    log: ThresholdLoggerAdapter = logger,
) -> OutputGeometry:
    """Fold *geometries* into one output geometry.

    Args:
        geometries: Geometries to fold, in input order.  ``None`` entries
            (areas with no qualifying candidate) contribute nothing.
        total_areas: Number of areas in the caller's request.  Drives
            single-area passthrough and the forced MultiPolygon type.
        log: Adapter carrying the caller's log threshold.

    Returns:
        The merged ``OutputGeometry``.
    """
    present = [g for g in geometries if g is not None]

    if total_areas == 1:
        if not present:
            return OutputGeometry()
        only = present[0]
        return OutputGeometry(
            type=only.geometry_type,
            coordinates=list(only.coordinates),
            areas=(only.area,),
        )

    members: list[Any] = []
    contributors: list[str] = []
    for geometry in present:
        if append_polygons(members, geometry, log):
            contributors.append(geometry.area)

    return OutputGeometry(type=MULTIPOLYGON, coordinates=members, areas=tuple(contributors))


def fold_area(
    area: str,
    geometry: SelectedGeometry | None,
    *,
    total_areas: int,
    log: ThresholdLoggerAdapter = logger,
) -> OutputGeometry:
    """Fold a single area's geometry on its own.

    Same rules as ``merge_geometries``, except that an area contributing
    no polygons comes back as an empty geometry (type ``""``) rather than
    an empty MultiPolygon.  The result always names *area*.
    """
    merged = merge_geometries([geometry], total_areas=total_areas, log=log)
    if geometry is None or (total_areas > 1 and merged.is_empty):
        return OutputGeometry(type=EMPTY_GEOMETRY_TYPE, coordinates=[], areas=(area,))
    return merged
