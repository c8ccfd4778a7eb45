"""Geometry records exchanged between resolvers, the aggregator and callers.

- ``SelectedGeometry``: the one candidate geometry chosen for an area.
- ``AreaOutcome``: what happened to one area's lookup (geometry or error).
- ``OutputGeometry``: the caller-facing GeoJSON geometry.

All records are frozen dataclasses built fresh per call.  The ones that
carry coordinate lists compare by value and are unhashable.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from poly_fetcher.core.constants import EMPTY_GEOMETRY_TYPE, MULTIPOLYGON, POLYGON

if TYPE_CHECKING:
    from poly_fetcher.core.exceptions import PolyFetchError


@dataclass(frozen=True, slots=True)
class SelectedGeometry:
    """The candidate geometry selected for one area.

    Attributes:
        area: Area name as supplied by the caller.
        geometry_type: GeoJSON type of the geometry.
        coordinates: Nested coordinate arrays as returned by the service.
        display_name: Service-side name of the chosen candidate.

    Compared by value but unhashable: ``coordinates`` is a list.
    """

    __hash__ = None  # type: ignore[assignment]

    area: str
    geometry_type: str
    coordinates: list[Any] = field(default_factory=list)
    display_name: str = ""

    @property
    def polygon_count(self) -> int:
        """Number of polygons this geometry contributes to a merge."""
        if self.geometry_type == POLYGON:
            return 1
        if self.geometry_type == MULTIPOLYGON:
            return len(self.coordinates)
        return 0


@dataclass(frozen=True, slots=True)
class AreaOutcome:
    """Result of resolving one area.

    Exactly one of these holds: ``error`` is set (lookup failed), or
    ``error`` is ``None`` and ``geometry`` is the selection (``None``
    when the lookup succeeded but no candidate qualified).
    """

    area: str
    geometry: SelectedGeometry | None = None
    error: PolyFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchStatus(enum.Enum):
    """Classification of a batch of area outcomes.

    Values:
        SUCCESS: Every area resolved.
        PARTIAL: At least one area resolved and at least one failed.
        FAILED:  No area resolved.
    """

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"

    @classmethod
    def classify(cls, outcomes: list[AreaOutcome]) -> BatchStatus:
        succeeded = sum(1 for o in outcomes if o.ok)
        if succeeded == 0:
            return cls.FAILED
        if succeeded < len(outcomes):
            return cls.PARTIAL
        return cls.SUCCESS


@dataclass(frozen=True, slots=True)
class OutputGeometry:
    """Caller-facing GeoJSON geometry.

    Attributes:
        type: ``"Polygon"``, ``"MultiPolygon"``, a passed-through type for
            single-area requests, or ``""`` when nothing usable was found.
        coordinates: Nested coordinate arrays, never padded.
        areas: Names of the areas whose geometry went into ``coordinates``,
            in input order.

    Frozen so fields cannot be rebound, but ``coordinates`` stays a plain
    list (it is handed to callers as GeoJSON).  Instances compare by value
    and are unhashable.
    """

    __hash__ = None  # type: ignore[assignment]

    type: str = EMPTY_GEOMETRY_TYPE
    coordinates: list[Any] = field(default_factory=list)
    areas: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.coordinates

    def to_geojson(self) -> dict[str, Any]:
        """Return the GeoJSON geometry object (``type`` and ``coordinates`` only)."""
        return {"type": self.type, "coordinates": self.coordinates}
