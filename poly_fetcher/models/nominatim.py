"""Typed view of a Nominatim search response.

Nominatim returns far more fields than the pipeline needs; only the
candidate's tags and its ``geojson`` object are modelled, everything
else is ignored.  Absent fields get explicit defaults so a sparse
candidate parses cleanly, while a response that is not a list of
objects fails validation instead of blowing up later during selection.

Example candidate (trimmed)::

    {
        "class": "boundary",
        "type": "administrative",
        "display_name": "Frankfurt am Main, Hessen, Deutschland",
        "geojson": {"type": "Polygon", "coordinates": [[[8.47, 50.15], ...]]}
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from poly_fetcher.core.constants import ADMINISTRATIVE, POLYGONAL_TYPES


class GeoJsonGeometry(BaseModel):
    """The ``geojson`` object of a candidate.

    Attributes:
        type: GeoJSON geometry type (``"Polygon"``, ``"Point"``, ...).
        coordinates: Nested coordinate arrays, kept as decoded.
    """

    model_config = ConfigDict(frozen=True)

    type: str = ""
    coordinates: list[Any] = Field(default_factory=list)

    @property
    def is_polygonal(self) -> bool:
        return self.type in POLYGONAL_TYPES


class NominatimPlace(BaseModel):
    """One candidate of a Nominatim search response.

    Attributes:
        type: OSM tag value (``"administrative"`` for boundaries).
        osm_class: OSM tag key, serialised as ``class`` (e.g. ``"boundary"``).
        display_name: Human-readable place name.
        geojson: Candidate geometry, absent unless ``polygon_geojson=1``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = ""
    osm_class: str = Field(default="", alias="class")
    display_name: str = ""
    geojson: GeoJsonGeometry | None = None

    @property
    def is_administrative(self) -> bool:
        """Whether Nominatim tagged this candidate as an administrative area."""
        return ADMINISTRATIVE in (self.type, self.osm_class)


SearchResponse = TypeAdapter(list[NominatimPlace])
"""Validator for a whole search response body."""
