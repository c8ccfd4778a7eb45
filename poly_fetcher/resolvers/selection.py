"""Candidate selection policies.

A search for a place name usually returns several candidates (the city,
a district with the same name, a railway station, ...).  A selection
policy picks at most one of them.

- ``last_administrative`` keeps the *last* candidate that is an
  administrative boundary with Polygon or MultiPolygon geometry.
- ``first`` takes the first candidate as-is, whatever its type.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from poly_fetcher.core.constants import SELECT_FIRST, SELECT_LAST_ADMINISTRATIVE
from poly_fetcher.models.nominatim import NominatimPlace

SelectionPolicy = Callable[[Sequence[NominatimPlace]], NominatimPlace | None]


def select_last_administrative(places: Sequence[NominatimPlace]) -> NominatimPlace | None:
    """Return the last polygonal administrative candidate, or ``None``."""
    selected: NominatimPlace | None = None
    for place in places:
        if place.geojson is not None and place.geojson.is_polygonal and place.is_administrative:
            selected = place
    return selected


def select_first(places: Sequence[NominatimPlace]) -> NominatimPlace | None:
    """Return the first candidate if it carries a geometry, else ``None``."""
    if not places or places[0].geojson is None:
        return None
    return places[0]


_POLICIES: dict[str, SelectionPolicy] = {
    SELECT_LAST_ADMINISTRATIVE: select_last_administrative,
    SELECT_FIRST: select_first,
}


def get_selection_policy(name: str) -> SelectionPolicy:
    """Look up a selection policy by name.

    Raises:
        KeyError: If *name* is not a known policy.
    """
    return _POLICIES[name]
