"""Concurrent fetch-and-merge pipeline.

``PolygonFetcher`` fans out one resolver call per requested area,
waits for every lookup to finish, classifies the batch and merges the
successful geometries.

Flow per call
-------------
1. **Fan-out**: one ``asyncio`` task per area, no concurrency cap.
2. **Collect**: every outcome is awaited before anything is decided;
   each outcome stays bound to its own area.
3. **Classify**: ``success`` / ``partial`` / ``failed``.  Only a batch
   in which *every* area failed raises (``AllAreasFailedError``); failed
   areas in a partial batch are logged and dropped.
4. **Merge**: single-threaded, on the calling task.

A hung lookup stalls the whole call until the transport timeout fires
(``FetcherConfig.request_timeout_s``).
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from poly_fetcher.core.config import FetcherConfig
from poly_fetcher.core.exceptions import PermanentError, PolyFetchError, ValidationError
from poly_fetcher.core.log import ThresholdLoggerAdapter, get_logger
from poly_fetcher.models.geometry import AreaOutcome, BatchStatus, OutputGeometry
from poly_fetcher.orchestrators.merge import fold_area, merge_geometries
from poly_fetcher.resolvers.nominatim import NominatimResolver

if TYPE_CHECKING:
    from poly_fetcher.resolvers.base import AreaResolver


class AreaValidationError(ValidationError):
    """Raised when the requested area list is unusable."""

    default_stage = "aggregate"
    default_code = "AREAS_INVALID"


class AllAreasFailedError(PermanentError):
    """Raised when every area in a batch failed to resolve.

    Attributes:
        failures: ``(area, error)`` pairs in input order.  Repeated area
            names keep one entry per occurrence.
    """

    default_stage = "aggregate"
    default_code = "ALL_AREAS_FAILED"

    def __init__(self, failures: list[tuple[str, PolyFetchError]]) -> None:
        self.failures = failures
        super().__init__("error while fetching the polygon")

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["failures"] = [error.to_error_dict() for _, error in self.failures]
        return payload


class PolygonFetcher:
    """Fetch and merge boundary geometries for named areas.

    Args:
        config: Fetcher configuration; defaults when ``None``.
        resolver: Optional resolver instance.  Defaults to a
            ``NominatimResolver`` built from *config*.

    Example::

        fetcher = PolygonFetcher(FetcherConfig(log_level="DEBUG"))
        geometries = await fetcher.fetch_polygons(["Frankfurt", "Munich"])
        combined = await fetcher.combine_polygons(["Frankfurt", "Munich"])
    """

    def __init__(
        self,
        config: FetcherConfig | None = None,
        *,
        resolver: AreaResolver | None = None,
    ) -> None:
        self._config = config or FetcherConfig()
        self._resolver = resolver or NominatimResolver(self._config)
        self._log = get_logger(__name__, self._config.log_level_no)
        self._merge_log = get_logger(merge_geometries.__module__, self._config.log_level_no)

    @property
    def config(self) -> FetcherConfig:
        return self._config

    @property
    def resolver(self) -> AreaResolver:
        return self._resolver

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def fetch_polygons(self, areas: Sequence[str]) -> list[OutputGeometry]:
        """Fetch one geometry per successfully resolved area.

        Returns:
            One ``OutputGeometry`` per area that resolved, in input order.
            Failed areas are omitted.

        Raises:
            AreaValidationError: If *areas* is empty.
            AllAreasFailedError: If no area resolved.
        """
        log = self._log.bind(method="fetch_polygons")
        started = time.perf_counter()
        log.info("Fetching polygons | areas=%s", list(areas))

        outcomes = await self._gather(areas, log)
        total = len(outcomes)
        results = [
            fold_area(o.area, o.geometry, total_areas=total, log=self._merge_log)
            for o in outcomes
            if o.ok
        ]

        log.info(
            "Fetch polygons completed | returned=%d/%d | duration=%.3fs",
            len(results),
            total,
            time.perf_counter() - started,
        )
        return results

    async def combine_polygons(self, areas: Sequence[str]) -> OutputGeometry:
        """Fetch every area and merge them into one geometry.

        With more than one requested area the result is always a
        ``MultiPolygon``; Polygon inputs become one member each and
        MultiPolygon inputs are flattened one level.

        Raises:
            AreaValidationError: If *areas* is empty.
            AllAreasFailedError: If no area resolved.
        """
        log = self._log.bind(method="combine_polygons")
        started = time.perf_counter()
        log.info("Combining polygons | areas=%s", list(areas))

        outcomes = await self._gather(areas, log)
        combined = merge_geometries(
            [o.geometry for o in outcomes if o.ok],
            total_areas=len(outcomes),
            log=self._merge_log,
        )

        log.info(
            "Combine polygons completed | type=%s | members=%d | contributors=%d | "
            "duration=%.3fs",
            combined.type,
            len(combined.coordinates),
            len(combined.areas),
            time.perf_counter() - started,
        )
        return combined

    async def aclose(self) -> None:
        """Close the underlying resolver."""
        await self._resolver.aclose()

    # ------------------------------------------------------------------
    # Fan-out / fan-in
    # ------------------------------------------------------------------

    async def _gather(
        self,
        areas: Sequence[str],
        log: ThresholdLoggerAdapter,
    ) -> list[AreaOutcome]:
        """Resolve all *areas* concurrently and apply the failure policy."""
        if isinstance(areas, str) or not areas:
            msg = "at least one area is required"
            raise AreaValidationError(msg)

        log.debug("Dispatching lookups | in_flight=%d", len(areas))
        outcomes = list(
            await asyncio.gather(*(self._resolve_one(area, log) for area in areas))
        )

        status = BatchStatus.classify(outcomes)
        log.info(
            "Batch classified | status=%s | succeeded=%d | failed=%d",
            status.value,
            sum(1 for o in outcomes if o.ok),
            sum(1 for o in outcomes if not o.ok),
        )

        if status is BatchStatus.FAILED:
            error = AllAreasFailedError(
                [(o.area, o.error) for o in outcomes if o.error is not None]
            )
            log.error("error while fetching the polygon | error=%s", error.to_error_dict())
            raise error

        return outcomes

    async def _resolve_one(self, area: str, log: ThresholdLoggerAdapter) -> AreaOutcome:
        """Resolve one area, converting resolver errors into an outcome marker."""
        try:
            geometry = await self._resolver.resolve(area)
        except PolyFetchError as exc:
            log.warning("Area lookup failed | area=%s | error=%s", area, exc.to_error_dict())
            return AreaOutcome(area=area, error=exc)
        return AreaOutcome(area=area, geometry=geometry)
