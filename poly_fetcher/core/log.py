"""Per-component log verbosity.

Each ``PolygonFetcher`` owns its own verbosity threshold instead of
calling ``setLevel`` on a shared logger, so two fetchers configured
differently can run side by side in one process.

The threshold decides which records a component emits, in both
directions: a ``DEBUG`` fetcher emits its debug records even when the
module logger inherits ``WARNING`` from the root, and an ``ERROR``
fetcher stays quiet under a ``DEBUG`` root.  Handlers still decide
where emitted records go (and may filter them by their own level).
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


class ThresholdLoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter whose own level replaces the wrapped logger's level.

    With ``level=NOTSET`` the wrapped logger's effective level applies
    unchanged.  Context fields passed as ``extra`` are prefixed to every
    message in ``key=value`` form.
    """

    def __init__(
        self,
        logger: logging.Logger,
        level: int,
        extra: MutableMapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, extra or {})
        self.threshold = level

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802
        if self.logger.disabled or self.logger.manager.disable >= level:
            return False
        if self.threshold == logging.NOTSET:
            return self.logger.isEnabledFor(level)
        return level >= self.threshold

    def log(self, level: int, msg: object, *args: object, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        msg, kwargs = self.process(msg, kwargs)
        # Logger.log would re-check the logger's own level; hand the record
        # straight to the logger's handlers instead.
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.logger._log(level, msg, args, **kwargs)  # noqa: SLF001

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs
        context = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{context} | {msg}", kwargs

    def bind(self, **fields: object) -> ThresholdLoggerAdapter:
        """Return a child adapter with extra context fields and the same threshold."""
        merged = {**(self.extra or {}), **fields}
        return ThresholdLoggerAdapter(self.logger, self.threshold, merged)


def get_logger(name: str, level: int = logging.NOTSET) -> ThresholdLoggerAdapter:
    """Return a threshold adapter around ``logging.getLogger(name)``."""
    return ThresholdLoggerAdapter(logging.getLogger(name), level)
