"""Error types shared by resolvers, the aggregator and configuration.

``PolyFetchError`` is the root.  Four category bases sit under it and
every concrete error derives from one of them:

- ``ValidationError``: bad area lists or config values (not retryable)
- ``TransientError``: network failures, HTTP error status (retryable)
- ``PermanentError``: empty result, every area failed (not retryable)
- ``ContractError``: a response that is not a candidate list (not retryable)

``to_error_dict()`` flattens an error into the payload the aggregator
writes to its failure log lines.
"""

from __future__ import annotations


class PolyFetchError(Exception):
    """Root of the poly-fetcher error tree.

    Attributes:
        message: What went wrong, in plain words.
        stage: Where it went wrong: ``"resolve"``, ``"aggregate"`` or
            ``"config"``.
        code: Stable upper-case identifier, e.g. ``"OSM_NO_RESULTS"``.
        retryable: True when the same call might succeed later.
        area: Area the error belongs to; empty for batch-level errors.
    """

    default_stage: str = ""
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        area: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.area = area

    @property
    def category(self) -> str:
        """``contract``, ``validation``, ``transient`` or ``permanent``."""
        for base, category in _CATEGORIES:
            if isinstance(self, base):
                return category
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "area": self.area,
        }


class ValidationError(PolyFetchError):
    """The caller passed something unusable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(PolyFetchError):
    """The service could not be reached or answered with an error status."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PolyFetchError):
    """The service answered, but there is nothing usable to return."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(PolyFetchError):
    """The service answered with JSON of the wrong shape."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# Checked in order; a class deriving from two bases gets the first match.
_CATEGORIES: tuple[tuple[type[PolyFetchError], str], ...] = (
    (ContractError, "contract"),
    (ValidationError, "validation"),
    (TransientError, "transient"),
    (PermanentError, "permanent"),
)
