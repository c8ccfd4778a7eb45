"""Fetcher configuration loaded from environment variables.

All values have sensible defaults so ``FetcherConfig()`` talks to the
public Nominatim instance out of the box.

Fail-fast validation:
    Construction raises ``ConfigValidationError`` if any value is out of
    its valid range, so a bad ``POLY_FETCHER_*`` variable is caught
    before the first lookup rather than halfway through a batch.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from poly_fetcher.core.constants import (
    AREA_PLACEHOLDER,
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_SEARCH_URL_TEMPLATE,
    DEFAULT_USER_AGENT,
    SELECT_FIRST,
    SELECT_LAST_ADMINISTRATIVE,
)
from poly_fetcher.core.exceptions import ValidationError

_SELECTION_POLICIES = (SELECT_LAST_ADMINISTRATIVE, SELECT_FIRST)


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class FetcherConfig:
    """Immutable fetcher configuration.

    Passed to ``PolygonFetcher`` at construction time; nothing here is
    read from or written to process-wide state during a call.

    Attributes:
        search_url_template: Search URL with an ``{area}`` placeholder.
        request_timeout_s: Transport timeout for one lookup, in seconds.
        user_agent: ``User-Agent`` header sent with every lookup.
        log_level: Minimum level (name, e.g. ``"DEBUG"``) this fetcher logs at.
        selection_policy: Candidate selection policy
            (``"last_administrative"`` or ``"first"``).
    """

    search_url_template: str = DEFAULT_SEARCH_URL_TEMPLATE
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    selection_policy: str = SELECT_LAST_ADMINISTRATIVE

    def __post_init__(self) -> None:
        _validate(self)

    @property
    def log_level_no(self) -> int:
        """Numeric logging level for ``log_level``."""
        return logging.getLevelNamesMapping()[self.log_level.upper()]

    @classmethod
    def from_env(cls) -> FetcherConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If ``POLY_FETCHER_REQUEST_TIMEOUT_S`` is not a number.
        """
        return cls(
            search_url_template=os.getenv("POLY_FETCHER_SEARCH_URL", DEFAULT_SEARCH_URL_TEMPLATE),
            request_timeout_s=float(
                os.getenv("POLY_FETCHER_REQUEST_TIMEOUT_S", str(DEFAULT_REQUEST_TIMEOUT_S))
            ),
            user_agent=os.getenv("POLY_FETCHER_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=os.getenv("POLY_FETCHER_LOG_LEVEL", "INFO"),
            selection_policy=os.getenv(
                "POLY_FETCHER_SELECTION_POLICY", SELECT_LAST_ADMINISTRATIVE
            ),
        )


def _validate(config: FetcherConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if AREA_PLACEHOLDER not in config.search_url_template:
        raise ConfigValidationError(
            "POLY_FETCHER_SEARCH_URL",
            config.search_url_template,
            f"must contain the {AREA_PLACEHOLDER} placeholder",
        )

    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            "POLY_FETCHER_REQUEST_TIMEOUT_S",
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )

    if not config.user_agent:
        raise ConfigValidationError(
            "POLY_FETCHER_USER_AGENT",
            config.user_agent,
            "must not be empty",
        )

    if config.log_level.upper() not in logging.getLevelNamesMapping():
        raise ConfigValidationError(
            "POLY_FETCHER_LOG_LEVEL",
            config.log_level,
            "must be a standard logging level name",
        )

    if config.selection_policy not in _SELECTION_POLICIES:
        raise ConfigValidationError(
            "POLY_FETCHER_SELECTION_POLICY",
            config.selection_policy,
            f"must be one of {', '.join(_SELECTION_POLICIES)}",
        )
