"""Resolver configuration loaded from environment variables.

All values default to the constants the external service was tuned
against (60 requests/minute, batches of 10, 5 requests in flight).
The configuration is an explicit object threaded into the scheduler,
so tests can run with tiny batches and no delay.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from bathy_query.core.constants import (
    BATCH_SIZE,
    DEFAULT_API_URL,
    DEFAULT_ENVELOPE_HALF_WIDTH_M,
    DEFAULT_PROVIDER,
    DEPTH_FIELD,
    MAX_CONCURRENT_REQUESTS,
    MAX_LAYER_ATTEMPTS,
    RATE_LIMIT_PER_MIN,
    REQUEST_TIMEOUT_S,
)
from bathy_query.core.exceptions import BathyError


class ConfigValidationError(BathyError):
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
class ResolverConfig:
    """Immutable configuration for a depth resolution run.

    Attributes:
        api_url: ``dynamicLayer/query`` endpoint of the bathymetry service.
        provider: Registered depth provider name.
        max_concurrent_requests: Upper bound on simultaneously in-flight fetches.
        rate_limit_per_min: External requests-per-minute ceiling.
        batch_size: Number of tasks dequeued per batch.
        envelope_half_width_m: Half the side of the query envelope, in metres.
        max_layer_attempts: Total attempts per coordinate (one per layer).
        request_timeout_s: HTTP timeout per request, in seconds.
        depth_field: Attribute requested from the service.
    """

    api_url: str = DEFAULT_API_URL
    provider: str = DEFAULT_PROVIDER
    max_concurrent_requests: int = MAX_CONCURRENT_REQUESTS
    rate_limit_per_min: float = RATE_LIMIT_PER_MIN
    batch_size: int = BATCH_SIZE
    envelope_half_width_m: float = DEFAULT_ENVELOPE_HALF_WIDTH_M
    max_layer_attempts: int = MAX_LAYER_ATTEMPTS
    request_timeout_s: float = REQUEST_TIMEOUT_S
    depth_field: str = DEPTH_FIELD

    @property
    def batch_delay_seconds(self) -> float:
        """Pause between batches so ``batch_size`` requests per pause stay under the rate limit."""
        return 60.0 / (self.rate_limit_per_min / self.batch_size)

    @classmethod
    def from_env(cls) -> ResolverConfig:
        """Load and validate configuration from ``BATHY_*`` environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``BATHY_BATCH_SIZE=abc``).
        """
        config = cls(
            api_url=os.getenv("BATHY_API_URL", DEFAULT_API_URL),
            provider=os.getenv("BATHY_PROVIDER", DEFAULT_PROVIDER),
            max_concurrent_requests=int(
                os.getenv("BATHY_MAX_CONCURRENT_REQUESTS", str(MAX_CONCURRENT_REQUESTS))
            ),
            rate_limit_per_min=float(os.getenv("BATHY_RATE_LIMIT_PER_MIN", str(RATE_LIMIT_PER_MIN))),
            batch_size=int(os.getenv("BATHY_BATCH_SIZE", str(BATCH_SIZE))),
            envelope_half_width_m=float(
                os.getenv("BATHY_ENVELOPE_HALF_WIDTH_M", str(DEFAULT_ENVELOPE_HALF_WIDTH_M))
            ),
            max_layer_attempts=int(os.getenv("BATHY_MAX_LAYER_ATTEMPTS", str(MAX_LAYER_ATTEMPTS))),
            request_timeout_s=float(os.getenv("BATHY_REQUEST_TIMEOUT_S", str(REQUEST_TIMEOUT_S))),
            depth_field=os.getenv("BATHY_DEPTH_FIELD", DEPTH_FIELD),
        )
        return config.validate()

    def validate(self) -> ResolverConfig:
        """Validate ranges and return ``self``.  Raises ``ConfigValidationError``."""
        _validate(self)
        return self


def _validate(config: ResolverConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.api_url:
        raise ConfigValidationError("BATHY_API_URL", config.api_url, "must not be empty")

    if not config.provider:
        raise ConfigValidationError("BATHY_PROVIDER", config.provider, "must not be empty")

    if config.max_concurrent_requests < 1:
        raise ConfigValidationError(
            "BATHY_MAX_CONCURRENT_REQUESTS",
            config.max_concurrent_requests,
            "must be >= 1",
        )

    if config.rate_limit_per_min <= 0:
        raise ConfigValidationError(
            "BATHY_RATE_LIMIT_PER_MIN",
            config.rate_limit_per_min,
            "must be > 0 (requests per minute)",
        )

    if config.batch_size < 1:
        raise ConfigValidationError("BATHY_BATCH_SIZE", config.batch_size, "must be >= 1")

    if config.envelope_half_width_m <= 0:
        raise ConfigValidationError(
            "BATHY_ENVELOPE_HALF_WIDTH_M",
            config.envelope_half_width_m,
            "must be > 0 (metres)",
        )

    if config.max_layer_attempts < 1:
        raise ConfigValidationError(
            "BATHY_MAX_LAYER_ATTEMPTS",
            config.max_layer_attempts,
            "must be >= 1",
        )

    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            "BATHY_REQUEST_TIMEOUT_S",
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )

    if not config.depth_field:
        raise ConfigValidationError("BATHY_DEPTH_FIELD", config.depth_field, "must not be empty")
