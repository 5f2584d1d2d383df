"""Tests for resolver configuration.

Covers:
- Default values match the external service's limits
- Loading from environment variables
- Derived inter-batch delay
- Fail-fast range validation
"""

from __future__ import annotations

import dataclasses
import os
from unittest.mock import patch

import pytest

from bathy_query.core.config import ConfigValidationError, ResolverConfig


class TestResolverConfigDefaults:
    """Verify default configuration values."""

    def test_default_endpoint(self) -> None:
        cfg = ResolverConfig()
        assert cfg.api_url.startswith("https://geoportal.sgb.gov.br/")
        assert cfg.api_url.endswith("/MapServer/dynamicLayer/query")

    def test_default_limits(self) -> None:
        cfg = ResolverConfig()
        assert cfg.max_concurrent_requests == 5
        assert cfg.rate_limit_per_min == 60
        assert cfg.batch_size == 10
        assert cfg.max_layer_attempts == 5

    def test_default_envelope(self) -> None:
        assert ResolverConfig().envelope_half_width_m == 1000.0

    def test_default_depth_field(self) -> None:
        assert ResolverConfig().depth_field == "profundida"

    def test_frozen_immutability(self) -> None:
        cfg = ResolverConfig()
        with pytest.raises(AttributeError):
            cfg.batch_size = 3  # type: ignore[misc]


class TestBatchDelay:
    """Delay keeps batch_size requests per pause under the rate limit."""

    def test_default_delay_is_ten_seconds(self) -> None:
        assert ResolverConfig().batch_delay_seconds == pytest.approx(10.0)

    def test_delay_scales_with_batch_size(self) -> None:
        cfg = ResolverConfig(batch_size=5, rate_limit_per_min=60)
        assert cfg.batch_delay_seconds == pytest.approx(5.0)

    def test_delay_shrinks_with_rate_limit(self) -> None:
        cfg = ResolverConfig(batch_size=10, rate_limit_per_min=600)
        assert cfg.batch_delay_seconds == pytest.approx(1.0)


class TestResolverConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "BATHY_API_URL": "https://example.test/query",
            "BATHY_PROVIDER": "custom",
            "BATHY_MAX_CONCURRENT_REQUESTS": "3",
            "BATHY_RATE_LIMIT_PER_MIN": "120",
            "BATHY_BATCH_SIZE": "4",
            "BATHY_ENVELOPE_HALF_WIDTH_M": "500",
            "BATHY_MAX_LAYER_ATTEMPTS": "2",
            "BATHY_REQUEST_TIMEOUT_S": "5",
            "BATHY_DEPTH_FIELD": "depth",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = ResolverConfig.from_env()

        assert cfg.api_url == "https://example.test/query"
        assert cfg.provider == "custom"
        assert cfg.max_concurrent_requests == 3
        assert cfg.rate_limit_per_min == 120.0
        assert cfg.batch_size == 4
        assert cfg.envelope_half_width_m == 500.0
        assert cfg.max_layer_attempts == 2
        assert cfg.request_timeout_s == 5.0
        assert cfg.depth_field == "depth"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = ResolverConfig.from_env()
        assert cfg == ResolverConfig()


class TestResolverConfigValidation:
    """Fail-fast range validation."""

    def test_zero_concurrency_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_MAX_CONCURRENT_REQUESTS": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_MAX_CONCURRENT_REQUESTS"),
        ):
            ResolverConfig.from_env()

    def test_zero_rate_limit_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_RATE_LIMIT_PER_MIN": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="must be > 0"),
        ):
            ResolverConfig.from_env()

    def test_zero_batch_size_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_BATCH_SIZE": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_BATCH_SIZE"),
        ):
            ResolverConfig.from_env()

    def test_negative_half_width_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_ENVELOPE_HALF_WIDTH_M": "-1"}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_ENVELOPE_HALF_WIDTH_M"),
        ):
            ResolverConfig.from_env()

    def test_zero_layer_attempts_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_MAX_LAYER_ATTEMPTS": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_MAX_LAYER_ATTEMPTS"),
        ):
            ResolverConfig.from_env()

    def test_zero_timeout_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_REQUEST_TIMEOUT_S": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_REQUEST_TIMEOUT_S"),
        ):
            ResolverConfig.from_env()

    def test_empty_url_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_API_URL": ""}, clear=True),
            pytest.raises(ConfigValidationError, match="BATHY_API_URL"),
        ):
            ResolverConfig.from_env()

    def test_non_numeric_env_raises_value_error(self) -> None:
        with (
            patch.dict(os.environ, {"BATHY_BATCH_SIZE": "abc"}, clear=True),
            pytest.raises(ValueError),
        ):
            ResolverConfig.from_env()

    def test_validate_on_replaced_config(self) -> None:
        cfg = dataclasses.replace(ResolverConfig(), batch_size=-2)
        with pytest.raises(ConfigValidationError) as exc_info:
            cfg.validate()
        assert exc_info.value.key == "BATHY_BATCH_SIZE"
        assert exc_info.value.value == -2

    def test_validate_returns_self(self) -> None:
        cfg = ResolverConfig()
        assert cfg.validate() is cfg
