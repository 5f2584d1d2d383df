"""DepthProvider abstract base class and provider exceptions.

Defines the contract every depth source adapter implements.  The batch
scheduler interacts exclusively with this interface; it never knows
which concrete service is behind it.

A provider performs exactly one request per ``query`` call and never
retries on its own.  Retry and layer-fallback policy belongs to the
scheduler.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from bathy_query.core.exceptions import BathyError, ContractError, TransientError

if TYPE_CHECKING:
    from types import TracebackType

    from bathy_query.core.config import ResolverConfig
    from bathy_query.models.envelope import Envelope
    from bathy_query.models.response import BathymetryResponse


class DepthProvider(abc.ABC):
    """Abstract base class for depth provider adapters.

    Concrete implementations override ``query`` and, if they hold
    network resources, ``aclose``.  Providers are async context managers::

        async with get_provider("sgb_geoportal", config) as provider:
            response = await provider.query(envelope, layer_id=0)
    """

    def __init__(self, config: ResolverConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the provider name from configuration."""
        return self._config.provider

    @property
    def config(self) -> ResolverConfig:
        """Return the resolver configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    async def query(self, envelope: Envelope, layer_id: int) -> BathymetryResponse:
        """Query one data layer for features intersecting *envelope*.

        Args:
            envelope: Projected bounding box around the coordinate.
            layer_id: Service data layer to query.

        Returns:
            The parsed service response (``features`` may be empty).

        Raises:
            ApiError: The service answered with a non-success status.
            NetworkError: The request never produced a response.
            ProviderResponseError: The response body broke the contract.
        """

    async def aclose(self) -> None:
        """Release network resources.  Default: nothing to release."""
        return None

    async def __aenter__(self) -> DepthProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(BathyError):
    """Base exception for depth provider errors.

    Attributes:
        provider: Name of the provider that raised the error.
        message: Human-readable error description.
        retryable: Whether the same request may succeed later.
    """

    default_stage = "fetch_depth"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    @property
    def status_code(self) -> int | None:
        """HTTP status associated with the failure, if any."""
        return None

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class ApiError(ProviderError):
    """The service returned a non-success status.

    Throttling (429) and server errors (5xx) are marked retryable.  The
    error's ``category`` follows from that: ``"transient"`` or ``"permanent"``.
    """

    default_code = "API_STATUS_ERROR"

    def __init__(self, provider: str, status_code: int, message: str = "") -> None:
        self._status_code = status_code
        retryable = status_code == 429 or status_code >= 500
        super().__init__(
            provider,
            message or f"API returned HTTP {status_code}",
            retryable=retryable,
        )

    @property
    def status_code(self) -> int:
        return self._status_code


class NetworkError(ProviderError, TransientError):
    """Transport failure (timeout, DNS, connection reset).  Carries no status."""

    default_code = "NETWORK_ERROR"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=True)


class ProviderResponseError(ProviderError, ContractError):
    """The response body was not JSON or did not match the response contract."""

    default_code = "PROVIDER_RESPONSE_INVALID"
