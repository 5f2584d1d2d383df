"""SGB geoportal bathymetry adapter (ArcGIS MapServer dynamic layers).

Concrete ``DepthProvider`` that issues one HTTP GET per query against
the marine-geology bathymetry MapServer of the Brazilian Geological
Survey, using ``httpx.AsyncClient``.

ArcGIS servers sometimes report failures inside an HTTP 200 body as
``{"error": {"code": 400, "message": "..."}}``; those are surfaced as
``ApiError`` with the embedded code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from bathy_query.models.response import BathymetryResponse
from bathy_query.providers.base import (
    ApiError,
    DepthProvider,
    NetworkError,
    ProviderResponseError,
)
from bathy_query.providers.query_params import build_query_params

if TYPE_CHECKING:
    from bathy_query.core.config import ResolverConfig
    from bathy_query.models.envelope import Envelope

logger = logging.getLogger(__name__)


class GeoportalAdapter(DepthProvider):
    """ArcGIS ``dynamicLayer/query`` adapter.

    Args:
        config: Resolver configuration (endpoint, timeout, depth field).
        client: Optional pre-built ``httpx.AsyncClient``.  When omitted the
            adapter creates and owns one; a supplied client is left open
            on ``aclose``.
    """

    def __init__(
        self,
        config: ResolverConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config)
        self._url = config.api_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.request_timeout_s)

    async def query(self, envelope: Envelope, layer_id: int) -> BathymetryResponse:
        """Query one layer of the bathymetry service.

        Raises:
            ApiError: Non-2xx status, or an ArcGIS error body.
            NetworkError: Timeout, DNS or connection failure.
            ProviderResponseError: Body is not JSON or breaks the contract.
        """
        params = build_query_params(envelope, layer_id, out_field=self.config.depth_field)

        try:
            response = await self._client.get(self._url, params=params)
        except httpx.TransportError as exc:
            msg = f"Request to {self._url} failed: {exc!r}"
            raise NetworkError(self.name, msg) from exc

        if not response.is_success:
            raise ApiError(self.name, response.status_code)

        try:
            payload: Any = response.json()
        except ValueError as exc:
            msg = f"Response is not valid JSON (layer={layer_id})"
            raise ProviderResponseError(self.name, msg) from exc

        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            raise _embedded_api_error(self.name, payload["error"])

        try:
            parsed = BathymetryResponse.model_validate(payload)
        except PydanticValidationError as exc:
            msg = f"Response does not match the query contract (layer={layer_id}): {exc}"
            raise ProviderResponseError(self.name, msg) from exc

        logger.debug(
            "Geoportal query | layer=%d | features=%d | status=%d",
            layer_id,
            len(parsed.features),
            response.status_code,
        )
        return parsed

    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()


def _embedded_api_error(provider: str, error: dict[str, Any]) -> ApiError:
    """Build an ``ApiError`` from an ArcGIS ``{"error": {...}}`` body."""
    try:
        code = int(error.get("code", 500))
    except (TypeError, ValueError):
        code = 500
    message = str(error.get("message") or f"API returned error code {code}")
    return ApiError(provider, code, message)
