"""Depth provider adapters.

Implements the provider-agnostic adapter pattern:
- DepthProvider: Abstract base class defining the interface
- GeoportalAdapter: SGB geoportal ArcGIS bathymetry MapServer

The active provider is selected via configuration.
"""

from bathy_query.providers.base import (
    ApiError,
    DepthProvider,
    NetworkError,
    ProviderError,
    ProviderResponseError,
)
from bathy_query.providers.factory import (
    SGB_GEOPORTAL,
    get_provider,
    list_providers,
    register_provider,
)
from bathy_query.providers.query_params import build_query_params

__all__ = [
    "SGB_GEOPORTAL",
    "ApiError",
    "DepthProvider",
    "NetworkError",
    "ProviderError",
    "ProviderResponseError",
    "build_query_params",
    "get_provider",
    "list_providers",
    "register_provider",
]
