"""Provider factory: selects the active depth provider by name.

The factory maintains a registry of known adapters.  Usage::

    from bathy_query.providers.factory import get_provider

    async with get_provider("sgb_geoportal", config) as provider:
        response = await provider.query(envelope, layer_id=0)

The provider name is read from ``ResolverConfig.provider``
(``BATHY_PROVIDER`` environment variable).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bathy_query.core.config import ResolverConfig
from bathy_query.providers.base import DepthProvider, ProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

SGB_GEOPORTAL = "sgb_geoportal"

# Each entry maps a provider name to a callable that returns the adapter
# class.  Imports are lazy so unused adapters never load httpx.
_ADAPTER_REGISTRY: dict[str, Callable[[], type[DepthProvider]]] = {}


def _register_builtin_adapters() -> None:
    """Register the built-in provider adapters."""

    def _sgb_geoportal() -> type[DepthProvider]:
        from bathy_query.providers.geoportal import GeoportalAdapter

        return GeoportalAdapter

    _ADAPTER_REGISTRY[SGB_GEOPORTAL] = _sgb_geoportal


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _ADAPTER_REGISTRY:
        _register_builtin_adapters()


def register_provider(
    name: str,
    loader: Callable[[], type[DepthProvider]],
) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider name (e.g. ``"gebco_local"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Provider name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _ADAPTER_REGISTRY[name] = loader
    logger.debug("Registered depth provider: %s", name)


def get_provider(
    name: str,
    config: ResolverConfig | None = None,
) -> DepthProvider:
    """Create and return a depth provider instance.

    Args:
        name: Provider identifier (e.g. ``"sgb_geoportal"``).
        config: Optional ``ResolverConfig``.  If ``None``, the defaults
            are used with ``provider`` set to *name*.

    Raises:
        ProviderError: If the named provider is not registered, or the
            config names a different provider.
    """
    _ensure_registry()

    loader = _ADAPTER_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_ADAPTER_REGISTRY))
        msg = f"Unknown depth provider: {name!r}. Available: {available}"
        raise ProviderError(provider=name, message=msg)

    if config is None:
        config = ResolverConfig(provider=name)
    elif config.provider != name:
        msg = f"ResolverConfig.provider {config.provider!r} does not match requested provider {name!r}"
        raise ProviderError(provider=name, message=msg)

    adapter_cls = loader()
    logger.info("Creating depth provider: %s", name)
    return adapter_cls(config)


def list_providers() -> list[str]:
    """Return the names of all registered provider adapters."""
    _ensure_registry()
    return sorted(_ADAPTER_REGISTRY)
