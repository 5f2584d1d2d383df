"""Resolve depths activity: the top-level entry point for a run.

Wires configuration, the provider and the batch scheduler together and
owns the run's single failure boundary: individual coordinate failures
never surface here (they become empty results), but anything escaping
the orchestration itself is reported once as ``BatchQueryError`` and
the partial results are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from bathy_query.core.config import ResolverConfig
from bathy_query.core.exceptions import BatchCancelledError, BatchQueryError, ValidationError
from bathy_query.models.coordinate import Coordinate
from bathy_query.orchestrators.batch_scheduler import resolve_coordinates
from bathy_query.providers.factory import get_provider

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from bathy_query.models.coordinate import ResolutionResult
    from bathy_query.providers.base import DepthProvider

logger = logging.getLogger("bathy_query.activities.resolve_depths")


async def resolve_depths_async(
    coordinates: Sequence[Coordinate],
    config: ResolverConfig | None = None,
    *,
    provider: DepthProvider | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    cancel_event: asyncio.Event | None = None,
) -> list[ResolutionResult]:
    """Resolve *coordinates* to depth results.

    Args:
        coordinates: Coordinates to resolve.
        config: Resolver configuration.  Defaults to ``ResolverConfig.from_env()``.
        provider: Optional provider instance.  When omitted, one is built
            from ``config.provider`` and closed after the run.
        sleep: Inter-batch pause (injectable for tests).
        cancel_event: Set to abort the run before the next batch.

    Returns:
        One ``ResolutionResult`` per input coordinate.

    Raises:
        BatchQueryError: If the orchestration fails as a whole.
        BatchCancelledError: If the run was cancelled.
    """
    config = config or ResolverConfig.from_env()

    logger.info(
        "resolve_depths started | coordinates=%d | provider=%s",
        len(coordinates),
        config.provider,
    )

    try:
        if provider is None:
            async with get_provider(config.provider, config) as owned:
                results = await resolve_coordinates(
                    coordinates, owned, config, sleep=sleep, cancel_event=cancel_event
                )
        else:
            results = await resolve_coordinates(
                coordinates, provider, config, sleep=sleep, cancel_event=cancel_event
            )
    except BatchCancelledError:
        logger.warning("resolve_depths cancelled | coordinates=%d", len(coordinates))
        raise
    except Exception as exc:
        logger.exception("resolve_depths failed | coordinates=%d", len(coordinates))
        raise BatchQueryError from exc

    logger.info(
        "resolve_depths completed | coordinates=%d | found=%d",
        len(results),
        sum(1 for r in results if r.found),
    )
    return results


def resolve_depths(
    coordinates_payload: list[dict[str, Any]],
    *,
    config: ResolverConfig | None = None,
) -> list[dict[str, object]]:
    """Synchronous, dict-in/dict-out wrapper around ``resolve_depths_async``.

    Args:
        coordinates_payload: List of ``{"latitude": ..., "longitude": ...}`` dicts.
        config: Optional resolver configuration.

    Returns:
        List of serialised ``ResolutionResult`` dicts.

    Raises:
        ValidationError: If the payload is not a list of dicts.
        BatchQueryError: If the orchestration fails as a whole.
    """
    if not isinstance(coordinates_payload, list):
        msg = f"resolve_depths: expected a list, got {type(coordinates_payload).__name__}"
        raise ValidationError(msg, stage="resolve_depths", code="PAYLOAD_INVALID")

    coordinates: list[Coordinate] = []
    for index, item in enumerate(coordinates_payload):
        if not isinstance(item, dict):
            msg = f"resolve_depths: item {index} must be a dict, got {type(item).__name__}"
            raise ValidationError(msg, stage="resolve_depths", code="PAYLOAD_INVALID")
        coordinates.append(Coordinate.from_dict(item))

    results = asyncio.run(resolve_depths_async(coordinates, config))
    return [r.to_dict() for r in results]
