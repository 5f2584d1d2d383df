"""Batched, rate-limited, layer-falling-back depth resolution.

Resolves a list of coordinates into one ``ResolutionResult`` each while
respecting two external limits:

- at most ``max_concurrent_requests`` fetches in flight at once, and
- at most ``rate_limit_per_min`` requests per minute, enforced by a fixed
  pause of ``batch_delay_seconds`` between batches.

Algorithm
---------
1. Every coordinate enters a work queue as a task at layer 0, in input order.
2. Up to ``batch_size`` tasks are taken from the front of the queue and
   attempted concurrently in a task group.  An attempt decimal-parses the coordinate,
   builds the envelope and queries the task's current layer.
3. After the whole batch has finished, each attempt that produced no
   features (empty response or provider error) and has layers left is
   put back at the *front* of the queue targeting the next layer.
   Everything else becomes a terminal result.  Unparseable coordinates
   are terminal immediately; no layer can fix them.
4. If work remains, the scheduler sleeps before the next batch.

Only the orchestrating coroutine mutates the queue and the output list,
and only between joins, so no locking is needed.  Output order is not
input order: retried coordinates overtake untried ones.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bathy_query.core.exceptions import BatchCancelledError
from bathy_query.models.coordinate import CoordinateTask, ResolutionResult
from bathy_query.parsing.coordinates import parse_coordinate_pair
from bathy_query.providers.base import ProviderError
from bathy_query.utils.projection import to_envelope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from bathy_query.core.config import ResolverConfig
    from bathy_query.models.coordinate import Coordinate
    from bathy_query.models.response import Feature
    from bathy_query.providers.base import DepthProvider

logger = logging.getLogger("bathy_query.orchestrators.batch_scheduler")


# ---------------------------------------------------------------------------
# Attempt outcomes
# ---------------------------------------------------------------------------


class OutcomeKind(enum.Enum):
    """Result of a single attempt against one layer.

    Values:
        FOUND:       The layer returned at least one feature.
        EMPTY:       The layer answered with no features.
        FAILED:      The fetch raised a provider error (treated as empty).
        UNPARSEABLE: The coordinate text is not numeric; nothing was fetched.
    """

    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True, slots=True)
class AttemptOutcome:
    """Outcome of one task attempt, returned to the orchestrating loop."""

    task: CoordinateTask
    kind: OutcomeKind
    features: list[Feature] = field(default_factory=list)
    error: ProviderError | None = None

    @property
    def wants_fallback(self) -> bool:
        """Whether a later layer might still yield data."""
        return self.kind in (OutcomeKind.EMPTY, OutcomeKind.FAILED)

    def to_result(self) -> ResolutionResult:
        """Convert into the terminal record for this coordinate."""
        if self.kind is OutcomeKind.UNPARSEABLE:
            return ResolutionResult(coord=self.task.coord)
        return ResolutionResult(
            coord=self.task.coord,
            features=list(self.features),
            layer_id=self.task.layer_attempt,
            attempts=self.task.layer_attempt + 1,
        )


async def attempt_task(
    task: CoordinateTask,
    provider: DepthProvider,
    config: ResolverConfig,
    semaphore: asyncio.Semaphore,
) -> AttemptOutcome:
    """Run one attempt for *task* against its current layer.

    Provider errors are converted into a ``FAILED`` outcome; they never
    propagate out of this function.
    """
    pair = parse_coordinate_pair(task.coord)
    if pair is None:
        logger.debug(
            "Unparseable coordinate | lat=%r | lon=%r",
            task.coord.latitude,
            task.coord.longitude,
        )
        return AttemptOutcome(task=task, kind=OutcomeKind.UNPARSEABLE)

    latitude, longitude = pair
    envelope = to_envelope(latitude, longitude, config.envelope_half_width_m)

    async with semaphore:
        try:
            response = await provider.query(envelope, task.layer_attempt)
        except ProviderError as exc:
            logger.warning(
                "Depth query failed | lat=%s | lon=%s | layer=%d | status=%s | code=%s | "
                "category=%s | retryable=%s | error=%s",
                task.coord.latitude,
                task.coord.longitude,
                task.layer_attempt,
                exc.status_code,
                exc.code,
                exc.category,
                exc.retryable,
                exc.message,
            )
            return AttemptOutcome(task=task, kind=OutcomeKind.FAILED, error=exc)

    if not response.features:
        return AttemptOutcome(task=task, kind=OutcomeKind.EMPTY)
    return AttemptOutcome(task=task, kind=OutcomeKind.FOUND, features=list(response.features))


def _raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise BatchCancelledError


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------


async def resolve_coordinates(
    coordinates: Iterable[Coordinate],
    provider: DepthProvider,
    config: ResolverConfig,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    cancel_event: asyncio.Event | None = None,
) -> list[ResolutionResult]:
    """Resolve every coordinate into exactly one ``ResolutionResult``.

    Args:
        coordinates: Input coordinates; malformed text is tolerated.
        provider: Depth provider used for every fetch.
        config: Batch size, concurrency bound, rate limit and retry ceiling.
        sleep: Awaitable used for the inter-batch pause (injectable for tests).
        cancel_event: When set, the run stops before the next batch.

    Returns:
        One result per input coordinate, in completion order.

    Raises:
        BatchCancelledError: If *cancel_event* was set; partial results
            are discarded.
        ExceptionGroup: If an attempt raised something other than a
            provider error; the rest of its batch is cancelled first.
    """
    queue: deque[CoordinateTask] = deque(CoordinateTask(coord=c) for c in coordinates)
    results: list[ResolutionResult] = []
    semaphore = asyncio.Semaphore(config.max_concurrent_requests)
    last_layer = config.max_layer_attempts - 1
    delay = config.batch_delay_seconds

    total = len(queue)
    batch_number = 0
    attempts = 0

    logger.info(
        "Resolution started | coordinates=%d | batch_size=%d | concurrency=%d | delay=%.1fs",
        total,
        config.batch_size,
        config.max_concurrent_requests,
        delay,
    )

    while queue:
        _raise_if_cancelled(cancel_event)

        batch = [queue.popleft() for _ in range(min(config.batch_size, len(queue)))]
        batch_number += 1

        # An unexpected error cancels the rest of the batch before it propagates.
        async with asyncio.TaskGroup() as group:
            pending = [
                group.create_task(attempt_task(task, provider, config, semaphore))
                for task in batch
            ]
        outcomes = [t.result() for t in pending]

        retries: list[CoordinateTask] = []
        for outcome in outcomes:
            if outcome.kind is not OutcomeKind.UNPARSEABLE:
                attempts += 1
            if outcome.wants_fallback and outcome.task.layer_attempt < last_layer:
                retries.append(outcome.task.next_layer())
            else:
                results.append(outcome.to_result())

        # Retries go ahead of untried coordinates, keeping their batch order.
        queue.extendleft(reversed(retries))

        logger.info(
            "Batch completed | batch=%d | size=%d | resolved=%d/%d | requeued=%d | queued=%d",
            batch_number,
            len(batch),
            len(results),
            total,
            len(retries),
            len(queue),
        )

        if queue:
            await sleep(delay)

    found = sum(1 for r in results if r.found)
    logger.info(
        "Resolution completed | coordinates=%d | found=%d | empty=%d | batches=%d | attempts=%d",
        len(results),
        found,
        len(results) - found,
        batch_number,
        attempts,
    )
    return results
