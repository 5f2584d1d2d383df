"""Unified exception taxonomy for the bathymetry resolution pipeline.

Every domain exception inherits from ``BathyError`` and carries
structured context fields (stage, code, retryable) so that the batch
scheduler, the activities and the CLI can make consistent decisions
about what to retry, what to skip and what to report.

Taxonomy categories
-------------------
- ``ValidationError`` - malformed input (coordinate text, CSV rows), never retryable.
- ``TransientError``  - temporary failures (network, throttle), retryable.
- ``PermanentError``  - unrecoverable failures, not retryable.
- ``ContractError``   - response/schema drift at the service boundary.

Every exception exposes ``to_error_dict()`` for a stable structured
payload suitable for logging and JSON output.
"""

from __future__ import annotations


class BathyError(Exception):
    """Base exception for all bathymetry-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"parse_coordinate"``, ``"fetch_depth"``).
        code: Machine-readable error code (e.g. ``"API_STATUS_ERROR"``).
        retryable: Whether the operation may succeed if attempted again.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(BathyError):
    """Input validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(BathyError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(BathyError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(BathyError):
    """Payload or schema drift at the external service boundary."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete domain errors
# ---------------------------------------------------------------------------


class CoordinateFormatError(ValidationError):
    """Raised when coordinate text cannot be parsed.

    Attributes:
        value: The offending input text.
    """

    default_stage = "parse_coordinate"
    default_code = "COORDINATE_FORMAT_INVALID"

    def __init__(self, value: str, message: str = "") -> None:
        self.value = value
        super().__init__(message or f"Invalid coordinate format: {value!r}")


class BatchQueryError(PermanentError):
    """Raised once when the batch orchestration itself fails.

    Individual coordinate failures never produce this error; they surface
    as empty-feature results.  Partial results are discarded.
    """

    default_stage = "resolve_depths"
    default_code = "BATCH_QUERY_FAILED"

    def __init__(self, message: str = "Batch query failed") -> None:
        super().__init__(message)


class BatchCancelledError(PermanentError):
    """Raised when a resolution run is aborted through its cancel event."""

    default_stage = "resolve_depths"
    default_code = "BATCH_CANCELLED"

    def __init__(self, message: str = "Batch query cancelled") -> None:
        super().__init__(message)
