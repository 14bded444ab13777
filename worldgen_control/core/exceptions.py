"""Unified control-layer exception taxonomy.

Provides a shared base exception hierarchy for the selection pipeline,
the generation lifecycle and the executor adapters. Every domain
exception inherits from ``ControlError`` and carries structured context
fields so that handler boundaries can log and surface failures in a
consistent way.

Taxonomy categories
-------------------
- ``ValidationError``   — user input rejected (format, range), never retryable.
- ``PreconditionError`` — an action attempted before its inputs exist.
- ``TransientError``    — temporary failures (network, executor busy), retryable.
- ``PermanentError``    — unrecoverable failures, not retryable.
- ``ContractError``     — payload/schema drift between collaborators.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.

All of these are caught at the handler boundary and turned into a
status message plus a state reset; none of them escapes an event
handler.
"""

from __future__ import annotations


class ControlError(Exception):
    """Base exception for all control-layer errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"bbox_validator"``, ``"dispatch"``).
        code: Machine-readable error code (e.g. ``"BBOX_FORMAT_INVALID"``).
        retryable: Whether repeating the same action may succeed.
        correlation_id: Job or request correlation identifier.
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
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, PreconditionError):
            return "precondition"
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
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ControlError):
    """User input failed validation. Never retryable as-is."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PreconditionError(ControlError):
    """An action was attempted before the state it needs was set up."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(ControlError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(ControlError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(ControlError):
    """Payload or schema drift between collaborators. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
