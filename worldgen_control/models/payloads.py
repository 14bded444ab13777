"""Typed payload schemas for the control layer's external contracts.

Every message that crosses a boundary — the coordinate picker, the
executor dispatch call and the executor's progress stream — is a
JSON-serialisable dict.  These ``TypedDict`` definitions make the
contracts explicit so that pyright catches key mismatches at analysis
time and ``validate_payload`` catches them at runtime.

Key names are camelCase because they are shared with the backend.

Usage::

    from worldgen_control.models.payloads import ProgressPayload, validate_payload

    validate_payload(raw, ProgressPayload, source="progress_stream")
"""

from __future__ import annotations

from typing import Any, TypedDict

from worldgen_control.core.exceptions import ContractError

# ---------------------------------------------------------------------------
# Coordinate picker → validator
# ---------------------------------------------------------------------------


class BBoxMessage(TypedDict):
    """Coordinate picker → BBox validator (``"lng1 lat1 lng2 lat2"``)."""

    bboxText: str


# ---------------------------------------------------------------------------
# Lifecycle → executor
# ---------------------------------------------------------------------------


class GenerationRequest(TypedDict):
    """Generation lifecycle → job executor."""

    bboxText: str
    selectedWorld: str
    worldScale: float
    groundLevel: int
    winterMode: bool
    floodfillTimeout: int


# ---------------------------------------------------------------------------
# Executor → lifecycle
# ---------------------------------------------------------------------------


class ProgressPayload(TypedDict):
    """Job executor → generation lifecycle (one progress update)."""

    progress: float
    message: str


# ---------------------------------------------------------------------------
# Runtime validation
# ---------------------------------------------------------------------------


def validate_payload(
    payload: Any,
    schema: type,
    *,
    source: str = "",
) -> None:
    """Validate that *payload* contains all required keys for *schema*.

    Only checks key presence (not value types) — type coercion is the
    consumer's responsibility.

    Args:
        payload: The dict to validate.
        schema: A ``TypedDict`` subclass defining the expected shape.
        source: Name of the sending collaborator (for error messages).

    Raises:
        ContractError: If *payload* is not a dict or is missing a required key.
    """
    label = f" from {source}" if source else ""

    if not isinstance(payload, dict):
        msg = f"Payload{label} must be a dict, got {type(payload).__name__}"
        raise ContractError(msg, stage=source, code="PAYLOAD_TYPE_MISMATCH")

    required: frozenset[str] = getattr(schema, "__required_keys__", frozenset())
    missing = sorted(required - payload.keys())
    if missing:
        msg = f"Payload{label} missing required keys: {', '.join(missing)}"
        raise ContractError(msg, stage=source, code="PAYLOAD_KEYS_MISSING")
