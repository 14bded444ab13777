"""Domain models for the world-generation control layer."""

from worldgen_control.models.bbox import EMPTY_BBOX, BBoxMessageError, BoundingBox
from worldgen_control.models.job import GenerationJob, ModelValidationError
from worldgen_control.models.payloads import (
    BBoxMessage,
    GenerationRequest,
    ProgressPayload,
    validate_payload,
)
from worldgen_control.models.progress import ProgressEvent, TerminalSignal
from worldgen_control.models.status import StatusColor, StatusMessage
from worldgen_control.models.target import TargetOutcome, TargetSelection

__all__ = [
    "EMPTY_BBOX",
    "BBoxMessage",
    "BBoxMessageError",
    "BoundingBox",
    "GenerationJob",
    "GenerationRequest",
    "ModelValidationError",
    "ProgressEvent",
    "ProgressPayload",
    "StatusColor",
    "StatusMessage",
    "TargetOutcome",
    "TargetSelection",
    "TerminalSignal",
    "validate_payload",
]
