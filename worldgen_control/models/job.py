"""Generation job model.

A ``GenerationJob`` is assembled when the user triggers generation and
lives only for the duration of one dispatch call.  It is never
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from worldgen_control.core.constants import MIN_GROUND_LEVEL
from worldgen_control.core.exceptions import ValidationError
from worldgen_control.models.bbox import BoundingBox
from worldgen_control.models.payloads import GenerationRequest


class ModelValidationError(ValueError, ValidationError):
    """Raised when a domain model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        ValidationError.__init__(self, formatted)


@dataclass(frozen=True, slots=True)
class GenerationJob:
    """One generation request for the external executor.

    Attributes:
        bbox: Canonical bounding box, sent as ``"lng1 lat1 lng2 lat2"``.
        target: Path of the output world directory.
        scale_factor: Blocks-per-metre scale, strictly positive.
        ground_level: Ground Y level, at least ``MIN_GROUND_LEVEL``.
        winter_mode: Generate snow-covered terrain.
        floodfill_timeout_s: Per-area floodfill timeout in seconds, ``>= 0``.
    """

    bbox: BoundingBox
    target: str
    scale_factor: float
    ground_level: int
    winter_mode: bool = False
    floodfill_timeout_s: int = 20

    def __post_init__(self) -> None:
        if self.bbox.is_sentinel:
            raise ModelValidationError("GenerationJob", "bbox", self.bbox, "must not be empty")
        if not self.target:
            raise ModelValidationError("GenerationJob", "target", self.target, "must not be empty")
        if not self.scale_factor > 0:
            raise ModelValidationError(
                "GenerationJob", "scale_factor", self.scale_factor, "must be > 0"
            )
        if self.ground_level < MIN_GROUND_LEVEL:
            raise ModelValidationError(
                "GenerationJob",
                "ground_level",
                self.ground_level,
                f"must be >= {MIN_GROUND_LEVEL}",
            )
        if self.floodfill_timeout_s < 0:
            raise ModelValidationError(
                "GenerationJob", "floodfill_timeout_s", self.floodfill_timeout_s, "must be >= 0"
            )

    def to_payload(self) -> GenerationRequest:
        """Serialise to the executor's dispatch contract."""
        return {
            "bboxText": self.bbox.to_text(),
            "selectedWorld": self.target,
            "worldScale": self.scale_factor,
            "groundLevel": self.ground_level,
            "winterMode": self.winter_mode,
            "floodfillTimeout": self.floodfill_timeout_s,
        }
