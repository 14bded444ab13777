"""Control-layer configuration loaded from environment variables.

All configuration values have sensible defaults for a local desktop
session where the generation backend listens on the loopback interface.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  Bad configuration is caught at startup instead
    of surfacing as a confusing failure on the first generation attempt.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from worldgen_control.core.constants import (
    DEFAULT_WORLD_SCALE,
    LARGE_AREA_THRESHOLD_M2,
    TOO_LARGE_AREA_THRESHOLD_M2,
)
from worldgen_control.core.exceptions import ControlError


class ConfigValidationError(ControlError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        self.message = message
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ControlConfig:
    """Immutable control-layer configuration.

    Loaded once when the application starts and handed to the pieces
    that need it.

    Attributes:
        executor: Name of the job executor adapter (``http`` or ``inprocess``).
        executor_url: Base URL of the generation backend for the HTTP executor.
        request_timeout_s: Timeout in seconds for dispatch requests.
        large_area_threshold_m2: Area (m²) at which a selection becomes ``LARGE``.
        too_large_area_threshold_m2: Area (m²) at which a selection becomes ``TOO_LARGE``.
        default_world_scale: Scale factor used when the form value is unusable.
        log_level: Root log level name for the command line entry point.
    """

    executor: str = "http"
    executor_url: str = "http://127.0.0.1:8765"
    request_timeout_s: float = 30.0
    large_area_threshold_m2: float = LARGE_AREA_THRESHOLD_M2
    too_large_area_threshold_m2: float = TOO_LARGE_AREA_THRESHOLD_M2
    default_world_scale: float = DEFAULT_WORLD_SCALE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ControlConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``WORLDGEN_REQUEST_TIMEOUT_S=abc``).
        """
        config = cls(
            executor=os.getenv("WORLDGEN_EXECUTOR", "http"),
            executor_url=os.getenv("WORLDGEN_EXECUTOR_URL", "http://127.0.0.1:8765"),
            request_timeout_s=float(os.getenv("WORLDGEN_REQUEST_TIMEOUT_S", "30")),
            large_area_threshold_m2=float(
                os.getenv("WORLDGEN_LARGE_AREA_M2", str(LARGE_AREA_THRESHOLD_M2))
            ),
            too_large_area_threshold_m2=float(
                os.getenv("WORLDGEN_TOO_LARGE_AREA_M2", str(TOO_LARGE_AREA_THRESHOLD_M2))
            ),
            default_world_scale=float(
                os.getenv("WORLDGEN_DEFAULT_SCALE", str(DEFAULT_WORLD_SCALE))
            ),
            log_level=os.getenv("WORLDGEN_LOG_LEVEL", "INFO").upper(),
        )
        validate_config(config)
        return config


def validate_config(config: ControlConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.executor:
        raise ConfigValidationError("WORLDGEN_EXECUTOR", config.executor, "must not be empty")

    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            "WORLDGEN_REQUEST_TIMEOUT_S",
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.large_area_threshold_m2 <= 0:
        raise ConfigValidationError(
            "WORLDGEN_LARGE_AREA_M2",
            config.large_area_threshold_m2,
            "must be > 0 (square metres)",
        )

    if config.too_large_area_threshold_m2 <= config.large_area_threshold_m2:
        raise ConfigValidationError(
            "WORLDGEN_TOO_LARGE_AREA_M2",
            config.too_large_area_threshold_m2,
            f"must be > WORLDGEN_LARGE_AREA_M2 ({config.large_area_threshold_m2})",
        )

    if config.default_world_scale <= 0:
        raise ConfigValidationError(
            "WORLDGEN_DEFAULT_SCALE",
            config.default_world_scale,
            "must be > 0",
        )

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigValidationError(
            "WORLDGEN_LOG_LEVEL",
            config.log_level,
            "must be a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        )
