"""Job parameters read from the generation form.

Form controls hold raw values (usually strings).  They are read once,
when generation is triggered, and unusable values are replaced by
defaults instead of being reported:

- ``floodfill_timeout``: integer seconds; missing, non-numeric or
  negative ⇒ ``DEFAULT_FLOODFILL_TIMEOUT_S``.
- ``ground_level``: integer; missing, non-numeric or below
  ``MIN_GROUND_LEVEL`` ⇒ ``DEFAULT_GROUND_LEVEL``.
- ``scale``: float; missing, non-numeric, non-finite or ``<= 0`` ⇒ the
  configured default scale.

Integers are read like a text field's leading integer: ``"12abc"`` is
12 and ``"3.7"`` is 3.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from worldgen_control.core.constants import (
    DEFAULT_FLOODFILL_TIMEOUT_S,
    DEFAULT_GROUND_LEVEL,
    DEFAULT_WORLD_SCALE,
    MIN_GROUND_LEVEL,
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


@dataclass(frozen=True, slots=True)
class FormValues:
    """Raw values of the generation form controls."""

    scale: object = None
    floodfill_timeout: object = None
    ground_level: object = None
    winter_mode: bool = False


@dataclass(frozen=True, slots=True)
class JobParameters:
    """Validated numeric job parameters."""

    scale_factor: float
    floodfill_timeout_s: int
    ground_level: int
    winter_mode: bool


def read_job_parameters(
    form: FormValues,
    *,
    default_scale: float = DEFAULT_WORLD_SCALE,
) -> JobParameters:
    """Read *form* and substitute defaults for unusable values."""
    floodfill_timeout = parse_int(form.floodfill_timeout)
    if floodfill_timeout is None or floodfill_timeout < 0:
        floodfill_timeout = DEFAULT_FLOODFILL_TIMEOUT_S

    ground_level = parse_int(form.ground_level)
    if ground_level is None or ground_level < MIN_GROUND_LEVEL:
        ground_level = DEFAULT_GROUND_LEVEL

    scale = parse_float(form.scale)
    if scale is None or not scale > 0:
        scale = default_scale

    return JobParameters(
        scale_factor=scale,
        floodfill_timeout_s=floodfill_timeout,
        ground_level=ground_level,
        winter_mode=bool(form.winter_mode),
    )


def parse_int(value: object) -> int | None:
    """Leading integer of *value*, or ``None`` if there is none."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def parse_float(value: object) -> float | None:
    """Leading finite decimal of *value*, or ``None`` if there is none."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if match is None:
            return None
        number = float(match.group(1))
    return number if math.isfinite(number) else None
