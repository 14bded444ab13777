"""Generation lifecycle: trigger gating, job parameters, progress handling."""

from worldgen_control.generation.lifecycle import (
    GenerationLifecycle,
    LifecycleState,
    NoSelectionError,
    NoTargetError,
)
from worldgen_control.generation.parameters import (
    FormValues,
    JobParameters,
    read_job_parameters,
)

__all__ = [
    "FormValues",
    "GenerationLifecycle",
    "JobParameters",
    "LifecycleState",
    "NoSelectionError",
    "NoTargetError",
    "read_job_parameters",
]
