"""Progress events streamed back from the job executor.

The executor reports ``{"progress": n, "message": s}`` updates.  A
``progress`` of ``-1`` means "leave the displayed percent unchanged" and
an empty ``message`` means "leave the displayed message unchanged".

A message starting with ``Error!`` or ``Done!`` is terminal: the job is
over and a new one may be triggered.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

from worldgen_control.core.constants import ERROR_MARKER, SUCCESS_MARKER, UNCHANGED_PERCENT
from worldgen_control.core.exceptions import ContractError
from worldgen_control.models.payloads import ProgressPayload, validate_payload


class TerminalSignal(enum.Enum):
    """Terminal outcome of a job as reported through the progress stream.

    Values:
        REMOTE_SUCCESS: The executor finished the job.
        REMOTE_ERROR:   The executor gave up on the job.
    """

    REMOTE_SUCCESS = "remote_success"
    REMOTE_ERROR = "remote_error"


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """One progress update.

    Attributes:
        percent: Completion percentage, or ``None`` to keep the current one.
        message: Status text, or ``""`` to keep the current one.
    """

    percent: float | None = None
    message: str = ""

    @property
    def terminal_signal(self) -> TerminalSignal | None:
        if self.message.startswith(ERROR_MARKER):
            return TerminalSignal.REMOTE_ERROR
        if self.message.startswith(SUCCESS_MARKER):
            return TerminalSignal.REMOTE_SUCCESS
        return None

    @classmethod
    def from_payload(cls, payload: Any) -> ProgressEvent:
        """Build an event from a ``ProgressPayload`` dict.

        Raises:
            ContractError: If keys are missing or ``progress`` is not a number.
        """
        validate_payload(payload, ProgressPayload, source="progress_stream")
        raw_percent = payload["progress"]
        if isinstance(raw_percent, bool) or not isinstance(raw_percent, (int, float)):
            msg = f"progress must be a number, got {type(raw_percent).__name__}"
            raise ContractError(msg, stage="progress_stream", code="PROGRESS_TYPE_MISMATCH")
        if not math.isfinite(raw_percent):
            msg = f"progress must be finite, got {raw_percent!r}"
            raise ContractError(msg, stage="progress_stream", code="PROGRESS_TYPE_MISMATCH")

        percent = None if raw_percent == UNCHANGED_PERCENT else float(raw_percent)
        message = payload["message"]
        return cls(percent=percent, message="" if message is None else str(message))
