"""User-visible status text and colour.

Both the text and the colour code are part of the observable contract
of the control layer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from worldgen_control.core.constants import (
    COLOR_ERROR,
    COLOR_NEUTRAL,
    COLOR_SUCCESS,
    COLOR_WARNING,
)


class StatusColor(enum.Enum):
    """Colour of a status line; values are the literal hex codes."""

    ERROR = COLOR_ERROR
    WARNING = COLOR_WARNING
    SUCCESS = COLOR_SUCCESS
    NEUTRAL = COLOR_NEUTRAL


@dataclass(frozen=True, slots=True)
class StatusMessage:
    text: str
    color: StatusColor = StatusColor.NEUTRAL

    @classmethod
    def cleared(cls) -> StatusMessage:
        """An empty, neutral status line."""
        return cls("", StatusColor.NEUTRAL)
