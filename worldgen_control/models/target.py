"""Generation target (output world) selection outcome.

The target picker resolves to exactly one ``TargetOutcome``.  Only
``SELECTED`` carries a usable path; every other member is an error
sentinel that the generation lifecycle must refuse.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import PurePath


class TargetOutcome(enum.Enum):
    """Result of resolving a generation target.

    Values:
        SELECTED:              A usable world directory was chosen.
        NO_TARGET_SELECTED:    The picker was dismissed without a choice.
        INVALID_TARGET:        The chosen path is not a usable world.
        TARGET_IN_USE:         The world is locked by a running game.
        TARGET_ROOT_NOT_FOUND: The saves directory does not exist.
    """

    SELECTED = "selected"
    NO_TARGET_SELECTED = "no_target_selected"
    INVALID_TARGET = "invalid_target"
    TARGET_IN_USE = "target_in_use"
    TARGET_ROOT_NOT_FOUND = "target_root_not_found"

    @property
    def message(self) -> str:
        """Human-readable description shown in the target status line."""
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES: dict[TargetOutcome, str] = {
    TargetOutcome.SELECTED: "",
    TargetOutcome.NO_TARGET_SELECTED: "No world selected",
    TargetOutcome.INVALID_TARGET: "Invalid Minecraft world",
    TargetOutcome.TARGET_IN_USE: "The selected world is currently in use",
    TargetOutcome.TARGET_ROOT_NOT_FOUND: "Minecraft directory not found.",
}


@dataclass(frozen=True, slots=True)
class TargetSelection:
    """A resolved target: an outcome plus, for ``SELECTED``, its path."""

    outcome: TargetOutcome
    path: str = ""

    @property
    def is_usable(self) -> bool:
        return self.outcome is TargetOutcome.SELECTED and bool(self.path)

    @property
    def display_name(self) -> str:
        """Final path segment for ``SELECTED``, else the outcome message."""
        if self.outcome is TargetOutcome.SELECTED:
            return PurePath(self.path.replace("\\", "/")).name or self.path
        return self.outcome.message

    @classmethod
    def selected(cls, path: str) -> TargetSelection:
        return cls(TargetOutcome.SELECTED, path)

    @classmethod
    def failed(cls, outcome: TargetOutcome) -> TargetSelection:
        if outcome is TargetOutcome.SELECTED:
            msg = "failed() requires an error outcome, not SELECTED"
            raise ValueError(msg)
        return cls(outcome)
