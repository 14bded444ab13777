"""Status surface that the control layer writes to.

The control layer never touches widgets directly.  It reports through a
``StatusView``, which a desktop front end implements on top of its
labels and progress bar.  ``LoggingStatusView`` is the headless
implementation used by the command line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from worldgen_control.models.status import StatusColor

if TYPE_CHECKING:
    from worldgen_control.models.status import StatusMessage

logger = logging.getLogger("worldgen_control.view")


class StatusView(Protocol):
    """The three status lines the control layer updates."""

    def show_bbox_info(self, status: StatusMessage) -> None:
        """Update the line under the coordinate input."""

    def show_target(self, status: StatusMessage) -> None:
        """Update the selected-target line."""

    def show_progress(self, percent: float | None, status: StatusMessage | None) -> None:
        """Update the progress bar and/or progress message.

        ``None`` for either argument means "leave it unchanged".
        """


class LoggingStatusView:
    """Headless ``StatusView`` that writes every update to the log.

    Keeps the last value of each line so callers can inspect the final
    state after a run.
    """

    def __init__(self) -> None:
        self.bbox_info: StatusMessage | None = None
        self.target: StatusMessage | None = None
        self.percent: float | None = None
        self.progress: StatusMessage | None = None

    def show_bbox_info(self, status: StatusMessage) -> None:
        self.bbox_info = status
        if status.text:
            logger.log(_level_for(status.color), "Selection | %s", status.text)

    def show_target(self, status: StatusMessage) -> None:
        self.target = status
        if status.text:
            logger.log(_level_for(status.color), "Target | %s", status.text)

    def show_progress(self, percent: float | None, status: StatusMessage | None) -> None:
        if percent is not None:
            self.percent = percent
        if status is not None:
            self.progress = status
        if percent is not None or status is not None:
            logger.log(
                _level_for(status.color if status else StatusColor.NEUTRAL),
                "Progress | %3.0f%% | %s",
                self.percent or 0.0,
                self.progress.text if self.progress else "",
            )


def _level_for(color: StatusColor) -> int:
    if color is StatusColor.ERROR:
        return logging.ERROR
    if color is StatusColor.WARNING:
        return logging.WARNING
    return logging.INFO
