"""Session-wide selection state.

One ``SelectionState`` exists per application session.  It holds the
last accepted bounding box and the last resolved generation target.
Only the BBox validator writes the box and only the target picker
writes the target; the generation lifecycle reads both.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from worldgen_control.models.bbox import BoundingBox
    from worldgen_control.models.target import TargetSelection

logger = logging.getLogger("worldgen_control.selection.state")


class SelectionState:
    """Last accepted bounding box and last resolved target."""

    def __init__(self) -> None:
        self._bbox: BoundingBox | None = None
        self._target: TargetSelection | None = None

    @property
    def bbox(self) -> BoundingBox | None:
        return self._bbox

    @property
    def target(self) -> TargetSelection | None:
        return self._target

    @property
    def has_bbox(self) -> bool:
        """``True`` when a non-sentinel box is selected."""
        return self._bbox is not None and not self._bbox.is_sentinel

    @property
    def has_target(self) -> bool:
        """``True`` when the target is a usable ``SELECTED`` outcome."""
        return self._target is not None and self._target.is_usable

    def accept_bbox(self, bbox: BoundingBox) -> None:
        """Store *bbox*; the sentinel box clears the selection instead."""
        if bbox.is_sentinel:
            self.clear_bbox()
            return
        self._bbox = bbox
        logger.debug("Selection stored | bbox=%s", bbox.to_text())

    def clear_bbox(self) -> None:
        if self._bbox is not None:
            logger.debug("Selection cleared")
        self._bbox = None

    def set_target(self, target: TargetSelection) -> None:
        self._target = target
        logger.debug("Target stored | outcome=%s | path=%s", target.outcome.value, target.path)
