"""Bounding-box acquisition and validation.

Two inputs feed the selection:

- **Text path** — free text typed by the user, four numbers in
  ``lat, lng, lat, lng`` order separated by commas or whitespace.  The
  text is checked in two separate passes, format first
  (``FormatError``) and range second (``RangeOrOrderError``), so the
  user can tell a typo from swapped coordinates.
- **Message path** — a ``{"bboxText": "lng1 lat1 lng2 lat2"}`` message
  from the map-based coordinate picker, delivered over a ``Channel``.

Both end in the same acceptance step: normalise, store in
``SelectionState``, classify, and report the tier to the view.

Accepted text is forwarded positionally: the four numbers keep their
typed order when they become the message's ``lng1 lat1 lng2 lat2``.
The acceptance step normalises the fields named ``lat1`` and ``lat2``
with the longitude normaliser.  Both behaviours match what the backend
expects today and are kept as-is.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import TYPE_CHECKING

from worldgen_control.core.constants import (
    LARGE_AREA_THRESHOLD_M2,
    MSG_CUSTOM_SELECTION_CONFIRMED,
    MSG_FORMAT_INVALID,
    MSG_RANGE_OR_ORDER_INVALID,
    TOO_LARGE_AREA_THRESHOLD_M2,
)
from worldgen_control.core.exceptions import ContractError, ValidationError
from worldgen_control.models.bbox import BBoxMessageError, BoundingBox
from worldgen_control.models.payloads import BBoxMessage, validate_payload
from worldgen_control.models.status import StatusColor, StatusMessage
from worldgen_control.selection.classifier import AreaTier, Classification, classify_bbox
from worldgen_control.selection.geodesic import normalize_longitude

if TYPE_CHECKING:
    from worldgen_control.core.config import ControlConfig
    from worldgen_control.events.channel import Channel
    from worldgen_control.selection.state import SelectionState
    from worldgen_control.view import StatusView

logger = logging.getLogger("worldgen_control.selection.validator")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_NUMBER = r"(-?\d+(?:\.\d+)?)"
_SEPARATOR = r"(?:,|\s+)"

BBOX_PATTERN = re.compile(_SEPARATOR.join([_NUMBER] * 4), re.ASCII)
"""``NUM sep NUM sep NUM sep NUM``; *sep* is a comma or a run of whitespace."""

MIN_LAT, MAX_LAT = -90.0, 90.0
MIN_LNG, MAX_LNG = -180.0, 180.0

# Normalised message-path fields are rounded to this many decimals
COORD_DECIMALS = 6


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FormatError(ValidationError):
    """The coordinate text does not match the four-number pattern."""

    default_stage = "bbox_validator"
    default_code = "BBOX_FORMAT_INVALID"


class RangeOrOrderError(ValidationError):
    """The numbers parse but are out of range or given lng-first."""

    default_stage = "bbox_validator"
    default_code = "BBOX_RANGE_OR_ORDER_INVALID"


# ---------------------------------------------------------------------------
# Pure parsing
# ---------------------------------------------------------------------------


def parse_coordinate_text(text: str) -> tuple[float, float, float, float]:
    """Parse and range-check lat-first coordinate text.

    Args:
        text: ``"lat,lng,lat,lng"`` or ``"lat lng lat lng"``.

    Returns:
        ``(lat1, lng1, lat2, lng2)`` in input order.

    Raises:
        FormatError: If the text is not four separated decimal numbers.
        RangeOrOrderError: If a latitude is outside [-90, 90] or a
            longitude outside [-180, 180].
    """
    match = BBOX_PATTERN.fullmatch(text.strip())
    if match is None:
        raise FormatError(MSG_FORMAT_INVALID)

    lat1, lng1, lat2, lng2 = (float(group) for group in match.groups())

    if not (
        MIN_LAT <= lat1 <= MAX_LAT
        and MIN_LNG <= lng1 <= MAX_LNG
        and MIN_LAT <= lat2 <= MAX_LAT
        and MIN_LNG <= lng2 <= MAX_LNG
    ):
        raise RangeOrOrderError(MSG_RANGE_OR_ORDER_INVALID)

    return lat1, lng1, lat2, lng2


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class BBoxValidator:
    """Turns text input and picker messages into the current selection.

    Args:
        selection: Session selection state to update.
        view: Status surface for the line under the coordinate input.
        channel: Optional coordinate channel; the validator subscribes to it.
        config: Optional configuration supplying the area thresholds.
    """

    def __init__(
        self,
        selection: SelectionState,
        view: StatusView,
        *,
        channel: Channel[BBoxMessage] | None = None,
        config: ControlConfig | None = None,
    ) -> None:
        self._selection = selection
        self._view = view
        self._large_m2 = config.large_area_threshold_m2 if config else LARGE_AREA_THRESHOLD_M2
        self._too_large_m2 = (
            config.too_large_area_threshold_m2 if config else TOO_LARGE_AREA_THRESHOLD_M2
        )
        if channel is not None:
            channel.subscribe(self.handle_message)

    def handle_text_input(self, raw: str) -> Classification | None:
        """Handle the current content of the coordinate text box.

        Returns:
            The classification of the accepted box, or ``None`` when the
            input was empty, rejected, or the sentinel box.
        """
        text = raw.strip()
        if not text:
            self._selection.clear_bbox()
            self._view.show_bbox_info(StatusMessage.cleared())
            return None

        try:
            lat1, lng1, lat2, lng2 = parse_coordinate_text(text)
        except ValidationError as exc:
            self._selection.clear_bbox()
            logger.warning("BBox input rejected | code=%s | input=%r", exc.code, text)
            self._view.show_bbox_info(StatusMessage(exc.message, StatusColor.WARNING))
            return None

        classification = self._accept(BoundingBox(lat1, lng1, lat2, lng2))
        if classification is not None and classification.tier is AreaTier.NORMAL:
            self._view.show_bbox_info(
                StatusMessage(MSG_CUSTOM_SELECTION_CONFIRMED, StatusColor.SUCCESS)
            )
        return classification

    def handle_message(self, message: BBoxMessage) -> Classification | None:
        """Handle a ``{"bboxText": "lng1 lat1 lng2 lat2"}`` picker message.

        Messages without text are ignored.  A malformed message clears
        the selection.
        """
        try:
            validate_payload(message, BBoxMessage, source="bbox_channel")
        except ContractError as exc:
            logger.warning("BBox message ignored | %s", exc.message)
            return None

        text = message["bboxText"]
        if not text:
            return None

        try:
            bbox = BoundingBox.from_text(str(text))
        except BBoxMessageError as exc:
            self._selection.clear_bbox()
            self._view.show_bbox_info(StatusMessage.cleared())
            logger.warning("BBox message rejected | code=%s | %s", exc.code, exc.message)
            return None

        return self._accept(bbox)

    def _accept(self, bbox: BoundingBox) -> Classification | None:
        """Normalise, store and classify *bbox*."""
        bbox = replace(
            bbox,
            lat1=round(normalize_longitude(bbox.lat1), COORD_DECIMALS),
            lat2=round(normalize_longitude(bbox.lat2), COORD_DECIMALS),
        )

        if bbox.is_sentinel:
            self._selection.clear_bbox()
            self._view.show_bbox_info(StatusMessage.cleared())
            return None

        self._selection.accept_bbox(bbox)
        classification = classify_bbox(
            bbox,
            large_threshold_m2=self._large_m2,
            too_large_threshold_m2=self._too_large_m2,
        )

        logger.info(
            "BBox accepted | bbox=%s | tier=%s | area=%.0f m2 | geodesic_area=%s m2",
            bbox.to_text(),
            classification.tier.value,
            classification.area_m2,
            "n/a"
            if classification.geodesic_area_m2 is None
            else f"{classification.geodesic_area_m2:.0f}",
        )

        self._view.show_bbox_info(classification.tier.status)
        return classification
