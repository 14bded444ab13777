"""Data model for a selected bounding box.

The canonical in-memory form stores four floats in a fixed order,
``lng1, lat1, lng2, lat2`` (longitude first, per corner).  The wire form
exchanged with the coordinate picker and the executor is the same four
numbers joined by single spaces.

The all-zero box is a sentinel meaning "nothing selected", never a real
box at the origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from worldgen_control.core.exceptions import ContractError


class BBoxMessageError(ContractError):
    """Raised when a coordinate message does not carry four numbers."""

    default_stage = "bbox_message"
    default_code = "BBOX_MESSAGE_MALFORMED"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """A rectangle on the Earth's surface given by two opposite corners.

    The constructor does not range-check: values arrive here positionally
    from the coordinate channel, and range checks belong to the text
    validator.

    Attributes:
        lng1: First corner, first field.
        lat1: First corner, second field.
        lng2: Second corner, first field.
        lat2: Second corner, second field.
    """

    lng1: float
    lat1: float
    lng2: float
    lat2: float

    @property
    def is_sentinel(self) -> bool:
        """``True`` for the all-zero "no selection" box."""
        return self.lng1 == 0 and self.lat1 == 0 and self.lng2 == 0 and self.lat2 == 0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.lng1, self.lat1, self.lng2, self.lat2)

    def to_text(self) -> str:
        """Render the space-joined ``"lng1 lat1 lng2 lat2"`` wire form.

        Integral values are written without a fractional part
        (``10`` rather than ``10.0``).
        """
        return " ".join(_format_coord(v) for v in self.as_tuple())

    @classmethod
    def from_text(cls, text: str) -> BoundingBox:
        """Parse the space-separated wire form.

        Raises:
            BBoxMessageError: If the text does not hold exactly four
                finite numbers.
        """
        parts = text.split()
        if len(parts) != 4:
            msg = f"Expected 4 space-separated numbers, got {len(parts)} in {text!r}"
            raise BBoxMessageError(msg)
        try:
            values = [float(p) for p in parts]
        except ValueError as exc:
            msg = f"Non-numeric coordinate in {text!r}"
            raise BBoxMessageError(msg) from exc
        if not all(math.isfinite(v) for v in values):
            msg = f"Non-finite coordinate in {text!r}"
            raise BBoxMessageError(msg)
        return cls(*values)


EMPTY_BBOX = BoundingBox(0.0, 0.0, 0.0, 0.0)


def _format_coord(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)
