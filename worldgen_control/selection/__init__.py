"""Bounding-box selection pipeline.

- geodesic: Longitude normalisation and area estimation
- validator: Text and picker-message validation (``BBoxValidator``)
- classifier: Area tiers and advisory messages
- state: Session-wide ``SelectionState``
"""

from worldgen_control.selection.classifier import (
    AreaTier,
    Classification,
    classify_area,
    classify_bbox,
)
from worldgen_control.selection.geodesic import (
    estimate_area,
    estimate_bbox_area,
    geodesic_area_m2,
    normalize_longitude,
)
from worldgen_control.selection.state import SelectionState
from worldgen_control.selection.validator import (
    BBOX_PATTERN,
    BBoxValidator,
    FormatError,
    RangeOrOrderError,
    parse_coordinate_text,
)

__all__ = [
    "BBOX_PATTERN",
    "AreaTier",
    "BBoxValidator",
    "Classification",
    "FormatError",
    "RangeOrOrderError",
    "SelectionState",
    "classify_area",
    "classify_bbox",
    "estimate_area",
    "estimate_bbox_area",
    "geodesic_area_m2",
    "normalize_longitude",
    "parse_coordinate_text",
]
