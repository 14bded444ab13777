"""Area-based advisory classification of a selected bounding box.

Classification is advice, not a gate: every tier is still a valid
selection.  ``LARGE`` and ``TOO_LARGE`` only warn that the job may be
slow or exceed what the backend can handle.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from worldgen_control.core.constants import (
    LARGE_AREA_THRESHOLD_M2,
    MSG_AREA_LARGE,
    MSG_AREA_TOO_LARGE,
    MSG_SELECTION_CONFIRMED,
    TOO_LARGE_AREA_THRESHOLD_M2,
)
from worldgen_control.models.status import StatusColor, StatusMessage
from worldgen_control.selection.geodesic import estimate_bbox_area, geodesic_area_m2

if TYPE_CHECKING:
    from worldgen_control.models.bbox import BoundingBox

logger = logging.getLogger("worldgen_control.selection.classifier")


class AreaTier(enum.Enum):
    """Size tier of a selection.

    Values:
        NORMAL:    Comfortably within typical limits.
        LARGE:     Will take significant time and resources.
        TOO_LARGE: May exceed typical calculation limits.
    """

    NORMAL = "normal"
    LARGE = "large"
    TOO_LARGE = "too_large"

    @property
    def status(self) -> StatusMessage:
        """Advisory message and colour for this tier."""
        return _TIER_STATUS[self]

    @property
    def is_warning(self) -> bool:
        return self is not AreaTier.NORMAL


_TIER_STATUS: dict[AreaTier, StatusMessage] = {
    AreaTier.NORMAL: StatusMessage(MSG_SELECTION_CONFIRMED, StatusColor.SUCCESS),
    AreaTier.LARGE: StatusMessage(MSG_AREA_LARGE, StatusColor.WARNING),
    AreaTier.TOO_LARGE: StatusMessage(MSG_AREA_TOO_LARGE, StatusColor.ERROR),
}


@dataclass(frozen=True, slots=True)
class Classification:
    """Tier of a bounding box together with the area it was derived from.

    Attributes:
        tier: The size tier.
        area_m2: Estimated area used for tiering.
        geodesic_area_m2: Ellipsoidal area for reference, ``None`` if
            not computable.
    """

    tier: AreaTier
    area_m2: float
    geodesic_area_m2: float | None = None


def classify_area(
    area_m2: float,
    *,
    large_threshold_m2: float = LARGE_AREA_THRESHOLD_M2,
    too_large_threshold_m2: float = TOO_LARGE_AREA_THRESHOLD_M2,
) -> AreaTier:
    """Classify an area against ascending thresholds.

    A value equal to a threshold belongs to the higher tier.
    """
    if area_m2 >= too_large_threshold_m2:
        return AreaTier.TOO_LARGE
    if area_m2 >= large_threshold_m2:
        return AreaTier.LARGE
    return AreaTier.NORMAL


def classify_bbox(
    bbox: BoundingBox,
    *,
    large_threshold_m2: float = LARGE_AREA_THRESHOLD_M2,
    too_large_threshold_m2: float = TOO_LARGE_AREA_THRESHOLD_M2,
) -> Classification:
    """Estimate the area of *bbox* and classify it."""
    area_m2 = estimate_bbox_area(bbox)
    tier = classify_area(
        area_m2,
        large_threshold_m2=large_threshold_m2,
        too_large_threshold_m2=too_large_threshold_m2,
    )
    reference_m2 = geodesic_area_m2(bbox)

    if tier.is_warning:
        logger.warning(
            "Large selection | tier=%s | area=%.0f m2 | threshold=%.0f m2",
            tier.value,
            area_m2,
            too_large_threshold_m2 if tier is AreaTier.TOO_LARGE else large_threshold_m2,
        )

    return Classification(tier=tier, area_m2=area_m2, geodesic_area_m2=reference_m2)
