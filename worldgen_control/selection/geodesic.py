"""Geodesic helpers for bounding-box selections.

Pure functions: longitude normalisation and a planar approximation of
the area covered by a lat/lng rectangle.

The area estimate is deliberately simple.  Height and width are the
great-circle arc lengths of the latitude and longitude deltas on a
sphere of radius 6,371 km.  For a delta along a single meridian (or the
equator) the haversine central angle reduces to the delta itself, so
each arc is ``R * radians(delta)``.  The width is *not* scaled by
``cos(latitude)``, so the estimate overstates areas away from the
equator.  The size thresholds were tuned against this estimate, so it
must stay as is; ``geodesic_area_m2`` gives the ellipsoidal figure for
logging.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from worldgen_control.core.constants import EARTH_RADIUS_M

if TYPE_CHECKING:
    from worldgen_control.models.bbox import BoundingBox

logger = logging.getLogger("worldgen_control.selection.geodesic")


def normalize_longitude(lon: float) -> float:
    """Map any longitude into ``(-180, 180]``.

    Equivalent to ``((lon + 180) mod 360 + 360) mod 360 - 180``, with the
    formula's ``-180`` reported as ``180``.  Idempotent, and periodic with
    period 360 for inputs of any sign or magnitude.
    """
    normalized = ((lon + 180) % 360 + 360) % 360 - 180
    if normalized == -180:
        return 180.0
    return normalized


def estimate_area(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """Estimate the area of a lat/lng rectangle in square metres.

    Returns:
        ``|width * height|``, always ``>= 0`` and symmetric under
        swapping the two corners.
    """
    height = _arc_length(lat2 - lat1)
    width = _arc_length(lng2 - lng1)
    return abs(width * height)


def estimate_bbox_area(bbox: BoundingBox) -> float:
    """``estimate_area`` for a ``BoundingBox``."""
    return estimate_area(bbox.lng1, bbox.lat1, bbox.lng2, bbox.lat2)


def geodesic_area_m2(bbox: BoundingBox) -> float | None:
    """Ellipsoidal (WGS 84) area of the rectangle in square metres.

    Uses ``pyproj.Geod`` so the figure is accurate at any latitude.
    Returns ``None`` when a latitude field is outside ``[-90, 90]``,
    which happens for boxes that reached the selection positionally.
    """
    if not (-90 <= bbox.lat1 <= 90 and -90 <= bbox.lat2 <= 90):
        return None

    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    lons = [bbox.lng1, bbox.lng2, bbox.lng2, bbox.lng1]
    lats = [bbox.lat1, bbox.lat1, bbox.lat2, bbox.lat2]

    # Geod.polygon_area_perimeter returns (signed area_m2, perimeter_m)
    area_m2, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(area_m2)


def _arc_length(delta_deg: float) -> float:
    """Arc length in metres of an angular delta along a great circle."""
    return EARTH_RADIUS_M * math.radians(delta_deg)
