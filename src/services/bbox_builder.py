from __future__ import annotations

import math
from typing import Tuple

from utils import EARTH_RADIUS_KM

BBox = Tuple[float, float, float, float]


def expand_bbox_from_center(lat: float, lon: float, km: float) -> BBox:
    """Create a lat/lon box that fully contains the great-circle disc of radius km.

    Returns (min_lat, min_lon, max_lat, max_lon)
    """
    angular = max(km, 0.0) / EARTH_RADIUS_KM
    dlat = math.degrees(angular)
    min_lat = max(lat - dlat, -90.0)
    max_lat = min(lat + dlat, 90.0)

    # disc reaches a pole or wraps the antimeridian: every longitude qualifies
    if angular >= math.pi / 2 - math.radians(abs(lat)):
        return (min_lat, -180.0, max_lat, 180.0)
    dlon = math.degrees(math.asin(math.sin(angular) / math.cos(math.radians(lat))))
    min_lon = lon - dlon
    max_lon = lon + dlon
    if min_lon < -180.0 or max_lon > 180.0:
        return (min_lat, -180.0, max_lat, 180.0)
    return (min_lat, min_lon, max_lat, max_lon)


def bbox_contains(bbox: BBox, lat: float, lon: float) -> bool:
    min_lat, min_lon, max_lat, max_lon = bbox
    return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon
