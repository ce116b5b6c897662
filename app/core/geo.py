"""
Great-circle distance between two coordinates
"""
import math
from typing import Optional

EARTH_RADIUS_M = 6371000


def has_coordinates(lat: Optional[float], lon: Optional[float]) -> bool:
    """Null and zero both mean 'no location reported'"""
    return bool(lat) and bool(lon)


def calculate_distance(
    lat1: Optional[float],
    lon1: Optional[float],
    lat2: Optional[float],
    lon2: Optional[float]
) -> Optional[int]:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        int: Distance in whole meters (halves round up), or None when either
        side lacks coordinates
    """
    if not has_coordinates(lat1, lon1) or not has_coordinates(lat2, lon2):
        return None

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return int(math.floor(EARTH_RADIUS_M * c + 0.5))
