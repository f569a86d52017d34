# app/services/geo.py
from __future__ import annotations

import math
from typing import Sequence

from app.core.exceptions import InputError
from app.schemas.venues import Location, Midpoint

EARTH_RADIUS_MILES = 3959.0


def midpoint(locations: Sequence[Location]) -> Midpoint:
    """
    Unweighted centroid: latitude and longitude are averaged independently.
    """
    if not locations:
        raise InputError("No coordinates provided")
    n = len(locations)
    return Midpoint(
        latitude=sum(loc.latitude for loc in locations) / n,
        longitude=sum(loc.longitude for loc in locations) / n,
    )


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine great-circle distance in miles."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
