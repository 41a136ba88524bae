# path: skate-spot-api/app/utils/geo.py

from __future__ import annotations

import math

from app.models.spot_models import Coordinate


EARTH_RADIUS_M = 6371000.0
METERS_PER_MILE = 1609.34


def haversine_m(a_lon: float, a_lat: float, b_lon: float, b_lat: float) -> float:
    # No range checks; out-of-range degrees give meaningless but finite results.
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dphi = math.radians(b_lat - a_lat)
    dlmb = math.radians(b_lon - a_lon)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # Float error near antipodes can push s a hair past 1.
    s = min(1.0, s)
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(s))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two coordinates."""
    return haversine_m(a.longitude, a.latitude, b.longitude, b.latitude)


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def coordinates_match(a: Coordinate, b: Coordinate, epsilon: float = 1e-6) -> bool:
    """True when both axes differ by less than `epsilon` degrees."""
    return abs(a.latitude - b.latitude) < epsilon and abs(a.longitude - b.longitude) < epsilon
