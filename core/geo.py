"""Spherical geometry helpers: angle conversion, great-circle distance, bearing."""
import math
from dataclasses import dataclass

# Mean Earth radius. Distances are reported against this sphere.
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


def to_radians(deg: float) -> float:
    return deg * math.pi / 180


def to_degrees(rad: float) -> float:
    return rad * 180 / math.pi


def great_circle_distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Haversine distance in kilometres between two coordinates.

    The intermediate ``h`` term is clamped to [0, 1] so that rounding near
    antipodal points never feeds a negative value to ``sqrt``.
    """
    lat1 = to_radians(a.latitude)
    lat2 = to_radians(b.latitude)
    dlat = to_radians(b.latitude - a.latitude)
    dlon = to_radians(b.longitude - a.longitude)

    h = (math.sin(dlat / 2) ** 2
         + math.sin(dlon / 2) ** 2 * math.cos(lat1) * math.cos(lat2))
    h = min(1.0, max(0.0, h))

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def initial_bearing_deg(start: Coordinate, end: Coordinate) -> float:
    """
    Forward azimuth (0–360°, clockwise from north) from ``start`` to ``end``.

    Meaningless when both points coincide; callers skip zero-length
    segments before reading it.
    """
    lat1 = to_radians(start.latitude)
    lat2 = to_radians(end.latitude)
    dlon = to_radians(end.longitude - start.longitude)

    x = math.sin(dlon) * math.cos(lat2)
    y = (math.cos(lat1) * math.sin(lat2)
         - math.sin(lat1) * math.cos(lat2) * math.cos(dlon))

    return (to_degrees(math.atan2(x, y)) + 360) % 360


def normalize_signed_angle(angle: float) -> float:
    """Wrap an angle in degrees into [-180, 180)."""
    return (angle + 540) % 360 - 180
