"""Solar position lookups using pvlib."""
from dataclasses import dataclass
from datetime import datetime, timezone

import pandas as pd
import pvlib

from core.geo import to_degrees


@dataclass(frozen=True)
class SolarPosition:
    azimuth_deg: float   # clockwise from north, [0, 360)
    altitude_deg: float  # above the horizon; negative at night


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def _pvlib_position(lat: float, lng: float, instant: datetime) -> pd.DataFrame:
    times = pd.DatetimeIndex([_as_utc(instant)])
    # Fixed site altitude: skips pvlib's elevation-map lookup, which rejects |lat| > 90.
    location = pvlib.location.Location(latitude=lat, longitude=lng, altitude=0)
    return location.get_solarposition(times)


def get_sun_position(instant: datetime, latitude: float, longitude: float) -> SolarPosition:
    """
    Return the sun's azimuth and altitude for a location at ``instant``.

    Args:
        instant:   Time of observation (naive → assumed UTC).
        latitude:  Decimal degrees.
        longitude: Decimal degrees (east positive).

    Returns:
        SolarPosition with a North-referenced azimuth normalised to
        [0, 360) and the geometric (refraction-free) altitude.
    """
    solar_pos = _pvlib_position(latitude, longitude, instant)
    return SolarPosition(
        azimuth_deg=float(solar_pos["azimuth"].iloc[0]) % 360,
        altitude_deg=float(solar_pos["elevation"].iloc[0]),
    )


def from_south_referenced(azimuth_rad: float, altitude_rad: float) -> SolarPosition:
    """
    Convert an ephemeris result expressed as South-referenced radians
    (0 = south, π/2 = west) into a North-referenced SolarPosition.
    """
    return SolarPosition(
        azimuth_deg=(to_degrees(azimuth_rad) + 180) % 360,
        altitude_deg=to_degrees(altitude_rad),
    )


def get_solar_position(lat: float, lon: float, dt: datetime) -> dict:
    """Return solar azimuth and altitude (degrees) for a given location and time."""
    position = get_sun_position(dt, lat, lon)
    return {
        "azimuth": round(position.azimuth_deg, 4),
        "altitude": round(position.altitude_deg, 4),
    }
