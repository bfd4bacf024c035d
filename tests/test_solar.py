"""Tests for the pvlib-backed solar position adapter."""
import math
from datetime import datetime, timezone

import pytest

from core.solar import (
    SolarPosition,
    from_south_referenced,
    get_solar_position,
    get_sun_position,
)


def _angular_gap(a: float, b: float) -> float:
    return abs((a - b + 180) % 360 - 180)


def test_get_sun_position_returns_solar_position():
    dt = datetime(2024, 6, 21, 12, 0, 0, tzinfo=timezone.utc)
    result = get_sun_position(dt, 37.7749, -122.4194)
    assert isinstance(result, SolarPosition)
    assert 0.0 <= result.azimuth_deg < 360.0


def test_equator_solstice_noon_sun_high_and_north():
    # June solstice: declination ≈ +23.4°, so at the equator the noon sun
    # stands ~66.5° high, due north.
    dt = datetime(2024, 6, 21, 12, 0, 0, tzinfo=timezone.utc)
    result = get_sun_position(dt, 0.0, 0.0)
    assert result.altitude_deg > 60
    assert _angular_gap(result.azimuth_deg, 0.0) < 5


def test_delhi_equinox_solar_noon_sun_due_south():
    # Delhi is at 77.2°E → solar noon in UTC ≈ 12:00 - 77.2/15h ≈ 06:51 UTC.
    dt = datetime(2024, 3, 21, 6, 51, 0, tzinfo=timezone.utc)
    result = get_sun_position(dt, 28.6, 77.2)
    assert abs(result.azimuth_deg - 180) < 10, (
        f"Expected azimuth ~180°, got {result.azimuth_deg}°"
    )
    assert result.altitude_deg > 50


def test_midnight_sun_below_horizon():
    dt = datetime(2024, 6, 21, 0, 0, 0, tzinfo=timezone.utc)
    result = get_sun_position(dt, 0.0, 0.0)
    assert result.altitude_deg < 0


def test_naive_instant_treated_as_utc():
    naive = datetime(2024, 6, 21, 9, 30, 0)
    aware = datetime(2024, 6, 21, 9, 30, 0, tzinfo=timezone.utc)
    assert get_sun_position(naive, 45.0, 7.0) == get_sun_position(aware, 45.0, 7.0)


def test_get_solar_position_returns_expected_keys():
    dt = datetime(2024, 6, 21, 12, 0, 0, tzinfo=timezone.utc)
    result = get_solar_position(37.7749, -122.4194, dt)
    assert set(result) == {"azimuth", "altitude"}


# ---------------------------------------------------------------------------
# from_south_referenced
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "azimuth_rad, expected_deg",
    [
        (0.0, 180.0),              # south
        (math.pi / 2, 270.0),      # west
        (-math.pi / 2, 90.0),      # east
        (math.pi, 0.0),            # north, wrapped from 360
        (-math.pi, 0.0),
    ],
)
def test_from_south_referenced_azimuth(azimuth_rad, expected_deg):
    result = from_south_referenced(azimuth_rad, 0.0)
    assert _angular_gap(result.azimuth_deg, expected_deg) == pytest.approx(0.0, abs=1e-9)
    assert 0.0 <= result.azimuth_deg < 360.0


def test_from_south_referenced_altitude_in_degrees():
    assert from_south_referenced(0.0, math.pi / 2).altitude_deg == pytest.approx(90.0)
    assert from_south_referenced(0.0, -math.pi / 6).altitude_deg == pytest.approx(-30.0)
