"""Route sun-exposure analysis: which side of the vehicle faces the sun."""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal, Optional, Sequence

from core.geo import (
    Coordinate,
    great_circle_distance_km,
    initial_bearing_deg,
    normalize_signed_angle,
)
from core.solar import SolarPosition, get_sun_position

_log = logging.getLogger(__name__)

Side = Literal["Left", "Right"]
BestSide = Literal["Left", "Right", "Any"]
SunPositionFn = Callable[[datetime, float, float], SolarPosition]


@dataclass(frozen=True)
class SegmentExposure:
    start: Coordinate
    end: Coordinate
    distance_km: float
    bearing_deg: Optional[float]     # None for zero-length segments
    solar: Optional[SolarPosition]   # None for zero-length segments
    sun_side: Optional[Side]         # None when zero-length or sun below horizon


@dataclass(frozen=True)
class SunAnalysisResult:
    total_distance_km: float
    left_sun_distance_km: float
    right_sun_distance_km: float
    best_side: BestSide
    sun_exposure_percentage: int
    night_distance_km: float = 0.0

    def to_dict(self) -> dict:
        """JSON-ready record in the public response shape."""
        return {
            "totalDistance": self.total_distance_km,
            "leftSunDistance": self.left_sun_distance_km,
            "rightSunDistance": self.right_sun_distance_km,
            "bestSide": self.best_side,
            "sunExposurePercentage": self.sun_exposure_percentage,
        }


_EMPTY_RESULT = SunAnalysisResult(
    total_distance_km=0.0,
    left_sun_distance_km=0.0,
    right_sun_distance_km=0.0,
    best_side="Any",
    sun_exposure_percentage=0,
)


def _sun_side(solar: SolarPosition, bearing: float) -> Side:
    # Positive relative angle → sun clockwise of travel → right.
    # Dead ahead / behind (<= 0) counts as left.
    relative_angle = normalize_signed_angle(solar.azimuth_deg - bearing)
    return "Right" if relative_angle > 0 else "Left"


def classify_segments(
    route: Sequence[Coordinate],
    instant: datetime,
    sun_position: Optional[SunPositionFn] = None,
) -> list[SegmentExposure]:
    """
    Evaluate every consecutive pair of route points.

    The sun is looked up once per segment at the segment's *start* point,
    always at the same ``instant``; travel time along the route is not
    modelled.
    """
    sun_position = sun_position or get_sun_position
    segments: list[SegmentExposure] = []

    for i in range(len(route) - 1):
        start, end = route[i], route[i + 1]
        distance = great_circle_distance_km(start, end)

        if distance == 0:
            segments.append(SegmentExposure(start, end, 0.0, None, None, None))
            continue

        bearing = initial_bearing_deg(start, end)
        solar = sun_position(instant, start.latitude, start.longitude)

        side: Optional[Side] = None
        if solar.altitude_deg >= 0:
            side = _sun_side(solar, bearing)

        segments.append(SegmentExposure(start, end, distance, bearing, solar, side))

    return segments


def _best_side(left: float, right: float) -> BestSide:
    # Sit opposite the sunnier side.
    if left > right:
        return "Right"
    if right > left:
        return "Left"
    return "Any"


def analyze_sun_exposure(
    route: Sequence[Coordinate],
    instant: Optional[datetime] = None,
    sun_position: Optional[SunPositionFn] = None,
) -> SunAnalysisResult:
    """
    Aggregate per-segment sun sides into a seating recommendation.

    Args:
        route:        Ordered coordinates; order defines direction of travel.
        instant:      Reference time for the whole route (naive → UTC).
                      Defaults to now.
        sun_position: Ephemeris callable ``(instant, lat, lng) -> SolarPosition``.
                      Defaults to the pvlib-backed get_sun_position.

    Returns:
        SunAnalysisResult. Routes with fewer than two points yield an
        all-zero result with ``best_side == "Any"``.
        ``best_side`` is decided on the unrounded sums, so it can favour one
        side even when the two rounded distances are equal.
    """
    if len(route) < 2:
        return _EMPTY_RESULT

    if instant is None:
        instant = datetime.now(timezone.utc)

    total = left = right = night = 0.0
    for seg in classify_segments(route, instant, sun_position):
        total += seg.distance_km
        if seg.sun_side == "Left":
            left += seg.distance_km
        elif seg.sun_side == "Right":
            right += seg.distance_km
        elif seg.solar is not None:
            night += seg.distance_km

    percentage = 0
    if total > 0:
        percentage = math.floor(100 * max(left, right) / total + 0.5)

    result = SunAnalysisResult(
        total_distance_km=round(total, 2),
        left_sun_distance_km=round(left, 2),
        right_sun_distance_km=round(right, 2),
        best_side=_best_side(left, right),
        sun_exposure_percentage=percentage,
        night_distance_km=round(night, 2),
    )
    _log.debug(
        "Analysed %d points: total=%.2f km left=%.2f km right=%.2f km night=%.2f km → %s",
        len(route), total, left, right, night, result.best_side,
    )
    return result
