"""API route definitions."""
import logging
from datetime import datetime, timezone
from typing import Literal, Optional

import httpx
from fastapi import APIRouter, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from core.exposure import analyze_sun_exposure
from core.geo import Coordinate
from core.routing import fetch_route
from core.solar import get_solar_position

router = APIRouter()

_log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class CoordinateIn(BaseModel):
    latitude: float
    longitude: float


class ExposureRequest(BaseModel):
    coordinates: list[CoordinateIn] = Field(
        ..., description="Ordered route points; order is the direction of travel"
    )
    instant: Optional[datetime] = Field(
        None, description="Reference time in ISO 8601; naive timestamps assumed UTC, defaults to now"
    )


class RouteExposureRequest(BaseModel):
    origin: str = Field(..., min_length=1, description="Origin address or 'lat,lng'")
    destination: str = Field(..., min_length=1, description="Destination address or 'lat,lng'")
    instant: Optional[datetime] = Field(
        None, description="Reference time in ISO 8601; naive timestamps assumed UTC, defaults to now"
    )


class ExposureResponse(BaseModel):
    totalDistance: float
    leftSunDistance: float
    rightSunDistance: float
    bestSide: Literal["Left", "Right", "Any"]
    sunExposurePercentage: int


class RouteExposureResponse(ExposureResponse):
    pointCount: int


def _to_route(points: list[CoordinateIn]) -> list[Coordinate]:
    return [Coordinate(latitude=p.latitude, longitude=p.longitude) for p in points]


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/sun-position")
def sun_position(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    dt: datetime = Query(default=None, description="ISO datetime (UTC); defaults to now"),
):
    if dt is None:
        dt = datetime.now(timezone.utc)
    return get_solar_position(lat, lon, dt)


@router.post("/sun-exposure", response_model=ExposureResponse)
def sun_exposure(body: ExposureRequest) -> ExposureResponse:
    """Analyse a caller-supplied route at a single reference instant."""
    result = analyze_sun_exposure(_to_route(body.coordinates), body.instant)
    return ExposureResponse(**result.to_dict())


# ---------------------------------------------------------------------------
# POST /sun-exposure/route
# ---------------------------------------------------------------------------

@router.post("/sun-exposure/route", response_model=RouteExposureResponse)
async def route_sun_exposure(body: RouteExposureRequest) -> RouteExposureResponse:
    """
    Fetch a driving route from Google Maps Directions, then analyse which
    side of the vehicle faces the sun along it.
    """
    try:
        route = await fetch_route(body.origin, body.destination)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except httpx.HTTPStatusError as exc:
        _log.warning(
            "Directions request failed for %r → %r with HTTP %d.",
            body.origin, body.destination, exc.response.status_code,
        )
        raise HTTPException(
            status_code=502,
            detail=f"Maps API returned an unexpected HTTP error: {exc.response.status_code}",
        )

    if len(route) < 2:
        raise HTTPException(
            status_code=422,
            detail="The route produced no drivable segments. Check origin and destination.",
        )

    # One pvlib lookup per segment; keep it off the event loop.
    result = await run_in_threadpool(analyze_sun_exposure, route, body.instant)
    return RouteExposureResponse(**result.to_dict(), pointCount=len(route))
