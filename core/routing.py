"""Routing: fetch a Google Maps route and convert it to a coordinate sequence."""
import os
from typing import Optional

import httpx
from dotenv import load_dotenv

from core.geo import Coordinate

load_dotenv()

_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"


def decode_polyline(encoded: str) -> list[tuple[float, float]]:
    """
    Decode a Google Maps encoded polyline string into (lat, lng) pairs.

    Uses the standard 5-bit chunk algorithm documented at
    https://developers.google.com/maps/documentation/utilities/polylinealgorithm
    """
    points: list[tuple[float, float]] = []
    index = 0
    lat = 0
    lng = 0
    n = len(encoded)

    while index < n:
        # Decode one coordinate (lat then lng)
        for is_lng in range(2):
            shift = 0
            result = 0
            while True:
                b = ord(encoded[index]) - 63
                index += 1
                result |= (b & 0x1F) << shift
                shift += 5
                if b < 0x20:        # highest bit clear → last chunk
                    break
            delta = ~(result >> 1) if (result & 1) else (result >> 1)
            if is_lng:
                lng += delta
            else:
                lat += delta

        points.append((lat / 1e5, lng / 1e5))

    return points


async def fetch_route(
    origin: str,
    destination: str,
    maps_api_key: Optional[str] = None,
) -> list[Coordinate]:
    """
    Fetch a driving route from Google Maps as an ordered list of coordinates.

    Step polylines are concatenated; a point repeated where one step ends
    and the next begins is kept only once.

    Args:
        origin:       Address or "lat,lng" string for the start point.
        destination:  Address or "lat,lng" string for the end point.
        maps_api_key: Google Maps API key. Falls back to the
                      GOOGLE_MAPS_API_KEY environment variable / .env file.

    Raises:
        ValueError: If no API key is available or the Directions API returns
                    an error status.
        httpx.HTTPStatusError: On HTTP-level errors.
    """
    api_key = maps_api_key or os.getenv("GOOGLE_MAPS_API_KEY")
    if not api_key:
        raise ValueError(
            "No Maps API key provided. "
            "Set GOOGLE_MAPS_API_KEY in .env or pass maps_api_key=."
        )

    params = {"origin": origin, "destination": destination, "key": api_key}

    async with httpx.AsyncClient(timeout=10) as client:
        response = await client.get(_DIRECTIONS_URL, params=params)
        response.raise_for_status()
        data = response.json()

    status = data.get("status")
    if status != "OK":
        raise ValueError(
            f"Directions API error: {status} — "
            f"{data.get('error_message', 'no details')}"
        )

    route: list[Coordinate] = []
    for leg in data["routes"][0]["legs"]:
        for step in leg["steps"]:
            points = decode_polyline(step["polyline"]["points"])
            if not points:
                points = [
                    (step["start_location"]["lat"], step["start_location"]["lng"]),
                    (step["end_location"]["lat"], step["end_location"]["lng"]),
                ]
            for lat, lng in points:
                point = Coordinate(latitude=lat, longitude=lng)
                if route and route[-1] == point:
                    continue
                route.append(point)

    return route
