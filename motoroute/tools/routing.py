"""Directions lookups using OpenRouteService."""

import logging

import httpx

from motoroute.errors import DirectionsServiceError
from motoroute.models import CoordinateRing

logger = logging.getLogger(__name__)

ORS_BASE_URL = "https://api.openrouteservice.org"

# ORS avoid_features values for the route options
AVOID_TOLLS = "tollways"
AVOID_HIGHWAYS = "highways"


def build_directions_body(
    ring: CoordinateRing,
    avoid_tolls: bool = False,
    avoid_highways: bool = False,
) -> dict:
    """Build the JSON body of an ORS directions request for a ring."""
    body = {
        "coordinates": ring.as_lonlat(),
        "instructions": True,
        "elevation": True,
    }

    avoid = []
    if avoid_tolls:
        avoid.append(AVOID_TOLLS)
    if avoid_highways:
        avoid.append(AVOID_HIGHWAYS)
    if avoid:
        body["options"] = {"avoid_features": avoid}

    return body


async def request_route_gpx(
    ring: CoordinateRing,
    *,
    api_key: str | None,
    base_url: str = ORS_BASE_URL,
    profile: str = "driving-car",
    avoid_tolls: bool = False,
    avoid_highways: bool = False,
    timeout: float = 60.0,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Route a waypoint ring over real roads and return the track as GPX.

    Args:
        ring: Loop to route through, in order
        api_key: OpenRouteService API key
        base_url: ORS server
        profile: ORS routing profile
        avoid_tolls: Ask ORS to avoid toll roads
        avoid_highways: Ask ORS to avoid highways
        timeout: Request timeout in seconds
        client: Optional client to reuse (a new one is created otherwise)

    Returns:
        GPX text as returned by the service

    Raises:
        DirectionsServiceError: missing key, network failure or error response
    """
    if not api_key:
        raise DirectionsServiceError(
            "No OpenRouteService API key configured (set OPENROUTESERVICE_API_KEY)"
        )

    url = f"{base_url.rstrip('/')}/v2/directions/{profile}/gpx"
    body = build_directions_body(ring, avoid_tolls, avoid_highways)
    headers = {
        "Authorization": api_key,
        "Content-Type": "application/json",
        "Accept": "application/gpx+xml",
    }

    logger.info("Requesting %s route through %d waypoints", profile, len(ring))

    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.post(url, headers=headers, json=body, timeout=timeout)
        else:
            response = await client.post(url, headers=headers, json=body, timeout=timeout)
    except httpx.TimeoutException as e:
        raise DirectionsServiceError(f"Directions request timed out after {timeout}s") from e
    except httpx.HTTPError as e:
        raise DirectionsServiceError(f"Cannot reach directions service: {e}") from e

    if response.status_code != 200:
        raise DirectionsServiceError(
            f"ORS error: {response.status_code}: {response.text[:500]}"
        )

    logger.info("Received %d bytes of GPX", len(response.text))
    return response.text
