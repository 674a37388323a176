"""Geospatial utility functions."""

import logging
from math import atan2, ceil, cos, degrees, floor, isfinite, pi, radians, sin, sqrt
from typing import Iterable

from pydantic import ValidationError

from motoroute.errors import InvalidConfiguration
from motoroute.models import BikeProfile, CoordinateRing, GeoPoint, RidePlan, RouteTemplate

logger = logging.getLogger(__name__)

# Average riding distance covered per hour, used to size the loop
KM_PER_HOUR = 25
# Base waypoint count before the template multiplier
BASE_WAYPOINTS = 8
# Kilometers per degree of latitude (equirectangular approximation)
KM_PER_DEGREE = 111
# Refuel when this share of the tank range has been used
REFUEL_AT_RANGE_FRACTION = 0.8


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float,
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in kilometers
    """
    R = 6371  # Earth's radius in kilometers

    lat1_rad, lon1_rad = radians(lat1), radians(lon1)
    lat2_rad, lon2_rad = radians(lat2), radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = sin(dlat/2)**2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1-a))

    return R * c


def calculate_bearing(
    lat1: float, lon1: float,
    lat2: float, lon2: float,
) -> float:
    """
    Calculate the initial bearing from point 1 to point 2.

    Args:
        lat1, lon1: Starting point coordinates in degrees
        lat2, lon2: End point coordinates in degrees

    Returns:
        Bearing in degrees (0-360)
    """
    lat1_rad, lat2_rad = radians(lat1), radians(lat2)
    dlon = radians(lon2 - lon1)

    x = sin(dlon) * cos(lat2_rad)
    y = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlon)

    # Normalize to 0-360
    return (degrees(atan2(x, y)) + 360) % 360


def track_length_km(points: Iterable[GeoPoint]) -> float:
    """Sum of great-circle distances between consecutive points."""
    total = 0.0
    prev = None
    for point in points:
        if prev is not None:
            total += haversine_distance(
                prev.latitude, prev.longitude, point.latitude, point.longitude
            )
        prev = point
    return total


def generate_route_ring(
    start: GeoPoint,
    template: RouteTemplate,
    duration_hours: float,
) -> CoordinateRing:
    """
    Synthesize a closed touring loop around a start point.

    The loop radius grows with ride duration and the template's scenic
    factor; the number of perimeter waypoints comes from the template's
    waypoint factor. The radius is modulated with sin(2 * angle) so the
    loop is not a perfect circle.

    Planar kilometer offsets are turned into degrees with the
    equirectangular approximation, which breaks down close to the poles.
    A waypoint that lands outside valid coordinates fails the whole call.

    Args:
        start: Start and finish of the loop
        template: Route template supplying scenic and waypoint factors
        duration_hours: Planned riding time, must be positive

    Returns:
        Ring of num_points + 2 points, starting and ending at `start`

    Raises:
        InvalidConfiguration: on a non-positive duration, fewer than three
            perimeter waypoints, or waypoints outside valid coordinates
    """
    if not isfinite(duration_hours) or duration_hours <= 0:
        raise InvalidConfiguration(
            f"Ride duration must be a positive number of hours, got {duration_hours}"
        )

    radius_km = duration_hours * KM_PER_HOUR * template.scenic_factor
    num_points = floor(BASE_WAYPOINTS * template.waypoint_factor)
    if num_points < 3:
        raise InvalidConfiguration(
            f"Template {template.name!r} yields {num_points} waypoints; a loop needs at least 3"
        )

    lon_scale = KM_PER_DEGREE * cos(start.latitude * pi / 180)

    points = [start]
    try:
        for i in range(num_points):
            angle = 2 * pi * i / num_points
            radius_variation = radius_km * (0.7 + 0.6 * sin(2 * angle))

            dx = radius_variation * cos(angle)
            dy = radius_variation * sin(angle)

            points.append(GeoPoint(
                latitude=start.latitude + dy / KM_PER_DEGREE,
                longitude=start.longitude + dx / lon_scale,
            ))
        points.append(start)
        ring = CoordinateRing(points=points)
    except ValidationError as e:
        raise InvalidConfiguration(
            f"Cannot build a {radius_km:.0f} km loop around {start.as_tuple()}: {e}"
        ) from e

    logger.debug(
        "Generated %d-point ring, radius %.1f km, template %s",
        len(ring), radius_km, template.name,
    )
    return ring


def plan_ride(
    bike: BikeProfile,
    distance_km: float,
    duration_hours: float,
) -> RidePlan:
    """
    Estimate fuel and comfort stops for a ride.

    Args:
        bike: Bike profile with tank, consumption and break interval
        distance_km: Route distance in kilometers
        duration_hours: Planned riding time in hours

    Returns:
        RidePlan with stop counts and expected fuel use
    """
    usable_range = bike.range_km * REFUEL_AT_RANGE_FRACTION
    fuel_stops = max(0, ceil(distance_km / usable_range) - 1)
    comfort_stops = max(0, ceil(duration_hours / bike.comfort_stop_interval) - 1)

    return RidePlan(
        distance_km=round(distance_km, 2),
        fuel_range_km=round(bike.range_km, 1),
        fuel_stops=fuel_stops,
        comfort_stops=comfort_stops,
        estimated_fuel_liters=round(distance_km * bike.fuel_consumption / 100, 2),
    )
