"""Data models for route building."""

from .geo import CoordinateRing, GeoPoint
from .profiles import BikeProfile, RouteTemplate
from .request import RideMetadata, RouteRequest
from .response import RidePlan

__all__ = [
    "GeoPoint",
    "CoordinateRing",
    "BikeProfile",
    "RouteTemplate",
    "RideMetadata",
    "RouteRequest",
    "RidePlan",
]
