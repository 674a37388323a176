"""Utility functions for route building."""

from .gpx import extract_track_points, inject_metadata, ring_to_gpx, save_gpx_file
from .geo import calculate_bearing, generate_route_ring, haversine_distance, plan_ride, track_length_km

__all__ = [
    "extract_track_points",
    "inject_metadata",
    "ring_to_gpx",
    "save_gpx_file",
    "calculate_bearing",
    "generate_route_ring",
    "haversine_distance",
    "plan_ride",
    "track_length_km",
]
