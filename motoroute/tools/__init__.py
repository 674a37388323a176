"""Collaborators outside the core: directions service and file export."""

from .routing import build_directions_body, request_route_gpx
from .export import save_route_gpx

__all__ = [
    "build_directions_body",
    "request_route_gpx",
    "save_route_gpx",
]
