"""Bike and route template lookup tables."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import ValidationError

from motoroute.errors import InvalidConfiguration
from motoroute.models import BikeProfile, RouteTemplate

logger = logging.getLogger(__name__)


# Built-in bike database: tank (l), consumption (l/100 km), hours between breaks
DEFAULT_BIKES = {
    "R 1250 GS": {"tank_capacity": 20, "fuel_consumption": 5.5, "comfort_stop_interval": 2.5, "type": "adventure"},
    "R 1250 GS Adventure": {"tank_capacity": 30, "fuel_consumption": 6.0, "comfort_stop_interval": 3.0, "type": "adventure"},
    "R 1250 RT": {"tank_capacity": 25, "fuel_consumption": 5.8, "comfort_stop_interval": 3.5, "type": "touring"},
    "R 1250 RS": {"tank_capacity": 18, "fuel_consumption": 5.2, "comfort_stop_interval": 2.5, "type": "sport_touring"},
    "K 1600 GTL": {"tank_capacity": 26.5, "fuel_consumption": 6.5, "comfort_stop_interval": 3.5, "type": "touring"},
    "S 1000 XR": {"tank_capacity": 20, "fuel_consumption": 6.4, "comfort_stop_interval": 2.0, "type": "sport_touring"},
    "F 900 XR": {"tank_capacity": 15.5, "fuel_consumption": 4.6, "comfort_stop_interval": 2.0, "type": "sport_touring"},
    "F 850 GS": {"tank_capacity": 15, "fuel_consumption": 4.5, "comfort_stop_interval": 2.0, "type": "adventure"},
    "R nineT": {"tank_capacity": 17, "fuel_consumption": 5.3, "comfort_stop_interval": 1.5, "type": "heritage"},
}

DEFAULT_TEMPLATES = {
    "Mountain Twisties": {
        "description": "Challenging mountain roads with tight curves",
        "terrain": "mountain",
        "difficulty": "advanced",
        "scenic_factor": 1.4,
        "waypoint_factor": 1.3,
    },
    "Coastal Cruise": {
        "description": "Relaxed riding along the coastline with sea views",
        "terrain": "coastal",
        "difficulty": "beginner",
        "scenic_factor": 1.2,
        "waypoint_factor": 1.0,
    },
    "Countryside Backroads": {
        "description": "Quiet rural roads through farmland and small villages",
        "terrain": "rural",
        "difficulty": "intermediate",
        "scenic_factor": 1.0,
        "waypoint_factor": 1.2,
    },
    "Adventure Gravel": {
        "description": "Mixed surfaces and forest tracks for adventure bikes",
        "terrain": "off_road",
        "difficulty": "advanced",
        "scenic_factor": 0.8,
        "waypoint_factor": 1.5,
    },
    "Quick Spin": {
        "description": "Short after-work loop close to home",
        "terrain": "mixed",
        "difficulty": "beginner",
        "scenic_factor": 0.6,
        "waypoint_factor": 0.75,
    },
    "Custom Route": {
        "description": "Balanced loop with no particular character",
        "terrain": "mixed",
        "difficulty": "intermediate",
        "scenic_factor": 1.0,
        "waypoint_factor": 1.0,
    },
}


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup of bike profiles and route templates by name."""

    bikes: Mapping[str, BikeProfile]
    templates: Mapping[str, RouteTemplate]

    def __post_init__(self):
        object.__setattr__(self, "bikes", MappingProxyType(dict(self.bikes)))
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

    def get_bike(self, name: str) -> BikeProfile:
        try:
            return self.bikes[name]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown bike model: {name!r}. Known models: {', '.join(self.bikes)}"
            ) from None

    def get_template(self, name: str) -> RouteTemplate:
        try:
            return self.templates[name]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown route template: {name!r}. Known templates: {', '.join(self.templates)}"
            ) from None

    def bike_names(self) -> list[str]:
        return list(self.bikes)

    def template_names(self) -> list[str]:
        return list(self.templates)

    @classmethod
    def from_tables(cls, bikes: Mapping[str, dict], templates: Mapping[str, dict]) -> "Catalog":
        """Build a catalog from plain name -> attributes tables."""
        try:
            return cls(
                bikes={name: BikeProfile(name=name, **attrs) for name, attrs in bikes.items()},
                templates={name: RouteTemplate(name=name, **attrs) for name, attrs in templates.items()},
            )
        except (ValidationError, TypeError) as e:
            raise InvalidConfiguration(f"Invalid catalog entry: {e}") from e

    @classmethod
    def from_json(cls, path: str | Path) -> "Catalog":
        """
        Load a catalog from a JSON file.

        The file holds two objects, "bikes" and "templates", each mapping a
        name to its attributes (the same shape as DEFAULT_BIKES and
        DEFAULT_TEMPLATES).
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise InvalidConfiguration(f"Cannot read catalog {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(f"Catalog {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("bikes"), dict) \
                or not isinstance(data.get("templates"), dict):
            raise InvalidConfiguration(
                f"Catalog {path} must contain 'bikes' and 'templates' objects"
            )

        catalog = cls.from_tables(data["bikes"], data["templates"])
        logger.info(
            "Loaded catalog from %s: %d bikes, %d templates",
            path, len(catalog.bikes), len(catalog.templates),
        )
        return catalog


def default_catalog() -> Catalog:
    """The built-in bike database and route templates."""
    return Catalog.from_tables(DEFAULT_BIKES, DEFAULT_TEMPLATES)
