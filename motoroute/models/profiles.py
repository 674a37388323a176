"""Bike and route template profiles."""

from pydantic import BaseModel, ConfigDict, Field


class RouteTemplate(BaseModel):
    """A named preset shaping how adventurous a generated loop is."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "Mountain Twisties",
                "description": "Challenging mountain roads with tight curves",
                "terrain": "mountain",
                "difficulty": "advanced",
                "scenic_factor": 1.4,
                "waypoint_factor": 1.3,
            }
        },
    )

    name: str
    description: str = ""
    terrain: str = "mixed"
    difficulty: str = "intermediate"
    scenic_factor: float = Field(default=1.0, gt=0, description="Multiplier on loop radius")
    waypoint_factor: float = Field(default=1.0, gt=0, description="Multiplier on waypoint count")


class BikeProfile(BaseModel):
    """Fuel and comfort characteristics of a motorcycle model."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "R 1250 GS",
                "tank_capacity": 20,
                "fuel_consumption": 5.5,
                "comfort_stop_interval": 2.5,
                "type": "adventure",
            }
        },
    )

    name: str
    tank_capacity: float = Field(..., gt=0, description="Tank size in liters")
    fuel_consumption: float = Field(..., gt=0, description="Liters per 100 km")
    comfort_stop_interval: float = Field(..., gt=0, description="Hours between breaks")
    type: str = "touring"

    @property
    def range_km(self) -> float:
        """Distance covered on a full tank."""
        return self.tank_capacity / self.fuel_consumption * 100
