"""Output models for route building results."""

from pydantic import BaseModel, Field


class RidePlan(BaseModel):
    """Fuel and break planning for a built route."""

    distance_km: float = Field(..., ge=0)
    fuel_range_km: float = Field(..., gt=0)
    fuel_stops: int = Field(default=0, ge=0)
    comfort_stops: int = Field(default=0, ge=0)
    estimated_fuel_liters: float = Field(default=0, ge=0)

    model_config = {
        "json_schema_extra": {
            "example": {
                "distance_km": 412.5,
                "fuel_range_km": 363.6,
                "fuel_stops": 1,
                "comfort_stops": 2,
                "estimated_fuel_liters": 22.7,
            }
        }
    }
