"""Input models for route building requests."""

from pydantic import BaseModel, Field

from .geo import GeoPoint


class RideMetadata(BaseModel):
    """Ride details written into the exported GPX file."""

    ride_name: str
    bike_model: str
    emergency_contact: str = ""
    emergency_phone: str = ""


class RouteRequest(BaseModel):
    """Request model for building a touring loop."""

    bike: str = Field(..., description="Bike model key in the catalog")
    template: str = Field(default="Custom Route", description="Route template key in the catalog")
    ride_name: str = Field(default="My Motorcycle Route", min_length=1)
    duration_hours: float = Field(default=3.0, gt=0, description="Planned riding time in hours")
    start: GeoPoint
    avoid_tolls: bool = False
    avoid_highways: bool = False
    emergency_contact: str = ""
    emergency_phone: str = ""

    model_config = {
        "json_schema_extra": {
            "example": {
                "bike": "R 1250 RT",
                "template": "Mountain Twisties",
                "ride_name": "Sunday Loop",
                "duration_hours": 3,
                "start": {"latitude": 42.3889, "longitude": -71.1294},
                "avoid_tolls": True,
                "avoid_highways": False,
                "emergency_contact": "Alex Rider",
                "emergency_phone": "+1-555-0123",
            }
        }
    }

    def metadata(self) -> RideMetadata:
        return RideMetadata(
            ride_name=self.ride_name,
            bike_model=self.bike,
            emergency_contact=self.emergency_contact,
            emergency_phone=self.emergency_phone,
        )
