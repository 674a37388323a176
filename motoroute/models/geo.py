"""Geographic value types."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeoPoint(BaseModel):
    """GPS coordinates."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def as_lonlat(self) -> list[float]:
        """Longitude-first pair, as routing APIs expect."""
        return [self.longitude, self.latitude]

    @classmethod
    def from_tuple(cls, coords: tuple[float, float]) -> "GeoPoint":
        return cls(latitude=coords[0], longitude=coords[1])


class CoordinateRing(BaseModel):
    """
    A closed loop of waypoints.

    The first point is repeated as the last point, the ring holds at least
    three points and never repeats a point back to back.
    """

    model_config = ConfigDict(frozen=True)

    points: list[GeoPoint]

    @model_validator(mode="after")
    def _check_closed(self) -> "CoordinateRing":
        if len(self.points) < 3:
            raise ValueError(f"a ring needs at least 3 points, got {len(self.points)}")
        if self.points[0] != self.points[-1]:
            raise ValueError("ring is not closed: first and last points differ")
        for prev, cur in zip(self.points, self.points[1:]):
            if prev == cur:
                raise ValueError(f"ring repeats point {cur.as_tuple()} consecutively")
        return self

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index: int) -> GeoPoint:
        return self.points[index]

    @property
    def first(self) -> GeoPoint:
        return self.points[0]

    @property
    def last(self) -> GeoPoint:
        return self.points[-1]

    def as_lonlat(self) -> list[list[float]]:
        """The ring as [longitude, latitude] pairs."""
        return [point.as_lonlat() for point in self.points]
