"""Tests for the catalog, ride planning and the route building pipeline."""

import json

import httpx
import pytest
from pydantic import ValidationError

from motoroute.catalog import Catalog, default_catalog
from motoroute.config import Settings
from motoroute.errors import InvalidConfiguration
from motoroute.models import GeoPoint, RouteRequest
from motoroute.pipeline import RouteBuildPipeline
from motoroute.utils.geo import plan_ride


ORS_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="openrouteservice">
  <metadata>
    <name>openrouteservice directions</name>
  </metadata>
  <trk>
    <trkseg>
      <trkpt lat="42.3889" lon="-71.1294"><ele>12.0</ele></trkpt>
      <trkpt lat="42.8619" lon="-71.1294"><ele>40.0</ele></trkpt>
      <trkpt lat="42.3889" lon="-71.1294"><ele>12.0</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


def make_request(**overrides) -> RouteRequest:
    fields = {
        "bike": "R 1250 GS",
        "template": "Custom Route",
        "ride_name": "Loop1",
        "duration_hours": 3,
        "start": GeoPoint(latitude=42.3889, longitude=-71.1294),
        "emergency_contact": "Sam Doe",
        "emergency_phone": "+1-555-0123",
    }
    fields.update(overrides)
    return RouteRequest(**fields)


class TestCatalog:
    """Test bike and template lookups."""

    def test_default_entries(self):
        catalog = default_catalog()

        assert "R 1250 GS" in catalog.bike_names()
        assert "Mountain Twisties" in catalog.template_names()
        assert catalog.get_template("Mountain Twisties").scenic_factor == 1.4
        assert catalog.get_template("Custom Route").waypoint_factor == 1.0

    def test_unknown_bike(self):
        with pytest.raises(InvalidConfiguration, match="Unknown bike"):
            default_catalog().get_bike("Vespa")

    def test_unknown_template(self):
        with pytest.raises(InvalidConfiguration, match="Unknown route template"):
            default_catalog().get_template("Moon Loop")

    def test_tables_are_read_only(self):
        catalog = default_catalog()
        with pytest.raises(TypeError):
            catalog.bikes["New Bike"] = catalog.get_bike("R 1250 GS")

    def test_from_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "bikes": {"Test Bike": {"tank_capacity": 10, "fuel_consumption": 5, "comfort_stop_interval": 1}},
            "templates": {"Tiny": {"scenic_factor": 0.5, "waypoint_factor": 0.5}},
        }))
        catalog = Catalog.from_json(path)

        assert catalog.get_bike("Test Bike").range_km == 200
        assert catalog.get_template("Tiny").name == "Tiny"

    def test_from_json_invalid_entry(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "bikes": {"Broken": {"tank_capacity": -1, "fuel_consumption": 5, "comfort_stop_interval": 1}},
            "templates": {},
        }))
        with pytest.raises(InvalidConfiguration):
            Catalog.from_json(path)

    def test_from_json_not_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("bikes: []")
        with pytest.raises(InvalidConfiguration):
            Catalog.from_json(path)

    def test_from_json_missing_file(self, tmp_path):
        with pytest.raises(InvalidConfiguration):
            Catalog.from_json(tmp_path / "nope.json")


class TestRidePlan:
    """Test fuel and comfort stop planning."""

    def test_short_ride_needs_no_stops(self):
        bike = default_catalog().get_bike("R 1250 GS")
        plan = plan_ride(bike, distance_km=100, duration_hours=2)

        assert plan.fuel_stops == 0
        assert plan.comfort_stops == 0
        assert plan.fuel_range_km == pytest.approx(363.6)
        assert plan.estimated_fuel_liters == pytest.approx(5.5)

    def test_long_ride(self):
        bike = default_catalog().get_bike("R 1250 GS")
        plan = plan_ride(bike, distance_km=600, duration_hours=3)

        assert plan.fuel_stops == 2
        assert plan.comfort_stops == 1
        assert plan.estimated_fuel_liters == pytest.approx(33.0)


@pytest.mark.asyncio
class TestRouteBuildPipeline:
    """Test the full pipeline with a fake directions service."""

    async def test_offline_draft(self, tmp_path):
        settings = Settings(openrouteservice_api_key=None, output_dir=tmp_path)
        pipeline = RouteBuildPipeline(settings=settings, show_progress=False)

        result = await pipeline.execute(make_request(), offline=True)

        assert result.success, result.error
        assert result.draft
        assert len(result.ring) == 10
        assert len(result.track_points) == 10
        assert result.filepath == tmp_path / "Loop1.gpx"
        saved = result.filepath.read_text(encoding="utf-8")
        assert "<name>Loop1</name>" in saved
        assert "<emergency_phone>+1-555-0123</emergency_phone>" in saved

    async def test_missing_key_falls_back_to_draft(self, tmp_path):
        settings = Settings(openrouteservice_api_key=None, output_dir=tmp_path)
        pipeline = RouteBuildPipeline(settings=settings, show_progress=False)

        result = await pipeline.execute(make_request())

        assert result.success
        assert result.draft
        assert any("OPENROUTESERVICE_API_KEY" in w for w in result.warnings)

    async def test_routed_via_directions_service(self, tmp_path):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, text=ORS_GPX)

        settings = Settings(openrouteservice_api_key="secret", output_dir=tmp_path)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            pipeline = RouteBuildPipeline(settings=settings, show_progress=False, client=client)
            result = await pipeline.execute(make_request(avoid_tolls=True))

        assert result.success, result.error
        assert not result.draft
        assert len(seen["body"]["coordinates"]) == 10
        assert seen["body"]["options"] == {"avoid_features": ["tollways"]}
        assert [p.as_tuple() for p in result.track_points][1] == (42.8619, -71.1294)
        assert result.plan.distance_km == pytest.approx(105.2, abs=0.5)
        assert result.gpx.index("<name>Loop1</name>") < result.gpx.index("openrouteservice directions")
        assert "R 1250 GS" in result.format_summary()

    async def test_unknown_bike_writes_nothing(self, tmp_path):
        settings = Settings(openrouteservice_api_key=None, output_dir=tmp_path)
        pipeline = RouteBuildPipeline(settings=settings, show_progress=False)

        result = await pipeline.execute(make_request(bike="Vespa"), offline=True)

        assert not result.success
        assert "Unknown bike" in result.error
        assert list(tmp_path.iterdir()) == []
        assert "failed" in result.format_summary()

    async def test_gpx_without_metadata_fails(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text='<gpx><trk><trkseg><trkpt lat="1" lon="2"></trkpt></trkseg></trk></gpx>')

        settings = Settings(openrouteservice_api_key="secret", output_dir=tmp_path)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            pipeline = RouteBuildPipeline(settings=settings, show_progress=False, client=client)
            result = await pipeline.execute(make_request())

        assert not result.success
        assert "metadata" in result.error
        assert list(tmp_path.iterdir()) == []

    async def test_service_error_reported(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="internal error")

        settings = Settings(openrouteservice_api_key="secret", output_dir=tmp_path)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            pipeline = RouteBuildPipeline(settings=settings, show_progress=False, client=client)
            result = await pipeline.execute(make_request())

        assert not result.success
        assert "500" in result.error

    async def test_unwritable_output_reported(self, tmp_path):
        """A failed save ends in a failed result instead of an exception."""
        blocker = tmp_path / "out"
        blocker.write_text("not a directory")
        settings = Settings(openrouteservice_api_key=None, output_dir=blocker)
        pipeline = RouteBuildPipeline(settings=settings, show_progress=False)

        result = await pipeline.execute(make_request(), offline=True)

        assert not result.success
        assert "Cannot save GPX" in result.error
        assert result.filepath is None


class TestSettings:
    """Test configuration validation."""

    def test_log_level_is_normalized(self):
        assert Settings(log_level="info").log_level == "INFO"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_invalid_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            Settings()
