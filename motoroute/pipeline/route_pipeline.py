"""Route building pipeline.

Pipeline steps:
1. Resolve bike model and route template from the catalog
2. Generate the waypoint loop around the start point
3. Route the loop over real roads (or draft it offline)
4. Extract track points for display and distance
5. Inject ride metadata into the GPX
6. Plan fuel and comfort stops
7. Save the GPX file
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from motoroute.catalog import Catalog, default_catalog
from motoroute.config import Settings, settings as default_settings
from motoroute.errors import RouteBuilderError
from motoroute.models import CoordinateRing, GeoPoint, RidePlan, RouteRequest
from motoroute.tools.export import save_route_gpx
from motoroute.tools.routing import request_route_gpx
from motoroute.utils.geo import generate_route_ring, plan_ride, track_length_km
from motoroute.utils.gpx import extract_track_points, inject_metadata, ring_to_gpx


console = Console()


@dataclass
class RouteBuildResult:
    """Complete route building result."""
    success: bool
    error: Optional[str] = None

    ride_name: str = ""
    bike: str = ""
    template: str = ""
    duration_hours: float = 0
    draft: bool = False

    ring: Optional[CoordinateRing] = None
    track_points: list[GeoPoint] = field(default_factory=list)
    plan: Optional[RidePlan] = None
    gpx: str = ""
    filepath: Optional[Path] = None
    warnings: list[str] = field(default_factory=list)

    def format_summary(self) -> str:
        """Format a human-readable summary of the route."""
        if not self.success:
            return f"❌ Route building failed: {self.error}"

        lines = [
            f"## 🏍️ {self.ride_name}",
            "",
            f"**Bike:** {self.bike}",
            f"**Template:** {self.template}",
            f"**Planned riding time:** {self.duration_hours:g} h",
            f"**Waypoints:** {len(self.ring)} (loop back to start)",
            f"**Track points:** {len(self.track_points)}",
        ]

        if self.plan:
            lines += [
                "",
                "### Ride Plan",
                f"- Distance: ~{self.plan.distance_km:.0f} km",
                f"- Range on a full tank: ~{self.plan.fuel_range_km:.0f} km",
                f"- Fuel stops: {self.plan.fuel_stops}",
                f"- Comfort stops: {self.plan.comfort_stops}",
                f"- Expected fuel use: {self.plan.estimated_fuel_liters:.1f} l",
            ]

        if self.warnings:
            lines += ["", "### ⚠️ Warnings"]
            lines += [f"- {warning}" for warning in self.warnings]

        lines += ["", f"**GPX file:** `{self.filepath}`"]
        return "\n".join(lines)


class RouteBuildPipeline:
    """
    Builds a touring loop GPX from a route request.

    Every step either succeeds or stops the pipeline; the GPX file is only
    written once all earlier steps have succeeded.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        settings: Settings | None = None,
        show_progress: bool = True,
        client: httpx.AsyncClient | None = None,
    ):
        self.catalog = catalog or default_catalog()
        self.settings = settings or default_settings
        self.show_progress = show_progress
        self.client = client

    async def execute(self, request: RouteRequest, offline: bool = False) -> RouteBuildResult:
        """
        Execute the full route building pipeline.

        Args:
            request: Ride parameters collected from the user
            offline: Skip the directions service and save a draft loop

        Returns:
            RouteBuildResult; on failure success is False and error is set
        """
        result = RouteBuildResult(
            success=False,
            ride_name=request.ride_name,
            bike=request.bike,
            template=request.template,
            duration_hours=request.duration_hours,
        )

        try:
            if self.show_progress:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    await self._execute_steps(request, result, offline, progress)
            else:
                await self._execute_steps(request, result, offline, None)
        except RouteBuilderError as e:
            result.error = str(e)
            return result

        result.success = True
        return result

    async def _execute_steps(
        self,
        request: RouteRequest,
        result: RouteBuildResult,
        offline: bool,
        progress: Optional[Progress],
    ) -> None:
        # Step 1: Resolve catalog entries
        bike = self.catalog.get_bike(request.bike)
        template = self.catalog.get_template(request.template)

        # Step 2: Generate loop
        with _step(progress, f"🧭 Laying out {template.name} loop..."):
            ring = generate_route_ring(request.start, template, request.duration_hours)
        result.ring = ring

        # Step 3: Route over roads
        if offline or not self.settings.openrouteservice_api_key:
            if not offline:
                result.warnings.append(
                    "No OPENROUTESERVICE_API_KEY configured; saved a straight-line draft loop"
                )
            result.draft = True
            gpx_text = ring_to_gpx(ring, request.ride_name, template.description)
        else:
            with _step(progress, "🛣️ Routing loop over roads..."):
                gpx_text = await request_route_gpx(
                    ring,
                    api_key=self.settings.openrouteservice_api_key,
                    base_url=self.settings.ors_base_url,
                    profile=self.settings.ors_profile,
                    avoid_tolls=request.avoid_tolls,
                    avoid_highways=request.avoid_highways,
                    timeout=self.settings.ors_timeout,
                    client=self.client,
                )

        # Step 4-5: Post-process GPX
        with _step(progress, "📍 Reading track..."):
            track_points = extract_track_points(gpx_text)
            if not track_points:
                result.warnings.append("Directions service returned no track points")
            enhanced = inject_metadata(gpx_text, request.metadata())

        # Step 6: Ride plan, measured on the track when there is one
        distance_km = track_length_km(track_points or ring.points)
        plan = plan_ride(bike, distance_km, request.duration_hours)
        if plan.fuel_stops:
            result.warnings.append(
                f"Route is longer than the {bike.name}'s comfortable range; "
                f"plan {plan.fuel_stops} fuel stop(s)"
            )

        # Step 7: Save
        with _step(progress, "💾 Saving GPX..."):
            filepath = save_route_gpx(enhanced, request.ride_name, self.settings.output_dir)

        result.track_points = track_points
        result.plan = plan
        result.gpx = enhanced
        result.filepath = filepath


@contextmanager
def _step(progress: Optional[Progress], description: str):
    """Show a spinner line for the duration of a pipeline step."""
    if progress is None:
        yield
        return
    task = progress.add_task(description, total=None)
    try:
        yield
    finally:
        progress.remove_task(task)
