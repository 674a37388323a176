"""Main entry point for the motorcycle touring route builder.

Usage:
    python main.py                                   # Interactive mode
    python main.py --bike "R 1250 RT" --hours 4      # Single build
    python main.py --list                            # Show bikes and templates
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, Prompt
from rich.table import Table

from motoroute.catalog import Catalog, default_catalog
from motoroute.config import settings
from motoroute.errors import InvalidConfiguration
from motoroute.models import GeoPoint, RouteRequest
from motoroute.pipeline import RouteBuildPipeline


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a motorcycle touring loop and export it as GPX.",
    )
    parser.add_argument("--bike", help="Bike model (see --list)")
    parser.add_argument("--template", help="Route template (see --list)")
    parser.add_argument("--name", dest="ride_name", help="Ride name, also used as file name")
    parser.add_argument("--hours", type=float, help="Planned riding time in hours")
    parser.add_argument("--lat", type=float, help="Start latitude")
    parser.add_argument("--lon", type=float, help="Start longitude")
    parser.add_argument("--avoid-tolls", action="store_true", help="Avoid toll roads")
    parser.add_argument("--avoid-highways", action="store_true", help="Avoid highways")
    parser.add_argument("--contact", default="", help="Emergency contact name")
    parser.add_argument("--phone", default="", help="Emergency phone number")
    parser.add_argument("--offline", action="store_true", help="Skip the directions service, save a draft loop")
    parser.add_argument("--catalog", help="JSON file with custom bikes and templates")
    parser.add_argument("--list", action="store_true", help="List bikes and templates and exit")
    return parser


def load_catalog(path: str | None) -> Catalog:
    path = path or settings.catalog_path
    if path:
        return Catalog.from_json(path)
    return default_catalog()


def print_catalog(catalog: Catalog) -> None:
    """Show the available bikes and templates."""
    bikes = Table(title="🏍️ Bikes")
    bikes.add_column("Model", style="bold")
    bikes.add_column("Type")
    bikes.add_column("Tank (l)", justify="right")
    bikes.add_column("l/100 km", justify="right")
    bikes.add_column("Range (km)", justify="right")
    bikes.add_column("Break every (h)", justify="right")
    for bike in catalog.bikes.values():
        bikes.add_row(
            bike.name, bike.type, f"{bike.tank_capacity:g}", f"{bike.fuel_consumption:g}",
            f"{bike.range_km:.0f}", f"{bike.comfort_stop_interval:g}",
        )

    templates = Table(title="🗺️ Route Templates")
    templates.add_column("Template", style="bold")
    templates.add_column("Description")
    templates.add_column("Difficulty")
    templates.add_column("Scenic", justify="right")
    templates.add_column("Waypoints", justify="right")
    for template in catalog.templates.values():
        templates.add_row(
            template.name, template.description, template.difficulty,
            f"{template.scenic_factor:g}", f"{template.waypoint_factor:g}",
        )

    console.print(bikes)
    console.print(templates)


def request_from_args(args: argparse.Namespace) -> RouteRequest:
    lat, lon = settings.default_start
    return RouteRequest(
        bike=args.bike or settings.default_bike,
        template=args.template or settings.default_template,
        ride_name=args.ride_name or "My Motorcycle Route",
        duration_hours=args.hours if args.hours is not None else settings.default_duration_hours,
        start=GeoPoint(
            latitude=args.lat if args.lat is not None else lat,
            longitude=args.lon if args.lon is not None else lon,
        ),
        avoid_tolls=args.avoid_tolls,
        avoid_highways=args.avoid_highways,
        emergency_contact=args.contact,
        emergency_phone=args.phone,
    )


def request_from_prompts(catalog: Catalog) -> RouteRequest:
    """Ask the rider for each route setting."""
    lat, lon = settings.default_start
    bike = Prompt.ask(
        "[bold]Your bike[/bold]", choices=catalog.bike_names(), default=settings.default_bike
    )
    template = Prompt.ask(
        "[bold]Route template[/bold]", choices=catalog.template_names(), default=settings.default_template
    )
    return RouteRequest(
        bike=bike,
        template=template,
        ride_name=Prompt.ask("[bold]Route name[/bold]", default="My Motorcycle Route"),
        duration_hours=FloatPrompt.ask("[bold]Duration (hours)[/bold]", default=settings.default_duration_hours),
        start=GeoPoint(
            latitude=FloatPrompt.ask("[bold]Start latitude[/bold]", default=lat),
            longitude=FloatPrompt.ask("[bold]Start longitude[/bold]", default=lon),
        ),
        avoid_tolls=Confirm.ask("Avoid toll roads?", default=False),
        avoid_highways=Confirm.ask("Avoid highways?", default=False),
        emergency_contact=Prompt.ask("Emergency contact name", default=""),
        emergency_phone=Prompt.ask("Emergency phone (+1-555-0123)", default=""),
    )


async def build_route(request: RouteRequest, catalog: Catalog, offline: bool) -> bool:
    """Run the pipeline and print the outcome."""
    pipeline = RouteBuildPipeline(catalog=catalog, settings=settings, show_progress=True)
    result = await pipeline.execute(request, offline=offline)

    if not result.success:
        console.print(Panel(
            f"[red]{result.error}[/red]",
            title="Route Error",
            border_style="red",
        ))
        return False

    console.print()
    console.print(Markdown(result.format_summary()))
    return True


def main():
    """Main entry point."""
    load_dotenv()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    args = build_parser().parse_args()

    try:
        catalog = load_catalog(args.catalog)
    except InvalidConfiguration as e:
        console.print(Panel(f"[red]{e}[/red]", title="Catalog Error", border_style="red"))
        sys.exit(1)

    if args.list:
        print_catalog(catalog)
        return

    interactive = len(sys.argv) == 1
    if interactive:
        console.print("\n[bold blue]🏍️ Motorcycle Route Builder[/bold blue]\n")

    missing = settings.validate_required()
    if missing and not args.offline:
        console.print(
            "[dim]Not configured: " + ", ".join(missing) +
            ". Routes will be saved as straight-line drafts.[/dim]"
        )

    try:
        request = request_from_prompts(catalog) if interactive else request_from_args(args)
    except ValidationError as e:
        console.print(Panel(f"[red]{e}[/red]", title="Invalid Input", border_style="red"))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n\n[dim]Cancelled.[/dim]\n")
        sys.exit(1)

    if not asyncio.run(build_route(request, catalog, args.offline)):
        sys.exit(1)


if __name__ == "__main__":
    main()
