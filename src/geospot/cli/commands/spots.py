"""
Spot Commands

Commands for searching a spot catalog by distance and maintaining its
geohash index.
"""

from pathlib import Path

import typer
from click import Context
from rich.table import Table
from typer.core import TyperGroup

from geospot.api.core.exceptions import GeospotError
from geospot.api.core.types import Coordinate
from geospot.api.location.geocoding import geocode_address
from geospot.api.location.proximity import search_nearby
from geospot.api.spots.catalog import SpotCatalog
from geospot.api.spots.indexing import backfill_missing_geohashes
from geospot.api.spots.models import Spot
from geospot.cli.utils.output import (
    console,
    format_distance,
    print_error,
    print_info,
    print_json,
    print_success,
    print_warning,
)
from geospot.cli.utils.state import load_cli_settings, run_async


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


app = typer.Typer(help="Spot commands", cls=SortedCommandsGroup)


def _load_catalog(path: Path) -> SpotCatalog:
    try:
        return SpotCatalog.load(path)
    except GeospotError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command("nearby", rich_help_panel="Search")
def nearby_command(
    catalog_path: Path = typer.Argument(..., help="Spot catalog JSON file"),
    latitude: float | None = typer.Option(None, "--lat", help="Latitude of the search center"),
    longitude: float | None = typer.Option(None, "--lon", help="Longitude of the search center"),
    place: str | None = typer.Option(None, "--place", help="Place name to search around (geocoded)"),
    radius: float | None = typer.Option(None, "--radius", "-r", help="Search radius in km"),
    precision: int | None = typer.Option(None, "--precision", "-p", help="Prefix length (default: from radius)"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Show at most this many spots"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Find spots within a radius of a coordinate or place.

    Example:
        geospot spots nearby spots.json --lat 52.3676 --lon 4.9041 --radius 1
        geospot spots nearby spots.json --place "Vondelpark, Amsterdam" --radius 0.5
    """
    has_coordinate = latitude is not None and longitude is not None
    if has_coordinate == (place is not None) or (latitude is None) != (longitude is None):
        print_error("Give either --lat and --lon, or --place")
        raise typer.Exit(code=1) from None

    settings = load_cli_settings()
    catalog = _load_catalog(catalog_path)
    radius_km = radius if radius is not None else settings.default_radius_km

    try:
        if place is not None:
            found = run_async(geocode_address(place, settings))
            center = found.coordinate
            if not json_output:
                print_info(f"Searching around {found.display_name}")
        else:
            center = Coordinate(latitude, longitude)  # type: ignore[arg-type]

        matches = run_async(search_nearby(center, radius_km, catalog.range_query, precision=precision))
    except (GeospotError, ValueError) as e:
        print_error(f"Search failed: {e}")
        raise typer.Exit(code=1) from e

    if limit is not None:
        matches = matches[:limit]

    if json_output:
        print_json(
            {
                "center": {"latitude": center.latitude, "longitude": center.longitude},
                "radius_km": radius_km,
                "spots": [{"id": m.record.id, **m.record.to_document(), "distance_km": m.distance_km} for m in matches],
            }
        )
        return

    if not matches:
        print_warning(f"No spots within {format_distance(radius_km)} of {center}")
        return

    table = Table(title=f"Spots within {format_distance(radius_km)}", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Distance", style="green", justify="right")
    table.add_column("City")
    table.add_column("Geohash", style="dim")
    for match in matches:
        spot: Spot = match.record
        table.add_row(spot.name, format_distance(match.distance_km), spot.city or "-", spot.geohash or "-")
    console.print(table)


@app.command("backfill", rich_help_panel="Maintenance")
def backfill_command(
    catalog_path: Path = typer.Argument(..., help="Spot catalog JSON file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of in place"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Compute the geohash of every spot stored without one.

    Spots with a missing or invalid coordinate are skipped.

    Example:
        geospot spots backfill spots.json --dry-run
        geospot spots backfill spots.json --output spots-indexed.json
    """
    settings = load_cli_settings()
    catalog = _load_catalog(catalog_path)

    report = backfill_missing_geohashes(catalog, settings.storage_precision)

    if not dry_run and report.updated:
        for spot in report.spots:
            catalog.add(spot)
        catalog.save(output or catalog_path)

    if json_output:
        print_json({**report.to_dict(), "dryRun": dry_run})
        return

    if report.missing_geohash == 0:
        print_success(f"All {report.total_spots} spots already have a geohash")
        return

    if report.skipped_invalid:
        print_warning(f"{report.skipped_invalid} spots skipped: missing or invalid coordinates")

    if dry_run:
        print_info(f"Dry run: {report.updated} of {report.missing_geohash} spots would be updated")
    else:
        print_success(f"{report.message}, saved to {output or catalog_path}")
