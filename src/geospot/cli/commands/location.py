"""
Location Commands

Commands for geocoding place names and reverse geocoding coordinates.
"""

import typer
from click import Context
from rich.table import Table
from typer.core import TyperGroup

from geospot.api.core.exceptions import GeospotError
from geospot.api.location.geocoding import GeocodedPlace, geocode_address, reverse_geocode
from geospot.api.location.geohash_utils import encode
from geospot.cli.utils.output import console, format_latitude, format_longitude, print_error, print_json
from geospot.cli.utils.state import load_cli_settings, run_async


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


app = typer.Typer(help="Geocoding commands", cls=SortedCommandsGroup)


def _print_place(place: GeocodedPlace, title: str, json_output: bool, precision: int) -> None:
    geohash = encode(place.latitude, place.longitude, precision)

    if json_output:
        print_json({**place.model_dump(), "geohash": geohash})
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Name", place.display_name)
    table.add_row("Latitude", f"{format_latitude(place.latitude)} ({place.latitude:+.6f}°)")
    table.add_row("Longitude", f"{format_longitude(place.longitude)} ({place.longitude:+.6f}°)")
    table.add_row("City", place.city or "-")
    table.add_row("Country", place.country_code or "-")
    table.add_row("Geohash", geohash)
    console.print(table)


@app.command("geocode", rich_help_panel="Geocoding")
def geocode_command(
    query: str = typer.Argument(..., help="City name, address, or ZIP code"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Look up the coordinate of a place.

    Uses OpenStreetMap's Nominatim service.

    Example:
        geospot location geocode "Amsterdam"
        geospot location geocode "Dam Square, Amsterdam" --json
    """
    settings = load_cli_settings()

    try:
        place = run_async(geocode_address(query, settings))
    except (GeospotError, ValueError) as e:
        print_error(f"Failed to geocode location: {e}")
        raise typer.Exit(code=1) from e

    _print_place(place, "Geocoded Location", json_output, settings.storage_precision)


@app.command("reverse", rich_help_panel="Geocoding")
def reverse_command(
    latitude: float = typer.Option(..., "--lat", help="Latitude in degrees (-90 to +90, North is positive)"),
    longitude: float = typer.Option(..., "--lon", help="Longitude in degrees (-180 to +180, East is positive)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Look up the address, city and country of a coordinate.

    Example:
        geospot location reverse --lat 52.3731 --lon 4.8926
    """
    settings = load_cli_settings()

    try:
        place = run_async(reverse_geocode(latitude, longitude, settings))
    except GeospotError as e:
        print_error(f"Failed to reverse geocode: {e}")
        raise typer.Exit(code=1) from e

    _print_place(place, "Address", json_output, settings.storage_precision)
