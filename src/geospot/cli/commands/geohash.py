"""
Geohash Commands

Commands for encoding coordinates, decoding cells and listing neighbor cells.
"""

import typer
from click import Context
from rich.table import Table
from typer.core import TyperGroup

from geospot.api.core.exceptions import GeospotError
from geospot.api.core.types import Coordinate
from geospot.api.location.distance import cell_size_km
from geospot.api.location.geohash_utils import decode_bbox, encode, neighbor_map, normalise_geohash
from geospot.api.location.proximity import (
    candidate_keys,
    covered_radius_km,
    prefix_bounds,
    search_keys,
)
from geospot.cli.utils.output import (
    console,
    format_distance,
    format_latitude,
    format_longitude,
    print_error,
    print_json,
)
from geospot.cli.utils.state import load_cli_settings


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


app = typer.Typer(help="Geohash commands", cls=SortedCommandsGroup)


@app.command("encode", rich_help_panel="Codec")
def encode_command(
    latitude: float = typer.Option(..., "--lat", help="Latitude in degrees (-90 to +90, North is positive)"),
    longitude: float = typer.Option(..., "--lon", help="Longitude in degrees (-180 to +180, East is positive)"),
    precision: int | None = typer.Option(None, "--precision", "-p", help="Geohash length (1-12)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Encode a coordinate as a geohash.

    Example:
        geospot geohash encode --lat 57.64911 --lon 10.40744 --precision 6
    """
    settings = load_cli_settings()
    if precision is None:
        precision = settings.storage_precision

    try:
        geohash = encode(latitude, longitude, precision)
    except GeospotError as e:
        print_error(f"Failed to encode: {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        print_json({"latitude": latitude, "longitude": longitude, "precision": precision, "geohash": geohash})
    else:
        console.print(
            f"{format_latitude(latitude)}, {format_longitude(longitude)} -> [bold cyan]{geohash}[/bold cyan]"
        )


@app.command("decode", rich_help_panel="Codec")
def decode_command(
    geohash: str = typer.Argument(..., help="Geohash to decode"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Decode a geohash into its center point and cell bounds.

    Example:
        geospot geohash decode u4pruy
    """
    try:
        cell = normalise_geohash(geohash)
        bbox = decode_bbox(cell)
    except GeospotError as e:
        print_error(f"Failed to decode: {e}")
        raise typer.Exit(code=1) from e

    center = bbox.center
    height_km, width_km = cell_size_km(len(cell), center.latitude) if cell else (0.0, 0.0)

    if json_output:
        print_json(
            {
                "geohash": cell,
                "latitude": center.latitude,
                "longitude": center.longitude,
                "lat_error": bbox.lat_err,
                "lon_error": bbox.lon_err,
                "bbox": {
                    "lat_min": bbox.lat_min,
                    "lat_max": bbox.lat_max,
                    "lon_min": bbox.lon_min,
                    "lon_max": bbox.lon_max,
                },
                "cell_km": {"height": height_km, "width": width_km},
            }
        )
        return

    table = Table(title=f"Geohash {cell}", show_header=True, header_style="bold magenta")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Center", f"{format_latitude(center.latitude)}, {format_longitude(center.longitude)}")
    table.add_row("Error", f"±{bbox.lat_err:.6f}° lat, ±{bbox.lon_err:.6f}° lon")
    table.add_row("Latitude", f"{bbox.lat_min:.6f}° to {bbox.lat_max:.6f}°")
    table.add_row("Longitude", f"{bbox.lon_min:.6f}° to {bbox.lon_max:.6f}°")
    if cell:
        table.add_row("Cell size", f"{format_distance(height_km)} x {format_distance(width_km)}")
    console.print(table)


@app.command("neighbors", rich_help_panel="Neighbors")
def neighbors_command(
    geohash: str = typer.Argument(..., help="Geohash whose neighbors to list"),
    with_self: bool = typer.Option(False, "--with-self", help="Include the cell itself"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    List the 8 compass neighbors of a geohash cell.

    Cells beyond a pole do not exist and are shown as empty.

    Example:
        geospot geohash neighbors u4pruy --with-self
    """
    try:
        cell = normalise_geohash(geohash)
        by_direction = neighbor_map(cell)
    except GeospotError as e:
        print_error(f"Failed to compute neighbors: {e}")
        raise typer.Exit(code=1) from e

    rows: list[tuple[str, str | None]] = [("self", cell)] if with_self else []
    rows.extend((direction.name.lower(), neighbor) for direction, neighbor in by_direction.items())

    if json_output:
        print_json({name: neighbor for name, neighbor in rows})
        return

    table = Table(title=f"Neighbors of {cell}", show_header=True, header_style="bold magenta")
    table.add_column("Direction", style="cyan")
    table.add_column("Geohash", style="green")
    for name, neighbor in rows:
        table.add_row(name, neighbor if neighbor is not None else "[dim]beyond pole[/dim]")
    console.print(table)


@app.command("cover", rich_help_panel="Neighbors")
def cover_command(
    latitude: float = typer.Option(..., "--lat", help="Latitude of the search center"),
    longitude: float = typer.Option(..., "--lon", help="Longitude of the search center"),
    precision: int | None = typer.Option(None, "--precision", "-p", help="Prefix length (1-12)"),
    radius: float | None = typer.Option(None, "--radius", "-r", help="Search radius in km"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the prefix range queries that cover a proximity search.

    The precision is derived from the radius unless given explicitly.

    Example:
        geospot geohash cover --lat 52.3676 --lon 4.9041 --radius 0.5
        geospot geohash cover --lat 52.3676 --lon 4.9041 --precision 7
    """
    if precision is not None and radius is not None:
        print_error("Use either --precision or --radius, not both")
        raise typer.Exit(code=1) from None

    settings = load_cli_settings()

    try:
        center = Coordinate(latitude, longitude)
        if precision is None:
            precision, keys = search_keys(center, radius if radius is not None else settings.default_radius_km)
        else:
            keys = candidate_keys(center, precision)
        covered = covered_radius_km(precision, center.latitude)
    except (GeospotError, ValueError) as e:
        print_error(f"Failed to plan search: {e}")
        raise typer.Exit(code=1) from e

    bounds = [prefix_bounds(key) for key in keys]

    if json_output:
        print_json(
            {
                "center": {"latitude": center.latitude, "longitude": center.longitude},
                "precision": precision,
                "covered_radius_km": covered,
                "keys": keys,
                "ranges": [{"start": start, "end": end} for start, end in bounds],
            }
        )
        return

    table = Table(title=f"Covering set for {center}", show_header=True, header_style="bold magenta")
    table.add_column("Prefix", style="cyan")
    table.add_column("Start at", style="green")
    table.add_column("End at", style="green")
    for key, (start, _) in zip(keys, bounds, strict=True):
        table.add_row(key, start, f"{key} + U+F8FF")
    console.print(table)
    console.print(f"\n[dim]Precision {precision}, covers {format_distance(covered)} around the center[/dim]")
