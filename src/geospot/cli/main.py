"""
geospot CLI - Main Application

This is the main entry point for the geospot command-line interface.
"""

import typer
from click import Context
from dotenv import load_dotenv
from rich.console import Console
from typer.core import TyperGroup

from geospot.cli.commands import geohash, location, spots
from geospot.cli.utils.state import configure_logging, state


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


# Create main app
app = typer.Typer(
    name="geospot",
    help="Geohash indexing and proximity search CLI",
    add_completion=True,
    rich_markup_mode="rich",
    cls=SortedCommandsGroup,
)

# Console for rich output
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (debug logging)",
    ),
) -> None:
    """
    geospot - Geohash Indexing and Proximity Search

    Encode coordinates, expand neighbor cells and find spots near a place.

    [bold green]Examples:[/bold green]

        geospot geohash encode --lat 57.64911 --lon 10.40744 --precision 6
        geospot geohash neighbors u4pruy
        geospot spots nearby spots.json --place Amsterdam --radius 2

    [bold blue]Environment Variables:[/bold blue]

        GEOSPOT_CONFIG            - Config file path
        GEOSPOT_STORAGE_PRECISION - Geohash precision stored on spots
        GEOSPOT_DEFAULT_RADIUS_KM - Default search radius
        GEOSPOT_NOMINATIM_URL     - Geocoding service URL
        GEOSPOT_LOG_LEVEL         - Log level
    """
    state["verbose"] = verbose

    load_dotenv()

    if verbose:
        configure_logging("DEBUG")
        console.print("[dim]Verbose mode enabled[/dim]")


@app.command(rich_help_panel="Utilities")
def version() -> None:
    """Show the CLI version."""
    from geospot.cli import __version__

    console.print(f"[bold]geospot[/bold] version [cyan]{__version__}[/cyan]")


@app.command("config", rich_help_panel="Configuration")
def show_all_config(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show all current configuration values.

    Values come from defaults, the config file and GEOSPOT_* environment
    variables, later sources winning.

    Example:
        geospot config
        geospot config --json
    """
    from rich.table import Table

    from geospot.api.core.settings import get_config_path
    from geospot.cli.utils.output import print_json
    from geospot.cli.utils.state import load_cli_settings

    settings = load_cli_settings()
    config_path = get_config_path()

    if json_output:
        print_json(
            {
                "settings": settings.model_dump(),
                "config_file": {
                    "path": str(config_path),
                    "exists": config_path.exists(),
                },
            }
        )
        return

    table = Table(title="geospot Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))

    console.print(table)
    status = "" if config_path.exists() else " [dim](not found, using defaults)[/dim]"
    console.print(f"\n[dim]Config file:[/dim] {config_path}{status}")


# Register command groups organized by category

# Indexing
app.add_typer(
    geohash.app,
    name="geohash",
    help="Geohash encoding and neighbor cells",
    rich_help_panel="Indexing",
)

# Spots
app.add_typer(
    spots.app,
    name="spots",
    help="Spot catalog search and maintenance",
    rich_help_panel="Spots",
)

# Location
app.add_typer(
    location.app,
    name="location",
    help="Geocoding lookups",
    rich_help_panel="Location",
)


if __name__ == "__main__":
    app()
