"""
CLI Output Utilities

Rich console formatting utilities for CLI output.
"""

import json
from typing import Any

from rich.console import Console


# Create console with unicode detection
# If terminal doesn't support unicode properly, Rich will use ASCII alternatives
console = Console()

_use_unicode = console.is_terminal and not console.legacy_windows


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print info message in blue."""
    info_icon = "ℹ" if _use_unicode else "i"
    console.print(f"[blue]{info_icon}[/blue] {message}")


def print_json(data: dict[str, Any] | list[Any]) -> None:
    """Print data as JSON."""
    console.print_json(json.dumps(data, default=str))


def format_latitude(latitude: float) -> str:
    """
    Format latitude for display.

    Returns:
        Formatted string (e.g., "52.3676°N")
    """
    direction = "N" if latitude >= 0 else "S"
    return f"{abs(latitude):.4f}°{direction}"


def format_longitude(longitude: float) -> str:
    """
    Format longitude for display.

    Returns:
        Formatted string (e.g., "4.9041°E")
    """
    direction = "E" if longitude >= 0 else "W"
    return f"{abs(longitude):.4f}°{direction}"


def format_distance(distance_km: float) -> str:
    """Format a distance in m below 1km, km above."""
    if distance_km < 1.0:
        return f"{distance_km * 1000:.0f} m"
    return f"{distance_km:.2f} km"
