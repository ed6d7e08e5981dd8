"""
Spot Geohash Indexing

Keeps the geohash index field of spot records in step with their coordinates:
set on create, recomputed when an update moves the spot, and backfilled for
records that were stored without one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from geospot.api.core.constants import DEFAULT_STORAGE_PRECISION
from geospot.api.core.exceptions import InvalidCoordinateError
from geospot.api.location.geohash_utils import encode
from geospot.api.spots.models import Spot


logger = logging.getLogger(__name__)


__all__ = [
    "BackfillReport",
    "backfill_missing_geohashes",
    "index_spot",
    "needs_geohash",
    "prepare_new_spot",
    "prepare_spot_update",
]


@dataclass
class BackfillReport:
    """Outcome of a geohash backfill run."""

    total_spots: int = 0
    missing_geohash: int = 0
    updated: int = 0
    skipped_invalid: int = 0
    spots: list[Spot] = field(default_factory=list)  # Re-indexed spots

    @property
    def message(self) -> str:
        return (
            f"Updated {self.updated} of {self.missing_geohash} spots missing a geohash "
            f"({self.skipped_invalid} skipped, {self.total_spots} total)"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSpots": self.total_spots,
            "missingGeohash": self.missing_geohash,
            "updated": self.updated,
            "skippedInvalid": self.skipped_invalid,
            "message": self.message,
        }


def _has_geohash(spot: Spot) -> bool:
    return bool(spot.geohash and spot.geohash.strip())


def index_spot(spot: Spot, precision: int = DEFAULT_STORAGE_PRECISION) -> Spot:
    """
    Set a spot's geohash from its coordinate.

    Raises:
        InvalidCoordinateError: If the spot's coordinate is missing or out of range
    """
    if spot.latitude is None or spot.longitude is None:
        raise InvalidCoordinateError(f"Spot {spot.id or spot.name!r} has no coordinate")
    return replace(spot, geohash=encode(spot.latitude, spot.longitude, precision))


def prepare_new_spot(
    spot: Spot, now: datetime | None = None, precision: int = DEFAULT_STORAGE_PRECISION
) -> Spot:
    """
    Get a new spot ready to be written.

    Args:
        spot: Spot as entered
        now: Current time (default: now, UTC)
        precision: Geohash precision to store

    Returns:
        Copy with geohash and timestamps set
    """
    now = now or datetime.now(UTC)
    indexed = index_spot(spot, precision)
    return replace(indexed, created_at=spot.created_at or now, updated_at=now)


def prepare_spot_update(
    old: Spot, new: Spot, now: datetime | None = None, precision: int = DEFAULT_STORAGE_PRECISION
) -> Spot:
    """
    Get an edited spot ready to be written over the stored one.

    The geohash is recomputed only when the coordinate changed or the stored
    record has none. The creation time of the stored record is kept.

    Args:
        old: Spot as stored
        new: Spot as edited
        now: Current time (default: now, UTC)
        precision: Geohash precision to store

    Returns:
        Copy of ``new`` ready to store
    """
    now = now or datetime.now(UTC)
    moved = (old.latitude, old.longitude) != (new.latitude, new.longitude)

    if moved or not _has_geohash(new):
        logger.debug(f"Re-indexing spot {new.id or new.name!r} (moved={moved})")
        updated = index_spot(new, precision)
    else:
        updated = new

    return replace(
        updated,
        id=new.id or old.id,
        created_at=old.created_at or new.created_at,
        updated_at=now,
    )


def needs_geohash(spot: Spot, precision: int = DEFAULT_STORAGE_PRECISION) -> bool:
    """
    Check whether a spot's geohash must be (re)computed.

    Returns:
        True if the geohash is missing or blank, or does not match the
        coordinate at this precision. Spots without a valid coordinate only
        need one when theirs is missing.
    """
    if not _has_geohash(spot):
        return True

    try:
        expected = index_spot(spot, precision).geohash
    except InvalidCoordinateError:
        return False

    return (spot.geohash or "").strip().lower() != expected


def backfill_missing_geohashes(
    spots: Iterable[Spot], precision: int = DEFAULT_STORAGE_PRECISION
) -> BackfillReport:
    """
    Compute the geohash of every spot stored without one.

    Spots whose coordinate is missing or invalid are counted and skipped.

    Args:
        spots: Spots to scan
        precision: Geohash precision to store

    Returns:
        Report with counts and the re-indexed spots
    """
    report = BackfillReport()

    for spot in spots:
        report.total_spots += 1
        if _has_geohash(spot):
            continue

        report.missing_geohash += 1
        try:
            report.spots.append(index_spot(spot, precision))
        except InvalidCoordinateError as e:
            report.skipped_invalid += 1
            logger.warning(f"Skipping spot {spot.id or spot.name!r}: {e}")
            continue
        report.updated += 1

    logger.info(report.message)
    return report
