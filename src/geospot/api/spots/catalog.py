"""
Spot Catalog

In-memory collection of spots ordered by geohash. Answers the same
"order by geohash, start at / end at" range query as the remote document
store, and reads and writes catalogs as JSON files.
"""

from __future__ import annotations

import json
import logging
import uuid
from bisect import bisect_left, bisect_right, insort
from collections.abc import Iterable, Iterator
from dataclasses import replace
from pathlib import Path

from geospot.api.core.exceptions import CatalogNotFoundError, InvalidCatalogFormatError
from geospot.api.spots.models import Spot


logger = logging.getLogger(__name__)


__all__ = [
    "SpotCatalog",
]


def _index_key(entry: tuple[str, str]) -> str:
    return entry[0]


class SpotCatalog:
    """
    Spots keyed by id, with a sorted (geohash, id) index.

    Spots without a geohash are kept but never returned by range queries,
    as in the remote store. The index holds geohashes lower-cased.
    """

    def __init__(self, spots: Iterable[Spot] = ()) -> None:
        self._spots: dict[str, Spot] = {}
        self._index: list[tuple[str, str]] = []
        for spot in spots:
            self.add(spot)

    def __len__(self) -> int:
        return len(self._spots)

    def __iter__(self) -> Iterator[Spot]:
        return iter(self._spots.values())

    def __contains__(self, spot_id: object) -> bool:
        return spot_id in self._spots

    def add(self, spot: Spot) -> Spot:
        """
        Add or replace a spot.

        Spots without an id get a generated one.

        Returns:
            The stored spot
        """
        spot_id = spot.id or uuid.uuid4().hex
        if spot_id != spot.id:
            spot = replace(spot, id=spot_id)

        if spot_id in self._spots:
            self._unindex(self._spots[spot_id])

        self._spots[spot_id] = spot
        if spot.geohash:
            insort(self._index, (spot.geohash.strip().lower(), spot_id))
        return spot

    def get(self, spot_id: str) -> Spot | None:
        return self._spots.get(spot_id)

    def remove(self, spot_id: str) -> Spot:
        """
        Remove a spot.

        Raises:
            KeyError: If there is no spot with this id
        """
        spot = self._spots.pop(spot_id)
        self._unindex(spot)
        return spot

    def _unindex(self, spot: Spot) -> None:
        if not spot.geohash or spot.id is None:
            return
        entry = (spot.geohash.strip().lower(), spot.id)
        pos = bisect_left(self._index, entry)
        if pos < len(self._index) and self._index[pos] == entry:
            del self._index[pos]

    def range_query(self, start: str, end: str) -> list[Spot]:
        """
        Get spots whose geohash lies between two bounds.

        Args:
            start: Lowest geohash (inclusive)
            end: Highest geohash (inclusive)

        Returns:
            Spots in geohash order
        """
        lo = bisect_left(self._index, start, key=_index_key)
        hi = bisect_right(self._index, end, key=_index_key)
        return [self._spots[spot_id] for _, spot_id in self._index[lo:hi]]

    @classmethod
    def load(cls, path: Path) -> SpotCatalog:
        """
        Load a catalog from a JSON file.

        The file holds a list of spot documents, each with an "id" field.

        Raises:
            CatalogNotFoundError: If the file doesn't exist
            InvalidCatalogFormatError: If the file is not a list of spot documents
        """
        if not path.exists():
            raise CatalogNotFoundError(f"Catalog file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidCatalogFormatError(f"Catalog {path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise InvalidCatalogFormatError(f"Catalog {path} must contain a JSON list of spots")

        catalog = cls()
        for doc in data:
            if not isinstance(doc, dict):
                raise InvalidCatalogFormatError(f"Catalog {path} contains a non-object entry: {doc!r}")
            doc_id = doc.get("id")
            catalog.add(Spot.from_document(str(doc_id) if doc_id else None, doc))

        logger.debug(f"Loaded {len(catalog)} spots from {path}")
        return catalog

    def save(self, path: Path) -> None:
        """Write the catalog to a JSON file."""
        documents = [{"id": spot.id, **spot.to_document()} for spot in self._spots.values()]

        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(documents, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {len(documents)} spots to {path}")
