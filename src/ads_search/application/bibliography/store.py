"""
Bibliography Store - the user's deduplicated saved-paper collection.

Persisted as a JSON array under one key of a KeyValueStorage. Every
operation reads and writes storage within the call; nothing is held open.
Unparseable stored data is treated as an empty bibliography; a malformed
entry inside a valid array is skipped and the rest are kept.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable

from ads_search.application.citation import format_summary
from ads_search.domain.entities import BibliographyEntry, SearchResult
from ads_search.infrastructure.storage import BIBLIOGRAPHY_KEY, KeyValueStorage
from ads_search.shared.exceptions import PersistenceCorruptError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def entry_from_result(result: SearchResult, added_at: int | None = None) -> BibliographyEntry:
    """Build an entry from a result using its display summary."""
    summary = format_summary(result)
    return BibliographyEntry(
        bibcode=result.bibcode,
        title=summary.title,
        authors=summary.authors,
        year=summary.year,
        added_at=now_ms() if added_at is None else added_at,
    )


def sorted_for_display(entries: Iterable[BibliographyEntry]) -> list[BibliographyEntry]:
    """Most recently added first."""
    return sorted(entries, key=lambda e: e.added_at, reverse=True)


class BibliographyStore:
    """
    Persisted bibliography keyed by bibcode.

    Example:
        store = BibliographyStore(JsonFileStorage("~/.ads-search-mcp"))
        store.add(entry_from_result(result))   # True
        store.add(entry_from_result(result))   # False, already saved
    """

    def __init__(self, storage: KeyValueStorage, key: str = BIBLIOGRAPHY_KEY):
        self._storage = storage
        self._key = key

    def _decode(self, raw: str) -> list[BibliographyEntry]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceCorruptError(self._key, str(e)) from e
        if not isinstance(data, list):
            raise PersistenceCorruptError(self._key, "expected a JSON array")

        entries = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping bibliography item {index}: not an object")
                continue
            try:
                entries.append(BibliographyEntry.from_dict(item))
            except KeyError:
                logger.warning(f"Skipping bibliography item {index}: no bibcode")
        return entries

    def _load(self) -> list[BibliographyEntry]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        try:
            return self._decode(raw)
        except PersistenceCorruptError as e:
            logger.warning(f"{e}; treating bibliography as empty")
            return []

    def _save(self, entries: list[BibliographyEntry]) -> None:
        self._storage.set(self._key, json.dumps([e.to_dict() for e in entries], ensure_ascii=False))

    def list(self) -> list[BibliographyEntry]:
        """All entries in insertion order."""
        return self._load()

    def add(self, entry: BibliographyEntry) -> bool:
        """
        Add ``entry`` unless its bibcode is already saved.

        Returns:
            True if added, False if an entry with the same bibcode exists
        """
        entries = self._load()
        if any(e.bibcode == entry.bibcode for e in entries):
            return False
        entries.append(entry)
        self._save(entries)
        logger.debug(f"Added {entry.bibcode} to bibliography")
        return True

    def remove(self, bibcode: str) -> None:
        """Remove ``bibcode``; removing an absent bibcode is a no-op."""
        entries = [e for e in self._load() if e.bibcode != bibcode]
        self._save(entries)

    def clear(self) -> None:
        self._storage.remove(self._key)

    def contains(self, bibcode: str) -> bool:
        return any(e.bibcode == bibcode for e in self._load())

    def count(self) -> int:
        return len(self._load())

    def bibcodes(self) -> list[str]:
        return [e.bibcode for e in self._load()]

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, bibcode: str) -> bool:
        return self.contains(bibcode)
