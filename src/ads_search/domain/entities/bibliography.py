"""
Domain Entity: BibliographyEntry

A saved paper in the user's bibliography. Persisted as a JSON object with
camelCase ``addedAt`` so existing stored bibliographies stay readable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BibliographyEntry:
    """
    Bibliography entry.

    Attributes:
        bibcode: Unique key within the bibliography
        title: Display title
        authors: Display author string
        year: Display year ("n.d." when unknown)
        added_at: Insertion timestamp, milliseconds since the epoch
    """

    bibcode: str
    title: str
    authors: str
    year: str
    added_at: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BibliographyEntry:
        """
        Build from the persisted representation.

        A missing or non-numeric ``addedAt`` becomes 0.

        Raises:
            KeyError: If bibcode is missing or empty
        """
        bibcode = data.get("bibcode")
        if not bibcode:
            raise KeyError("bibcode")
        return cls(
            bibcode=str(bibcode),
            title=str(data.get("title") or ""),
            authors=str(data.get("authors") or ""),
            year=str(data.get("year") or ""),
            added_at=_timestamp(data.get("addedAt", data.get("added_at"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "bibcode": self.bibcode,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "addedAt": self.added_at,
        }


def _timestamp(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
