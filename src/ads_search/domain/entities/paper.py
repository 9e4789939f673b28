"""
Domain Entities: SearchResult, PaperDetail, SearchPage

Records returned by the ADS search API. Immutable once received.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

AFFILIATION_PLACEHOLDER = "-"


def _str_list(value: Any) -> tuple[str, ...]:
    """Coerce an API list field (possibly missing or scalar) to a tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value if v is not None)


@dataclass(frozen=True)
class SearchResult:
    """
    One document from a search response.

    Attributes:
        bibcode: Unique, stable ADS identifier
        title: Title strings in API order (usually one)
        author: Author names in "Last, First" convention
        year: Publication year, None when absent
        pub: Venue / publication name
    """

    bibcode: str
    title: tuple[str, ...] = ()
    author: tuple[str, ...] = ()
    year: str | None = None
    pub: str = ""

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> SearchResult:
        """Build from an API ``docs[]`` item."""
        return cls(**_base_fields(doc))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the API document shape."""
        data = dataclasses.asdict(self)
        data["title"] = list(self.title)
        data["author"] = list(self.author)
        return data


@dataclass(frozen=True)
class PaperDetail(SearchResult):
    """SearchResult extended with the detail field set."""

    abstract: str | None = None
    citation_count: int = 0
    doi: tuple[str, ...] = ()
    aff: tuple[str, ...] = ()

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> PaperDetail:
        try:
            citations = int(doc.get("citation_count") or 0)
        except (TypeError, ValueError):
            citations = 0
        return cls(
            **_base_fields(doc),
            abstract=doc.get("abstract") or None,
            citation_count=max(citations, 0),
            doi=_str_list(doc.get("doi")),
            aff=_str_list(doc.get("aff")),
        )

    @property
    def primary_doi(self) -> str | None:
        return self.doi[0] if self.doi else None

    @property
    def doi_url(self) -> str | None:
        doi = self.primary_doi
        return f"https://doi.org/{doi}" if doi else None

    @property
    def unique_affiliations(self) -> list[str]:
        """Affiliations without blanks or "-" placeholders, first occurrence kept."""
        seen: dict[str, None] = {}
        for aff in self.aff:
            if aff and aff != AFFILIATION_PLACEHOLDER:
                seen.setdefault(aff, None)
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["doi"] = list(self.doi)
        data["aff"] = list(self.aff)
        return data


def _base_fields(doc: dict[str, Any]) -> dict[str, Any]:
    year = doc.get("year")
    return {
        "bibcode": str(doc.get("bibcode", "")),
        "title": _str_list(doc.get("title")),
        "author": _str_list(doc.get("author")),
        "year": str(year) if year else None,
        "pub": doc.get("pub") or "",
    }


@dataclass(frozen=True)
class SearchPage:
    """
    One page of search results.

    ``next_cursor`` is opaque. From the raw client it is whatever the API
    returned; from PaginationController it is None once the session is
    exhausted.
    """

    docs: list[SearchResult] = field(default_factory=list)
    next_cursor: str | None = None
    num_found: int = 0

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "docs": [doc.to_dict() for doc in self.docs],
            "next_cursor": self.next_cursor,
            "num_found": self.num_found,
        }
