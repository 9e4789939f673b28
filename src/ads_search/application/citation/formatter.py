"""
Citation Formatter - pure string templating over search results.

Never raises: missing data degrades to placeholder text.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ads_search.domain.entities import SearchResult

NO_DATE = "n.d."
UNKNOWN_AUTHORS = "Unknown"
UNTITLED = "Untitled"


@dataclass(frozen=True)
class ResultSummary:
    """Display fields for one result."""

    authors: str
    title: str
    year: str
    publication: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def extract_last_name(author_name: str) -> str:
    """
    Last name from an ADS author string.

    ADS format is "Last, First" or "Last, First Middle"; anything else falls
    back to the first whitespace-delimited token.
    """
    comma_index = author_name.find(",")
    if comma_index > 0:
        return author_name[:comma_index]
    parts = author_name.split()
    return parts[0] if parts else author_name


def format_inline(result: SearchResult) -> str:
    """
    Short parenthetical citation.

    Examples:
        "(n.d.)", "Smith (2020)", "Smith & Doe (2019)", "Smith et al. (2021)"
    """
    authors = result.author or ()
    year = result.year or NO_DATE

    if len(authors) == 0:
        return f"({year})"

    first = extract_last_name(authors[0])
    if len(authors) == 1:
        return f"{first} ({year})"
    if len(authors) == 2:
        return f"{first} & {extract_last_name(authors[1])} ({year})"
    return f"{first} et al. ({year})"


def format_authors(authors: tuple[str, ...] | list[str]) -> str:
    if len(authors) == 0:
        return UNKNOWN_AUTHORS
    if len(authors) == 1:
        return authors[0]
    if len(authors) == 2:
        return f"{authors[0]}; {authors[1]}"
    return f"{authors[0]} +{len(authors) - 1} more"


def format_summary(result: SearchResult) -> ResultSummary:
    """Display summary: author string, first title, year and venue with placeholders."""
    return ResultSummary(
        authors=format_authors(result.author or ()),
        title=result.title[0] if result.title and result.title[0] else UNTITLED,
        year=result.year or NO_DATE,
        publication=result.pub or "",
    )
