"""
Citation Service - pick between local inline citations and remote styles.

Inline citations are templated locally. Every other style is rendered by
the export gateway, one bibcode per call.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from ads_search.application.citation.formatter import format_inline
from ads_search.domain.entities import SearchResult
from ads_search.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CitationStyle(str, Enum):
    """Citation styles offered for a single result."""

    INLINE = "inline"
    FULL = "full"
    BIBTEX = "bibtex"

    @classmethod
    def parse(cls, value: str | CitationStyle) -> CitationStyle:
        try:
            return cls(str(value.value if isinstance(value, cls) else value).lower())
        except ValueError as e:
            choices = ", ".join(s.value for s in cls)
            raise ValidationError(f"Unknown citation style: {value!r} (expected one of {choices})") from e


# Export format used for each remote style
EXPORT_FORMAT_FOR_STYLE: dict[CitationStyle, str] = {
    CitationStyle.FULL: "apsj",
    CitationStyle.BIBTEX: "bibtex",
}


class ExportGateway(Protocol):
    """Batch citation rendering collaborator."""

    async def export(self, bibcodes: list[str], format: str) -> str: ...


class CitationService:
    """Citation text for one result in the selected style."""

    def __init__(self, gateway: ExportGateway, style: CitationStyle = CitationStyle.INLINE):
        self._gateway = gateway
        self.style = style

    def select_style(self, style: str | CitationStyle) -> CitationStyle:
        self.style = CitationStyle.parse(style)
        return self.style

    async def citation_text(
        self,
        result: SearchResult,
        style: str | CitationStyle | None = None,
    ) -> str:
        """
        Render a citation for ``result``.

        Args:
            result: Result to cite
            style: Override the selected style for this call

        Raises:
            MissingTokenError / UnauthorizedError / RemoteError: From the gateway
                for non-inline styles
        """
        selected = CitationStyle.parse(style) if style is not None else self.style
        if selected is CitationStyle.INLINE:
            return format_inline(result)

        export_format = EXPORT_FORMAT_FOR_STYLE[selected]
        logger.debug(f"Rendering {result.bibcode} as {export_format}")
        return await self._gateway.export([result.bibcode], export_format)
