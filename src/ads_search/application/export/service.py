"""
Export Service - export format selection and bulk bibliography export.

The format list comes from the remote manifest. Structural formats (XML,
CSL and custom styles) are filtered out; the rest are grouped by type for
presentation. Rendering itself is always done remotely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from cachetools import TTLCache

from ads_search.application.bibliography import BibliographyStore
from ads_search.domain.entities import ExportFormatInfo
from ads_search.shared.exceptions import AdsSearchError, ValidationError

logger = logging.getLogger(__name__)

EXCLUDED_TYPES = frozenset({"XML", "CSL", "custom"})
TYPE_ORDER = ("HTML", "tagged", "LaTeX", "other")
GROUP_LABELS = {"HTML": "Citations", "tagged": "Tagged"}
DEFAULT_EXPORT_FORMAT = "apsj"

# Offered when the manifest cannot be fetched
FALLBACK_FORMATS: tuple[ExportFormatInfo, ...] = (
    ExportFormatInfo(name="APS Journals", type="HTML", route="/apsj", extension="html"),
    ExportFormatInfo(name="BibTeX", type="tagged", route="/bibtex", extension="bib"),
)

_MANIFEST_KEY = "manifest"


class ExportGateway(Protocol):
    """Remote export collaborator."""

    async def export(self, bibcodes: list[str], format: str) -> str: ...

    async def manifest(self) -> list[ExportFormatInfo]: ...


@dataclass
class FormatGroup:
    """Export formats of one type."""

    type: str
    label: str
    formats: list[ExportFormatInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "formats": [f.to_dict() for f in self.formats],
        }


@dataclass
class ExportResult:
    """Rendered export of several bibcodes."""

    format: str
    content: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"format": self.format, "content": self.content, "count": self.count}


def useful_formats(formats: list[ExportFormatInfo]) -> list[ExportFormatInfo]:
    """Drop structural formats."""
    return [f for f in formats if f.type not in EXCLUDED_TYPES]


def group_formats(formats: list[ExportFormatInfo]) -> list[FormatGroup]:
    """
    Group useful formats by type.

    Preferred types come first in TYPE_ORDER; any other type follows in the
    order it first appears. Empty groups are omitted.
    """
    grouped: dict[str, list[ExportFormatInfo]] = {}
    for fmt in useful_formats(formats):
        grouped.setdefault(fmt.type, []).append(fmt)

    ordered = [t for t in TYPE_ORDER if t in grouped]
    ordered += [t for t in grouped if t not in TYPE_ORDER]
    return [FormatGroup(type=t, label=GROUP_LABELS.get(t, t), formats=grouped[t]) for t in ordered]


def default_format(formats: list[ExportFormatInfo]) -> str:
    """``apsj`` when offered, otherwise the first useful format."""
    keys = [f.key for f in useful_formats(formats)]
    if DEFAULT_EXPORT_FORMAT in keys or not keys:
        return DEFAULT_EXPORT_FORMAT
    return keys[0]


class ExportService:
    """
    Export format discovery and bulk export.

    Example:
        service = ExportService(client, bibliography)
        groups = group_formats(await service.available_formats())
        result = await service.export_bibliography("bibtex")
    """

    def __init__(
        self,
        gateway: ExportGateway,
        bibliography: BibliographyStore,
        manifest_ttl: float = 3600.0,
    ):
        """
        Initialize export service.

        Args:
            gateway: Remote export collaborator
            bibliography: Store whose entries are exported in bulk
            manifest_ttl: Seconds to reuse a fetched manifest
        """
        self._gateway = gateway
        self._bibliography = bibliography
        self._manifest: TTLCache[str, list[ExportFormatInfo]] = TTLCache(maxsize=1, ttl=manifest_ttl)

    async def available_formats(self, refresh: bool = False) -> list[ExportFormatInfo]:
        """
        Formats from the manifest, cached; built-in defaults if it cannot be fetched.
        """
        if not refresh:
            cached = self._manifest.get(_MANIFEST_KEY)
            if cached is not None:
                logger.debug("Manifest cache hit")
                return cached

        try:
            formats = await self._gateway.manifest()
        except AdsSearchError as e:
            logger.warning(f"Manifest unavailable, using default formats: {e}")
            return list(FALLBACK_FORMATS)

        self._manifest[_MANIFEST_KEY] = formats
        logger.info(f"Loaded {len(formats)} export formats")
        return formats

    async def export(self, bibcodes: list[str], format: str = DEFAULT_EXPORT_FORMAT) -> ExportResult:
        if not bibcodes:
            raise ValidationError("No bibcodes provided")
        content = await self._gateway.export(list(bibcodes), format)
        return ExportResult(format=format, content=content, count=len(bibcodes))

    async def export_bibliography(self, format: str | None = None) -> ExportResult:
        """
        Export every saved entry in one request.

        Raises:
            ValidationError: The bibliography is empty
        """
        bibcodes = self._bibliography.bibcodes()
        if not bibcodes:
            raise ValidationError("Bibliography is empty")
        return await self.export(bibcodes, format or DEFAULT_EXPORT_FORMAT)
