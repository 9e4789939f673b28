"""
Domain Entity: ExportFormatInfo

One entry of the export service manifest.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExportFormatInfo:
    """
    Export format advertised by the manifest.

    Attributes:
        name: Human readable name (e.g., "APS Journals")
        type: Format family ("HTML", "tagged", "LaTeX", "XML", "CSL", ...)
        route: Export route (e.g., "/apsj")
        extension: Suggested file extension
    """

    name: str
    type: str
    route: str
    extension: str = ""

    @property
    def key(self) -> str:
        """Format name used in export requests (route without the leading slash)."""
        return self.route.replace("/", "", 1)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExportFormatInfo:
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type", "other")),
            route=str(data.get("route", "")),
            extension=str(data.get("extension", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["key"] = self.key
        return data
