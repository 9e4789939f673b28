"""
Common utilities for MCP tools.

Shared functions:
- JSON success / error envelopes
- Result and detail formatting for tool output
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ads_search.application.citation import format_inline, format_summary
from ads_search.domain.entities import PaperDetail, SearchResult
from ads_search.shared.exceptions import AdsSearchError, is_retryable_error

logger = logging.getLogger(__name__)

MAX_ABSTRACT_LENGTH = 500
MAX_AFFILIATIONS = 5


def success(**payload: Any) -> str:
    return json.dumps({"success": True, **payload}, ensure_ascii=False)


def error_message(message: str, tool_name: str, **extra: Any) -> str:
    return json.dumps({"success": False, "error": message, "tool": tool_name, **extra}, ensure_ascii=False)


def failure(error: Exception, tool_name: str) -> str:
    """
    Error envelope; typed errors carry their structured context and a
    Markdown rendering for the agent. Untyped errors are classified as
    retryable from their message.
    """
    if isinstance(error, AdsSearchError):
        data = error.to_dict()
        data["agent_message"] = error.to_agent_message()
    else:
        logger.exception(f"{tool_name} failed: {error}")
        data = {"error": str(error) or type(error).__name__, "retryable": is_retryable_error(error)}
    data["success"] = False
    data.setdefault("tool", tool_name)
    return json.dumps(data, ensure_ascii=False)


def format_result(result: SearchResult, saved: bool = False) -> dict[str, Any]:
    """One search result as shown in a result list."""
    summary = format_summary(result)
    return {
        "bibcode": result.bibcode,
        **summary.to_dict(),
        "inline_citation": format_inline(result),
        "in_bibliography": saved,
    }


def truncate(text: str, limit: int = MAX_ABSTRACT_LENGTH) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def format_detail(detail: PaperDetail, saved: bool = False) -> dict[str, Any]:
    """Expanded view of one paper."""
    affiliations = detail.unique_affiliations
    data = format_result(detail, saved)
    data.update(
        {
            "abstract": truncate(detail.abstract or "No abstract available."),
            "citation_count": detail.citation_count,
            "doi": detail.primary_doi,
            "doi_url": detail.doi_url,
            "affiliations": affiliations[:MAX_AFFILIATIONS],
            "more_affiliations": max(len(affiliations) - MAX_AFFILIATIONS, 0),
        }
    )
    return data
