"""
ADS API Client

Async HTTP client for the NASA ADS (SciX) search and export APIs with:
- Bearer token authentication, token resolved on every call
- Connection pooling via httpx
- Typed failures: UnauthorizedError (401) is distinct from RemoteError

Endpoints (relative to the API base, default https://api.adsabs.harvard.edu/v1):
- GET  /search/query       search, detail fetch, references
- POST /export/{format}    batch citation rendering
- GET  /export/manifest    available export formats

Timeouts belong to the transport; there are no automatic retries. Callers
retry by re-invoking the operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ads_search.domain.entities import (
    ExportFormatInfo,
    PaperDetail,
    SearchPage,
    SearchResult,
)
from ads_search.shared.exceptions import (
    AdsSearchError,
    MissingTokenError,
    NetworkError,
    ParseError,
    RateLimitError,
    RemoteError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.adsabs.harvard.edu/v1"

DEFAULT_FIELDS = "bibcode,title,author,year,pub"
DETAIL_FIELDS = "bibcode,title,author,year,pub,abstract,citation_count,doi,aff"
DEFAULT_SORT = "score desc, id desc"

# Cursor sent for the first page of a cursor-paginated search
INITIAL_CURSOR = "*"

# Cheap query used to check that a token is accepted
VALIDATION_QUERY = "bibcode:2024ApJ"

TokenProvider = Callable[[], "str | None"]
T = TypeVar("T")


class ADSClient:
    """
    Async client for the ADS search and export APIs.

    Example:
        client = ADSClient(token=token_store.get_token)

        page = await client.search("author:Huchra", rows=10)
        detail = await client.fetch_paper_detail(page.docs[0].bibcode)
        text = await client.export([d.bibcode for d in page.docs], "bibtex")
    """

    DEFAULT_TIMEOUT = 30.0
    _service_name = "ADS"

    def __init__(
        self,
        token: str | TokenProvider | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize ADS client.

        Args:
            token: API token, or a zero-argument callable returning it
            base_url: API base URL (point at a local proxy for development)
            timeout: Request timeout in seconds
        """
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                headers={"User-Agent": "ADS-Search-MCP/1.0"},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> ADSClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    # ==================== Transport ====================

    def _resolve_token(self, override: str | None = None) -> str:
        token = override if override is not None else self._token
        if callable(token):
            token = token()
        if not token:
            raise MissingTokenError()
        return token

    @staticmethod
    def _raise_for_status(response: httpx.Response, label: str) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        if status == 401:
            raise UnauthorizedError()
        if status == 429:
            try:
                retry_after = float(response.headers.get("Retry-After", 1.0))
            except (TypeError, ValueError):
                retry_after = 1.0
            raise RateLimitError(f"{label} rate limit exceeded", retry_after=retry_after)
        raise RemoteError(status, f"{label} error: {status}")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        token: str | None = None,
        label: str = "ADS API",
    ) -> Any:
        """
        Make an authenticated request and decode the JSON body.

        Raises:
            MissingTokenError: No token configured
            UnauthorizedError: HTTP 401
            RateLimitError: HTTP 429
            RemoteError: Any other non-2xx status
            NetworkError: Connection failure or timeout
            ParseError: Body is not valid JSON
        """
        headers = {"Authorization": f"Bearer {self._resolve_token(token)}"}
        url = f"{self._base_url}{path}"
        client = await self._get_client()

        try:
            if method == "POST":
                response = await client.post(url, json=json_body, headers=headers)
            else:
                response = await client.get(url, params=params or {}, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"{self._service_name} timeout for {path}")
            raise NetworkError(f"Request timeout after {self._timeout}s") from e
        except httpx.RequestError as e:
            logger.warning(f"{self._service_name} request error for {path}: {e}")
            raise NetworkError(f"Connection failed: {e}") from e

        self._raise_for_status(response, label)

        try:
            return response.json()
        except ValueError as e:
            logger.exception(f"JSON decode error for {path}")
            raise ParseError("Invalid JSON response", source=self._service_name) from e

    @staticmethod
    def _search_body(data: Any) -> dict[str, Any]:
        if not isinstance(data, dict) or not isinstance(data.get("response", {}), dict):
            raise ParseError("Unexpected search response shape", source="ADS")
        return data.get("response") or {}

    @staticmethod
    def _decode_docs(body: dict[str, Any], factory: Callable[[dict[str, Any]], T]) -> list[T]:
        docs = body.get("docs") or []
        try:
            return [factory(doc) for doc in docs]
        except (TypeError, ValueError, AttributeError) as e:
            raise ParseError(f"Malformed search document: {e}", source="ADS") from e

    @staticmethod
    def _decode_num_found(body: dict[str, Any]) -> int:
        try:
            return int(body.get("numFound") or 0)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Invalid numFound: {body.get('numFound')!r}", source="ADS") from e

    # ==================== Search APIs ====================

    async def search(
        self,
        query: str,
        *,
        fields: str = DEFAULT_FIELDS,
        rows: int = 10,
        cursor: str | None = INITIAL_CURSOR,
        sort: str = DEFAULT_SORT,
        token: str | None = None,
    ) -> SearchPage:
        """
        Run one cursor-paginated search request.

        Args:
            query: ADS query string
            fields: Field list (DEFAULT_FIELDS or DETAIL_FIELDS)
            rows: Page size
            cursor: Continuation token to send ("*" for the first page)
            sort: Sort order; must be stable for cursor paging
            token: Use this token instead of the configured one

        Returns:
            SearchPage whose next_cursor is the API's nextCursorMark, unmodified
        """
        params = {
            "q": query,
            "fl": fields,
            "rows": str(rows),
            "sort": sort,
            "cursorMark": cursor or INITIAL_CURSOR,
        }
        data = await self._request("GET", "/search/query", params=params, token=token)
        body = self._search_body(data)

        factory = PaperDetail.from_doc if fields == DETAIL_FIELDS else SearchResult.from_doc
        docs = self._decode_docs(body, factory)
        num_found = self._decode_num_found(body)

        logger.debug(f"Search {query!r} cursor={params['cursorMark']!r}: {len(docs)}/{num_found} docs")
        return SearchPage(docs=docs, next_cursor=data.get("nextCursorMark"), num_found=num_found)

    async def fetch_paper_detail(self, bibcode: str) -> PaperDetail | None:
        """
        Fetch the extended record for one bibcode.

        Returns:
            PaperDetail, or None when the API reports no match
        """
        params = {"q": f"bibcode:{bibcode}", "fl": DETAIL_FIELDS, "rows": "1"}
        data = await self._request("GET", "/search/query", params=params)
        docs = self._decode_docs(self._search_body(data), PaperDetail.from_doc)
        return docs[0] if docs else None

    async def fetch_references(self, bibcode: str, rows: int = 25) -> list[SearchResult]:
        """Fetch papers referenced by ``bibcode``."""
        params = {
            "q": f"references(bibcode:{bibcode})",
            "fl": DEFAULT_FIELDS,
            "rows": str(rows),
        }
        data = await self._request("GET", "/search/query", params=params)
        return self._decode_docs(self._search_body(data), SearchResult.from_doc)

    async def validate_token(self, token: str) -> bool:
        """Check whether ``token`` is accepted by running a one-row probe search."""
        try:
            await self.search(VALIDATION_QUERY, rows=1, token=token)
        except AdsSearchError as e:
            logger.info(f"Token validation failed: {e}")
            return False
        return True

    # ==================== Export APIs ====================

    async def export(self, bibcodes: list[str], format: str) -> str:
        """
        Render citations for all ``bibcodes`` in one request.

        Args:
            bibcodes: Identifiers to export
            format: Export format name (manifest route without "/", e.g. "apsj")

        Returns:
            Pre-rendered citation text, trimmed
        """
        if not bibcodes:
            raise ValidationError("No bibcodes provided")

        data = await self._request(
            "POST",
            f"/export/{format}",
            json_body={"bibcode": list(bibcodes)},
            label="Export API",
        )
        if not isinstance(data, dict) or not isinstance(data.get("export"), str):
            raise ParseError("Export response has no 'export' text", source=self._service_name)

        logger.info(f"Exported {len(bibcodes)} citations in {format} format")
        return data["export"].strip()

    async def manifest(self) -> list[ExportFormatInfo]:
        """List export formats offered by the API."""
        data = await self._request("GET", "/export/manifest", label="Manifest API")
        if not isinstance(data, list):
            raise ParseError("Manifest is not a list", source=self._service_name)
        return [ExportFormatInfo.from_dict(item) for item in data if isinstance(item, dict)]
