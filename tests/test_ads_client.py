"""
Tests for infrastructure/ads/client.py.

Covers: ADSClient init, _get_client, close, status mapping, search,
        fetch_paper_detail, fetch_references, validate_token, export, manifest.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ads_search.domain.entities import PaperDetail, SearchResult
from ads_search.infrastructure.ads import (
    DEFAULT_FIELDS,
    DETAIL_FIELDS,
    VALIDATION_QUERY,
    ADSClient,
)
from ads_search.shared.exceptions import (
    MissingTokenError,
    NetworkError,
    ParseError,
    RateLimitError,
    RemoteError,
    UnauthorizedError,
    ValidationError,
)


def _response(status_code: int = 200, json_data=None, headers=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = headers or {}
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def http():
    mock = AsyncMock()
    mock.is_closed = False
    return mock


@pytest.fixture
def client(http):
    c = ADSClient(token="secret", base_url="https://ads.test/v1/")
    c._client = http
    return c


# ============================================================
# Init / lifecycle
# ============================================================


class TestADSClientInit:
    def test_default_values(self):
        c = ADSClient()
        assert c.base_url == "https://api.adsabs.harvard.edu/v1"
        assert c._timeout == ADSClient.DEFAULT_TIMEOUT
        assert c._client is None

    def test_strips_trailing_slash(self):
        assert ADSClient(base_url="http://localhost:5000/v1/").base_url == "http://localhost:5000/v1"


class TestGetClient:
    @pytest.mark.asyncio
    async def test_creates_and_reuses(self):
        c = ADSClient(token="t")
        c1 = await c._get_client()
        c2 = await c._get_client()
        assert c1 is c2
        assert not c1.is_closed
        await c.close()
        assert c._client is None

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        async with ADSClient(token="t") as c:
            await c._get_client()
        assert c._client is None


# ============================================================
# Authentication and status mapping
# ============================================================


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_bearer_header(self, client, http, mock_search_response):
        http.get.return_value = _response(json_data=mock_search_response)
        await client.search("q")
        assert http.get.await_args.kwargs["headers"] == {"Authorization": "Bearer secret"}

    @pytest.mark.asyncio
    async def test_token_provider_read_per_call(self, http, mock_search_response):
        tokens = iter(["first", "second"])
        c = ADSClient(token=lambda: next(tokens))
        c._client = http
        http.get.return_value = _response(json_data=mock_search_response)

        await c.search("q")
        await c.search("q")
        headers = [call.kwargs["headers"]["Authorization"] for call in http.get.await_args_list]
        assert headers == ["Bearer first", "Bearer second"]

    @pytest.mark.asyncio
    async def test_missing_token(self, http):
        c = ADSClient(token=lambda: None)
        c._client = http
        with pytest.raises(MissingTokenError):
            await c.search("q")
        http.get.assert_not_called()


class TestStatusMapping:
    @pytest.mark.asyncio
    async def test_401_unauthorized(self, client, http):
        http.get.return_value = _response(401)
        with pytest.raises(UnauthorizedError):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_429_rate_limit(self, client, http):
        http.get.return_value = _response(429, headers={"Retry-After": "12"})
        with pytest.raises(RateLimitError) as exc_info:
            await client.search("q")
        assert exc_info.value.context.retry_after == 12.0

    @pytest.mark.asyncio
    async def test_other_status_remote_error(self, client, http):
        http.get.return_value = _response(503)
        with pytest.raises(RemoteError) as exc_info:
            await client.search("q")
        assert exc_info.value.status == 503
        assert not isinstance(exc_info.value, UnauthorizedError)

    @pytest.mark.asyncio
    async def test_timeout_network_error(self, client, http):
        http.get.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(NetworkError, match="timeout"):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_connect_error_network_error(self, client, http):
        http.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(NetworkError, match="Connection failed"):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_invalid_json(self, client, http):
        http.get.return_value = _response(json_data=ValueError("not json"))
        with pytest.raises(ParseError):
            await client.search("q")


# ============================================================
# Search
# ============================================================


class TestSearch:
    @pytest.mark.asyncio
    async def test_request_params(self, client, http, mock_search_response):
        http.get.return_value = _response(json_data=mock_search_response)
        await client.search("author:Huchra", rows=25, cursor="abc")

        url = http.get.await_args.args[0]
        params = http.get.await_args.kwargs["params"]
        assert url == "https://ads.test/v1/search/query"
        assert params == {
            "q": "author:Huchra",
            "fl": DEFAULT_FIELDS,
            "rows": "25",
            "sort": "score desc, id desc",
            "cursorMark": "abc",
        }

    @pytest.mark.asyncio
    async def test_page_parsing(self, client, http, mock_search_response):
        http.get.return_value = _response(json_data=mock_search_response)
        page = await client.search("q")

        assert page.num_found == 42
        assert page.next_cursor == "AoE/E2019ApJ...882L..24A"
        assert len(page.docs) == 1
        doc = page.docs[0]
        assert isinstance(doc, SearchResult)
        assert doc.bibcode == "2019ApJ...882L..24A"
        assert doc.author[0] == "Akiyama, Kazunori"

    @pytest.mark.asyncio
    async def test_echoed_cursor_returned_unmodified(self, client, http, mock_doc):
        http.get.return_value = _response(
            json_data={"response": {"numFound": 1, "docs": [mock_doc]}, "nextCursorMark": "*"}
        )
        page = await client.search("bibcode:2024ApJ")
        assert page.next_cursor == "*"

    @pytest.mark.asyncio
    async def test_detail_fields_build_details(self, client, http, mock_detail_doc):
        http.get.return_value = _response(json_data={"response": {"numFound": 1, "docs": [mock_detail_doc]}})
        page = await client.search("q", fields=DETAIL_FIELDS)
        assert isinstance(page.docs[0], PaperDetail)

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, client, http):
        http.get.return_value = _response(json_data=["not", "a", "dict"])
        with pytest.raises(ParseError):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_non_numeric_num_found(self, client, http, mock_doc):
        http.get.return_value = _response(json_data={"response": {"numFound": "abc", "docs": [mock_doc]}})
        with pytest.raises(ParseError, match="numFound"):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_scalar_list_field(self, client, http, mock_doc):
        doc = {**mock_doc, "author": 5}
        http.get.return_value = _response(json_data={"response": {"numFound": 1, "docs": [doc]}})
        with pytest.raises(ParseError):
            await client.search("q")

    @pytest.mark.asyncio
    async def test_doc_not_an_object(self, client, http):
        http.get.return_value = _response(json_data={"response": {"numFound": 1, "docs": ["2019ApJ"]}})
        with pytest.raises(ParseError):
            await client.fetch_references("X")


class TestFetchPaperDetail:
    @pytest.mark.asyncio
    async def test_found(self, client, http, mock_detail_doc):
        http.get.return_value = _response(json_data={"response": {"numFound": 1, "docs": [mock_detail_doc]}})
        detail = await client.fetch_paper_detail("2019ApJ...882L..24A")

        params = http.get.await_args.kwargs["params"]
        assert params == {"q": "bibcode:2019ApJ...882L..24A", "fl": DETAIL_FIELDS, "rows": "1"}
        assert detail.citation_count == 1234
        assert detail.primary_doi == "10.3847/2041-8213/ab0ec7"

    @pytest.mark.asyncio
    async def test_not_found(self, client, http):
        http.get.return_value = _response(json_data={"response": {"numFound": 0, "docs": []}})
        assert await client.fetch_paper_detail("2099XYZ") is None

    @pytest.mark.asyncio
    async def test_malformed_doc(self, client, http, mock_detail_doc):
        doc = {**mock_detail_doc, "aff": 7}
        http.get.return_value = _response(json_data={"response": {"numFound": 1, "docs": [doc]}})
        with pytest.raises(ParseError):
            await client.fetch_paper_detail("2019ApJ...882L..24A")


class TestFetchReferences:
    @pytest.mark.asyncio
    async def test_query(self, client, http, mock_search_response):
        http.get.return_value = _response(json_data=mock_search_response)
        refs = await client.fetch_references("2019ApJ...882L..24A", rows=5)

        params = http.get.await_args.kwargs["params"]
        assert params["q"] == "references(bibcode:2019ApJ...882L..24A)"
        assert params["rows"] == "5"
        assert [r.bibcode for r in refs] == ["2019ApJ...882L..24A"]


class TestValidateToken:
    @pytest.mark.asyncio
    async def test_valid(self, http, mock_search_response):
        c = ADSClient(token=None)
        c._client = http
        http.get.return_value = _response(json_data=mock_search_response)

        assert await c.validate_token("candidate") is True
        kwargs = http.get.await_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer candidate"
        assert kwargs["params"]["q"] == VALIDATION_QUERY
        assert kwargs["params"]["rows"] == "1"

    @pytest.mark.asyncio
    async def test_invalid(self, client, http):
        http.get.return_value = _response(401)
        assert await client.validate_token("bad") is False


# ============================================================
# Export
# ============================================================


class TestExport:
    @pytest.mark.asyncio
    async def test_export(self, client, http):
        http.post.return_value = _response(json_data={"msg": "Retrieved 2 abstracts", "export": "  text\n"})
        text = await client.export(["A", "B"], "bibtex")

        assert text == "text"
        assert http.post.await_args.args[0] == "https://ads.test/v1/export/bibtex"
        assert http.post.await_args.kwargs["json"] == {"bibcode": ["A", "B"]}

    @pytest.mark.asyncio
    async def test_empty_bibcodes(self, client, http):
        with pytest.raises(ValidationError):
            await client.export([], "bibtex")
        http.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_export_field(self, client, http):
        http.post.return_value = _response(json_data={"msg": "nothing"})
        with pytest.raises(ParseError):
            await client.export(["A"], "bibtex")

    @pytest.mark.asyncio
    async def test_export_error_status(self, client, http):
        http.post.return_value = _response(500)
        with pytest.raises(RemoteError, match="Export API error: 500"):
            await client.export(["A"], "apsj")


class TestManifest:
    @pytest.mark.asyncio
    async def test_manifest(self, client, http, mock_manifest):
        http.get.return_value = _response(json_data=mock_manifest)
        formats = await client.manifest()

        assert http.get.await_args.args[0] == "https://ads.test/v1/export/manifest"
        assert [f.key for f in formats] == ["bibtex", "apsj", "aastex", "dcxml", "custom", "ris"]

    @pytest.mark.asyncio
    async def test_manifest_not_list(self, client, http):
        http.get.return_value = _response(json_data={"error": "x"})
        with pytest.raises(ParseError):
            await client.manifest()
