"""HTTP client: base URL, bearer tokens and error normalization."""

import asyncio

import httpx
import pytest

from gramin_portal.api.client import ApiClient
from gramin_portal.api.errors import ApiError, error_message


class TestRequests:
    """Requests built by the client."""

    def test_bearer_token_attached(self, client, backend):
        backend.respond("GET", "/admin/members", [])
        asyncio.run(client.get("/admin/members", token="abc"))
        assert backend.last.headers["Authorization"] == "Bearer abc"
        assert backend.last_path() == "/admin/members"

    def test_no_token_no_header(self, client, backend):
        asyncio.run(client.get("/public/summary"))
        assert "Authorization" not in backend.last.headers

    def test_none_params_dropped(self, client, backend):
        asyncio.run(client.get("/public/vdf/deposits", params={"year": None, "page": 2}))
        assert dict(backend.last.url.params) == {"page": "2"}

    def test_json_body_parsed(self, client, backend):
        backend.respond("GET", "/public/summary", {"totalDeposits": 1000})
        assert asyncio.run(client.get("/public/summary")) == {"totalDeposits": 1000}

    def test_empty_body_is_none(self, client, backend):
        backend.respond("DELETE", "/admin/members/3")
        assert asyncio.run(client.delete("/admin/members/3")) is None

    def test_raw_returns_bytes(self, client, backend):
        backend.respond("GET", "/member/documents/9/download", content=b"%PDF-1.4")
        body = asyncio.run(client.get("/member/documents/9/download", raw=True))
        assert body == b"%PDF-1.4"

    def test_base_url_trailing_slash(self):
        assert ApiClient(base_url="http://x/api/").base_url == "http://x/api"

    def test_context_manager_closes(self, backend):
        async def use():
            async with ApiClient(base_url="http://x/api", transport=httpx.MockTransport(backend.handler)) as api:
                await api.get("/public/summary")
                assert api.client is not None
            return api

        api = asyncio.run(use())
        assert api.client is None


class TestErrors:
    """Failures surface as ApiError."""

    def test_http_error_uses_backend_message(self, client, backend):
        backend.respond("GET", "/admin/members/99", {"message": "Member not found"}, status=404)
        with pytest.raises(ApiError) as info:
            asyncio.run(client.get("/admin/members/99"))
        assert info.value.status_code == 404
        assert info.value.message == "Member not found"
        assert info.value.payload == {"message": "Member not found"}

    def test_error_field_used_when_no_message(self, client, backend):
        backend.respond("POST", "/admin/auth/login", {"error": "Invalid PIN"}, status=401)
        with pytest.raises(ApiError) as info:
            asyncio.run(client.post("/admin/auth/login", json={}))
        assert info.value.message == "Invalid PIN"
        assert info.value.is_unauthorized

    def test_plain_text_error(self, client, backend):
        backend.respond("GET", "/admin/reports/yearly", content=b"Internal failure", status=500)
        with pytest.raises(ApiError) as info:
            asyncio.run(client.get("/admin/reports/yearly"))
        assert info.value.message == "Internal failure"
        assert not info.value.is_unauthorized

    def test_empty_error_body(self, client, backend):
        backend.respond("GET", "/admin/loans", status=503)
        with pytest.raises(ApiError) as info:
            asyncio.run(client.get("/admin/loans"))
        assert info.value.message == "HTTP 503"

    def test_network_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        api = ApiClient(base_url="http://x/api", transport=httpx.MockTransport(refuse))
        with pytest.raises(ApiError) as info:
            asyncio.run(api.get("/public/summary"))
        assert info.value.status_code == 0
        assert info.value.message.startswith("Network error")


class TestErrorMessage:
    """User-facing messages."""

    def test_api_error_message(self):
        assert error_message(ApiError(400, "Phone already exists"), "Failed") == "Phone already exists"

    def test_other_exception_text(self):
        assert error_message(ValueError("bad value"), "Failed") == "bad value"

    def test_fallback(self):
        assert error_message(None, "Failed to load") == "Failed to load"
        assert error_message(RuntimeError(), "Failed to load") == "Failed to load"
