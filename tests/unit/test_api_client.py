import json

import httpx
import pytest

from evalsummary.client.api_client import ApiClient, ApiClientError, ApiTimeoutError

KEY = "sk-ant-test-key-123456"


def _client(handler) -> ApiClient:  # type: ignore[no-untyped-def]
    return ApiClient("http://server.test/", timeout_seconds=5, transport=httpx.MockTransport(handler))


class TestApiClient:
    def test_health(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"status": "OK", "message": "up"}))
        assert client.health() == {"status": "OK", "message": "up"}

    def test_test_key_valid(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"valid": True})

        assert _client(handler).test_key(KEY) is True
        assert captured[0].url == "http://server.test/api/test-key"
        assert json.loads(captured[0].content) == {"apiKey": KEY}

    @pytest.mark.parametrize("status", [400, 401])
    def test_test_key_rejected(self, status: int) -> None:
        client = _client(
            lambda request: httpx.Response(status, json={"error": "Invalid API key", "valid": False})
        )
        assert client.test_key(KEY) is False

    def test_test_key_server_error(self) -> None:
        client = _client(lambda request: httpx.Response(500, json={"error": "Internal server error"}))
        with pytest.raises(ApiClientError, match="Internal server error") as exc_info:
            client.test_key(KEY)
        assert exc_info.value.status_code == 500

    def test_process_text(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"result": "Summary"})

        assert _client(handler).process_text("comments", KEY, "eval.pdf") == "Summary"
        assert json.loads(captured[0].content) == {
            "text": "comments",
            "apiKey": KEY,
            "filename": "eval.pdf",
        }

    @pytest.mark.parametrize(
        ("method", "path"),
        [("upload", "/api/upload"), ("process_pdf_direct", "/api/process-pdf-direct")],
    )
    def test_file_endpoints_send_multipart(self, method: str, path: str) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"result": "Summary"})

        result = getattr(_client(handler), method)("eval.pdf", b"%PDF-1.4", KEY)
        assert result == "Summary"
        request = captured[0]
        assert request.url.path == path
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'filename="eval.pdf"' in body
        assert b"%PDF-1.4" in body
        assert KEY.encode() in body

    def test_error_message_from_server(self) -> None:
        client = _client(lambda request: httpx.Response(413, json={"error": "File too large"}))
        with pytest.raises(ApiClientError, match="File too large") as exc_info:
            client.upload("eval.pdf", b"%PDF", KEY)
        assert exc_info.value.status_code == 413

    def test_error_without_json_body(self) -> None:
        client = _client(lambda request: httpx.Response(502, text="Bad gateway"))
        with pytest.raises(ApiClientError, match="HTTP 502"):
            client.process_text("x", KEY)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ApiTimeoutError, match="timed out after 5 seconds"):
            _client(handler).process_text("x", KEY)

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiClientError, match="Cannot reach server"):
            _client(handler).process_text("x", KEY)
