import base64
import json

import httpx
import pytest

from evalsummary.summarization.anthropic_client_adapter import AnthropicClientAdapter
from evalsummary.summarization.exceptions import (
    SummarizationError,
    SummarizationNetworkError,
    SummarizationOversizedError,
    SummarizationRateLimitedError,
    SummarizationUnauthorizedError,
)


def _adapter(handler: httpx.MockTransport) -> AnthropicClientAdapter:
    return AnthropicClientAdapter(
        api_key="sk-ant-test-key-123456",
        timeout_seconds=30,
        base_url="https://api.example.test",
        transport=handler,
    )


def _reply(status: int, body: object) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status, json=body))


def _create(adapter: AnthropicClientAdapter, document: bytes | None = None) -> str:
    return adapter.create_message(
        model="claude-test",
        max_tokens=2000,
        temperature=0.3,
        prompt="Summarize these comments",
        document=document,
    )


class TestAnthropicClientAdapter:
    def test_returns_text_and_sends_expected_request(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(
                200, json={"content": [{"type": "text", "text": "Summary text"}]}
            )

        result = _create(_adapter(httpx.MockTransport(handler)))

        assert result == "Summary text"
        request = captured[0]
        assert request.url == "https://api.example.test/v1/messages"
        assert request.headers["x-api-key"] == "sk-ant-test-key-123456"
        assert request.headers["anthropic-version"] == "2023-06-01"
        body = json.loads(request.content)
        assert body["model"] == "claude-test"
        assert body["max_tokens"] == 2000
        assert body["temperature"] == 0.3
        assert body["messages"] == [{"role": "user", "content": "Summarize these comments"}]

    def test_document_is_sent_as_base64_block(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"content": [{"type": "text", "text": "ok"}]})

        _create(_adapter(httpx.MockTransport(handler)), document=b"%PDF-1.4 data")

        content = json.loads(captured[0].content)["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "Summarize these comments"}
        document = content[1]
        assert document["type"] == "document"
        assert document["source"]["media_type"] == "application/pdf"
        assert base64.b64decode(document["source"]["data"]) == b"%PDF-1.4 data"
        assert document["cache_control"] == {"type": "ephemeral"}

    def test_joins_multiple_text_blocks(self) -> None:
        body = {
            "content": [
                {"type": "text", "text": "Part one. "},
                {"type": "tool_use", "id": "x"},
                {"type": "text", "text": "Part two."},
            ]
        }
        assert _create(_adapter(_reply(200, body))) == "Part one. Part two."

    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [
            (401, SummarizationUnauthorizedError),
            (429, SummarizationRateLimitedError),
            (413, SummarizationOversizedError),
        ],
    )
    def test_maps_status_codes(self, status: int, error_cls: type[Exception]) -> None:
        body = {"type": "error", "error": {"type": "x", "message": "provider says no"}}
        with pytest.raises(error_cls, match="provider says no"):
            _create(_adapter(_reply(status, body)))

    def test_other_status_raises_generic_error(self) -> None:
        with pytest.raises(SummarizationError, match="500") as exc_info:
            _create(_adapter(_reply(500, {"error": {"message": "overloaded"}})))
        assert type(exc_info.value) is SummarizationError

    def test_missing_content_raises(self) -> None:
        with pytest.raises(SummarizationError, match="no content"):
            _create(_adapter(_reply(200, {"content": []})))

    def test_empty_text_raises(self) -> None:
        with pytest.raises(SummarizationError, match="empty response"):
            _create(_adapter(_reply(200, {"content": [{"type": "text", "text": ""}]})))

    def test_invalid_json_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(SummarizationError, match="invalid JSON"):
            _create(_adapter(transport))

    def test_connection_failure_raises_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SummarizationNetworkError, match="network error"):
            _create(_adapter(httpx.MockTransport(handler)))

    def test_timeout_raises_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(SummarizationNetworkError):
            _create(_adapter(httpx.MockTransport(handler)))
