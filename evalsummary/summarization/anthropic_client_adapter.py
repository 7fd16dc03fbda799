import base64

import httpx

from evalsummary.summarization.client_base import BaseSummarizationClient
from evalsummary.summarization.exceptions import (
    SummarizationError,
    SummarizationNetworkError,
    SummarizationOversizedError,
    SummarizationRateLimitedError,
    SummarizationUnauthorizedError,
)


class AnthropicClientAdapter(BaseSummarizationClient):
    """Summarization client adapter for the Anthropic Messages API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "x-api-key": api_key,
                "anthropic-version": api_version,
                "content-type": "application/json",
            },
        )

    def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
        document: bytes | None = None,
    ) -> str:
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": self._content(prompt, document)}],
        }
        try:
            response = self._client.post("/v1/messages", json=payload)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(f"AI provider network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SummarizationNetworkError(f"AI provider transport error: {exc}") from exc

        if response.status_code >= 400:
            self._raise_for_status(response)
        return self._extract_text(response)

    @staticmethod
    def _content(prompt: str, document: bytes | None) -> str | list[dict[str, object]]:
        if document is None:
            return prompt
        return [
            {"type": "text", "text": prompt},
            {
                "type": "document",
                "source": {
                    "type": "base64",
                    "media_type": "application/pdf",
                    "data": base64.b64encode(document).decode("ascii"),
                },
                "cache_control": {"type": "ephemeral"},
            },
        ]

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        detail = _error_message(response)
        status = response.status_code
        if status == 401:
            raise SummarizationUnauthorizedError(f"AI provider rejected the API key: {detail}")
        if status == 429:
            raise SummarizationRateLimitedError(f"AI provider rate limit exceeded: {detail}")
        if status == 413:
            raise SummarizationOversizedError(f"AI provider refused the payload size: {detail}")
        raise SummarizationError(f"AI provider API error {status}: {detail}")

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError as exc:
            raise SummarizationError(f"AI provider returned invalid JSON: {exc}") from exc
        blocks = body.get("content") if isinstance(body, dict) else None
        if not blocks:
            raise SummarizationError("AI returned no content")
        text = "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )
        if not text:
            raise SummarizationError("AI returned empty response")
        return text


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text[:200]
