import base64

import httpx
import openai

from evalsummary.summarization.client_base import BaseSummarizationClient
from evalsummary.summarization.exceptions import (
    SummarizationError,
    SummarizationNetworkError,
    SummarizationOversizedError,
    SummarizationRateLimitedError,
    SummarizationUnauthorizedError,
)


class OpenAIClientAdapter(BaseSummarizationClient):
    """Summarization client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": self._content(prompt, document)}],
            )
        except openai.AuthenticationError as exc:
            raise SummarizationUnauthorizedError(
                f"AI provider rejected the API key: {exc}"
            ) from exc
        except openai.RateLimitError as exc:
            raise SummarizationRateLimitedError(
                f"AI provider rate limit exceeded: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 413:
                raise SummarizationOversizedError(
                    f"AI provider refused the payload size: {exc}"
                ) from exc
            raise SummarizationError(f"AI provider API error: {exc}") from exc
        except openai.APIError as exc:
            raise SummarizationError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise SummarizationError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise SummarizationError("AI returned empty response")
        return content

    @staticmethod
    def _content(prompt: str, document: bytes | None) -> str | list[dict[str, object]]:
        if document is None:
            return prompt
        encoded = base64.b64encode(document).decode("ascii")
        return [
            {"type": "text", "text": prompt},
            {
                "type": "file",
                "file": {
                    "filename": "evaluations.pdf",
                    "file_data": f"data:application/pdf;base64,{encoded}",
                },
            },
        ]
