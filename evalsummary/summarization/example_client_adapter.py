"""Offline provider returning a canned summary.

Select it with ``SUMMARIZATION_PROVIDER=example`` to run the server without an
AI account. New providers implement BaseSummarizationClient and are wired up
in SummarizerFactory.client_factory.
"""

from typing import ClassVar

from evalsummary.summarization.client_base import BaseSummarizationClient


class ExampleClientAdapter(BaseSummarizationClient):
    """Answers every request with the same summary in the expected section layout."""

    DEFAULT_RESPONSE: ClassVar[str] = (
        "## CONSTRUCTIVE FEEDBACK SUMMARY\n\n"
        "**Most Frequent Suggestions:**\n"
        "• Pacing (mentioned 1 times): Example suggestion.\n\n"
        "## POSITIVE COMMENTS\n\n"
        "**Encouraging Feedback:**\n"
        '"Example quote."\n\n'
        "## OVERALL SENTIMENT\n"
        "Example sentiment."
    )

    def __init__(self, api_key: str = "") -> None:
        self._api_key = api_key

    def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
        document: bytes | None = None,
    ) -> str:
        _ = model, max_tokens, temperature, prompt, document
        return self.DEFAULT_RESPONSE
