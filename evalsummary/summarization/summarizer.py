"""AI-powered course evaluation summarizer."""

from collections.abc import Callable
from pathlib import Path

from evalsummary.logging.logger import Log
from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.client_base import BaseSummarizationClient
from evalsummary.summarization.exceptions import SummarizationError
from evalsummary.summarization.models import SummaryResult
from evalsummary.summarization.prompt_loader import load_document_prompt, load_prompt_template

ClientFactory = Callable[[str], BaseSummarizationClient]

PROBE_PROMPT = "Hello"
PROBE_MAX_TOKENS = 10


class Summarizer(BaseSummarizer):
    """Builds the fixed instructional prompt and sends it to an AI provider.

    The provider client is created per call from the caller's credential,
    since every instructor brings their own API key.
    """

    def __init__(
        self,
        *,
        client_factory: ClientFactory,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        document_max_tokens: int = 4000,
        prompt_template_path: Path | None = None,
        document_prompt_path: Path | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self._document_max_tokens = document_max_tokens
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._document_prompt = load_document_prompt(document_prompt_path)

    def summarize(self, text: str, credential: str) -> SummaryResult:
        prompt = self._build_prompt(text)
        Log.debug(f"Summary prompt is {len(prompt)} chars")
        reply = self._client_factory(credential).create_message(
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            prompt=prompt,
        )
        Log.info("Summary received", model=self._model, mode="text", length=len(reply))
        return SummaryResult(text=reply, model=self._model, mode="text")

    def summarize_document(self, pdf_bytes: bytes, credential: str) -> SummaryResult:
        Log.info(f"Sending PDF for direct processing: {len(pdf_bytes) / 1024 / 1024:.2f} MB")
        reply = self._client_factory(credential).create_message(
            model=self._model,
            max_tokens=self._document_max_tokens,
            temperature=self._temperature,
            prompt=self._document_prompt,
            document=pdf_bytes,
        )
        Log.info("Summary received", model=self._model, mode="document", length=len(reply))
        return SummaryResult(text=reply, model=self._model, mode="document")

    def probe(self, credential: str) -> bool:
        try:
            reply = self._client_factory(credential).create_message(
                model=self._model,
                max_tokens=PROBE_MAX_TOKENS,
                temperature=self._temperature,
                prompt=PROBE_PROMPT,
            )
        except SummarizationError as exc:
            Log.warning(f"API key probe failed: {exc}")
            return False
        return bool(reply)

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(comments=text)
