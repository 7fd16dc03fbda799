"""Tests for the Summarizer (AI-powered evaluation summaries)."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from evalsummary.summarization.exceptions import (
    SummarizationNetworkError,
    SummarizationUnauthorizedError,
)
from evalsummary.summarization.summarizer import Summarizer

KEY = "sk-ant-test-key-123456"


def _make_summarizer(client: MagicMock, **kwargs: object) -> tuple[Summarizer, MagicMock]:
    factory = MagicMock(return_value=client)
    return Summarizer(client_factory=factory, model="test-model", **kwargs), factory  # type: ignore[arg-type]


class TestSummarize:
    def test_returns_summary_result(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "## POSITIVE COMMENTS"
        summarizer, factory = _make_summarizer(client)
        result = summarizer.summarize("Great course.", KEY)
        assert result.text == "## POSITIVE COMMENTS"
        assert result.model == "test-model"
        assert result.mode == "text"
        factory.assert_called_once_with(KEY)

    def test_sends_prompt_with_comments(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "ok"
        summarizer, _ = _make_summarizer(client)
        summarizer.summarize("Great course, learned a lot.", KEY)
        kwargs = client.create_message.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 2000
        assert kwargs["temperature"] == 0.3
        assert "Great course, learned a lot." in kwargs["prompt"]
        assert "{comments}" not in kwargs["prompt"]
        assert kwargs.get("document") is None

    def test_text_with_braces_is_inserted_verbatim(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "ok"
        summarizer, _ = _make_summarizer(client)
        summarizer.summarize("Use {curly} braces {0}", KEY)
        assert "Use {curly} braces {0}" in client.create_message.call_args.kwargs["prompt"]

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Summarize: {comments}", encoding="utf-8")
        client = MagicMock()
        client.create_message.return_value = "ok"
        summarizer, _ = _make_summarizer(client, prompt_template_path=template)
        summarizer.summarize("abc", KEY)
        assert client.create_message.call_args.kwargs["prompt"] == "Summarize: abc"

    def test_temperature_is_clamped(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "ok"
        summarizer, _ = _make_summarizer(client, temperature=3.0)
        summarizer.summarize("abc", KEY)
        assert client.create_message.call_args.kwargs["temperature"] == 1.0

    def test_propagates_client_errors(self) -> None:
        client = MagicMock()
        client.create_message.side_effect = SummarizationNetworkError("down")
        summarizer, _ = _make_summarizer(client)
        with pytest.raises(SummarizationNetworkError):
            summarizer.summarize("abc", KEY)


class TestSummarizeDocument:
    def test_sends_document_with_document_prompt(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "doc summary"
        summarizer, _ = _make_summarizer(client)
        result = summarizer.summarize_document(b"%PDF-1.4", KEY)
        assert result.text == "doc summary"
        assert result.mode == "document"
        kwargs = client.create_message.call_args.kwargs
        assert kwargs["document"] == b"%PDF-1.4"
        assert kwargs["max_tokens"] == 4000
        assert "PDF" in kwargs["prompt"]


class TestProbe:
    def test_returns_true_on_reply(self) -> None:
        client = MagicMock()
        client.create_message.return_value = "Hi!"
        summarizer, _ = _make_summarizer(client)
        assert summarizer.probe(KEY) is True
        kwargs = client.create_message.call_args.kwargs
        assert kwargs["prompt"] == "Hello"
        assert kwargs["max_tokens"] == 10

    def test_returns_false_on_summarization_error(self) -> None:
        client = MagicMock()
        client.create_message.side_effect = SummarizationUnauthorizedError("bad key")
        summarizer, _ = _make_summarizer(client)
        assert summarizer.probe(KEY) is False

    def test_returns_false_on_empty_reply(self) -> None:
        client = MagicMock()
        client.create_message.return_value = ""
        summarizer, _ = _make_summarizer(client)
        assert summarizer.probe(KEY) is False
