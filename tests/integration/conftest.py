from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from evalsummary.api.app import build_services, create_app
from evalsummary.config.settings import Settings
from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.models import SummaryResult


@pytest.fixture()
def integration_settings(tmp_path: Path) -> Settings:
    return Settings(upload_dir=tmp_path / "uploads")


@pytest.fixture()
def mock_summarizer() -> MagicMock:
    summarizer = MagicMock(spec=BaseSummarizer)
    summarizer.summarize.return_value = SummaryResult("## OVERALL SENTIMENT\nPositive.", "m")
    summarizer.summarize_document.return_value = SummaryResult("Document summary", "m", "document")
    summarizer.probe.return_value = True
    return summarizer


@pytest.fixture()
def api_client(integration_settings: Settings, mock_summarizer: MagicMock) -> TestClient:
    app = create_app(integration_settings, build_services(integration_settings, mock_summarizer))
    return TestClient(app)
