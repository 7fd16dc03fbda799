import logging

import pytest

from evalsummary.logging.logger import Log


class TestLog:
    def test_renders_fields_after_message(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="evalsummary")
        Log.info("Backend accepted", backend="pymupdf", length=120)
        assert "Backend accepted [backend='pymupdf' length=120]" in caplog.text

    def test_attaches_fields_to_record(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="evalsummary")
        Log.warning("Rejected", reason="too short")
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.fields == {"reason": "too short"}  # type: ignore[attr-defined]

    def test_plain_message_without_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.ERROR, logger="evalsummary")
        Log.error("Something failed")
        assert caplog.records[-1].getMessage() == "Something failed"

    def test_debug_is_skipped_below_level(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="evalsummary")
        Log.debug("hidden")
        assert "hidden" not in caplog.text

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.ERROR, logger="evalsummary")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            Log.exception("Unhandled")
        assert caplog.records[-1].exc_info is not None
