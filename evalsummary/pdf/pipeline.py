"""Ordered, fault-tolerant PDF text extraction."""

from collections.abc import Callable, Sequence

from evalsummary.cleaning.cleaner import TextCleaner
from evalsummary.config.settings import Settings
from evalsummary.logging.logger import Log
from evalsummary.pdf.base import BaseExtractionBackend
from evalsummary.pdf.exceptions import (
    ExtractionExhaustedError,
    InvalidPdfFormatError,
    PdfExtractionError,
)
from evalsummary.pdf.factory import ExtractionBackendFactory
from evalsummary.pdf.models import (
    ExtractionAttempt,
    ExtractionResult,
    SourceDocument,
)
from evalsummary.pdf.raw_scan import scan_diagnostics

ProgressCallback = Callable[[int], None]


def _ignore_progress(_: int) -> None:
    return None


class ExtractionPipeline:
    """Tries backends in priority order and keeps the first usable result.

    A backend result is usable when its trimmed length is strictly greater
    than ``min_text_length`` and something survives cleaning. Backends run
    one after another; once one is accepted the rest are never invoked.
    """

    def __init__(
        self,
        backends: Sequence[BaseExtractionBackend],
        cleaner: TextCleaner,
        *,
        min_text_length: int = 100,
    ) -> None:
        if not backends:
            raise ValueError("ExtractionPipeline requires at least one backend")
        self._backends = list(backends)
        self._cleaner = cleaner
        self._min_text_length = min_text_length

    @property
    def backend_ids(self) -> list[str]:
        return [backend.backend_id for backend in self._backends]

    def run(
        self,
        document: SourceDocument,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionResult:
        """Extract and clean text from a PDF document.

        Raises:
            InvalidPdfFormatError: if the bytes are empty or lack ``%PDF``.
            ExtractionExhaustedError: if no backend clears the threshold.
        """
        report = on_progress or _ignore_progress
        if not document.has_pdf_signature:
            raise InvalidPdfFormatError(
                f"'{document.original_filename or 'upload'}' is not a PDF file"
            )

        attempts: list[ExtractionAttempt] = []
        total = len(self._backends)
        for index, backend in enumerate(self._backends):
            report(index * 90 // total)
            attempt, raw_text, cleaned_text = self._attempt(backend, document.content)
            attempts.append(attempt)
            if attempt.succeeded:
                report(100)
                return ExtractionResult(
                    raw_text=raw_text,
                    cleaned_text=cleaned_text,
                    winning_backend_id=backend.backend_id,
                    attempts=tuple(attempts),
                )

        diagnostics = scan_diagnostics(document.content)
        Log.error(
            "All extraction backends failed",
            attempts=len(attempts),
            has_stream=diagnostics.has_stream,
            has_text_objects=diagnostics.has_text_objects,
            has_show_text=diagnostics.has_show_text,
            parenthesis_count=diagnostics.parenthesis_count,
        )
        raise ExtractionExhaustedError(tuple(attempts), diagnostics)

    def _attempt(
        self,
        backend: BaseExtractionBackend,
        pdf_bytes: bytes,
    ) -> tuple[ExtractionAttempt, str, str]:
        backend_id = backend.backend_id
        Log.debug("Extraction backend started", backend=backend_id)
        try:
            raw_text = backend.extract(pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning("Extraction backend failed", backend=backend_id, reason=str(exc))
            return ExtractionAttempt(backend_id, False, 0, str(exc)), "", ""
        except Exception as exc:
            reason = f"unexpected {type(exc).__name__}: {exc}"
            Log.warning("Extraction backend crashed", backend=backend_id, reason=reason)
            return ExtractionAttempt(backend_id, False, 0, reason), "", ""

        length = len(raw_text.strip())
        if length <= self._min_text_length:
            reason = (
                f"extracted {length} chars, need more than {self._min_text_length}"
            )
            Log.warning("Extraction backend rejected", backend=backend_id, reason=reason)
            return ExtractionAttempt(backend_id, False, length, reason), raw_text, ""

        cleaned_text = self._cleaner.clean(raw_text)
        if not cleaned_text:
            reason = "no usable text left after cleaning"
            Log.warning("Extraction backend rejected", backend=backend_id, reason=reason)
            return ExtractionAttempt(backend_id, False, length, reason), raw_text, ""

        Log.info(
            "Extraction backend accepted",
            backend=backend_id,
            raw_length=length,
            cleaned_length=len(cleaned_text),
        )
        return ExtractionAttempt(backend_id, True, length), raw_text, cleaned_text


def build_pipeline(settings: Settings, cleaner: TextCleaner | None = None) -> ExtractionPipeline:
    """Build the extraction pipeline configured in settings."""
    return ExtractionPipeline(
        ExtractionBackendFactory.create_chain(settings),
        cleaner or TextCleaner.from_settings(settings),
        min_text_length=settings.pdf_min_text_length,
    )
