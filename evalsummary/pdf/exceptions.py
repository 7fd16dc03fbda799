from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evalsummary.pdf.models import ExtractionAttempt, ExtractionDiagnostics


class PdfExtractionError(Exception):
    """Raised by an extraction backend when it cannot produce text."""


class InvalidPdfFormatError(PdfExtractionError):
    """Raised when the input is empty or lacks the PDF file signature."""


class ExtractionExhaustedError(PdfExtractionError):
    """Raised when no backend produced text above the acceptance threshold."""

    def __init__(
        self,
        attempts: tuple[ExtractionAttempt, ...],
        diagnostics: ExtractionDiagnostics,
    ) -> None:
        self.attempts = attempts
        self.diagnostics = diagnostics
        super().__init__(
            "Could not extract readable text from the PDF. It may be a scanned "
            "document, encrypted, or use an unsupported text encoding "
            f"(likely cause: {diagnostics.likely_cause})."
        )
