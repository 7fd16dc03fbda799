from abc import ABC, abstractmethod

from evalsummary.summarization.models import SummaryResult


class BaseSummarizer(ABC):
    """Contract for course evaluation summarizers."""

    @abstractmethod
    def summarize(self, text: str, credential: str) -> SummaryResult:
        """Summarize extracted evaluation comments.

        Args:
            text: Cleaned text of the evaluation report.
            credential: The caller's provider API key.

        Raises:
            SummarizationError: on any failure.
        """

    @abstractmethod
    def summarize_document(self, pdf_bytes: bytes, credential: str) -> SummaryResult:
        """Summarize a PDF sent to the provider as-is, without local extraction."""

    @abstractmethod
    def probe(self, credential: str) -> bool:
        """Return True if the provider accepts *credential* for a tiny request."""
