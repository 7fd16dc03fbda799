from abc import ABC, abstractmethod
from typing import ClassVar


class BaseExtractionBackend(ABC):
    """Contract for all PDF text extraction backends."""

    backend_id: ClassVar[str]

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text, possibly empty. Returning without raising does not
            mean the text is usable; the pipeline applies its own threshold.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
