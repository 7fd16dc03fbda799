import io

import pdfplumber

from evalsummary.logging.logger import Log
from evalsummary.pdf.base import BaseExtractionBackend
from evalsummary.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BaseExtractionBackend):
    """Extracts text from the whole document using pdfplumber defaults."""

    backend_id = "pdfplumber"

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc


class PdfPlumberPerPageAdapter(BaseExtractionBackend):
    """Parses pages one at a time, skipping the ones that fail.

    Recovers documents where a single damaged page makes whole-document
    extraction raise.
    """

    backend_id = "pdfplumber_pages"

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_count = len(pdf.pages)
                pages = [self._extract_page(pdf, index) for index in range(page_count)]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not open document: {exc}") from exc

        parsed = [text for text in pages if text is not None]
        if page_count and not parsed:
            raise PdfExtractionError(f"all {page_count} pages failed to parse")
        return "\n".join(parsed).strip()

    @staticmethod
    def _extract_page(pdf: pdfplumber.PDF, index: int) -> str | None:
        try:
            return pdf.pages[index].extract_text() or ""
        except Exception as exc:
            Log.warning(f"Skipping page {index + 1}: {exc}", page=index + 1)
            return None
