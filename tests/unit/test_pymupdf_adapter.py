import pytest

from evalsummary.pdf.exceptions import PdfExtractionError
from evalsummary.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_bytes)
        assert "Great course, learned a lot." in result

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(multi_page_pdf_bytes)
        assert "Page one content" in result
        assert "Page two content" in result

    def test_extract_empty_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        assert PyMuPdfAdapter().extract(empty_pdf_bytes) == ""

    def test_extract_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError, match="pymupdf"):
            PyMuPdfAdapter().extract(b"not a pdf")

    def test_normalize_collapses_horizontal_whitespace(self) -> None:
        text = "  Great \t course  indeed  \n\n   \nNext   line "
        assert PyMuPdfAdapter._normalize(text) == "Great course indeed\nNext line"
