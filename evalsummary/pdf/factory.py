from typing import ClassVar

from evalsummary.config.settings import Settings
from evalsummary.pdf.base import BaseExtractionBackend
from evalsummary.pdf.pdfplumber_adapter import PdfPlumberAdapter, PdfPlumberPerPageAdapter
from evalsummary.pdf.pymupdf_adapter import PyMuPdfAdapter
from evalsummary.pdf.raw_scan import LiteralScanAdapter, TextOperatorScanAdapter


class ExtractionBackendFactory:
    """Creates the ordered backend chain named in settings."""

    ADAPTERS: ClassVar[dict[str, type[BaseExtractionBackend]]] = {
        PdfPlumberAdapter.backend_id: PdfPlumberAdapter,
        PyMuPdfAdapter.backend_id: PyMuPdfAdapter,
        PdfPlumberPerPageAdapter.backend_id: PdfPlumberPerPageAdapter,
        LiteralScanAdapter.backend_id: LiteralScanAdapter,
        TextOperatorScanAdapter.backend_id: TextOperatorScanAdapter,
    }

    @classmethod
    def create(cls, backend_id: str) -> BaseExtractionBackend:
        engine = backend_id.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF backend '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_chain(cls, settings: Settings) -> list[BaseExtractionBackend]:
        if not settings.pdf_backends:
            raise ValueError("pdf_backends must name at least one backend")
        return [cls.create(backend_id) for backend_id in settings.pdf_backends]
