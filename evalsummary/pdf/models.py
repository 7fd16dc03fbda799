from dataclasses import dataclass

PDF_SIGNATURE = b"%PDF"


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded PDF held in memory for the duration of one request."""

    content: bytes
    original_filename: str = ""
    mime_type: str = "application/pdf"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def has_pdf_signature(self) -> bool:
        return self.content.startswith(PDF_SIGNATURE)


@dataclass(frozen=True)
class ExtractionAttempt:
    """Outcome of running one backend over a document."""

    backend_id: str
    succeeded: bool
    extracted_length: int = 0
    error_message: str | None = None


@dataclass(frozen=True)
class ExtractionDiagnostics:
    """Cheap byte-level signals gathered when every backend has failed."""

    has_stream: bool = False
    has_text_objects: bool = False
    has_show_text: bool = False
    parenthesis_count: int = 0
    is_encrypted: bool = False

    @property
    def likely_cause(self) -> str:
        if self.is_encrypted:
            return "encrypted PDF"
        if not self.has_stream:
            return "no content streams, the file may be empty or corrupt"
        if not self.has_text_objects:
            return "no text objects, the document is probably scanned images"
        if not self.has_show_text or self.parenthesis_count == 0:
            return "text is stored in an unsupported or compressed encoding"
        return "text could not be decoded into readable characters"


@dataclass(frozen=True)
class ExtractionResult:
    """Final output of the extraction pipeline."""

    raw_text: str
    cleaned_text: str
    winning_backend_id: str
    attempts: tuple[ExtractionAttempt, ...] = ()


@dataclass(frozen=True)
class CompressionInfo:
    """Sizes before and after a compression pass, ratio in percent."""

    original_size: int
    compressed_size: int

    @property
    def ratio(self) -> float:
        if self.original_size == 0:
            return 100.0
        return self.compressed_size / self.original_size * 100
