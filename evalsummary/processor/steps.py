from pathlib import Path

from evalsummary.cleaning.cleaner import TextCleaner
from evalsummary.credentials.validator import CredentialValidator
from evalsummary.logging.logger import Log
from evalsummary.pdf.models import SourceDocument
from evalsummary.pdf.pipeline import ExtractionPipeline
from evalsummary.processor.exceptions import (
    EmptyTextError,
    InvalidUploadError,
    PayloadTooLargeError,
)
from evalsummary.processor.pipeline import PipelineContext, PipelineStep
from evalsummary.processor.upload_staging import UploadStager
from evalsummary.summarization.base import BaseSummarizer

PDF_MIME_TYPE = "application/pdf"


class ValidateCredentialStep(PipelineStep):
    def __init__(self, validator: CredentialValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        self._validator.ensure_well_formed(context.credential)
        return context


class LoadUploadStep(PipelineStep):
    def __init__(self, stager: UploadStager) -> None:
        self._stager = stager

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload_path is None:
            raise InvalidUploadError("No file uploaded")
        content = self._stager.read(context.upload_path)
        context.document = SourceDocument(
            content=content,
            original_filename=context.upload_name,
            mime_type=context.mime_type or PDF_MIME_TYPE,
        )
        Log.info(f"Loaded {len(content)} bytes for upload '{context.upload_name}'")
        return context


class ValidateUploadStep(PipelineStep):
    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        if document is None:
            raise InvalidUploadError("No file uploaded")
        is_pdf_name = Path(document.original_filename).suffix.lower() == ".pdf"
        if not is_pdf_name and document.mime_type != PDF_MIME_TYPE:
            raise InvalidUploadError("Only PDF files are allowed")
        if document.size_bytes == 0:
            raise InvalidUploadError("Uploaded file is empty")
        if document.size_bytes > self._max_upload_bytes:
            raise PayloadTooLargeError.for_limit(self._max_upload_bytes)
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, extraction_pipeline: ExtractionPipeline) -> None:
        self._extraction_pipeline = extraction_pipeline

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before extraction")
        result = self._extraction_pipeline.run(context.document)
        context.extraction_result = result
        context.text = result.cleaned_text
        context.filename = context.filename or context.upload_name
        Log.info(
            f"Extracted {len(result.cleaned_text)} chars from '{context.upload_name}' "
            f"using {result.winning_backend_id}"
        )
        return context


class CleanTextStep(PipelineStep):
    def __init__(self, cleaner: TextCleaner) -> None:
        self._cleaner = cleaner

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.text.strip():
            raise EmptyTextError("No text provided")
        cleaned = self._cleaner.clean(context.text)
        if not cleaned:
            raise EmptyTextError("No readable text left after cleaning")
        Log.info(f"Cleaned text for '{context.filename}': {len(context.text)} -> {len(cleaned)} chars")
        context.text = cleaned
        return context


class SummarizeTextStep(PipelineStep):
    def __init__(self, summarizer: BaseSummarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.text:
            raise EmptyTextError("No text to summarize")
        context.summary = self._summarizer.summarize(context.text, context.credential)
        return context


class SummarizeDocumentStep(PipelineStep):
    def __init__(self, summarizer: BaseSummarizer, recommended_bytes: int) -> None:
        self._summarizer = summarizer
        self._recommended_bytes = recommended_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before summarization")
        size = context.document.size_bytes
        if size > self._recommended_bytes:
            Log.warning(
                f"Large PDF ({size / 1024 / 1024:.2f}MB) may exceed provider limits",
                filename=context.upload_name,
            )
        context.summary = self._summarizer.summarize_document(
            context.document.content, context.credential
        )
        return context
