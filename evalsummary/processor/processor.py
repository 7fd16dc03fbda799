from collections.abc import Sequence

from evalsummary.cleaning.cleaner import TextCleaner
from evalsummary.config.settings import Settings
from evalsummary.credentials.validator import CredentialValidator
from evalsummary.logging.logger import Log
from evalsummary.pdf.pipeline import ExtractionPipeline, build_pipeline
from evalsummary.processor.pipeline import PipelineContext, PipelineStep
from evalsummary.processor.steps import (
    CleanTextStep,
    ExtractTextStep,
    LoadUploadStep,
    SummarizeDocumentStep,
    SummarizeTextStep,
    ValidateCredentialStep,
    ValidateUploadStep,
)
from evalsummary.processor.upload_staging import UploadStager
from evalsummary.summarization.base import BaseSummarizer


class Processor:
    """Runs a request through an ordered list of pipeline steps."""

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(self, context: PipelineContext) -> PipelineContext:
        for step in self._steps:
            step_name = type(step).__name__
            Log.debug(f"Running {step_name}")
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"{step_name} failed: {exc}")
                raise
        return context


def build_text_processor(
    settings: Settings,
    summarizer: BaseSummarizer,
    cleaner: TextCleaner | None = None,
) -> Processor:
    """Processor for text already extracted by the client."""
    return Processor(
        steps=[
            ValidateCredentialStep(CredentialValidator.from_settings(settings, summarizer)),
            CleanTextStep(cleaner or TextCleaner.from_settings(settings)),
            SummarizeTextStep(summarizer),
        ]
    )


def build_upload_processor(
    settings: Settings,
    summarizer: BaseSummarizer,
    stager: UploadStager | None = None,
    extraction_pipeline: ExtractionPipeline | None = None,
) -> Processor:
    """Processor that extracts text from an uploaded PDF on the server."""
    return Processor(
        steps=[
            ValidateCredentialStep(CredentialValidator.from_settings(settings, summarizer)),
            LoadUploadStep(stager or UploadStager(settings.upload_dir)),
            ValidateUploadStep(settings.max_upload_bytes),
            ExtractTextStep(extraction_pipeline or build_pipeline(settings)),
            SummarizeTextStep(summarizer),
        ]
    )


def build_direct_processor(
    settings: Settings,
    summarizer: BaseSummarizer,
    stager: UploadStager | None = None,
) -> Processor:
    """Processor that hands the PDF itself to the AI provider."""
    return Processor(
        steps=[
            ValidateCredentialStep(CredentialValidator.from_settings(settings, summarizer)),
            LoadUploadStep(stager or UploadStager(settings.upload_dir)),
            ValidateUploadStep(settings.max_upload_bytes),
            SummarizeDocumentStep(summarizer, settings.direct_recommended_bytes),
        ]
    )
