from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from evalsummary.pdf.models import ExtractionResult, SourceDocument
from evalsummary.summarization.models import SummaryResult


@dataclass(slots=True)
class PipelineContext:
    credential: str
    text: str = ""
    filename: str = ""
    upload_path: Path | None = None
    upload_name: str = ""
    mime_type: str = ""
    document: SourceDocument | None = None
    extraction_result: ExtractionResult | None = None
    summary: SummaryResult | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
