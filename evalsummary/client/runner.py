"""Drives one analysis from the command line against the summarizer API."""

import sys
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import TextIO

from evalsummary.client.api_client import ApiClient, ApiClientError, ApiTimeoutError
from evalsummary.client.flow import IllegalTransitionError, SelectedFile, UploadFlow
from evalsummary.client.progress import ProgressAnimator
from evalsummary.logging.logger import Log
from evalsummary.pdf.compression import compress_pdf
from evalsummary.pdf.exceptions import PdfExtractionError
from evalsummary.pdf.models import SourceDocument
from evalsummary.pdf.pipeline import ExtractionPipeline

MODES = ("text", "upload", "direct")
RESULT_FILENAME_TEMPLATE = "course-evaluation-summary-{day}.txt"


def result_filename(day: date) -> str:
    return RESULT_FILENAME_TEMPLATE.format(day=day.isoformat())


class AnalysisRunner:
    """Walks the upload flow: key check, file selection, confirm, process, save."""

    def __init__(
        self,
        api_client: ApiClient,
        extraction_pipeline: ExtractionPipeline,
        *,
        compression_threshold_bytes: int = 5 * 1024 * 1024,
        flow: UploadFlow | None = None,
        animator: ProgressAnimator | None = None,
        confirm: Callable[[str], bool] | None = None,
        out: TextIO | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._api = api_client
        self._pipeline = extraction_pipeline
        self._compression_threshold = compression_threshold_bytes
        self.flow = flow or UploadFlow()
        self._animator = animator or ProgressAnimator()
        self._confirm = confirm or _ask_yes_no
        self._out = out or sys.stdout
        self._today = today

    def run(
        self,
        pdf_path: Path,
        api_key: str,
        *,
        mode: str = "text",
        assume_yes: bool = False,
        output_path: Path | None = None,
    ) -> int:
        """Return a process exit code: 0 on success, 1 on any failure."""
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'. Choose from: {list(MODES)}")

        if not self._check_key(api_key):
            return 1
        selected = self._select(pdf_path)
        if selected is None:
            return 1

        question = f"Process '{selected.name}' ({selected.size_bytes / 1024 / 1024:.2f} MB)?"
        if not assume_yes and not self._confirm(question):
            self.flow.cancel()
            self._print("Cancelled.")
            return 1
        self.flow.confirm()

        try:
            with self._animator.running(self._report_progress):
                result = self._process(selected, mode)
        except ApiTimeoutError as exc:
            return self._fail(f"{exc}. The file may be too large or the server is busy.")
        except (ApiClientError, PdfExtractionError) as exc:
            return self._fail(str(exc))

        self._report_progress(self._animator.complete())
        self.flow.complete(result)
        saved_to = self._save(result, output_path)
        self._print("")
        self._print(result)
        self._print("")
        self._print(f"Summary saved to {saved_to}")
        return 0

    def _check_key(self, api_key: str) -> bool:
        self._print("Checking API key...")
        try:
            valid = self._api.test_key(api_key)
        except ApiClientError as exc:
            self._print(f"Error: {exc}")
            return False
        try:
            self.flow.submit_key(api_key, valid)
        except IllegalTransitionError:
            self._print("Error: Invalid API key")
            return False
        self._print("API key is valid.")
        return True

    def _select(self, pdf_path: Path) -> SelectedFile | None:
        try:
            content = pdf_path.read_bytes()
        except OSError as exc:
            self._print(f"Error: cannot read {pdf_path}: {exc}")
            return None

        compression_info = None
        if len(content) > self._compression_threshold:
            self._print("Large file detected, compressing...")
            content, compression_info = compress_pdf(content)
            self._print(
                f"Compressed to {compression_info.compressed_size / 1024 / 1024:.2f} MB "
                f"({compression_info.ratio:.1f}% of original)"
            )

        selected = SelectedFile(pdf_path.name, content, compression_info)
        try:
            self.flow.select_file(selected)
        except IllegalTransitionError:
            self._print("Error: Please select a PDF file")
            return None
        return selected

    def _process(self, selected: SelectedFile, mode: str) -> str:
        api_key = self.flow.session.api_key
        Log.info(f"Processing '{selected.name}' in {mode} mode")
        if mode == "upload":
            return self._api.upload(selected.name, selected.content, api_key)
        if mode == "direct":
            return self._api.process_pdf_direct(selected.name, selected.content, api_key)

        extraction = self._pipeline.run(SourceDocument(selected.content, selected.name))
        self._print(
            f"Extracted {len(extraction.cleaned_text)} characters "
            f"using {extraction.winning_backend_id}"
        )
        return self._api.process_text(extraction.cleaned_text, api_key, selected.name)

    def _fail(self, message: str) -> int:
        self.flow.fail(message)
        self._print(f"Error: {message}")
        return 1

    def _save(self, result: str, output_path: Path | None) -> Path:
        path = output_path or Path.cwd() / result_filename(self._today())
        path.write_text(result, encoding="utf-8")
        return path

    def _report_progress(self, value: int) -> None:
        self._out.write(f"\rProcessing... {value}%")
        if value >= 100:
            self._out.write("\n")
        self._out.flush()

    def _print(self, message: str) -> None:
        print(message, file=self._out)


def _ask_yes_no(question: str) -> bool:
    answer = input(f"{question} [y/N] ")
    return answer.strip().lower() in ("y", "yes")
