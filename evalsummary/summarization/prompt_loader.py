from pathlib import Path

from evalsummary.summarization.exceptions import SummarizationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"
SUMMARY_PROMPT_FILE = "summary_prompt.txt"
DOCUMENT_PROMPT_FILE = "document_prompt.txt"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the text-mode instructions, which end in a ``{comments}`` slot.

    Raises:
        SummarizationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / SUMMARY_PROMPT_FILE, "prompt template")


def load_document_prompt(path: Path | None = None) -> str:
    """Load the instructions sent alongside a whole PDF in direct mode."""
    return _read(path or _DEFAULT_PROMPT_DIR / DOCUMENT_PROMPT_FILE, "document prompt")


def _read(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SummarizationError(f"Failed to load {label}: {exc}") from exc
