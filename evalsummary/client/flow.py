"""Screen flow of the analysis client as an explicit state machine.

Every move goes through ``TRANSITIONS``; a pair that is not in the table is
illegal. Guards on top of the table enforce the data each step needs.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from evalsummary.pdf.models import CompressionInfo


class Step(str, Enum):
    API_KEY = "api-key"
    UPLOAD = "upload"
    CONFIRM = "confirm"
    PROCESSING = "processing"
    RESULTS = "results"


class Action(str, Enum):
    SUBMIT_KEY = "submit-key"
    SELECT_FILE = "select-file"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    COMPLETE = "complete"
    FAIL = "fail"
    ANALYZE_ANOTHER = "analyze-another"
    CHANGE_KEY = "change-key"


TRANSITIONS: dict[tuple[Step, Action], Step] = {
    (Step.API_KEY, Action.SUBMIT_KEY): Step.UPLOAD,
    (Step.UPLOAD, Action.SELECT_FILE): Step.CONFIRM,
    (Step.CONFIRM, Action.CONFIRM): Step.PROCESSING,
    (Step.CONFIRM, Action.CANCEL): Step.UPLOAD,
    (Step.PROCESSING, Action.COMPLETE): Step.RESULTS,
    (Step.PROCESSING, Action.FAIL): Step.UPLOAD,
    (Step.RESULTS, Action.ANALYZE_ANOTHER): Step.UPLOAD,
    **{(step, Action.CHANGE_KEY): Step.API_KEY for step in Step},
}


class FlowError(Exception):
    """Base exception for client flow errors."""


class IllegalTransitionError(FlowError):
    """Raised when an action is not allowed in the current step."""

    def __init__(self, step: Step, action: Action, reason: str = "") -> None:
        self.step = step
        self.action = action
        message = f"Cannot {action.value} while in step '{step.value}'"
        super().__init__(f"{message}: {reason}" if reason else message)


@dataclass(frozen=True)
class SelectedFile:
    name: str
    content: bytes
    compression_info: CompressionInfo | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        return Path(self.name).suffix.lower() == ".pdf"


@dataclass
class UploadSession:
    api_key: str = ""
    api_key_validated: bool = False
    selected_file: SelectedFile | None = None
    compression_info: CompressionInfo | None = None
    current_step: Step = Step.API_KEY
    result: str | None = None
    error: str | None = None


class UploadFlow:
    def __init__(self, session: UploadSession | None = None) -> None:
        self.session = session or UploadSession()

    @property
    def step(self) -> Step:
        return self.session.current_step

    def can(self, action: Action) -> bool:
        return (self.step, action) in TRANSITIONS

    def submit_key(self, api_key: str, validated: bool) -> None:
        if not validated:
            self._guard_failed(Action.SUBMIT_KEY, "API key has not been validated")
        self._move(Action.SUBMIT_KEY)
        self.session.api_key = api_key
        self.session.api_key_validated = True
        self.session.error = None

    def select_file(self, selected: SelectedFile) -> None:
        if not selected.is_pdf:
            self._guard_failed(Action.SELECT_FILE, "Please select a PDF file")
        self._move(Action.SELECT_FILE)
        self.session.selected_file = selected
        self.session.compression_info = selected.compression_info
        self.session.error = None

    def confirm(self) -> None:
        if self.session.selected_file is None:
            self._guard_failed(Action.CONFIRM, "no file selected")
        self._move(Action.CONFIRM)

    def cancel(self) -> None:
        self._move(Action.CANCEL)
        self._clear_file()

    def complete(self, result: str) -> None:
        self._move(Action.COMPLETE)
        self.session.result = result

    def fail(self, error: str) -> None:
        self._move(Action.FAIL)
        self.session.error = error
        self._clear_file()

    def analyze_another(self) -> None:
        self._move(Action.ANALYZE_ANOTHER)
        self.session.result = None
        self.session.error = None
        self._clear_file()

    def change_key(self) -> None:
        self._move(Action.CHANGE_KEY)
        self.session = UploadSession()

    def _move(self, action: Action) -> None:
        target = TRANSITIONS.get((self.step, action))
        if target is None:
            raise IllegalTransitionError(self.step, action)
        self.session.current_step = target

    def _guard_failed(self, action: Action, reason: str) -> None:
        raise IllegalTransitionError(self.step, action, reason)

    def _clear_file(self) -> None:
        self.session.selected_file = None
        self.session.compression_info = None
