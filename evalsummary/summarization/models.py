from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryResult:
    """Summary text returned by the AI provider."""

    text: str
    model: str
    mode: str = "text"
