"""Turns raw extracted PDF text into a compact, LLM-ready string.

Processing flow:
1. Normalize line endings to ``\\n``.
2. Drop NUL and replacement characters, fold Latin letters and typographic
   punctuation to ASCII via ICU, replace anything else non-printable by a space.
3. Collapse horizontal whitespace per line.
4. Strip structural noise (page markers and footers, document IDs, page
   numbers, table borders, dot leaders, letterhead) until nothing changes.
5. Optionally keep only comment sections.
6. Collapse blank lines.
7. Cap the length, appending a truncation marker.

Output contains only printable ASCII, newlines and tabs, never three newlines
in a row and never two spaces in a row. Cleaning is idempotent.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from typing import TYPE_CHECKING, ClassVar

import icu  # type: ignore[import-untyped]

from evalsummary.cleaning.comment_sections import CommentSectionFilter
from evalsummary.logging.logger import Log

if TYPE_CHECKING:
    from evalsummary.config.settings import Settings

TRUNCATION_MARKER = "[Text truncated due to length]"
TRUNCATION_SEPARATOR = "\n\n"

_DISALLOWED_CHAR_RE = re.compile(r"[^\x20-\x7E\n\t]")
_SPACE_RUN_RE = re.compile(r" {2,}")
_TAB_RUN_RE = re.compile(r"\t+")

_PAGE_MARKER_LINE_RE = re.compile(r"^[-=\s]*page\s+\d+[-=\s]*$", re.IGNORECASE)
_PAGE_NUMBER_LINE_RE = re.compile(r"^\d{1,4}$")
_BORDER_LINE_RE = re.compile(r"^[\s|+\-=_.:]+$")

_TOKEN_NOISE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bpage\s+\d+\s+of\s+\d+\b", re.IGNORECASE),
    re.compile(r"(?<![\w-])\d[\d-]{8,}\d(?![\w-])"),
    re.compile(r"[|+\-=_]{3,}"),
    re.compile(r"\.{4,}"),
    re.compile(r"(?:\. ){3,}\.?"),
)


class TextCleaner:
    """Normalizes and de-noises extracted evaluation text."""

    _ICU_TRANSFORM: ClassVar[str] = "Latin-ASCII"

    def __init__(
        self,
        *,
        max_length: int = 100_000,
        comment_sections: bool = False,
        boilerplate_patterns: Iterable[str] = (),
    ) -> None:
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self._max_length = max_length
        self._comment_filter = CommentSectionFilter() if comment_sections else None
        self._boilerplate = [re.compile(p, re.IGNORECASE) for p in boilerplate_patterns]
        self._transliterator: icu.Transliterator = icu.Transliterator.createInstance(
            self._ICU_TRANSFORM
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> TextCleaner:
        return cls(
            max_length=settings.cleaner_max_length,
            comment_sections=settings.cleaner_comment_sections,
            boilerplate_patterns=settings.cleaner_boilerplate_patterns,
        )

    @property
    def max_length(self) -> int:
        return self._max_length

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def clean(self, text: str) -> str:
        """Return the cleaned form of *text*; empty input gives ``""``."""
        if not text:
            return ""
        if self._is_sealed(text):
            return text

        normalized = self._normalize_characters(self._normalize_line_endings(text))
        lines = self._strip_noise(normalized.split("\n"))
        if self._comment_filter is not None:
            lines = self._comment_filter.filter(lines)
        cleaned = self._join_lines(lines)

        result = self._truncate(cleaned)
        Log.debug(
            "Text cleaned",
            original_length=len(text),
            cleaned_length=len(result),
            truncated=len(cleaned) > self._max_length,
        )
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize_line_endings(text: str) -> str:
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def _normalize_characters(self, text: str) -> str:
        text = text.replace("\x00", "").replace("\ufffd", "")
        text = unicodedata.normalize("NFC", text)
        if not text.isascii():
            text = self._transliterator.transliterate(text)
        # Transliteration may reintroduce CR from exotic line separators.
        text = self._normalize_line_endings(text)
        return _DISALLOWED_CHAR_RE.sub(" ", text)

    @staticmethod
    def _normalize_line(line: str) -> str:
        line = _SPACE_RUN_RE.sub(" ", line)
        line = _TAB_RUN_RE.sub("\t", line)
        return line.strip(" \t")

    def _strip_noise(self, lines: list[str]) -> list[str]:
        """Apply the noise rules line by line until they stop changing anything."""
        current: list[str | None] = [self._normalize_line(line) for line in lines]
        while True:
            stripped = [self._strip_line_noise(line) for line in current]
            if stripped == current:
                return [line for line in current if line is not None]
            current = stripped

    def _strip_line_noise(self, line: str | None) -> str | None:
        """Return the line without noise tokens, or None when it is all noise.

        Blank lines are kept as ``""`` to preserve paragraph breaks.
        """
        if line is None or line == "":
            return line
        if self._is_noise_line(line):
            return None
        for pattern in _TOKEN_NOISE_RES:
            line = pattern.sub(" ", line)
        line = self._normalize_line(line)
        return line or None

    def _is_noise_line(self, line: str) -> bool:
        if _PAGE_MARKER_LINE_RE.match(line) or _PAGE_NUMBER_LINE_RE.match(line):
            return True
        if _BORDER_LINE_RE.match(line):
            return True
        return any(pattern.search(line) for pattern in self._boilerplate)

    @staticmethod
    def _join_lines(lines: list[str]) -> str:
        collapsed: list[str] = []
        for line in lines:
            if line == "" and (not collapsed or collapsed[-1] == ""):
                continue
            collapsed.append(line)
        while collapsed and collapsed[-1] == "":
            collapsed.pop()
        return "\n".join(collapsed)

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_length:
            return text
        body = text[: self._max_length]
        Log.info(f"Text truncated to {self._max_length} characters")
        return body + self._separator_for(body) + TRUNCATION_MARKER

    # ------------------------------------------------------------------
    # Truncation seal
    # ------------------------------------------------------------------

    @staticmethod
    def _separator_for(body: str) -> str:
        trailing = len(body) - len(body.rstrip("\n"))
        return TRUNCATION_SEPARATOR[: max(0, len(TRUNCATION_SEPARATOR) - trailing)]

    def _is_sealed(self, text: str) -> bool:
        """True when *text* is exactly what ``_truncate`` produces.

        A previously truncated text cannot be re-cleaned safely because the
        cut may have split a line or a token, so it is passed through as long
        as it still satisfies the output guarantees.
        """
        if not text.endswith(TRUNCATION_MARKER):
            return False
        rest = text[: -len(TRUNCATION_MARKER)]
        if len(rest) < self._max_length:
            return False
        body = rest[: self._max_length]
        if body + self._separator_for(body) != rest:
            return False
        return (
            _DISALLOWED_CHAR_RE.search(text) is None
            and "\n\n\n" not in text
            and "  " not in text
        )
