"""Keeps free-text comment sections of an evaluation report.

Evaluation exports interleave rating tables with the students' written
answers. Section headers such as "What aspects of this course..." or
"Additional comments" open a section, a rating-table row closes it, and
only prose lines inside an open section are retained.
"""

import re
from typing import ClassVar

from evalsummary.logging.logger import Log

_NUMERIC_TOKEN_RE = re.compile(r"^\(?[-+]?\d+(?:[.,]\d+)?%?\)?$")
_LETTER_RE = re.compile(r"[A-Za-z]")


class CommentSectionFilter:
    """Line-level filter selecting the prose answers of comment sections."""

    HEADER_PHRASES: ClassVar[tuple[str, ...]] = ("what aspects",)
    SHORT_HEADER_KEYWORD: ClassVar[str] = "comment"
    SHORT_HEADER_MAX_WORDS: ClassVar[int] = 6
    MIN_PROSE_WORDS: ClassVar[int] = 5
    MIN_RATING_NUMBERS: ClassVar[int] = 3

    def filter(self, lines: list[str]) -> list[str]:
        """Return header and prose lines of every comment section.

        If the text has no recognizable header the lines are returned
        unchanged, so layouts this heuristic does not know are not emptied.
        """
        if not any(self.is_header(line) for line in lines):
            Log.debug("No comment section headers found, keeping all lines")
            return lines

        kept: list[str] = []
        collecting = False
        for line in lines:
            if self.is_header(line):
                collecting = True
                kept.append(line)
            elif self.is_rating_row(line):
                collecting = False
            elif collecting and self.is_prose(line):
                kept.append(line)
        Log.debug(f"Comment section filter kept {len(kept)} of {len(lines)} lines")
        return kept

    def is_header(self, line: str) -> bool:
        lowered = line.lower()
        if any(phrase in lowered for phrase in self.HEADER_PHRASES):
            return True
        words = line.split()
        return (
            0 < len(words) <= self.SHORT_HEADER_MAX_WORDS
            and self.SHORT_HEADER_KEYWORD in lowered
        )

    def is_rating_row(self, line: str) -> bool:
        words = line.split()
        numbers = sum(1 for word in words if _NUMERIC_TOKEN_RE.match(word))
        return numbers >= self.MIN_RATING_NUMBERS and numbers * 2 >= len(words)

    def is_prose(self, line: str) -> bool:
        if not _LETTER_RE.search(line):
            return False
        if len(line.split(" ")) < self.MIN_PROSE_WORDS:
            return False
        return not line.isupper()
