"""Heuristic text recovery straight from PDF bytes.

These backends do not build a document model. They decode the file as
latin-1 and look for string literals, which is how most PDF producers encode
shown text when streams are not compressed. They are the last resort after
the structural parsers have failed.
"""

import re
from typing import ClassVar

from evalsummary.pdf.base import BaseExtractionBackend
from evalsummary.pdf.exceptions import PdfExtractionError
from evalsummary.pdf.models import ExtractionDiagnostics

_LITERAL = r"\(((?:[^()\\]|\\.)*)\)"
_LITERAL_RE = re.compile(_LITERAL, re.DOTALL)
_TEXT_OBJECT_RE = re.compile(r"\bBT\b(.*?)\bET\b", re.DOTALL)
_SHOW_TEXT_RE = re.compile(_LITERAL + r"\s*Tj", re.DOTALL)
_ESCAPE_RE = re.compile(r"\\([0-7]{1,3}|\r\n|.)", re.DOTALL)
_LETTER_RE = re.compile(r"[A-Za-z]")
_TEXTUAL_CHAR_RE = re.compile(r"[A-Za-z0-9\s.,;:!?'\"()\-]")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "(": "(",
    ")": ")",
    "\\": "\\",
}


def decode_pdf_bytes(pdf_bytes: bytes) -> str:
    """Decode raw PDF bytes one-to-one so byte offsets are preserved."""
    return pdf_bytes.decode("latin-1")


def unescape_literal(literal: str) -> str:
    """Resolve backslash escapes inside a PDF string literal."""

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token[0] in "01234567":
            return chr(int(token, 8) & 0xFF)
        if token in ("\n", "\r", "\r\n"):
            return ""
        return _SIMPLE_ESCAPES.get(token, token)

    return _ESCAPE_RE.sub(_replace, literal)


def scan_diagnostics(pdf_bytes: bytes) -> ExtractionDiagnostics:
    """Collect token counts that hint at why extraction failed."""
    raw = decode_pdf_bytes(pdf_bytes)
    return ExtractionDiagnostics(
        has_stream="stream" in raw,
        has_text_objects=re.search(r"\bBT\b", raw) is not None,
        has_show_text="Tj" in raw,
        parenthesis_count=raw.count("("),
        is_encrypted="/Encrypt" in raw,
    )


class LiteralScanAdapter(BaseExtractionBackend):
    """Collects every parenthesized string literal that looks like words.

    Picks up metadata and font names along with page text, so output made up
    mostly of non-text characters is rejected outright.
    """

    backend_id = "literal_scan"

    MIN_LITERAL_LENGTH: ClassVar[int] = 3
    MIN_TEXTUAL_SHARE: ClassVar[float] = 0.75

    def extract(self, pdf_bytes: bytes) -> str:
        raw = decode_pdf_bytes(pdf_bytes)
        fragments = [
            text
            for text in (unescape_literal(m.group(1)) for m in _LITERAL_RE.finditer(raw))
            if len(text) >= self.MIN_LITERAL_LENGTH and _LETTER_RE.search(text)
        ]
        extracted = " ".join(fragments)
        share = textual_share(extracted)
        if extracted and share < self.MIN_TEXTUAL_SHARE:
            raise PdfExtractionError(
                f"literal scan output is mostly non-text noise ({share:.0%} textual)"
            )
        return extracted.strip()


class TextOperatorScanAdapter(BaseExtractionBackend):
    """Reads only ``(...) Tj`` operands inside ``BT``/``ET`` text objects."""

    backend_id = "text_operator_scan"

    def extract(self, pdf_bytes: bytes) -> str:
        raw = decode_pdf_bytes(pdf_bytes)
        fragments: list[str] = []
        for text_object in _TEXT_OBJECT_RE.finditer(raw):
            for show in _SHOW_TEXT_RE.finditer(text_object.group(1)):
                text = unescape_literal(show.group(1))
                if _LETTER_RE.search(text):
                    fragments.append(text)
        return " ".join(fragments).strip()


def textual_share(text: str) -> float:
    """Fraction of characters that plausibly belong to prose."""
    if not text:
        return 0.0
    return len(_TEXTUAL_CHAR_RE.findall(text)) / len(text)
