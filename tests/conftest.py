import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

EVALUATION_LINES = (
    "What aspects of this course helped your learning?",
    "Great course, learned a lot.",
    "The weekly labs made the theory much easier to follow.",
    "Office hours were always helpful and well organized.",
    "I would like more worked examples during the lectures.",
)


def _render(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page evaluation PDF with more than 100 chars of text."""
    return _render([list(EVALUATION_LINES)])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _render([["Page one content"], ["Page two content"]])


@pytest.fixture()
def short_pdf_bytes() -> bytes:
    """Generate a valid PDF whose text stays below the acceptance threshold."""
    return _render([["Hello PDF World"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _render([[]])


@pytest.fixture()
def operator_only_pdf_bytes() -> bytes:
    """PDF-signed bytes no structural parser can open.

    Show-text operators inside a text object carry the comments, while many
    symbol-heavy literals outside of it make a plain literal scan too noisy.
    """
    junk = b" ".join([b"(x#@$%^&*~<>{}[]|)"] * 40)
    text_object = (
        b"BT\n"
        b"(This course was excellent) Tj\n"
        b"(The instructor explained concepts clearly and answered questions) Tj\n"
        b"(Weekly assignments helped me practice the material) Tj\n"
        b"ET\n"
    )
    return b"%PDF-1.4\n" + junk + b"\n" + text_object + junk + b"\n%%EOF\n"


@pytest.fixture()
def textless_pdf_bytes() -> bytes:
    """The PDF signature followed by zero bytes: nothing any backend can read."""
    return b"%PDF" + b"\x00" * 256
