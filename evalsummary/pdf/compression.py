import pymupdf

from evalsummary.logging.logger import Log
from evalsummary.pdf.models import CompressionInfo


def compress_pdf(pdf_bytes: bytes) -> tuple[bytes, CompressionInfo]:
    """Rewrite a PDF with unused objects dropped and streams deflated.

    Compression is best effort: when PyMuPDF cannot rewrite the file, or the
    rewrite is not smaller, the original bytes are returned unchanged.
    """
    try:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            compressed = doc.tobytes(garbage=4, deflate=True, deflate_images=True, clean=True)
    except Exception as exc:
        Log.warning(f"PDF compression failed, using original file: {exc}")
        return pdf_bytes, CompressionInfo(len(pdf_bytes), len(pdf_bytes))

    if len(compressed) >= len(pdf_bytes):
        Log.info("Compression did not reduce size, using original file")
        return pdf_bytes, CompressionInfo(len(pdf_bytes), len(pdf_bytes))

    info = CompressionInfo(len(pdf_bytes), len(compressed))
    Log.info(
        f"Compression: {info.original_size / 1024 / 1024:.2f}MB -> "
        f"{info.compressed_size / 1024 / 1024:.2f}MB ({info.ratio:.1f}%)"
    )
    return compressed, info
