"""Input Ingestion: turn an uploaded CV file (text or PDF) into raw text."""

from __future__ import annotations

import logging
from pathlib import Path

from elevate_cv.errors import ExtractionError

logger = logging.getLogger(__name__)

PDF_TYPES = {"application/pdf"}
TEXT_TYPES = {"text/plain", "text/markdown"}
TEXT_SUFFIXES = {".txt", ".md"}


def ingest_cv_bytes(data: bytes, filename: str = "", content_type: str | None = None) -> str:
    """Return the CV text contained in an uploaded file.

    The content type wins when given; otherwise the file suffix decides.

    Raises:
        ExtractionError: unsupported type, corrupt PDF, or undecodable text.
    """
    suffix = Path(filename).suffix.lower()
    if content_type in PDF_TYPES or (content_type is None and suffix == ".pdf"):
        return _extract_pdf(data)
    if content_type in TEXT_TYPES or (content_type is None and suffix in TEXT_SUFFIXES):
        return _decode_text(data)
    # Browsers often send a generic type, fall back to the suffix.
    if suffix == ".pdf":
        return _extract_pdf(data)
    if suffix in TEXT_SUFFIXES:
        return _decode_text(data)
    raise ExtractionError(f"Unsupported file format: {suffix or content_type or 'unknown'}")


def parse_cv_file(file_path: str | Path) -> str:
    """Parse a CV file from disk (PDF, TXT, MD)."""
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ExtractionError(f"Cannot read {path}: {e}") from e
    return ingest_cv_bytes(data, path.name)


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"File is not valid UTF-8 text: {e}") from e


def _extract_pdf(data: bytes) -> str:
    import fitz  # pymupdf

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        logger.warning("PDF open failed: %s", e)
        raise ExtractionError(f"Could not open PDF: {e}") from e
    try:
        # get_text() ends every line, the last one included, with "\n"
        pages = [page.get_text().removesuffix("\n") for page in doc]
    except Exception as e:
        logger.warning("PDF text extraction failed: %s", e)
        raise ExtractionError(f"Could not extract PDF text: {e}") from e
    finally:
        doc.close()
    return "\n".join(pages).strip()
