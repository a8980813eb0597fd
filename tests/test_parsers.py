"""Tests for CV ingestion from uploaded bytes and files."""

from unittest.mock import MagicMock, patch

import fitz
import pytest

from elevate_cv.errors import ExtractionError
from elevate_cv.parsers.cv_parser import ingest_cv_bytes, parse_cv_file


def _pdf_bytes(*pages: str) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class TestIngestPdf:
    def test_pages_joined_with_newline(self):
        assert ingest_cv_bytes(_pdf_bytes("Alpha", "Beta"), "cv.pdf", "application/pdf") == "Alpha\nBeta"

    def test_suffix_used_when_type_is_generic(self):
        result = ingest_cv_bytes(_pdf_bytes("Alpha"), "CV.PDF", "application/octet-stream")
        assert result == "Alpha"

    def test_blank_lines_inside_pages_survive(self):
        pages = [MagicMock(), MagicMock()]
        pages[0].get_text.return_value = "\n\nAlpha\n\n"
        pages[1].get_text.return_value = "\nBeta\n"
        doc = MagicMock()
        doc.__iter__.return_value = iter(pages)
        with patch("fitz.open", return_value=doc):
            result = ingest_cv_bytes(b"%PDF-1.7", "cv.pdf", "application/pdf")

        assert result == "Alpha\n\n\nBeta"
        doc.close.assert_called_once()

    def test_corrupt_pdf(self):
        with pytest.raises(ExtractionError) as exc_info:
            ingest_cv_bytes(b"this is not a pdf", "cv.pdf", "application/pdf")
        assert "paste the text manually" in exc_info.value.user_message


class TestIngestText:
    def test_text_is_verbatim(self):
        text = "  Jane Doe\n\nExperience:\n  - Acme  \n"
        assert ingest_cv_bytes(text.encode("utf-8"), "cv.txt", "text/plain") == text

    def test_bom_is_dropped(self):
        data = "\ufeffJane Doe".encode("utf-8")
        assert ingest_cv_bytes(data, "cv.md") == "Jane Doe"

    def test_invalid_utf8(self):
        with pytest.raises(ExtractionError):
            ingest_cv_bytes(b"\xff\xfe\xfa", "cv.txt", "text/plain")

    def test_unsupported_format(self):
        with pytest.raises(ExtractionError, match="Unsupported file format"):
            ingest_cv_bytes(b"PK\x03\x04", "cv.docx")


class TestParseCvFile:
    def test_parse_md_file(self, tmp_path):
        md_file = tmp_path / "cv.md"
        md_file.write_text("# Jane Doe\n## Experience", encoding="utf-8")
        assert parse_cv_file(md_file) == "# Jane Doe\n## Experience"

    def test_parse_pdf_file(self, tmp_path):
        pdf_file = tmp_path / "cv.pdf"
        pdf_file.write_bytes(_pdf_bytes("Alpha"))
        assert parse_cv_file(str(pdf_file)) == "Alpha"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionError, match="Cannot read"):
            parse_cv_file(tmp_path / "missing.txt")
