"""
Tests for price sheet text reading.
"""

import io
import pytest
import sys
from pathlib import Path

from pypdf import PdfWriter

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parsers.pdf_text import extract_text_from_pdf, extract_text_from_pdf_bytes, read_document_text


class TestPdfText:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            extract_text_from_pdf(tmp_path / "missing.pdf")

    def test_not_a_pdf(self, tmp_path):
        bogus = tmp_path / "bogus.pdf"
        bogus.write_bytes(b"this is not a pdf")

        with pytest.raises(ValueError):
            extract_text_from_pdf(bogus)

    def test_blank_pages(self, tmp_path):
        pdf_file = tmp_path / "blank.pdf"
        writer = PdfWriter()
        writer.add_blank_page(width=612, height=792)
        writer.add_blank_page(width=612, height=792)
        with open(pdf_file, "wb") as f:
            writer.write(f)

        assert extract_text_from_pdf(pdf_file).strip() == ""

    def test_text_file(self, tmp_path):
        text_file = tmp_path / "comex.txt"
        text_file.write_text("Red Brass 2.10\n", encoding="utf-8")

        assert read_document_text(text_file) == "Red Brass 2.10\n"

    def test_in_memory_pdf(self):
        writer = PdfWriter()
        writer.add_blank_page(width=612, height=792)
        buffer = io.BytesIO()
        writer.write(buffer)

        assert extract_text_from_pdf_bytes(buffer.getvalue(), "comex.pdf").strip() == ""

    def test_in_memory_empty(self):
        with pytest.raises(ValueError):
            extract_text_from_pdf_bytes(b"")
