"""
PDF text extraction for price sheets.

Uses pypdf only; price sheets are digital PDFs with a text layer, no OCR.
"""

import io
import logging
from pathlib import Path
from typing import Union

from pypdf import PdfReader

logger = logging.getLogger(__name__)


def _read_pages(source, name: str) -> str:
    try:
        reader = PdfReader(source)
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        raise ValueError(f"Failed to extract text from PDF: {e}") from e

    text = "\n".join(pages)
    logger.info(f"Extracted {len(text)} chars from {len(pages)} pages of {name}")
    return text


def extract_text_from_pdf(pdf_path: Union[str, Path]) -> str:
    """
    Extract the text layer of every page, pages joined by newlines.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file cannot be read as a PDF
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"File not found: {pdf_path}")

    return _read_pages(str(pdf_path), pdf_path.name)


def extract_text_from_pdf_bytes(data: bytes, name: str = "attachment.pdf") -> str:
    """Same as extract_text_from_pdf, for an in-memory PDF such as an email attachment."""
    if not data:
        raise ValueError(f"PDF is empty: {name}")
    return _read_pages(io.BytesIO(data), name)


def read_document_text(path: Union[str, Path]) -> str:
    """Read a price sheet: PDFs through pypdf, anything else as UTF-8 text."""
    path = Path(path)
    if path.suffix.lower() == '.pdf':
        return extract_text_from_pdf(path)
    return path.read_text(encoding='utf-8')
