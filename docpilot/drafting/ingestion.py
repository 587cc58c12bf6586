"""Turn uploaded .txt, .md and .pdf files into a single text blob."""

from __future__ import annotations

import io
import logging
from pathlib import PurePath
from typing import Optional

import pdfplumber

from docpilot.errors import IngestionError, UnsupportedDocumentError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".md", ".pdf")
PDF_CONTENT_TYPE = "application/pdf"


def page_marker(page_number: int) -> str:
    """Marker the summarizer uses to attribute highlights to pages."""
    return f"[PAGE {page_number}]"


def is_pdf(filename: str, content_type: Optional[str] = None) -> bool:
    return content_type == PDF_CONTENT_TYPE or filename.lower().endswith(".pdf")


def extract_pdf_text(content: bytes) -> str:
    """
    Extract text page by page, prefixing each page with its 1-based marker.

    Every page contributes a marker even when it carries no extractable text,
    so the marker count always equals the page count.
    """
    parts = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        page_count = len(pdf.pages)
        logger.info(f"PDF has {page_count} pages")
        for page_number, page in enumerate(pdf.pages, start=1):
            page_text = page.extract_text() or ""
            parts.append(f"{page_marker(page_number)}\n{page_text}\n")
    return "".join(parts)


def ingest_document(
    filename: str, content: bytes, content_type: Optional[str] = None
) -> str:
    """
    Read an uploaded document into memory as text.

    Args:
        filename: Original file name, used to pick the reader
        content: Raw file bytes
        content_type: Optional MIME type reported by the client

    Returns:
        The page-marked text of a PDF, or the verbatim text of anything else

    Raises:
        UnsupportedDocumentError: If the file is not .txt, .md or .pdf
        IngestionError: If the file cannot be read or parsed
    """
    suffix = PurePath(filename).suffix.lower()
    pdf = is_pdf(filename, content_type)
    if not pdf and suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedDocumentError(
            f"Unsupported file type '{suffix or filename}'. "
            f"Upload one of: {', '.join(SUPPORTED_EXTENSIONS)}."
        )

    try:
        if pdf:
            return extract_pdf_text(content)
        return content.decode("utf-8-sig")
    except Exception as exc:
        logger.error(f"Error reading file {filename}: {exc}")
        raise IngestionError(
            "Failed to read file content. Ensure it's a valid text or PDF file."
        ) from exc
