"""
PDF Reader Module

Functions for opening PDF files and fetching pages to digitize.
"""

import logging
from pathlib import Path
from typing import Tuple

import pymupdf

logger = logging.getLogger(__name__)


class PDFReadError(Exception):
    """Raised when a PDF cannot be read."""
    pass


class PDFPasswordProtectedError(PDFReadError):
    """Raised when a PDF is password protected."""
    pass


class PDFCorruptedError(PDFReadError):
    """Raised when a PDF is corrupted."""
    pass


def open_pdf(filepath: str) -> pymupdf.Document:
    """
    Open a PDF file and return a document object.

    Args:
        filepath: Path to the PDF file

    Returns:
        pymupdf.Document object

    Raises:
        PDFReadError: If file not found
        PDFPasswordProtectedError: If PDF is password protected
        PDFCorruptedError: If PDF is corrupted
    """
    path = Path(filepath)

    if not path.exists():
        raise PDFReadError(f"File not found: {filepath}")

    if not path.is_file():
        raise PDFReadError(f"Path is not a file: {filepath}")

    try:
        doc = pymupdf.open(filepath)
    except Exception as e:
        error_msg = str(e).lower()
        if "password" in error_msg or "encrypted" in error_msg:
            raise PDFPasswordProtectedError(f"PDF is password protected: {filepath}")
        raise PDFCorruptedError(f"Cannot open PDF (may be corrupted): {filepath}. Error: {e}")

    if doc.needs_pass:
        doc.close()
        raise PDFPasswordProtectedError(f"PDF is password protected: {filepath}")

    if doc.page_count == 0:
        doc.close()
        raise PDFCorruptedError(f"PDF has no pages: {filepath}")

    logger.info(f"Opened PDF: {filepath} ({doc.page_count} pages)")
    return doc


def get_page(doc: pymupdf.Document, page_number: int) -> pymupdf.Page:
    """
    Get a specific page from a PDF document.

    Args:
        doc: pymupdf.Document object
        page_number: 0-indexed page number

    Returns:
        pymupdf.Page object

    Raises:
        PDFReadError: If page number is invalid
    """
    if page_number < 0 or page_number >= doc.page_count:
        raise PDFReadError(
            f"Invalid page number: {page_number + 1}. "
            f"Document has {doc.page_count} pages (1-{doc.page_count})."
        )

    return doc.load_page(page_number)


def get_page_dimensions(page: pymupdf.Page) -> Tuple[float, float]:
    """
    Get the unrotated dimensions of a page in PDF points.

    Curves are extracted in the unrotated page frame, so the viewport is
    built from these rather than the rotated page.rect.

    Args:
        page: pymupdf.Page object

    Returns:
        Tuple of (width, height) in PDF points
    """
    rect = page.cropbox
    return (rect.width, rect.height)
