"""
PDF text extraction service using pdfplumber.

Reads the text layer of every page of a quote PDF so the vendor rules
can run over it.
"""

import io
import logging
from typing import BinaryIO

import pdfplumber

logger = logging.getLogger(__name__)


class PDFReadError(Exception):
    """Raised when a PDF cannot be read (document unreadable)."""

    pass


class PDFService:
    """
    Service for PDF text operations.

    Uses pdfplumber (pdfminer.six) to read each page's text layer.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: Appended after each page's text.
        """
        self.page_separator = page_separator

    @staticmethod
    def _as_bytes(file_bytes: bytes | BinaryIO) -> bytes:
        if hasattr(file_bytes, "read"):
            return file_bytes.read()
        return file_bytes

    def _validate(self, pdf_bytes: bytes) -> None:
        if not pdf_bytes:
            raise PDFReadError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise PDFReadError(
                "Invalid PDF file: does not start with PDF header"
            )

    def read_all_page_text(self, file_bytes: bytes | BinaryIO) -> str:
        """
        Read the text of every page, in order.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            The page texts concatenated, each followed by the page separator.

        Raises:
            PDFReadError: If the file is empty, not a PDF, or cannot be parsed.
        """
        pdf_bytes = self._as_bytes(file_bytes)
        self._validate(pdf_bytes)

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_texts = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            logger.error("Error reading PDF text: %s", e)
            raise PDFReadError(f"Document unreadable: {e}") from e

        logger.info("Read text from %d page(s)", len(page_texts))
        return "".join(text + self.page_separator for text in page_texts)


# Singleton instance for convenience
_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        _pdf_service = PDFService()
    return _pdf_service
