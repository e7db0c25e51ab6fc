"""
Services package for the quote comparison application.

Contains:
- pdf_service: PDF text layer reading
- extraction: vendor detection and price extraction rules
- quote_store: tenant and quotation persistence
"""

from .extraction import ExtractionDispatcher
from .pdf_service import PDFService

__all__ = ["PDFService", "ExtractionDispatcher"]
