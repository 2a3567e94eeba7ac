"""
Contract Parser.

Extracts per-page text from PDF documents, using the native text layer
where it is sufficient and Tesseract OCR where it is not.
"""

from .pdf import ExtractionOptions, Page, PageExtractor, ParseResult, PDFParser

__version__ = "1.0.0"

__all__ = [
    "PDFParser",
    "PageExtractor",
    "ExtractionOptions",
    "Page",
    "ParseResult",
]
