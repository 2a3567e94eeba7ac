"""
PDF page text extraction with OCR fallback.
"""

from .backend import PyMuPDFBackend, RenderingBackend
from .extractor import PageExtractor
from .merger import merge_text
from .parser import PDFParser
from .types import (
    DocumentReadError,
    ExtractionError,
    ExtractionOptions,
    Page,
    ParseResult,
    PDFProcessingError,
    RenderError,
)

__all__ = [
    # Core classes
    "PDFParser",
    "PageExtractor",
    "RenderingBackend",
    "PyMuPDFBackend",
    "merge_text",
    # Exception types
    "PDFProcessingError",
    "ExtractionError",
    "DocumentReadError",
    "RenderError",
    # Data types
    "Page",
    "ParseResult",
    "ExtractionOptions",
]
