"""
PDF parser for contract documents: page count, title and per-page text.
"""

from pathlib import Path
from typing import Optional

import structlog

from .backend import PyMuPDFBackend
from .extractor import PageExtractor
from .types import ParseResult


logger = structlog.get_logger(__name__)


class PDFParser:
    """Opens a PDF file and extracts its metadata title and page texts."""

    def __init__(self, extractor: Optional[PageExtractor] = None):
        self.extractor = extractor or PageExtractor()
        self.logger = logger.bind(component="PDFParser")

    def parse(self, pdf_path: Path) -> ParseResult:
        """
        Parse a PDF file.

        Raises:
            DocumentReadError: If the file does not exist or cannot be read
        """
        pdf_path = Path(pdf_path)
        self.logger.info("Opening PDF file", pdf_path=str(pdf_path.absolute()))

        with PyMuPDFBackend.open(pdf_path) as backend:
            page_count = backend.page_count()
            title = ((backend.doc.metadata or {}).get("title") or "").strip()
            self.logger.info("PDF opened", page_count=page_count, title=title)

            pages = self.extractor.extract_pages(backend)

        return ParseResult(
            file_name=pdf_path.name,
            page_count=page_count,
            title=title,
            pages=tuple(pages),
        )
