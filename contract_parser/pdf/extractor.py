"""
Per-page text extraction with OCR fallback for pages with little native text.
"""

import time
from pathlib import Path
from typing import List, Optional

import structlog

from ..ocr.probe import OCRCapabilityProbe
from ..ocr.types import OCREngineError, OCRError
from .backend import PyMuPDFBackend, RenderingBackend
from .merger import merge_text
from .types import (
    DocumentReadError,
    ExtractionOptions,
    Page,
    PDFProcessingError,
    RenderError,
)


logger = structlog.get_logger(__name__)


class PageExtractor:
    """
    Extracts the text of every page of a document.

    Native text is used when it is long enough. Otherwise the page is
    rendered and run through OCR, and the two texts are merged. OCR problems
    never fail the extraction: the affected page keeps its native text.
    """

    def __init__(
        self,
        options: Optional[ExtractionOptions] = None,
        probe: Optional[OCRCapabilityProbe] = None,
    ):
        """
        Initialize page extractor.

        Args:
            options: Extraction options, defaults when omitted
            probe: OCR capability probe; one is created from the options if omitted
        """
        self.options = options or ExtractionOptions.defaults()
        self.probe = probe or OCRCapabilityProbe(
            data_directory=self.options.ocr_data_directory
        )
        self.logger = logger.bind(component="PageExtractor")

    def needs_ocr(self, text: Optional[str]) -> bool:
        """Whether native text is too short to stand on its own."""
        return (
            not text
            or text.isspace()
            or len(text) < self.options.min_native_text_length
        )

    def extract_pages(self, backend: RenderingBackend) -> List[Page]:
        """
        Extract text for every page of a document.

        Args:
            backend: Rendering backend for the open document

        Returns:
            Pages in page order

        Raises:
            DocumentReadError: If the page count or native text cannot be read
        """
        start_time = time.time()
        total_pages = backend.page_count()
        self.logger.debug("Extracting text from pages", total_pages=total_pages)

        if total_pages == 0:
            return []

        pages: List[Page] = []
        ocr_pages = 0

        for page_index in range(total_pages):
            page_num = page_index + 1
            native = (backend.native_text(page_num) or "").strip()

            text = native
            if self.needs_ocr(native):
                self.logger.debug(
                    "Insufficient native text; attempting OCR",
                    page_num=page_num,
                    native_chars=len(native),
                )
                ocr_pages += 1
                text = merge_text(native, self._perform_ocr(backend, page_index))

            pages.append(Page(page_num, text))

        self.logger.info(
            "Page extraction completed",
            pages_processed=len(pages),
            ocr_pages=ocr_pages,
            ocr_state=self.probe.state.value,
            processing_time=time.time() - start_time,
        )
        return pages

    def _perform_ocr(self, backend: RenderingBackend, page_index: int) -> str:
        """OCR one page. Every failure is logged and yields empty text."""
        page_num = page_index + 1

        if not self.probe.acquire().available:
            return ""

        try:
            with backend.render_image(
                page_index, self.options.ocr_resolution_dpi
            ) as image:
                return (self.probe.recognize(image) or "").strip()

        except RenderError as e:
            self.logger.warning(
                "Failed to render page for OCR", page_num=page_num, error=str(e)
            )
        except OCREngineError as e:
            self.logger.warning(
                "OCR engine failed; skipping OCR", page_num=page_num, error=str(e)
            )
        except OCRError as e:
            self.logger.warning("OCR failed on page", page_num=page_num, error=str(e))
        except Exception as e:
            # Recognition errors all arrive as OCRError, so this is the backend
            self.logger.warning(
                "Unexpected error rendering page for OCR",
                page_num=page_num,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )

        return ""

    def extract_pages_from_pdf(self, pdf_path: Path) -> List[Page]:
        """
        Open a PDF file and extract all of its pages.

        Raises:
            DocumentReadError: If the file cannot be opened or read
        """
        pdf_path = Path(pdf_path)
        self.logger.info("Extracting pages from PDF", pdf_path=str(pdf_path))

        try:
            with PyMuPDFBackend.open(pdf_path) as backend:
                return self.extract_pages(backend)
        except PDFProcessingError:
            raise
        except Exception as e:
            self.logger.error(
                "Unexpected error during page extraction",
                pdf_path=str(pdf_path),
                error=str(e),
                exc_info=True,
            )
            raise DocumentReadError(
                f"Unexpected page extraction error: {e}", pdf_path
            ) from e
