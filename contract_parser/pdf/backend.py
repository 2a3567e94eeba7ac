"""
Rendering backends: native text and page images for the extraction pipeline.
"""

import abc
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import fitz  # PyMuPDF
import structlog
from PIL import Image

from .types import DocumentReadError, RenderError


logger = structlog.get_logger(__name__)


class RenderingBackend(abc.ABC):
    """Access to one open document's pages."""

    @abc.abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abc.abstractmethod
    def native_text(self, page_number: int) -> Optional[str]:
        """Text layer of a single page (1-indexed)."""

    @abc.abstractmethod
    def render_image(self, page_index: int, dpi: int):
        """
        Context manager yielding a page image (0-indexed page).

        The image is released when the context exits.
        """


class PyMuPDFBackend(RenderingBackend):
    """Rendering backend over an open PyMuPDF document."""

    def __init__(self, doc: fitz.Document, pdf_path: Optional[Path] = None):
        self.doc = doc
        self.pdf_path = pdf_path
        self.logger = logger.bind(
            component="PyMuPDFBackend",
            pdf_path=str(pdf_path) if pdf_path else None,
        )

    @classmethod
    @contextmanager
    def open(cls, pdf_path: Path) -> Iterator["PyMuPDFBackend"]:
        """Open a PDF file and close it when the context exits."""
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise DocumentReadError(f"PDF not found: {pdf_path}", pdf_path)

        try:
            doc = fitz.open(str(pdf_path))
        except Exception as e:
            raise DocumentReadError(f"Cannot open PDF: {e}", pdf_path) from e

        try:
            yield cls(doc, pdf_path)
        finally:
            doc.close()

    def page_count(self) -> int:
        try:
            return self.doc.page_count
        except Exception as e:
            raise DocumentReadError(
                f"Cannot read page count: {e}", self.pdf_path
            ) from e

    def native_text(self, page_number: int) -> Optional[str]:
        try:
            page = self.doc[page_number - 1]
            return page.get_text("text", sort=True)
        except Exception as e:
            raise DocumentReadError(
                f"Cannot read text of page {page_number}: {e}",
                self.pdf_path,
                page_number,
            ) from e

    @contextmanager
    def render_image(self, page_index: int, dpi: int) -> Iterator[Image.Image]:
        page_num = page_index + 1
        try:
            pix = self.doc[page_index].get_pixmap(dpi=dpi, alpha=False)
            image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except Exception as e:
            raise RenderError(
                f"Cannot render page {page_num} at {dpi} DPI: {e}",
                self.pdf_path,
                page_num,
            ) from e
        finally:
            pix = None  # Clean up

        self.logger.debug(
            "Rendered page image",
            page_num=page_num,
            dpi=dpi,
            width=image.width,
            height=image.height,
        )
        try:
            yield image
        finally:
            image.close()
