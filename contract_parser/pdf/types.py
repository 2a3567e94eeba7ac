"""
Type definitions for PDF page extraction.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_OCR_DPI = 300
DEFAULT_MIN_NATIVE_TEXT_LENGTH = 32


class PDFProcessingError(Exception):
    """Base exception for PDF processing errors."""

    def __init__(
        self,
        message: str,
        pdf_path: Optional[Path] = None,
        page_num: Optional[int] = None,
    ):
        self.pdf_path = pdf_path
        self.page_num = page_num
        super().__init__(message)


class ExtractionError(PDFProcessingError):
    """Exception raised when page extraction cannot complete."""
    pass


class DocumentReadError(ExtractionError):
    """The document could not be opened or its text layer could not be read."""
    pass


class RenderError(PDFProcessingError):
    """A single page could not be rasterized."""
    pass


@dataclass(frozen=True)
class Page:
    """Text extracted for a single page (1-indexed)."""

    page_number: int
    text: str = ""

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("page_number must be 1 or greater")
        if self.text is None:
            object.__setattr__(self, "text", "")

    @property
    def char_count(self) -> int:
        return len(self.text)


class ExtractionOptions(BaseModel):
    """Options for the page extraction pipeline, validated on construction."""

    model_config = ConfigDict(frozen=True)

    ocr_resolution_dpi: int = Field(DEFAULT_OCR_DPI, gt=0)
    ocr_data_directory: Optional[Path] = None
    min_native_text_length: int = Field(DEFAULT_MIN_NATIVE_TEXT_LENGTH, ge=0)

    @field_validator("ocr_data_directory")
    @classmethod
    def data_directory_must_exist(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.is_dir():
            raise ValueError(f"ocr_data_directory must be a directory: {v}")
        return v

    @classmethod
    def defaults(cls) -> "ExtractionOptions":
        """300 DPI, no data directory override, minimum native text length of 32."""
        return cls()


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing a PDF file."""

    file_name: str
    page_count: int
    title: str = ""
    pages: Tuple[Page, ...] = field(default_factory=tuple)

    @property
    def total_characters(self) -> int:
        return sum(page.char_count for page in self.pages)

    @property
    def empty_pages(self) -> int:
        return sum(1 for page in self.pages if not page.text)

    def get_page(self, page_number: int) -> Optional[Page]:
        """Get page by page number (1-indexed)."""
        if 1 <= page_number <= len(self.pages):
            return self.pages[page_number - 1]
        return None

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the parse result."""
        return {
            "file_name": self.file_name,
            "title": self.title,
            "page_count": self.page_count,
            "total_characters": self.total_characters,
            "empty_pages": self.empty_pages,
        }
