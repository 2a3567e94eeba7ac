"""
Type definitions for OCR processing.
"""

from enum import Enum
from typing import Optional


OCR_LANGUAGE = "eng"


class CapabilityState(Enum):
    """Lifecycle of the OCR engine within one pipeline instance."""

    UNPROBED = "unprobed"
    AVAILABLE = "available"
    PERMANENTLY_UNAVAILABLE = "permanently_unavailable"

    @property
    def is_terminal(self) -> bool:
        return self is not CapabilityState.UNPROBED


class OCRError(Exception):
    """Base exception for OCR processing errors.

    Raised directly for failures limited to a single recognition call
    (bad image data, timeouts). OCR stays available for later pages.
    """

    def __init__(self, message: str, page_num: Optional[int] = None):
        self.page_num = page_num
        super().__init__(message)


class OCREngineError(OCRError):
    """The OCR engine itself is broken; no further calls should be made."""
    pass


class OCRUnavailableError(OCRError):
    """OCR was requested but the engine is not available in this process."""
    pass
