"""
OCR capability management: engine binding, tessdata lookup and the
availability probe used by the page extractor.
"""

from .engine import UNAVAILABLE, OCREngine, TesseractEngine, UnavailableEngine
from .probe import OCRCapabilityProbe
from .tessdata import DataDirectoryResolver
from .types import (
    OCR_LANGUAGE,
    CapabilityState,
    OCREngineError,
    OCRError,
    OCRUnavailableError,
)

__all__ = [
    # Components
    "OCRCapabilityProbe",
    "DataDirectoryResolver",
    "OCREngine",
    "TesseractEngine",
    "UnavailableEngine",
    "UNAVAILABLE",
    # Data types
    "CapabilityState",
    "OCR_LANGUAGE",
    # Exceptions
    "OCRError",
    "OCREngineError",
    "OCRUnavailableError",
]
