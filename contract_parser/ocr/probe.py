"""
Lazy, one-time OCR capability detection.

The probe owns the OCR engine for one pipeline instance. The first
``acquire()`` pays the initialization cost; afterwards the decision is reused.
Once the state is ``PERMANENTLY_UNAVAILABLE`` no further initialization or
recognition is attempted.
"""

import threading
from pathlib import Path
from typing import Callable, Optional

import structlog
from PIL import Image

from .engine import UNAVAILABLE, OCREngine, TesseractEngine
from .tessdata import DataDirectoryResolver
from .types import (
    OCR_LANGUAGE,
    CapabilityState,
    OCREngineError,
    OCRError,
    OCRUnavailableError,
)


logger = structlog.get_logger(__name__)

EngineFactory = Callable[[Optional[Path], str], OCREngine]


class OCRCapabilityProbe:
    """
    Determines once whether OCR can run and hands out the shared engine.

    State moves ``UNPROBED -> AVAILABLE -> PERMANENTLY_UNAVAILABLE`` or
    ``UNPROBED -> PERMANENTLY_UNAVAILABLE`` and never back. Recognition calls
    are serialized because the engine binding is not assumed thread-safe.
    """

    def __init__(
        self,
        data_directory: Optional[Path] = None,
        resolver: Optional[DataDirectoryResolver] = None,
        engine_factory: Optional[EngineFactory] = None,
        language: str = OCR_LANGUAGE,
    ):
        """
        Initialize the probe. Nothing is probed until the first ``acquire()``.

        Args:
            data_directory: Explicit tessdata directory, checked before the resolver
            resolver: Fallback data directory lookup
            engine_factory: Builds the engine from (data_directory, language)
            language: Single recognition language
        """
        self.data_directory = data_directory
        self.resolver = resolver or DataDirectoryResolver()
        self.engine_factory = engine_factory or TesseractEngine
        self.language = language
        self.logger = logger.bind(component="OCRCapabilityProbe")

        self._lock = threading.Lock()
        self._recognition_lock = threading.Lock()
        self._state = CapabilityState.UNPROBED
        self._engine: OCREngine = UNAVAILABLE
        self._initialization_attempts = 0

    @property
    def state(self) -> CapabilityState:
        with self._lock:
            return self._state

    @property
    def is_available(self) -> bool:
        return self.state is CapabilityState.AVAILABLE

    @property
    def initialization_attempts(self) -> int:
        return self._initialization_attempts

    def acquire(self) -> OCREngine:
        """
        Return the OCR engine, initializing it on first use.

        Returns:
            The cached engine, or ``UNAVAILABLE`` when OCR cannot run
        """
        with self._lock:
            if self._state is CapabilityState.UNPROBED:
                self._initialize()
            return self._engine

    def _initialize(self) -> None:
        """Run the single UNPROBED transition. Caller holds ``self._lock``."""
        self._initialization_attempts += 1
        data_directory = self.data_directory

        try:
            if data_directory is None:
                data_directory = self.resolver.resolve()
            engine = self.engine_factory(data_directory, self.language)
        except Exception as e:
            self._state = CapabilityState.PERMANENTLY_UNAVAILABLE
            self._engine = UNAVAILABLE
            self.logger.warning(
                "OCR engine unavailable; continuing with native text only",
                error=str(e),
                error_type=type(e).__name__,
                data_directory=str(data_directory) if data_directory else None,
            )
            return

        self._engine = engine
        self._state = CapabilityState.AVAILABLE
        self.logger.info(
            "OCR engine initialized",
            engine=repr(engine),
            language=self.language,
        )

    def recognize(self, image: Image.Image) -> str:
        """
        Recognize text in an image with the shared engine.

        Raises:
            OCRUnavailableError: If OCR is not available
            OCREngineError: If the engine broke; OCR is disabled for the run
            OCRError: If only this call failed
        """
        engine = self.acquire()
        if not engine.available:
            raise OCRUnavailableError("OCR engine is not available")

        with self._recognition_lock:
            try:
                return engine.recognize(image)
            except OCREngineError as e:
                self._disable(engine, e)
                raise
            except OCRError:
                raise
            except Exception as e:
                self._disable(engine, e)
                raise OCREngineError(f"OCR engine failed unexpectedly: {e}") from e

    def _disable(self, engine: OCREngine, error: Exception) -> None:
        with self._lock:
            if self._engine is not engine:
                return
            self._state = CapabilityState.PERMANENTLY_UNAVAILABLE
            self._engine = UNAVAILABLE

        self.logger.warning(
            "OCR engine failed at runtime; disabling OCR for remaining pages",
            error=str(error),
            error_type=type(error).__name__,
        )
