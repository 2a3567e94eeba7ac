"""
OCR engine capability interface with Tesseract integration.

Two variants exist: ``TesseractEngine`` backed by pytesseract, and
``UnavailableEngine`` used once OCR is known not to work in this process.
"""

import abc
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import pytesseract
import structlog
from PIL import Image

from .types import OCR_LANGUAGE, OCREngineError, OCRError, OCRUnavailableError


logger = structlog.get_logger(__name__)


class OCREngine(abc.ABC):
    """Recognizes the text in a page image."""

    available = True

    @abc.abstractmethod
    def recognize(self, image: Image.Image) -> str:
        """
        Run OCR on an image.

        Raises:
            OCRError: If this call failed but the engine is still usable
            OCREngineError: If the engine is broken
        """


class UnavailableEngine(OCREngine):
    """Null engine returned when OCR cannot run."""

    available = False

    def recognize(self, image: Image.Image) -> str:
        raise OCRUnavailableError("OCR engine is not available")

    def __repr__(self) -> str:
        return "UnavailableEngine()"


UNAVAILABLE = UnavailableEngine()


class TesseractEngine(OCREngine):
    """
    OCR engine backed by the Tesseract binary through pytesseract.

    Construction verifies that Tesseract runs and that the configured
    language model is installed, so a missing binary or data directory
    surfaces here rather than on the first page.
    """

    def __init__(
        self,
        data_directory: Optional[Path] = None,
        language: str = OCR_LANGUAGE,
        tesseract_cmd: Optional[str] = None,
        timeout: float = 0,
        psm: int = 3,
    ):
        """
        Initialize the Tesseract engine.

        Args:
            data_directory: tessdata directory, or None for Tesseract's default
            language: Single recognition language
            tesseract_cmd: Path to the Tesseract executable
            timeout: Seconds per recognition call, 0 for no limit
            psm: Page segmentation mode

        Raises:
            OCREngineError: If Tesseract is missing or cannot load the language
        """
        self.data_directory = data_directory
        self.language = language
        self.tesseract_cmd = tesseract_cmd
        self.timeout = timeout
        self.psm = psm
        self.logger = logger.bind(component="TesseractEngine")

        self.version = self._verify_tesseract()

    def _build_config(self) -> str:
        options = [f"--psm {self.psm}"]
        if self.data_directory is not None:
            options.append(f'--tessdata-dir "{self.data_directory}"')
        return " ".join(options)

    @contextmanager
    def _command(self):
        """Point pytesseract at this engine's executable for one call."""
        if not self.tesseract_cmd:
            yield
            return

        previous = pytesseract.pytesseract.tesseract_cmd
        pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        try:
            yield
        finally:
            pytesseract.pytesseract.tesseract_cmd = previous

    def _verify_tesseract(self) -> str:
        """Verify Tesseract is installed and the language model is present."""
        try:
            with self._command():
                version = str(pytesseract.get_tesseract_version())
                languages = pytesseract.get_languages(config=self._build_config())
        except Exception as e:
            raise OCREngineError(f"Tesseract verification failed: {e}") from e

        if self.language not in languages:
            raise OCREngineError(
                f"Required language '{self.language}' not available in Tesseract"
            )

        self.logger.info(
            "Tesseract verified",
            version=version,
            language=self.language,
            data_directory=str(self.data_directory) if self.data_directory else None,
        )
        return version

    def recognize(self, image: Image.Image) -> str:
        try:
            with self._command():
                text = pytesseract.image_to_string(
                    image,
                    lang=self.language,
                    config=self._build_config(),
                    timeout=self.timeout,
                )
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineError(f"Tesseract executable not found: {e}") from e
        except pytesseract.TesseractError as e:
            # Negative status: the process was killed by a signal.
            if isinstance(e.status, int) and e.status < 0:
                raise OCREngineError(f"Tesseract crashed: {e.message}") from e
            raise OCRError(f"Tesseract failed: {e.message}") from e
        except OSError as e:
            raise OCREngineError(f"Tesseract could not be run: {e}") from e
        except (RuntimeError, TypeError, ValueError) as e:
            raise OCRError(f"Tesseract recognition failed: {e}") from e

        return text or ""

    def __repr__(self) -> str:
        return (
            f"TesseractEngine(language={self.language!r}, "
            f"data_directory={self.data_directory!r})"
        )
