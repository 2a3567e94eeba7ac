"""
Unit tests for the Tesseract engine binding (pytesseract is mocked).
"""

from pathlib import Path
from unittest.mock import patch

import pytesseract
import pytest
from PIL import Image

from contract_parser.ocr import OCREngineError, OCRError, TesseractEngine


@pytest.fixture
def tesseract():
    """Patch the pytesseract calls made by the engine."""
    with patch.object(pytesseract, "get_tesseract_version", return_value="5.3.0"), \
            patch.object(pytesseract, "get_languages", return_value=["eng", "osd"]) as languages, \
            patch.object(pytesseract, "image_to_string", return_value="text\n") as to_string:
        yield {"get_languages": languages, "image_to_string": to_string}


@pytest.fixture
def image():
    img = Image.new("RGB", (10, 10), "white")
    yield img
    img.close()


class TestTesseractEngine:
    """Test engine verification and error classification."""

    def test_init_verifies_tesseract(self, tesseract):
        engine = TesseractEngine()

        assert engine.version == "5.3.0"
        assert engine.language == "eng"
        assert engine.available

    def test_missing_binary_fails_construction(self):
        with patch.object(
            pytesseract,
            "get_tesseract_version",
            side_effect=pytesseract.TesseractNotFoundError(),
        ):
            with pytest.raises(OCREngineError, match="verification failed"):
                TesseractEngine()

    def test_missing_language_fails_construction(self, tesseract):
        tesseract["get_languages"].return_value = ["osd"]

        with pytest.raises(OCREngineError, match="'eng' not available"):
            TesseractEngine()

    def test_data_directory_is_passed_to_tesseract(self, tesseract, image):
        engine = TesseractEngine(data_directory=Path("/data/tessdata"))

        engine.recognize(image)

        config = tesseract["image_to_string"].call_args.kwargs["config"]
        assert '--tessdata-dir "/data/tessdata"' in config
        assert "--tessdata-dir" in tesseract["get_languages"].call_args.kwargs["config"]

    def test_recognize(self, tesseract, image):
        engine = TesseractEngine(timeout=20)

        assert engine.recognize(image) == "text\n"
        kwargs = tesseract["image_to_string"].call_args.kwargs
        assert kwargs["lang"] == "eng"
        assert kwargs["timeout"] == 20

    def test_recognize_none_result(self, tesseract, image):
        tesseract["image_to_string"].return_value = None

        assert TesseractEngine().recognize(image) == ""

    def test_tesseract_error_is_per_call(self, tesseract, image):
        tesseract["image_to_string"].side_effect = pytesseract.TesseractError(
            1, "Image too small to scale"
        )

        with pytest.raises(OCRError) as exc_info:
            TesseractEngine().recognize(image)

        assert not isinstance(exc_info.value, OCREngineError)

    def test_timeout_is_per_call(self, tesseract, image):
        tesseract["image_to_string"].side_effect = RuntimeError("Tesseract process timeout")

        with pytest.raises(OCRError) as exc_info:
            TesseractEngine().recognize(image)

        assert not isinstance(exc_info.value, OCREngineError)

    def test_crash_is_engine_fatal(self, tesseract, image):
        tesseract["image_to_string"].side_effect = pytesseract.TesseractError(-11, "")

        with pytest.raises(OCREngineError, match="crashed"):
            TesseractEngine().recognize(image)

    def test_binary_disappearing_is_engine_fatal(self, tesseract, image):
        tesseract["image_to_string"].side_effect = pytesseract.TesseractNotFoundError()

        with pytest.raises(OCREngineError, match="not found"):
            TesseractEngine().recognize(image)

    def test_os_error_is_engine_fatal(self, tesseract, image):
        tesseract["image_to_string"].side_effect = PermissionError("denied")

        with pytest.raises(OCREngineError):
            TesseractEngine().recognize(image)

    def test_custom_tesseract_cmd_is_scoped_to_calls(self, tesseract, image):
        original = pytesseract.pytesseract.tesseract_cmd
        seen = []
        tesseract["image_to_string"].side_effect = (
            lambda *args, **kwargs: seen.append(pytesseract.pytesseract.tesseract_cmd) or "ok"
        )

        engine = TesseractEngine(tesseract_cmd="/opt/bin/tesseract")
        assert pytesseract.pytesseract.tesseract_cmd == original

        assert engine.recognize(image) == "ok"
        assert seen == ["/opt/bin/tesseract"]
        assert pytesseract.pytesseract.tesseract_cmd == original

    def test_tesseract_cmd_restored_after_failure(self, tesseract, image):
        original = pytesseract.pytesseract.tesseract_cmd
        tesseract["image_to_string"].side_effect = pytesseract.TesseractError(1, "bad")
        engine = TesseractEngine(tesseract_cmd="/opt/bin/tesseract")

        with pytest.raises(OCRError):
            engine.recognize(image)

        assert pytesseract.pytesseract.tesseract_cmd == original
