import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, List, Optional

import fitz  # PyMuPDF
import pytest
import structlog

from contract_parser.ocr import OCRCapabilityProbe, OCREngine
from contract_parser.ocr.tessdata import DataDirectoryResolver
from contract_parser.pdf import RenderError, RenderingBackend


class StubImage:
    """Stands in for a rendered page image and records whether it was released."""

    def __init__(self, page_index: int, dpi: int):
        self.page_index = page_index
        self.dpi = dpi
        self.closed = False

    def close(self):
        self.closed = True


class StubBackend(RenderingBackend):
    """In-memory document with call counters."""

    def __init__(self, texts: List[Optional[str]], failing_renders=()):
        self.texts = list(texts)
        self.failing_renders = set(failing_renders)
        self.page_count_calls = 0
        self.native_text_calls: List[int] = []
        self.render_calls: List[int] = []
        self.images: List[StubImage] = []

    def page_count(self) -> int:
        self.page_count_calls += 1
        return len(self.texts)

    def native_text(self, page_number: int) -> Optional[str]:
        self.native_text_calls.append(page_number)
        return self.texts[page_number - 1]

    @contextmanager
    def render_image(self, page_index: int, dpi: int):
        self.render_calls.append(page_index)
        if page_index in self.failing_renders:
            raise RenderError(f"Cannot render page {page_index + 1}", page_num=page_index + 1)
        image = StubImage(page_index, dpi)
        self.images.append(image)
        try:
            yield image
        finally:
            image.close()


class StubEngine(OCREngine):
    """OCR engine returning canned text per page index, or raising."""

    def __init__(self, outputs: Optional[Dict[int, object]] = None):
        self.outputs = outputs or {}
        self.calls: List[int] = []
        self.lock = threading.Lock()

    def recognize(self, image) -> str:
        with self.lock:
            self.calls.append(image.page_index)
        result = self.outputs.get(image.page_index, "")
        if isinstance(result, Exception):
            raise result
        return result


class CountingFactory:
    """Engine factory that counts construction attempts."""

    def __init__(self, engine: Optional[OCREngine] = None, error: Optional[Exception] = None):
        self.engine = engine
        self.error = error
        self.calls = []

    def __call__(self, data_directory, language):
        self.calls.append((data_directory, language))
        if self.error is not None:
            raise self.error
        return self.engine


@pytest.fixture
def empty_resolver() -> DataDirectoryResolver:
    """Resolver that never finds a tessdata directory."""
    return DataDirectoryResolver(environ={}, platform="linux", is_dir=lambda path: False)


@pytest.fixture
def make_probe(empty_resolver) -> Callable[..., OCRCapabilityProbe]:
    def _make(factory, data_directory=None) -> OCRCapabilityProbe:
        return OCRCapabilityProbe(
            data_directory=data_directory,
            resolver=empty_resolver,
            engine_factory=factory,
        )

    return _make


@pytest.fixture
def make_pdf(tmp_path) -> Callable[..., Path]:
    """Create a PDF with one text page per entry; None leaves the page blank."""

    def _make(page_texts, title: Optional[str] = None, name: str = "sample.pdf") -> Path:
        pdf_path = tmp_path / name
        doc = fitz.open()
        try:
            for text in page_texts:
                page = doc.new_page()
                if text:
                    page.insert_text((72, 72), text, fontsize=12)
            if title is not None:
                doc.set_metadata({"title": title})
            doc.save(str(pdf_path))
        finally:
            doc.close()
        return pdf_path

    return _make


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def stubs():
    """Stub backend, engine and engine factory classes."""

    class Stubs:
        Backend = StubBackend
        Engine = StubEngine
        Factory = CountingFactory
        Image = StubImage

    return Stubs
