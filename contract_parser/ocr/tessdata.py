"""
Locates the Tesseract language-model data directory (``tessdata``).

Resolution order:

1. ``TESSDATA_DIR`` pointing at the data directory itself, then
   ``TESSDATA_PREFIX`` pointing at its parent (``<prefix>/tessdata``).
2. Package-manager default locations for the current platform.
3. Nothing found: ``None``, leaving Tesseract to its built-in default.

The resolver only inspects the filesystem. It never caches, so tests can
inject ``environ``, ``platform`` and ``is_dir`` instead of touching real paths.
"""

import os
import sys
from pathlib import Path, PurePath
from typing import Callable, Dict, List, Mapping, Optional, Tuple

import structlog


logger = structlog.get_logger(__name__)

TESSDATA_DIR_ENV = "TESSDATA_DIR"
TESSDATA_PREFIX_ENV = "TESSDATA_PREFIX"
TESSDATA_DIRNAME = "tessdata"

WELL_KNOWN_PATHS: Dict[str, Tuple[str, ...]] = {
    "darwin": (
        "/opt/homebrew/share/tessdata",  # Homebrew, Apple silicon
        "/usr/local/share/tessdata",  # Homebrew, Intel
        "/opt/local/share/tessdata",  # MacPorts
    ),
    "linux": (
        "/usr/share/tesseract-ocr/5/tessdata",
        "/usr/share/tesseract-ocr/4.00/tessdata",
        "/usr/share/tessdata",
        "/usr/local/share/tessdata",
    ),
    "win32": (
        "C:\\Program Files\\Tesseract-OCR\\tessdata",
        "C:\\Program Files (x86)\\Tesseract-OCR\\tessdata",
    ),
}


def _platform_key(platform: str) -> str:
    if platform.startswith("linux"):
        return "linux"
    if platform.startswith(("win", "cygwin")):
        return "win32"
    return platform


def _default_is_dir(path: PurePath) -> bool:
    # is_dir only swallows some errno values; ENAMETOOLONG and EACCES still raise
    try:
        return Path(path).is_dir()
    except OSError:
        return False


class DataDirectoryResolver:
    """Finds a ``tessdata`` directory from the environment or well-known paths."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
        is_dir: Optional[Callable[[PurePath], bool]] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.platform = sys.platform if platform is None else platform
        self.is_dir = is_dir or _default_is_dir
        self.logger = logger.bind(component="DataDirectoryResolver")

    def candidates(self) -> List[Path]:
        """All candidate paths in priority order, existing or not."""
        paths: List[Path] = []

        direct = self.environ.get(TESSDATA_DIR_ENV)
        if direct:
            paths.append(Path(direct))

        prefix = self.environ.get(TESSDATA_PREFIX_ENV)
        if prefix:
            paths.append(Path(prefix) / TESSDATA_DIRNAME)

        for known in WELL_KNOWN_PATHS.get(_platform_key(self.platform), ()):
            paths.append(Path(known))

        return paths

    def resolve(self) -> Optional[Path]:
        """Return the first candidate that is an existing directory, else None."""
        for candidate in self.candidates():
            if self.is_dir(candidate):
                self.logger.debug("Resolved tessdata directory", path=str(candidate))
                return candidate

        self.logger.debug(
            "No tessdata directory found; using Tesseract default",
            platform=self.platform,
        )
        return None
