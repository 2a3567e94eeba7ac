from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from contract_parser.pdf.types import (
    DEFAULT_MIN_NATIVE_TEXT_LENGTH,
    DEFAULT_OCR_DPI,
    ExtractionOptions,
)


class Settings(BaseSettings):
    """Settings loaded from CONTRACT_PARSER_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="CONTRACT_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    log_level: str = "INFO"
    log_format: str = "console"  # json or console

    # Extraction
    ocr_dpi: int = DEFAULT_OCR_DPI
    min_native_text_length: int = DEFAULT_MIN_NATIVE_TEXT_LENGTH
    tessdata_dir: Optional[Path] = None

    # Tesseract
    tesseract_cmd: Optional[str] = None
    tesseract_timeout: float = Field(0, ge=0)  # seconds, 0 disables

    def to_extraction_options(self, **overrides) -> ExtractionOptions:
        """Build validated extraction options, applying non-None overrides."""
        values = {
            "ocr_resolution_dpi": self.ocr_dpi,
            "ocr_data_directory": self.tessdata_dir,
            "min_native_text_length": self.min_native_text_length,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ExtractionOptions(**values)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
