"""
Combines native text-layer text with OCR output for one page.
"""

from typing import Optional


LINE_SEPARATOR = "\n"


def _is_blank(text: str) -> bool:
    return not text or text.isspace()


def merge_text(native_text: Optional[str], ocr_text: Optional[str]) -> str:
    """
    Merge native and OCR text.

    Native text wins when OCR adds nothing: if either side is blank the other
    is returned, and OCR text already contained in the native text is dropped.
    Otherwise OCR text is appended on a new line. The containment check is an
    exact substring match.
    """
    native = native_text or ""
    ocr = ocr_text or ""

    if _is_blank(native):
        return ocr
    if _is_blank(ocr):
        return native
    if ocr in native:
        return native
    return native + LINE_SEPARATOR + ocr
