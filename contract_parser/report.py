"""
Report output for parsed documents.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import structlog

from .pdf.types import ParseResult


logger = structlog.get_logger(__name__)

DEFAULT_REPORT_TITLE = "Contract Parser - Report"


class ReportFormat(Enum):
    JSON = "json"
    TEXT = "text"


def report_to_dict(result: ParseResult) -> Dict[str, Any]:
    """Convert a parse result to a JSON-serializable dictionary."""
    return {
        "file_name": result.file_name,
        "title": result.title,
        "page_count": result.page_count,
        "summary": result.get_summary(),
        "pages": [
            {"page_number": page.page_number, "text": page.text}
            for page in result.pages
        ],
    }


def render_text_report(result: ParseResult) -> str:
    """Plain-text report: title, summary line, then one section per page."""
    lines = [result.title or DEFAULT_REPORT_TITLE, ""]

    summary = result.get_summary()
    lines.append("Summary")
    lines.append(
        f"Pages: {summary['page_count']}  "
        f"Characters: {summary['total_characters']}  "
        f"Empty pages: {summary['empty_pages']}"
    )
    lines.append("")

    for page in result.pages:
        lines.append(f"Page {page.page_number}")
        lines.extend(page.text.splitlines())
        lines.append("")

    return "\n".join(lines)


def write_report(
    result: ParseResult,
    output_path: Path,
    fmt: Union[ReportFormat, str] = ReportFormat.JSON,
) -> Path:
    """
    Write a parse result to a file.

    Args:
        result: Parse result to write
        output_path: Destination file; parent directories are created
        fmt: Report format

    Returns:
        The written path
    """
    fmt = ReportFormat(fmt)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Writing report",
        output_path=str(output_path.absolute()),
        format=fmt.value,
        pages=len(result.pages),
    )

    if fmt is ReportFormat.JSON:
        content = json.dumps(report_to_dict(result), indent=2, ensure_ascii=False)
    else:
        content = render_text_report(result)

    output_path.write_text(content + "\n", encoding="utf-8")
    return output_path
