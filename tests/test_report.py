"""
Tests for report writing.
"""

import json

import pytest

from contract_parser.pdf import Page, ParseResult
from contract_parser.report import DEFAULT_REPORT_TITLE, write_report


@pytest.fixture
def result():
    return ParseResult(
        file_name="contract.pdf",
        page_count=3,
        title="Test Document",
        pages=(
            Page(1, "This is page 1\nLine two for page 1"),
            Page(2, ""),
            Page(3, "OCR-3"),
        ),
    )


class TestWriteReport:
    """Test JSON and text reports."""

    def test_json_report(self, result, tmp_path):
        output = write_report(result, tmp_path / "out" / "report.json")

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["title"] == "Test Document"
        assert data["page_count"] == 3
        assert data["pages"][0] == {
            "page_number": 1,
            "text": "This is page 1\nLine two for page 1",
        }
        assert data["summary"]["empty_pages"] == 1

    def test_text_report_sections(self, result, tmp_path):
        output = write_report(result, tmp_path / "report.txt", "text")

        lines = [line.strip() for line in output.read_text(encoding="utf-8").splitlines()]
        assert lines[0] == "Test Document"
        assert "Summary" in lines
        for number in (1, 2, 3):
            assert f"Page {number}" in lines
        assert lines.index("Page 1") < lines.index("Line two for page 1") < lines.index("Page 2")

    def test_text_report_default_title(self, tmp_path):
        untitled = ParseResult(file_name="a.pdf", page_count=0)

        output = write_report(untitled, tmp_path / "report.txt", "text")

        assert output.read_text(encoding="utf-8").startswith(DEFAULT_REPORT_TITLE)

    def test_unknown_format(self, result, tmp_path):
        with pytest.raises(ValueError):
            write_report(result, tmp_path / "report.docx", "docx")
