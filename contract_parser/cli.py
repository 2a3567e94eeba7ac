#!/usr/bin/env python3
"""
Command-line interface: parse a contract PDF and write a per-page report.
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from contract_parser.core.config import Settings, get_settings
from contract_parser.core.logging import configure_logging, get_logger, log_error_with_context
from contract_parser.ocr import DataDirectoryResolver, OCRCapabilityProbe, TesseractEngine
from contract_parser.pdf import PageExtractor, PDFParser, PDFProcessingError
from contract_parser.report import ReportFormat, write_report

logger = get_logger(__name__)


def build_probe(settings: Settings, data_directory=None) -> OCRCapabilityProbe:
    """Probe whose Tesseract engine uses the configured executable and timeout."""

    def engine_factory(resolved_directory, language):
        return TesseractEngine(
            resolved_directory,
            language,
            tesseract_cmd=settings.tesseract_cmd,
            timeout=settings.tesseract_timeout,
        )

    return OCRCapabilityProbe(
        data_directory=data_directory,
        resolver=DataDirectoryResolver(),
        engine_factory=engine_factory,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log output format",
)
@click.version_option(package_name="contract-parser")
def cli(verbose, log_format):
    """Extract per-page text from contract PDFs, with OCR for scanned pages."""
    configure_logging("DEBUG" if verbose else None, log_format)


@cli.command()
@click.argument("input_file", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path("out.json"),
    show_default=True,
    help="Output report file",
)
@click.option(
    "--format",
    "-f",
    "report_format",
    type=click.Choice([f.value for f in ReportFormat]),
    default=ReportFormat.JSON.value,
    show_default=True,
    help="Report format",
)
@click.option("--dpi", type=int, default=None, help="OCR rendering resolution")
@click.option(
    "--tessdata-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Tesseract language data directory",
)
@click.option(
    "--min-native-text-length",
    type=int,
    default=None,
    help="Pages with less native text than this are OCRed",
)
def parse(input_file, output, report_format, dpi, tessdata_dir, min_native_text_length):
    """Parse INPUT_FILE and write a report."""
    if not input_file.exists():
        click.echo(f"Error: Input file does not exist: {input_file.absolute()}", err=True)
        sys.exit(1)
    if not input_file.is_file():
        click.echo(f"Error: Input path is not a file: {input_file.absolute()}", err=True)
        sys.exit(1)
    if input_file.suffix.lower() != ".pdf":
        click.echo(f"Error: Input file must be a PDF: {input_file.absolute()}", err=True)
        sys.exit(1)

    settings = get_settings()
    try:
        options = settings.to_extraction_options(
            ocr_resolution_dpi=dpi,
            ocr_data_directory=tessdata_dir,
            min_native_text_length=min_native_text_length,
        )
    except ValidationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(2)

    extractor = PageExtractor(
        options, build_probe(settings, options.ocr_data_directory)
    )

    click.echo(f"Parsing PDF: {input_file.absolute()}")
    try:
        result = PDFParser(extractor).parse(input_file)
    except PDFProcessingError as e:
        log_error_with_context(logger, e, {"pdf_path": str(input_file)})
        click.echo(f"Error: Cannot read PDF: {e}", err=True)
        sys.exit(1)

    click.echo(f"Page count: {result.page_count}")

    click.echo(f"Writing output to: {output.absolute()}")
    try:
        write_report(result, output, report_format)
    except OSError as e:
        log_error_with_context(logger, e, {"output_path": str(output)})
        click.echo(f"Error: Cannot write report: {e}", err=True)
        sys.exit(1)

    click.echo("Done!")


@cli.command("check-ocr")
@click.option(
    "--tessdata-dir",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    default=None,
    help="Tesseract language data directory",
)
def check_ocr(tessdata_dir):
    """Report whether OCR can run in this environment."""
    settings = get_settings()
    resolved = tessdata_dir or settings.tessdata_dir or DataDirectoryResolver().resolve()
    click.echo(f"tessdata directory: {resolved or 'Tesseract default'}")

    probe = build_probe(settings, resolved)
    engine = probe.acquire()
    click.echo(f"OCR state: {probe.state.value}")

    if not engine.available:
        sys.exit(1)
    click.echo(f"Engine: {engine!r}")


def main():
    cli()


if __name__ == "__main__":
    main()
