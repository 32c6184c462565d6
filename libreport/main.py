from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import typer

from . import config
from .errors import ConfigurationError
from .layout.assembler import ReportAssembler
from .layout.canvas import register_fonts
from .layout.content import PageFormat
from .models import BuildStatus, ReportBuild, ReportType, init_db, reset_engine
from .pipeline.ingest import load_books, load_loans, load_overdue, load_receipt_items
from .pipeline.records import ReceiptHeader, ReceiptItem
from .pipeline.run import (
    generate_borrowed_report,
    generate_filtered_report,
    generate_inventory_report,
    generate_overdue_report,
    generate_popularity_report,
    generate_receipt,
)
from .storage import list_builds

app = typer.Typer(help="Paginated PDF reports for library inventory, loans and warehouse receipts")

DEFAULT_RECEIPT_ITEMS = [
    ReceiptItem("2002/BPP/BT024", "PODNOŚNIK HYDRAULICZNY  OKB 15 T", 2000, "szt.", 2000.00),
    ReceiptItem("2004/BPP/W119E", "ZAWIESIE WĘŻOWE 127 / 3M", 1000, "szt.", 1000.00),
]

OutOption = typer.Option(None, "--out", help="Output directory")
PageFormatOption = typer.Option(PageFormat.A4, "--page-format", case_sensitive=False, help="Page size")
DefaultsOption = typer.Option(None, "--defaults", help="JSON file with institution defaults")
FontRegularOption = typer.Option(None, "--font-regular", help="TrueType font for regular text")
FontBoldOption = typer.Option(None, "--font-bold", help="TrueType font for bold text")
GeneratedByOption = typer.Option(None, "--generated-by", help="Name printed above the signature")


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _assembler(
    out: Optional[Path],
    page_format: PageFormat,
    defaults: Optional[Path],
    font_regular: Optional[Path],
    font_bold: Optional[Path],
) -> ReportAssembler:
    if out:
        config.set_out_dir(out)
        reset_engine()
    try:
        report_defaults = config.load_report_defaults(defaults)
        fonts = register_fonts(font_regular, font_bold)
    except ConfigurationError as exc:
        typer.echo(f"{exc.fail_code}: {exc}", err=True)
        raise typer.Exit(code=1)
    return ReportAssembler(report_defaults, page_format=page_format, fonts=fonts)


def _report(build: ReportBuild) -> None:
    typer.echo(f"{build.status.value}: {build.report_number} -> {build.path}")
    if build.status == BuildStatus.FAILED:
        typer.echo(f"{build.fail_code}: {build.fail_detail}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Pages: {build.page_count}")


@app.command()
def inventory(
    books: Path = typer.Option(..., "--books", help="Books CSV"),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
    generated_by: Optional[str] = GeneratedByOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    _report(generate_inventory_report(load_books(books), assembler, generated_by))


@app.command()
def borrowed(
    books: Path = typer.Option(..., "--books", help="Books CSV"),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
    generated_by: Optional[str] = GeneratedByOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    _report(generate_borrowed_report(load_books(books), assembler, generated_by))


@app.command()
def filtered(
    books: Path = typer.Option(..., "--books", help="Books CSV"),
    genre: Optional[str] = typer.Option(None, "--genre"),
    status: Optional[str] = typer.Option(None, "--status"),
    publisher: Optional[str] = typer.Option(None, "--publisher"),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
    generated_by: Optional[str] = GeneratedByOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    _report(
        generate_filtered_report(
            load_books(books),
            assembler,
            genre=genre,
            status=status,
            publisher=publisher,
            generated_by=generated_by,
        )
    )


@app.command()
def popularity(
    books: Path = typer.Option(..., "--books", help="Books CSV"),
    loans: Path = typer.Option(..., "--loans", help="Loans CSV (book_id, borrowed_at)"),
    genre: Optional[str] = typer.Option(None, "--genre"),
    publisher: Optional[str] = typer.Option(None, "--publisher"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=[config.DATE_FORMAT]),
    end: Optional[datetime] = typer.Option(None, "--end", formats=[config.DATE_FORMAT]),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Only the N most borrowed books"),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
    generated_by: Optional[str] = GeneratedByOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    _report(
        generate_popularity_report(
            load_books(books),
            load_loans(loans),
            assembler,
            genre=genre,
            publisher=publisher,
            start=_as_date(start),
            end=_as_date(end),
            limit=limit,
            generated_by=generated_by,
        )
    )


@app.command()
def overdue(
    loans: Path = typer.Option(..., "--loans", help="Loans CSV with due dates and borrowers"),
    genre: Optional[str] = typer.Option(None, "--genre"),
    publisher: Optional[str] = typer.Option(None, "--publisher"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=[config.DATE_FORMAT]),
    end: Optional[datetime] = typer.Option(None, "--end", formats=[config.DATE_FORMAT]),
    today: Optional[datetime] = typer.Option(None, "--today", formats=[config.DATE_FORMAT]),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
    generated_by: Optional[str] = GeneratedByOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    _report(
        generate_overdue_report(
            load_overdue(loans),
            assembler,
            start=_as_date(start),
            end=_as_date(end),
            genre=genre,
            publisher=publisher,
            generated_by=generated_by,
            report_date=_as_date(today),
        )
    )


@app.command()
def receipt(
    items: Optional[Path] = typer.Option(None, "--items", help="Items CSV; two sample items when omitted"),
    document_number: str = typer.Option("Pz 1/2006", "--number"),
    reference_number: str = typer.Option("123/06", "--reference"),
    received_on: datetime = typer.Option("2006-02-28", "--date", formats=[config.DATE_FORMAT]),
    recipient: str = typer.Option("HURTOWNIA WIERTELKO", "--recipient"),
    received_by: str = typer.Option("Jacek Krywult", "--received-by"),
    company: str = typer.Option("Projektowanie i Wdrażanie", "--company"),
    description: str = typer.Option("Systemów Informatycznych", "--description"),
    address: str = typer.Option("44-100 Gliwice", "--address"),
    street: str = typer.Option("ul. Orlat Śląskich", "--street"),
    nip: str = typer.Option("631-132-20-90", "--nip"),
    out: Optional[Path] = OutOption,
    page_format: PageFormat = PageFormatOption,
    defaults: Optional[Path] = DefaultsOption,
    font_regular: Optional[Path] = FontRegularOption,
    font_bold: Optional[Path] = FontBoldOption,
) -> None:
    assembler = _assembler(out, page_format, defaults, font_regular, font_bold)
    header = ReceiptHeader(
        company=company,
        description=description,
        address=address,
        street=street,
        nip=nip,
        document_number=document_number,
        reference_number=reference_number,
        received_on=received_on.date(),
        recipient=recipient,
        received_by=received_by,
    )
    receipt_items = load_receipt_items(items) if items else DEFAULT_RECEIPT_ITEMS
    _report(generate_receipt(header, receipt_items, assembler))


@app.command()
def history(
    out: Optional[Path] = OutOption,
    failed: bool = typer.Option(False, "--failed", help="Only failed builds"),
    report_type: Optional[ReportType] = typer.Option(None, "--type", case_sensitive=False),
) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()
    init_db()
    statuses: List[BuildStatus] = [BuildStatus.FAILED] if failed else []
    builds = list_builds(statuses, report_type=report_type)
    if not builds:
        typer.echo("No builds recorded")
        return
    for build in builds:
        line = f"{build.created_at:%Y-%m-%d %H:%M} {build.status.value} {build.report_type.value} {build.report_number}"
        if build.status == BuildStatus.FAILED:
            line += f" [{build.fail_code}]"
        typer.echo(line)


if __name__ == "__main__":
    app()
