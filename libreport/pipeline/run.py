from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence
import logging
import random

from ..config import DATE_FORMAT
from ..errors import ReportError
from ..layout.assembler import ReportAssembler
from ..layout.content import (
    HeaderBlock,
    HeaderField,
    ReportContext,
    ReportDocument,
    SignatureBlock,
    SummaryBlock,
    TableKind,
    TableModel,
)
from ..layout.presets import (
    CONTINUATION_LABELS,
    RECEIPT_FOOTER_START,
    column_spec,
    overdue_category_block,
    profile_for,
)
from ..models import BuildStatus, ReportBuild, ReportType, init_db
from ..storage import artifact_path, record_build, write_document
from .aggregate import count_by, count_loans, overdue_category_summary, sum_by
from .records import (
    BORROWED_STATUS,
    BookRecord,
    LoanRecord,
    OverdueRecord,
    ReceiptHeader,
    ReceiptItem,
)
from .rows import inventory_rows, overdue_rows, popularity_rows, rank_by_loans, receipt_footer, receipt_rows


logger = logging.getLogger(__name__)

LIBRARY_HEADING = "RAPORT BIBLIOTECZNY"
POPULARITY_HEADING = "RAPORT POPULARNOŚCI"
OVERDUE_HEADING = "RAPORT ZALEGAJĄCYCH"
POPULARITY_TITLE = "Raport popularności książek"
OVERDUE_TITLE = "Raport zalegających użytkowników"
RECEIPT_HEADING = "PZ"
RECEIPT_TITLE = "Przyjęcie na magazyn"


def generate_report_number(prefix: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{prefix}-{today.strftime('%Y%m%d')}-{random.randint(0, 999):03d}"


def build_title(
    base: str,
    genre: Optional[str] = None,
    status: Optional[str] = None,
    publisher: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> str:
    parts = [base]
    if genre:
        parts.append(f"Gatunek: {genre}")
    if status:
        parts.append(f"Status: {status}")
    if publisher:
        parts.append(f"Wydawca: {publisher}")
    if start:
        parts.append(f"Od: {start.strftime(DATE_FORMAT)}")
    if end:
        parts.append(f"Do: {end.strftime(DATE_FORMAT)}")
    return " - ".join(parts)


def _matches(value: Optional[str], wanted: Optional[str]) -> bool:
    if not wanted:
        return True
    return (value or "").lower() == wanted.lower()


def filter_books(
    books: Sequence[BookRecord],
    genre: Optional[str] = None,
    status: Optional[str] = None,
    publisher: Optional[str] = None,
) -> list[BookRecord]:
    return [
        book
        for book in books
        if _matches(book.genre, genre) and _matches(book.status, status) and _matches(book.publisher, publisher)
    ]


def filter_overdue(
    records: Sequence[OverdueRecord],
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
    genre: Optional[str] = None,
    publisher: Optional[str] = None,
) -> list[OverdueRecord]:
    """Overdue loans matching the filters, longest delay first."""
    selected = [
        record
        for record in records
        if record.is_overdue(today)
        and _matches(record.genre, genre)
        and _matches(record.publisher, publisher)
        and (start is None or record.borrowed_at >= start)
        and (end is None or record.borrowed_at <= end)
    ]
    return sorted(selected, key=lambda record: record.overdue_days(today), reverse=True)


def _report_header(heading: str, number: str, report_date: date) -> HeaderBlock:
    return HeaderBlock(
        left_lines=(),
        number=HeaderField("Nr raportu:", number),
        heading=heading,
        date=HeaderField("Data raportu:", report_date.strftime(DATE_FORMAT)),
    )


def _library_summaries(books: Sequence[BookRecord], status_ensure: Sequence[str] = ()) -> tuple[SummaryBlock, ...]:
    return (
        SummaryBlock.counts(
            "Podsumowanie statusów książek:",
            "Status",
            count_by(books, lambda book: book.status, status_ensure),
        ),
        SummaryBlock.counts("Podsumowanie gatunków książek:", "Gatunek", count_by(books, lambda book: book.genre)),
        SummaryBlock.counts("Podsumowanie wydawców:", "Wydawca", count_by(books, lambda book: book.publisher)),
    )


def _signature(actor: str, report_date: date, kind: TableKind) -> SignatureBlock:
    profile = profile_for(kind)
    return SignatureBlock(
        actor=actor,
        caption="Wygenerowano dnia",
        signed_on=report_date,
        height=profile.signature_height,
        reserve=profile.signature_reserve,
    )


def inventory_document(
    books: Sequence[BookRecord],
    title: str,
    number: str,
    report_date: date,
    generated_by: str,
    status_ensure: Sequence[str] = (),
) -> ReportDocument:
    kind = TableKind.INVENTORY
    context = ReportContext(title, number, report_date, generated_by)
    return ReportDocument(
        context=context,
        header=_report_header(LIBRARY_HEADING, number, report_date),
        table=TableModel(kind, column_spec(kind), inventory_rows(books)),
        continuation_label=CONTINUATION_LABELS[kind],
        signature=_signature(generated_by, report_date, kind),
        summaries=_library_summaries(books, status_ensure),
        profile=profile_for(kind),
    )


def render_document(
    document: ReportDocument,
    report_type: ReportType,
    assembler: ReportAssembler,
    output: Optional[Path] = None,
) -> ReportBuild:
    """
    Build one document and record the outcome.

    The artifact only appears at its path when the whole build succeeded;
    failures are logged and recorded as FAILED with the error's fail code.
    """
    init_db()
    number = document.context.report_number
    path = output or artifact_path(number)
    build = ReportBuild(
        report_type=report_type,
        report_number=number,
        title=document.context.title,
        path=str(path),
    )
    try:
        data = assembler.build(document)
        write_document(path, data)
    except ReportError as exc:
        logger.exception("Report build failed for %s", number)
        build.status = BuildStatus.FAILED
        build.fail_code = exc.fail_code
        build.fail_detail = str(exc)
    else:
        build.status = BuildStatus.READY
        build.page_count = assembler.last_page_count
        logger.info("Report %s written to %s", number, path)
    return record_build(build)


def _actor(assembler: ReportAssembler, generated_by: Optional[str]) -> str:
    return generated_by or assembler.defaults.author


def generate_inventory_report(
    books: Sequence[BookRecord],
    assembler: ReportAssembler,
    generated_by: Optional[str] = None,
    report_date: Optional[date] = None,
    output: Optional[Path] = None,
) -> ReportBuild:
    report_date = report_date or date.today()
    document = inventory_document(
        books,
        assembler.defaults.library_desc,
        generate_report_number("INV", report_date),
        report_date,
        _actor(assembler, generated_by),
    )
    return render_document(document, ReportType.INVENTORY, assembler, output)


def generate_borrowed_report(
    books: Sequence[BookRecord],
    assembler: ReportAssembler,
    generated_by: Optional[str] = None,
    report_date: Optional[date] = None,
    output: Optional[Path] = None,
) -> ReportBuild:
    report_date = report_date or date.today()
    borrowed = filter_books(books, status=BORROWED_STATUS)
    document = inventory_document(
        borrowed,
        build_title(assembler.defaults.library_desc, status=BORROWED_STATUS),
        generate_report_number("BR", report_date),
        report_date,
        _actor(assembler, generated_by),
        status_ensure=(BORROWED_STATUS,),
    )
    return render_document(document, ReportType.BORROWED, assembler, output)


def generate_filtered_report(
    books: Sequence[BookRecord],
    assembler: ReportAssembler,
    genre: Optional[str] = None,
    status: Optional[str] = None,
    publisher: Optional[str] = None,
    generated_by: Optional[str] = None,
    report_date: Optional[date] = None,
    output: Optional[Path] = None,
) -> ReportBuild:
    report_date = report_date or date.today()
    selected = filter_books(books, genre=genre, status=status, publisher=publisher)
    document = inventory_document(
        selected,
        build_title(assembler.defaults.library_desc, genre=genre, status=status, publisher=publisher),
        generate_report_number("FR", report_date),
        report_date,
        _actor(assembler, generated_by),
    )
    return render_document(document, ReportType.FILTERED, assembler, output)


def generate_popularity_report(
    books: Sequence[BookRecord],
    loans: Sequence[LoanRecord],
    assembler: ReportAssembler,
    genre: Optional[str] = None,
    publisher: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: Optional[int] = None,
    generated_by: Optional[str] = None,
    report_date: Optional[date] = None,
    output: Optional[Path] = None,
) -> ReportBuild:
    report_date = report_date or date.today()
    selected = filter_books(books, genre=genre, publisher=publisher)
    ranked = rank_by_loans(selected, count_loans(loans, start, end))
    if limit:
        ranked = ranked[:limit]
    listed = [book for book, _ in ranked]
    loans_of = {book.book_id: count for book, count in ranked}
    number = generate_report_number("POP", report_date)
    actor = _actor(assembler, generated_by)
    kind = TableKind.POPULARITY
    document = ReportDocument(
        context=ReportContext(
            build_title(POPULARITY_TITLE, genre=genre, publisher=publisher, start=start, end=end),
            number,
            report_date,
            actor,
        ),
        header=_report_header(POPULARITY_HEADING, number, report_date),
        table=TableModel(kind, column_spec(kind), popularity_rows(ranked)),
        continuation_label=CONTINUATION_LABELS[kind],
        signature=_signature(actor, report_date, kind),
        summaries=(
            SummaryBlock.counts("Podsumowanie statusów książek:", "Status", count_by(listed, lambda b: b.status)),
            SummaryBlock.counts(
                "Podsumowanie gatunków (wypożyczenia):",
                "Gatunek",
                sum_by(listed, lambda b: b.genre, lambda b: loans_of[b.book_id]),
                count_header="Wypożyczeń",
            ),
            SummaryBlock.counts(
                "Podsumowanie wydawców (wypożyczenia):",
                "Wydawca",
                sum_by(listed, lambda b: b.publisher, lambda b: loans_of[b.book_id]),
                count_header="Wypożyczeń",
            ),
        ),
        profile=profile_for(kind),
    )
    return render_document(document, ReportType.POPULARITY, assembler, output)


def generate_overdue_report(
    records: Sequence[OverdueRecord],
    assembler: ReportAssembler,
    start: Optional[date] = None,
    end: Optional[date] = None,
    genre: Optional[str] = None,
    publisher: Optional[str] = None,
    generated_by: Optional[str] = None,
    report_date: Optional[date] = None,
    output: Optional[Path] = None,
) -> ReportBuild:
    report_date = report_date or date.today()
    overdue = filter_overdue(records, report_date, start, end, genre, publisher)
    categories, total_days = overdue_category_summary(overdue, report_date)
    number = generate_report_number("OVR", report_date)
    actor = _actor(assembler, generated_by)
    kind = TableKind.OVERDUE
    document = ReportDocument(
        context=ReportContext(
            build_title(OVERDUE_TITLE, genre=genre, publisher=publisher, start=start, end=end),
            number,
            report_date,
            actor,
        ),
        header=_report_header(OVERDUE_HEADING, number, report_date),
        table=TableModel(kind, column_spec(kind), overdue_rows(overdue, report_date)),
        continuation_label=CONTINUATION_LABELS[kind],
        signature=_signature(actor, report_date, kind),
        summaries=(
            overdue_category_block(categories, total_days),
            SummaryBlock.counts("Podsumowanie gatunków:", "Gatunek", count_by(overdue, lambda r: r.genre)),
            SummaryBlock.counts("Podsumowanie wydawców:", "Wydawca", count_by(overdue, lambda r: r.publisher)),
        ),
        profile=profile_for(kind),
    )
    return render_document(document, ReportType.OVERDUE, assembler, output)


def receipt_document(receipt: ReceiptHeader, items: Sequence[ReceiptItem]) -> ReportDocument:
    kind = TableKind.RECEIPT
    received_on = receipt.received_on
    return ReportDocument(
        context=ReportContext(
            f"{RECEIPT_TITLE} {receipt.document_number}",
            receipt.document_number,
            received_on,
            receipt.received_by,
            organization=receipt.company,
        ),
        header=HeaderBlock(
            left_lines=(
                receipt.company,
                receipt.description,
                f"{receipt.address} {receipt.street}",
                f"NIP {receipt.nip}",
            ),
            number=HeaderField("Nr. dokumentu:", receipt.document_number, secondary=receipt.reference_number),
            heading=RECEIPT_HEADING,
            subheading=RECEIPT_TITLE,
            date=HeaderField("Data:", received_on.strftime(DATE_FORMAT)),
            party=HeaderField("Nazwisko/Nazwa:", receipt.recipient, emphasized=True),
        ),
        table=TableModel(
            kind,
            column_spec(kind),
            receipt_rows(items),
            footer=receipt_footer(items),
            footer_start=RECEIPT_FOOTER_START,
        ),
        continuation_label=CONTINUATION_LABELS[kind],
        signature=SignatureBlock(
            actor=receipt.received_by,
            caption="Przyjął dnia",
            signed_on=received_on,
            slots=("Przyjął", "podpis", "podpis*"),
            height=profile_for(kind).signature_height,
            reserve=profile_for(kind).signature_reserve,
        ),
        profile=profile_for(kind),
        pdf_author=receipt.company,
    )


def generate_receipt(
    receipt: ReceiptHeader,
    items: Sequence[ReceiptItem],
    assembler: ReportAssembler,
    output: Optional[Path] = None,
) -> ReportBuild:
    return render_document(receipt_document(receipt, items), ReportType.RECEIPT, assembler, output)
