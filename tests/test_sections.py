from __future__ import annotations

from datetime import date

import pytest

from conftest import RecordingCanvas
from libreport.errors import LayoutError
from libreport.layout.content import (
    ContinuationHeader,
    FontStyle,
    HeaderBlock,
    HeaderField,
    SignatureBlock,
    SummaryBlock,
    SummaryEntry,
)
from libreport.layout.cursor import LayoutCursor
from libreport.layout.measure import measure_header, measure_summary
from libreport.layout.sections import (
    render_continuation,
    render_header,
    render_signature,
    render_summary,
    signature_slots,
)
from libreport.layout.presets import overdue_category_block


def _cursor(page_height: float = 800) -> tuple[RecordingCanvas, LayoutCursor]:
    canvas = RecordingCanvas(page_width=595, page_height=page_height, margin=30)
    return canvas, LayoutCursor(canvas, min_bottom_margin=50)


def _rows_by_y(canvas: RecordingCanvas) -> dict[float, list[tuple]]:
    rows: dict[float, list[tuple]] = {}
    for op in canvas.texts():
        rows.setdefault(op[3], []).append(op)
    return rows


class TestSummary:
    def test_total_row_sums_counts(self) -> None:
        canvas, cursor = _cursor()
        block = SummaryBlock.counts("Podsumowanie:", "Status", [SummaryEntry("A", 2), SummaryEntry("B", 3)])
        render_summary(canvas, cursor, block)

        total_row = [row for row in _rows_by_y(canvas).values() if row[0][6] == "RAZEM"][0]
        assert [op[6] for op in total_row] == ["RAZEM", "5"]
        assert all(op[4] == FontStyle.BOLD for op in total_row)

    def test_entries_keep_supplied_order_and_zero_counts(self) -> None:
        canvas, cursor = _cursor()
        block = SummaryBlock.counts(
            "Podsumowanie:", "Status", [SummaryEntry("Wypożyczona", 0), SummaryEntry("Dostępna", 4)]
        )
        render_summary(canvas, cursor, block)
        values = canvas.text_values()
        assert values.index("Wypożyczona") < values.index("Dostępna")
        assert "0" in values

    def test_empty_block_is_a_no_op(self) -> None:
        canvas, cursor = _cursor()
        start = cursor.y
        end = render_summary(canvas, cursor, SummaryBlock.counts("Podsumowanie:", "Status", []))
        assert end == start
        assert canvas.primitives() == []

    def test_advance_equals_measure(self) -> None:
        canvas, cursor = _cursor()
        block = SummaryBlock.counts("Podsumowanie:", "Gatunek", [SummaryEntry(str(n), n) for n in range(6)])
        start = cursor.y
        end = render_summary(canvas, cursor, block)
        assert start - end == measure_summary(block)

    def test_block_that_does_not_fit_starts_a_new_page(self) -> None:
        canvas, cursor = _cursor()
        cursor.y = 150
        block = SummaryBlock.counts("Podsumowanie:", "Status", [SummaryEntry("A", 2), SummaryEntry("B", 3)])
        render_summary(canvas, cursor, block)
        assert canvas.page_number == 2
        assert canvas.texts(1) == []
        assert "RAZEM" in canvas.text_values(2)

    def test_block_taller_than_a_page_continues_with_header_row(self) -> None:
        canvas, cursor = _cursor(page_height=400)
        entries = [SummaryEntry(f"Wydawca {n}", n) for n in range(1, 21)]
        block = SummaryBlock.counts("Podsumowanie wydawców:", "Wydawca", entries)
        render_summary(canvas, cursor, block)

        assert canvas.page_number == 2
        assert min(op[3] for op in canvas.texts()) >= cursor.min_bottom_margin
        assert cursor.y >= cursor.min_bottom_margin
        assert canvas.text_values().count("Podsumowanie wydawców:") == 1
        for page in (1, 2):
            assert "Wydawca" in canvas.text_values(page)
        labels = [value for value in canvas.text_values() if value.startswith("Wydawca ")]
        assert labels == [entry.label for entry in entries]
        assert "RAZEM" in canvas.text_values(2)
        assert "210" in canvas.text_values(2)

    def test_page_without_room_for_title_header_and_row_raises(self) -> None:
        canvas, cursor = _cursor(page_height=140)
        block = SummaryBlock.counts("Podsumowanie:", "Status", [SummaryEntry("A", 2)])
        with pytest.raises(LayoutError):
            render_summary(canvas, cursor, block)

    def test_overdue_category_block_has_four_columns(self) -> None:
        canvas, cursor = _cursor()
        entries = (
            SummaryEntry("Powyżej 30 dni", 1, ("40", "40.0")),
            SummaryEntry("Do 7 dni", 2, ("5", "2.5")),
        )
        block = overdue_category_block(entries, 45)
        assert block.title == "Podsumowanie zaległości:"
        render_summary(canvas, cursor, block)
        total_row = [row for row in _rows_by_y(canvas).values() if row[0][6] == "RAZEM"][0]
        assert [op[6] for op in total_row] == ["RAZEM", "3", "45", "15.0"]


class TestSignature:
    def test_reserved_margin_forces_page_break(self) -> None:
        canvas, cursor = _cursor()
        cursor.y = 110  # 60 units left above the bottom margin
        render_signature(canvas, cursor, SignatureBlock("Jan Kowalski", "Wygenerowano dnia", date(2024, 5, 1)))
        assert canvas.page_number == 2
        assert canvas.texts(1) == []
        assert "Jan Kowalski" in canvas.text_values(2)

    def test_enough_room_draws_in_place(self) -> None:
        canvas, cursor = _cursor()
        start = cursor.y
        end = render_signature(canvas, cursor, SignatureBlock("Jan Kowalski", "Wygenerowano dnia", date(2024, 5, 1)))
        assert canvas.page_number == 1
        assert start - end == 80
        assert "Wygenerowano dnia 2024-05-01" in canvas.text_values()

    def test_three_slots_are_spread_across_the_width(self) -> None:
        canvas, cursor = _cursor()
        block = SignatureBlock(
            "Jacek Krywult", "Przyjął dnia", date(2006, 2, 28), slots=("Przyjął", "podpis", "podpis*")
        )
        render_signature(canvas, cursor, block)
        dotted = [op for op in canvas.ops if op[0] == "dotted"]
        assert len(dotted) == 3
        width = canvas.content_width
        centers = [(op[2] + op[4]) / 2 for op in dotted]
        assert centers == pytest.approx(signature_slots(30, width, 3))
        assert centers[1] == pytest.approx(30 + width / 2)

    def test_single_slot_sits_on_the_right(self) -> None:
        width = 535
        assert signature_slots(30, width, 1) == pytest.approx([30 + width - width / 6])


class TestHeaders:
    def test_header_advances_by_measured_height(self) -> None:
        canvas, cursor = _cursor()
        header = HeaderBlock(
            left_lines=("Biblioteka Miejska", "System", "ul. Akademicka 16", "44-100 Gliwice"),
            number=HeaderField("Nr raportu:", "INV-20240501-001"),
            heading="RAPORT BIBLIOTECZNY",
            date=HeaderField("Data raportu:", "2024-05-01"),
        )
        start = cursor.y
        end = render_header(canvas, cursor, header)
        assert start - end == measure_header(header)
        first = canvas.texts()[0]
        assert first[6] == "Biblioteka Miejska"
        assert first[4] == FontStyle.BOLD

    def test_receipt_header_shows_party_and_reference(self) -> None:
        canvas, cursor = _cursor()
        header = HeaderBlock(
            left_lines=("Firma",),
            number=HeaderField("Nr. dokumentu:", "Pz 1/2006", secondary="123/06"),
            heading="PZ",
            subheading="Przyjęcie na magazyn",
            date=HeaderField("Data:", "2006-02-28"),
            party=HeaderField("Nazwisko/Nazwa:", "HURTOWNIA", emphasized=True),
        )
        render_header(canvas, cursor, header)
        values = canvas.text_values()
        for expected in ("Pz 1/2006", "123/06", "PZ", "Przyjęcie na magazyn", "Nazwisko/Nazwa:", "HURTOWNIA"):
            assert expected in values

    def test_continuation_header_names_page(self) -> None:
        canvas, cursor = _cursor()
        cursor.break_page()
        header = ContinuationHeader(
            "Raport zalegających użytkowników", "Kontynuacja - strona {page}", "OVR-1", date(2024, 5, 1)
        )
        start = cursor.y
        end = render_continuation(canvas, cursor, header)
        assert start - end == 70
        values = canvas.text_values(2)
        assert "Kontynuacja - strona 2" in values
        assert "Nr raportu: OVR-1" in values
        assert "Data: 2024-05-01" in values
