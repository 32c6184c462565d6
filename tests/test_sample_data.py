from __future__ import annotations

import tempfile
import unittest
from datetime import date
from pathlib import Path

from libreport import config
from libreport.config import ReportDefaults
from libreport.layout.assembler import ReportAssembler
from libreport.models import BuildStatus, reset_engine
from libreport.pipeline.ingest import load_books, load_loans, load_overdue, load_receipt_items
from libreport.pipeline.run import generate_overdue_report, generate_popularity_report
from scripts.generate_sample_csv import generate

TODAY = date(2024, 5, 31)


class SampleDataTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        config.set_out_dir(self.root / "out")
        reset_engine()

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_generated_files_load(self) -> None:
        books_csv, loans_csv, overdue_csv, items_csv = generate(self.root, 40, TODAY, seed=3)
        self.assertEqual(len(load_books(books_csv)), 40)
        self.assertTrue(load_loans(loans_csv))
        self.assertEqual(len(load_overdue(overdue_csv)), 20)
        self.assertGreaterEqual(len(load_receipt_items(items_csv)), 2)

    def test_same_seed_same_content(self) -> None:
        first = generate(self.root / "a", 10, TODAY, seed=7)
        second = generate(self.root / "b", 10, TODAY, seed=7)
        for left, right in zip(first, second):
            self.assertEqual(left.read_text(encoding="utf-8"), right.read_text(encoding="utf-8"))

    def test_large_sample_builds_multi_page_reports(self) -> None:
        books_csv, loans_csv, overdue_csv, _ = generate(self.root, 200, TODAY, seed=1)
        assembler = ReportAssembler(ReportDefaults())
        popularity = generate_popularity_report(
            load_books(books_csv), load_loans(loans_csv), assembler, report_date=TODAY
        )
        self.assertEqual(popularity.status, BuildStatus.READY)
        self.assertGreater(popularity.page_count, 1)

        overdue = generate_overdue_report(load_overdue(overdue_csv), assembler, report_date=TODAY)
        self.assertEqual(overdue.status, BuildStatus.READY)


if __name__ == "__main__":
    unittest.main()
