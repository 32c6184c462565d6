from __future__ import annotations

import json
from pathlib import Path

import pytest

from libreport.config import ReportDefaults, load_report_defaults
from libreport.errors import ConfigurationError
from libreport.layout.canvas import FontSet, page_size, register_fonts
from libreport.layout.content import FontStyle, PageFormat


def test_defaults_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "defaults.json"
    path.write_text(
        json.dumps(
            {"library_name": "Biblioteka Testowa", "library_desc": "Opis", "address": "ul. Krótka 1", "city": "Kraków"}
        ),
        encoding="utf-8",
    )
    defaults = load_report_defaults(path)
    assert defaults.library_name == "Biblioteka Testowa"
    assert defaults.author == ReportDefaults().author


def test_missing_explicit_defaults_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_report_defaults(tmp_path / "absent.json")


@pytest.mark.parametrize("payload", ["not json", "[1, 2]", '{"library_name": "x"}'])
def test_malformed_defaults_are_rejected(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "defaults.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_report_defaults(path)


def test_bundled_defaults_match_builtin_values() -> None:
    assert load_report_defaults() == ReportDefaults()


def test_page_sizes() -> None:
    assert page_size(PageFormat.A4) == pytest.approx((595.27, 841.89), abs=0.01)
    assert page_size("A5")[0] < page_size("A4")[0]
    with pytest.raises(ConfigurationError):
        page_size("Letter")


def test_missing_font_file_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        register_fonts(tmp_path / "absent.ttf")


def test_font_set_resolves_styles() -> None:
    fonts = FontSet()
    assert fonts.name(FontStyle.BOLD) == "Helvetica-Bold"
    assert fonts.name("regular") == "Helvetica"
