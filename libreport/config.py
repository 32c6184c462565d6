from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import json

from .errors import ConfigurationError


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "reports.db"
DEFAULTS_PATH = BASE_DIR / "assets" / "report_defaults.json"

PAGE_MARGIN = 30.0
DATE_FORMAT = "%Y-%m-%d"

# First existing pair wins; Helvetica is used when none is found.
FONT_CANDIDATES: List[tuple[str, str]] = [
    (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    ),
    (
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    ),
    (
        "/Library/Fonts/Arial Unicode.ttf",
        "/Library/Fonts/Arial Bold.ttf",
    ),
]

REQUIRED_DEFAULT_KEYS = {"library_name", "library_desc", "address", "city"}


@dataclass(frozen=True)
class ReportDefaults:
    """Institution strings used when a report is built without explicit ones."""

    library_name: str = "Biblioteka Miejska"
    library_desc: str = "System Zarządzania Księgozbiorem"
    address: str = "ul. Akademicka 16"
    city: str = "44-100 Gliwice"
    author: str = "System zarządzania biblioteką"


def load_report_defaults(path: Optional[Path] = None) -> ReportDefaults:
    target = path or DEFAULTS_PATH
    if not target.exists():
        if path is not None:
            raise ConfigurationError(f"Defaults file not found: {target}")
        return ReportDefaults()
    try:
        with target.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Defaults file is not valid JSON: {target}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Defaults file must hold an object: {target}")
    missing = REQUIRED_DEFAULT_KEYS - set(payload)
    if missing:
        raise ConfigurationError(f"Defaults file missing keys: {', '.join(sorted(missing))}")
    known = {key: str(payload[key]) for key in REQUIRED_DEFAULT_KEYS | {"author"} if key in payload}
    return ReportDefaults(**known)


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "reports.db"
