from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from slugify import slugify
from sqlmodel import select

from . import config
from .errors import RenderError
from .models import BuildStatus, ReportBuild, ReportType, get_session


def report_dir(base_dir: Path | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    root.mkdir(parents=True, exist_ok=True)
    return root


def artifact_path(report_number: str, base_dir: Path | None = None) -> Path:
    filename = f"{slugify(report_number) or 'report'}.pdf"
    return report_dir(base_dir) / filename


def write_document(path: Path, data: bytes) -> Path:
    """Write the serialized document next to its target, then rename it into place."""
    temp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_bytes(data)
        temp_path.replace(path)
    except OSError as exc:
        if temp_path.exists():
            temp_path.unlink()
        raise RenderError(f"Failed to write {path}: {exc}") from exc
    return path


def record_build(build: ReportBuild) -> ReportBuild:
    with get_session() as session:
        session.add(build)
        session.commit()
        session.refresh(build)
    return build


def list_builds(
    statuses: List[BuildStatus] | None = None,
    report_type: Optional[ReportType] = None,
) -> List[ReportBuild]:
    with get_session() as session:
        statement = select(ReportBuild)
        if report_type:
            statement = statement.where(ReportBuild.report_type == report_type)
        if statuses:
            statement = statement.where(ReportBuild.status.in_(list(statuses)))
        statement = statement.order_by(ReportBuild.created_at)
        return list(session.exec(statement))
