from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel, create_engine, Session

from . import config


class ReportType(str, Enum):
    INVENTORY = "INVENTORY"
    BORROWED = "BORROWED"
    FILTERED = "FILTERED"
    POPULARITY = "POPULARITY"
    OVERDUE = "OVERDUE"
    RECEIPT = "RECEIPT"


class BuildStatus(str, Enum):
    PENDING = "PENDING"
    READY = "READY"
    FAILED = "FAILED"


class ReportBuild(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    report_type: ReportType
    report_number: str = Field(index=True)
    title: str
    path: str
    status: BuildStatus = Field(default=BuildStatus.PENDING)
    page_count: int = 0
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
