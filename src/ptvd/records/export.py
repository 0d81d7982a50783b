# src/ptvd/records/export.py

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import UTC, date, datetime
from pathlib import Path

from openpyxl import Workbook

from .models import Record

logger = logging.getLogger(__name__)

SHEET_TITLE = "Danh sách"
FILE_PREFIX = "danh_sach_phieu_tu_van"

# (header label, Record attribute)
EXPORT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("ID", "id"),
    ("Họ và tên", "full_name"),
    ("Ngày sinh", "dob"),
    ("Giới tính", "gender"),
    ("SĐT", "phone"),
    ("Email", "email"),
    ("Mã SV", "student_code"),
    ("Khoa / Ngành", "major"),
    ("Tình trạng chính", "main_issues"),
    ("Mục tiêu chính", "main_goal"),
    ("Ngày lập phiếu", "created_at"),
)
DATE_COLUMNS = frozenset({"dob", "created_at"})

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


class ExportError(Exception):
    pass


def format_date_display(value: str | None) -> str:
    """'2024-03-05' or '2024-03-05T08:00:00Z' -> '05/03/24'; other text unchanged."""
    if not value:
        return ""
    m = _ISO_DATE.match(value)
    if not m:
        return value
    y, mth, d = m.groups()
    return f"{d}/{mth}/{y[-2:]}"


def export_filename(today: date) -> str:
    return f"{FILE_PREFIX}_{today.isoformat()}.xlsx"


def build_rows(records: Sequence[Record]) -> list[list[object]]:
    rows: list[list[object]] = [[label for label, _ in EXPORT_COLUMNS]]
    for r in records:
        row: list[object] = []
        for _, attr in EXPORT_COLUMNS:
            val = getattr(r, attr)
            if attr in DATE_COLUMNS:
                val = format_date_display(val)
            row.append("" if val is None else val)
        rows.append(row)
    return rows


def export_records(records: Sequence[Record], out_dir: str | Path, *, today: date | None = None) -> Path:
    """Write records to `<out_dir>/danh_sach_phieu_tu_van_<date>.xlsx` and return the path."""
    if not records:
        raise ExportError("No records to export.")

    today = today or datetime.now(UTC).date()
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(today)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    for row in build_rows(records):
        ws.append(row)

    try:
        wb.save(path)
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e

    logger.info("Exported %d records to %s", len(records), path)
    return path
