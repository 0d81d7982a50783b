# src/ptvd/records/detail.py

"""Printable plain-text consultation sheet for a single Record."""

from __future__ import annotations

import logging
from pathlib import Path

from .catalog import SECTIONS, InputKind
from .export import format_date_display
from .models import Record

logger = logging.getLogger(__name__)

TITLE = "PHIẾU THÔNG TIN TƯ VẤN DA"
NOTICE = "Thông tin bảo mật – chỉ sử dụng cho mục đích tư vấn & chăm sóc da."
WIDTH = 72

# The consent rows on paper use short labels instead of the checkbox text.
_DETAIL_LABELS = {
    "consent_skin_check": "Khảo sát & soi da",
    "consent_treatment": "Tư vấn liệu trình",
}


def _value(record: Record, attr: str, kind: InputKind) -> str:
    val = getattr(record, attr)
    if kind == InputKind.MULTI:
        return ", ".join(val or [])
    if kind == InputKind.DATE:
        return format_date_display(val)
    return val or ""


def render_detail(record: Record) -> str:
    lines = [TITLE.center(WIDTH).rstrip(), NOTICE.center(WIDTH).rstrip(), ""]

    for section in SECTIONS:
        lines.append(section.title)
        lines.append("-" * len(section.title))
        for f in section.fields:
            if f.shown_when is not None:
                # Notes only print when filled in.
                if not getattr(record, f.attr):
                    continue
            label = _DETAIL_LABELS.get(f.attr, f.label)
            lines.append(f"  {label:<26} {_value(record, f.attr, f.kind)}".rstrip())
        lines.append("")

    half = WIDTH // 2
    lines.append(f"{'Khách hàng':<{half}}{'Tư vấn viên'}")
    lines.append(f"{'(Ký và ghi rõ họ tên)':<{half}}{'(Ký và ghi rõ họ tên)'}")
    lines.extend(["", "", ""])
    lines.append(record.full_name)
    return "\n".join(lines) + "\n"


def write_detail(record: Record, out_dir: str | Path) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"phieu_{record.id}.txt"
    path.write_text(render_detail(record), "utf-8")
    logger.info("Wrote printable sheet for record %s to %s", record.id, path)
    return path
