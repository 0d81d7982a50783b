# src/ptvd/connectors/console_form.py

"""
Interactive intake form for the console connector.

Walks the catalog section by section. At every prompt:
- empty input keeps the current value,
- "-" clears it,
- "/cancel" abandons the form (returns None).
Multi-select fields take option numbers ("1 3" or "1,3") and toggle them.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable

from ..records.catalog import SECTIONS, FormField, InputKind
from ..records.models import Record, toggle_tag

Prompt = Callable[[str], str]
Emit = Callable[[str], None]

CANCEL = "/cancel"
CLEAR = "-"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FormCancelled(Exception):
    pass


def _ask(prompt: Prompt, text: str) -> str:
    answer = prompt(text).strip()
    if answer.lower() == CANCEL:
        raise FormCancelled()
    return answer


def _parse_numbers(raw: str, n_options: int) -> list[int] | None:
    parts = [p for p in re.split(r"[\s,;]+", raw) if p]
    out: list[int] = []
    for p in parts:
        if not p.isdigit():
            return None
        idx = int(p)
        if idx < 1 or idx > n_options:
            return None
        out.append(idx - 1)
    return out


def _fill_field(f: FormField, label: str, current, prompt: Prompt, emit: Emit):
    if f.kind in (InputKind.TEXT, InputKind.LONG_TEXT):
        answer = _ask(prompt, f"{label} [{current}]: ")
        if answer == CLEAR:
            return ""
        return answer or current

    if f.kind == InputKind.DATE:
        while True:
            answer = _ask(prompt, f"{label} (YYYY-MM-DD) [{current}]: ")
            if not answer:
                return current
            if answer == CLEAR:
                return ""
            if _DATE_RE.match(answer):
                return answer
            emit("  Date must look like 2024-05-31.")

    if f.kind == InputKind.CONSENT:
        mark = "x" if current else " "
        answer = _ask(prompt, f"[{mark}] {f.label}? (y/n): ").lower()
        if not answer:
            return current
        if answer in ("y", "yes", "1", "có", "co"):
            return f.label
        return ""

    # CHOICE / MULTI share the numbered option list.
    emit(f"{label}:")
    for i, opt in enumerate(f.options, start=1):
        on = current == opt if f.kind == InputKind.CHOICE else opt in current
        emit(f"  {i}. [{'x' if on else ' '}] {opt}")

    while True:
        hint = "number" if f.kind == InputKind.CHOICE else "numbers to toggle"
        answer = _ask(prompt, f"  {hint}: ")
        if not answer:
            return current
        if answer == CLEAR:
            return "" if f.kind == InputKind.CHOICE else []
        picked = _parse_numbers(answer, len(f.options))
        if picked is None or (f.kind == InputKind.CHOICE and len(picked) != 1):
            emit(f"  Enter {'one number' if f.kind == InputKind.CHOICE else 'numbers'} between 1 and {len(f.options)}.")
            continue
        if f.kind == InputKind.CHOICE:
            return f.options[picked[0]]
        tags = list(current)
        for idx in picked:
            tags = toggle_tag(tags, f.options[idx])
        return tags


def fill_form(initial: Record | None, *, prompt: Prompt = input, emit: Emit = print) -> Record | None:
    """Prompt for every catalog field; returns the edited copy or None if cancelled."""
    form = copy.deepcopy(initial) if initial is not None else Record()
    emit("(Enter keeps the value, '-' clears it, '/cancel' aborts.)")
    try:
        for section in SECTIONS:
            emit("")
            emit(section.title)
            for f in section.fields:
                if f.shown_when is not None:
                    other, wanted = f.shown_when
                    if getattr(form, other) != wanted:
                        continue
                label = f"{f.label} *" if f.required else f.label
                setattr(form, f.attr, _fill_field(f, label, getattr(form, f.attr), prompt, emit))
    except FormCancelled:
        return None
    return form
