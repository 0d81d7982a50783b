# src/ptvd/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

from ..connectors.console_form import fill_form
from ..core.flows import (
    ValidationError,
    filter_records,
    find_record,
    on_edit,
    on_select,
    refresh_from_remote,
    show_list,
    submit_record,
)
from ..core.state import AppState
from ..records.detail import render_detail, write_detail
from ..records.export import ExportError, export_records, format_date_display
from ..sync.offline import OfflineSyncClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandIO:
    """How a command talks back: immediate lines (emit) and questions (prompt)."""

    emit: Callable[[str], None] = print
    prompt: Callable[[str], str] = input


CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandIO], str]
CommandHandler = CommandHandler2 | CommandHandler3


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, io: CommandIO | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, io or CommandIO())

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    remote = "OFF (local only)" if isinstance(state.remote, OfflineSyncClient) else "ON"
    store_path = getattr(state.store, "path", "?")
    return (
        "Status:\n"
        f"  Records: {len(state.records)}\n"
        f"  Remote sync: {remote}\n"
        f"  Snapshot: {store_path}\n"
        f"  Last save: {state.save_state.value}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> all records
    /list <keyword>  -> records whose name or phone contains keyword
    """
    show_list(state)
    keyword = " ".join(args)
    rows = filter_records(state.records, keyword)
    if not rows:
        return "No records found."

    lines = [f"{'ID':<15} {'Họ tên':<28} {'SĐT':<14} Ngày ký"]
    for r in rows:
        signed = format_date_display(r.sign_date) if r.sign_date else "-"
        lines.append(f"{str(r.id):<15} {r.full_name:<28} {r.phone:<14} {signed}")
    lines.append(f"({len(rows)} of {len(state.records)})")
    return "\n".join(lines)


def _lookup(state: AppState, args: list[str], usage: str):
    if not args:
        return None, usage
    record = find_record(state.records, args[0])
    if record is None:
        return None, f"No record with id {args[0]}."
    return record, None


def cmd_show(state: AppState, args: list[str]) -> str:
    record, err = _lookup(state, args, "Usage: /show <id>")
    if record is None:
        return err
    on_select(state, record)
    return render_detail(record)


def _unlock_edit(state: AppState, io: CommandIO) -> bool:
    password = str(getattr(state.settings, "edit_password", "") or "")
    if not password or state.edit_unlocked:
        return True
    if io.prompt("Password to edit records: ") == password:
        state.edit_unlocked = True
        return True
    return False


def _run_form(state: AppState, io: CommandIO, *, is_edit: bool) -> str:
    form = fill_form(state.editing, prompt=io.prompt, emit=io.emit)
    if form is None:
        show_list(state)
        return "Cancelled."

    try:
        outcome = asyncio.run(submit_record(state, form, is_edit=is_edit))
    except ValidationError as e:
        return f"Not saved: {e}"

    parts = [render_detail(outcome.record), outcome.message]
    if outcome.warning:
        parts.append(f"WARNING: {outcome.warning}")
    return "\n".join(parts)


def cmd_new(state: AppState, args: list[str], io: CommandIO) -> str:
    on_edit(state, None)
    return _run_form(state, io, is_edit=False)


def cmd_edit(state: AppState, args: list[str], io: CommandIO) -> str:
    record, err = _lookup(state, args, "Usage: /edit <id>")
    if record is None:
        return err
    if not _unlock_edit(state, io):
        return "Wrong password."
    on_edit(state, record)
    return _run_form(state, io, is_edit=True)


def cmd_export(state: AppState, args: list[str]) -> str:
    out_dir = getattr(state.settings, "export_dir", ".")
    try:
        path = export_records(state.records, out_dir)
    except ExportError as e:
        return str(e)
    return f"Exported {len(state.records)} records to {path}"


def cmd_print(state: AppState, args: list[str]) -> str:
    record, err = _lookup(state, args, "Usage: /print <id>")
    if record is None:
        return err
    path = write_detail(record, getattr(state.settings, "export_dir", "."))
    return f"Printable sheet written to {path}"


def cmd_sync(state: AppState, args: list[str], io: CommandIO) -> str:
    io.emit("Syncing from remote...")
    if asyncio.run(refresh_from_remote(state)):
        return f"Synced. {len(state.records)} records."
    return "Remote sync failed; keeping local records (see log)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show record count and sync status.")
registry.register("list", cmd_list, help_text="List records: /list [name or phone].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show a record: /show <id>.")
registry.register("new", cmd_new, help_text="Fill in a new intake form.", aliases=["add"])
registry.register("edit", cmd_edit, help_text="Edit a record (password protected): /edit <id>.")
registry.register("export", cmd_export, help_text="Export all records to an .xlsx file.")
registry.register("print", cmd_print, help_text="Write a printable sheet: /print <id>.")
registry.register("sync", cmd_sync, help_text="Reload all records from the remote table.")
