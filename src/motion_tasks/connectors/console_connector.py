# src/motion_tasks/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from ..api.errors import RequestFailed
from ..cli.commands import ConsoleUI
from ..cli.commands import registry as command_registry
from ..core.ports import ToastStyle
from ..core.state import AppState
from ..forms.dates import DATE_SHORTCUTS
from ..forms.fields import FieldKind, FormField

logger = logging.getLogger(__name__)

CANCEL = "/cancel"
CLEAR = "-"

InputFn = Callable[[str], str]

_CANCELLED = object()


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _show_default(field: FormField, value: Any) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d")
    if field.kind == FieldKind.DROPDOWN:
        for opt in field.options:
            if opt.value == value:
                return opt.title
    return str(value)


def parse_date_input(raw: str) -> datetime:
    """YYYY-MM-DD, "tomorrow" or "next week" -> local midnight."""
    shortcut = DATE_SHORTCUTS.get(" ".join(raw.lower().split()))
    if shortcut is not None:
        return shortcut()
    day = datetime.strptime(raw.strip(), "%Y-%m-%d")
    return day.astimezone()


class ConsoleNotifier:
    async def show_toast(self, *, style: ToastStyle, title: str, message: str | None = None) -> None:
        mark = "OK" if style == ToastStyle.SUCCESS else "FAILED"
        text = f"[{mark}] {title}"
        if message:
            text += f": {message}"
        _print_ts(text)


class ConsoleNavigator:
    """The console has no view stack; pop() only records that the form closed."""

    def __init__(self) -> None:
        self.pops = 0

    def pop(self) -> None:
        self.pops += 1


class ConsoleFormHost:
    """
    Renders FormField lists as sequential prompts.

    Enter keeps the shown default, "-" clears the value, "/cancel" aborts the form.
    Dropdowns accept an option number, value or title.
    """

    def __init__(self, input_fn: InputFn = input) -> None:
        self._input_fn = input_fn

    async def _ask(self, prompt: str) -> str:
        return (await asyncio.to_thread(self._input_fn, prompt)).strip()

    async def fill(
        self,
        fields: list[FormField],
        values: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        out: dict[str, Any] = {}
        for field in fields:
            default = values[field.id] if values and field.id in values else field.default
            got = await self._fill_one(field, default)
            if got is _CANCELLED:
                return None
            out[field.id] = got
        return out

    async def _fill_one(self, field: FormField, default: Any) -> Any:
        if field.kind == FieldKind.DROPDOWN:
            for i, opt in enumerate(field.options, start=1):
                print(f"    {i}. {opt.title}")

        shown = _show_default(field, default)
        hint = f" ({field.placeholder})" if field.placeholder and not shown else ""
        prompt = f"{field.title}{hint} [{shown}]: "

        while True:
            raw = await self._ask(prompt)
            if raw == CANCEL:
                return _CANCELLED
            if raw == "":
                return default
            if raw == CLEAR:
                return None if field.kind == FieldKind.DATE else ""

            if field.kind == FieldKind.DATE:
                try:
                    return parse_date_input(raw)
                except ValueError:
                    print('    Expected a date as YYYY-MM-DD, "tomorrow" or "next week".')
                    continue

            if field.kind == FieldKind.DROPDOWN:
                chosen = _match_option(field, raw)
                if chosen is None:
                    print("    Unknown option; enter its number or value.")
                    continue
                return chosen

            return raw


def _match_option(field: FormField, raw: str) -> str | None:
    if raw.isdigit():
        idx = int(raw) - 1
        if 0 <= idx < len(field.options):
            return field.options[idx].value
    low = raw.lower()
    for opt in field.options:
        if opt.value.lower() == low or opt.title.lower() == low:
            return opt.value
    return None


def build_console_ui(input_fn: InputFn = input) -> ConsoleUI:
    async def confirm(question: str) -> bool:
        answer = (await asyncio.to_thread(input_fn, f"{question} [y/N]: ")).strip().lower()
        return answer in ("y", "yes")

    return ConsoleUI(
        forms=ConsoleFormHost(input_fn),
        notifier=ConsoleNotifier(),
        navigator=ConsoleNavigator(),
        confirm=confirm,
    )


async def run_console_loop(state: AppState, input_fn: InputFn = input) -> None:
    logger.info("Console connector started (workspace=%s).", state.client.get_workspace_id())
    _print_ts("[CONSOLE] Use /help for commands, /add to create a task, /exit to quit.\n")

    ui = build_console_ui(input_fn)

    while True:
        try:
            user_input = (await asyncio.to_thread(input_fn, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(state, user_input, ui)
        except RequestFailed as e:
            logger.info("Request failed: %s", e)
            reply = str(e)
        except httpx.HTTPError as e:
            logger.info("Network error (%s): %s", e.__class__.__name__, e)
            reply = f"Network error: {e}"
        except ValueError as e:
            reply = str(e)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Not a command. Use /help to list available commands."
        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")
