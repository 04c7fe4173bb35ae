# src/motion_tasks/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..core.ports import FormHost, Navigator, Notifier
from ..core.state import AppState
from ..forms.base import TaskFormController
from ..forms.create_task import CreateTaskForm
from ..forms.edit_task import EditTaskForm

logger = logging.getLogger(__name__)


class ConsoleUI:
    """Bundle of host ports handed to command handlers."""

    def __init__(
        self,
        forms: FormHost,
        notifier: Notifier,
        navigator: Navigator,
        confirm: Callable[[str], Awaitable[bool]],
    ) -> None:
        self.forms = forms
        self.notifier = notifier
        self.navigator = navigator
        self.confirm = confirm


CommandHandler = Callable[[AppState, list[str], ConsoleUI], Awaitable[str]]


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

    async def handle(self, state: AppState, line: str, ui: ConsoleUI) -> str | None:
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

        return await handler(state, args, ui)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _resolve_task_id(state: AppState, raw: str) -> str:
    """Accept a raw Motion id or "#N" referring to the N-th row of the last /list."""
    if raw.startswith("#") and raw[1:].isdigit():
        idx = int(raw[1:]) - 1
        if 0 <= idx < len(state.last_listed_ids):
            return state.last_listed_ids[idx]
        raise ValueError(f"No task {raw} in the last /list output.")
    return raw


def format_task_line(task: Any) -> str:
    if not isinstance(task, dict):
        return f"(unrecognized item) {task!r}"
    parts = [f"[{task.get('status') or '-'}]", str(task.get("name") or "(untitled)")]
    if task.get("dueDate"):
        parts.append(f"due {str(task['dueDate'])[:10]}")
    if task.get("priority"):
        parts.append(str(task["priority"]))
    if task.get("label"):
        parts.append(f"#{task['label']}")
    return " ".join(parts)


def format_task_details(task: dict[str, Any]) -> str:
    keys = ("id", "name", "description", "dueDate", "priority", "status", "label", "projectId", "duration")
    lines = ["Task:"]
    for key in keys:
        if key in task and task[key] not in (None, ""):
            lines.append(f"  {key}: {task[key]}")
    return "\n".join(lines)


async def run_form(ui: ConsoleUI, form: TaskFormController) -> bool:
    """
    Fill + submit loop. After a failed submit the form is re-opened with the
    values the user entered, until success or cancel.
    """
    await form.load()
    values: dict[str, Any] | None = None
    while True:
        values = await ui.forms.fill(form.fields(), values)
        if values is None:
            return False
        if await form.submit(values):
            return True
        if not await ui.confirm("Edit and retry?"):
            return False


async def cmd_help(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    tasks = await state.client.get_tasks()
    if not tasks:
        state.last_listed_ids = []
        return "No tasks."

    state.last_listed_ids = [str(t.get("id", "")) if isinstance(t, dict) else "" for t in tasks]
    lines = [f"Tasks ({len(tasks)}):"]
    for i, task in enumerate(tasks, start=1):
        lines.append(f"  #{i} {format_task_line(task)}")
    return "\n".join(lines)


async def cmd_show(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    if not args:
        return "Usage: /show <task id | #N>"
    task = await state.client.get_task_by_id(_resolve_task_id(state, args[0]))
    return format_task_details(task)


async def cmd_add(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    presets = list(getattr(state.settings, "label_presets", []) or [])
    form = CreateTaskForm(state.client, ui.notifier, label_fallback=presets)
    ok = await run_form(ui, form)
    return "" if ok else "Cancelled."


async def cmd_edit(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    if not args:
        return "Usage: /edit <task id | #N>"
    task = await state.client.get_task_by_id(_resolve_task_id(state, args[0]))

    def _on_updated() -> None:
        logger.debug("Task %s changed; cached list is stale.", task.get("id"))
        state.last_listed_ids = []

    form = EditTaskForm(task, state.client, ui.notifier, ui.navigator, on_task_updated=_on_updated)
    ok = await run_form(ui, form)
    return "" if ok else "Cancelled."


async def cmd_delete(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    if not args:
        return "Usage: /delete <task id | #N>"
    task_id = _resolve_task_id(state, args[0])
    if not await ui.confirm(f"Delete task {task_id}?"):
        return "Cancelled."
    await state.client.delete_task(task_id)
    state.last_listed_ids = []
    return f"Task {task_id} deleted."


async def cmd_projects(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    projects = await state.client.get_projects()
    if not projects:
        return "No projects."
    lines = [f"Projects ({len(projects)}):"]
    for p in projects:
        if isinstance(p, dict):
            lines.append(f"  {p.get('id')}  {p.get('name')}")
        else:
            lines.append(f"  {p!r}")
    return "\n".join(lines)


async def cmd_workspace(state: AppState, args: list[str], ui: ConsoleUI) -> str:
    ws_id = state.client.get_workspace_id()
    labels = await state.client.get_labels()
    label_str = ", ".join(labels) if labels else "(none)"
    return f"Workspace: {ws_id}\n  Labels: {label_str}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks in the workspace.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id | #N>.")
registry.register("add", cmd_add, help_text="Create a task (interactive form).", aliases=["new"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id | #N>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id | #N>.", aliases=["rm"])
registry.register("projects", cmd_projects, help_text="List projects in the workspace.")
registry.register("workspace", cmd_workspace, help_text="Show the workspace id in use and its labels.")
