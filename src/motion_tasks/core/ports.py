# src/motion_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the form controllers.

Controllers depend on Protocols instead of concrete implementations.
This keeps the host UI (console, tests, anything else) swappable.
"""

from enum import StrEnum
from typing import Any, Awaitable, Protocol

from ..api.models import MotionTask, Project, TaskInput


class ToastStyle(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


class Notifier(Protocol):
    """Toast-style user notification (success/failure + title/message)."""

    def show_toast(
            self,
            *,
            style: ToastStyle,
            title: str,
            message: str | None = None,
    ) -> Awaitable[None]: ...


class Navigator(Protocol):
    """Closes the current view (back to the previous screen)."""

    def pop(self) -> None: ...


class WorkspaceResolver(Protocol):
    def workspace_id(self) -> str: ...


class MotionClient(Protocol):
    """The subset of the API client used by controllers and commands."""

    def get_workspace_id(self) -> str: ...
    async def create_task(self, payload: TaskInput) -> MotionTask: ...
    async def get_tasks(self) -> list[Any]: ...
    async def get_task_by_id(self, task_id: str) -> MotionTask: ...
    async def update_task(self, task: MotionTask) -> MotionTask: ...
    async def delete_task(self, task_id: str) -> None: ...
    async def get_projects(self) -> list[Project]: ...
    async def get_workspaces(self) -> Any: ...
    async def get_labels(self) -> list[str]: ...


class FormHost(Protocol):
    """
    Renders a list of FormField descriptions and collects values.

    `values` seeds the widgets (e.g. previously entered values after a failed submit).
    Returns {field_id: value}, or None when the user cancels.
    """

    def fill(
            self,
            fields: list[Any],
            values: dict[str, Any] | None = None,
    ) -> Awaitable[dict[str, Any] | None]: ...
