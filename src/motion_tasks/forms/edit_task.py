# src/motion_tasks/forms/edit_task.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..api.models import MotionTask, Priority, TaskStatus, format_due_date, parse_due_date, parse_duration
from ..core.ports import MotionClient, Navigator, Notifier, ToastStyle
from .base import TaskFormController
from .fields import (
    FieldKind,
    FormField,
    label_options,
    priority_options,
    project_options,
    status_options,
    text_value,
)

logger = logging.getLogger(__name__)


class EditTaskForm(TaskFormController):
    """
    "Edit task" form, seeded from an existing task.

    Unlike the create form, an emptied description is sent as "" so that it
    actually clears the remote value. Emptied dropdowns (label, project,
    priority, status) are removed from the payload.
    """

    failure_title = "Failed to update task"

    def __init__(
            self,
            task: MotionTask,
            client: MotionClient,
            notifier: Notifier,
            navigator: Navigator,
            *,
            on_task_updated: Callable[[], None] | None = None,
    ) -> None:
        # Labels fall back to an empty set here: the current label stays selectable below.
        super().__init__(client, notifier, label_fallback=[])
        self.task = task
        self.navigator = navigator
        self.on_task_updated = on_task_updated

    def fields(self) -> list[FormField]:
        t = self.task
        labels = list(self.labels)
        if t.get("label") and t["label"] not in labels:
            labels.append(t["label"])
        duration = t.get("duration")

        return [
            FormField("name", "Task Name", FieldKind.TEXT, default=t.get("name", ""), placeholder="Enter task name"),
            FormField(
                "description",
                "Description",
                FieldKind.TEXT_AREA,
                default=t.get("description", ""),
                placeholder="Enter task description",
            ),
            FormField("dueDate", "Due Date", FieldKind.DATE, default=parse_due_date(t.get("dueDate"))),
            FormField(
                "priority",
                "Priority",
                FieldKind.DROPDOWN,
                default=t.get("priority") or "",
                options=priority_options(none_title="No Priority"),
            ),
            FormField(
                "status",
                "Status",
                FieldKind.DROPDOWN,
                default=t.get("status") or "",
                options=status_options(none_title="No Status"),
            ),
            FormField(
                "label",
                "Label",
                FieldKind.DROPDOWN,
                default=t.get("label") or "",
                options=label_options(labels, none_title="No Label"),
            ),
            FormField(
                "projectId",
                "Project",
                FieldKind.DROPDOWN,
                default=t.get("projectId") or "",
                options=project_options(self.projects),
            ),
            FormField(
                "duration",
                "Duration",
                FieldKind.TEXT,
                default="" if duration is None else str(duration),
                placeholder="Minutes, NONE or REMINDER",
            ),
        ]

    def build_payload(self, values: dict[str, Any]) -> MotionTask:
        updated: dict[str, Any] = dict(self.task)
        updated["name"] = text_value(values, "name")
        updated["description"] = text_value(values, "description")

        due = values.get("dueDate")
        if isinstance(due, datetime):
            updated["dueDate"] = format_due_date(due)
        else:
            updated.pop("dueDate", None)

        optional = {
            "priority": lambda v: Priority(v).value,
            "status": lambda v: TaskStatus(v).value,
            "label": str,
            "projectId": str,
        }
        for key, convert in optional.items():
            raw = text_value(values, key)
            if raw:
                updated[key] = convert(raw)
            else:
                updated.pop(key, None)

        if "duration" in values:
            duration = parse_duration(text_value(values, "duration"))
            if duration is None:
                updated.pop("duration", None)
            else:
                updated["duration"] = duration

        updated["workspaceId"] = self.client.get_workspace_id()
        return updated  # type: ignore[return-value]

    async def _submit(self, values: dict[str, Any]) -> None:
        payload = self.build_payload(values)
        await self.client.update_task(payload)
        logger.info("Task updated id=%s", payload.get("id"))

        await self.notifier.show_toast(style=ToastStyle.SUCCESS, title="Task updated")

        if self.on_task_updated is not None:
            self.on_task_updated()
        self.navigator.pop()
