# src/motion_tasks/forms/create_task.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ..api.models import Priority, TaskInput, TaskStatus, parse_duration
from ..core.ports import ToastStyle
from .base import TaskFormController
from .dates import tomorrow
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


class CreateTaskForm(TaskFormController):
    """
    "Add task" form.

    Empty optional fields (description, label, project, duration) are left out
    of the payload entirely.
    """

    failure_title = "Failed to create task"

    def fields(self) -> list[FormField]:
        return [
            FormField("name", "Name", FieldKind.TEXT, default="", placeholder="Task name"),
            FormField("description", "Description", FieldKind.TEXT_AREA, default="", placeholder="Task description"),
            FormField("dueDate", "Due Date", FieldKind.DATE, default=tomorrow()),
            FormField("priority", "Priority", FieldKind.DROPDOWN, default=Priority.MEDIUM.value, options=priority_options()),
            FormField("status", "Status", FieldKind.DROPDOWN, default=TaskStatus.TODO.value, options=status_options()),
            FormField("label", "Label", FieldKind.DROPDOWN, default="", options=label_options(self.labels, none_title="None")),
            FormField("projectId", "Project", FieldKind.DROPDOWN, default="", options=project_options(self.projects)),
            FormField("duration", "Duration", FieldKind.TEXT, default="", placeholder="Minutes, NONE or REMINDER"),
        ]

    @staticmethod
    def build_payload(values: dict[str, Any]) -> TaskInput:
        priority = text_value(values, "priority")
        status = text_value(values, "status")
        due = values.get("dueDate")

        return TaskInput(
            title=text_value(values, "name"),
            description=text_value(values, "description") or None,
            due_date=due if isinstance(due, datetime) else None,
            priority=Priority(priority) if priority else None,
            status=TaskStatus(status) if status else None,
            label=text_value(values, "label") or None,
            project_id=text_value(values, "projectId") or None,
            duration=parse_duration(text_value(values, "duration")),
        )

    async def _submit(self, values: dict[str, Any]) -> None:
        payload = self.build_payload(values)
        created = await self.client.create_task(payload)
        logger.info("Task created id=%s name=%r", (created or {}).get("id"), payload.title)

        await self.notifier.show_toast(
            style=ToastStyle.SUCCESS,
            title="Task created",
            message=f'"{payload.title}" has been added to Motion',
        )
