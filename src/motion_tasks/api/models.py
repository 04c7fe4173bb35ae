# src/motion_tasks/api/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import NotRequired, TypedDict


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    ASAP = "ASAP"


class TaskStatus(StrEnum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class DurationSentinel(StrEnum):
    """Non-numeric duration values accepted by Motion."""

    NONE = "NONE"
    REMINDER = "REMINDER"


# Minutes, or one of the sentinels.
Duration = int | DurationSentinel


class MotionTask(TypedDict):
    """Task as sent to / returned by the Motion API (JSON object)."""

    name: str
    workspaceId: str
    id: NotRequired[str]
    description: NotRequired[str]
    dueDate: NotRequired[str]
    priority: NotRequired[str]
    status: NotRequired[str]
    label: NotRequired[str]
    projectId: NotRequired[str]
    duration: NotRequired[int | str]


class Project(TypedDict):
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Preferences:
    """User preferences supplied by the host at configuration time."""

    api_key: str
    workspace_id: str


@dataclass(slots=True)
class TaskInput:
    """
    Create-task payload as collected by the create form.

    Only `title` is required; unset optional fields are left out of the request body.
    """

    title: str
    description: str | None = None
    due_date: datetime | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    label: str | None = None
    project_id: str | None = None
    duration: Duration | None = None


def format_due_date(value: datetime) -> str:
    """
    Serialize a due date as an ISO-8601 UTC timestamp with millisecond precision.

    Naive datetimes are interpreted as local time (a date picker yields local midnight).
    """
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_due_date(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_duration(raw: str | int | None) -> Duration | None:
    """
    Parse a user/API supplied duration.

    >>> parse_duration("30")
    30
    >>> parse_duration("reminder")
    <DurationSentinel.REMINDER: 'REMINDER'>
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    s = raw.strip()
    if not s:
        return None
    if s.isdigit():
        return int(s)
    try:
        return DurationSentinel(s.upper())
    except ValueError:
        raise ValueError(f"Invalid duration: {raw!r} (minutes, NONE or REMINDER)") from None
