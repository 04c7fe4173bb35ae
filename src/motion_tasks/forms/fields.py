# src/motion_tasks/forms/fields.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..api.models import Priority, Project, TaskStatus


class FieldKind(StrEnum):
    TEXT = "text"
    TEXT_AREA = "text_area"
    DATE = "date"
    DROPDOWN = "dropdown"


@dataclass(frozen=True, slots=True)
class DropdownOption:
    value: str
    title: str


@dataclass(slots=True)
class FormField:
    """
    Host-agnostic description of one form widget.

    The host renders it and hands back {field.id: value} on submit.
    DATE fields yield datetime | None, everything else yields str.
    """

    id: str
    title: str
    kind: FieldKind
    default: Any = None
    placeholder: str = ""
    options: list[DropdownOption] = field(default_factory=list)


PRIORITY_TITLES: dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
    Priority.ASAP: "ASAP",
}

STATUS_TITLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


def priority_options(*, none_title: str | None = None) -> list[DropdownOption]:
    out = [DropdownOption("", none_title)] if none_title else []
    out.extend(DropdownOption(p.value, t) for p, t in PRIORITY_TITLES.items())
    return out


def status_options(*, none_title: str | None = None) -> list[DropdownOption]:
    out = [DropdownOption("", none_title)] if none_title else []
    out.extend(DropdownOption(s.value, t) for s, t in STATUS_TITLES.items())
    return out


def label_options(labels: list[str], *, none_title: str) -> list[DropdownOption]:
    return [DropdownOption("", none_title), *(DropdownOption(x, x) for x in labels)]


def project_options(projects: list[Project]) -> list[DropdownOption]:
    out = [DropdownOption("", "No Project")]
    for p in projects:
        if isinstance(p, dict) and p.get("id"):
            out.append(DropdownOption(str(p["id"]), str(p.get("name") or p["id"])))
    return out


def text_value(values: dict[str, Any], key: str) -> str:
    """Submitted text value, "" when missing."""
    raw = values.get(key)
    return "" if raw is None else str(raw)
