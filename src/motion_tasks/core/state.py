# src/motion_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from .ports import MotionClient


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    client: MotionClient

    # Ids from the most recent /list, so commands can accept "#3" instead of a raw id.
    last_listed_ids: list[str] = field(default_factory=list)
