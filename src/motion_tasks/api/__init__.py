"""
Motion API client.

Components:
- client.py: MotionApiClient (async httpx wrapper, one request per call)
- models.py: task/project payload types and enums
- shapes.py: ordered list-response normalization strategies
- workspace.py: workspace id resolution (preference or explicit override)
- errors.py: RequestFailed
"""

from .client import MotionApiClient
from .errors import RequestFailed
from .models import MotionTask, Preferences, Priority, Project, TaskInput, TaskStatus

__all__ = [
    "MotionApiClient",
    "MotionTask",
    "Preferences",
    "Priority",
    "Project",
    "RequestFailed",
    "TaskInput",
    "TaskStatus",
]
