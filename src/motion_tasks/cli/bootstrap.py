# src/motion_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the workspace resolver and the Motion API client into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..api.client import MotionApiClient
from ..api.workspace import resolver_from_settings
from ..config import get_settings
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, transport: httpx.AsyncBaseTransport | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises RuntimeError when the API key or workspace configuration is missing/inconsistent.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    client = MotionApiClient(
        settings.preferences(),
        workspace=resolver_from_settings(settings),
        base_url=settings.base_url,
        transport=transport,
    )
    logger.info("Motion client configured (workspace=%s).", client.get_workspace_id())

    return AppState(settings=settings, client=client)
