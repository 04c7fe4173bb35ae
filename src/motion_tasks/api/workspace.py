# src/motion_tasks/api/workspace.py

from __future__ import annotations

"""
Workspace resolution.

Every write (and every workspace-scoped read) needs a workspace id. Which id is
used is a pluggable decision: normally the user's configured preference, or an
explicit override when MOTION_WORKSPACE_OVERRIDE is enabled.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PreferenceWorkspace:
    """Use the workspace id from the user's preferences."""

    configured_id: str

    def workspace_id(self) -> str:
        return self.configured_id


@dataclass(frozen=True, slots=True)
class OverrideWorkspace:
    """
    Use a fixed override id instead of the configured one.

    Discarding user configuration is surprising, so every resolution that
    differs from the configured id is logged.
    """

    override_id: str
    configured_id: str = ""

    def workspace_id(self) -> str:
        if self.configured_id and self.configured_id != self.override_id:
            logger.warning(
                "Workspace override active: using %s instead of configured %s",
                self.override_id,
                self.configured_id,
            )
        return self.override_id


def resolver_from_settings(settings) -> PreferenceWorkspace | OverrideWorkspace:
    """
    Build the resolver described by settings.

    Raises RuntimeError on inconsistent configuration (override enabled without an id,
    or no workspace id at all).
    """
    configured = (getattr(settings, "workspace_id", "") or "").strip()

    if getattr(settings, "workspace_override", False):
        override_id = (getattr(settings, "workspace_override_id", None) or "").strip()
        if not override_id:
            raise RuntimeError(
                "MOTION_WORKSPACE_OVERRIDE is enabled but MOTION_WORKSPACE_OVERRIDE_ID is not set."
            )
        return OverrideWorkspace(override_id=override_id, configured_id=configured)

    if not configured:
        raise RuntimeError("Motion workspace id is not set. Set MOTION_WORKSPACE_ID in your .env.")
    return PreferenceWorkspace(configured_id=configured)
