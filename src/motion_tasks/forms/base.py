# src/motion_tasks/forms/base.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..api.models import Project
from ..core.ports import MotionClient, Notifier, ToastStyle
from .fields import FormField

logger = logging.getLogger(__name__)


class TaskFormController:
    """
    Shared plumbing for the create/edit task forms.

    - load(): fetch projects + labels for the dropdowns; failures never block the form.
    - submit(): single in-flight operation guarded by `is_loading`, reset in `finally`.
      Errors become a failure toast (message = str(error)) and leave form state untouched.
    """

    failure_title = "Failed to save task"

    def __init__(
            self,
            client: MotionClient,
            notifier: Notifier,
            *,
            label_fallback: list[str] | None = None,
    ) -> None:
        self.client = client
        self.notifier = notifier
        self.label_fallback = list(label_fallback or [])
        self.projects: list[Project] = []
        self.labels: list[str] = []
        self.is_loading = False

    def fields(self) -> list[FormField]:
        raise NotImplementedError

    async def load(self) -> None:
        await asyncio.gather(self.load_projects(), self.load_labels())

    async def load_projects(self) -> None:
        try:
            self.projects = await self.client.get_projects()
        except Exception as e:
            logger.info("Error loading projects: %s", e)
            await self.notifier.show_toast(
                style=ToastStyle.FAILURE,
                title="Failed to load projects",
                message=str(e),
            )

    async def load_labels(self) -> None:
        try:
            self.labels = await self.client.get_labels()
        except Exception as e:
            logger.info("Error loading labels, using fallback (%d): %s", len(self.label_fallback), e)
            self.labels = list(self.label_fallback)

    async def submit(self, values: dict[str, Any]) -> bool:
        """Returns True on success, False on failure or when a submit is already running."""
        if self.is_loading:
            logger.debug("Submit ignored: a previous submit is still in flight.")
            return False

        self.is_loading = True
        try:
            await self._submit(values)
        except Exception as e:
            logger.info("%s: %s", self.failure_title, e)
            logger.debug("Submit failure details", exc_info=True)
            await self.notifier.show_toast(
                style=ToastStyle.FAILURE,
                title=self.failure_title,
                message=str(e),
            )
            return False
        finally:
            self.is_loading = False
        return True

    async def _submit(self, values: dict[str, Any]) -> None:
        raise NotImplementedError
