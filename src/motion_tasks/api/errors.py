# src/motion_tasks/api/errors.py

from __future__ import annotations


class RequestFailed(Exception):
    """
    The Motion API answered with a non-success HTTP status.

    str(err) is the user-facing text shown in failure toasts:
        "Failed to <action>: <status text>[ - <response body>]"
    """

    def __init__(
        self,
        action: str,
        status_text: str,
        body: str = "",
        status_code: int | None = None,
    ) -> None:
        self.action = action
        self.status_text = status_text
        self.body = body
        self.status_code = status_code
        msg = f"Failed to {action}: {status_text}"
        if body:
            msg += f" - {body}"
        super().__init__(msg)
