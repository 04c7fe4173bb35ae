# src/motion_tasks/api/client.py

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from .errors import RequestFailed
from .models import MotionTask, Preferences, Project, TaskInput, format_due_date
from .shapes import PROJECT_LIST_KEYS, TASK_LIST_KEYS, list_strategies, normalize_list
from .workspace import PreferenceWorkspace

if TYPE_CHECKING:
    from ..core.ports import WorkspaceResolver

logger = logging.getLogger(__name__)

BASE_URL = "https://api.usemotion.com/v1"

# Tried in order; the endpoint name has not been stable across API versions.
WORKSPACE_ENDPOINTS: tuple[str, ...] = ("/workspaces", "/organizations")

_TASK_SHAPES = list_strategies(TASK_LIST_KEYS)
_PROJECT_SHAPES = list_strategies(PROJECT_LIST_KEYS)


def _redact_headers(headers: httpx.Headers) -> dict[str, str]:
    out = dict(headers)
    if "x-api-key" in out:
        out["x-api-key"] = "***"
    return out


def _drop_unset(body: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if v is not None}


class MotionApiClient:
    """
    Thin async wrapper over the Motion REST API.

    - One request per call, no retries and no caching.
    - Non-success HTTP statuses raise RequestFailed; transport errors propagate.
    - Every write carries the workspace id from the injected resolver, whatever
      the caller supplied.
    """

    def __init__(
            self,
            preferences: Preferences,
            *,
            workspace: WorkspaceResolver | None = None,
            base_url: str = BASE_URL,
            transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not preferences.api_key or not preferences.api_key.strip():
            raise RuntimeError("Motion API key is not set. Set MOTION_API_KEY in your .env.")

        self._preferences = preferences
        self._workspace = workspace or PreferenceWorkspace(preferences.workspace_id)
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Content-Type": "application/json",
                "X-API-Key": preferences.api_key,
            },
            transport=transport,
        )
        logger.debug(
            "Motion client ready base_url=%s preference_workspace=%s workspace=%s",
            base_url,
            preferences.workspace_id,
            self.get_workspace_id(),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> MotionApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def get_workspace_id(self) -> str:
        return self._workspace.workspace_id()

    # ---- low-level helpers ----

    async def _send(
            self,
            method: str,
            path: str,
            *,
            params: dict[str, str] | None = None,
            body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        request = self._http.build_request(method, path, params=params, json=body)
        logger.debug("[REQUEST] %s %s", request.method, request.url)
        logger.debug("[HEADERS] %s", _redact_headers(request.headers))
        if body is not None:
            logger.debug("[BODY] %s", json.dumps(body, indent=2, default=str))

        response = await self._http.send(request)

        logger.debug("[RESPONSE] Status: %s %s", response.status_code, response.reason_phrase)
        logger.debug("[RESPONSE BODY] %s", response.text)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        raise RequestFailed(
            action,
            response.reason_phrase or str(response.status_code),
            body=response.text,
            status_code=response.status_code,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _scope(self) -> dict[str, str]:
        return {"workspaceId": self.get_workspace_id()}

    # ---- tasks ----

    async def create_task(self, payload: TaskInput) -> MotionTask:
        if not payload.title or not payload.title.strip():
            raise ValueError("Task name is required.")

        body = _drop_unset(
            {
                "name": payload.title,
                "description": payload.description,
                "dueDate": format_due_date(payload.due_date) if payload.due_date else None,
                "priority": payload.priority,
                "status": payload.status,
                "label": payload.label,
                "projectId": payload.project_id,
                "duration": payload.duration,
                "workspaceId": self.get_workspace_id(),
            }
        )

        response = await self._send("POST", "/tasks", body=body)
        self._raise_for_status(response, "create task")
        return self._json(response)

    async def get_tasks(self) -> list[Any]:
        """
        List tasks in the workspace.

        Items are returned as parsed; for an unrecognized response shape the whole
        object comes back wrapped in a one-element list, so callers must tolerate
        non-task items.
        """
        response = await self._send("GET", "/tasks", params=self._scope())
        self._raise_for_status(response, "get tasks")
        return normalize_list(self._json(response), _TASK_SHAPES)

    async def get_task_by_id(self, task_id: str) -> MotionTask:
        response = await self._send("GET", f"/tasks/{task_id}", params=self._scope())
        self._raise_for_status(response, "get task")
        return self._json(response)

    async def update_task(self, task: MotionTask) -> MotionTask:
        task_id = task.get("id")
        if not task_id:
            raise ValueError("Task id is required for update.")

        body: dict[str, Any] = {**task, "workspaceId": self.get_workspace_id()}

        response = await self._send("PUT", f"/tasks/{task_id}", body=body)
        self._raise_for_status(response, "update task")
        return self._json(response)

    async def delete_task(self, task_id: str) -> None:
        response = await self._send("DELETE", f"/tasks/{task_id}", params=self._scope())
        self._raise_for_status(response, "delete task")

    # ---- projects / workspaces ----

    async def get_projects(self) -> list[Project]:
        response = await self._send("GET", "/projects", params=self._scope())
        self._raise_for_status(response, "get projects")
        return normalize_list(self._json(response), _PROJECT_SHAPES)

    async def get_workspaces(self) -> Any:
        """
        Probe WORKSPACE_ENDPOINTS in order and return the first successful body.

        A failing endpoint is logged and skipped; RequestFailed is raised only when
        every candidate failed.
        """
        last_status: int | None = None

        for endpoint in WORKSPACE_ENDPOINTS:
            logger.debug("Trying workspace endpoint: %s", endpoint)
            try:
                response = await self._send("GET", endpoint)
                self._raise_for_status(response, "get workspaces")
                data = self._json(response)
            except RequestFailed as e:
                last_status = e.status_code
                logger.info("Workspace endpoint %s failed: %s", endpoint, e)
                continue
            except httpx.HTTPError as e:
                logger.info("Workspace endpoint %s error (%s): %s", endpoint, e.__class__.__name__, e)
                continue
            except ValueError as e:
                # json.JSONDecodeError: a 2xx with a non-JSON body (maintenance pages).
                logger.info("Workspace endpoint %s returned invalid JSON: %s", endpoint, e)
                continue

            logger.debug("Workspace endpoint %s succeeded", endpoint)
            return data

        raise RequestFailed(
            "get workspace information",
            "no endpoint succeeded (" + ", ".join(WORKSPACE_ENDPOINTS) + ")",
            status_code=last_status,
        )

    async def get_labels(self) -> list[str]:
        """Label names defined on the client's workspace (empty if it has none)."""
        data = await self.get_workspaces()
        workspaces = normalize_list(data, list_strategies(("workspaces",)))
        wanted = self.get_workspace_id()

        for ws in workspaces:
            if not isinstance(ws, dict) or ws.get("id") != wanted:
                continue
            labels: list[str] = []
            for raw in ws.get("labels") or []:
                name = raw.get("name") if isinstance(raw, dict) else raw
                if isinstance(name, str) and name.strip():
                    labels.append(name)
            return labels

        logger.info("Workspace %s not found in workspace list; no labels.", wanted)
        return []
