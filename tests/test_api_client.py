# tests/test_api_client.py

from __future__ import annotations

import logging
from datetime import UTC, datetime

import httpx
import pytest

from motion_tasks.api.client import MotionApiClient
from motion_tasks.api.errors import RequestFailed
from motion_tasks.api.models import Preferences, Priority, TaskInput, TaskStatus
from motion_tasks.api.workspace import OverrideWorkspace

from .fakes import MotionApiStub

TASK_A = {"id": "a", "name": "A", "workspaceId": "ws-pref"}
TASK_B = {"id": "b", "name": "B", "workspaceId": "ws-pref"}


def _override_client(api: MotionApiStub) -> MotionApiClient:
    return MotionApiClient(
        Preferences(api_key="k", workspace_id="ws-pref"),
        workspace=OverrideWorkspace(override_id="ws-fixed", configured_id="ws-pref"),
        transport=api.transport(),
    )


def test_client_requires_api_key() -> None:
    with pytest.raises(RuntimeError, match="API key"):
        MotionApiClient(Preferences(api_key=" ", workspace_id="ws"))


@pytest.mark.asyncio
async def test_create_task_injects_resolved_workspace_id(api: MotionApiStub) -> None:
    api.add("POST", "/tasks", json_body={"id": "new", "name": "Pay rent", "workspaceId": "ws-fixed"})
    client = _override_client(api)
    try:
        created = await client.create_task(
            TaskInput(
                title="Pay rent",
                due_date=datetime(2026, 10, 20, tzinfo=UTC),
                priority=Priority.MEDIUM,
                status=TaskStatus.TODO,
            )
        )
    finally:
        await client.aclose()

    assert created["id"] == "new"
    body = api.last_json()
    assert body["workspaceId"] == "ws-fixed"
    assert body == {
        "name": "Pay rent",
        "dueDate": "2026-10-20T00:00:00.000Z",
        "priority": "MEDIUM",
        "status": "TODO",
        "workspaceId": "ws-fixed",
    }
    assert api.last.headers["X-API-Key"] == "k"
    assert api.last.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_create_task_sends_optional_fields_when_set(client, api: MotionApiStub) -> None:
    api.add("POST", "/tasks", json_body={"id": "new"})

    await client.create_task(
        TaskInput(title="Write report", description="Q3", label="BAU", project_id="p1", duration=30)
    )

    body = api.last_json()
    assert body["description"] == "Q3"
    assert body["label"] == "BAU"
    assert body["projectId"] == "p1"
    assert body["duration"] == 30
    assert body["workspaceId"] == client.get_workspace_id() == "ws-pref"


@pytest.mark.asyncio
async def test_create_task_blank_title_sends_nothing(client, api: MotionApiStub) -> None:
    with pytest.raises(ValueError):
        await client.create_task(TaskInput(title="  "))
    assert api.requests == []


@pytest.mark.asyncio
async def test_create_task_failure_carries_status_and_body(client, api: MotionApiStub) -> None:
    api.add("POST", "/tasks", status=400, text='{"message":"dueDate is invalid"}')

    with pytest.raises(RequestFailed) as exc_info:
        await client.create_task(TaskInput(title="x"))

    err = exc_info.value
    assert err.status_code == 400
    assert err.status_text == "Bad Request"
    assert "dueDate is invalid" in err.body
    assert str(err) == 'Failed to create task: Bad Request - {"message":"dueDate is invalid"}'


@pytest.mark.asyncio
async def test_update_task_overwrites_workspace_id(api: MotionApiStub) -> None:
    api.add("PUT", "/tasks/t1", json_body={"id": "t1", "name": "Renamed", "workspaceId": "ws-fixed"})
    client = _override_client(api)
    try:
        await client.update_task({"id": "t1", "name": "Renamed", "workspaceId": "someone-else"})
    finally:
        await client.aclose()

    assert api.last.method == "PUT"
    assert api.last_json() == {"id": "t1", "name": "Renamed", "workspaceId": "ws-fixed"}


@pytest.mark.asyncio
async def test_update_task_requires_id(client, api: MotionApiStub) -> None:
    with pytest.raises(ValueError):
        await client.update_task({"name": "no id", "workspaceId": "ws-pref"})
    assert api.requests == []


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"tasks": [TASK_A, TASK_B]}, [TASK_A, TASK_B]),
        ([TASK_A, TASK_B], [TASK_A, TASK_B]),
        ({"items": [TASK_A]}, [TASK_A]),
        ({"data": [], "meta": {}}, []),
        ({"foo": "bar"}, [{"foo": "bar"}]),
    ],
)
@pytest.mark.asyncio
async def test_get_tasks_normalizes_response_shapes(client, api: MotionApiStub, payload, expected) -> None:
    api.add("GET", "/tasks", json_body=payload)

    assert await client.get_tasks() == expected
    assert api.last.url.params["workspaceId"] == "ws-pref"


@pytest.mark.asyncio
async def test_get_tasks_failure(client, api: MotionApiStub) -> None:
    api.add("GET", "/tasks", status=401, text="bad key")
    with pytest.raises(RequestFailed, match="Failed to get tasks: Unauthorized - bad key"):
        await client.get_tasks()


@pytest.mark.asyncio
async def test_get_task_by_id_is_stable_and_scoped(client, api: MotionApiStub) -> None:
    api.add("GET", "/tasks/a", json_body=TASK_A)

    first = await client.get_task_by_id("a")
    second = await client.get_task_by_id("a")

    assert first == second == TASK_A
    assert api.last.url.params["workspaceId"] == "ws-pref"


@pytest.mark.asyncio
async def test_get_task_by_id_unknown_id(client) -> None:
    with pytest.raises(RequestFailed) as exc_info:
        await client.get_task_by_id("missing")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_task(client, api: MotionApiStub) -> None:
    api.add("DELETE", "/tasks/a", status=204, text="")

    assert await client.delete_task("a") is None
    assert api.last.method == "DELETE"
    assert api.last.url.params["workspaceId"] == "ws-pref"


@pytest.mark.asyncio
async def test_delete_task_failure(client, api: MotionApiStub) -> None:
    api.add("DELETE", "/tasks/a", status=403, text="")
    with pytest.raises(RequestFailed, match="Failed to delete task: Forbidden$"):
        await client.delete_task("a")


@pytest.mark.asyncio
async def test_get_projects(client, api: MotionApiStub) -> None:
    api.add("GET", "/projects", json_body={"projects": [{"id": "p1", "name": "Home"}]})
    assert await client.get_projects() == [{"id": "p1", "name": "Home"}]

    api.add("GET", "/projects", json_body={"projects": []})
    assert await client.get_projects() == []


@pytest.mark.asyncio
async def test_get_workspaces_falls_back_to_next_endpoint(client, api: MotionApiStub) -> None:
    api.add("GET", "/workspaces", status=404, text="no such endpoint")
    api.add("GET", "/organizations", json_body={"workspaces": [{"id": "ws-pref"}]})

    assert await client.get_workspaces() == {"workspaces": [{"id": "ws-pref"}]}
    assert [r.url.path for r in api.requests] == ["/v1/workspaces", "/v1/organizations"]


@pytest.mark.asyncio
async def test_get_workspaces_first_success_short_circuits(client, api: MotionApiStub) -> None:
    api.add("GET", "/workspaces", json_body={"workspaces": []})

    assert await client.get_workspaces() == {"workspaces": []}
    assert len(api.requests) == 1


@pytest.mark.asyncio
async def test_get_workspaces_survives_transport_error(client, api: MotionApiStub) -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api.add_handler("GET", "/workspaces", _boom)
    api.add("GET", "/organizations", json_body={"id": "org"})

    assert await client.get_workspaces() == {"id": "org"}


@pytest.mark.asyncio
async def test_get_workspaces_skips_endpoint_with_non_json_body(client, api: MotionApiStub) -> None:
    api.add("GET", "/workspaces", status=200, text="<html>maintenance</html>")
    api.add("GET", "/organizations", json_body={"workspaces": [{"id": "ws-pref", "labels": []}]})

    assert await client.get_workspaces() == {"workspaces": [{"id": "ws-pref", "labels": []}]}
    assert [r.url.path for r in api.requests] == ["/v1/workspaces", "/v1/organizations"]


@pytest.mark.asyncio
async def test_get_workspaces_all_endpoints_fail(client, api: MotionApiStub) -> None:
    api.add("GET", "/workspaces", status=500, text="")
    api.add("GET", "/organizations", status=502, text="")

    with pytest.raises(RequestFailed) as exc_info:
        await client.get_workspaces()
    assert exc_info.value.status_code == 502
    assert "get workspace information" in str(exc_info.value)


@pytest.mark.asyncio
async def test_get_labels_from_workspace_data(client, api: MotionApiStub) -> None:
    api.add(
        "GET",
        "/workspaces",
        json_body={
            "workspaces": [
                {"id": "other", "labels": [{"name": "Nope"}]},
                {"id": "ws-pref", "labels": [{"name": "House"}, "Goals", {"color": "red"}]},
            ]
        },
    )
    assert await client.get_labels() == ["House", "Goals"]


@pytest.mark.asyncio
async def test_get_labels_unknown_workspace(client, api: MotionApiStub) -> None:
    api.add("GET", "/workspaces", json_body={"workspaces": [{"id": "other", "labels": ["X"]}]})
    assert await client.get_labels() == []


@pytest.mark.asyncio
async def test_requests_are_traced_without_api_key(client, api: MotionApiStub, caplog) -> None:
    api.add("GET", "/tasks", json_body=[])
    caplog.set_level(logging.DEBUG, logger="motion_tasks.api.client")

    await client.get_tasks()

    traces = [r for r in caplog.records if r.name == "motion_tasks.api.client"]
    assert traces
    assert "test-key" not in caplog.text
