# tests/conftest.py

from __future__ import annotations

import time
from pathlib import Path
from types import SimpleNamespace

import pytest
import pytest_asyncio

from motion_tasks.api.client import MotionApiClient
from motion_tasks.api.models import Preferences
from motion_tasks.core.state import AppState

from .fakes import FakeMotionClient, FakeNavigator, FakeNotifier, MotionApiStub

WORKSPACE_ID = "ws-pref"


@pytest.fixture()
def local_tz(monkeypatch: pytest.MonkeyPatch):
    """Switch the process local timezone for one test (POSIX TZ + tzset)."""

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="motion-tasks-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_key="test-key",
        base_url="https://api.usemotion.com/v1",
        workspace_id=WORKSPACE_ID,
        workspace_override=False,
        workspace_override_id=None,
        label_presets=["House", "Personal"],
        preferences=lambda: Preferences(api_key="test-key", workspace_id=WORKSPACE_ID),
    )


@pytest.fixture()
def api() -> MotionApiStub:
    return MotionApiStub()


@pytest_asyncio.fixture()
async def client(api: MotionApiStub):
    """Real MotionApiClient talking to the in-process stub."""
    c = MotionApiClient(
        Preferences(api_key="test-key", workspace_id=WORKSPACE_ID),
        transport=api.transport(),
    )
    yield c
    await c.aclose()


@pytest.fixture()
def fake_client() -> FakeMotionClient:
    return FakeMotionClient(
        tasks=[
            {"id": "t1", "name": "Pay rent", "status": "TODO", "workspaceId": "ws-test"},
            {"id": "t2", "name": "Call mum", "status": "DONE", "label": "Personal", "workspaceId": "ws-test"},
        ],
        projects=[{"id": "p1", "name": "Home"}],
        labels=["House", "Personal"],
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture()
def state(settings: SimpleNamespace, fake_client: FakeMotionClient) -> AppState:
    return AppState(settings=settings, client=fake_client)
