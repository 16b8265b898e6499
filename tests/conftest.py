# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasksync.core.state import AppState
from tasksync.tasks.task_store import TaskStore

from .fakes import FakeTransport


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tasksync-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_base_url="http://tasks.test/api",
        tasks_path="/tasks",
        request_timeout=None,
        api_token=None,
        fetch_on_start=False,
        request_headers=lambda: {},
    )


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def store(transport: FakeTransport) -> TaskStore:
    return TaskStore(transport)


@pytest.fixture()
def state(settings: SimpleNamespace, transport: FakeTransport, store: TaskStore) -> AppState:
    """AppState wired with the in-memory fake transport."""
    return AppState(settings=settings, transport=transport, store=store)  # type: ignore[arg-type]
