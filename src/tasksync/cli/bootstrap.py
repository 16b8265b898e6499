# src/tasksync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP transport and the task store into AppState.

The store is built exactly once here and handed to every consumer; nothing
else constructs one.
"""

from __future__ import annotations

import logging

import httpx

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from ..tasks.transport import TaskTransport

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, client: httpx.AsyncClient | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    transport = TaskTransport(
        settings.api_base_url,
        tasks_path=settings.tasks_path,
        timeout=settings.request_timeout,
        headers=settings.request_headers(),
        client=client,
    )
    store = TaskStore(transport)

    logger.info("Task service: %s%s", settings.api_base_url, settings.tasks_path)
    return AppState(settings=settings, transport=transport, store=store)
