# src/tasksync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations.
This keeps the transport swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task, TaskUpdate
    from ..tasks.task_store import SyncFailure


class TaskTransportPort(Protocol):
    """Remote task collection (HTTP/JSON in production)."""

    async def list_tasks(self) -> list[Task]: ...
    async def create_task(self, title: str, description: str | None = None) -> None: ...
    async def update_task(self, task_id: int, update: TaskUpdate) -> None: ...
    async def delete_task(self, task_id: int) -> None: ...


TasksListener = Callable[[tuple["Task", ...]], None]
# Called with the new snapshot after every collection replacement.

FailureListener = Callable[["SyncFailure"], None]
# Called once per reported failure.
