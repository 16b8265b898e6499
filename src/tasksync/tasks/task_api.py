# src/tasksync/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .task_models import UNSET, Task, TaskUpdate
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def find_task(store: TaskStore, task_id: int) -> Task | None:
    return store.get(task_id)


async def set_completed(store: TaskStore, task_id: int, done: bool) -> bool:
    return await store.update_task(task_id, TaskUpdate(is_completed=done))


async def toggle_completed(store: TaskStore, task_id: int) -> bool:
    """
    Flip the completion flag of a task currently in the snapshot.
    Unknown ids are not sent to the server (the snapshot is the only local truth).
    """
    task = store.get(task_id)
    if task is None:
        logger.info("toggle: task %s is not in the current collection", task_id)
        return False
    return await set_completed(store, task_id, not task.is_completed)


async def edit_task(
    store: TaskStore,
    task_id: int,
    *,
    title: str | None = None,
    description: str | None = None,
) -> bool:
    """Send only the fields that were given."""
    update = TaskUpdate(
        title=UNSET if title is None else title,
        description=UNSET if description is None else description,
    )
    return await store.update_task(task_id, update)


def summarize(tasks: Iterable[Task]) -> str:
    lines = []
    for t in tasks:
        badge = "[x]" if t.is_completed else "[ ]"
        lines.append(f"{badge} #{t.id} {t.title}")
    if not lines:
        return "No tasks yet. Add one with /add <title>."
    return "\n".join(lines)
