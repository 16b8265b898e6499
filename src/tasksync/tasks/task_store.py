# src/tasksync/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.ports import FailureListener, TasksListener, TaskTransportPort
from .errors import TaskSyncError, ValidationError
from .task_models import Task, TaskUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncFailure:
    operation: str
    error: TaskSyncError

    def describe(self) -> str:
        return f"{self.operation} failed: {self.error}"


class TaskStore:
    """
    In-memory task collection kept in sync with the remote service.

    Rules:
    - every mutation goes through the transport; nothing is patched locally
    - a successful mutation is followed by exactly one full re-fetch
    - a fetch replaces the whole collection (no merge)
    - failures never change the collection; they are logged and reported to
      failure listeners, never raised to the caller

    No lock is held around the collection: when several intents overlap on
    the event loop, the fetch that completes last wins.
    """

    def __init__(self, transport: TaskTransportPort) -> None:
        self._transport = transport
        self._tasks: tuple[Task, ...] = ()
        self._listeners: list[TasksListener] = []
        self._failure_listeners: list[FailureListener] = []
        self.last_failure: SyncFailure | None = None

    # ---- read model ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def subscribe(self, listener: TasksListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_failures(self, listener: FailureListener) -> Callable[[], None]:
        self._failure_listeners.append(listener)
        return lambda: self._remove(self._failure_listeners, listener)

    @staticmethod
    def _remove(listeners: list[Any], listener: Any) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # ---- internals ----

    def _replace(self, tasks: list[Task]) -> None:
        self._tasks = tuple(tasks)
        self.last_failure = None
        for listener in list(self._listeners):
            try:
                listener(self._tasks)
            except Exception:
                logger.exception("Task listener failed.")

    def _report(self, operation: str, error: TaskSyncError) -> None:
        failure = SyncFailure(operation=operation, error=error)
        self.last_failure = failure
        logger.warning("Task %s failed: %s", operation, error)
        for listener in list(self._failure_listeners):
            try:
                listener(failure)
            except Exception:
                logger.exception("Failure listener failed.")

    # ---- intents ----

    async def fetch_tasks(self) -> bool:
        try:
            tasks = await self._transport.list_tasks()
        except TaskSyncError as e:
            self._report("fetch", e)
            return False
        self._replace(tasks)
        logger.debug("Collection replaced: %d tasks", len(tasks))
        return True

    async def add_task(self, title: str, description: str | None = None) -> bool:
        if not isinstance(title, str) or not title.strip():
            self._report("add", ValidationError("add", "title must be a non-empty string"))
            return False
        if description is not None and not isinstance(description, str):
            self._report("add", ValidationError("add", "description must be a string or None"))
            return False
        try:
            await self._transport.create_task(title, description)
        except TaskSyncError as e:
            self._report("add", e)
            return False
        logger.info("Task created: %r", title)
        return await self.fetch_tasks()

    async def update_task(self, task_id: int, updates: TaskUpdate | Mapping[str, Any]) -> bool:
        try:
            if isinstance(updates, TaskUpdate):
                update = updates
            elif isinstance(updates, Mapping):
                update = TaskUpdate.from_mapping(updates)
            else:
                raise ValidationError(
                    "update", f"expected a TaskUpdate or a mapping, got {type(updates).__name__}"
                )
            update.validate()
            body = update.to_wire()
            await self._transport.update_task(task_id, update)
        except TaskSyncError as e:
            self._report("update", e)
            return False
        logger.info("Task %s updated: %s", task_id, body)
        return await self.fetch_tasks()

    async def delete_task(self, task_id: int) -> bool:
        try:
            await self._transport.delete_task(task_id)
        except TaskSyncError as e:
            self._report("delete", e)
            return False
        logger.info("Task %s deleted", task_id)
        return await self.fetch_tasks()
