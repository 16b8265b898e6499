# src/tasksync/tasks/transport.py

"""
HTTP transport for the remote task service.

Stateless request/response mapping: one method per wire operation, typed
results, errors surfaced as TaskSyncError subclasses. No retries, no caching.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

import httpx

from .errors import DecodeError, NetworkError, TransportError
from .task_models import Task, TaskUpdate, decode_task_list

logger = logging.getLogger(__name__)


class TaskTransport:
    def __init__(
        self,
        base_url: str,
        *,
        tasks_path: str = "/tasks",
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._tasks_path = "/" + tasks_path.strip("/")
        self._owns_client = client is None
        if client is None:
            # timeout=None: requests resolve or fail on the transport's own terms.
            client = httpx.AsyncClient(
                base_url=base_url.rstrip("/"),
                timeout=httpx.Timeout(timeout),
                headers={"Content-Type": "application/json", **(headers or {})},
            )
        self._client = client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TaskTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    def _task_url(self, task_id: int) -> str:
        return f"{self._tasks_path}/{int(task_id)}"

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s %s body=%s", operation, method, url, payload)
        try:
            resp = await self._client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            logger.info("%s: request failed (%s)", operation, e.__class__.__name__)
            raise NetworkError(operation, str(e) or e.__class__.__name__) from e

        if not resp.is_success:
            logger.info("%s: server returned HTTP %s", operation, resp.status_code)
            raise TransportError(operation, resp.status_code, resp.text)
        return resp

    # ---- public API ----

    async def list_tasks(self) -> list[Task]:
        resp = await self._send("list", "GET", self._tasks_path)
        try:
            payload = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError("list", f"response is not valid JSON: {e}") from e
        tasks = decode_task_list(payload)
        logger.debug("list: %d tasks", len(tasks))
        return tasks

    async def create_task(self, title: str, description: str | None = None) -> None:
        body: dict[str, Any] = {"title": title}
        if description is not None:
            body["description"] = description
        # The created record (if any) is not used; the store re-fetches.
        await self._send("create", "POST", self._tasks_path, body)

    async def update_task(self, task_id: int, update: TaskUpdate) -> None:
        await self._send("update", "PUT", self._task_url(task_id), update.to_wire())

    async def delete_task(self, task_id: int) -> None:
        await self._send("delete", "DELETE", self._task_url(task_id))
