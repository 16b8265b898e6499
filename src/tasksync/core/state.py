# src/tasksync/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from ..tasks.transport import TaskTransport


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    transport: TaskTransport
    store: TaskStore

    async def aclose(self) -> None:
        await self.transport.aclose()
