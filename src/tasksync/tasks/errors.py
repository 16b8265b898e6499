# src/tasksync/tasks/errors.py

from __future__ import annotations


class TaskSyncError(Exception):
    """Base class for every failure the task layer reports."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class TransportError(TaskSyncError):
    """The server answered with a non-success status."""

    def __init__(self, operation: str, status: int, body: str = "") -> None:
        detail = f"HTTP {status}"
        if body:
            detail = f"{detail} ({body[:200]})"
        super().__init__(operation, detail)
        self.status = status
        self.body = body


class DecodeError(TaskSyncError):
    """The response body does not have the expected task-sequence shape."""


class NetworkError(TaskSyncError):
    """The request could not be completed at all."""


class ValidationError(TaskSyncError):
    """Rejected on the client before any request was sent."""
