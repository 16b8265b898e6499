# src/tasksync/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import DecodeError, ValidationError


class _Unset:
    """Marker for "field not part of the update"."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: _Unset = _Unset()


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    description: str | None = None
    is_completed: bool = False

    @classmethod
    def from_wire(cls, raw: Any) -> Task:
        """
        Decode one task object as sent by the server:
        {"id": int, "title": str, "description": str | null, "isCompleted": bool}

        A missing "isCompleted" is read as False (the server default).
        """
        if not isinstance(raw, Mapping):
            raise DecodeError("list", f"task entry is not an object: {raw!r}")

        task_id = raw.get("id")
        # bool is a subclass of int; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise DecodeError("list", f"task id must be an integer: {task_id!r}")

        title = raw.get("title")
        if not isinstance(title, str):
            raise DecodeError("list", f"task {task_id} has no string title")

        description = raw.get("description")
        if description is not None and not isinstance(description, str):
            raise DecodeError("list", f"task {task_id} description must be a string")

        done = raw.get("isCompleted", False)
        if not isinstance(done, bool):
            raise DecodeError("list", f"task {task_id} isCompleted must be a boolean")

        return cls(id=task_id, title=title, description=description, is_completed=done)

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "title": self.title, "isCompleted": self.is_completed}
        if self.description is not None:
            out["description"] = self.description
        return out


def decode_task_list(payload: Any) -> list[Task]:
    if not isinstance(payload, list):
        raise DecodeError("list", f"expected a JSON array, got {type(payload).__name__}")
    return [Task.from_wire(item) for item in payload]


# wire name -> attribute name
_UPDATE_FIELDS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "isCompleted": "is_completed",
    "is_completed": "is_completed",
}


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """
    Field mask for a sparse update.

    Only fields that were explicitly given are sent. Passing description=None
    clears the description on the server (serialized as null).
    """

    title: str | _Unset = UNSET
    description: str | None | _Unset = UNSET
    is_completed: bool | _Unset = UNSET

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any]) -> TaskUpdate:
        kwargs: dict[str, Any] = {}
        for key, value in fields.items():
            attr = _UPDATE_FIELDS.get(key)
            if attr is None:
                raise ValidationError("update", f"field {key!r} cannot be updated")
            kwargs[attr] = value
        return cls(**kwargs)

    def validate(self) -> None:
        """Raise ValidationError unless the mask is non-empty and every set field has its wire type."""
        if self.is_empty():
            raise ValidationError("update", "no fields to update")
        if self.title is not UNSET and (not isinstance(self.title, str) or not self.title.strip()):
            raise ValidationError("update", "title must be a non-empty string")
        if self.description is not UNSET and not isinstance(self.description, (str, type(None))):
            raise ValidationError("update", "description must be a string or None")
        if self.is_completed is not UNSET and not isinstance(self.is_completed, bool):
            raise ValidationError("update", "isCompleted must be a boolean")

    def is_empty(self) -> bool:
        return not self.to_wire()

    def to_wire(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.title is not UNSET:
            body["title"] = self.title
        if self.description is not UNSET:
            body["description"] = self.description
        if self.is_completed is not UNSET:
            body["isCompleted"] = self.is_completed
        return body
