# src/tasksync/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.task_api import edit_task, find_task, set_completed, summarize, toggle_completed

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string (possibly empty) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _split_title(words: list[str]) -> tuple[str, str | None]:
    """'Buy milk | two litres' -> ('Buy milk', 'two litres')."""
    title, sep, description = " ".join(words).partition("|")
    return title.strip(), (description.strip() or None) if sep else None


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    failure = state.store.last_failure
    return (
        "Status:\n"
        f"  Server: {getattr(settings, 'api_base_url', '?')}{getattr(settings, 'tasks_path', '')}\n"
        f"  Tasks: {len(state.store.tasks)}\n"
        f"  Last failure: {failure.describe() if failure else 'none'}"
    )


async def cmd_list(state: AppState, args: list[str]) -> str:
    return summarize(state.store.tasks)


async def cmd_refresh(state: AppState, args: list[str]) -> str:
    ok = await state.store.fetch_tasks()
    return "" if ok else "Refresh failed; showing the last known list."


async def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = find_task(state.store, task_id)
    if task is None:
        return f"Task #{task_id} not found. Try /refresh."
    status = "done" if task.is_completed else "pending"
    lines = [f"#{task.id} {task.title}", f"  Status: {status}"]
    if task.description:
        lines.append(f"  {task.description}")
    return "\n".join(lines)


async def cmd_add(state: AppState, args: list[str]) -> str:
    title, description = _split_title(args)
    if not title:
        return "Usage: /add <title> [| description]"
    ok = await state.store.add_task(title, description)
    return "Task added." if ok else ""


async def cmd_edit(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    title, description = _split_title(args[1:])
    if task_id is None or not (title or description):
        return "Usage: /edit <id> <title> [| description]"
    ok = await edit_task(state.store, task_id, title=title or None, description=description)
    return "Task updated." if ok else ""


async def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    ok = await set_completed(state.store, task_id, True)
    return "Marked as done." if ok else ""


async def cmd_undo(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /undo <id>"
    ok = await set_completed(state.store, task_id, False)
    return "Marked as pending." if ok else ""


async def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    if find_task(state.store, task_id) is None:
        return f"Task #{task_id} not found. Try /refresh."
    ok = await toggle_completed(state.store, task_id)
    return "Task toggled." if ok else ""


async def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    ok = await state.store.delete_task(task_id)
    return "Task deleted." if ok else ""


registry.register("help", cmd_help, "show this help", aliases=["h", "?"])
registry.register("status", cmd_status, "show server and sync status")
registry.register("list", cmd_list, "show the current task list", aliases=["ls"])
registry.register("refresh", cmd_refresh, "reload the task list from the server", aliases=["r"])
registry.register("show", cmd_show, "show one task: /show <id>")
registry.register("add", cmd_add, "add a task: /add <title> [| description]")
registry.register("edit", cmd_edit, "edit a task: /edit <id> <title> [| description]")
registry.register("done", cmd_done, "mark a task as done: /done <id>")
registry.register("undo", cmd_undo, "mark a task as pending: /undo <id>")
registry.register("toggle", cmd_toggle, "flip a task's completion: /toggle <id>")
registry.register("delete", cmd_delete, "delete a task: /delete <id>", aliases=["rm"])
