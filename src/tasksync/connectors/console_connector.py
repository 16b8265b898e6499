# src/tasksync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_api import summarize
from ..tasks.task_models import Task
from ..tasks.task_store import SyncFailure

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _read_line(prompt: str) -> str:
    """
    Read one line from stdin without blocking the event loop.

    input() runs in a daemon thread rather than the default executor: on Ctrl+C
    the main task is cancelled while input() is still blocked, and interpreter
    shutdown must not wait for that thread.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def deliver(line: str | None, exc: Exception | None) -> None:
        if fut.done():
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(line or "")

    def reader() -> None:
        try:
            line, exc = input(prompt), None
        except Exception as e:  # EOFError on closed stdin
            line, exc = None, e
        # The loop may already be closed if the console was cancelled.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(deliver, line, exc)

    threading.Thread(target=reader, name="console-input", daemon=True).start()
    return await fut


def _render(tasks: tuple[Task, ...]) -> None:
    _print_ts("Tasks:")
    print(summarize(tasks))


def _render_failure(failure: SyncFailure) -> None:
    _print_ts(f"[SYNC] {failure.describe()}")


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL over the task store.

    The list is redrawn from the store's snapshot every time the collection is
    replaced; failures are printed as they are reported.
    """
    logger.info("Console connector started.")
    unsubscribe = state.store.subscribe(_render)
    unsubscribe_failures = state.store.subscribe_failures(_render_failure)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")
    _render(state.store.tasks)

    try:
        while True:
            try:
                user_input = (await _read_line(">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break
            except asyncio.CancelledError:
                logger.info("Console cancelled, exiting.")
                print()
                raise

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                # Plain text is a shortcut for /add.
                user_input = f"/add {user_input}"

            try:
                cmd_response = await command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                cmd_response = "Internal error while handling a command."

            if cmd_response:
                _print_ts(cmd_response)
    finally:
        unsubscribe()
        unsubscribe_failures()
        logger.info("Console connector finished.")
