# tests/test_console_connector.py

from __future__ import annotations

import asyncio
import threading

import pytest

from tasksync.connectors import console_connector
from tasksync.connectors.console_connector import _read_line, run_console_loop
from tasksync.tasks.errors import TransportError
from tasksync.tasks.task_store import SyncFailure


@pytest.mark.asyncio
async def test_read_line_uses_daemon_thread(monkeypatch) -> None:
    seen: list[bool] = []

    def fake_input(prompt: str) -> str:
        seen.append(threading.current_thread().daemon)
        return "hello"

    monkeypatch.setattr("builtins.input", fake_input)
    assert await _read_line(">>> ") == "hello"
    assert seen == [True]


@pytest.mark.asyncio
async def test_read_line_propagates_eof(monkeypatch) -> None:
    def fake_input(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    with pytest.raises(EOFError):
        await _read_line(">>> ")


@pytest.mark.asyncio
async def test_console_runs_commands_until_exit(monkeypatch, state, transport, capsys) -> None:
    lines = iter(["/add Walk dog", "Buy milk", "/exit"])
    monkeypatch.setattr("builtins.input", lambda prompt: next(lines))

    await run_console_loop(state)

    assert [args for op, args in transport.calls if op == "create"] == [
        ("Walk dog", None),
        ("Buy milk", None),
    ]
    out = capsys.readouterr().out
    assert "[ ] #1 Walk dog" in out
    assert "[ ] #2 Buy milk" in out


@pytest.mark.asyncio
async def test_console_cancel_does_not_wait_for_blocked_input(monkeypatch, state) -> None:
    release = threading.Event()

    def blocked_input(prompt: str) -> str:
        release.wait(5)
        return "/exit"

    monkeypatch.setattr("builtins.input", blocked_input)
    task = asyncio.create_task(run_console_loop(state))
    await asyncio.sleep(0.05)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await asyncio.wait_for(task, timeout=1)

    # Listeners were removed on the way out.
    assert state.store._listeners == []
    release.set()


def test_render_failure_prints_operation(capsys) -> None:
    console_connector._render_failure(SyncFailure("delete", TransportError("delete", 404)))
    assert "delete failed" in capsys.readouterr().out
