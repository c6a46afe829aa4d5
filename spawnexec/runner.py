"""Command runner — the public run() operation.

Each call validates its input, starts exactly one worker thread that runs
the command through the shell executor, and resolves a Future exactly once
with either a CommandResult or one of the errors in spawnexec.errors.
"""

from __future__ import annotations

import asyncio
import os
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Future
from typing import Any

from spawnexec.errors import InvalidArgument, NonZeroExit, SpawnFailure
from spawnexec.executors.shell import ShellExecutor
from spawnexec.models import CommandRequest, CommandResult

Callback = Callable[[BaseException | None, str | None, str | None], Any]


def build_request(command: Any, options: Any = None) -> CommandRequest:
    """Validate caller input. Raises InvalidArgument, never touches the OS."""
    if not isinstance(command, str):
        raise InvalidArgument(
            f"Argument command must be a string, got {type(command).__name__}"
        )
    if not command:
        raise InvalidArgument("Argument command must not be empty")
    if "\0" in command:
        raise InvalidArgument("Argument command must not contain NUL characters")
    try:
        os.fsencode(command)
    except UnicodeEncodeError as e:
        raise InvalidArgument(f"Argument command cannot be encoded: {e.reason}") from e
    if options is None:
        options = {}
    elif not isinstance(options, Mapping):
        raise InvalidArgument(
            f"Argument options must be a mapping, got {type(options).__name__}"
        )
    return CommandRequest(command=command, options=options)


def translate(request: CommandRequest, executor: ShellExecutor) -> CommandResult:
    """Run the request once and map its outcome to a result or an error.

    SpawnFailure propagates from the executor unchanged. A non-zero status
    becomes NonZeroExit and the captured output is dropped.
    """
    outcome = executor.run(request.command)
    if outcome.exit_status != 0:
        raise NonZeroExit(outcome.exit_status)
    return CommandResult(stdout=outcome.stdout, stderr=outcome.stderr)


def _complete(request: CommandRequest, future: Future,
              callback: Callback | None, executor: ShellExecutor) -> None:
    try:
        result = translate(request, executor)
    except Exception as e:
        future.set_exception(e)
        if callback is not None:
            callback(e, None, None)
        return

    future.set_result(result)
    if callback is not None:
        callback(None, result.stdout, result.stderr)


def run(command: str, options: Mapping[str, Any] | Callback | None = None,
        callback: Callback | None = None,
        executor: ShellExecutor | None = None) -> Future:
    """Run ``command`` through ``sh -c`` without blocking the caller.

    Returns a Future that resolves to CommandResult(stdout, stderr) when the
    command exits 0, or fails with SpawnFailure / NonZeroExit. If given,
    ``callback(error, stdout, stderr)`` is called exactly once after the
    Future is resolved, on the worker thread (or on the calling thread when
    no worker thread can be started). Without a callback the result
    is only available through the Future and may be ignored.

    ``options`` is accepted for forward compatibility and currently ignored.
    A callable in its place is treated as the callback.

    Raises InvalidArgument synchronously for a malformed request.
    """
    if callback is None and callable(options):
        callback, options = options, None
    if callback is not None and not callable(callback):
        raise InvalidArgument("Argument callback must be callable")

    request = build_request(command, options)

    future: Future = Future()
    future.set_running_or_notify_cancel()

    # non-daemon: fire-and-forget commands still finish at interpreter exit
    worker = threading.Thread(
        target=_complete,
        args=(request, future, callback, executor or ShellExecutor()),
        name="spawnexec-run",
    )
    try:
        worker.start()
    except RuntimeError as e:
        # thread limit reached; report it like any other spawn failure
        failure = SpawnFailure(str(e))
        failure.__cause__ = e
        future.set_exception(failure)
        if callback is not None:
            callback(failure, None, None)
    return future


def run_sync(command: str, options: Mapping[str, Any] | None = None) -> CommandResult:
    """Block until ``command`` finishes; return its result or raise its error."""
    return run(command, options).result()


async def arun(command: str, options: Mapping[str, Any] | None = None) -> CommandResult:
    """Awaitable form of run() for asyncio callers."""
    return await asyncio.wrap_future(run(command, options))
