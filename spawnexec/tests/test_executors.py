"""Tests for the shell executor."""

import pytest

from spawnexec.errors import SpawnFailure
from spawnexec.executors import ExecutionOutcome, ShellExecutor
from spawnexec.executors.result import normalize_status


# ── Shell executor ──────────────────────────────────────────

def test_shell_executor_success():
    executor = ShellExecutor()
    outcome = executor.run("echo hello world")
    assert outcome == ExecutionOutcome(exit_status=0, stdout="hello world\n", stderr="")


def test_shell_executor_failure_keeps_output():
    executor = ShellExecutor()
    outcome = executor.run("echo partial; echo oops >&2; exit 42")
    assert outcome.exit_status == 42
    assert outcome.stdout == "partial\n"
    assert outcome.stderr == "oops\n"


def test_shell_executor_uses_shell_syntax():
    outcome = ShellExecutor().run("for i in 1 2 3; do printf $i; done | tr 1 x")
    assert outcome.stdout == "x23"


def test_shell_executor_empty_stdin():
    # cat would block forever on an inherited terminal
    outcome = ShellExecutor().run("cat")
    assert outcome.exit_status == 0
    assert outcome.stdout == ""


def test_shell_executor_drains_large_output():
    outcome = ShellExecutor().run(
        "yes out | head -n 100000; yes err | head -n 100000 >&2"
    )
    assert outcome.exit_status == 0
    assert outcome.stdout == "out\n" * 100000
    assert outcome.stderr == "err\n" * 100000


def test_shell_executor_replaces_invalid_utf8():
    outcome = ShellExecutor().run(r"printf 'a\377b'")
    assert outcome.stdout == "a�b"


def test_shell_executor_decodes_utf8():
    outcome = ShellExecutor().run("printf 'h\\303\\251'")
    assert outcome.stdout == "hé"


def test_shell_executor_signal_is_nonzero():
    outcome = ShellExecutor().run("kill -9 $$")
    assert outcome.exit_status == 128 + 9


def test_shell_executor_spawn_failure(monkeypatch):
    monkeypatch.setattr("spawnexec.executors.shell.SHELL", "spawnexec-no-such-shell")
    with pytest.raises(SpawnFailure) as excinfo:
        ShellExecutor().run("echo hi")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_shell_executor_os_error_wrapped(monkeypatch):
    def fail(*args, **kwargs):
        raise OSError(24, "Too many open files")

    monkeypatch.setattr("spawnexec.executors.shell.subprocess.run", fail)
    with pytest.raises(SpawnFailure, match="Too many open files") as excinfo:
        ShellExecutor().run("echo hi")
    assert excinfo.value.errno == 24


# ── Status normalization ────────────────────────────────────

def test_normalize_status_passthrough():
    assert normalize_status(0) == 0
    assert normalize_status(3) == 3
    assert normalize_status(255) == 255


def test_normalize_status_signal():
    assert normalize_status(-15) == 143
    assert normalize_status(-9) == 137
