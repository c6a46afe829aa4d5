"""Execution primitives."""

from __future__ import annotations

from spawnexec.executors.result import ExecutionOutcome
from spawnexec.executors.shell import ShellExecutor

__all__ = ["ExecutionOutcome", "ShellExecutor"]
