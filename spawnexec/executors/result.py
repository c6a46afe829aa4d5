"""Outcome type shared by the execution primitive and the runner."""

from __future__ import annotations

from dataclasses import dataclass

SIGNAL_STATUS_BASE = 128


@dataclass(frozen=True)
class ExecutionOutcome:
    exit_status: int
    stdout: str
    stderr: str


def normalize_status(returncode: int) -> int:
    """Fold signal deaths into a plain exit status.

    subprocess reports a child killed by signal N as -N; shells report it
    as 128 + N, which keeps it non-zero and positive.
    """
    if returncode < 0:
        return SIGNAL_STATUS_BASE - returncode
    return returncode
