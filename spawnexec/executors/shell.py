"""Shell command executor."""

from __future__ import annotations

import subprocess

from spawnexec.errors import SpawnFailure
from spawnexec.executors.result import ExecutionOutcome, normalize_status

SHELL = "sh"


class ShellExecutor:
    """Runs one command string through ``sh -c`` and collects both streams.

    The child gets an empty stdin. stdout and stderr are drained together
    until EOF before the exit status is read, so a chatty child never
    blocks on a full pipe.
    """

    def run(self, command: str) -> ExecutionOutcome:
        try:
            proc = subprocess.run(
                [SHELL, "-c", command],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                encoding="utf-8", errors="replace",
            )
        except OSError as e:
            raise SpawnFailure(str(e), errno=e.errno) from e
        return ExecutionOutcome(
            exit_status=normalize_status(proc.returncode),
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
