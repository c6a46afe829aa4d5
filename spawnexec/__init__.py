"""spawnexec — run a shell command, get its status and output."""

from spawnexec.errors import ExecError, InvalidArgument, NonZeroExit, SpawnFailure
from spawnexec.models import CommandResult
from spawnexec.runner import arun, run, run_sync

__version__ = "1.0.0"

__all__ = [
    "CommandResult",
    "ExecError",
    "InvalidArgument",
    "NonZeroExit",
    "SpawnFailure",
    "arun",
    "run",
    "run_sync",
]
