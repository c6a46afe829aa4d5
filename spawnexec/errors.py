"""Error types delivered through the completion channel."""

from __future__ import annotations


class ExecError(Exception):
    """Base for every error run() can deliver."""


class InvalidArgument(ExecError, ValueError):
    """Malformed request, raised before any process is started."""


class SpawnFailure(ExecError):
    """The OS could not create the child process.

    The message is the underlying OSError text; the OSError itself is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, errno: int | None = None):
        super().__init__(message)
        self.errno = errno


class NonZeroExit(ExecError):
    """The command ran and exited with a non-zero status; its output is not kept."""

    def __init__(self, status: int):
        super().__init__(f"Non-zero exit code: {status}")
        self.status = status


class ConfigError(Exception):
    pass
