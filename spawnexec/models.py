"""Data classes for command requests, results and batch files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CommandRequest:
    command: str                  # shell syntax, handed to sh -c
    options: Mapping[str, Any] = field(default_factory=dict)  # accepted, no keys recognized


@dataclass(frozen=True)
class CommandResult:
    """Success value: both streams of a command that exited 0."""
    stdout: str
    stderr: str

    def __iter__(self):
        # allows `out, err = result`
        return iter((self.stdout, self.stderr))


@dataclass
class BatchCommand:
    id: str
    command: str


@dataclass
class BatchDefaults:
    keep_going: bool = False


@dataclass
class BatchConfig:
    version: str
    commands: list[BatchCommand]
    defaults: BatchDefaults = field(default_factory=BatchDefaults)
