"""Console progress output — colored stdout plus optional plain log file."""

from __future__ import annotations

import os
import re
import sys
from datetime import datetime


# ── ANSI color constants ────────────────────────────────────

GRAY = "\033[90m"
GREEN = "\033[32m"
CYAN = "\033[36m"
YELLOW = "\033[33m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"


def _color_enabled() -> bool:
    """Check whether colored output should be used."""
    if os.environ.get("NO_COLOR") or os.environ.get("SPAWNEXEC_NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str) -> str:
    """Wrap text in ANSI color codes."""
    return f"{color}{text}{RESET}"


_COLOR_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"exit_code=(?!0\b)"), RED),
    (re.compile(r"✗|spawn failed", re.IGNORECASE), RED),
    (re.compile(r"✓"), GREEN),
    (re.compile(r"Batch started|Batch complete"), GREEN),
    (re.compile(r"⚠|warning", re.IGNORECASE), YELLOW),
    (re.compile(r"▸.*\(shell\)"), CYAN),
    (re.compile(r"skipping"), DIM),
]


def _detect_color(message: str) -> str | None:
    """Return the ANSI color for a message based on pattern matching."""
    for pattern, color in _COLOR_RULES:
        if pattern.search(message):
            return color
    return None


class ProgressLog:
    """Timestamped progress lines.

    Always printed to stdout (colored when it is a TTY); mirrored as plain
    text to ``path`` when one is given.
    """

    def __init__(self, path: str | None = None):
        self.path = path
        self._file = None
        if path:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._file = open(path, "a")
        self._use_color = _color_enabled()

    def log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")

        plain_line = f"[{timestamp}] {message}\n"
        if self._file:
            self._file.write(plain_line)
            self._file.flush()

        if self._use_color:
            ts = colorize(f"[{timestamp}]", GRAY)
            color = _detect_color(message)
            msg = colorize(message, color) if color else message
            print(f"{ts} {msg}")
        else:
            print(plain_line, end="")

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
