"""Tests for progress logging and color output."""

import os
import tempfile

from spawnexec.progress import (
    CYAN,
    DIM,
    GREEN,
    RED,
    YELLOW,
    ProgressLog,
    _color_enabled,
    _detect_color,
    colorize,
)


# ── colorize ────────────────────────────────────────────────

def test_colorize():
    result = colorize("hello", GREEN)
    assert result.startswith(GREEN)
    assert result.endswith("\033[0m")
    assert "hello" in result


# ── _detect_color ───────────────────────────────────────────

def test_detect_shell_step():
    assert _detect_color("▸ build (shell)") == CYAN


def test_detect_success():
    assert _detect_color("  ✓ build") == GREEN


def test_detect_failure():
    assert _detect_color("  ✗ build exit_code=2") == RED


def test_detect_nonzero_exit():
    assert _detect_color("  exit_code=1") == RED


def test_detect_zero_exit_not_red():
    assert _detect_color("  exit_code=0") != RED


def test_detect_spawn_failure():
    assert _detect_color("  ✗ build spawn failed: No such file") == RED


def test_detect_batch_started():
    assert _detect_color("Batch started (3 commands)") == GREEN


def test_detect_batch_complete():
    assert _detect_color("Batch complete") == GREEN


def test_detect_warning():
    assert _detect_color("⚠ something odd") == YELLOW


def test_detect_skipping():
    assert _detect_color("  skipping lint") == DIM


def test_detect_plain_message():
    assert _detect_color("hello there") is None


# ── _color_enabled ──────────────────────────────────────────

def test_color_disabled_by_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    assert _color_enabled() is False


def test_color_disabled_by_spawnexec_no_color(monkeypatch):
    monkeypatch.setenv("SPAWNEXEC_NO_COLOR", "1")
    assert _color_enabled() is False


# ── ProgressLog output ──────────────────────────────────────

def test_progress_log_writes_plain_to_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "logs", "progress.log")
        log = ProgressLog(path)
        log.log("Batch started (1 commands)")
        log.log("  ✓ greet")
        log.close()

        with open(path) as f:
            content = f.read()
        assert "Batch started" in content
        assert "✓ greet" in content
        # File should never contain ANSI codes
        assert "\033[" not in content


def test_progress_log_without_file(capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    log = ProgressLog()
    log.log("Batch complete")
    log.close()
    out = capsys.readouterr().out
    assert out.startswith("[")
    assert out.endswith("] Batch complete\n")


def test_progress_log_close_is_idempotent():
    with tempfile.TemporaryDirectory() as tmpdir:
        log = ProgressLog(os.path.join(tmpdir, "progress.log"))
        log.close()
        log.close()
