"""YAML batch-file parsing and validation."""

from __future__ import annotations

import yaml

from spawnexec.errors import ConfigError, InvalidArgument
from spawnexec.models import BatchCommand, BatchConfig, BatchDefaults
from spawnexec.runner import build_request

_SHELL_KEYS = {"command"}


def validate_version(raw: dict) -> None:
    version = raw.get("version")
    if not version:
        raise ConfigError("Missing 'version' field in batch file")
    if str(version) not in ("1.0", "1"):
        raise ConfigError(f"Unsupported batch file version: {version}")


def parse_defaults(raw: dict) -> BatchDefaults:
    if not isinstance(raw, dict):
        raise ConfigError("'defaults' must be a mapping")
    return BatchDefaults(keep_going=bool(raw.get("keep_going", False)))


def parse_command(raw: dict) -> BatchCommand:
    if not isinstance(raw, dict):
        raise ConfigError(f"Command entry must be a mapping, got: {raw!r}")
    command_id = raw.get("id")
    if not command_id:
        raise ConfigError("Command missing 'id' field")
    command_id = str(command_id)

    if "shell" not in raw:
        raise ConfigError(f"Command '{command_id}' missing 'shell' field")
    shell = raw["shell"]
    if isinstance(shell, str):                   # shorthand: shell: make test
        command = shell
    elif isinstance(shell, dict):
        unknown = set(shell.keys()) - _SHELL_KEYS
        if unknown:
            raise ConfigError(
                f"Command '{command_id}': unknown shell key(s): {', '.join(sorted(unknown))}"
            )
        command = shell.get("command")
    else:
        raise ConfigError(f"Command '{command_id}': 'shell' must be a string or mapping")

    if not isinstance(command, str) or not command.strip():
        raise ConfigError(f"Command '{command_id}' has an empty shell command")
    try:
        build_request(command)
    except InvalidArgument as e:
        raise ConfigError(f"Command '{command_id}': {e}") from e
    return BatchCommand(id=command_id, command=command)


def validate_commands(commands: list[BatchCommand]) -> None:
    seen: set[str] = set()
    for cmd in commands:
        if cmd.id in seen:
            raise ConfigError(f"Duplicate command id: '{cmd.id}'")
        seen.add(cmd.id)


def load_config(path: str) -> BatchConfig:
    """Load and validate a batch file."""
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Batch file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not raw:
        raise ConfigError(f"Empty batch file: {path}")
    if not isinstance(raw, dict):
        raise ConfigError(f"Batch file must be a mapping: {path}")

    validate_version(raw)

    raw_commands = raw.get("commands")
    if not raw_commands or not isinstance(raw_commands, list):
        raise ConfigError("'commands' must be a non-empty list")
    commands = [parse_command(c) for c in raw_commands]
    validate_commands(commands)

    return BatchConfig(
        version=str(raw["version"]),
        commands=commands,
        defaults=parse_defaults(raw.get("defaults") or {}),
    )
