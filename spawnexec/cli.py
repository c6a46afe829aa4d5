"""CLI entry point — spawnexec run / batch / validate / doctor."""

from __future__ import annotations

import argparse
import os
import shutil
import sys

from spawnexec import __version__
from spawnexec.config import load_config
from spawnexec.errors import ConfigError, InvalidArgument, NonZeroExit, SpawnFailure
from spawnexec.executors.shell import SHELL
from spawnexec.progress import ProgressLog
from spawnexec.runner import run

EXIT_SPAWN_FAILURE = 127
EXIT_USAGE = 2


def _exit_status(status: int) -> int:
    """Clamp a child status into the range a process can exit with."""
    return min(max(status, 1), 255)


def _echo(stdout: str, stderr: str) -> None:
    if stdout:
        sys.stdout.write(stdout)
        sys.stdout.flush()
    if stderr:
        sys.stderr.write(stderr)
        sys.stderr.flush()


def cmd_run(args) -> int:
    try:
        future = run(args.shell_command)
    except InvalidArgument as e:
        print(f"Invalid command: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        stdout, stderr = future.result()
    except NonZeroExit as e:
        print(str(e), file=sys.stderr)
        return _exit_status(e.status)
    except SpawnFailure as e:
        print(f"Spawn failed: {e}", file=sys.stderr)
        return EXIT_SPAWN_FAILURE

    _echo(stdout, stderr)
    return 0


def cmd_batch(args) -> int:
    if args.no_color:
        os.environ["SPAWNEXEC_NO_COLOR"] = "1"

    config = load_config(args.file)
    keep_going = args.keep_going or config.defaults.keep_going

    if args.dry_run:
        print("Dry run — commands that would execute:\n")
        for cmd in config.commands:
            print(f"▸ {cmd.id} [shell] {cmd.command}")
        return 0

    progress = ProgressLog(args.log)
    failed: list[str] = []
    try:
        progress.log(f"Batch started ({len(config.commands)} commands)")
        for index, cmd in enumerate(config.commands):
            if failed and not keep_going:
                for rest in config.commands[index:]:
                    progress.log(f"  skipping {rest.id}")
                break

            progress.log(f"▸ {cmd.id} (shell)")
            try:
                stdout, stderr = run(cmd.command).result()
            except NonZeroExit as e:
                progress.log(f"  ✗ {cmd.id} exit_code={e.status}")
                failed.append(cmd.id)
                continue
            except SpawnFailure as e:
                progress.log(f"  ✗ {cmd.id} spawn failed: {e}")
                failed.append(cmd.id)
                continue

            _echo(stdout, stderr)
            progress.log(f"  ✓ {cmd.id}")

        if failed:
            progress.log(f"⚠ Batch finished with {len(failed)} failure(s): {', '.join(failed)}")
            return 1
        progress.log("Batch complete")
        return 0
    finally:
        progress.close()


def cmd_validate(args) -> int:
    config = load_config(args.file)
    print(f"✓ Valid: {len(config.commands)} commands")
    return 0


def cmd_doctor(args) -> int:
    """Check environment: Python version, shell availability."""
    checks: list[tuple[str, str, bool]] = []

    py_ver = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    checks.append(("Python", py_ver, sys.version_info >= (3, 11)))

    shell_path = shutil.which(SHELL)
    checks.append(("Shell", shell_path or f"'{SHELL}' not found on PATH", shell_path is not None))

    print("spawnexec doctor")
    for label, detail, ok in checks:
        mark = "✓" if ok else "✗"
        print(f"  {label + ':':<16s}{detail} {mark}")
    return 0 if all(ok for _, _, ok in checks) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spawnexec",
        description="Run shell commands and report their status and output",
    )
    parser.add_argument("--version", "-V", action="version",
                        version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # spawnexec run
    run_parser = sub.add_parser("run", help="Run one shell command")
    run_parser.add_argument("shell_command", metavar="COMMAND",
                            help="Shell command text, passed to sh -c")

    # spawnexec batch
    batch_parser = sub.add_parser("batch", help="Run commands from a YAML batch file")
    batch_parser.add_argument("file", help="Batch file path")
    batch_parser.add_argument("--log", default=None, metavar="PATH",
                              help="Also write progress lines to this file")
    batch_parser.add_argument("--dry-run", action="store_true",
                              help="List commands without executing")
    batch_parser.add_argument("--keep-going", action="store_true",
                              help="Continue after a failing command")
    batch_parser.add_argument("--no-color", action="store_true",
                              help="Disable colored output")

    # spawnexec validate
    validate_parser = sub.add_parser("validate", help="Validate a batch file")
    validate_parser.add_argument("file", help="Batch file path")

    # spawnexec doctor
    sub.add_parser("doctor", help="Check environment")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "run":
            code = cmd_run(args)
        elif args.command == "batch":
            code = cmd_batch(args)
        elif args.command == "validate":
            code = cmd_validate(args)
        else:
            code = cmd_doctor(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)

    sys.exit(code)


if __name__ == "__main__":
    main()
