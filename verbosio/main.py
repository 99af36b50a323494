"""CLI entrypoint for the verbosio demos."""

from __future__ import annotations

import subprocess
import time

from verbosio.bootstrap import init
from verbosio.cli import CliOptions, parse_cli
from verbosio.config import load_config
from verbosio.logger import Logger
from verbosio.status import get_status_line


def run_demo(log: Logger, options: CliOptions) -> int:
    """Walk through sections, a spinner and the log calls."""
    status = get_status_line()
    log.section("Starting process", level=2)

    with status.spinning("Working on task...", done="Done processing task!"):
        time.sleep(options.seconds)

    log.section("Finalizing")
    log.raw("Finishing up...")
    log.info("Verbosity is {}", log.gate.get())
    log.warn("Shown from level 2 up.", level=2)
    log.debug("Debug lines vanish under python -O.")

    if status.start("This won't show unless verbosity >= 3", level=3):
        time.sleep(options.seconds)
        status.stop()
    status.clear()
    return 0


def run_command(log: Logger, options: CliOptions) -> int:
    """Run a command, echoing its stdout or reporting its stderr."""
    if not options.command_args:
        log.error("No command given. Usage: verbosio run -- CMD [ARGS...]")
        return 2
    log.raw("Running {}...", " ".join(options.command_args))
    try:
        result = subprocess.run(options.command_args, capture_output=True, text=True)
    except OSError as exc:
        log.error("Failed to execute command: {}", exc)
        return 127
    if result.returncode == 0:
        log.raw("Command output:\n{}", result.stdout.rstrip("\n"))
    else:
        log.error("Command failed:\n{}", result.stderr.rstrip("\n"))
    return result.returncode


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Returns:
        Process exit code.
    """
    command, options = parse_cli(argv)
    if options.config_path:
        if not options.config_path.exists():
            print(f"Config path not found: {options.config_path}")
            return 2
        if options.config_path.is_dir():
            print(f"Config path must be a file: {options.config_path}")
            return 2
    try:
        settings = load_config(options.config_path)
    except (OSError, ValueError) as exc:
        print(f"Invalid config: {exc}")
        return 2

    log = init(settings, level=options.verbose)
    if command == "run":
        return run_command(log, options)
    return run_demo(log, options)


if __name__ == "__main__":
    raise SystemExit(main())
