"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from verbosio.gate import parse_level


@dataclass
class CliOptions:
    """Parsed CLI options shared by every command."""

    verbose: int | None
    config_path: Path | None
    seconds: float = 2.0
    command_args: List[str] = field(default_factory=list)


def _level(value: str) -> int:
    level = parse_level(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"not a non-negative integer: {value!r}")
    return level


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="verbosio", description="Leveled terminal logging demos.")
    parser.add_argument(
        "-v",
        "--verbose",
        type=_level,
        default=None,
        help="Verbosity level (default: from the VERBOSE environment variable, else 1)",
    )
    parser.add_argument("--config", help="Path to a config.json file")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Show sections, a spinner and log lines")
    demo.add_argument("--seconds", type=float, default=2.0, help="How long the spinner runs")

    run = sub.add_parser("run", help="Run a command and report its output")
    run.add_argument("command_args", nargs=argparse.REMAINDER, help="Command to run (after --)")
    return parser


def parse_cli(argv: List[str] | None = None) -> Tuple[str, CliOptions]:
    """Parse CLI arguments.

    Args:
        argv: Optional argument list.

    Returns:
        The command name and its normalized options.
    """
    args = _build_parser().parse_args(argv)
    config_path = Path(args.config).expanduser().resolve() if args.config else None
    command_args = list(getattr(args, "command_args", []) or [])
    if command_args and command_args[0] == "--":
        command_args = command_args[1:]
    options = CliOptions(
        verbose=args.verbose,
        config_path=config_path,
        seconds=max(0.0, float(getattr(args, "seconds", 2.0))),
        command_args=command_args,
    )
    return args.command, options
