"""One-call setup of the shared gate, logger and status line."""

from __future__ import annotations

from pathlib import Path

import colorama

from verbosio.config import Settings, load_config
from verbosio.gate import get_gate
from verbosio.logger import Logger, configure
from verbosio.status import configure_status


def init(
    settings: Settings | None = None,
    level: int | None = None,
    config_path: Path | None = None,
) -> Logger:
    """Configure the shared instances.

    Args:
        settings: Settings to use. Loaded from config_path when omitted.
        level: Explicit verbosity. When None the level is read from the
            configured environment variable, falling back to its default.
        config_path: Optional JSON config file, used only without settings.

    Returns:
        The shared logger.
    """
    if settings is None:
        settings = load_config(config_path)
    if settings.output.color != "never":
        colorama.just_fix_windows_console()
    gate = get_gate()
    if level is None:
        gate.init_from_environment(settings.verbosity.env_var, settings.verbosity.default_level)
    else:
        gate.set(level)
    configure_status(settings)
    return configure(settings)
