"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

DEFAULT_FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
COLOR_MODES = ("auto", "always", "never")


@dataclass
class VerbosityConfig:
    """Verbosity gate settings."""

    env_var: str = "VERBOSE"
    default_level: int = 1


@dataclass
class OutputConfig:
    """Line decoration settings."""

    color: str = "auto"
    timestamps: bool = False
    time_format: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class StatusConfig:
    """Spinner status line settings."""

    enabled: bool = True
    interval: float = 0.1
    frames: List[str] = field(default_factory=lambda: list(DEFAULT_FRAMES))
    show_elapsed: bool = False


@dataclass
class Settings:
    """Top-level configuration container."""

    verbosity: VerbosityConfig = field(default_factory=VerbosityConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
