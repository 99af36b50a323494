"""Severity tags, colors and timestamps for log lines."""

from __future__ import annotations

import os
from datetime import datetime
from typing import TextIO

from colorama import Fore, Style
from colorama.ansi import clear_line

RAW = "RAW"
INFO = "INFO"
WARN = "WARN"
ERROR = "ERROR"
DEBUG = "DEBUG"
SECTION = "SECTION"

_LEVEL_COLORS = {
    INFO: Fore.BLUE,
    WARN: Fore.YELLOW,
    DEBUG: Fore.YELLOW,
    ERROR: Fore.RED,
    SECTION: Fore.CYAN,
}

ERASE_LINE = "\r" + clear_line()


def stream_supports_color(stream: TextIO) -> bool:
    """Return True when color escapes should be written to stream."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def use_color(mode: str, stream: TextIO) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return stream_supports_color(stream)


def format_level(level: str, color: bool = False) -> str:
    """Render the severity tag, including its trailing space.

    Raw lines have no tag and render as an empty string.
    """
    if level == RAW:
        return ""
    tag = f"[{level}]"
    if color:
        tag = f"{Style.BRIGHT}{_LEVEL_COLORS.get(level, '')}{tag}{Style.RESET_ALL}"
    return tag + " "


def format_time(enabled: bool, time_format: str = "%Y-%m-%d %H:%M:%S", now: datetime | None = None) -> str:
    if not enabled:
        return ""
    stamp = (now or datetime.now()).strftime(time_format)
    return f"[{stamp}] "


def format_section(title: str, color: bool = False) -> str:
    """Render a section header block, ending in a blank line."""
    text = f"=== {title} ==="
    if color:
        text = f"{Style.BRIGHT}{_LEVEL_COLORS[SECTION]}{text}{Style.RESET_ALL}"
    return text + "\n"


def compose_line(level: str, message: str, *, color: bool = False, timestamp: str = "") -> str:
    """Join tag, timestamp and message in that order."""
    return f"{format_level(level, color)}{timestamp}{message}"
