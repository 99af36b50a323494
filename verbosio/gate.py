"""Process-wide verbosity threshold."""

from __future__ import annotations

import os

MIN_LEVEL = 0
MAX_LEVEL = 255
DEFAULT_LEVEL = 1
DEFAULT_ENV_VAR = "VERBOSE"


def _saturate(level: int) -> int:
    if level < MIN_LEVEL:
        return MIN_LEVEL
    if level > MAX_LEVEL:
        return MAX_LEVEL
    return level


def parse_level(value: str | None) -> int | None:
    """Parse a textual verbosity level.

    Args:
        value: Raw text, usually from the environment.

    Returns:
        The saturated level, or None when the text is not a non-negative integer.
    """
    if value is None:
        return None
    text = value.strip()
    if not text.isdigit() or not text.isascii():
        return None
    return _saturate(int(text))


class VerbosityGate:
    """Single integer threshold shared by every logging call.

    Reads and writes are plain attribute access on an int, which is atomic,
    so the gate takes no lock.
    """

    def __init__(self, level: int = DEFAULT_LEVEL) -> None:
        self._level = _saturate(int(level))

    def set(self, level: int = DEFAULT_LEVEL) -> None:
        self._level = _saturate(int(level))

    def get(self) -> int:
        return self._level

    def should_log(self, required_level: int = 1) -> bool:
        return self._level >= required_level

    def init_from_environment(
        self,
        var_name: str = DEFAULT_ENV_VAR,
        default: int = DEFAULT_LEVEL,
    ) -> int:
        """Set the level from an environment variable.

        Args:
            var_name: Environment variable to read.
            default: Level used when the variable is unset or malformed.

        Returns:
            The level now stored in the gate.
        """
        parsed = parse_level(os.environ.get(var_name))
        self.set(default if parsed is None else parsed)
        return self._level


_GATE = VerbosityGate()


def get_gate() -> VerbosityGate:
    """Return the shared gate instance."""
    return _GATE


def set_verbosity(level: int = DEFAULT_LEVEL) -> None:
    _GATE.set(level)


def get_verbosity() -> int:
    return _GATE.get()


def should_log(required_level: int = 1) -> bool:
    return _GATE.should_log(required_level)


def verbose_env(var_name: str = DEFAULT_ENV_VAR, default: int = DEFAULT_LEVEL) -> int:
    """Set the shared level from the environment (fail-soft)."""
    return _GATE.init_from_environment(var_name, default)
