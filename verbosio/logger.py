"""Leveled print-style logger gated by the verbosity threshold."""

from __future__ import annotations

import sys
from typing import Any, Callable, TextIO, Union

from verbosio import formatting
from verbosio.config import Settings
from verbosio.gate import VerbosityGate, get_gate

Message = Union[str, Callable[[], Any]]


def render_message(message: Message, args: tuple, kwargs: dict) -> str:
    """Evaluate a deferred message.

    Callables are invoked, and format arguments applied, only here, so a
    message that fails the gate costs nothing to build.
    """
    text = message() if callable(message) else message
    text = str(text)
    if args or kwargs:
        text = text.format(*args, **kwargs)
    return text


class Logger:
    """Minimal leveled logger writing to stdout and stderr."""

    def __init__(
        self,
        gate: VerbosityGate | None = None,
        settings: Settings | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._gate = gate or get_gate()
        self._settings = settings or Settings()
        self._stdout = stdout
        self._stderr = stderr

    @property
    def gate(self) -> VerbosityGate:
        return self._gate

    @property
    def settings(self) -> Settings:
        return self._settings

    def set_stream(self, stream: TextIO | None) -> None:
        self._stdout = stream

    def set_error_stream(self, stream: TextIO | None) -> None:
        self._stderr = stream

    def _out(self) -> TextIO:
        return self._stdout or sys.stdout

    def _err(self) -> TextIO:
        return self._stderr or sys.stderr

    def _write(self, stream: TextIO, line: str) -> None:
        try:
            stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream; logging never takes the host down.
            pass

    def _emit(self, severity: str, stream: TextIO, message: Message, args: tuple, kwargs: dict) -> None:
        output = self._settings.output
        text = render_message(message, args, kwargs)
        timestamp = formatting.format_time(output.timestamps, output.time_format)
        color = formatting.use_color(output.color, stream)
        self._write(stream, formatting.compose_line(severity, text, color=color, timestamp=timestamp))

    def raw(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
        if self._gate.should_log(level):
            self._emit(formatting.RAW, self._out(), message, args, kwargs)

    def info(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
        if self._gate.should_log(level):
            self._emit(formatting.INFO, self._out(), message, args, kwargs)

    def warn(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
        if self._gate.should_log(level):
            self._emit(formatting.WARN, self._out(), message, args, kwargs)

    def error(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
        if self._gate.should_log(level):
            self._emit(formatting.ERROR, self._err(), message, args, kwargs)

    if __debug__:

        def debug(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
            if self._gate.should_log(level):
                self._emit(formatting.DEBUG, self._out(), message, args, kwargs)

    else:

        def debug(self, message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
            """Stripped under ``python -O``; the message is never evaluated."""

    def section(self, title: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
        """Print a ``=== title ===`` header followed by a blank line."""
        if self._gate.should_log(level):
            stream = self._out()
            text = render_message(title, args, kwargs)
            color = formatting.use_color(self._settings.output.color, stream)
            self._write(stream, formatting.format_section(text, color))


_LOGGER = Logger()


def get_logger() -> Logger:
    """Return the shared logger instance."""
    return _LOGGER


def configure(settings: Settings) -> Logger:
    """Replace the shared logger with one using settings.

    The gate is kept, so a level set before configuring survives.
    """
    global _LOGGER
    _LOGGER = Logger(gate=_LOGGER.gate, settings=settings)
    return _LOGGER


def verbose(message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    _LOGGER.raw(message, *args, level=level, **kwargs)


def vinfo(message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    _LOGGER.info(message, *args, level=level, **kwargs)


def vwarn(message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    _LOGGER.warn(message, *args, level=level, **kwargs)


def verror(message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    _LOGGER.error(message, *args, level=level, **kwargs)


def vebug(message: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    """Debug line; compiled to a no-op under ``python -O``.

    Wrap hot call sites in ``if __debug__:`` to drop them from the bytecode.
    """
    if __debug__:
        _LOGGER.debug(message, *args, level=level, **kwargs)


def vsection(title: Message, *args: Any, level: int = 1, **kwargs: Any) -> None:
    _LOGGER.section(title, *args, level=level, **kwargs)
