"""Single live-updating terminal line with a spinner glyph."""

from __future__ import annotations

import enum
import sys
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, TextIO, Union

from verbosio.config import Settings
from verbosio.formatting import ERASE_LINE
from verbosio.gate import VerbosityGate, get_gate

StatusMessage = Union[str, Callable[[], str]]


class SpinnerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class StatusLine:
    """Spinner status line redrawn by a background thread.

    start/update/tick/stop/done/clear are serialised by one lock. Halting
    sets the thread's stop event while holding that lock, so once done(),
    clear() or stop() returns nothing else is drawn.
    """

    def __init__(
        self,
        gate: VerbosityGate | None = None,
        settings: Settings | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._gate = gate or get_gate()
        self._config = (settings or Settings()).status
        self._stream = stream
        self._lock = threading.Lock()
        self._state = SpinnerState.IDLE
        self._message: StatusMessage = ""
        self._started_at: float | None = None
        self._frame = 0
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> SpinnerState:
        return self._state

    @property
    def message(self) -> str:
        with self._lock:
            return self._text()

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    def _out(self) -> TextIO:
        return self._stream or sys.stdout

    def _write(self, text: str) -> None:
        stream = self._out()
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError):
            pass

    def _text(self) -> str:
        message = self._message
        return str(message() if callable(message) else message)

    def _render(self) -> str:
        frames = self._config.frames
        line = f"{frames[self._frame % len(frames)]} {self._text()}"
        if self._config.show_elapsed:
            line += f" ({int(self.elapsed)}s)"
        return ERASE_LINE + line

    def _halt_locked(self) -> threading.Thread | None:
        if self._stop is not None:
            self._stop.set()
        thread = self._thread
        self._stop = None
        self._thread = None
        return thread

    def _reset_locked(self) -> None:
        self._state = SpinnerState.IDLE
        self._message = ""
        self._started_at = None
        self._frame = 0

    @staticmethod
    def _join(thread: threading.Thread | None) -> None:
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _spin(self, stop: threading.Event) -> None:
        while not stop.wait(self._config.interval):
            self._tick(stop)

    def _tick(self, stop: threading.Event | None) -> None:
        with self._lock:
            if stop is None or stop.is_set() or self._state is not SpinnerState.RUNNING:
                return
            self._frame += 1
            try:
                line = self._render()
            except Exception:
                # A failing message callable ends the spinner with a clean line.
                self._halt_locked()
                self._write(ERASE_LINE)
                self._reset_locked()
                return
            self._write(line)

    def start(self, message: StatusMessage, level: int = 1) -> bool:
        """Show the spinner if the gate allows level.

        A spinner already on screen is halted and erased first. An exception
        from a message callable propagates and leaves the line idle.

        Returns:
            True when the spinner is now running.
        """
        if not self._config.enabled or not self._gate.should_log(level):
            return False
        previous = None
        try:
            with self._lock:
                if self._state is not SpinnerState.IDLE:
                    previous = self._halt_locked()
                    self._write(ERASE_LINE)
                self._state = SpinnerState.RUNNING
                self._message = message
                self._started_at = time.monotonic()
                self._frame = 0
                try:
                    line = self._render()
                except Exception:
                    self._reset_locked()
                    raise
                self._write(line)
                stop = threading.Event()
                thread = threading.Thread(target=self._spin, args=(stop,), name="verbosio-status", daemon=True)
                self._stop = stop
                self._thread = thread
                thread.start()
        finally:
            self._join(previous)
        return True

    def update(self, message: StatusMessage) -> None:
        with self._lock:
            if self._state is not SpinnerState.RUNNING:
                return
            previous_message = self._message
            self._message = message
            try:
                line = self._render()
            except Exception:
                self._message = previous_message
                raise
            self._write(line)

    def tick(self) -> None:
        self._tick(self._stop)

    def stop(self) -> None:
        """Halt redrawing, leaving the last frame on screen."""
        with self._lock:
            if self._state is not SpinnerState.RUNNING:
                return
            thread = self._halt_locked()
            self._state = SpinnerState.STOPPED
        self._join(thread)

    def done(self, final_message: str) -> None:
        """Replace the spinner line with final_message."""
        with self._lock:
            if self._state is SpinnerState.IDLE:
                return
            thread = self._halt_locked()
            self._write(f"{ERASE_LINE}{final_message}\n")
            self._reset_locked()
        self._join(thread)

    def clear(self) -> None:
        with self._lock:
            if self._state is SpinnerState.IDLE:
                return
            thread = self._halt_locked()
            self._write(ERASE_LINE)
            self._reset_locked()
        self._join(thread)

    @contextmanager
    def spinning(self, message: StatusMessage, level: int = 1, done: str | None = None) -> Iterator[bool]:
        """Run a block under the spinner.

        Yields whether the spinner is shown. On exit the line is replaced by
        done, or erased when done is None or the block raised.
        """
        shown = self.start(message, level)
        try:
            yield shown
        except BaseException:
            self.clear()
            raise
        if done is None:
            self.clear()
        else:
            self.done(done)


_STATUS = StatusLine()


def get_status_line() -> StatusLine:
    """Return the shared status line."""
    return _STATUS


def configure_status(settings: Settings) -> StatusLine:
    """Replace the shared status line, clearing any spinner on screen."""
    global _STATUS
    _STATUS.clear()
    _STATUS = StatusLine(gate=get_gate(), settings=settings)
    return _STATUS


def status_line(message: StatusMessage, level: int = 1) -> bool:
    return _STATUS.start(message, level)


def status_line_update(message: StatusMessage) -> None:
    _STATUS.update(message)


def status_line_done(final_message: str) -> None:
    _STATUS.done(final_message)


def status_line_clear() -> None:
    _STATUS.clear()
