import io
import threading
import time

import pytest

import verbosio.status as status_module
from verbosio.config import config_from_dict
from verbosio.formatting import ERASE_LINE
from verbosio.gate import VerbosityGate
from verbosio.status import SpinnerState, StatusLine


class _LockedStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self._guard = threading.Lock()

    def write(self, text: str) -> int:
        with self._guard:
            return super().write(text)


def _status(level: int = 1, interval: float = 60.0, **status) -> tuple[StatusLine, _LockedStream]:
    stream = _LockedStream()
    settings = config_from_dict({"status": {"interval": interval, "frames": ["a", "b", "c"], **status}})
    return StatusLine(gate=VerbosityGate(level), settings=settings, stream=stream), stream


def _visible(output: str) -> str:
    return output.rsplit("\r", 1)[-1].replace(ERASE_LINE[1:], "")


def test_start_draws_and_runs() -> None:
    status, stream = _status()

    assert status.start("Loading", 1) is True

    assert status.state is SpinnerState.RUNNING
    assert stream.getvalue() == f"{ERASE_LINE}a Loading"
    status.clear()


def test_start_gated_stays_idle() -> None:
    status, stream = _status(level=1)

    assert status.start("Hidden", 2) is False

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue() == ""


def test_start_disabled_feature_is_noop() -> None:
    status, stream = _status(enabled=False)

    assert status.start("Loading") is False
    assert stream.getvalue() == ""


def test_done_replaces_line_and_goes_idle() -> None:
    status, stream = _status()
    status.start("Loading")

    status.done("Loaded")

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue().endswith(f"{ERASE_LINE}Loaded\n")
    assert _visible(stream.getvalue()) == "Loaded\n"


def test_clear_from_running_leaves_empty_line() -> None:
    status, stream = _status()
    status.start("Loading")

    status.clear()

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue().endswith(ERASE_LINE)
    assert _visible(stream.getvalue()) == ""


def test_done_and_clear_while_idle_write_nothing() -> None:
    status, stream = _status()

    status.done("Nothing")
    status.clear()

    assert stream.getvalue() == ""
    assert status.state is SpinnerState.IDLE


def test_tick_advances_frames() -> None:
    status, stream = _status()
    status.start("Work")

    status.tick()
    status.tick()
    status.tick()

    assert stream.getvalue() == "".join(f"{ERASE_LINE}{f} Work" for f in "abca")
    status.clear()


def test_tick_when_idle_is_noop() -> None:
    status, stream = _status()

    status.tick()

    assert stream.getvalue() == ""


def test_update_changes_message() -> None:
    status, stream = _status()
    status.start("Step 1")

    status.update("Step 2")

    assert stream.getvalue().endswith(f"{ERASE_LINE}a Step 2")
    assert status.message == "Step 2"
    status.clear()


def test_callable_message_is_reevaluated() -> None:
    status, stream = _status()
    counter = iter(range(10))
    status.start(lambda: f"item {next(counter)}")

    status.tick()

    assert stream.getvalue() == f"{ERASE_LINE}a item 0{ERASE_LINE}b item 1"
    status.clear()


def test_stop_keeps_line_then_done_finishes() -> None:
    status, stream = _status()
    status.start("Compiling")

    status.stop()
    assert status.state is SpinnerState.STOPPED
    before = stream.getvalue()
    status.tick()
    assert stream.getvalue() == before

    status.done("Compiled")
    assert status.state is SpinnerState.IDLE
    assert stream.getvalue() == f"{before}{ERASE_LINE}Compiled\n"


def test_second_start_replaces_first() -> None:
    status, stream = _status()
    status.start("first")

    status.start("second")

    assert status.state is SpinnerState.RUNNING
    assert stream.getvalue() == f"{ERASE_LINE}a first{ERASE_LINE}{ERASE_LINE}a second"
    status.done("ok")


def test_show_elapsed_suffix() -> None:
    status, stream = _status(show_elapsed=True)

    status.start("Waiting")

    assert stream.getvalue() == f"{ERASE_LINE}a Waiting (0s)"
    status.clear()


@pytest.mark.slow
def test_background_thread_redraws_and_stops() -> None:
    status, stream = _status(interval=0.01)
    status.start("Spinning")

    deadline = time.monotonic() + 2.0
    while stream.getvalue().count(ERASE_LINE) < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    status.done("Finished")
    after_done = stream.getvalue()
    time.sleep(0.05)

    assert after_done.count(ERASE_LINE) >= 4
    assert stream.getvalue() == after_done
    assert after_done.endswith(f"{ERASE_LINE}Finished\n")
    assert not any(t.name == "verbosio-status" and t.is_alive() for t in threading.enumerate() if t is not threading.current_thread())


def test_spinning_context_manager() -> None:
    status, stream = _status()

    with status.spinning("Working", done="Worked") as shown:
        assert shown is True
        assert status.state is SpinnerState.RUNNING

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue().endswith(f"{ERASE_LINE}Worked\n")


def test_spinning_clears_on_error() -> None:
    status, stream = _status()

    with pytest.raises(RuntimeError):
        with status.spinning("Working", done="Worked"):
            raise RuntimeError("fail")

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue().endswith(ERASE_LINE)


def test_write_failure_is_swallowed() -> None:
    stream = io.StringIO()
    stream.close()
    status = StatusLine(gate=VerbosityGate(1), settings=config_from_dict({"status": {"interval": 60}}), stream=stream)

    assert status.start("Loading") is True
    status.done("Loaded")
    assert status.state is SpinnerState.IDLE


def test_module_functions_use_shared_status(monkeypatch) -> None:
    status, stream = _status()
    monkeypatch.setattr(status_module, "_STATUS", status)

    assert status_module.status_line("Loading") is True
    status_module.status_line_update("Still loading")
    status_module.status_line_done("Loaded")
    status_module.status_line_clear()

    assert status_module.get_status_line() is status
    assert stream.getvalue().endswith(f"{ERASE_LINE}Loaded\n")


def _fails_after(calls: int, label: str = "Loading"):
    count = {"n": 0}

    def message() -> str:
        count["n"] += 1
        if count["n"] > calls:
            raise RuntimeError("late")
        return label

    return message


def test_failing_message_in_start_leaves_idle() -> None:
    status, stream = _status()

    with pytest.raises(RuntimeError):
        status.start(_fails_after(0))

    assert status.state is SpinnerState.IDLE
    assert status._thread is None
    assert stream.getvalue() == ""


def test_failing_message_in_start_erases_previous_spinner() -> None:
    status, stream = _status()
    status.start("first")

    with pytest.raises(RuntimeError):
        status.start(_fails_after(0))

    assert status.state is SpinnerState.IDLE
    assert _visible(stream.getvalue()) == ""


def test_failing_message_in_update_keeps_previous_message() -> None:
    status, _stream = _status()
    status.start("Step 1")

    with pytest.raises(RuntimeError):
        status.update(_fails_after(0))

    assert status.state is SpinnerState.RUNNING
    assert status.message == "Step 1"
    status.clear()


def test_failing_message_on_tick_clears_line() -> None:
    status, stream = _status()
    status.start(_fails_after(1))

    status.tick()

    assert status.state is SpinnerState.IDLE
    assert stream.getvalue() == f"{ERASE_LINE}a Loading{ERASE_LINE}"
    status.done("ignored")
    assert stream.getvalue() == f"{ERASE_LINE}a Loading{ERASE_LINE}"


@pytest.mark.slow
def test_failing_message_in_thread_ends_quietly(monkeypatch) -> None:
    hooked = []
    monkeypatch.setattr(threading, "excepthook", lambda args: hooked.append(args.exc_value))
    status, stream = _status(interval=0.01)
    status.start(_fails_after(1))
    thread = status._thread

    deadline = time.monotonic() + 2.0
    while status.state is not SpinnerState.IDLE and time.monotonic() < deadline:
        time.sleep(0.01)
    thread.join(timeout=2.0)

    assert status.state is SpinnerState.IDLE
    assert not thread.is_alive()
    assert hooked == []
    assert stream.getvalue().endswith(ERASE_LINE)


def test_message_property_reads_under_lock() -> None:
    status, _stream = _status()
    held = []
    status.start(lambda: held.append(status._lock.locked()) or "Loading")

    assert status.message == "Loading"

    assert held[-1] is True
    status.clear()
