"""Leveled print-style logging with a global verbosity gate.

    from verbosio import set_verbosity, vinfo, vwarn, verror

    set_verbosity(2)
    vinfo("App started.")            # [INFO] App started.
    vwarn("Hidden.", level=3)        # not printed
    verror("Something went wrong")   # [ERROR] Something went wrong (stderr)
"""

from verbosio.bootstrap import init
from verbosio.config import Settings, load_config
from verbosio.gate import (
    VerbosityGate,
    get_gate,
    get_verbosity,
    set_verbosity,
    should_log,
    verbose_env,
)
from verbosio.logger import (
    Logger,
    configure,
    get_logger,
    vebug,
    verbose,
    verror,
    vinfo,
    vsection,
    vwarn,
)
from verbosio.status import (
    SpinnerState,
    StatusLine,
    get_status_line,
    status_line,
    status_line_clear,
    status_line_done,
    status_line_update,
)

__version__ = "0.1.0"

__all__ = [
    "Logger",
    "Settings",
    "SpinnerState",
    "StatusLine",
    "VerbosityGate",
    "configure",
    "get_gate",
    "get_logger",
    "get_status_line",
    "get_verbosity",
    "init",
    "load_config",
    "set_verbosity",
    "should_log",
    "status_line",
    "status_line_clear",
    "status_line_done",
    "status_line_update",
    "vebug",
    "verbose",
    "verbose_env",
    "verror",
    "vinfo",
    "vsection",
    "vwarn",
]
