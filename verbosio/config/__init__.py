"""Config package facade."""

from verbosio.config.loader import config_from_dict, load_config
from verbosio.config.models import (
    OutputConfig,
    Settings,
    StatusConfig,
    VerbosityConfig,
)

__all__ = [
    "OutputConfig",
    "Settings",
    "StatusConfig",
    "VerbosityConfig",
    "config_from_dict",
    "load_config",
]
