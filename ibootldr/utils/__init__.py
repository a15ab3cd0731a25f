"""Utility modules for logging, configuration, and helpers."""

from ibootldr.utils.logging import get_logger, setup_logging
from ibootldr.utils.config import Config, LoaderConfig, get_config, set_config
from ibootldr.utils.helpers import hexdump, p64, u64

__all__ = [
    "get_logger",
    "setup_logging",
    "Config",
    "LoaderConfig",
    "get_config",
    "set_config",
    "hexdump",
    "p64",
    "u64",
]
