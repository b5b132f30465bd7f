"""Utility modules for llvm-er."""

from .config import ToolConfig, RunOptions, load_config, save_config
from .logging import setup_logger, get_logger, log_with_data

__all__ = [
    "ToolConfig",
    "RunOptions",
    "load_config",
    "save_config",
    "setup_logger",
    "get_logger",
    "log_with_data",
]
