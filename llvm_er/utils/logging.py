"""
Logging utilities for llvm-er.
Provides console logging on stderr and structured JSON logs for build systems.
"""

import logging
import sys
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add extra fields if present
        if hasattr(record, 'extra_data'):
            log_entry["data"] = record.extra_data

        return json.dumps(log_entry)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for better readability."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Colorize a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logger(
    name: str = "llvm_er",
    level: str = "WARNING",
    log_file: Optional[str] = None,
    structured: bool = False
) -> logging.Logger:
    """
    Set up and configure a logger.

    Console output goes to stderr, since stdout may carry rewritten IR.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        structured: Use JSON structured logging on the console

    Returns:
        Configured logger instance
    """
    numeric_level = _parse_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    if structured:
        console_formatter = StructuredFormatter()
    else:
        console_formatter = ColoredFormatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(numeric_level)

        # Always use structured format for file logs
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "llvm_er") -> logging.Logger:
    """
    Get a configured logger, setting one up if it has no handlers yet.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


def log_with_data(logger: logging.Logger, level: str, message: str, data: Dict[str, Any]) -> None:
    """
    Log a message with additional structured data.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        data: Additional data to include
    """
    numeric_level = _parse_level(level)
    if not logger.isEnabledFor(numeric_level):
        return

    record = logger.makeRecord(
        logger.name,
        numeric_level,
        "",
        0,
        message,
        (),
        None
    )
    record.extra_data = data
    logger.handle(record)
