"""
Logging configuration for modcompile.

Console output goes through Rich; an optional file handler writes plain,
parseable lines.
"""

import logging
import sys
import threading
import traceback
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "modcompile"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with full exception info for errors."""
        result = super().format(record)
        if record.exc_info:
            result += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return result


class ConsoleFormatter(logging.Formatter):
    """Plain console format: ``level: timestamp - msg``, with file:line for errors."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname}: {self.formatTime(record)} - {record.getMessage()}"
        if record.levelno >= logging.ERROR and record.pathname:
            filename = Path(record.pathname).name
            base = f"{record.levelname}: {self.formatTime(record)} - {filename}:{record.lineno} - {record.getMessage()}"
        return base


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int | None) -> int:
    """
    Parse logging level from string or int.

    Unknown values fall back to INFO.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        return LEVEL_MAP.get(level.upper(), logging.INFO)
    return logging.INFO


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_string: str | None = None,
    file_mode: str = "a",
    console: Console | None = None,
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging configuration for modcompile.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        format_string: Optional custom format string for the plain console handler
        file_mode: File mode for file handler - 'a' for append, 'w' for overwrite (default: 'a')
        console: Optional Rich Console instance to log to (default: stderr console)
        console_enabled: Whether to enable console logging (default: True)
        use_rich: Whether to use RichHandler for the console (default: True)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Only clear handlers from this specific logger, not root or child loggers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if console_enabled:
        if use_rich:
            logger.addHandler(
                RichHandler(
                    level=level_int,
                    console=console or Console(stderr=True),
                    show_time=True,
                    show_path=False,
                    markup=False,
                    rich_tracebacks=True,
                    log_time_format="[%X]",
                )
            )
        else:
            formatter: logging.Formatter = ConsoleFormatter() if format_string is None else logging.Formatter(format_string)
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level_int)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode=file_mode, encoding="utf-8")
        # File captures everything; the logger level still filters
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_config(
    config: dict[str, Any], project_dir: Path | None = None, verbose: bool = False
) -> logging.Logger:
    """
    Setup logging from a modcompile configuration mapping.

    Args:
        config: Configuration dictionary; settings are read from its 'logging' section
        project_dir: Optional project directory for resolving relative log file paths
        verbose: Force DEBUG level regardless of the configured level

    Returns:
        Logger instance
    """
    logging_config = config.get("logging") or {}

    level = logging.DEBUG if verbose else logging_config.get("level", logging.INFO)
    log_file = logging_config.get("file")
    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    return setup_logging(
        level=level,
        log_file=log_file,
        format_string=logging_config.get("format"),
        file_mode=logging_config.get("file_mode", "a"),
        console_enabled=logging_config.get("console_enabled", True),
        use_rich=logging_config.get("console_type", "rich") == "rich",
    )


_logging_setup_done = False
_logging_setup_lock = threading.Lock()


def _auto_setup_logging() -> None:
    """Install the default console handler once, unless logging was set up explicitly."""
    global _logging_setup_done

    if _logging_setup_done:
        return
    with _logging_setup_lock:
        if _logging_setup_done:
            return
        if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
            setup_logging(level=logging.WARNING)
        _logging_setup_done = True


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance under the ``modcompile`` hierarchy.

    Installs a default WARNING-level console handler the first time it is
    called, if no handler has been configured yet.
    """
    _auto_setup_logging()
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
