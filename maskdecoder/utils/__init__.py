"""Centralized logging configuration for maskdecoder."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "maskdecoder"
_initialized = False


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Set up the maskdecoder logging system.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file path for logging output.
        console: Whether to also log to console.

    Returns:
        Configured logger instance.
    """
    global _initialized

    logger = logging.getLogger(_LOGGER_NAME)

    if _initialized:
        return logger

    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _initialized = True
    logger.info(f"maskdecoder logging initialized (level={logging.getLevelName(level)})")

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Optional submodule name (e.g., "decoding").
              If None, returns the root maskdecoder logger.

    Returns:
        Logger instance for the specified module.
    """
    if not _initialized:
        setup_logging()

    if name:
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


class LogContext:
    """Context manager for logging operation start/end with timing."""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        """
        Initialize the logging context.

        Args:
            logger: Logger instance to use.
            operation: Description of the operation being performed.
            level: Logging level for start/completion messages.
        """
        self._logger = logger
        self._operation = operation
        self._level = level
        self._start_time: float = 0.0

    def __enter__(self) -> "LogContext":
        """Log operation start."""
        self._start_time = time.perf_counter()
        self._logger.log(self._level, f"Starting: {self._operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Log operation end with timing."""
        elapsed_ms = self.elapsed_ms

        if exc_type is not None:
            self._logger.error(f"Failed: {self._operation} ({elapsed_ms:.1f}ms) - {exc_val}")
        else:
            self._logger.log(self._level, f"Completed: {self._operation} ({elapsed_ms:.1f}ms)")

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the context was entered."""
        return (time.perf_counter() - self._start_time) * 1000
