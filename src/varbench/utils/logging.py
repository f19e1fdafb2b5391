"""
Logging for varbench runs.

Tables and reports go to stdout, so every log record is rendered on a rich
console bound to stderr. ``--log-file`` adds a plain-text copy of the run,
always at DEBUG, for attaching to a validation record.
"""

import logging
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "setup_logging",
    "get_console",
    "get_logger",
    "timed",
    "log_call",
]

FILE_LOG_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"

_console = Console(stderr=True)


def get_console() -> Console:
    """Return the shared stderr console used for log and error output."""
    return _console


def _console_handler(verbose: bool) -> logging.Handler:
    handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        markup=False,
        show_path=verbose,
        log_time_format="[%X]",
    )
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def _file_handler(log_file: str | Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(verbose: bool = False, log_file: str | Path | None = None) -> None:
    """
    Route log records to the stderr console and, optionally, a file.

    The console shows INFO and above (DEBUG with ``verbose``). The file, when
    given, is truncated and receives every record down to DEBUG.

    Args:
        verbose: Show DEBUG records on the console.
        log_file: Where to write the full run log.
    """
    handlers = [_console_handler(verbose)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))

    root_level = logging.DEBUG if verbose or log_file is not None else logging.INFO
    logging.basicConfig(level=root_level, format="%(message)s", handlers=handlers, force=True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None, level: int = logging.DEBUG):
    """
    Log the start of ``operation`` and its wall-clock duration on exit.

    Example:
        with timed("Reading ground truth", logger):
            truth = read_true_variants_table(path)
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    log.log(level, "Starting: %s", operation)
    try:
        yield
    finally:
        log.log(level, "Completed: %s (%.3fs)", operation, time.perf_counter() - start)


def log_call(logger: logging.Logger | None = None) -> Callable:
    """
    Decorator: log entry, duration and any exception of the wrapped call.

    The exception is re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)
            log.debug("Calling %s", func.__name__)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error(
                    "%s failed after %.3fs: %s", func.__name__, time.perf_counter() - start, e
                )
                raise
            log.debug("%s completed (%.3fs)", func.__name__, time.perf_counter() - start)
            return result

        return wrapper

    return decorator
