"""
Utility modules for varbench.

Provides logging, timing, and other shared utilities.
"""

from .logging import get_console, get_logger, log_call, setup_logging, timed

__all__ = [
    "get_console",
    "get_logger",
    "log_call",
    "setup_logging",
    "timed",
]
