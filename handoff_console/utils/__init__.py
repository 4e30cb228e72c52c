"""Utility modules."""

from .logger import setup_logger, get_logger, init_app_logger, get_app_logger
from .time_format import format_time

__all__ = [
    "setup_logger",
    "get_logger",
    "init_app_logger",
    "get_app_logger",
    "format_time",
]
