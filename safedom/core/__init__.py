"""
Core Infrastructure - Logging and Diagnostics

Usage:
    from safedom.core import get_logger, set_dev_mode

    logger = get_logger(__name__)
    set_dev_mode(True)  # report values that fail sanitization
"""

from .diagnostics import Diagnostic, is_dev_mode, report_unsafe_value, set_dev_mode, set_diagnostic_sink
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
    # Diagnostics
    "Diagnostic",
    "is_dev_mode",
    "set_dev_mode",
    "set_diagnostic_sink",
    "report_unsafe_value",
]
