"""
Core Infrastructure
====================

Foundational components shared by the streak analyzer.

Components:
- exceptions: Unified error hierarchy
- structured_log: JSON event logging
"""

from .exceptions import (
    StreakSystemError,
    DataError,
    DataLoadError,
    DataValidationError,
    ConfigurationError,
    SettingsValidationError,
    MissingConfigError,
    get_error_code,
)
from .structured_log import jlog, read_recent_logs

__all__ = [
    # Exceptions
    'StreakSystemError',
    'DataError',
    'DataLoadError',
    'DataValidationError',
    'ConfigurationError',
    'SettingsValidationError',
    'MissingConfigError',
    'get_error_code',
    # Structured Logging
    'jlog',
    'read_recent_logs',
]
