"""
Unified Exception Hierarchy for the Streak Analyzer.

All exceptions inherit from StreakSystemError, enabling consistent error
handling at the outer surface (CSV ingestion, settings, CLI).

The analytical core never raises for expected conditions: missing or invalid
data is represented as None / absent fields. Exceptions are reserved for
failures the core cannot represent as a result (unreadable files, invalid
configuration).

Usage:
    from core.exceptions import StreakSystemError, DataLoadError

    try:
        rows, columns = load_csv(path)
    except DataLoadError as e:
        log_error(e.to_dict())
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class StreakSystemError(Exception):
    """
    Base exception for all streak analyzer errors.

    Attributes:
        error_code: Unique identifier for this error type
        context: Additional context about the error
        cause: Underlying exception, if any
        timestamp: When the error occurred
    """
    error_code: str = "SYSTEM_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.utcnow()
        super().__init__(message)

    def __str__(self) -> str:
        base = f"[{self.error_code}] {self.message}"
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


# =============================================================================
# DATA ERRORS
# =============================================================================

class DataError(StreakSystemError):
    """
    Base class for data-related errors.
    """
    error_code = "DATA_ERROR"


class DataLoadError(DataError):
    """
    Raised when a dataset cannot be read.

    Examples:
    - File does not exist
    - File is not parseable as CSV
    - CSV has no header row
    """
    error_code = "DATA_LOAD_FAIL"


class DataValidationError(DataError):
    """
    Raised when input has the wrong shape for the pipeline.

    Examples:
    - Rows are not a sequence of mappings
    """
    error_code = "DATA_VALIDATION_FAIL"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(StreakSystemError):
    """
    Base class for configuration-related errors.
    """
    error_code = "CONFIG_ERROR"


class SettingsValidationError(ConfigurationError):
    """
    Raised when settings fail schema validation.
    """
    error_code = "SETTINGS_INVALID"


class MissingConfigError(ConfigurationError):
    """
    Raised when an explicitly requested config file does not exist.
    """
    error_code = "CONFIG_MISSING"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_error_code(error: Exception) -> str:
    """
    Get the error code for an exception.

    Args:
        error: The exception to get the code for

    Returns:
        Error code string, or "UNKNOWN" for foreign exceptions
    """
    if isinstance(error, StreakSystemError):
        return error.error_code
    return "UNKNOWN"
