"""
Tests for the unified exception hierarchy.

This module tests core/exceptions.py which provides the standard
exception hierarchy for the streak analyzer.
"""

import pytest
from datetime import datetime

from core.exceptions import (
    # Base exception
    StreakSystemError,
    # Data exceptions
    DataError,
    DataLoadError,
    DataValidationError,
    # Configuration exceptions
    ConfigurationError,
    SettingsValidationError,
    MissingConfigError,
    # Helper functions
    get_error_code,
)


class TestStreakSystemError:
    """Tests for the base exception class."""

    def test_basic_creation(self):
        """Test basic exception creation."""
        error = StreakSystemError("Test error")
        assert str(error) == "[SYSTEM_ERROR] Test error"
        assert error.message == "Test error"
        assert error.error_code == "SYSTEM_ERROR"
        assert error.context == {}
        assert error.cause is None
        assert isinstance(error.timestamp, datetime)

    def test_with_context(self):
        """Test exception with context dictionary."""
        error = StreakSystemError(
            "Test error",
            context={"path": "prices.csv", "rows": 10}
        )
        assert "path=prices.csv" in str(error)
        assert "rows=10" in str(error)

    def test_with_cause(self):
        """Test exception chaining."""
        cause = ValueError("bad value")
        error = StreakSystemError("Wrapped", cause=cause)
        assert error.cause is cause

    def test_to_dict(self):
        """Test serialization for logging."""
        error = DataLoadError(
            "File not found",
            context={"path": "missing.csv"},
            cause=FileNotFoundError("missing.csv"),
        )
        d = error.to_dict()

        assert d["error_code"] == "DATA_LOAD_FAIL"
        assert d["message"] == "File not found"
        assert d["context"] == {"path": "missing.csv"}
        assert d["cause"] == "missing.csv"
        assert "timestamp" in d

    def test_to_dict_without_cause(self):
        d = StreakSystemError("x").to_dict()
        assert d["cause"] is None


class TestHierarchy:
    """Tests for inheritance and error codes."""

    @pytest.mark.parametrize("exc_class,parent,code", [
        (DataError, StreakSystemError, "DATA_ERROR"),
        (DataLoadError, DataError, "DATA_LOAD_FAIL"),
        (DataValidationError, DataError, "DATA_VALIDATION_FAIL"),
        (ConfigurationError, StreakSystemError, "CONFIG_ERROR"),
        (SettingsValidationError, ConfigurationError, "SETTINGS_INVALID"),
        (MissingConfigError, ConfigurationError, "CONFIG_MISSING"),
    ])
    def test_parent_and_code(self, exc_class, parent, code):
        error = exc_class("msg")
        assert isinstance(error, parent)
        assert isinstance(error, Exception)
        assert error.error_code == code
        assert str(error).startswith(f"[{code}]")

    def test_catch_by_base(self):
        with pytest.raises(StreakSystemError):
            raise MissingConfigError("nope")


class TestGetErrorCode:
    """Tests for get_error_code helper."""

    def test_system_error(self):
        assert get_error_code(DataValidationError("x")) == "DATA_VALIDATION_FAIL"

    def test_foreign_error(self):
        assert get_error_code(KeyError("x")) == "UNKNOWN"
