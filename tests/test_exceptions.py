"""Tests for the typedconf exception hierarchy.

These tests verify:
1. Exception structure (code, message, details)
2. Inheritance hierarchy
3. String representation
4. Dictionary conversion for JSON serialization
"""

import pytest

from typedconf.exceptions import (
    BindingError,
    ConfigurationError,
    EmptySourceListError,
    MissingRequiredFieldError,
    ParseError,
    SourceAccessError,
    SourceError,
    SourceNotFoundError,
    TypeConversionError,
    TypedConfError,
)


class TestTypedConfError:
    """Tests for base TypedConfError class."""

    def test_basic_construction(self):
        error = TypedConfError("TEST_CODE", "Test message")

        assert error.code == "TEST_CODE"
        assert error.message == "Test message"
        assert error.details == {}

    def test_none_details_becomes_empty_dict(self):
        error = TypedConfError("TEST_CODE", "Test message", details=None)
        assert error.details == {}

    def test_str_without_details(self):
        assert str(TypedConfError("TEST_CODE", "Test message")) == "TEST_CODE: Test message"

    def test_str_with_details(self):
        result = str(TypedConfError("TEST_CODE", "Test message", details={"foo": "bar"}))
        assert result == "TEST_CODE: Test message (details: {'foo': 'bar'})"

    def test_args_contains_message(self):
        error = TypedConfError("CODE", "The error message")
        assert "The error message" in error.args

    def test_to_dict(self):
        error = TypedConfError("TEST_CODE", "Test message", details={"key": "value"})
        assert error.to_dict() == {
            "code": "TEST_CODE",
            "message": "Test message",
            "details": {"key": "value"},
        }


class TestConstructionErrors:
    """Tests for errors raised when a loader is built."""

    def test_empty_source_list(self):
        error = EmptySourceListError()

        assert isinstance(error, ConfigurationError)
        assert isinstance(error, TypedConfError)
        assert error.code == "EMPTY_SOURCE_LIST"
        assert error.message == "env files not specified"


class TestSourceErrors:
    """Tests for env file errors."""

    def test_source_not_found(self):
        error = SourceNotFoundError("a.env")

        assert isinstance(error, SourceError)
        assert error.code == "SOURCE_NOT_FOUND"
        assert error.path == "a.env"
        assert error.details == {"path": "a.env"}
        assert "a.env" in str(error)

    def test_source_access_error(self):
        error = SourceAccessError("a.env", "Permission denied")

        assert isinstance(error, SourceError)
        assert error.code == "SOURCE_ACCESS_ERROR"
        assert error.reason == "Permission denied"
        assert error.details == {"path": "a.env", "reason": "Permission denied"}

    def test_parse_error(self):
        error = ParseError("a.env", 3, "bad line")

        assert isinstance(error, SourceError)
        assert error.code == "PARSE_ERROR"
        assert error.line == 3
        assert error.to_dict()["details"] == {"path": "a.env", "line": 3, "content": "bad line"}
        assert "line 3" in error.message

    def test_catch_as_source_error(self):
        with pytest.raises(SourceError):
            raise SourceNotFoundError("a.env")


class TestBindingErrors:
    """Tests for binding errors."""

    def test_missing_required_field(self):
        error = MissingRequiredFieldError("database.host", "DB_HOST")

        assert isinstance(error, BindingError)
        assert error.code == "MISSING_REQUIRED_FIELD"
        assert error.field == "database.host"
        assert error.key == "DB_HOST"
        assert "DB_HOST" in error.message
        assert "database.host" in error.message

    def test_type_conversion_error(self):
        error = TypeConversionError("port", "PORT", "notanumber", "int", "invalid literal")

        assert isinstance(error, BindingError)
        assert error.code == "TYPE_CONVERSION_ERROR"
        assert error.details == {
            "field": "port",
            "key": "PORT",
            "value": "notanumber",
            "type": "int",
        }
        assert "notanumber" in str(error)
        assert "port" in str(error)
        assert error.message.endswith("invalid literal")

    def test_catch_as_base(self):
        with pytest.raises(TypedConfError):
            raise TypeConversionError("port", "PORT", "x", "int")
