"""Exception classes for typedconf.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Context needed to diagnose the failure (path, line, field, key...)

Hierarchy:
    TypedConfError
    ├── ConfigurationError
    │   └── EmptySourceListError
    ├── SourceError
    │   ├── SourceNotFoundError
    │   ├── SourceAccessError
    │   └── ParseError
    └── BindingError
        ├── MissingRequiredFieldError
        └── TypeConversionError
"""

from pathlib import Path
from typing import Any, Dict, Optional


class TypedConfError(Exception):
    """Base exception for all typedconf errors.

    Attributes:
        code: Machine-readable error code (e.g., "SOURCE_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TypedConfError):
    """Raised when a loader is constructed with invalid arguments."""

    pass


class EmptySourceListError(ConfigurationError):
    """Raised when a loader is constructed without any env files."""

    def __init__(self, message: str = "env files not specified"):
        super().__init__(code="EMPTY_SOURCE_LIST", message=message)


# =============================================================================
# Source errors
# =============================================================================


class SourceError(TypedConfError):
    """Base for errors raised while reading an env file.

    Attributes:
        path: The env file the error relates to
    """

    def __init__(
        self, code: str, message: str, path: Path | str, details: Optional[Dict[str, Any]] = None
    ):
        self.path = str(path)
        super().__init__(code=code, message=message, details={"path": self.path, **(details or {})})


class SourceNotFoundError(SourceError):
    """Raised when an env file does not exist and missing files are not skipped."""

    def __init__(self, path: Path | str):
        super().__init__(
            code="SOURCE_NOT_FOUND",
            message=f"error loading env file {path}: file not found",
            path=path,
        )


class SourceAccessError(SourceError):
    """Raised when an env file exists but cannot be read.

    Never suppressed by the skip-missing-files option.
    """

    def __init__(self, path: Path | str, reason: str):
        self.reason = reason
        super().__init__(
            code="SOURCE_ACCESS_ERROR",
            message=f"error loading env file {path}: {reason}",
            path=path,
            details={"reason": reason},
        )


class ParseError(SourceError):
    """Raised when an env file contains a line that cannot be parsed."""

    def __init__(self, path: Path | str, line: int, content: str):
        self.line = line
        self.content = content
        super().__init__(
            code="PARSE_ERROR",
            message=f"error parsing env file {path} at line {line}: {content!r}",
            path=path,
            details={"line": line, "content": content},
        )


# =============================================================================
# Binding errors
# =============================================================================


class BindingError(TypedConfError):
    """Base for errors raised while binding environment values onto fields.

    Attributes:
        field: Dotted path of the field being bound (e.g., "database.port")
        key: Environment variable name consulted for the field
    """

    def __init__(
        self, code: str, message: str, field: str, key: str, details: Optional[Dict[str, Any]] = None
    ):
        self.field = field
        self.key = key
        super().__init__(
            code=code,
            message=message,
            details={"field": field, "key": key, **(details or {})},
        )


class MissingRequiredFieldError(BindingError):
    """Raised when a required field has no value and no default."""

    def __init__(self, field: str, key: str, reason: str = "is not set"):
        super().__init__(
            code="MISSING_REQUIRED_FIELD",
            message=f"error parsing env vars: required variable {key} for field {field} {reason}",
            field=field,
            key=key,
        )


class TypeConversionError(BindingError):
    """Raised when an environment value cannot be converted to the field's type."""

    def __init__(self, field: str, key: str, value: str, target_type: str, reason: str = ""):
        self.value = value
        self.target_type = target_type
        message = (
            f"error parsing env vars: cannot convert {key}={value!r} "
            f"to {target_type} for field {field}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            code="TYPE_CONVERSION_ERROR",
            message=message,
            field=field,
            key=key,
            details={"value": value, "type": target_type},
        )
