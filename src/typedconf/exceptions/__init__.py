"""Exceptions raised by typedconf.

All exceptions include structured error information (code, message, details).

Usage:
    from typedconf.exceptions import (
        TypedConfError,
        SourceNotFoundError,
        TypeConversionError,
    )
"""

from typedconf.exceptions.base import (
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

__all__ = [
    # Base exceptions
    "TypedConfError",
    "ConfigurationError",
    "SourceError",
    "BindingError",
    # Construction
    "EmptySourceListError",
    # Sources
    "SourceNotFoundError",
    "SourceAccessError",
    "ParseError",
    # Binding
    "MissingRequiredFieldError",
    "TypeConversionError",
]
