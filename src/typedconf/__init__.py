"""typedconf - Typed configuration from environment variables and .env files.

This package provides:
- loader: the ConfigLoader strategy interface and new_config()
- env: EnvLoader, seeding the environment from .env files before binding
- binding: mapping of environment variables onto (nested) dataclasses
- exceptions: structured error classes
- logger: structured logging with optional JSON output
"""

__version__ = "1.0.0"

from typedconf.binding import BinderOptions, FieldSpec, bind, env_field

from typedconf.env import EnvLoader, with_binder_options, with_skip_missing_files

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

from typedconf.loader import ConfigLoader, new_config

__all__ = [
    "__version__",
    # Loader interface
    "ConfigLoader",
    "new_config",
    # Env loader
    "EnvLoader",
    "with_skip_missing_files",
    "with_binder_options",
    # Binding
    "bind",
    "env_field",
    "FieldSpec",
    "BinderOptions",
    # Exceptions
    "TypedConfError",
    "ConfigurationError",
    "EmptySourceListError",
    "SourceError",
    "SourceNotFoundError",
    "SourceAccessError",
    "ParseError",
    "BindingError",
    "MissingRequiredFieldError",
    "TypeConversionError",
]
