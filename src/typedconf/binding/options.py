"""Binder options

Controls how the binder maps environment variables onto dataclass fields.
The env loader forwards these untouched; only the binder interprets them.
"""

import os
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typedconf.binding.fields import DEFAULT_TAG_NAME


class BinderOptions(BaseModel):
    """Binding configuration

    Example:
        options = BinderOptions(prefix="MYAPP_", required_if_no_default=True)
        config = bind(AppConfig, options)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag_name: str = Field(
        default=DEFAULT_TAG_NAME,
        description="Dataclass field metadata key holding the binding descriptor",
    )
    prefix: str = Field(
        default="",
        description="Prefix prepended to every environment variable name",
    )
    required_if_no_default: bool = Field(
        default=False,
        description="Treat every bound field without any default as required",
    )
    use_field_name_by_default: bool = Field(
        default=False,
        description="Bind fields without a declared key using their upper-cased name",
    )
    default_delimiter: str = Field(
        default=",",
        description="Item separator for sequence and mapping fields",
    )
    key_value_separator: str = Field(
        default=":",
        description="Separator between key and value for mapping fields",
    )
    environment: Optional[Any] = Field(
        default=None,
        description="Mapping read instead of os.environ (None reads the process environment)",
    )
    parsers: Dict[Any, Callable[[str], Any]] = Field(
        default_factory=dict,
        description="Per-type string conversion functions, checked before the built-in ones",
    )

    @field_validator("tag_name")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Tag name must be a non-empty identifier"""
        if not v or not v.isidentifier():
            raise ValueError(f"tag_name must be a non-empty identifier, got {v!r}")
        return v

    @field_validator("default_delimiter", "key_value_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Separators cannot be empty"""
        if not v:
            raise ValueError("separator must not be empty")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: Any) -> Any:
        """Environment must be a mapping; kept by reference so later changes are seen"""
        if v is not None and not isinstance(v, Mapping):
            raise ValueError(f"environment must be a mapping, got {type(v).__name__}")
        return v

    def lookup_environment(self) -> Mapping[str, str]:
        """Return the mapping the binder reads values from."""
        if self.environment is not None:
            return self.environment
        return os.environ
