"""Field declarations for environment binding.

A dataclass field is bound to an environment variable by attaching a
``FieldSpec`` to its metadata under the binder's tag name (``"env"`` unless
configured otherwise). ``env_field`` is the convenient way to do that:

    @dataclass
    class AppConfig:
        name: str = env_field("APP_NAME", default="app")
        port: int = env_field("PORT", required=True)
        hosts: list[str] = env_field("HOSTS", delimiter=";", default_factory=list)
        database: DatabaseConfig = env_field(prefix="DB_", default_factory=DatabaseConfig)

A plain string is accepted as shorthand for a spec with only a key:

    name: str = field(default="", metadata={"env": "APP_NAME"})
"""

import dataclasses
from dataclasses import MISSING, dataclass
from datetime import timedelta
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional

DEFAULT_TAG_NAME = "env"

# Defaults of these types are safe to share between instances
_IMMUTABLE_DEFAULT_TYPES = (type(None), bool, int, float, complex, bytes, Enum, timedelta, PurePath)


@dataclass(frozen=True)
class FieldSpec:
    """Binding descriptor for a single dataclass field.

    Attributes:
        key: Environment variable name (without any prefix)
        default: Value used when the variable is absent, or MISSING. Strings are
            converted to the field type like any environment value; other
            values are copied as-is.
        required: Fail binding when the variable is absent and no default exists
        delimiter: Item separator for sequence and mapping fields
        key_value_separator: Separator between key and value for mapping fields
        prefix: Extra prefix applied to every key of a nested dataclass field
        not_empty: Fail binding when the variable is set to an empty string
        expand: Expand ${VAR} references in the value against the environment
        unset: Remove the variable from the environment once bound
        from_file: Treat the value as a path and bind the file's contents
    """

    key: Optional[str] = None
    default: Any = dataclasses.field(default_factory=lambda: MISSING)
    required: bool = False
    delimiter: Optional[str] = None
    key_value_separator: Optional[str] = None
    prefix: Optional[str] = None
    not_empty: bool = False
    expand: bool = False
    unset: bool = False
    from_file: bool = False


def env_field(
    key: Optional[str] = None,
    *,
    default: Any = MISSING,
    required: bool = False,
    delimiter: Optional[str] = None,
    key_value_separator: Optional[str] = None,
    prefix: Optional[str] = None,
    not_empty: bool = False,
    expand: bool = False,
    unset: bool = False,
    from_file: bool = False,
    tag_name: str = DEFAULT_TAG_NAME,
    **field_kwargs: Any,
) -> Any:
    """Declare a dataclass field bound to an environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is absent
        required: Fail when the variable is absent and there is no default
        delimiter: Item separator for sequence and mapping fields
        key_value_separator: Key/value separator for mapping fields
        prefix: Key prefix for nested dataclass fields
        not_empty: Fail when the variable is set but empty
        expand: Expand ${VAR} references in the value
        unset: Remove the variable from the environment after binding
        from_file: Bind the contents of the file the value points to
        tag_name: Metadata key the spec is stored under
        **field_kwargs: Passed through to dataclasses.field (default_factory,
            repr, compare...). The dataclass default is also taken from
            ``default`` when it is None or an immutable scalar. Fields are keyword-only
            unless ``kw_only=False`` is passed.

    Returns:
        A dataclasses.field() declaration
    """
    spec = FieldSpec(
        key=key,
        default=default,
        required=required,
        delimiter=delimiter,
        key_value_separator=key_value_separator,
        prefix=prefix,
        not_empty=not_empty,
        expand=expand,
        unset=unset,
        from_file=from_file,
    )
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[tag_name] = spec

    if "default_factory" not in field_kwargs and _is_immutable_scalar(default):
        field_kwargs["default"] = default

    # Keyword-only so fields with and without defaults can be declared in any order
    field_kwargs.setdefault("kw_only", True)

    return dataclasses.field(metadata=metadata, **field_kwargs)


def _is_immutable_scalar(value: Any) -> bool:
    return isinstance(value, _IMMUTABLE_DEFAULT_TYPES)


def get_field_spec(f: dataclasses.Field, tag_name: str = DEFAULT_TAG_NAME) -> Optional[FieldSpec]:
    """Return the binding descriptor declared on a dataclass field, if any.

    Raises:
        TypeError: If the metadata under ``tag_name`` is neither a string nor a FieldSpec
    """
    declared = f.metadata.get(tag_name)
    if declared is None:
        return None
    if isinstance(declared, FieldSpec):
        return declared
    if isinstance(declared, str):
        return FieldSpec(key=declared)
    raise TypeError(
        f"Field {f.name!r}: metadata {tag_name!r} must be a str or FieldSpec, "
        f"got {type(declared).__name__}"
    )


def field_name_to_key(name: str) -> str:
    """Derive an environment variable name from a field name ("db_host" -> "DB_HOST")."""
    return name.upper()


__all__ = [
    "DEFAULT_TAG_NAME",
    "FieldSpec",
    "env_field",
    "get_field_spec",
    "field_name_to_key",
]
