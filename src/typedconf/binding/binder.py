"""Struct binder

Populates a dataclass from environment variables. Fields declare their
variable through a ``FieldSpec`` in their metadata (see ``env_field``);
nested dataclass fields are bound recursively with an optional key prefix.

Binding is all-or-nothing: the first missing required value or failed
conversion raises, and no instance is returned.
"""

import copy
import dataclasses
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, get_type_hints

from dotenv.variables import parse_variables

from typedconf.binding.converters import convert, type_name, unwrap_optional, zero_value
from typedconf.binding.fields import FieldSpec, field_name_to_key, get_field_spec
from typedconf.binding.options import BinderOptions
from typedconf.exceptions import MissingRequiredFieldError, TypeConversionError

T = TypeVar("T")


def bind(config_type: Type[T], options: Optional[BinderOptions] = None) -> T:
    """Create an instance of ``config_type`` from the environment.

    Args:
        config_type: A dataclass type whose fields declare environment keys
        options: Binder options (defaults to BinderOptions())

    Returns:
        A fully populated instance

    Raises:
        TypeError: If config_type is not a dataclass type
        MissingRequiredFieldError: If a required value is absent or empty
        TypeConversionError: If a value cannot be converted to its field type
    """
    if not (isinstance(config_type, type) and dataclasses.is_dataclass(config_type)):
        raise TypeError(f"config_type must be a dataclass type, got {config_type!r}")

    options = options or BinderOptions()
    binder = _Binder(options)
    instance = binder.bind_dataclass(config_type, prefix=options.prefix, path="")
    binder.unset_keys()
    return instance


class _Binder:
    """Holds per-call state: the environment being read and keys to unset."""

    def __init__(self, options: BinderOptions):
        self.options = options
        self.environ: Mapping[str, str] = options.lookup_environment()
        self._pending_unset: List[str] = []

    def bind_dataclass(self, cls: Type[T], prefix: str, path: str) -> T:
        hints = get_type_hints(cls)
        values: Dict[str, Any] = {}

        for f in dataclasses.fields(cls):  # type: ignore[arg-type]
            if not f.init:
                continue

            annotation = hints.get(f.name, f.type)
            field_path = f"{path}.{f.name}" if path else f.name
            spec = get_field_spec(f, self.options.tag_name)

            nested = unwrap_optional(annotation)
            if isinstance(nested, type) and dataclasses.is_dataclass(nested):
                nested_prefix = prefix + ((spec.prefix or "") if spec else "")
                values[f.name] = self.bind_dataclass(nested, nested_prefix, field_path)
                continue

            if spec is None or spec.key is None:
                if self.options.use_field_name_by_default:
                    spec = dataclasses.replace(spec or FieldSpec(), key=field_name_to_key(f.name))
                elif not _has_default(f):
                    values[f.name] = zero_value(annotation)
                    continue
                else:
                    continue

            found, value = self.bind_field(f, spec, annotation, prefix + spec.key, field_path)
            if found:
                values[f.name] = value
            elif not _has_default(f):
                values[f.name] = zero_value(annotation)

        return cls(**values)

    def bind_field(
        self, f: dataclasses.Field, spec: FieldSpec, annotation: Any, key: str, field_path: str
    ) -> tuple[bool, Any]:
        """Resolve one field; returns (False, None) when the dataclass default applies."""
        raw = self.environ.get(key)

        if raw is None:
            if spec.default is not dataclasses.MISSING:
                if not isinstance(spec.default, str):
                    # The spec is shared by every bind; never hand out its object
                    return True, copy.deepcopy(spec.default)
                raw = spec.default
            elif spec.required or (self.options.required_if_no_default and not _has_default(f)):
                raise MissingRequiredFieldError(field_path, key)
            else:
                return False, None
        elif spec.unset:
            self._pending_unset.append(key)

        if spec.not_empty and raw == "":
            raise MissingRequiredFieldError(field_path, key, reason="is empty")

        if spec.expand:
            raw = "".join(atom.resolve(self.environ) for atom in parse_variables(raw))

        if spec.from_file:
            try:
                raw = Path(raw).read_text(encoding="utf-8")
            except OSError as exc:
                raise TypeConversionError(
                    field_path, key, raw, type_name(annotation), f"cannot read file: {exc}"
                ) from exc

        try:
            value = convert(
                raw,
                annotation,
                delimiter=spec.delimiter or self.options.default_delimiter,
                key_value_separator=spec.key_value_separator or self.options.key_value_separator,
                parsers=self.options.parsers,
            )
        except Exception as exc:
            # Includes failures raised by from_env and user parsers
            raise TypeConversionError(field_path, key, raw, type_name(annotation), str(exc)) from exc

        return True, value

    def unset_keys(self) -> None:
        if isinstance(self.environ, MutableMapping):
            for key in self._pending_unset:
                self.environ.pop(key, None)


def _has_default(f: dataclasses.Field) -> bool:
    return f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING


__all__ = ["bind"]
