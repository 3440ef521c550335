"""String to typed value conversion.

Every environment value is a string; ``convert`` turns it into an instance of
a field's annotated type. Built-in conversions raise ValueError (bad value) or
TypeError (unsupported annotation). Custom ``from_env`` methods and parsers
may raise anything; the binder wraps every failure into TypeConversionError
with the field and key attached.
"""

import re
import types
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Literal, Mapping, Optional, Union, get_args, get_origin

_TRUE_VALUES = frozenset({"1", "t", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "no", "n", "off"})

# Seconds per duration unit, Go time.ParseDuration style
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {raw!r}")


def parse_int(raw: str) -> int:
    """Parse a base-10 integer, falling back to 0x/0o/0b prefixed forms."""
    try:
        return int(raw, 10)
    except ValueError:
        return int(raw.strip(), 0)


def parse_duration(raw: str) -> timedelta:
    """Parse a duration such as "1h30m", "250ms", "-1.5s" or a bare number of seconds."""
    text = raw.strip()
    if _NUMBER.fullmatch(text):
        return _seconds(float(text), raw)

    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if not text:
        raise ValueError(f"invalid duration {raw!r}")

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            raise ValueError(f"invalid duration {raw!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        raise ValueError(f"invalid duration {raw!r}")

    return _seconds(sign * total, raw)


def _seconds(seconds: float, raw: str) -> timedelta:
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ValueError(f"duration {raw!r} is out of range") from exc


def parse_enum(raw: str, enum_type: type) -> Enum:
    """Look up an enum member by name, then by the string form of its value."""
    members = enum_type.__members__  # type: ignore[attr-defined]
    if raw in members:
        return members[raw]
    for member in enum_type:  # type: ignore[attr-defined]
        if str(member.value) == raw:
            return member
    raise ValueError(f"{raw!r} is not a valid {enum_type.__name__}")


def split_items(raw: str, delimiter: str) -> List[str]:
    """Split a delimited value, stripping whitespace; an empty value has no items."""
    if raw == "":
        return []
    return [item.strip() for item in raw.split(delimiter)]


def unwrap_optional(annotation: Any) -> Any:
    """Return X for Optional[X] / X | None, otherwise the annotation unchanged."""
    if _is_union(annotation):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def type_name(annotation: Any) -> str:
    if get_origin(annotation) is not None:
        return str(annotation).replace("typing.", "")
    return getattr(annotation, "__name__", str(annotation))


def zero_value(annotation: Any) -> Any:
    """Value a bound field takes when it has no environment value and no default."""
    if _is_union(annotation) and type(None) in get_args(annotation):
        return None
    origin = get_origin(annotation) or annotation
    if origin in (str, int, float, bool, list, tuple, set, frozenset, dict, bytes):
        return origin()
    if origin is timedelta:
        return timedelta(0)
    return None


def convert(
    raw: str,
    annotation: Any,
    delimiter: str = ",",
    key_value_separator: str = ":",
    parsers: Optional[Mapping[Any, Callable[[str], Any]]] = None,
) -> Any:
    """Convert a raw environment string to ``annotation``.

    Args:
        raw: The environment value
        annotation: Target type (resolved type hint)
        delimiter: Item separator for sequence and mapping types
        key_value_separator: Key/value separator for mapping types
        parsers: Per-type conversion functions checked before built-ins

    Returns:
        The converted value

    Raises:
        ValueError: If the value is not valid for the type
        TypeError: If the type is not supported
    """
    parsers = parsers or {}
    if annotation in parsers:
        return parsers[annotation](raw)

    if annotation is Any or annotation is str:
        return raw

    if _is_union(annotation):
        return _convert_union(raw, annotation, delimiter, key_value_separator, parsers)

    origin = get_origin(annotation)
    if origin is Literal:
        for choice in get_args(annotation):
            if str(choice) == raw:
                return choice
        raise ValueError(f"{raw!r} is not one of {list(get_args(annotation))}")

    if origin in _SEQUENCE_TYPES or annotation in _SEQUENCE_TYPES:
        return _convert_sequence(raw, annotation, delimiter, key_value_separator, parsers)

    if origin is dict or annotation is dict:
        return _convert_mapping(raw, annotation, delimiter, key_value_separator, parsers)

    if not isinstance(annotation, type):
        raise TypeError(f"unsupported type {type_name(annotation)}")

    from_env = getattr(annotation, "from_env", None)
    if callable(from_env):
        return from_env(raw)

    # bool before int: bool is an int subclass
    if issubclass(annotation, bool):
        return parse_bool(raw)
    if issubclass(annotation, Enum):
        return parse_enum(raw, annotation)
    if issubclass(annotation, int):
        return annotation(parse_int(raw))
    if issubclass(annotation, float):
        return annotation(raw)
    if issubclass(annotation, timedelta):
        return parse_duration(raw)
    if issubclass(annotation, Path):
        return annotation(raw)
    if issubclass(annotation, str):
        return annotation(raw)
    if issubclass(annotation, bytes):
        return raw.encode()

    raise TypeError(f"unsupported type {type_name(annotation)}")


def _convert_union(raw, annotation, delimiter, key_value_separator, parsers):
    args = [a for a in get_args(annotation) if a is not type(None)]
    errors = []
    for arg in args:
        try:
            return convert(raw, arg, delimiter, key_value_separator, parsers)
        except Exception as exc:
            errors.append(str(exc))
    raise ValueError("; ".join(errors))


def _convert_sequence(raw, annotation, delimiter, key_value_separator, parsers):
    origin = get_origin(annotation) or annotation
    args = get_args(annotation)
    items = split_items(raw, delimiter)

    if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
        if len(items) != len(args):
            raise ValueError(f"expected {len(args)} items, got {len(items)}")
        return tuple(
            convert(item, arg, delimiter, key_value_separator, parsers)
            for item, arg in zip(items, args)
        )

    item_type = args[0] if args else str
    return origin(convert(item, item_type, delimiter, key_value_separator, parsers) for item in items)


def _convert_mapping(raw, annotation, delimiter, key_value_separator, parsers):
    args = get_args(annotation)
    key_type, value_type = args if args else (str, str)
    result = {}
    for item in split_items(raw, delimiter):
        key, sep, value = item.partition(key_value_separator)
        if not sep:
            raise ValueError(f"invalid map item {item!r}: missing {key_value_separator!r}")
        result[convert(key.strip(), key_type, delimiter, key_value_separator, parsers)] = convert(
            value.strip(), value_type, delimiter, key_value_separator, parsers
        )
    return result


__all__ = [
    "convert",
    "parse_bool",
    "parse_int",
    "parse_duration",
    "parse_enum",
    "split_items",
    "unwrap_optional",
    "type_name",
    "zero_value",
]
