"""Tests for typedconf.binding.converters"""

from datetime import timedelta
from enum import IntEnum
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import pytest

from typedconf.binding.converters import (
    convert,
    parse_bool,
    parse_duration,
    parse_int,
    type_name,
    unwrap_optional,
    zero_value,
)


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class TestParseBool:
    @pytest.mark.parametrize("raw", ["1", "t", "TRUE", "True", "yes", "Y", "on", " true "])
    def test_true(self, raw):
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "f", "FALSE", "no", "N", "off"])
    def test_false(self, raw):
        assert parse_bool(raw) is False

    @pytest.mark.parametrize("raw", ["", "maybe", "2", "enabled"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_bool(raw)


class TestParseInt:
    def test_decimal(self):
        assert parse_int("42") == 42
        assert parse_int("-7") == -7
        assert parse_int("007") == 7

    def test_prefixed(self):
        assert parse_int("0x1F") == 31
        assert parse_int("0o17") == 15
        assert parse_int("0b101") == 5
        assert parse_int("1_000") == 1000

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_int("notanumber")
        with pytest.raises(ValueError):
            parse_int("1.5")


class TestParseDuration:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("30s", timedelta(seconds=30)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("250ms", timedelta(milliseconds=250)),
            ("1.5s", timedelta(seconds=1.5)),
            ("-2m", timedelta(minutes=-2)),
            ("100us", timedelta(microseconds=100)),
            ("2h45m10s", timedelta(hours=2, minutes=45, seconds=10)),
            ("0", timedelta(0)),
            ("90", timedelta(seconds=90)),
            ("0.5", timedelta(seconds=0.5)),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize("raw", ["", "-", "10x", "1h 30m", "h", "1hm", "abc"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_duration(raw)

    @pytest.mark.parametrize("raw", ["99999999999999h", "-99999999999999h", "99999999999999999"])
    def test_out_of_range(self, raw):
        with pytest.raises(ValueError, match="out of range"):
            parse_duration(raw)


class TestConvert:
    def test_str_and_any(self):
        assert convert("  keep  ", str) == "  keep  "
        assert convert("x", Any) == "x"

    def test_int_enum(self):
        assert convert("HIGH", Priority) is Priority.HIGH
        assert convert("1", Priority) is Priority.LOW

    def test_invalid_enum(self):
        with pytest.raises(ValueError):
            convert("MEDIUM", Priority)

    def test_path(self):
        assert convert("/etc/app", Path) == Path("/etc/app")

    def test_bytes(self):
        assert convert("abc", bytes) == b"abc"

    def test_literal(self):
        assert convert("b", Literal["a", "b"]) == "b"
        with pytest.raises(ValueError):
            convert("c", Literal["a", "b"])

    def test_union_tries_each_member(self):
        assert convert("5", Union[int, str]) == 5
        assert convert("five", Union[int, str]) == "five"

    def test_optional(self):
        assert convert("5", Optional[int]) == 5

    def test_union_skips_member_with_failing_from_env(self):
        class Mode:
            @classmethod
            def from_env(cls, raw: str) -> "Mode":
                return {"fast": cls()}[raw]

        assert convert("5", Union[Mode, int]) == 5

    def test_pep604_union(self):
        assert convert("5", int | None) == 5

    def test_bare_list_is_strings(self):
        assert convert("a,b", list) == ["a", "b"]

    def test_nested_item_error(self):
        with pytest.raises(ValueError):
            convert("1,x", List[int])

    def test_unsupported_type(self):
        class Opaque:
            pass

        with pytest.raises(TypeError):
            convert("x", Opaque)

    def test_parsers_take_precedence(self):
        assert convert("10", int, parsers={int: lambda raw: int(raw) * 2}) == 20


class TestHelpers:
    def test_unwrap_optional(self):
        assert unwrap_optional(Optional[int]) is int
        assert unwrap_optional(int | None) is int
        assert unwrap_optional(int) is int
        assert unwrap_optional(Union[int, str]) == Union[int, str]

    def test_type_name(self):
        assert type_name(int) == "int"
        assert type_name(List[int]) == "List[int]"

    def test_zero_value(self):
        assert zero_value(str) == ""
        assert zero_value(int) == 0
        assert zero_value(bool) is False
        assert zero_value(List[int]) == []
        assert zero_value(Optional[int]) is None
        assert zero_value(timedelta) == timedelta(0)
        assert zero_value(Path) is None
