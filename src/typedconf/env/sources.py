"""Env file handling: existence policy, parsing and materialization.

Parsing is delegated to python-dotenv's parser, which understands comments,
blank lines, ``export`` prefixes, single/double quoting with escapes and
multi-line quoted values. Unlike ``dotenv_values``, a line python-dotenv
cannot parse is an error here rather than a logged warning.

Values are applied to the environment with insert-if-absent semantics, so
files listed first (and variables already set in the process) win.
"""

import os
import stat
from pathlib import Path
from typing import Dict, List, Mapping, MutableMapping, Optional

from dotenv.parser import parse_stream
from dotenv.variables import parse_variables

from typedconf.exceptions import ParseError, SourceAccessError, SourceNotFoundError


def resolve_source(path: Path | str, skip_missing: bool = False) -> bool:
    """Decide whether an env file should be applied.

    Args:
        path: Env file path
        skip_missing: Skip the file silently when it does not exist

    Returns:
        True if the file exists and should be parsed, False if it is skipped

    Raises:
        SourceNotFoundError: If the file does not exist and skip_missing is False
        SourceAccessError: If the path cannot be inspected or is not a regular file
    """
    try:
        st = os.stat(path)
    except FileNotFoundError as exc:
        if skip_missing:
            return False
        raise SourceNotFoundError(path) from exc
    except OSError as exc:
        raise SourceAccessError(path, exc.strerror or str(exc)) from exc

    if stat.S_ISDIR(st.st_mode):
        raise SourceAccessError(path, "is a directory")
    return True


def parse_env_file(
    path: Path | str, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Parse an env file into an ordered key/value mapping.

    ``${KEY}`` and ``${KEY:-default}`` references are expanded against the
    environment first, then keys defined earlier in the same file. Keys
    defined later in the file are not visible. Single-quoted values are taken
    literally. When a key repeats, the last assignment wins.

    Args:
        path: Env file path
        environ: Environment used for expansion (defaults to os.environ)

    Returns:
        Mapping of keys to expanded values in file order

    Raises:
        SourceAccessError: If the file cannot be read or decoded
        ParseError: If a line is malformed
    """
    if environ is None:
        environ = os.environ

    try:
        with open(path, encoding="utf-8") as stream:
            bindings = list(parse_stream(stream))
    except OSError as exc:
        raise SourceAccessError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceAccessError(path, f"not valid UTF-8: {exc.reason}") from exc

    values: Dict[str, str] = {}
    for binding in bindings:
        if binding.error:
            raise ParseError(path, binding.original.line, binding.original.string.strip())
        # Comments, blank lines and bare keys without "="
        if binding.key is None or binding.value is None:
            continue

        if _is_single_quoted(binding.original.string):
            values[binding.key] = binding.value
            continue

        scope = {**values, **environ}
        values[binding.key] = "".join(atom.resolve(scope) for atom in parse_variables(binding.value))

    return values


def _is_single_quoted(line: str) -> bool:
    """Whether the value of a KEY=VALUE line starts with a single quote."""
    _, _, value = line.partition("=")
    return value.lstrip(" \t").startswith("'")


def apply_to_environ(
    values: Mapping[str, str], environ: Optional[MutableMapping[str, str]] = None
) -> List[str]:
    """Set each key that is not already present in the environment.

    Returns:
        The keys that were written, in order
    """
    if environ is None:
        environ = os.environ

    written = []
    for key, value in values.items():
        if key in environ:
            continue
        environ[key] = value
        written.append(key)
    return written


__all__ = ["resolve_source", "parse_env_file", "apply_to_environ"]
