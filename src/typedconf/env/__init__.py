"""Environment-based configuration loading.

Example:
    from typedconf.env import EnvLoader, with_skip_missing_files

    loader = EnvLoader(AppConfig, [".env.local", ".env"], with_skip_missing_files())
    config = loader.load()
"""

from typedconf.env.loader import EnvLoader
from typedconf.env.options import (
    LoaderOption,
    LoaderOptions,
    with_binder_options,
    with_skip_missing_files,
)
from typedconf.env.sources import apply_to_environ, parse_env_file, resolve_source

__all__ = [
    # Loader
    "EnvLoader",
    # Options
    "LoaderOption",
    "LoaderOptions",
    "with_skip_missing_files",
    "with_binder_options",
    # Sources
    "resolve_source",
    "parse_env_file",
    "apply_to_environ",
]
