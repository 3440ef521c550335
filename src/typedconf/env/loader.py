"""Environment loader with .env file seeding.

Loads a typed configuration in deterministic order:
1) OS environment variables already set (highest precedence)
2) env files, in the order given; a file never overrides a key set before it
3) field defaults declared on the configuration dataclass (lowest)

Loading mutates os.environ (insert-if-absent) and is not synchronized; load
configuration once at startup, before starting threads that read the
environment.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Sequence, Tuple, Type, TypeVar

from typedconf.binding import BinderOptions, bind
from typedconf.env.options import LoaderOption, LoaderOptions
from typedconf.env.sources import apply_to_environ, parse_env_file, resolve_source
from typedconf.exceptions import EmptySourceListError
from typedconf.loader import ConfigLoader
from typedconf.logger import Logger, get_logger

T = TypeVar("T")


class EnvLoader(ConfigLoader[T]):
    """Load a dataclass configuration from env files and the process environment.

    Example:
        loader = EnvLoader(AppConfig, [".env"], with_skip_missing_files())
        config = loader.load()
    """

    def __init__(
        self,
        config_type: Type[T],
        env_files: Sequence[Path | str] | Path | str,
        *opts: LoaderOption,
        logger: Optional[Logger] = None,
    ) -> None:
        """Create a loader. No file is touched until load() is called.

        Args:
            config_type: Dataclass type to populate
            env_files: Env file paths, highest priority first
            *opts: Loader options, applied in order
            logger: Logger for load tracing (defaults to get_logger())

        Raises:
            EmptySourceListError: If env_files is empty
            TypeError: If config_type is not a dataclass type
        """
        if isinstance(env_files, (str, Path)):
            env_files = [env_files]
        if not env_files:
            raise EmptySourceListError()
        if not (isinstance(config_type, type) and dataclasses.is_dataclass(config_type)):
            raise TypeError(f"config_type must be a dataclass type, got {config_type!r}")

        self._config_type = config_type
        self._env_files: Tuple[Path, ...] = tuple(Path(f) for f in env_files)
        self._options = LoaderOptions.build(*opts)
        self._logger = logger or get_logger()

    @property
    def config_type(self) -> Type[T]:
        return self._config_type

    @property
    def env_files(self) -> Tuple[Path, ...]:
        return self._env_files

    @property
    def skip_missing_files(self) -> bool:
        return self._options.skip_missing_files

    @property
    def binder_options(self) -> BinderOptions:
        return self._options.binder_options

    def load(self) -> T:
        """Apply every env file to the environment, then bind the configuration.

        Each call re-reads the files and the environment. Keys set by an
        earlier call stay in place, so repeated calls yield the same values
        unless the environment is changed in between.

        Returns:
            A populated instance of the configuration type

        Raises:
            SourceNotFoundError: If a file is missing and missing files are not skipped
            SourceAccessError: If a file cannot be read
            ParseError: If a file contains a malformed line
            MissingRequiredFieldError: If a required field has no value
            TypeConversionError: If a value does not convert to its field type
        """
        for path in self._env_files:
            if not resolve_source(path, self._options.skip_missing_files):
                self._logger.debug("Skipping missing env file", path=str(path))
                continue

            values = parse_env_file(path)
            written = apply_to_environ(values)
            self._logger.debug(
                "Applied env file",
                path=str(path),
                keys_set=len(written),
                keys_kept=len(values) - len(written),
            )

        config = bind(self._config_type, self._options.binder_options)
        self._logger.debug("Bound configuration", config_type=self._config_type.__name__)
        return config

    def __repr__(self) -> str:
        files = ", ".join(str(f) for f in self._env_files)
        return f"EnvLoader({self._config_type.__name__}, [{files}])"


__all__ = ["EnvLoader"]
