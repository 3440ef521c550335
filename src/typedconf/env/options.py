"""Loader options for EnvLoader.

Options are plain callables applied in order to a fresh LoaderOptions record
when a loader is constructed; a later option overrides an earlier one.

    loader = EnvLoader(
        AppConfig,
        [".env.local", ".env"],
        with_skip_missing_files(),
        with_binder_options(prefix="MYAPP_"),
    )
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from typedconf.binding.options import BinderOptions


@dataclass
class LoaderOptions:
    """Settings shared by every EnvLoader regardless of its config type

    Attributes:
        skip_missing_files: Skip env files that do not exist instead of failing
        binder_options: Forwarded unchanged to the binder
    """

    skip_missing_files: bool = False
    binder_options: BinderOptions = field(default_factory=BinderOptions)

    @classmethod
    def build(cls, *opts: "LoaderOption") -> "LoaderOptions":
        """Apply options in order to a default record."""
        options = cls()
        for opt in opts:
            opt(options)
        return options


LoaderOption = Callable[[LoaderOptions], None]


def with_skip_missing_files(skip: bool = True) -> LoaderOption:
    """Do not fail on env files that were specified but not found."""

    def apply(options: LoaderOptions) -> None:
        options.skip_missing_files = skip

    return apply


def with_binder_options(
    binder_options: Optional[BinderOptions] = None, **kwargs: Any
) -> LoaderOption:
    """Forward options to the binder.

    Pass either a BinderOptions instance or its fields as keyword arguments.

    Raises:
        TypeError: If both an instance and keyword arguments are given
        pydantic.ValidationError: If the keyword arguments are invalid
    """
    if binder_options is not None and kwargs:
        raise TypeError("pass either a BinderOptions instance or keyword arguments, not both")
    resolved = binder_options if binder_options is not None else BinderOptions(**kwargs)

    def apply(options: LoaderOptions) -> None:
        options.binder_options = resolved

    return apply


__all__ = [
    "LoaderOptions",
    "LoaderOption",
    "with_skip_missing_files",
    "with_binder_options",
]
