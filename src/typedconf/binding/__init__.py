"""Binding of environment variables onto dataclasses.

Example:
    from dataclasses import dataclass
    from typedconf.binding import bind, env_field

    @dataclass
    class AppConfig:
        name: str = env_field("APP_NAME", default="app")
        port: int = env_field("PORT", required=True)

    config = bind(AppConfig)
"""

from typedconf.binding.binder import bind
from typedconf.binding.converters import convert, parse_duration
from typedconf.binding.fields import FieldSpec, env_field
from typedconf.binding.options import BinderOptions

__all__ = [
    "bind",
    "BinderOptions",
    "FieldSpec",
    "env_field",
    "convert",
    "parse_duration",
]
