"""Configuration loader interface.

ConfigLoader is the strategy every configuration source implements;
new_config builds a configuration through any of them.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class ConfigLoader(ABC, Generic[T]):
    """Abstract base class for configuration loaders.

    Example:
        class StaticLoader(ConfigLoader[AppConfig]):
            def load(self) -> AppConfig:
                return AppConfig(name="static")
    """

    @abstractmethod
    def load(self) -> T:
        """Load and return a populated configuration.

        Raises:
            TypedConfError: If the configuration cannot be loaded
        """
        pass


def new_config(loader: ConfigLoader[T]) -> T:
    """Create a configuration of type T using the provided loader."""
    return loader.load()


__all__ = ["ConfigLoader", "new_config"]
