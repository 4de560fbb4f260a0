"""Delegate base class for generated localizations."""

from abc import ABC, abstractmethod

__all__ = ["LocalizationsDelegate"]


class LocalizationsDelegate[T](ABC):
    """Locale-support query plus an asynchronous loader for T.

    Generated modules subclass this once per localizations class. Everything
    is compiled in, so load() completes without awaiting anything.
    """

    @abstractmethod
    def is_supported(self, locale: str) -> bool:
        """Whether resources for locale are available."""

    @abstractmethod
    async def load(self, locale: str) -> T:
        """Return the localizations for locale."""

    def should_reload(self, old: "LocalizationsDelegate[T]") -> bool:
        """Whether load() must be called again after replacing old."""
        return False
