"""All ARB bundles of one directory."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from arbgen.constants import ARB_FILE_PATTERN
from arbgen.diagnostics import DuplicateLocaleError, ErrorTemplate, MissingFallbackError

from .bundle import ResourceBundle, load_bundle
from .locale import LocaleIdentifier

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["ResourceBundleCollection"]

logger = logging.getLogger(__name__)

_ARB_FILE = re.compile(ARB_FILE_PATTERN)


@dataclass(frozen=True, slots=True)
class ResourceBundleCollection:
    """Bundles keyed by locale, in path order.

    Invariants (checked by from_bundles):
        - No two bundles share a locale
        - Every language with a region/script bundle has a bare-language bundle

    Attributes:
        directory: Directory the bundles were read from ("" when built in memory)
        by_locale: Locale -> bundle, in path order
    """

    directory: str
    by_locale: dict[LocaleIdentifier, ResourceBundle]

    @classmethod
    def from_directory(cls, directory: str, file_system: FileSystem) -> ResourceBundleCollection:
        """Load every "<name>.arb" file of directory.

        Raises:
            BundleError: If any bundle fails to load or the set is inconsistent
        """
        paths = sorted(
            p for p in file_system.list_dir(directory) if _ARB_FILE.search(PurePath(p).name)
        )
        logger.debug("Found %d ARB files in %s", len(paths), directory)
        bundles = [load_bundle(p, file_system) for p in paths]
        return cls.from_bundles(bundles, directory=directory)

    @classmethod
    def from_bundles(
        cls, bundles: Iterable[ResourceBundle], *, directory: str = ""
    ) -> ResourceBundleCollection:
        """Validate and collect already loaded bundles.

        Raises:
            DuplicateLocaleError: If two bundles resolve to the same locale
            MissingFallbackError: If a region/script locale lacks its language bundle
        """
        by_locale: dict[LocaleIdentifier, ResourceBundle] = {}
        for bundle in bundles:
            existing = by_locale.get(bundle.locale)
            if existing is not None:
                raise DuplicateLocaleError(
                    ErrorTemplate.duplicate_locale(str(bundle.locale), [existing.path, bundle.path])
                )
            by_locale[bundle.locale] = bundle

        variants: dict[LocaleIdentifier, list[LocaleIdentifier]] = {}
        for locale in by_locale:
            if locale.has_variant:
                variants.setdefault(locale.language_only(), []).append(locale)
        for base, locales in variants.items():
            if base not in by_locale:
                dependents = tuple(str(loc) for loc in locales)
                raise MissingFallbackError(
                    ErrorTemplate.missing_fallback(base.language, dependents),
                    language=base.language,
                    dependents=dependents,
                )

        return cls(directory, by_locale)

    @property
    def locales(self) -> tuple[LocaleIdentifier, ...]:
        return tuple(self.by_locale)

    @property
    def bundles(self) -> tuple[ResourceBundle, ...]:
        return tuple(self.by_locale.values())

    @property
    def languages(self) -> tuple[str, ...]:
        """Distinct languages, in first-seen order."""
        return tuple(dict.fromkeys(loc.language for loc in self.by_locale))

    def bundle_for(self, locale: LocaleIdentifier) -> ResourceBundle | None:
        return self.by_locale.get(locale)

    def locales_for_language(self, language: str) -> tuple[LocaleIdentifier, ...]:
        return tuple(loc for loc in self.by_locale if loc.language == language)

    def __len__(self) -> int:
        return len(self.by_locale)

    def __iter__(self) -> Iterator[ResourceBundle]:
        return iter(self.by_locale.values())

    def __str__(self) -> str:
        return f"ResourceBundleCollection({self.directory}, {len(self)} locales)"
