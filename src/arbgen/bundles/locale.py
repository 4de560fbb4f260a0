"""Parsed locale identifiers.

A LocaleIdentifier is the locale of one ARB bundle, parsed from "@@locale"
or the filename suffix ("app_en_US.arb" -> "en_US").

Python 3.13+.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from arbgen.locale_utils import normalize_locale

__all__ = ["LocaleIdentifier"]


@functools.total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class LocaleIdentifier:
    """A parsed locale tag: language, optional script, optional region.

    Does not promise validity of the subtags: parse() checks only the
    subtag count, so a language such as "english" is accepted as written.
    Filename suffixes are checked against ISO 639 by locale_from_filename;
    "@@locale" values are not. Equality, hashing and ordering use only the
    original (normalized) string, so "en-US" and "en_US" are the same locale.

    Attributes:
        language: Language subtag (e.g. "en")
        script: Script subtag, 4+ characters (e.g. "Hant")
        region: Country/region subtag, 2-3 characters (e.g. "US", "419")
        original: Tag with "_" separators, as written (e.g. "zh_Hant_TW")
    """

    language: str
    script: str | None = None
    region: str | None = None
    original: str = field(default="")

    def __post_init__(self) -> None:
        if not self.language:
            msg = "LocaleIdentifier.language must not be empty"
            raise ValueError(msg)
        if not self.original:
            parts = [p for p in (self.language, self.script, self.region) if p]
            object.__setattr__(self, "original", "_".join(parts))

    @classmethod
    def parse(cls, locale: str) -> LocaleIdentifier:
        """Parse "language[_script][_REGION]" (hyphens accepted).

        With two subtags, a subtag of 4+ characters is the script, otherwise
        the region. With three, the longer one is the script.

        Args:
            locale: Locale string (e.g. "en", "en-US", "zh_Hant_TW")

        Returns:
            Parsed LocaleIdentifier

        Raises:
            ValueError: If locale is empty or has more than three subtags

        Example:
            >>> LocaleIdentifier.parse("en-US")
            LocaleIdentifier(language='en', script=None, region='US', original='en_US')
            >>> LocaleIdentifier.parse("zh_Hant_TW").script
            'Hant'
        """
        normalized = normalize_locale(locale)
        codes = normalized.split("_")
        if not 1 <= len(codes) <= 3 or not all(codes):
            msg = f"Invalid locale: '{locale}'"
            raise ValueError(msg)

        language = codes[0]
        script: str | None = None
        region: str | None = None
        if len(codes) == 2:
            if len(codes[1]) >= 4:
                script = codes[1]
            else:
                region = codes[1]
        elif len(codes) == 3:
            if len(codes[1]) > len(codes[2]):
                script, region = codes[1], codes[2]
            else:
                script, region = codes[2], codes[1]

        return cls(language, script, region, normalized)

    @property
    def has_variant(self) -> bool:
        """True when a region or script is present."""
        return self.script is not None or self.region is not None

    def language_only(self) -> LocaleIdentifier:
        """Return the bare-language locale (e.g. en_US -> en)."""
        return LocaleIdentifier(self.language)

    def camel_case(self) -> str:
        """Return the tag as CamelCase, used in generated class names.

        Example:
            >>> LocaleIdentifier.parse("en_US").camel_case()
            'EnUs'
        """
        return "".join(part[:1].upper() + part[1:].lower() for part in self.original.split("_"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocaleIdentifier):
            return NotImplemented
        return self.original == other.original

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LocaleIdentifier):
            return NotImplemented
        return self.original < other.original

    def __hash__(self) -> int:
        return hash(self.original)

    def __str__(self) -> str:
        return self.original
