"""Locale-aware date and number formatting for generated accessors.

Placeholder formats from ARB metadata are ICU skeletons ("yMMMd", "jms") and
Intl-style number format names ("compactCurrency", "decimalPattern", ...).
This module maps both onto Babel.

Architecture:
    - LocaleFormatter: immutable per-locale formatter, cached per locale code
    - Module functions: entry points used by generated code; a formatting
      failure is logged and the fallback value is returned

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from arbgen.diagnostics import FormattingError
from arbgen.locale_utils import get_babel_locale

__all__ = [
    "LocaleFormatter",
    "format_date",
    "format_datetime_skeleton",
    "format_number",
]

logger = logging.getLogger(__name__)

type Number = int | float | Decimal

_FALLBACK_LOCALE = "en_US"
_FALLBACK_CURRENCY = "USD"

# Last integer digit of a number pattern plus its fraction part, if any.
_FRACTION = re.compile(r"0(\.[0#]+)?(?![0-9#,.])")


def with_fraction_digits(pattern: str, digits: int) -> str:
    """Rewrite a CLDR number pattern to show exactly digits fraction digits.

    Example:
        >>> with_fraction_digits("#,##0.###", 2)
        '#,##0.00'
        >>> with_fraction_digits("¤#,##0.00", 0)
        '¤#,##0'
    """
    fraction = "0." + "0" * digits if digits > 0 else "0"
    return _FRACTION.sub(fraction, pattern)


@dataclass(frozen=True, slots=True)
class LocaleFormatter:
    """Immutable formatter for one locale.

    Use LocaleFormatter.create() to construct instances: unknown locales fall
    back to en_US (with a warning logged) and instances are cached.

    Attributes:
        locale_code: Locale code as requested
        babel_locale: Babel Locale used for formatting
        is_fallback: True when babel_locale is the en_US fallback
    """

    locale_code: str
    babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def create(cls, locale_code: str) -> LocaleFormatter:
        """Return the cached formatter for locale_code."""
        return _create_formatter(locale_code)

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def format_skeleton(self, value: datetime | date, skeleton: str) -> str:
        """Format value with the locale's best pattern for an ICU skeleton.

        Raises:
            FormattingError: If no pattern matches the skeleton
        """
        try:
            return str(
                babel_dates.format_skeleton(
                    self._resolve_hour_cycle(skeleton), value, locale=self.babel_locale
                )
            )
        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            msg = f"DateTime formatting failed for '{value}' with skeleton '{skeleton}': {e}"
            raise FormattingError(msg, fallback_value=value.isoformat()) from e

    def format_pattern(self, value: datetime | date, pattern: str) -> str:
        """Format value with a literal CLDR date pattern (e.g. "yyyy-MM-dd").

        Raises:
            FormattingError: If the pattern is invalid
        """
        try:
            return str(babel_dates.format_datetime(value, format=pattern, locale=self.babel_locale))
        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            msg = f"DateTime formatting failed for '{value}' with pattern '{pattern}': {e}"
            raise FormattingError(msg, fallback_value=value.isoformat()) from e

    def format_default(self, value: datetime | date, *, time: bool = False) -> str:
        """Format value with the locale's medium date (or time) format."""
        try:
            if time:
                return str(babel_dates.format_time(value, format="medium", locale=self.babel_locale))
            return str(babel_dates.format_date(value, format="medium", locale=self.babel_locale))
        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            msg = f"DateTime formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=value.isoformat()) from e

    def _resolve_hour_cycle(self, skeleton: str) -> str:
        """Replace "j" (locale's preferred hour) with "H" or "h"."""
        if "j" not in skeleton:
            return skeleton
        short_time = self.babel_locale.time_formats.get("short")
        hour = "H" if short_time is not None and "H" in str(short_time.pattern) else "h"
        return skeleton.replace("j", hour)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def format_number(self, value: Number, format_name: str, params: dict[str, Any]) -> str:
        """Format value with an Intl-style named number format.

        Args:
            value: Number to format
            format_name: compact, compactCurrency, compactSimpleCurrency,
                compactLong, currency, decimalPattern, decimalPatternDigits,
                decimalPercentPattern, percentPattern, scientificPattern or
                simpleCurrency
            params: Optional parameters: name (currency code), symbol,
                decimalDigits, customPattern

        Raises:
            FormattingError: On unknown formats or Babel failures
        """
        digits: int | None = params.get("decimalDigits")
        custom: str | None = params.get("customPattern")
        locale = self.babel_locale
        try:
            match format_name:
                case "compact" | "compactLong":
                    return str(
                        babel_numbers.format_compact_decimal(
                            value,
                            format_type="long" if format_name == "compactLong" else "short",
                            locale=locale,
                            fraction_digits=digits or 0,
                        )
                    )
                case "compactCurrency" | "compactSimpleCurrency":
                    return str(
                        babel_numbers.format_compact_currency(
                            value,
                            params.get("name") or self.default_currency(),
                            format_type="short",
                            locale=locale,
                            fraction_digits=digits or 0,
                        )
                    )
                case "currency" | "simpleCurrency":
                    return self._format_currency(value, params, digits, custom)
                case "decimalPattern":
                    return str(babel_numbers.format_decimal(value, format=custom, locale=locale))
                case "decimalPatternDigits":
                    pattern = custom or self._pattern(locale.decimal_formats.get(None), "#,##0.###")
                    if digits is not None:
                        pattern = with_fraction_digits(pattern, digits)
                    return str(babel_numbers.format_decimal(value, format=pattern, locale=locale))
                case "decimalPercentPattern":
                    pattern = custom or self._pattern(locale.percent_formats.get(None), "#,##0%")
                    if digits is not None:
                        pattern = with_fraction_digits(pattern, digits)
                    return str(babel_numbers.format_percent(value, format=pattern, locale=locale))
                case "percentPattern":
                    return str(babel_numbers.format_percent(value, format=custom, locale=locale))
                case "scientificPattern":
                    return str(babel_numbers.format_scientific(value, format=custom, locale=locale))
                case _:
                    msg = f"Unknown number format '{format_name}'"
                    raise FormattingError(msg, fallback_value=str(value))
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            msg = f"Number formatting failed for '{value}' with format '{format_name}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def _format_currency(
        self, value: Number, params: dict[str, Any], digits: int | None, custom: str | None
    ) -> str:
        currency = params.get("name") or self.default_currency()
        symbol: str | None = params.get("symbol")
        pattern = custom
        if pattern is None and (symbol is not None or digits is not None):
            pattern = self._pattern(self.babel_locale.currency_formats.get("standard"), "¤#,##0.00")
            if symbol is not None:
                # Quoted literal in place of the currency sign
                pattern = pattern.replace("\xa4", "'" + symbol.replace("'", "''") + "'")
            if digits is not None:
                pattern = with_fraction_digits(pattern, digits)
        return str(
            babel_numbers.format_currency(
                value,
                currency,
                format=pattern,
                locale=self.babel_locale,
                currency_digits=pattern is None,
            )
        )

    def default_currency(self) -> str:
        """Currency of the locale's territory, USD when unknown."""
        territory = self.babel_locale.territory
        if territory:
            currencies = babel_numbers.get_territory_currencies(territory)
            if currencies:
                return str(currencies[0])
        return _FALLBACK_CURRENCY

    @staticmethod
    def _pattern(number_pattern: Any, default: str) -> str:
        pattern = getattr(number_pattern, "pattern", None)
        return str(pattern) if pattern else default


@functools.lru_cache(maxsize=128)
def _create_formatter(locale_code: str) -> LocaleFormatter:
    try:
        return LocaleFormatter(locale_code, get_babel_locale(locale_code))
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s': %s. Falling back to %s", locale_code, e, _FALLBACK_LOCALE)
        return LocaleFormatter(locale_code, get_babel_locale(_FALLBACK_LOCALE), is_fallback=True)


# ============================================================================
# ENTRY POINTS FOR GENERATED CODE
# ============================================================================


def format_date(value: datetime | date, parts: Sequence[str], locale: str, *, custom: bool = False) -> str:
    """Format a DateTime placeholder used as {name}.

    Args:
        value: Date or datetime
        parts: Skeletons of the placeholder format ("yMd+jms" -> ("yMd", "jms")),
            or a single literal pattern when custom is set; empty for the
            locale's medium date
        locale: Locale code
        custom: parts[0] is a literal CLDR pattern

    Returns:
        Formatted text; composite skeletons are joined with a space

    Example:
        >>> format_date(datetime(2024, 3, 5), ("yMd",), "en_US")
        '3/5/2024'
    """
    formatter = LocaleFormatter.create(locale)
    try:
        if custom and parts:
            return formatter.format_pattern(value, parts[0])
        if not parts:
            return formatter.format_default(value)
        return " ".join(formatter.format_skeleton(value, part) for part in parts)
    except FormattingError as e:
        logger.warning("%s", e)
        return e.fallback_value


def format_datetime_skeleton(value: datetime | date, skeleton: str | None, locale: str, *, time: bool = False) -> str:
    """Format a {name, date|time[, skeleton]} argument expression.

    Without a skeleton the locale's medium date (or time) format is used.
    """
    formatter = LocaleFormatter.create(locale)
    try:
        if skeleton is None:
            return formatter.format_default(value, time=time)
        return formatter.format_skeleton(value, skeleton)
    except FormattingError as e:
        logger.warning("%s", e)
        return e.fallback_value


def format_number(value: Number, format_name: str, locale: str, **params: Any) -> str:
    """Format a numeric placeholder with a named number format.

    Example:
        >>> format_number(1234.5, "decimalPattern", "de_DE")
        '1.234,5'
        >>> format_number(3.5, "currency", "en_US", name="EUR", decimalDigits=2)
        '€3.50'
    """
    try:
        return LocaleFormatter.create(locale).format_number(value, format_name, params)
    except FormattingError as e:
        logger.warning("%s", e)
        return e.fallback_value
