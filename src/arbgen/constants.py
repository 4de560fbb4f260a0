"""Shared constants for arbgen.

This module provides centralized configuration constants used across the
bundle loader, parser, inference and code emitter. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and AST traversal
- Locale data: ISO 639 language codes accepted in ARB filenames
- Placeholder formats: Date skeletons and number formats that can be localized
- Defaults: Generator configuration defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "MAX_AST_DEPTH",
    # Locale data
    "ISO_639_LANGUAGES",
    "LOCALE_KEY",
    "METADATA_PREFIX",
    # Placeholder formats
    "VALID_DATE_FORMATS",
    "DATE_FORMAT_PARTS_DELIMITER",
    "VALID_NUMBER_FORMATS",
    "NUMBER_FORMATS_WITH_PARAMETERS",
    "PLURAL_CATEGORIES",
    "OTHER_BRANCH",
    "DEFAULT_ESCAPE_CHAR",
    # Defaults
    "DEFAULT_ARB_DIR",
    "DEFAULT_TEMPLATE_ARB_FILE",
    "DEFAULT_OUTPUT_LOCALIZATION_FILE",
    "DEFAULT_OUTPUT_CLASS",
    "ARB_FILE_PATTERN",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of plural/select submessages accepted by the parser.
# Real ARB messages rarely nest more than 2-3 levels.
MAX_DEPTH: int = 32

# Maximum AST depth walked by visitors. Each nesting level adds three nodes
# (expression, branch, submessage) below the root message.
MAX_AST_DEPTH: int = 3 * MAX_DEPTH + 2

# ============================================================================
# LOCALE DATA
# ============================================================================

# Top-level key declaring a bundle's locale explicitly.
LOCALE_KEY: str = "@@locale"

# Prefix marking metadata keys (and the @@locale key) in an ARB file.
METADATA_PREFIX: str = "@"

# ISO 639-1 language codes (plus the three-letter codes that appear in CLDR
# locale names used by Flutter-style ARB tooling: fil, gsw).
# A filename suffix is only taken as a locale when its language subtag is here,
# so "my_file_name.arb" is never mistaken for a locale named "file".
ISO_639_LANGUAGES: frozenset[str] = frozenset({
    "aa", "ab", "ae", "af", "ak", "am", "an", "ar", "as", "av", "ay", "az",
    "ba", "be", "bg", "bh", "bi", "bm", "bn", "bo", "br", "bs",
    "ca", "ce", "ch", "co", "cr", "cs", "cu", "cv", "cy",
    "da", "de", "dv", "dz",
    "ee", "el", "en", "eo", "es", "et", "eu",
    "fa", "ff", "fi", "fil", "fj", "fo", "fr", "fy",
    "ga", "gd", "gl", "gn", "gsw", "gu", "gv",
    "ha", "he", "hi", "ho", "hr", "ht", "hu", "hy", "hz",
    "ia", "id", "ie", "ig", "ii", "ik", "io", "is", "it", "iu",
    "ja", "jv",
    "ka", "kg", "ki", "kj", "kk", "kl", "km", "kn", "ko", "kr", "ks", "ku",
    "kv", "kw", "ky",
    "la", "lb", "lg", "li", "ln", "lo", "lt", "lu", "lv",
    "mg", "mh", "mi", "mk", "ml", "mn", "mr", "ms", "mt", "my",
    "na", "nb", "nd", "ne", "ng", "nl", "nn", "no", "nr", "nv", "ny",
    "oc", "oj", "om", "or", "os",
    "pa", "pi", "pl", "ps", "pt",
    "qu",
    "rm", "rn", "ro", "ru", "rw",
    "sa", "sc", "sd", "se", "sg", "si", "sk", "sl", "sm", "sn", "so", "sq",
    "sr", "ss", "st", "su", "sv", "sw",
    "ta", "te", "tg", "th", "ti", "tk", "tl", "tn", "to", "tr", "ts", "tt",
    "tw", "ty",
    "ug", "uk", "ur", "uz",
    "ve", "vi", "vo",
    "wa", "wo",
    "xh",
    "yi", "yo",
    "za", "zh", "zu",
})  # fmt: skip

# ============================================================================
# PLACEHOLDER FORMATS
# ============================================================================

# ICU date/time skeletons that can be localized automatically.
# Babel resolves each skeleton to the best pattern for the target locale.
VALID_DATE_FORMATS: frozenset[str] = frozenset({
    "d", "E", "EEEE", "LLL", "LLLL", "M", "Md", "MEd", "MMM", "MMMd", "MMMEd",
    "MMMM", "MMMMd", "MMMMEEEEd", "QQQ", "QQQQ",
    "y", "yM", "yMd", "yMEd", "yMMM", "yMMMd", "yMMMEd", "yMMMM", "yMMMMd",
    "yMMMMEEEEd", "yQQQ", "yQQQQ",
    "H", "Hm", "Hms", "j", "jm", "jms", "jmv", "jmz", "jv", "jz",
    "m", "ms", "s",
})  # fmt: skip

# Separator for composite date formats, e.g. "yMd+jms".
DATE_FORMAT_PARTS_DELIMITER: str = "+"

# Named number formats understood by the runtime formatter.
VALID_NUMBER_FORMATS: frozenset[str] = frozenset({
    "compact",
    "compactCurrency",
    "compactSimpleCurrency",
    "compactLong",
    "currency",
    "decimalPattern",
    "decimalPatternDigits",
    "decimalPercentPattern",
    "percentPattern",
    "scientificPattern",
    "simpleCurrency",
})

# Number formats that accept optionalParameters (name, symbol, decimalDigits,
# customPattern). The others ignore them.
NUMBER_FORMATS_WITH_PARAMETERS: frozenset[str] = frozenset({
    "compact",
    "compactCurrency",
    "compactSimpleCurrency",
    "compactLong",
    "currency",
    "decimalPatternDigits",
    "decimalPercentPattern",
    "simpleCurrency",
})

# CLDR plural categories accepted as plural branch keys.
PLURAL_CATEGORIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")

# Mandatory branch of every plural and select expression.
OTHER_BRANCH: str = "other"

# ICU apostrophe quoting, used when escaping is enabled.
DEFAULT_ESCAPE_CHAR: str = "'"

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_ARB_DIR: str = "l10n"
DEFAULT_TEMPLATE_ARB_FILE: str = "app_en.arb"
DEFAULT_OUTPUT_LOCALIZATION_FILE: str = "app_localizations.py"
DEFAULT_OUTPUT_CLASS: str = "AppLocalizations"

# Filenames considered by the bundle collection.
ARB_FILE_PATTERN: str = r"(\w+)\.arb$"
