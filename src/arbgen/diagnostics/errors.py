"""arbgen exception hierarchy with structured diagnostics.

Integrates with diagnostic codes for Rust/Elm-inspired error messages.
All exceptions may store a Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "ArbGenError",
    # Bundles
    "BundleError",
    "MalformedBundleError",
    "LocaleMismatchError",
    "LocaleUndeterminedError",
    "InvalidValueTypeError",
    "MalformedMetadataError",
    "MissingResourceAttributeError",
    "MissingResourceError",
    "DuplicateLocaleError",
    "MissingFallbackError",
    "NoBundlesError",
    "TemplateNotFoundError",
    # Syntax
    "MessageParseError",
    # Placeholders
    "PlaceholderError",
    "ConflictingPlaceholderUsageError",
    "InvalidPlaceholderTypeError",
    "InvalidPlaceholderFormatError",
    "InvalidPlaceholderAttributeError",
    # Codegen
    "CodegenError",
    "InvalidIdentifierError",
    # Configuration
    "ConfigError",
    # Runtime
    "FormattingError",
]


class ArbGenError(Exception):
    """Base exception for all arbgen errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ArbGenError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


# ============================================================================
# BUNDLE ERRORS
# ============================================================================


class BundleError(ArbGenError):
    """An ARB file or the set of ARB files is structurally invalid.

    Always fatal: the generator cannot produce a consistent API.
    """


class MalformedBundleError(BundleError):
    """ARB file content is not a JSON object."""


class LocaleMismatchError(BundleError):
    """@@locale and the filename suffix name different locales.

    Attributes:
        declared: Value of @@locale
        from_filename: Locale parsed from the filename
    """

    def __init__(self, message: str | Diagnostic, *, declared: str, from_filename: str) -> None:
        super().__init__(message)
        self.declared = declared
        self.from_filename = from_filename


class LocaleUndeterminedError(BundleError):
    """Neither @@locale nor the filename yields a locale."""


class InvalidValueTypeError(BundleError):
    """A value that must be a string is not."""


class MalformedMetadataError(BundleError):
    """@key metadata (or a field within it) has the wrong shape."""


class MissingResourceAttributeError(BundleError):
    """@key metadata is required but missing."""


class MissingResourceError(BundleError):
    """A template message has no value."""


class DuplicateLocaleError(BundleError):
    """Two ARB files resolve to the same locale."""


class MissingFallbackError(BundleError):
    """A language has region/script bundles but no bare-language bundle.

    Attributes:
        language: The language lacking a fallback bundle
        dependents: Locales that need the fallback
    """

    def __init__(
        self, message: str | Diagnostic, *, language: str, dependents: tuple[str, ...]
    ) -> None:
        super().__init__(message)
        self.language = language
        self.dependents = dependents


class NoBundlesError(BundleError):
    """The ARB directory contains no bundles."""


class TemplateNotFoundError(BundleError):
    """The configured template ARB file was not loaded."""


# ============================================================================
# SYNTAX ERRORS
# ============================================================================


class MessageParseError(ArbGenError):
    """ICU message text could not be parsed.

    Fatal in the template locale; recovered (message treated as untranslated)
    in every other locale.

    Attributes:
        filename: ARB filename the message came from
        message_key: Key of the message
        text: Message text
        index: Character offset of the error within text
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        filename: str = "",
        message_key: str = "",
        text: str = "",
        index: int = 0,
    ) -> None:
        super().__init__(message)
        self.filename = filename
        self.message_key = message_key
        self.text = text
        self.index = index


# ============================================================================
# PLACEHOLDER ERRORS
# ============================================================================


class PlaceholderError(ArbGenError):
    """Placeholder declaration or usage is inconsistent."""


class ConflictingPlaceholderUsageError(PlaceholderError):
    """One placeholder is used as more than one of plural/select/datetime."""


class InvalidPlaceholderTypeError(PlaceholderError):
    """Declared type is incompatible with how the placeholder is used."""


class InvalidPlaceholderFormatError(PlaceholderError):
    """Declared format is not a known date skeleton or number format."""


class InvalidPlaceholderAttributeError(PlaceholderError):
    """A placeholder attribute (type, format, example, ...) is malformed."""


# ============================================================================
# CODEGEN ERRORS
# ============================================================================


class CodegenError(ArbGenError):
    """Generated code would be invalid."""


class InvalidIdentifierError(CodegenError):
    """A message key or placeholder name does not map to a Python identifier."""


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================


class ConfigError(ArbGenError):
    """Generator configuration holds an invalid value."""


# ============================================================================
# RUNTIME ERRORS
# ============================================================================


class FormattingError(ArbGenError):
    """Raised when locale-aware formatting fails in a generated accessor.

    Carries a fallback_value so callers can still produce usable output.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        super().__init__(message)
        self.fallback_value = fallback_value
