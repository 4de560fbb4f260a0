"""Diagnostic system for arbgen errors.

Provides structured error diagnostics with codes, locations, hints, and a
caret rendering for message parse errors.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceLocation
from .errors import (
    ArbGenError,
    BundleError,
    CodegenError,
    ConfigError,
    ConflictingPlaceholderUsageError,
    DuplicateLocaleError,
    FormattingError,
    InvalidIdentifierError,
    InvalidPlaceholderAttributeError,
    InvalidPlaceholderFormatError,
    InvalidPlaceholderTypeError,
    InvalidValueTypeError,
    LocaleMismatchError,
    LocaleUndeterminedError,
    MalformedBundleError,
    MalformedMetadataError,
    MessageParseError,
    MissingFallbackError,
    MissingResourceAttributeError,
    MissingResourceError,
    NoBundlesError,
    PlaceholderError,
    TemplateNotFoundError,
)
from .formatter import DiagnosticFormatter, OutputFormat, render_caret
from .templates import ErrorTemplate

__all__ = [
    "ArbGenError",
    "BundleError",
    "CodegenError",
    "ConfigError",
    "ConflictingPlaceholderUsageError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateLocaleError",
    "ErrorTemplate",
    "FormattingError",
    "InvalidIdentifierError",
    "InvalidPlaceholderAttributeError",
    "InvalidPlaceholderFormatError",
    "InvalidPlaceholderTypeError",
    "InvalidValueTypeError",
    "LocaleMismatchError",
    "LocaleUndeterminedError",
    "MalformedBundleError",
    "MalformedMetadataError",
    "MessageParseError",
    "MissingFallbackError",
    "MissingResourceAttributeError",
    "MissingResourceError",
    "NoBundlesError",
    "OutputFormat",
    "PlaceholderError",
    "SourceLocation",
    "TemplateNotFoundError",
    "render_caret",
]
