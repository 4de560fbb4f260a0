"""Diagnostic codes and data structures.

Defines error codes, source locations, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceLocation",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Bundle errors (ARB loading and collection)
        2000-2999: Syntax errors (ICU message parsing)
        3000-3999: Placeholder errors (declaration and inference)
        4000-4999: Code generation errors
        5000-5999: Configuration errors
    """

    # Bundle errors (1000-1999)
    MALFORMED_BUNDLE = 1001
    LOCALE_MISMATCH = 1002
    LOCALE_UNDETERMINED = 1003
    INVALID_VALUE_TYPE = 1004
    MALFORMED_METADATA = 1005
    MISSING_RESOURCE_ATTRIBUTE = 1006
    DUPLICATE_LOCALE = 1007
    MISSING_FALLBACK = 1008
    NO_BUNDLES = 1009
    MISSING_RESOURCE = 1010
    BUNDLE_UNREADABLE = 1011
    TEMPLATE_NOT_FOUND = 1012

    # Syntax errors (2000-2999)
    UNEXPECTED_TOKEN = 2001
    UNEXPECTED_EOF = 2002
    MISSING_OTHER_BRANCH = 2003
    INVALID_PLURAL_CATEGORY = 2004
    DUPLICATE_BRANCH = 2005
    UNKNOWN_EXPRESSION_TYPE = 2006
    NESTING_DEPTH_EXCEEDED = 2007

    # Placeholder errors (3000-3999)
    CONFLICTING_PLACEHOLDER_USAGE = 3001
    INVALID_PLACEHOLDER_TYPE = 3002
    INVALID_PLACEHOLDER_FORMAT = 3003
    INVALID_PLACEHOLDER_ATTRIBUTE = 3004

    # Code generation errors (4000-4999)
    INVALID_IDENTIFIER = 4001
    DUPLICATE_IDENTIFIER = 4002
    RESERVED_IDENTIFIER = 4003

    # Configuration errors (5000-5999)
    INVALID_CONFIG_VALUE = 5001
    UNKNOWN_PREFERRED_LOCALE = 5002
    CONFIG_UNREADABLE = 5003


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a diagnostic points to.

    Attributes:
        file: ARB filename (basename) or configuration file path
        message_key: Message key the diagnostic is about (empty if not applicable)
        text: Message text being parsed (empty if not applicable)
        index: Character offset into text (0-indexed)
    """

    file: str = ""
    message_key: str = ""
    text: str = ""
    index: int | None = None

    def __post_init__(self) -> None:
        """Validate SourceLocation invariants.

        Raises:
            ValueError: If index is negative or past the end of text.
        """
        if self.index is not None and not 0 <= self.index <= len(self.text):
            msg = f"SourceLocation.index must be within text (0..{len(self.text)}), got {self.index}"
            raise ValueError(msg)

    def describe(self) -> str:
        """Return "file:key" style location prefix."""
        if self.file and self.message_key:
            return f"{self.file}:{self.message_key}"
        return self.file or self.message_key


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        location: Source location (None when not tied to a file)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    location: SourceLocation | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_OTHER_BRANCH]: Plural expression is missing the 'other' branch
              --> app_en.arb:itemCount
                {count, plural, =0{none}}
                                        ^
              = help: Add an other{...} branch

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
