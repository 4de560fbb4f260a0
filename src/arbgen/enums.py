"""Enumerations for arbgen type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PlaceholderType(StrEnum):
    """Placeholder type as spelled in ARB metadata.

    StrEnum provides automatic string conversion: str(PlaceholderType.INT) == "int"
    """

    STRING = "String"
    """Text value: {"type": "String"}"""

    INT = "int"
    """Integer value, valid for plurals."""

    NUM = "num"
    """Any number, valid for plurals (default for plural placeholders)."""

    DOUBLE = "double"
    """Floating point value."""

    DATETIME = "DateTime"
    """datetime.datetime value, formatted with a date skeleton."""

    OBJECT = "Object"
    """Anything; interpolated with str() (default when nothing is inferred)."""

    @property
    def is_numeric(self) -> bool:
        """True for int, num and double."""
        return self in (PlaceholderType.INT, PlaceholderType.NUM, PlaceholderType.DOUBLE)


class PlaceholderRole(StrEnum):
    """How a placeholder is used inside a parsed message.

    PLURAL, SELECT and DATETIME are mutually exclusive for one name.
    """

    PLAIN = "plain"
    """Plain substitution: {name}"""

    PLURAL = "plural"
    """Plural selector: {count, plural, ...}"""

    SELECT = "select"
    """Select selector: {gender, select, ...}"""

    DATETIME = "datetime"
    """Date/time argument: {when, date, yMd}"""


class ArgumentType(StrEnum):
    """Argument type keyword of an argument expression."""

    DATE = "date"
    TIME = "time"


class TokenKind(StrEnum):
    """Token kinds produced by the message tokenizer."""

    TEXT = "text"
    OPEN_BRACE = "open_brace"
    CLOSE_BRACE = "close_brace"
    COMMA = "comma"
    EQUAL_SIGN = "equal_sign"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    EOF = "eof"


__all__ = [
    "ArgumentType",
    "PlaceholderRole",
    "PlaceholderType",
    "TokenKind",
]
