"""ICU message AST node definitions.

A parsed ARB message is a Message holding literal Text runs and expressions.
Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from arbgen.constants import OTHER_BRANCH
from arbgen.enums import ArgumentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Message structure
    "Message",
    "Text",
    "Branch",
    # Expressions
    "PlaceholderRef",
    "PluralExpr",
    "SelectExpr",
    "ArgumentExpr",
    # Type aliases
    "Element",
    "Expression",
    "ASTNode",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span within the message text.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "Hello {name}"
        PlaceholderRef "name" span: Span(start=6, end=12)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# ============================================================================
# MESSAGE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Message:
    """Root node: a sequence of text runs and expressions.

    Also used for the submessage of every plural/select branch.
    Adjacent Text children never occur (the parser merges them).
    """

    children: tuple["Element", ...]

    @property
    def is_empty(self) -> bool:
        """True for the empty message ("")."""
        return not self.children


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text run, already unescaped."""

    value: str
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["Text"]:
        """Type guard for Text.

        Example:
            if Text.guard(elem):
                parts.append(elem.value)
        """
        return isinstance(elem, Text)


@dataclass(frozen=True, slots=True)
class Branch:
    """One case arm of a plural or select expression.

    Attributes:
        key: Branch key: "=<integer>" for exact plural values, otherwise the
            CLDR category (plural) or case label (select)
        message: Submessage produced by this branch
        span: Location of the key through the closing brace
    """

    key: str
    message: Message
    span: Span | None = None

    @property
    def is_exact(self) -> bool:
        """True for "=N" plural branches."""
        return self.key.startswith("=")

    @property
    def exact_value(self) -> int | None:
        """Integer of an "=N" branch, else None."""
        return int(self.key[1:]) if self.is_exact else None


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class PlaceholderRef:
    """Plain substitution: {name}"""

    name: str
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["PlaceholderRef"]:
        """Type guard for PlaceholderRef."""
        return isinstance(elem, PlaceholderRef)


@dataclass(frozen=True, slots=True)
class PluralExpr:
    """Plural selection: {count, plural, =0{...} one{...} other{...}}

    Branch order is source order; exactly one branch is keyed "other".
    """

    name: str
    branches: tuple[Branch, ...]
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["PluralExpr"]:
        """Type guard for PluralExpr."""
        return isinstance(elem, PluralExpr)

    @property
    def other(self) -> Branch:
        """The mandatory other branch."""
        return next(b for b in self.branches if b.key == OTHER_BRANCH)

    @property
    def exact_branches(self) -> tuple[Branch, ...]:
        """Branches keyed "=N", in source order."""
        return tuple(b for b in self.branches if b.is_exact)

    @property
    def category_branches(self) -> tuple[Branch, ...]:
        """Branches keyed by CLDR category other than "other"."""
        return tuple(b for b in self.branches if not b.is_exact and b.key != OTHER_BRANCH)


@dataclass(frozen=True, slots=True)
class SelectExpr:
    """Case selection: {gender, select, male{...} female{...} other{...}}"""

    name: str
    branches: tuple[Branch, ...]
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["SelectExpr"]:
        """Type guard for SelectExpr."""
        return isinstance(elem, SelectExpr)

    @property
    def other(self) -> Branch:
        """The mandatory other branch."""
        return next(b for b in self.branches if b.key == OTHER_BRANCH)

    @property
    def cases(self) -> tuple[Branch, ...]:
        """Every branch except other, in source order."""
        return tuple(b for b in self.branches if b.key != OTHER_BRANCH)


@dataclass(frozen=True, slots=True)
class ArgumentExpr:
    """Date/time argument: {when, date, yMMMd} or {when, time}

    Attributes:
        name: Placeholder name
        arg_type: date or time
        format: Skeleton, or None for the locale's medium format
    """

    name: str
    arg_type: ArgumentType
    format: str | None = None
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["ArgumentExpr"]:
        """Type guard for ArgumentExpr."""
        return isinstance(elem, ArgumentExpr)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Expression = PlaceholderRef | PluralExpr | SelectExpr | ArgumentExpr
type Element = Text | Expression

type ASTNode = Message | Text | Branch | PlaceholderRef | PluralExpr | SelectExpr | ArgumentExpr | Span
