"""Recursive-descent parser for ICU message text.

Grammar:
    message  := (text | expr)*
    expr     := "{" ident "}"
              | "{" ident "," "plural" "," branches "}"
              | "{" ident "," "select" "," branches "}"
              | "{" ident "," ("date" | "time") ["," ident] "}"
    branches := branch+
    branch   := ("=" number | ident) "{" message "}"

Parser state is the token tuple and a cursor index; the lookahead token is
self._tokens[self._pos]. No backtracking is needed.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import NoReturn

from arbgen.constants import DEFAULT_ESCAPE_CHAR, MAX_DEPTH, OTHER_BRANCH, PLURAL_CATEGORIES
from arbgen.core.depth_guard import DepthGuard, DepthLimitExceededError
from arbgen.diagnostics import Diagnostic, ErrorTemplate, MessageParseError, SourceLocation
from arbgen.enums import ArgumentType, TokenKind

from .ast import ArgumentExpr, Branch, Element, Message, PlaceholderRef, PluralExpr, SelectExpr, Span, Text
from .lexer import Token, tokenize

__all__ = ["MessageParser", "parse_message"]

logger = logging.getLogger(__name__)

_PLURAL = "plural"
_SELECT = "select"


class MessageParser:
    """Parse a token stream into a Message AST.

    Args:
        tokens: Output of tokenize() for text
        text: Source text (for error locations and relaxed literals)
        key: Message key, for error locations
        filename: ARB filename, for error locations
        placeholders: Valid placeholder names; when given, "{ident}" with an
            unknown ident is kept as literal text
        max_depth: Maximum plural/select nesting
    """

    def __init__(
        self,
        tokens: tuple[Token, ...],
        text: str,
        *,
        key: str = "",
        filename: str = "",
        placeholders: Collection[str] | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self._tokens = tokens
        self._text = text
        self._key = key
        self._filename = filename
        self._placeholders = frozenset(placeholders) if placeholders is not None else None
        self._guard = DepthGuard(max_depth=max_depth)
        self._pos = 0

    def parse(self) -> Message:
        """Parse the whole token stream.

        Raises:
            MessageParseError: On any syntax error
        """
        try:
            return self._parse_message(nested=False)
        except DepthLimitExceededError as e:
            self._fail(
                ErrorTemplate.nesting_depth_exceeded(self._guard.max_depth, self._location()),
                cause=e,
            )

    # ------------------------------------------------------------------
    # Token cursor
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind != TokenKind.EOF:
            self._pos += 1
        return token

    def _expect(self, kind: TokenKind, what: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            self._unexpected([what])
        return self._advance()

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _parse_message(self, *, nested: bool) -> Message:
        children: list[Element] = []
        while True:
            token = self._peek()
            match token.kind:
                case TokenKind.TEXT:
                    self._advance()
                    _append_text(children, Text(token.value, Span(token.start, token.end)))
                case TokenKind.OPEN_BRACE:
                    element = self._parse_expression()
                    if Text.guard(element):
                        _append_text(children, element)
                    else:
                        children.append(element)
                case TokenKind.CLOSE_BRACE if nested:
                    break
                case TokenKind.EOF:
                    if nested:
                        self._unexpected(["'}'"])
                    break
                case _:
                    self._unexpected(["text", "'{'"])
        return Message(tuple(children))

    def _parse_expression(self) -> Element:
        open_brace = self._advance()
        name_token = self._peek()
        if name_token.kind != TokenKind.IDENTIFIER or name_token.value[0].isdigit():
            self._unexpected(["placeholder name"])
        self._advance()
        name = name_token.value

        token = self._peek()
        if token.kind == TokenKind.CLOSE_BRACE:
            close = self._advance()
            span = Span(open_brace.start, close.end)
            if self._placeholders is not None and name not in self._placeholders:
                logger.debug("Treating unknown placeholder {%s} as text in %s", name, self._key)
                return Text(self._text[span.start : span.end], span)
            return PlaceholderRef(name, span)
        if token.kind != TokenKind.COMMA:
            self._unexpected(["'}'", "','"])
        self._advance()

        type_token = self._expect(TokenKind.IDENTIFIER, "expression type")
        match type_token.value:
            case "plural" | "select" as kind:
                self._expect(TokenKind.COMMA, "','")
                branches = self._parse_branches(kind)
                close = self._expect(TokenKind.CLOSE_BRACE, "'}'")
                span = Span(open_brace.start, close.end)
                if not any(b.key == OTHER_BRANCH for b in branches):
                    self._fail_at(
                        ErrorTemplate.missing_other_branch(kind, name, self._location(open_brace.start)),
                        open_brace.start,
                    )
                if kind == _PLURAL:
                    return PluralExpr(name, branches, span)
                return SelectExpr(name, branches, span)
            case "date" | "time" as arg_type:
                fmt: str | None = None
                if self._peek().kind == TokenKind.COMMA:
                    self._advance()
                    fmt = self._expect(TokenKind.IDENTIFIER, "date format").value
                close = self._expect(TokenKind.CLOSE_BRACE, "'}'")
                return ArgumentExpr(name, ArgumentType(arg_type), fmt, Span(open_brace.start, close.end))
            case other:
                self._fail_at(
                    ErrorTemplate.unknown_expression_type(other, self._location(type_token.start)),
                    type_token.start,
                )

    def _parse_branches(self, kind: str) -> tuple[Branch, ...]:
        branches: list[Branch] = []
        seen: set[str] = set()
        while self._peek().kind != TokenKind.CLOSE_BRACE:
            key_token = self._peek()
            key = self._parse_branch_key(kind)
            if key in seen:
                self._fail_at(
                    ErrorTemplate.duplicate_branch(key, self._location(key_token.start)),
                    key_token.start,
                )
            seen.add(key)

            self._expect(TokenKind.OPEN_BRACE, "'{'")
            with self._guard:
                message = self._parse_message(nested=True)
            close = self._expect(TokenKind.CLOSE_BRACE, "'}'")
            branches.append(Branch(key, message, Span(key_token.start, close.end)))
        return tuple(branches)

    def _parse_branch_key(self, kind: str) -> str:
        token = self._peek()
        match token.kind:
            case TokenKind.EQUAL_SIGN if kind == _PLURAL:
                self._advance()
                number = self._expect(TokenKind.NUMBER, "number")
                return f"={int(number.value)}"
            case TokenKind.IDENTIFIER | TokenKind.NUMBER if kind == _SELECT:
                return self._advance().value
            case TokenKind.IDENTIFIER | TokenKind.NUMBER:
                if token.value not in PLURAL_CATEGORIES:
                    self._fail_at(
                        ErrorTemplate.invalid_plural_category(token.value, self._location(token.start)),
                        token.start,
                    )
                return self._advance().value
            case _:
                self._unexpected(["'=<number>'" if kind == _PLURAL else "case label", "'}'"])

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _location(self, index: int | None = None) -> SourceLocation:
        if index is None:
            index = self._peek().start
        return SourceLocation(file=self._filename, message_key=self._key, text=self._text, index=index)

    def _unexpected(self, expected: list[str]) -> NoReturn:
        token = self._peek()
        location = self._location(token.start)
        if token.kind == TokenKind.EOF:
            diagnostic = ErrorTemplate.unexpected_eof(expected, location)
        else:
            diagnostic = ErrorTemplate.unexpected_token(expected, token.describe(), location)
        self._fail_at(diagnostic, token.start)

    def _fail(self, diagnostic: Diagnostic, *, cause: BaseException | None = None) -> NoReturn:
        raise MessageParseError(
            diagnostic,
            filename=self._filename,
            message_key=self._key,
            text=self._text,
            index=self._peek().start,
        ) from cause

    def _fail_at(self, diagnostic: Diagnostic, index: int) -> NoReturn:
        raise MessageParseError(
            diagnostic,
            filename=self._filename,
            message_key=self._key,
            text=self._text,
            index=index,
        )


def _append_text(children: list[Element], text: Text) -> None:
    """Append text, merging with a preceding Text node."""
    if children and Text.guard(last := children[-1]):
        start = last.span.start if last.span else None
        end = text.span.end if text.span else None
        span = Span(start, end) if start is not None and end is not None else None
        children[-1] = Text(last.value + text.value, span)
    else:
        children.append(text)


def parse_message(
    text: str,
    *,
    key: str = "",
    filename: str = "",
    use_escaping: bool = False,
    escape_char: str = DEFAULT_ESCAPE_CHAR,
    placeholders: Collection[str] | None = None,
) -> Message:
    """Parse ICU message text into a Message AST.

    Args:
        text: Message text from an ARB file
        key: Message key, for error locations
        filename: ARB filename, for error locations
        use_escaping: Treat escape_char as ICU quoting
        escape_char: Quoting character (default apostrophe)
        placeholders: Valid placeholder names enabling relaxed syntax

    Returns:
        Parsed Message

    Raises:
        MessageParseError: On any syntax error

    Example:
        >>> parse_message("Hello {name}")
        Message(children=(Text(value='Hello ', ...), PlaceholderRef(name='name', ...)))
    """
    tokens = tokenize(text, use_escaping=use_escaping, escape_char=escape_char, key=key, filename=filename)
    return MessageParser(tokens, text, key=key, filename=filename, placeholders=placeholders).parse()
