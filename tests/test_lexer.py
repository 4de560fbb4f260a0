"""Tests for syntax/lexer.py - modal tokenizer for ICU message text.

Coverage:
    - String/expression mode switching and token spans
    - Lenient brace handling without escaping
    - Apostrophe quoting with escaping enabled
    - Invalid characters inside expressions
"""

from __future__ import annotations

import pytest
from hypothesis import given

from arbgen.diagnostics import DiagnosticCode, MessageParseError
from arbgen.enums import TokenKind
from arbgen.syntax import tokenize
from tests.strategies import plain_text


def kinds(text: str, **kwargs: object) -> list[TokenKind]:
    return [t.kind for t in tokenize(text, **kwargs)]  # type: ignore[arg-type]


# ============================================================================
# Mode switching
# ============================================================================


class TestModes:
    """Test string and expression modes."""

    def test_simple_placeholder(self) -> None:
        """Text, braces and identifier around a plain placeholder."""
        tokens = tokenize("Hello {name}")

        assert [t.kind for t in tokens] == [
            TokenKind.TEXT,
            TokenKind.OPEN_BRACE,
            TokenKind.IDENTIFIER,
            TokenKind.CLOSE_BRACE,
            TokenKind.EOF,
        ]
        assert tokens[0].value == "Hello "
        assert tokens[2].value == "name"

    def test_token_spans(self) -> None:
        """Spans are source offsets; EOF sits at the end of the text."""
        tokens = tokenize("Hi {name}")

        assert (tokens[0].start, tokens[0].end) == (0, 3)
        assert (tokens[2].start, tokens[2].end) == (4, 8)
        assert (tokens[-1].start, tokens[-1].end) == (9, 9)

    def test_plural_expression_tokens(self) -> None:
        """Numbers, commas and equal signs only appear in expression mode."""
        assert kinds("{n, plural, =0{none} other{some}}") == [
            TokenKind.OPEN_BRACE,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.EQUAL_SIGN,
            TokenKind.NUMBER,
            TokenKind.OPEN_BRACE,
            TokenKind.TEXT,
            TokenKind.CLOSE_BRACE,
            TokenKind.IDENTIFIER,
            TokenKind.OPEN_BRACE,
            TokenKind.TEXT,
            TokenKind.CLOSE_BRACE,
            TokenKind.CLOSE_BRACE,
            TokenKind.EOF,
        ]

    def test_whitespace_preserved_in_submessage(self) -> None:
        """Spaces are insignificant in expressions but kept in submessages."""
        tokens = tokenize("{n, select, other{  two  }}")
        texts = [t.value for t in tokens if t.kind == TokenKind.TEXT]

        assert texts == ["  two  "]

    def test_empty_text(self) -> None:
        """Empty input yields only EOF."""
        assert kinds("") == [TokenKind.EOF]

    def test_eof_description(self) -> None:
        """EOF describes itself as end of message."""
        assert tokenize("")[0].describe() == "end of message"
        assert tokenize("abc")[0].describe() == "'abc'"


# ============================================================================
# Lenient braces (escaping disabled)
# ============================================================================


class TestLenientBraces:
    """Without escaping, braces not opening an identifier are literal."""

    @pytest.mark.parametrize("text", ["{}", "{ 5 }", "a } b", "{{", "{-x}"])
    def test_literal_braces(self, text: str) -> None:
        """Non-structural braces collapse into a single TEXT token."""
        tokens = tokenize(text)

        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.EOF]
        assert tokens[0].value == text

    def test_brace_before_spaced_identifier_opens(self) -> None:
        """Whitespace between "{" and an identifier still opens an expression."""
        assert kinds("{ name }")[:3] == [TokenKind.OPEN_BRACE, TokenKind.IDENTIFIER, TokenKind.CLOSE_BRACE]

    def test_apostrophe_is_literal(self) -> None:
        """Apostrophes are plain text when escaping is off."""
        tokens = tokenize("It's {name}")

        assert tokens[0].value == "It's "

    @given(plain_text())
    def test_plain_text_single_token(self, text: str) -> None:
        """Text without braces is one TEXT token with the same value."""
        tokens = tokenize(text)

        assert len(tokens) == 2
        assert tokens[0].value == text


# ============================================================================
# Escaping
# ============================================================================


class TestEscaping:
    """Apostrophe quoting when use_escaping is enabled."""

    def test_doubled_quote(self) -> None:
        """Two escape characters produce one."""
        tokens = tokenize("It''s", use_escaping=True)

        assert tokens[0].value == "It's"

    def test_quoted_braces(self) -> None:
        """Quoted braces are literal text."""
        tokens = tokenize("Use '{name}' here", use_escaping=True)

        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.EOF]
        assert tokens[0].value == "Use {name} here"

    def test_unterminated_quote_runs_to_end(self) -> None:
        """An unterminated quote makes the rest of the text literal."""
        tokens = tokenize("a '{b", use_escaping=True)

        assert tokens[0].value == "a {b"

    def test_custom_escape_char(self) -> None:
        """Any single character can be the escape character."""
        tokens = tokenize("#{x}# {y}", use_escaping=True, escape_char="#")

        assert tokens[0].value == "{x} "
        assert tokens[2].value == "y"

    def test_brace_always_structural(self) -> None:
        """With escaping, every "{" opens an expression."""
        assert kinds("{ 5 }", use_escaping=True) == [
            TokenKind.OPEN_BRACE,
            TokenKind.NUMBER,
            TokenKind.CLOSE_BRACE,
            TokenKind.EOF,
        ]

    def test_stray_close_brace_is_token(self) -> None:
        """A top-level "}" is emitted for the parser to reject."""
        assert kinds("a}", use_escaping=True) == [TokenKind.TEXT, TokenKind.CLOSE_BRACE, TokenKind.EOF]


# ============================================================================
# Errors
# ============================================================================


class TestErrors:
    """Characters that cannot start an expression token."""

    def test_invalid_character_in_expression(self) -> None:
        """Punctuation inside an expression raises UNEXPECTED_TOKEN."""
        with pytest.raises(MessageParseError) as exc_info:
            tokenize("Hi {name!}", key="greeting", filename="app_en.arb")

        error = exc_info.value
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.UNEXPECTED_TOKEN
        assert error.index == 8
        assert error.message_key == "greeting"
        assert error.filename == "app_en.arb"
        assert "'!'" in str(error)
