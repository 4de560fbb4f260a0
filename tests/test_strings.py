"""Tests for codegen/strings.py - Python source fragments.

Property-Based Testing Strategy:
    Any string rendered with python_string_literal must evaluate back to
    itself; docstrings must parse as a function body.
"""

from __future__ import annotations

import ast

import pytest
from hypothesis import given

from arbgen.codegen import check_unique, docstring_literal, python_identifier, python_string_literal, snake_case
from arbgen.diagnostics import DiagnosticCode, InvalidIdentifierError
from tests.strategies import placeholder_names, python_string_values

# ============================================================================
# String literals
# ============================================================================


class TestStringLiteral:
    """python_string_literal escaping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", '"plain"'),
            ('Say "hi"', '"Say \\"hi\\""'),
            ("back\\slash", '"back\\\\slash"'),
            ("line\nbreak", '"line\\nbreak"'),
            ("tab\there", '"tab\\there"'),
            ("\x00", '"\\x00"'),
            (" ", '" "'),
            ("Grüße 👋", '"Grüße 👋"'),
        ],
    )
    def test_escapes(self, value: str, expected: str) -> None:
        """Only quotes, backslashes and control characters are escaped."""
        assert python_string_literal(value) == expected

    def test_apostrophe_unescaped(self) -> None:
        """Single quotes need no escaping inside double quotes."""
        assert python_string_literal("It's") == '"It\'s"'

    @given(python_string_values())
    def test_literal_evaluates_to_value(self, value: str) -> None:
        """The literal is valid Python that evaluates to the input."""
        literal = python_string_literal(value)

        assert ast.literal_eval(literal) == value
        assert "\n" not in literal


class TestDocstringLiteral:
    """docstring_literal layout."""

    def test_single_line(self) -> None:
        """One line stays on the quote line."""
        assert docstring_literal(["Hello."], "    ") == '    """Hello."""'

    def test_multi_line(self) -> None:
        """Continuation lines are indented; empty lines stay empty."""
        rendered = docstring_literal(["First.", "", "Second."], "    ")

        assert rendered == '    """First.\n\n    Second.\n    """'

    def test_quotes_escaped(self) -> None:
        """Triple quotes inside the text cannot end the docstring."""
        rendered = docstring_literal(['x"""y', "back\\slash"], "    ")
        function = ast.parse(f"def f():\n{rendered}\n").body[0]

        assert isinstance(function, ast.FunctionDef)
        assert ast.get_docstring(function, clean=False) == 'x"""y\n    back\\slash\n    '

    @given(python_string_values())
    def test_any_text_parses(self, text: str) -> None:
        """Any text yields a syntactically valid docstring."""
        lines = text.split("\n")
        source = f"def f():\n{docstring_literal(lines, '    ')}\n"

        ast.parse(source)


# ============================================================================
# Identifiers
# ============================================================================


class TestSnakeCase:
    """camelCase to snake_case conversion."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("helloWorld", "hello_world"),
            ("HTTPServerError", "http_server_error"),
            ("getHTTP", "get_http"),
            ("item2Count", "item2_count"),
            ("already_snake", "already_snake"),
            ("Title", "title"),
            ("x", "x"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        """Word boundaries become underscores; everything is lowercased."""
        assert snake_case(name) == expected

    @given(placeholder_names())
    def test_idempotent(self, name: str) -> None:
        """Converting twice changes nothing."""
        once = snake_case(name)

        assert snake_case(once) == once


class TestPythonIdentifier:
    """Mapping ARB names to usable identifiers."""

    def test_valid(self) -> None:
        """camelCase keys become snake_case methods."""
        assert python_identifier("message key", "itemCount") == "item_count"

    @pytest.mark.parametrize("name", ["class", "1abc", "hello-world", "with space", ""])
    def test_invalid(self, name: str) -> None:
        """Keywords and non-identifiers raise INVALID_IDENTIFIER."""
        with pytest.raises(InvalidIdentifierError) as exc_info:
            python_identifier("message key", name)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.INVALID_IDENTIFIER

    def test_reserved(self) -> None:
        """Names used by the generated code raise RESERVED_IDENTIFIER."""
        with pytest.raises(InvalidIdentifierError) as exc_info:
            python_identifier("message key", "fromLocale", reserved={"from_locale"})

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.RESERVED_IDENTIFIER
        assert "'fromLocale'" in str(exc_info.value)


class TestCheckUnique:
    """Collisions after name mapping."""

    def test_unique_passes(self) -> None:
        """Distinct identifiers are accepted."""
        check_unique("message key", {"a": "a", "bC": "b_c"})

    def test_collision(self) -> None:
        """Two names mapping to one identifier raise DUPLICATE_IDENTIFIER."""
        with pytest.raises(InvalidIdentifierError) as exc_info:
            check_unique("message key", {"helloWorld": "hello_world", "hello_world": "hello_world"})

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DUPLICATE_IDENTIFIER
        assert "'helloWorld', 'hello_world'" in str(exc_info.value)
