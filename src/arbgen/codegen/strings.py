"""Python source fragments: string literals, docstrings and identifiers.

Python 3.13+.
"""

from __future__ import annotations

import keyword
import re
import unicodedata
from collections.abc import Iterable, Mapping

from arbgen.diagnostics import ErrorTemplate, InvalidIdentifierError

__all__ = [
    "check_unique",
    "docstring_literal",
    "python_identifier",
    "python_string_literal",
    "snake_case",
]

# Boundaries: "helloWorld" -> hello_World, "HTTPServer" -> HTTP_Server
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(ch: str) -> str:
    simple = _SIMPLE_ESCAPES.get(ch)
    if simple is not None:
        return simple
    # Control and surrogate characters cannot be written to a UTF-8 source file
    if unicodedata.category(ch) in ("Cc", "Cs"):
        code = ord(ch)
        return f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"
    return ch


def python_string_literal(value: str) -> str:
    """Return a double-quoted Python literal that evaluates to value.

    Example:
        >>> python_string_literal('Say "hi"\\n')
        '"Say \\\\"hi\\\\"\\\\n"'
    """
    return '"' + "".join(_escape_char(ch) for ch in value) + '"'


def docstring_literal(lines: Iterable[str], indent: str) -> str:
    """Return a triple-quoted docstring for lines, indented for a body.

    Backslashes, quotes and control characters are escaped so the text
    survives verbatim. Empty lines stay empty.
    """
    escaped = ["".join(_escape_char(ch) for ch in line) for line in lines]
    if len(escaped) == 1:
        return f'{indent}"""{escaped[0]}"""'
    rest = "\n".join(f"{indent}{line}" if line else "" for line in escaped[1:])
    return f'{indent}"""{escaped[0]}\n{rest}\n{indent}"""'


def snake_case(name: str) -> str:
    """Convert a camelCase or PascalCase name to snake_case.

    Example:
        >>> snake_case("helloWorld")
        'hello_world'
        >>> snake_case("HTTPServerError")
        'http_server_error'
        >>> snake_case("already_snake")
        'already_snake'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def python_identifier(kind: str, name: str, *, reserved: Iterable[str] = ()) -> str:
    """Map an ARB name to a usable snake_case Python identifier.

    Args:
        kind: "message key" or "placeholder", for diagnostics
        name: Name as written in the ARB file
        reserved: Identifiers the generated code already uses

    Raises:
        InvalidIdentifierError: If the result is not an identifier, is a
            keyword, or is reserved
    """
    python_name = snake_case(name)
    if not python_name.isidentifier() or keyword.iskeyword(python_name):
        raise InvalidIdentifierError(ErrorTemplate.invalid_identifier(kind, name, python_name))
    if python_name in reserved:
        raise InvalidIdentifierError(ErrorTemplate.reserved_identifier(kind, name, python_name))
    return python_name


def check_unique(kind: str, identifiers: Mapping[str, str]) -> None:
    """Fail when two names map to the same identifier.

    Args:
        kind: "message key" or "placeholder"
        identifiers: ARB name -> Python identifier

    Raises:
        InvalidIdentifierError: On the first collision, in input order
    """
    seen: dict[str, list[str]] = {}
    for name, python_name in identifiers.items():
        seen.setdefault(python_name, []).append(name)
    for python_name, names in seen.items():
        if len(names) > 1:
            raise InvalidIdentifierError(ErrorTemplate.duplicate_identifier(kind, python_name, names))
