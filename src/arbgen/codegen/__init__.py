"""Python code generation for localization modules.

Python 3.13+.
"""

from .emitter import CodeEmitter, EmitterOptions
from .strings import check_unique, docstring_literal, python_identifier, python_string_literal, snake_case

__all__ = [
    "CodeEmitter",
    "EmitterOptions",
    "check_unique",
    "docstring_literal",
    "python_identifier",
    "python_string_literal",
    "snake_case",
]
