"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic, SourceLocation

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
    "render_caret",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def render_caret(text: str, index: int, indent: str = "    ") -> str:
    """Render the line of text containing index with a caret under it.

    Args:
        text: Full message text
        index: Character offset into text
        indent: Prefix for both rendered lines

    Returns:
        Two lines: the source line and the caret pointer

    Example:
        >>> print(render_caret("Hello {name", 11))
            Hello {name
                       ^
    """
    line_start = text.rfind("\n", 0, index) + 1
    line_end = text.find("\n", index)
    if line_end == -1:
        line_end = len(text)
    line = text[line_start:line_end]
    return f"{indent}{line}\n{indent}{' ' * (index - line_start)}^"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.duplicate_locale("en", ["a_en.arb", "b_en.arb"])
        >>> print(formatter.format(diagnostic))
        error[DUPLICATE_LOCALE]: Multiple ARB files with the same 'en' locale detected: ...
          = help: Ensure that there is exactly one ARB file for each locale

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        DUPLICATE_LOCALE: Multiple ARB files with the same 'en' locale detected: ...
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[LOCALE_MISMATCH]: The locale in @@locale ('fr') and the filename ('es') do not match
              --> app_es.arb
              = help: Specify the locale in either the filename or the @@locale key only
        """
        severity = diagnostic.severity
        if self.color:
            code = "1;31" if severity == "error" else "1;33"  # Bold red / bold yellow
            severity_str = f"\033[{code}m{severity}\033[0m"
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = diagnostic.location
        if location is not None:
            described = location.describe()
            if described:
                parts.append(f"  --> {described}")
            if location.index is not None:
                parts.append(render_caret(location.text, location.index))

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            [app_en.arb:itemCount] MISSING_OTHER_BRANCH: Plural expression is missing ...
        """
        prefix = ""
        if diagnostic.location is not None and diagnostic.location.describe():
            prefix = f"[{diagnostic.location.describe()}] "
        return f"{prefix}{diagnostic.code.name}: {diagnostic.message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "DUPLICATE_LOCALE", "code_value": 1007, "message": "...", "severity": "error"}
        """
        import json  # noqa: PLC0415

        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }

        location: SourceLocation | None = diagnostic.location
        if location is not None:
            if location.file:
                data["file"] = location.file
            if location.message_key:
                data["message_key"] = location.message_key
            if location.index is not None:
                data["index"] = location.index

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)
