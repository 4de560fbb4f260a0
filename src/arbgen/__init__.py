"""arbgen - typed Python localizations generated from ARB files.

Reads Application Resource Bundles (JSON with ICU MessageFormat messages),
parses and type-checks every message, and emits a Python module with one
accessor per message key, specialized per locale.

Public API:
    LocalizationsGenerator - Run the whole pipeline for one project
    GeneratorConfig - Generator settings
    load_config - Read settings from options, l10n.yaml or pyproject.toml
    parse_message - Parse ICU message text to an AST

Exceptions:
    ArbGenError - Base exception class
    BundleError - Invalid ARB files or bundle sets
    MessageParseError - ICU syntax errors
    PlaceholderError - Placeholder declaration and inference errors

Submodules:
    arbgen.bundles - ARB loading and locale identifiers
    arbgen.syntax - Tokenizer, parser, AST and visitor
    arbgen.model - Placeholders, type inference and message models
    arbgen.codegen - Python code emitter
    arbgen.runtime - Helpers imported by generated modules
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import GeneratorConfig, load_config
from .diagnostics import ArbGenError, BundleError, MessageParseError, PlaceholderError
from .generator import LocalizationsGenerator
from .syntax import parse_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("arbgen")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArbGenError",
    "BundleError",
    "GeneratorConfig",
    "LocalizationsGenerator",
    "MessageParseError",
    "PlaceholderError",
    "__version__",
    "load_config",
    "parse_message",
]
