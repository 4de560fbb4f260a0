"""Generator configuration.

Settings are read from the first source that provides them:

1. Explicit options (builder/CLI mapping)
2. l10n.yaml in the project directory (PyYAML)
3. [tool.arbgen] in pyproject.toml (tomllib)
4. Built-in defaults

Sources are not merged: the first source found supplies every setting and
missing keys take their defaults. An unreadable or unparsable source is
logged and skipped.

Keys use the kebab-case spelling of l10n.yaml ("arb-dir", "output-class").

Python 3.13+. Uses PyYAML for l10n.yaml.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import PurePath
from typing import Any

import yaml

from arbgen.bundles import FileSystem
from arbgen.constants import (
    DEFAULT_ARB_DIR,
    DEFAULT_OUTPUT_CLASS,
    DEFAULT_OUTPUT_LOCALIZATION_FILE,
    DEFAULT_TEMPLATE_ARB_FILE,
)
from arbgen.diagnostics import ConfigError, ErrorTemplate

__all__ = [
    "L10N_YAML",
    "PYPROJECT_TOML",
    "GeneratorConfig",
    "load_config",
    "read_config_file",
]

logger = logging.getLogger(__name__)

L10N_YAML = "l10n.yaml"
PYPROJECT_TOML = "pyproject.toml"

# Accepted for compatibility with existing l10n.yaml files; Python output
# has no deferred imports or synthetic packages.
_IGNORED_KEYS = frozenset({"use-deferred-loading", "synthetic-package"})


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """All generator settings.

    Attributes:
        arb_dir: Directory holding the ARB files, relative to the project
        template_arb_file: Template bundle filename inside arb_dir
        output_localization_file: Generated module path, relative to the project
        output_class: Name of the generated base class
        preferred_supported_locales: Locales listed first, in this order
        header: Text placed after the generated-file banner
        header_file: File (relative to arb_dir) whose content is the header
        use_deferred_loading: Accepted, has no effect
        use_relaxed_syntax: Unknown {ident} in messages is literal text
        synthetic_package: Accepted, has no effect
        use_escaping: ICU apostrophe quoting in messages
        suppress_warnings: Recovered errors log at debug; generated file gets "# ruff: noqa"
        use_named_parameters: Generated accessors take keyword-only parameters
        nullable_getter: from_locale() returns None for unsupported locales
        format: Generate date/number formatting (otherwise str())
        required_resource_attributes: Every template message needs @key metadata
        untranslated_messages_file: JSON report path, relative to the project
    """

    arb_dir: str = DEFAULT_ARB_DIR
    template_arb_file: str = DEFAULT_TEMPLATE_ARB_FILE
    output_localization_file: str = DEFAULT_OUTPUT_LOCALIZATION_FILE
    output_class: str = DEFAULT_OUTPUT_CLASS
    preferred_supported_locales: tuple[str, ...] = ()
    header: str | None = None
    header_file: str | None = None
    use_deferred_loading: bool = False
    use_relaxed_syntax: bool = False
    synthetic_package: bool = True
    use_escaping: bool = False
    suppress_warnings: bool = False
    use_named_parameters: bool = False
    nullable_getter: bool = True
    format: bool = True
    required_resource_attributes: bool = False
    untranslated_messages_file: str | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], *, source: str = "options") -> GeneratorConfig:
        """Build a config from kebab-case keys; missing keys take defaults.

        Args:
            mapping: Raw settings (e.g. parsed l10n.yaml)
            source: Where mapping came from, for log messages

        Raises:
            ConfigError: If a value has the wrong type
        """
        known = {f.name.replace("_", "-"): f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            field = known.get(key)
            if field is None:
                logger.warning("Unknown configuration option '%s' in %s", key, source)
                continue
            if key in _IGNORED_KEYS:
                logger.info("Configuration option '%s' has no effect on Python output", key)
            if value is None:
                continue
            values[field.name] = _coerce(key, field.default, value)
        return cls(**values)

    def arb_dir_path(self, project_dir: str) -> str:
        return _join(project_dir, self.arb_dir)

    def template_arb_path(self, project_dir: str) -> str:
        return str(PurePath(self.arb_dir_path(project_dir)) / self.template_arb_file)

    def output_path(self, project_dir: str) -> str:
        return _join(project_dir, self.output_localization_file)


def _join(project_dir: str, path: str) -> str:
    pure = PurePath(path)
    return str(pure if pure.is_absolute() else PurePath(project_dir) / pure)


def _coerce(key: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(ErrorTemplate.invalid_config_value(key, "a boolean", value))
        return value
    if isinstance(default, tuple):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(ErrorTemplate.invalid_config_value(key, "a list of strings", value))
        return tuple(value)
    if not isinstance(value, str):
        raise ConfigError(ErrorTemplate.invalid_config_value(key, "a string", value))
    return value


def read_config_file(path: str, fs: FileSystem) -> dict[str, Any] | None:
    """Read settings from a YAML or TOML file.

    For pyproject.toml only the [tool.arbgen] table is used.

    Returns:
        Settings mapping; None when the file is missing, unreadable,
        unparsable, or has no settings
    """
    if not fs.exists(path):
        return None
    try:
        text = fs.read_text(path)
        if path.endswith(".toml"):
            data: Any = tomllib.loads(text)
            if PurePath(path).name == PYPROJECT_TOML:
                data = data.get("tool", {}).get("arbgen")
        else:
            data = yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        logger.warning("%s", ErrorTemplate.config_unreadable(path, str(e)).format_error())
        return None

    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("%s", ErrorTemplate.config_unreadable(path, "expected a mapping").format_error())
        return None
    return data


def load_config(
    project_dir: str,
    fs: FileSystem,
    *,
    options: Mapping[str, Any] | None = None,
    config_file: str | None = None,
) -> GeneratorConfig:
    """Load configuration from the first available source.

    Args:
        project_dir: Directory holding l10n.yaml / pyproject.toml
        fs: File system
        options: Explicit settings; used when non-empty
        config_file: Read this file instead of l10n.yaml / pyproject.toml

    Raises:
        ConfigError: If the chosen source has a value of the wrong type
    """
    if options:
        logger.info("Using configuration from options")
        return GeneratorConfig.from_mapping(options)

    candidates = [config_file] if config_file else [_join(project_dir, L10N_YAML), _join(project_dir, PYPROJECT_TOML)]
    for candidate in candidates:
        data = read_config_file(candidate, fs)
        if data is not None:
            logger.info("Using configuration from %s", candidate)
            return GeneratorConfig.from_mapping(data, source=candidate)

    logger.info("Using default configuration")
    return GeneratorConfig()
