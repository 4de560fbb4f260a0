"""Pipeline orchestration: bundles -> messages -> generated module.

LocalizationsGenerator drives one run:

1. Load every ARB bundle of the configured directory
2. Locate the template bundle
3. Build one Message per template key (parsing and type inference)
4. Emit the module and write it
5. Optionally write the untranslated-messages report

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import PurePath

from arbgen.bundles import FileSystem, LocaleIdentifier, ResourceBundle, ResourceBundleCollection
from arbgen.codegen import CodeEmitter, EmitterOptions
from arbgen.config import GeneratorConfig
from arbgen.diagnostics import (
    ConfigError,
    ErrorTemplate,
    NoBundlesError,
    TemplateNotFoundError,
)
from arbgen.model import Message

__all__ = ["GenerationResult", "LocalizationsGenerator"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Summary of a generator run.

    Attributes:
        output_path: Path of the generated module
        locales: Supported locales, in output order
        message_count: Number of template messages
        untranslated: Locale -> untranslated keys, non-template locales only
    """

    output_path: str
    locales: tuple[str, ...]
    message_count: int
    untranslated: dict[str, list[str]]


class LocalizationsGenerator:
    """Generate a localizations module from a directory of ARB files.

    Example:
        >>> fs = LocalFileSystem("/work/app")
        >>> generator = LocalizationsGenerator(load_config(".", fs), fs)
        >>> result = generator.run()
    """

    __slots__ = ("_collection", "_config", "_fs", "_messages", "_project_dir", "_template")

    def __init__(self, config: GeneratorConfig, fs: FileSystem, *, project_dir: str = ".") -> None:
        self._config = config
        self._fs = fs
        self._project_dir = project_dir
        self._collection: ResourceBundleCollection | None = None
        self._template: ResourceBundle | None = None
        self._messages: tuple[Message, ...] = ()

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_resources(self) -> tuple[ResourceBundleCollection, ResourceBundle]:
        """Load bundles and build message models.

        Returns:
            The bundle collection and the template bundle

        Raises:
            NoBundlesError: If the ARB directory is missing or empty
            TemplateNotFoundError: If the template file is not a loaded bundle
            BundleError: If a bundle is invalid
            MessageParseError: If a template message fails to parse
            PlaceholderError: If placeholder inference fails
        """
        config = self._config
        arb_dir = config.arb_dir_path(self._project_dir)
        if not self._fs.exists(arb_dir):
            raise NoBundlesError(ErrorTemplate.no_bundles(arb_dir))

        collection = ResourceBundleCollection.from_directory(arb_dir, self._fs)
        if len(collection) == 0:
            raise NoBundlesError(ErrorTemplate.no_bundles(arb_dir))
        logger.info("Loaded %d ARB files from %s", len(collection), arb_dir)

        template = next(
            (b for b in collection if PurePath(b.path).name == config.template_arb_file),
            None,
        )
        if template is None:
            raise TemplateNotFoundError(
                ErrorTemplate.template_not_found(
                    config.template_arb_path(self._project_dir), [b.filename for b in collection]
                )
            )

        self._collection = collection
        self._template = template
        self._messages = tuple(
            Message.build(
                template,
                collection,
                key,
                require_resource_attributes=config.required_resource_attributes,
                use_relaxed_syntax=config.use_relaxed_syntax,
                use_escaping=config.use_escaping,
                suppress_warnings=config.suppress_warnings,
            )
            for key in template.message_keys
        )
        logger.debug("Built %d messages from %s", len(self._messages), template.filename)
        return collection, template

    def _loaded(self) -> tuple[ResourceBundleCollection, ResourceBundle]:
        collection, template = self._collection, self._template
        if collection is None or template is None:
            return self.load_resources()
        return collection, template

    @property
    def messages(self) -> tuple[Message, ...]:
        self._loaded()
        return self._messages

    @property
    def template_locale(self) -> LocaleIdentifier:
        return self._loaded()[1].locale

    @property
    def supported_locales(self) -> tuple[LocaleIdentifier, ...]:
        """Preferred locales first (in configured order), then the rest sorted.

        Raises:
            ConfigError: If a preferred locale has no bundle
        """
        collection, _ = self._loaded()
        available = set(collection.locales)
        preferred: list[LocaleIdentifier] = []
        for tag in self._config.preferred_supported_locales:
            try:
                locale = LocaleIdentifier.parse(tag)
            except ValueError as e:
                raise ConfigError(ErrorTemplate.invalid_config_value("preferred-supported-locales", "locale tags", tag)) from e
            if locale not in available:
                raise ConfigError(
                    ErrorTemplate.unknown_preferred_locale(str(locale), sorted(str(loc) for loc in available))
                )
            if locale not in preferred:
                preferred.append(locale)
        rest = sorted(available.difference(preferred))
        return (*preferred, *rest)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def header(self) -> str | None:
        """Configured header text, from header or header-file (relative to arb-dir)."""
        config = self._config
        if config.header is not None:
            return config.header
        if config.header_file is None:
            return None
        path = str(PurePath(config.arb_dir_path(self._project_dir)) / config.header_file)
        try:
            return self._fs.read_text(path)
        except OSError as e:
            msg = f"Failed to read header file {path}: {e}"
            raise ConfigError(msg) from e

    def generate(self) -> str:
        """Return the generated module source."""
        _, template = self._loaded()
        config = self._config
        options = EmitterOptions(
            output_class=config.output_class,
            use_named_parameters=config.use_named_parameters,
            nullable_getter=config.nullable_getter,
            use_format=config.format,
            header=self.header(),
            suppress_warnings=config.suppress_warnings,
            template_file=template.filename,
        )
        return CodeEmitter(self.messages, self.supported_locales, template.locale, options).emit()

    def untranslated_messages(self) -> dict[str, list[str]]:
        """Locale -> keys that are missing or unparsable, for non-template locales.

        Locales without untranslated keys are omitted; keys are in template order.
        """
        template_locale = self.template_locale
        report: dict[str, list[str]] = {}
        for locale in self.supported_locales:
            if locale == template_locale:
                continue
            keys = [m.key for m in self.messages if not m.is_translated(locale)]
            if keys:
                report[str(locale)] = keys
        return report

    def _write(self, path: str, content: str) -> None:
        parent = str(PurePath(path).parent)
        if parent and not self._fs.exists(parent):
            self._fs.make_dirs(parent)
        self._fs.write_text(path, content)

    def run(self, *, untranslated_messages_file: str | None = None) -> GenerationResult:
        """Generate and write the module (and the report, when configured).

        Args:
            untranslated_messages_file: Report path overriding the configured one

        Raises:
            ArbGenError: On any generation failure
        """
        source = self.generate()
        output_path = self._config.output_path(self._project_dir)
        self._write(output_path, source)
        logger.info("Generated %s", output_path)

        untranslated = self.untranslated_messages()
        log = logger.debug if self._config.suppress_warnings else logger.warning
        for locale, keys in untranslated.items():
            log("%d untranslated message(s) in locale %s", len(keys), locale)

        report_file = untranslated_messages_file or self._config.untranslated_messages_file
        if report_file is not None:
            report_path = str(PurePath(self._project_dir) / report_file)
            self._write(report_path, json.dumps(untranslated, indent=2, ensure_ascii=False) + "\n")
            logger.info("Wrote untranslated messages report to %s", report_path)

        return GenerationResult(
            output_path=output_path,
            locales=tuple(str(locale) for locale in self.supported_locales),
            message_count=len(self.messages),
            untranslated=untranslated,
        )
