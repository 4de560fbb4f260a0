"""Per-key message model.

A Message gathers everything the code emitter needs for one template key:
the reference text, documentation, every locale's translation and AST, and
the resolved placeholders.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from arbgen.bundles import LocaleIdentifier, ResourceBundle, ResourceBundleCollection
from arbgen.constants import DEFAULT_ESCAPE_CHAR
from arbgen.diagnostics import (
    ErrorTemplate,
    MalformedMetadataError,
    MessageParseError,
    MissingResourceAttributeError,
    MissingResourceError,
)
from arbgen.syntax import Message as MessageNode
from arbgen.syntax import parse_message

from .inference import infer_placeholders
from .placeholder import DeclaredPlaceholder, ResolvedPlaceholder, parse_placeholders

__all__ = ["Message"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Message:
    """All translations of one message key.

    Invariant: every placeholder referenced by any AST is a key of
    template_placeholders.

    Attributes:
        key: Message key from the template bundle
        reference_value: Template text
        description: "description" from @key metadata
        context: "context" from @key metadata
        translations: Locale -> raw text (None when untranslated)
        asts: Locale -> parsed message (None when untranslated or unparsable)
        template_placeholders: Resolved placeholders; declared first, then synthesized
        locale_placeholders: Locale -> placeholders redeclared by that locale
        filenames: Locale -> ARB filename
        had_errors: A non-template translation failed to parse
    """

    key: str
    reference_value: str
    description: str | None
    context: str | None
    translations: dict[LocaleIdentifier, str | None]
    asts: dict[LocaleIdentifier, MessageNode | None]
    template_placeholders: dict[str, ResolvedPlaceholder]
    locale_placeholders: dict[LocaleIdentifier, dict[str, ResolvedPlaceholder]] = field(default_factory=dict)
    filenames: dict[LocaleIdentifier, str] = field(default_factory=dict)
    had_errors: bool = False

    @classmethod
    def build(
        cls,
        template: ResourceBundle,
        collection: ResourceBundleCollection,
        key: str,
        *,
        require_resource_attributes: bool = False,
        use_relaxed_syntax: bool = False,
        use_escaping: bool = False,
        escape_char: str = DEFAULT_ESCAPE_CHAR,
        suppress_warnings: bool = False,
    ) -> Message:
        """Collect and parse every locale's translation of key.

        Args:
            template: Template bundle (defines the key and its placeholders)
            collection: All bundles, template included
            key: Message key
            require_resource_attributes: Template must have @key metadata
            use_relaxed_syntax: Unknown {ident} in translations is literal text
            use_escaping: Enable ICU quoting with escape_char
            escape_char: Quoting character
            suppress_warnings: Log recovered parse errors at debug level

        Returns:
            Message with resolved placeholders

        Raises:
            MissingResourceError: If the template has no value for key
            MessageParseError: If the template text fails to parse
            BundleError: If a value or metadata has the wrong shape
            PlaceholderError: If placeholder inference fails
        """
        value = template.translation_for(key)
        if value is None:
            raise MissingResourceError(ErrorTemplate.missing_resource(template.path, key))

        metadata = template.metadata_for(key)
        if metadata is None and require_resource_attributes:
            raise MissingResourceAttributeError(ErrorTemplate.missing_resource_attribute(template.path, key))
        description = _string_field(template.path, key, metadata, "description")
        context = _string_field(template.path, key, metadata, "context")
        declared = parse_placeholders(template.path, key, metadata)

        valid_names = tuple(declared) if use_relaxed_syntax else None

        translations: dict[LocaleIdentifier, str | None] = {}
        asts: dict[LocaleIdentifier, MessageNode | None] = {}
        locale_declared: dict[LocaleIdentifier, dict[str, DeclaredPlaceholder]] = {}
        filenames: dict[LocaleIdentifier, str] = {}
        had_errors = False

        for bundle in collection:
            locale = bundle.locale
            is_template = locale == template.locale
            filenames[locale] = bundle.filename
            translation = value if is_template else bundle.translation_for(key)
            translations[locale] = translation

            if not is_template:
                overrides = parse_placeholders(bundle.path, key, bundle.metadata_for(key))
                if overrides:
                    locale_declared[locale] = overrides

            if translation is None:
                asts[locale] = None
                continue

            try:
                asts[locale] = parse_message(
                    translation,
                    key=key,
                    filename=bundle.filename,
                    use_escaping=use_escaping,
                    escape_char=escape_char,
                    placeholders=valid_names,
                )
            except MessageParseError as e:
                if is_template:
                    logger.error("Template message %s in %s failed to parse", key, bundle.filename)
                    raise
                log = logger.debug if suppress_warnings else logger.warning
                log("%s\nTreating %s as untranslated for %s", e, key, locale)
                asts[locale] = None
                had_errors = True

        inferred = infer_placeholders(key, declared, locale_declared, asts)

        return cls(
            key=key,
            reference_value=value,
            description=description,
            context=context,
            translations=translations,
            asts=asts,
            template_placeholders=inferred.template,
            locale_placeholders=inferred.locale_overrides,
            filenames=filenames,
            had_errors=had_errors,
        )

    def placeholders_for(self, locale: LocaleIdentifier) -> dict[str, ResolvedPlaceholder]:
        """Template placeholders with the locale's format overrides, in template order."""
        overrides = self.locale_placeholders.get(locale, {})
        return {name: overrides.get(name, p) for name, p in self.template_placeholders.items()}

    def is_translated(self, locale: LocaleIdentifier) -> bool:
        """True when locale has a parsable translation."""
        return self.asts.get(locale) is not None


def _string_field(path: str, key: str, metadata: dict[str, Any] | None, name: str) -> str | None:
    if metadata is None:
        return None
    value = metadata.get(name)
    if value is not None and not isinstance(value, str):
        raise MalformedMetadataError(ErrorTemplate.malformed_metadata(path, key, name))
    return value
