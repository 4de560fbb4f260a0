"""Source templates for generated localization modules.

Placeholders use string.Template syntax ($name). Each template renders one
top-level block; the emitter joins blocks with two blank lines.

Python 3.13+.
"""

from string import Template

# ruff: noqa: RUF022 - __all__ organized by output order
__all__ = [
    "HEADER",
    "IMPORTS",
    "BASE_CLASS",
    "FROM_LOCALE_FALLBACK",
    "FROM_LOCALE_NULLABLE",
    "ABSTRACT_PROPERTY",
    "ABSTRACT_METHOD",
    "LOCALE_CLASS",
    "PROPERTY",
    "METHOD",
    "FACTORIES",
    "DELEGATE_CLASS",
    "DELEGATE_LOAD_NULLABLE",
    "MODULE_FOOTER",
]

HEADER = Template("""\
# Generated by arbgen from $template_file. Do not edit.
""")

IMPORTS = Template("""\
from __future__ import annotations

${stdlib_imports}
from arbgen import runtime

__all__ = [
    "$class_name",
    "$delegate_class",
    "delegate",
    "$lookup_function",
]""")

BASE_CLASS = Template('''\
class $class_name(abc.ABC):
    """Localized messages of this application.

    Instances are obtained with $class_name.from_locale() or
    $lookup_function(). Supported locales: $locale_list.
    """

    SUPPORTED_LOCALES: tuple[str, ...] = ($supported_locales)

    def __init__(self, locale_name: str) -> None:
        self.locale_name = locale_name

    @staticmethod
    def from_locale(locale: str) -> $return_type:
        """Return the localizations for locale.

        Lookup order: the exact locale, then its language, then $fallback_doc.
        """
        tag = locale.replace("-", "_")
        factory = _LOCALE_FACTORIES.get(tag) or _LOCALE_FACTORIES.get(tag.split("_")[0])
$fallback
        return factory()
$members''')

FROM_LOCALE_FALLBACK = Template("""\
        if factory is None:
            return $default_class()""")

FROM_LOCALE_NULLABLE = Template("""\
        if factory is None:
            return None""")

ABSTRACT_PROPERTY = Template("""
    @property
    @abc.abstractmethod
    def $method_name(self) -> str:
$docstring
""")

ABSTRACT_METHOD = Template("""
    @abc.abstractmethod
    def $method_name(self, $parameters) -> str:
$docstring
""")

LOCALE_CLASS = Template('''\
class $class_name($base_class):
    """The translations for $locale."""

    def __init__(self, locale_name: str = "$locale") -> None:
        super().__init__(locale_name)
$members''')

PROPERTY = Template("""
    @property
    def $method_name(self) -> str:
$body
""")

METHOD = Template("""
    def $method_name(self, $parameters) -> str:
$body
""")

FACTORIES = Template("""\
_LOCALE_FACTORIES: dict[str, type[$class_name]] = {
$entries
}

_SUPPORTED_LANGUAGES: frozenset[str] = frozenset(($languages))""")

DELEGATE_CLASS = Template('''\
class $delegate_class(runtime.LocalizationsDelegate[$class_name]):
    """Loads $class_name for supported languages."""

    def is_supported(self, locale: str) -> bool:
        return locale.replace("-", "_").split("_")[0] in _SUPPORTED_LANGUAGES

    async def load(self, locale: str) -> $class_name:
$load_body''')

DELEGATE_LOAD_NULLABLE = Template("""\
        localizations = $class_name.from_locale(locale)
        if localizations is None:
            msg = f"Unsupported locale: {locale}"
            raise LookupError(msg)
        return localizations""")

MODULE_FOOTER = Template("""\
delegate = $delegate_class()


def $lookup_function(locale: str) -> $return_type:
    \"\"\"Return the localizations for locale (see $class_name.from_locale).\"\"\"
    return $class_name.from_locale(locale)
""")
