"""Generate the Python localizations module from finalized message models.

The emitter only reads Message models; nothing is mutated. Output is a pure
function of its inputs, so identical inputs give byte-identical modules.

Generated module layout:
    - header and imports
    - abstract base class with one accessor per message key
    - one concrete class per supported locale
    - locale dispatch table
    - delegate class, module-level delegate and lookup function

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from arbgen.bundles import LocaleIdentifier
from arbgen.constants import (
    DEFAULT_OUTPUT_CLASS,
    DEFAULT_TEMPLATE_ARB_FILE,
    NUMBER_FORMATS_WITH_PARAMETERS,
    PLURAL_CATEGORIES,
)
from arbgen.diagnostics import ErrorTemplate, InvalidIdentifierError
from arbgen.enums import ArgumentType, PlaceholderRole, PlaceholderType
from arbgen.model import Message, PlaceholderUsageCollector, ResolvedPlaceholder
from arbgen.syntax import ArgumentExpr, PlaceholderRef, PluralExpr, SelectExpr, Text
from arbgen.syntax import Message as MessageNode

from . import templates
from .strings import (
    check_unique,
    docstring_literal,
    python_identifier,
    python_string_literal,
    snake_case,
)

__all__ = ["CodeEmitter", "EmitterOptions"]

logger = logging.getLogger(__name__)

# Names every generated class defines besides the accessors, and names its
# class body resolves while it runs (decorators, the constructor).
RESERVED_MEMBER_NAMES = frozenset(
    {"SUPPORTED_LOCALES", "from_locale", "locale_name", "__init__", "abc", "property", "staticmethod"}
)

# Names method bodies rely on.
RESERVED_PARAMETER_NAMES = frozenset({"self", "runtime", "str"})

# Keyword arguments accepted by runtime.format_number.
NUMBER_FORMAT_PARAMETERS = ("name", "symbol", "decimalDigits", "customPattern")

_INDENT = "    "
_BODY_INDENT = _INDENT * 2


@dataclass(frozen=True, slots=True)
class EmitterOptions:
    """Code generation switches.

    Attributes:
        output_class: Name of the generated abstract base class
        use_named_parameters: Accessor parameters are keyword-only
        nullable_getter: from_locale() returns None for unsupported locales
            instead of the template locale's class
        use_format: Generate date/number formatting calls (otherwise str())
        header: Text placed after the banner (lines become comments)
        suppress_warnings: Add a file-level "# ruff: noqa"
        template_file: Template ARB filename named in the banner
    """

    output_class: str = DEFAULT_OUTPUT_CLASS
    use_named_parameters: bool = False
    nullable_getter: bool = True
    use_format: bool = True
    header: str | None = None
    suppress_warnings: bool = False
    template_file: str = DEFAULT_TEMPLATE_ARB_FILE


class CodeEmitter:
    """Render message models as a Python module.

    Identifier validation happens on construction, so a CodeEmitter that
    exists can always emit.

    Example:
        >>> source = CodeEmitter(messages, locales, template_locale).emit()
    """

    __slots__ = (
        "_class_names",
        "_locales",
        "_messages",
        "_method_names",
        "_options",
        "_parameters",
        "_template_locale",
    )

    def __init__(
        self,
        messages: Sequence[Message],
        locales: Sequence[LocaleIdentifier],
        template_locale: LocaleIdentifier,
        options: EmitterOptions | None = None,
    ) -> None:
        """Validate every name the generated module will contain.

        Args:
            messages: Message models in template key order
            locales: Supported locales in output order
            template_locale: Locale whose class is the default
            options: Generation switches (defaults when None)

        Raises:
            InvalidIdentifierError: If a class, key or placeholder name is not
                a usable identifier, or two names collide
        """
        self._messages = tuple(messages)
        self._locales = tuple(locales)
        self._template_locale = template_locale
        self._options = options or EmitterOptions()

        class_name = self._options.output_class
        if not class_name.isidentifier():
            raise InvalidIdentifierError(ErrorTemplate.invalid_identifier("output class", class_name, class_name))

        self._class_names = {str(locale): class_name + locale.camel_case() for locale in self._locales}
        check_unique("locale", self._class_names)

        self._method_names = {
            m.key: python_identifier("message key", m.key, reserved=RESERVED_MEMBER_NAMES) for m in self._messages
        }
        check_unique("message key", self._method_names)

        self._parameters: dict[str, dict[str, str]] = {}
        for message in self._messages:
            parameters = {
                name: python_identifier("placeholder", name, reserved=RESERVED_PARAMETER_NAMES)
                for name in message.template_placeholders
            }
            # Locals holding formatted values share the namespace
            check_unique(
                "placeholder",
                parameters | {f"{name} (formatted)": f"{ident}_formatted" for name, ident in parameters.items()},
            )
            self._parameters[message.key] = parameters

    @property
    def delegate_class(self) -> str:
        return f"{self._options.output_class}Delegate"

    @property
    def lookup_function(self) -> str:
        return f"lookup_{snake_case(self._options.output_class)}"

    def emit(self) -> str:
        """Return the complete module source."""
        logger.debug(
            "Emitting %d messages for %d locales as %s",
            len(self._messages),
            len(self._locales),
            self._options.output_class,
        )
        blocks = [
            self._header(),
            self._base_class(),
            *(self._locale_class(locale) for locale in self._locales),
            self._factories(),
            self._delegate(),
            self._footer(),
        ]
        return "\n\n\n".join(block.rstrip("\n") for block in blocks) + "\n"

    # ------------------------------------------------------------------
    # Module structure
    # ------------------------------------------------------------------

    @property
    def _return_type(self) -> str:
        name = self._options.output_class
        return f"{name} | None" if self._options.nullable_getter else name

    def _header(self) -> str:
        lines = [templates.HEADER.substitute(template_file=self._options.template_file).rstrip("\n")]
        if self._options.header:
            lines.extend(line if line.startswith("#") else f"# {line}".rstrip() for line in self._options.header.splitlines())
        if self._options.suppress_warnings:
            lines.append("# ruff: noqa")

        stdlib = ["import abc"]
        if any(
            p.resolved_type == PlaceholderType.DATETIME
            for m in self._messages
            for p in m.template_placeholders.values()
        ):
            stdlib.append("import datetime")
        imports = templates.IMPORTS.substitute(
            stdlib_imports="\n".join(stdlib) + "\n",
            class_name=self._options.output_class,
            delegate_class=self.delegate_class,
            lookup_function=self.lookup_function,
        )
        return "\n".join(lines) + "\n\n" + imports

    def _base_class(self) -> str:
        options = self._options
        if options.nullable_getter:
            fallback = templates.FROM_LOCALE_NULLABLE.substitute()
            fallback_doc = "None"
        else:
            default_class = self._class_names.get(str(self._template_locale), self._class_names[str(self._locales[0])])
            fallback = templates.FROM_LOCALE_FALLBACK.substitute(default_class=default_class)
            fallback_doc = str(self._template_locale)

        members = "".join(self._abstract_member(m) for m in self._messages)
        return templates.BASE_CLASS.substitute(
            class_name=options.output_class,
            lookup_function=self.lookup_function,
            locale_list=", ".join(str(locale) for locale in self._locales),
            supported_locales=_tuple_items([python_string_literal(str(locale)) for locale in self._locales]),
            return_type=self._return_type,
            fallback=fallback,
            fallback_doc=fallback_doc,
            members=members,
        )

    def _abstract_member(self, message: Message) -> str:
        lines = (message.description or f"No description provided for {message.key}.").splitlines() or [""]
        if message.context:
            lines += ["", *f"Context: {message.context}".splitlines()]
        lines += ["", f"In {self._template_locale}, this message translates to:"]
        lines += [f"'{line}'" for line in message.reference_value.split("\n")]
        docstring = docstring_literal(lines, _BODY_INDENT)

        method_name = self._method_names[message.key]
        if not message.template_placeholders:
            return templates.ABSTRACT_PROPERTY.substitute(method_name=method_name, docstring=docstring)
        return templates.ABSTRACT_METHOD.substitute(
            method_name=method_name, parameters=self._parameter_list(message), docstring=docstring
        )

    def _parameter_list(self, message: Message) -> str:
        parameters = self._parameters[message.key]
        declared = [f"{parameters[name]}: {p.python_type}" for name, p in message.template_placeholders.items()]
        if self._options.use_named_parameters:
            declared.insert(0, "*")
        return ", ".join(declared)

    def _locale_class(self, locale: LocaleIdentifier) -> str:
        members = "".join(self._accessor(message, locale) for message in self._messages)
        return templates.LOCALE_CLASS.substitute(
            class_name=self._class_names[str(locale)],
            base_class=self._options.output_class,
            locale=str(locale),
            members=members,
        )

    def _accessor(self, message: Message, locale: LocaleIdentifier) -> str:
        method_name = self._method_names[message.key]
        ast = message.asts.get(locale)
        if ast is None:
            text = f"{message.key} is not translated for {locale}"
            body = f"{_BODY_INDENT}raise NotImplementedError({python_string_literal(text)})"
        else:
            writer = _BodyWriter(message.placeholders_for(locale), self._parameters[message.key], self._options.use_format)
            body = writer.write(ast)

        if not message.template_placeholders:
            return templates.PROPERTY.substitute(method_name=method_name, body=body)
        return templates.METHOD.substitute(method_name=method_name, parameters=self._parameter_list(message), body=body)

    def _factories(self) -> str:
        entries = "\n".join(
            f"{_INDENT}{python_string_literal(str(locale))}: {self._class_names[str(locale)]},"
            for locale in self._locales
        )
        languages = sorted({locale.language for locale in self._locales})
        return templates.FACTORIES.substitute(
            class_name=self._options.output_class,
            entries=entries,
            languages=_tuple_items([python_string_literal(language) for language in languages]),
        )

    def _delegate(self) -> str:
        class_name = self._options.output_class
        if self._options.nullable_getter:
            load_body = templates.DELEGATE_LOAD_NULLABLE.substitute(class_name=class_name)
        else:
            load_body = f"{_BODY_INDENT}return {class_name}.from_locale(locale)"
        return templates.DELEGATE_CLASS.substitute(
            delegate_class=self.delegate_class, class_name=class_name, load_body=load_body
        )

    def _footer(self) -> str:
        return templates.MODULE_FOOTER.substitute(
            delegate_class=self.delegate_class,
            lookup_function=self.lookup_function,
            class_name=self._options.output_class,
            return_type=self._return_type,
        )


def _tuple_items(items: Sequence[str]) -> str:
    """Inside of a tuple display; a single item keeps its trailing comma."""
    return items[0] + "," if len(items) == 1 else ", ".join(items)


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return python_string_literal(value)
    return repr(value)


class _BodyWriter:
    """Render one locale's AST of one message as a method body."""

    __slots__ = ("_parameters", "_placeholders", "_use_format")

    def __init__(
        self,
        placeholders: Mapping[str, ResolvedPlaceholder],
        parameters: Mapping[str, str],
        use_format: bool,
    ) -> None:
        self._placeholders = placeholders
        self._parameters = parameters
        self._use_format = use_format

    def write(self, ast: MessageNode) -> str:
        collector = PlaceholderUsageCollector()
        collector.visit(ast)
        statements = [
            self._formatting_statement(self._placeholders[name])
            for name, roles in collector.usages.items()
            if PlaceholderRole.PLAIN in roles and self._formats(self._placeholders[name])
        ]
        statements.append(f"return {self._message(ast, _BODY_INDENT)}")
        return "\n".join(_BODY_INDENT + statement for statement in statements)

    def _formats(self, placeholder: ResolvedPlaceholder) -> bool:
        return self._use_format and placeholder.requires_formatting

    def _formatting_statement(self, placeholder: ResolvedPlaceholder) -> str:
        parameter = self._parameters[placeholder.name]
        if placeholder.requires_date_formatting:
            if placeholder.is_custom_date_format and placeholder.format is not None:
                call = (
                    f"runtime.format_date({parameter}, ({python_string_literal(placeholder.format)},), "
                    "self.locale_name, custom=True)"
                )
            else:
                parts = _tuple_items([python_string_literal(part) for part in placeholder.date_format_parts])
                call = f"runtime.format_date({parameter}, ({parts}), self.locale_name)"
        else:
            arguments = [parameter, python_string_literal(placeholder.format or ""), "self.locale_name"]
            if placeholder.has_number_format_with_parameters:
                for option in placeholder.optional_parameters:
                    if option.name in NUMBER_FORMAT_PARAMETERS:
                        arguments.append(f"{option.name}={_literal(option.value)}")
                    else:
                        logger.debug("Ignoring unknown number format parameter %s of %s", option.name, placeholder.name)
            call = f"runtime.format_number({', '.join(arguments)})"
        return f"{parameter}_formatted = {call}"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _message(self, node: MessageNode, indent: str) -> str:
        if node.is_empty:
            return '""'
        return " + ".join(self._element(child, indent) for child in node.children)

    def _element(self, node: Text | PlaceholderRef | PluralExpr | SelectExpr | ArgumentExpr, indent: str) -> str:
        match node:
            case Text():
                return python_string_literal(node.value)
            case PlaceholderRef():
                return self._reference(node)
            case PluralExpr():
                return self._plural(node, indent)
            case SelectExpr():
                return self._select(node, indent)
            case ArgumentExpr():
                return self._argument(node)

    def _reference(self, node: PlaceholderRef) -> str:
        placeholder = self._placeholders[node.name]
        parameter = self._parameters[node.name]
        if self._formats(placeholder):
            return f"{parameter}_formatted"
        if placeholder.resolved_type == PlaceholderType.STRING:
            return parameter
        return f"str({parameter})"

    def _argument(self, node: ArgumentExpr) -> str:
        parameter = self._parameters[node.name]
        if not self._use_format:
            return f"str({parameter})"
        skeleton = "None" if node.format is None else python_string_literal(node.format)
        time = ", time=True" if node.format is None and node.arg_type == ArgumentType.TIME else ""
        return f"runtime.format_datetime_skeleton({parameter}, {skeleton}, self.locale_name{time})"

    def _plural(self, node: PluralExpr, indent: str) -> str:
        inner = indent + _INDENT
        arguments = [self._parameters[node.name], "self.locale_name"]
        if node.exact_branches:
            entries = "".join(
                f"{inner}{_INDENT}{branch.exact_value}: {self._message(branch.message, inner + _INDENT)},\n"
                for branch in node.exact_branches
            )
            arguments.append(f"exact={{\n{entries}{inner}}}")
        categories = {branch.key: branch for branch in node.category_branches}
        for category in PLURAL_CATEGORIES:
            branch = categories.get(category)
            if branch is not None:
                arguments.append(f"{category}={self._message(branch.message, inner)}")
        arguments.append(f"other={self._message(node.other.message, inner)}")
        return _call("runtime.plural", arguments, indent)

    def _select(self, node: SelectExpr, indent: str) -> str:
        inner = indent + _INDENT
        arguments = [self._parameters[node.name]]
        entries = "".join(
            f"{inner}{_INDENT}{python_string_literal(branch.key)}: {self._message(branch.message, inner + _INDENT)},\n"
            for branch in node.cases
        )
        arguments.append(f"{{\n{entries}{inner}}}" if entries else "{}")
        arguments.append(f"other={self._message(node.other.message, inner)}")
        return _call("runtime.select", arguments, indent)


def _call(function: str, arguments: Sequence[str], indent: str) -> str:
    """A call with one argument per line."""
    inner = indent + _INDENT
    lines = "".join(f"{inner}{argument},\n" for argument in arguments)
    return f"{function}(\n{lines}{indent})"
