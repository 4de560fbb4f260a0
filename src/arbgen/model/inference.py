"""Placeholder type inference.

Pure function over all locales' ASTs and declared placeholders. Nothing is
mutated: declared records go in, a new map of resolved records comes out.

Rules:
    - plural selector    -> declared num/int, else num
    - select selector    -> declared String, else String
    - date/time argument -> declared DateTime, else DateTime
    - otherwise          -> declared type, else Object
    - a DateTime placeholder used as {name} requires date formatting
    - more than one of plural/select/datetime for one name is an error

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

from arbgen.diagnostics import (
    ConflictingPlaceholderUsageError,
    ErrorTemplate,
    InvalidPlaceholderFormatError,
    InvalidPlaceholderTypeError,
)
from arbgen.enums import PlaceholderRole, PlaceholderType
from arbgen.syntax import ArgumentExpr, ASTNode, ASTVisitor, Message, PlaceholderRef, PluralExpr, SelectExpr

from .placeholder import DeclaredPlaceholder, ResolvedPlaceholder

__all__ = ["InferredPlaceholders", "PlaceholderUsageCollector", "infer_placeholders"]

logger = logging.getLogger(__name__)

# role -> (allowed declared types, default type)
_ROLE_TYPES: dict[PlaceholderRole, tuple[tuple[PlaceholderType, ...], PlaceholderType]] = {
    PlaceholderRole.PLURAL: ((PlaceholderType.NUM, PlaceholderType.INT), PlaceholderType.NUM),
    PlaceholderRole.SELECT: ((PlaceholderType.STRING,), PlaceholderType.STRING),
    PlaceholderRole.DATETIME: ((PlaceholderType.DATETIME,), PlaceholderType.DATETIME),
}


class PlaceholderUsageCollector(ASTVisitor):
    """Record every role each placeholder name is used in.

    Names are kept in first-seen order; visiting several ASTs accumulates.
    """

    __slots__ = ("usages",)

    def __init__(self) -> None:
        super().__init__()
        self.usages: dict[str, set[PlaceholderRole]] = {}

    def _record(self, name: str, role: PlaceholderRole) -> None:
        self.usages.setdefault(name, set()).add(role)

    def visit_PlaceholderRef(self, node: PlaceholderRef) -> ASTNode:
        self._record(node.name, PlaceholderRole.PLAIN)
        return node

    def visit_PluralExpr(self, node: PluralExpr) -> ASTNode:
        self._record(node.name, PlaceholderRole.PLURAL)
        return self.generic_visit(node)

    def visit_SelectExpr(self, node: SelectExpr) -> ASTNode:
        self._record(node.name, PlaceholderRole.SELECT)
        return self.generic_visit(node)

    def visit_ArgumentExpr(self, node: ArgumentExpr) -> ASTNode:
        self._record(node.name, PlaceholderRole.DATETIME)
        return node


@dataclass(frozen=True, slots=True)
class InferredPlaceholders[L]:
    """Result of infer_placeholders.

    Attributes:
        template: Name -> resolved placeholder; declared ones in declaration
            order followed by synthesized ones sorted by name
        locale_overrides: Locale -> name -> resolved override, for locales
            that redeclare placeholders in their own metadata
    """

    template: dict[str, ResolvedPlaceholder]
    locale_overrides: dict[L, dict[str, ResolvedPlaceholder]]


def infer_placeholders[L](
    key: str,
    declared: Mapping[str, DeclaredPlaceholder],
    locale_declared: Mapping[L, Mapping[str, DeclaredPlaceholder]],
    asts: Mapping[L, Message | None],
) -> InferredPlaceholders[L]:
    """Resolve placeholder types for one message across all locales.

    Args:
        key: Message key, for diagnostics
        declared: Template-declared placeholders, in declaration order
        locale_declared: Placeholders redeclared by non-template locales
        asts: Locale -> parsed message (None entries are skipped)

    Returns:
        Resolved template placeholders and per-locale overrides

    Raises:
        ConflictingPlaceholderUsageError: If a name has two exclusive roles
        InvalidPlaceholderTypeError: If a declared type contradicts the role
        InvalidPlaceholderFormatError: If a date or number format is unknown
    """
    collector = PlaceholderUsageCollector()
    for ast in asts.values():
        if ast is not None:
            collector.visit(ast)
    usages = collector.usages

    synthesized = sorted(name for name in usages if name not in declared)
    if synthesized:
        logger.debug("Synthesized placeholders for %s: %s", key, ", ".join(synthesized))

    template: dict[str, ResolvedPlaceholder] = {}
    for name, placeholder in declared.items():
        template[name] = _resolve(key, placeholder, usages.get(name, set()), synthesized=False)
    for name in synthesized:
        template[name] = _resolve(key, DeclaredPlaceholder(name), usages[name], synthesized=True)

    locale_overrides: dict[L, dict[str, ResolvedPlaceholder]] = {}
    for locale, placeholders in locale_declared.items():
        overrides: dict[str, ResolvedPlaceholder] = {}
        for name, placeholder in placeholders.items():
            base = template.get(name)
            if base is None:
                logger.debug("Ignoring placeholder %s of %s declared only in %s", name, key, locale)
                continue
            # The parameter type is fixed by the template; locales may change format only.
            typed = replace(placeholder, type=placeholder.type or base.resolved_type)
            resolved = _resolve(key, typed, usages.get(name, set()), synthesized=base.synthesized)
            overrides[name] = replace(resolved, resolved_type=base.resolved_type)
        if overrides:
            locale_overrides[locale] = overrides

    return InferredPlaceholders(template, locale_overrides)


def _resolve(
    key: str, placeholder: DeclaredPlaceholder, roles: set[PlaceholderRole], *, synthesized: bool
) -> ResolvedPlaceholder:
    exclusive = roles - {PlaceholderRole.PLAIN}
    if len(exclusive) > 1:
        raise ConflictingPlaceholderUsageError(
            ErrorTemplate.conflicting_placeholder_usage(key, placeholder.name, [r.value for r in exclusive])
        )

    if exclusive:
        role = next(iter(exclusive))
        allowed, default = _ROLE_TYPES[role]
        if placeholder.type is None:
            resolved_type = default
        elif placeholder.type in allowed:
            resolved_type = placeholder.type
        else:
            raise InvalidPlaceholderTypeError(
                ErrorTemplate.invalid_placeholder_type(
                    key, placeholder.name, placeholder.type, role.value, [t.value for t in allowed]
                )
            )
    else:
        resolved_type = placeholder.type or PlaceholderType.OBJECT

    resolved = ResolvedPlaceholder(
        declared=placeholder,
        resolved_type=resolved_type,
        used_as_plural=PlaceholderRole.PLURAL in roles,
        used_as_select=PlaceholderRole.SELECT in roles,
        used_as_datetime_argument=PlaceholderRole.DATETIME in roles,
        requires_date_formatting=(
            resolved_type == PlaceholderType.DATETIME and PlaceholderRole.PLAIN in roles
        ),
        synthesized=synthesized,
    )
    _validate_format(key, resolved)
    return resolved


def _validate_format(key: str, placeholder: ResolvedPlaceholder) -> None:
    if placeholder.requires_date_formatting:
        if (
            placeholder.format is not None
            and not placeholder.is_custom_date_format
            and not placeholder.has_valid_date_format
        ):
            raise InvalidPlaceholderFormatError(
                ErrorTemplate.invalid_date_format(key, placeholder.name, placeholder.format)
            )
    elif placeholder.requires_number_formatting and not placeholder.has_valid_number_format:
        raise InvalidPlaceholderFormatError(
            ErrorTemplate.invalid_number_format(key, placeholder.name, placeholder.format or "")
        )
