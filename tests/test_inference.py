"""Tests for model/placeholder.py and model/inference.py.

Coverage:
    - Placeholder metadata validation (types, formats, optional parameters)
    - Role-based type inference across locales
    - Conflicting roles, incompatible declared types, unknown formats
    - Declared/synthesized ordering and per-locale overrides
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from arbgen.diagnostics import (
    ConflictingPlaceholderUsageError,
    DiagnosticCode,
    InvalidPlaceholderAttributeError,
    InvalidPlaceholderFormatError,
    InvalidPlaceholderTypeError,
    MalformedMetadataError,
)
from arbgen.enums import PlaceholderRole, PlaceholderType
from arbgen.model import (
    DeclaredPlaceholder,
    OptionalParameter,
    PlaceholderUsageCollector,
    infer_placeholders,
    parse_placeholders,
)
from arbgen.model.inference import InferredPlaceholders
from arbgen.syntax import parse_message


def infer(
    texts: Mapping[str, str | None],
    declared: Mapping[str, Mapping[str, Any]] | None = None,
    locale_declared: Mapping[str, Mapping[str, Mapping[str, Any]]] | None = None,
) -> InferredPlaceholders[str]:
    """Infer placeholders for one message given per-locale texts."""
    asts = {locale: parse_message(text) if text is not None else None for locale, text in texts.items()}
    template = {name: DeclaredPlaceholder.from_attributes("key", name, attrs) for name, attrs in (declared or {}).items()}
    overrides = {
        locale: {name: DeclaredPlaceholder.from_attributes("key", name, attrs) for name, attrs in placeholders.items()}
        for locale, placeholders in (locale_declared or {}).items()
    }
    return infer_placeholders("key", template, overrides, asts)


# ============================================================================
# Declarations
# ============================================================================


class TestDeclaredPlaceholder:
    """Validation of "@key.placeholders.<name>" objects."""

    def test_full_declaration(self) -> None:
        """Every attribute is read."""
        placeholder = DeclaredPlaceholder.from_attributes(
            "price",
            "amount",
            {
                "type": "double",
                "format": "currency",
                "example": "$1.00",
                "optionalParameters": {"name": "EUR", "decimalDigits": 2},
            },
        )

        assert placeholder.type == PlaceholderType.DOUBLE
        assert placeholder.format == "currency"
        assert placeholder.example == "$1.00"
        assert placeholder.optional_parameters == (
            OptionalParameter("name", "EUR"),
            OptionalParameter("decimalDigits", 2),
        )
        assert placeholder.is_custom_date_format is None

    @pytest.mark.parametrize(("raw", "expected"), [(True, True), ("true", True), ("false", False)])
    def test_custom_date_flag(self, raw: object, expected: bool) -> None:
        """isCustomDateFormat accepts booleans and their string spellings."""
        placeholder = DeclaredPlaceholder.from_attributes("k", "when", {"isCustomDateFormat": raw})

        assert placeholder.is_custom_date_format is expected

    def test_unknown_type(self) -> None:
        """Types outside the ARB vocabulary are rejected."""
        with pytest.raises(InvalidPlaceholderTypeError, match="Integer"):
            DeclaredPlaceholder.from_attributes("k", "n", {"type": "Integer"})

    @pytest.mark.parametrize(
        "attributes",
        [
            {"format": 5},
            {"type": ""},
            {"example": ["a"]},
            {"isCustomDateFormat": "yes"},
            {"optionalParameters": ["name"]},
        ],
    )
    def test_malformed_attributes(self, attributes: dict[str, object]) -> None:
        """Wrongly shaped attributes raise INVALID_PLACEHOLDER_ATTRIBUTE."""
        with pytest.raises(InvalidPlaceholderAttributeError) as exc_info:
            DeclaredPlaceholder.from_attributes("k", "n", attributes)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.INVALID_PLACEHOLDER_ATTRIBUTE

    def test_parse_placeholders_order(self) -> None:
        """Declaration order is kept."""
        declared = parse_placeholders("app_en.arb", "k", {"placeholders": {"b": {}, "a": {"type": "int"}}})

        assert list(declared) == ["b", "a"]
        assert declared["a"].type == PlaceholderType.INT

    @pytest.mark.parametrize("metadata", [None, {}, {"description": "x"}])
    def test_parse_placeholders_absent(self, metadata: dict[str, object] | None) -> None:
        """No placeholders object means no declarations."""
        assert parse_placeholders("app_en.arb", "k", metadata) == {}

    @pytest.mark.parametrize("metadata", [{"placeholders": []}, {"placeholders": {"n": "int"}}])
    def test_parse_placeholders_malformed(self, metadata: dict[str, object]) -> None:
        """placeholders and each entry must be objects."""
        with pytest.raises(MalformedMetadataError):
            parse_placeholders("app_en.arb", "k", metadata)


# ============================================================================
# Inference
# ============================================================================


class TestRoleInference:
    """Type inference from usage."""

    def test_plural_defaults_to_num(self) -> None:
        """An undeclared plural selector is synthesized as num."""
        result = infer({"en": "{n, plural, one{x} other{y}}"})
        placeholder = result.template["n"]

        assert placeholder.resolved_type == PlaceholderType.NUM
        assert placeholder.used_as_plural
        assert placeholder.synthesized
        assert placeholder.python_type == "float"

    def test_plural_keeps_declared_int(self) -> None:
        """A declared int stays int."""
        result = infer({"en": "{n, plural, other{y}}"}, {"n": {"type": "int"}})

        assert result.template["n"].resolved_type == PlaceholderType.INT
        assert result.template["n"].python_type == "int"
        assert not result.template["n"].synthesized

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{g, select, a{x} other{y}}", PlaceholderType.STRING),
            ("{g, date, yMd}", PlaceholderType.DATETIME),
            ("{g, time}", PlaceholderType.DATETIME),
            ("Hi {g}", PlaceholderType.OBJECT),
        ],
    )
    def test_role_defaults(self, text: str, expected: PlaceholderType) -> None:
        """select -> String, date/time -> DateTime, plain -> Object."""
        assert infer({"en": text}).template["g"].resolved_type == expected

    def test_plain_keeps_declared_type(self) -> None:
        """Plain use does not constrain the declared type."""
        result = infer({"en": "{n} items"}, {"n": {"type": "double"}})

        assert result.template["n"].resolved_type == PlaceholderType.DOUBLE

    def test_plain_and_plural_together(self) -> None:
        """A plural selector may also be interpolated plainly."""
        result = infer({"en": "{n, plural, one{{n} item} other{{n} items}}"})

        assert result.template["n"].resolved_type == PlaceholderType.NUM

    @pytest.mark.parametrize(
        ("text", "declared_type"),
        [
            ("{n, plural, other{y}}", "String"),
            ("{g, select, other{y}}", "int"),
            ("{d, date, yMd}", "String"),
        ],
    )
    def test_incompatible_declared_type(self, text: str, declared_type: str) -> None:
        """A declared type contradicting the role is an error."""
        name = text[1]
        with pytest.raises(InvalidPlaceholderTypeError):
            infer({"en": text}, {name: {"type": declared_type}})

    def test_conflict_across_locales(self) -> None:
        """Roles are collected over every locale before resolving."""
        with pytest.raises(ConflictingPlaceholderUsageError) as exc_info:
            infer({"en": "{x, plural, other{a}}", "de": "{x, select, other{b}}"})

        assert "plural and select" in str(exc_info.value)

    def test_none_asts_skipped(self) -> None:
        """Untranslated locales contribute nothing."""
        result = infer({"en": "Hi {name}", "de": None})

        assert list(result.template) == ["name"]

    def test_declared_then_synthesized_sorted(self) -> None:
        """Declared names first in declaration order, then synthesized by name."""
        result = infer({"en": "{zeta} {alpha} {mid} {beta}"}, {"mid": {}, "beta": {}})

        assert list(result.template) == ["mid", "beta", "alpha", "zeta"]
        assert [p.synthesized for p in result.template.values()] == [False, False, True, True]

    def test_unused_declaration_kept(self) -> None:
        """Declared placeholders stay parameters even when unused."""
        result = infer({"en": "Hello"}, {"name": {"type": "String"}})

        assert result.template["name"].resolved_type == PlaceholderType.STRING


class TestFormats:
    """Date and number format validation."""

    def test_datetime_plain_use_requires_formatting(self) -> None:
        """A DateTime used as {name} needs date formatting."""
        result = infer({"en": "On {day}"}, {"day": {"type": "DateTime", "format": "yMMMd+jm"}})
        placeholder = result.template["day"]

        assert placeholder.requires_date_formatting
        assert placeholder.requires_formatting
        assert placeholder.date_format_parts == ("yMMMd", "jm")
        assert placeholder.python_type == "datetime.datetime"

    def test_unknown_skeleton_rejected(self) -> None:
        """Skeletons outside the known set are errors."""
        with pytest.raises(InvalidPlaceholderFormatError, match="yMMMMMd"):
            infer({"en": "{day}"}, {"day": {"type": "DateTime", "format": "yMMMMMd"}})

    def test_custom_pattern_accepted(self) -> None:
        """isCustomDateFormat skips skeleton validation."""
        result = infer(
            {"en": "{day}"},
            {"day": {"type": "DateTime", "format": "yyyy-MM-dd", "isCustomDateFormat": "true"}},
        )

        assert result.template["day"].is_custom_date_format

    def test_number_format(self) -> None:
        """Numeric placeholders with a format need number formatting."""
        result = infer({"en": "{total}"}, {"total": {"type": "int", "format": "compactCurrency"}})
        placeholder = result.template["total"]

        assert placeholder.requires_number_formatting
        assert placeholder.has_number_format_with_parameters

    def test_unknown_number_format(self) -> None:
        """Unknown number format names are errors."""
        with pytest.raises(InvalidPlaceholderFormatError):
            infer({"en": "{total}"}, {"total": {"type": "num", "format": "money"}})

    def test_format_ignored_for_object(self) -> None:
        """Non-numeric, non-date placeholders never format."""
        result = infer({"en": "{thing}"}, {"thing": {"format": "whatever"}})

        assert not result.template["thing"].requires_formatting


class TestLocaleOverrides:
    """Placeholders redeclared in non-template locales."""

    def test_override_changes_format_not_type(self) -> None:
        """A locale may change the format; the template type is kept."""
        result = infer(
            {"en": "{day}", "de": "Am {day}"},
            {"day": {"type": "DateTime", "format": "yMd"}},
            {"de": {"day": {"format": "yMMMMd"}}},
        )

        override = result.locale_overrides["de"]["day"]
        assert override.format == "yMMMMd"
        assert override.resolved_type == PlaceholderType.DATETIME

    def test_locale_only_placeholder_ignored(self) -> None:
        """Names unknown to the template are dropped."""
        result = infer({"en": "Hello", "de": "Hallo"}, {}, {"de": {"extra": {"type": "int"}}})

        assert result.locale_overrides == {}


class TestUsageCollector:
    """PlaceholderUsageCollector accumulates roles."""

    def test_roles_accumulate(self) -> None:
        """Visiting several ASTs merges their roles in first-seen order."""
        collector = PlaceholderUsageCollector()
        collector.visit(parse_message("{b} {a, select, other{{c}}}"))
        collector.visit(parse_message("{a}"))

        assert list(collector.usages) == ["b", "a", "c"]
        assert collector.usages["a"] == {PlaceholderRole.SELECT, PlaceholderRole.PLAIN}
