"""Placeholder records.

Two phases:
    DeclaredPlaceholder - immutable record read from "@key.placeholders.<name>"
    ResolvedPlaceholder - immutable result of type inference over all locales

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from arbgen.constants import (
    DATE_FORMAT_PARTS_DELIMITER,
    NUMBER_FORMATS_WITH_PARAMETERS,
    VALID_DATE_FORMATS,
    VALID_NUMBER_FORMATS,
)
from arbgen.diagnostics import (
    ErrorTemplate,
    InvalidPlaceholderAttributeError,
    InvalidPlaceholderTypeError,
    MalformedMetadataError,
)
from arbgen.enums import PlaceholderType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "OptionalParameter",
    "DeclaredPlaceholder",
    "ResolvedPlaceholder",
    "parse_placeholders",
    "PYTHON_TYPES",
]

# Annotation used in generated code for each placeholder type.
PYTHON_TYPES: dict[PlaceholderType, str] = {
    PlaceholderType.STRING: "str",
    PlaceholderType.INT: "int",
    PlaceholderType.NUM: "float",
    PlaceholderType.DOUBLE: "float",
    PlaceholderType.DATETIME: "datetime.datetime",
    PlaceholderType.OBJECT: "object",
}

_STRING_ATTRIBUTES = ("type", "format", "example")


@dataclass(frozen=True, slots=True)
class OptionalParameter:
    """One named number-format parameter (e.g. decimalDigits: 2)."""

    name: str
    value: Any


@dataclass(frozen=True, slots=True)
class DeclaredPlaceholder:
    """A placeholder as declared in ARB metadata.

    Attributes:
        name: Placeholder name as written in the message
        type: Declared type, None when absent
        format: Date skeleton(s) or number format name
        example: Example value (documentation only)
        optional_parameters: Number format parameters, in declaration order
        is_custom_date_format: format is a literal date pattern, not skeletons
    """

    name: str
    type: PlaceholderType | None = None
    format: str | None = None
    example: str | None = None
    optional_parameters: tuple[OptionalParameter, ...] = ()
    is_custom_date_format: bool | None = None

    @classmethod
    def from_attributes(cls, key: str, name: str, attributes: Mapping[str, Any]) -> DeclaredPlaceholder:
        """Validate and build a placeholder from its metadata object.

        Raises:
            InvalidPlaceholderAttributeError: If an attribute has the wrong shape
            InvalidPlaceholderTypeError: If type is not a known placeholder type
        """
        strings: dict[str, str | None] = {}
        for attribute in _STRING_ATTRIBUTES:
            value = attributes.get(attribute)
            if value is not None and (not isinstance(value, str) or not value):
                raise InvalidPlaceholderAttributeError(
                    ErrorTemplate.invalid_placeholder_attribute(key, name, attribute, "a non-empty string")
                )
            strings[attribute] = value

        declared_type: PlaceholderType | None = None
        if strings["type"] is not None:
            try:
                declared_type = PlaceholderType(strings["type"])
            except ValueError as e:
                raise InvalidPlaceholderTypeError(
                    ErrorTemplate.invalid_placeholder_type(
                        key, name, strings["type"], "any", [t.value for t in PlaceholderType]
                    )
                ) from e

        return cls(
            name=name,
            type=declared_type,
            format=strings["format"],
            example=strings["example"],
            optional_parameters=_optional_parameters(key, name, attributes),
            is_custom_date_format=_bool_attribute(key, name, attributes, "isCustomDateFormat"),
        )


def _bool_attribute(key: str, name: str, attributes: Mapping[str, Any], attribute: str) -> bool | None:
    value = attributes.get(attribute)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if value not in ("true", "false"):
        raise InvalidPlaceholderAttributeError(
            ErrorTemplate.invalid_placeholder_attribute(key, name, attribute, "a boolean value")
        )
    return value == "true"


def _optional_parameters(key: str, name: str, attributes: Mapping[str, Any]) -> tuple[OptionalParameter, ...]:
    value = attributes.get("optionalParameters")
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise InvalidPlaceholderAttributeError(
            ErrorTemplate.invalid_placeholder_attribute(key, name, "optionalParameters", "an object")
        )
    return tuple(OptionalParameter(k, v) for k, v in value.items())


def parse_placeholders(path: str, key: str, metadata: Mapping[str, Any] | None) -> dict[str, DeclaredPlaceholder]:
    """Read the "placeholders" object of @key metadata.

    Args:
        path: ARB file path, for diagnostics
        key: Message key
        metadata: The @key object, or None

    Returns:
        Declared placeholders in declaration order

    Raises:
        MalformedMetadataError: If "placeholders" or one of its entries is not an object
        InvalidPlaceholderAttributeError: If an attribute has the wrong shape
    """
    if metadata is None:
        return {}
    placeholders = metadata.get("placeholders")
    if placeholders is None:
        return {}
    if not isinstance(placeholders, dict):
        raise MalformedMetadataError(ErrorTemplate.malformed_metadata(path, key, "placeholders"))

    declared: dict[str, DeclaredPlaceholder] = {}
    for name, attributes in placeholders.items():
        if not isinstance(attributes, dict):
            raise MalformedMetadataError(ErrorTemplate.malformed_metadata(path, key, f"placeholders.{name}"))
        declared[name] = DeclaredPlaceholder.from_attributes(key, name, attributes)
    return declared


@dataclass(frozen=True, slots=True)
class ResolvedPlaceholder:
    """A placeholder after type inference.

    At most one of used_as_plural, used_as_select, used_as_datetime_argument
    is True.

    Attributes:
        declared: The declaration this was resolved from (synthesized ones
            have an empty declaration)
        resolved_type: Final type
        used_as_plural: Selector of a plural expression somewhere
        used_as_select: Selector of a select expression somewhere
        used_as_datetime_argument: Used in a date/time argument expression
        requires_date_formatting: DateTime placeholder used as {name}
        synthesized: Not declared in the template metadata
    """

    declared: DeclaredPlaceholder
    resolved_type: PlaceholderType
    used_as_plural: bool = False
    used_as_select: bool = False
    used_as_datetime_argument: bool = False
    requires_date_formatting: bool = False
    synthesized: bool = False

    @property
    def name(self) -> str:
        return self.declared.name

    @property
    def format(self) -> str | None:
        return self.declared.format

    @property
    def optional_parameters(self) -> tuple[OptionalParameter, ...]:
        return self.declared.optional_parameters

    @property
    def is_custom_date_format(self) -> bool:
        return bool(self.declared.is_custom_date_format)

    @property
    def requires_number_formatting(self) -> bool:
        """Numeric placeholder with a number format."""
        return self.resolved_type.is_numeric and self.format is not None

    @property
    def requires_formatting(self) -> bool:
        return self.requires_date_formatting or self.requires_number_formatting

    @property
    def date_format_parts(self) -> tuple[str, ...]:
        """Skeletons of a composite date format ("yMd+jms" -> ("yMd", "jms"))."""
        if self.format is None:
            return ()
        return tuple(self.format.split(DATE_FORMAT_PARTS_DELIMITER))

    @property
    def has_valid_date_format(self) -> bool:
        return all(part in VALID_DATE_FORMATS for part in self.date_format_parts)

    @property
    def has_valid_number_format(self) -> bool:
        return self.format in VALID_NUMBER_FORMATS

    @property
    def has_number_format_with_parameters(self) -> bool:
        return self.format in NUMBER_FORMATS_WITH_PARAMETERS

    @property
    def python_type(self) -> str:
        """Annotation for the generated parameter."""
        return PYTHON_TYPES[self.resolved_type]
