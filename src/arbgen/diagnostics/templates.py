"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode, SourceLocation

__all__ = ["ErrorTemplate"]


def _quoted_list(values: Iterable[str]) -> str:
    return ", ".join(f"'{v}'" for v in values)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Bundle errors
    # ------------------------------------------------------------------

    @staticmethod
    def malformed_bundle(path: str, detail: str) -> Diagnostic:
        """ARB file is not a JSON object.

        Args:
            path: Path of the ARB file
            detail: Decoder error description

        Returns:
            Diagnostic for MALFORMED_BUNDLE
        """
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_BUNDLE,
            message=f"The ARB file {path} has the following formatting issue: {detail}",
            location=SourceLocation(file=path),
            hint="ARB files must contain a single JSON object",
        )

    @staticmethod
    def bundle_unreadable(path: str, detail: str) -> Diagnostic:
        """ARB file could not be read from the file system."""
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_UNREADABLE,
            message=f"Unable to read the ARB file {path}: {detail}",
            location=SourceLocation(file=path),
        )

    @staticmethod
    def locale_mismatch(path: str, declared: str, from_filename: str) -> Diagnostic:
        """@@locale disagrees with the filename suffix.

        Args:
            path: Path of the ARB file
            declared: Value of @@locale
            from_filename: Locale parsed from the filename

        Returns:
            Diagnostic for LOCALE_MISMATCH
        """
        msg = (
            f"The locale specified in @@locale ('{declared}') and the ARB filename "
            f"('{from_filename}') do not match"
        )
        return Diagnostic(
            code=DiagnosticCode.LOCALE_MISMATCH,
            message=msg,
            location=SourceLocation(file=path),
            hint="Make them match, or specify the locale in either the filename or the @@locale key only",
        )

    @staticmethod
    def locale_undetermined(path: str) -> Diagnostic:
        """Neither @@locale nor the filename gives a locale."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNDETERMINED,
            message=f"The locale of the ARB file {path} could not be determined",
            location=SourceLocation(file=path),
            hint="Specify the locale in the '@@locale' property or as part of the filename (e.g. app_en.arb)",
        )

    @staticmethod
    def locale_not_string(path: str) -> Diagnostic:
        """@@locale holds a non-string value."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_VALUE_TYPE,
            message=f"The @@locale value in {path} is not a string",
            location=SourceLocation(file=path),
        )

    @staticmethod
    def translation_not_string(path: str, key: str) -> Diagnostic:
        """A message value is not a string.

        Args:
            path: Path of the ARB file
            key: Message key

        Returns:
            Diagnostic for INVALID_VALUE_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_VALUE_TYPE,
            message=f'Localized message for key "{key}" in "{path}" is not a string',
            location=SourceLocation(file=path, message_key=key),
        )

    @staticmethod
    def malformed_metadata(path: str, key: str, field: str) -> Diagnostic:
        """@key metadata or one of its fields has the wrong shape.

        Args:
            path: Path of the ARB file
            key: Message key
            field: Offending field ("" for the @key value itself)

        Returns:
            Diagnostic for MALFORMED_METADATA
        """
        if field:
            msg = f'The "{field}" attribute of "@{key}" is not properly formatted'
        else:
            msg = f'The resource attribute "@{key}" is not a properly formatted object'
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_METADATA,
            message=msg,
            location=SourceLocation(file=path, message_key=key),
            hint="Metadata objects must map string keys to values of the documented types",
        )

    @staticmethod
    def missing_resource_attribute(path: str, key: str) -> Diagnostic:
        """@key metadata required but absent."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_RESOURCE_ATTRIBUTE,
            message=f'Resource attribute "@{key}" was not found',
            location=SourceLocation(file=path, message_key=key),
            hint="Ensure that each resource has a corresponding @resource entry",
        )

    @staticmethod
    def missing_resource(path: str, key: str) -> Diagnostic:
        """Template message has no value."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_RESOURCE,
            message=f'A value for resource "{key}" was not found',
            location=SourceLocation(file=path, message_key=key),
        )

    @staticmethod
    def duplicate_locale(locale: str, paths: Iterable[str]) -> Diagnostic:
        """Two ARB files with the same locale.

        Args:
            locale: The shared locale
            paths: Files resolving to that locale

        Returns:
            Diagnostic for DUPLICATE_LOCALE
        """
        msg = f"Multiple ARB files with the same '{locale}' locale detected: {_quoted_list(paths)}"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_LOCALE,
            message=msg,
            hint="Ensure that there is exactly one ARB file for each locale",
        )

    @staticmethod
    def missing_fallback(language: str, dependents: Iterable[str]) -> Diagnostic:
        """Region/script locale without a base-language bundle.

        Args:
            language: Language lacking a bundle
            dependents: Locales depending on it

        Returns:
            Diagnostic for MISSING_FALLBACK
        """
        msg = (
            f"ARB file for a fallback, '{language}', does not exist, even though the "
            f"following locale(s) exist: {_quoted_list(dependents)}"
        )
        return Diagnostic(
            code=DiagnosticCode.MISSING_FALLBACK,
            message=msg,
            hint=(
                "When locales specify a script code or country code, a base locale "
                f"(without the script code or country code) must exist. Create a <name>_{language}.arb file"
            ),
        )

    @staticmethod
    def no_bundles(directory: str) -> Diagnostic:
        """No ARB files in the directory."""
        return Diagnostic(
            code=DiagnosticCode.NO_BUNDLES,
            message=f"No ARB files found in: {directory}",
            location=SourceLocation(file=directory),
        )

    @staticmethod
    def template_not_found(path: str, available: Iterable[str]) -> Diagnostic:
        """Configured template ARB file is not among the loaded bundles."""
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_NOT_FOUND,
            message=f"Unable to find the template ARB file: {path}. Found: {_quoted_list(available)}",
            location=SourceLocation(file=path),
            hint="Check template-arb-file and arb-dir in the configuration",
        )

    # ------------------------------------------------------------------
    # Syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_token(expected: Iterable[str], found: str, location: SourceLocation) -> Diagnostic:
        """Parser found a token it cannot use here.

        Args:
            expected: Human-readable names of acceptable tokens
            found: Description of the token found
            location: Where the token starts

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=f"Expected {' or '.join(expected)} but found {found}",
            location=location,
        )

    @staticmethod
    def unexpected_eof(expected: Iterable[str], location: SourceLocation) -> Diagnostic:
        """Message text ended inside an expression."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected end of message, expected {' or '.join(expected)}",
            location=location,
            hint="Check that every '{' has a matching '}'",
        )

    @staticmethod
    def missing_other_branch(kind: str, variable: str, location: SourceLocation) -> Diagnostic:
        """Plural/select without the mandatory other branch.

        Args:
            kind: "plural" or "select"
            variable: Selector placeholder name
            location: Where the expression starts

        Returns:
            Diagnostic for MISSING_OTHER_BRANCH
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_BRANCH,
            message=f"The {kind} expression on '{variable}' is missing the mandatory 'other' branch",
            location=location,
            hint="Add an other{...} branch",
        )

    @staticmethod
    def invalid_plural_category(category: str, location: SourceLocation) -> Diagnostic:
        """Plural branch key is not a CLDR category or =N."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_CATEGORY,
            message=f"Invalid plural category '{category}'",
            location=location,
            hint="Use =<number> or one of: zero, one, two, few, many, other",
        )

    @staticmethod
    def duplicate_branch(key: str, location: SourceLocation) -> Diagnostic:
        """Same branch key appears twice in one expression."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_BRANCH,
            message=f"Duplicate branch '{key}'",
            location=location,
        )

    @staticmethod
    def unknown_expression_type(type_name: str, location: SourceLocation) -> Diagnostic:
        """Expression type keyword is not plural/select/date/time."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_EXPRESSION_TYPE,
            message=f"Unknown expression type '{type_name}'",
            location=location,
            hint="Supported expression types are: plural, select, date, time",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, location: SourceLocation | None = None) -> Diagnostic:
        """Submessages nested beyond MAX_DEPTH."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            location=location,
            hint="Reduce plural/select nesting",
        )

    # ------------------------------------------------------------------
    # Placeholder errors
    # ------------------------------------------------------------------

    @staticmethod
    def conflicting_placeholder_usage(key: str, name: str, roles: Iterable[str]) -> Diagnostic:
        """Placeholder used in more than one exclusive role.

        Args:
            key: Message key
            name: Placeholder name
            roles: Roles observed across locales

        Returns:
            Diagnostic for CONFLICTING_PLACEHOLDER_USAGE
        """
        return Diagnostic(
            code=DiagnosticCode.CONFLICTING_PLACEHOLDER_USAGE,
            message=(
                f"Placeholder '{name}' is used as {' and '.join(sorted(roles))} "
                "in different places or languages"
            ),
            location=SourceLocation(message_key=key),
            hint="A placeholder can be a plural, select or datetime selector, but only one of them",
        )

    @staticmethod
    def invalid_placeholder_type(
        key: str, name: str, declared: str, role: str, allowed: Iterable[str]
    ) -> Diagnostic:
        """Declared type incompatible with the placeholder's role."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLACEHOLDER_TYPE,
            message=(
                f"Placeholder '{name}' is declared as '{declared}' but placeholders used in "
                f"{role} expressions must be of type {_quoted_list(allowed)}"
            ),
            location=SourceLocation(message_key=key),
        )

    @staticmethod
    def invalid_date_format(key: str, name: str, format_: str) -> Diagnostic:
        """DateTime format is not a known skeleton."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLACEHOLDER_FORMAT,
            message=f"Date format '{format_}' for placeholder '{name}' is not a known date skeleton",
            location=SourceLocation(message_key=key),
            hint='Use known skeletons joined with "+" (e.g. "yMd+jms") or set "isCustomDateFormat": "true"',
        )

    @staticmethod
    def invalid_number_format(key: str, name: str, format_: str) -> Diagnostic:
        """Numeric format is not a known number format."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLACEHOLDER_FORMAT,
            message=f"Number format '{format_}' for placeholder '{name}' is not supported",
            location=SourceLocation(message_key=key),
            hint="Use one of: compact, compactCurrency, compactLong, currency, decimalPattern, ...",
        )

    @staticmethod
    def invalid_placeholder_attribute(key: str, name: str, attribute: str, expected: str) -> Diagnostic:
        """Placeholder metadata attribute has the wrong shape."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLACEHOLDER_ATTRIBUTE,
            message=(
                f'The "{attribute}" value of the "{name}" placeholder in message {key} '
                f"must be {expected}"
            ),
            location=SourceLocation(message_key=key),
        )

    # ------------------------------------------------------------------
    # Codegen errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_identifier(kind: str, name: str, python_name: str) -> Diagnostic:
        """Key/placeholder does not map to a usable Python identifier."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_IDENTIFIER,
            message=f"The {kind} name '{name}' maps to '{python_name}', which is not a valid Python identifier",
            hint="Use names made of letters, digits and underscores that do not start with a digit",
        )

    @staticmethod
    def duplicate_identifier(kind: str, python_name: str, names: Iterable[str]) -> Diagnostic:
        """Two names map to the same Python identifier."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_IDENTIFIER,
            message=f"The {kind} names {_quoted_list(names)} all map to '{python_name}'",
            hint="Rename one of them",
        )

    @staticmethod
    def reserved_identifier(kind: str, name: str, python_name: str) -> Diagnostic:
        """Key/placeholder maps to a name the generated module already uses."""
        return Diagnostic(
            code=DiagnosticCode.RESERVED_IDENTIFIER,
            message=f"The {kind} name '{name}' maps to '{python_name}', which is reserved in generated code",
            hint="Rename it",
        )

    # ------------------------------------------------------------------
    # Configuration errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_config_value(key: str, expected: str, got: object) -> Diagnostic:
        """Configuration value has the wrong type."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_CONFIG_VALUE,
            message=f"Configuration option '{key}' must be {expected}, got {type(got).__name__}",
        )

    @staticmethod
    def unknown_preferred_locale(locale: str, available: Iterable[str]) -> Diagnostic:
        """preferred-supported-locales names a locale without a bundle."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_PREFERRED_LOCALE,
            message=(
                f"The preferred supported locale '{locale}' cannot be added. Please make sure "
                f"that there is a corresponding ARB file. Available locales: {_quoted_list(available)}"
            ),
        )

    @staticmethod
    def config_unreadable(path: str, detail: str) -> Diagnostic:
        """Configuration source exists but cannot be read or parsed."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_UNREADABLE,
            message=f"Error parsing {path}: {detail}",
            location=SourceLocation(file=path),
            severity="warning",
        )
