"""ARB resource bundle loading.

One ResourceBundle per ARB file: the decoded JSON object, its resolved
locale and its message keys in file order.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from arbgen.constants import ISO_639_LANGUAGES, LOCALE_KEY, METADATA_PREFIX
from arbgen.diagnostics import (
    BundleError,
    ErrorTemplate,
    InvalidValueTypeError,
    LocaleMismatchError,
    LocaleUndeterminedError,
    MalformedBundleError,
    MalformedMetadataError,
)
from arbgen.locale_utils import normalize_locale

from .locale import LocaleIdentifier

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["ResourceBundle", "load_bundle", "locale_from_filename"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceBundle:
    """One locale's ARB content.

    Attributes:
        path: Path the bundle was read from
        locale: Resolved locale
        resources: Decoded JSON object (messages, @metadata and @@locale)
        message_keys: Keys not starting with "@", in file order
    """

    path: str
    locale: LocaleIdentifier
    resources: dict[str, Any]
    message_keys: tuple[str, ...]

    @property
    def filename(self) -> str:
        """Basename of path, used in diagnostics."""
        return PurePath(self.path).name

    def translation_for(self, key: str) -> str | None:
        """Return the translation of key, or None when absent.

        Raises:
            InvalidValueTypeError: If the value is present and not a string
        """
        value = self.resources.get(key)
        if value is not None and not isinstance(value, str):
            raise InvalidValueTypeError(ErrorTemplate.translation_not_string(self.path, key))
        return value

    def metadata_for(self, key: str) -> dict[str, Any] | None:
        """Return the @key metadata object, or None when absent.

        Raises:
            MalformedMetadataError: If @key is present and not an object
        """
        value = self.resources.get(METADATA_PREFIX + key)
        if value is not None and not isinstance(value, dict):
            raise MalformedMetadataError(ErrorTemplate.malformed_metadata(self.path, key, ""))
        return value

    def __contains__(self, key: object) -> bool:
        return key in self.message_keys

    def __str__(self) -> str:
        return f"ResourceBundle({self.locale}, {self.path})"


def locale_from_filename(filename: str) -> LocaleIdentifier | None:
    """Find the locale suffix of an ARB filename.

    Scans left to right for "_"; the first remainder (minus extension) that
    parses as a locale whose language is an ISO 639 code wins.

    Example:
        >>> locale_from_filename("my_app_pt_BR.arb")
        LocaleIdentifier(language='pt', script=None, region='BR', original='pt_BR')
        >>> locale_from_filename("strings.arb") is None
        True
    """
    for index, ch in enumerate(filename):
        if ch != "_":
            continue
        candidate = filename[index + 1 :]
        if "." in candidate:
            candidate = candidate[: candidate.rindex(".")]
        try:
            locale = LocaleIdentifier.parse(candidate)
        except ValueError:
            continue
        if locale.language in ISO_639_LANGUAGES:
            return locale
    return None


def load_bundle(path: str, file_system: FileSystem) -> ResourceBundle:
    """Read and validate one ARB file.

    Args:
        path: ARB file path
        file_system: File system to read from

    Returns:
        Loaded ResourceBundle

    Raises:
        BundleError: If the file cannot be read
        MalformedBundleError: If the content is not a JSON object
        InvalidValueTypeError: If @@locale is not a string
        LocaleMismatchError: If @@locale and the filename disagree
        LocaleUndeterminedError: If no locale can be determined
        MalformedMetadataError: If @key metadata is not an object
    """
    try:
        content = file_system.read_text(path)
    except OSError as e:
        raise BundleError(ErrorTemplate.bundle_unreadable(path, str(e))) from e

    resources = _decode(path, content)

    declared_raw = resources.get(LOCALE_KEY)
    if declared_raw is not None and not isinstance(declared_raw, str):
        raise InvalidValueTypeError(ErrorTemplate.locale_not_string(path))

    from_filename = locale_from_filename(PurePath(path).name)
    declared = normalize_locale(declared_raw) if declared_raw is not None else None

    if declared is not None and from_filename is not None and declared != from_filename.original:
        raise LocaleMismatchError(
            ErrorTemplate.locale_mismatch(path, declared, from_filename.original),
            declared=declared,
            from_filename=from_filename.original,
        )

    if declared is not None:
        try:
            locale = LocaleIdentifier.parse(declared)
        except ValueError as e:
            raise LocaleUndeterminedError(ErrorTemplate.locale_undetermined(path)) from e
    elif from_filename is not None:
        locale = from_filename
    else:
        raise LocaleUndeterminedError(ErrorTemplate.locale_undetermined(path))

    message_keys = tuple(k for k in resources if not k.startswith(METADATA_PREFIX))
    bundle = ResourceBundle(path, locale, resources, message_keys)

    for key in message_keys:
        bundle.metadata_for(key)

    logger.debug("Loaded %s: locale %s, %d messages", path, locale, len(message_keys))
    return bundle


def _decode(path: str, content: str) -> dict[str, Any]:
    """Decode ARB JSON; whitespace-only content is an empty object."""
    if not content.strip():
        return {}
    try:
        resources = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedBundleError(ErrorTemplate.malformed_bundle(path, str(e))) from e
    if not isinstance(resources, dict):
        raise MalformedBundleError(
            ErrorTemplate.malformed_bundle(path, f"top-level value is a {type(resources).__name__}, not an object")
        )
    return resources
