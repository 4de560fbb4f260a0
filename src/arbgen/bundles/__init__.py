"""ARB resource bundles: locales, loading and directory collections.

Python 3.13+.
"""

from .bundle import ResourceBundle, load_bundle, locale_from_filename
from .collection import ResourceBundleCollection
from .filesystem import FileSystem, LocalFileSystem
from .locale import LocaleIdentifier

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "LocaleIdentifier",
    "ResourceBundle",
    "ResourceBundleCollection",
    "load_bundle",
    "locale_from_filename",
]
