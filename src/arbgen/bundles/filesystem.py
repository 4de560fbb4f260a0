"""File system access for the generator.

Components:
    FileSystem - Protocol for the file operations the generator needs
    LocalFileSystem - Disk-based implementation rooted at a directory

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

__all__ = ["FileSystem", "LocalFileSystem"]


class FileSystem(Protocol):
    """Protocol for the file operations used by the generator.

    This is a Protocol (structural typing) rather than ABC so build tools
    can pass their own virtual file systems.

    Paths are strings; relative paths are interpreted by the implementation.
    """

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """

    def write_text(self, path: str, content: str) -> None:
        """Write a UTF-8 text file, replacing any existing content."""

    def list_dir(self, path: str) -> list[str]:
        """Return the paths of the entries of a directory (unsorted)."""

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path."""

    def make_dirs(self, path: str) -> None:
        """Create a directory and its parents; existing directories are fine."""


@dataclass(frozen=True, slots=True)
class LocalFileSystem:
    """FileSystem backed by the local disk.

    Relative paths resolve against root (the project directory).

    Example:
        >>> fs = LocalFileSystem("/work/app")
        >>> fs.read_text("l10n/app_en.arb")
        # Reads /work/app/l10n/app_en.arb

    Attributes:
        root: Directory relative paths are resolved against
    """

    root: str = "."

    def resolve(self, path: str) -> Path:
        """Return the absolute Path for path."""
        return Path(self.root, path)

    def read_text(self, path: str) -> str:
        return self.resolve(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        # newline="" keeps generated output byte-identical across platforms
        with self.resolve(path).open("w", encoding="utf-8", newline="") as f:
            f.write(content)

    def list_dir(self, path: str) -> list[str]:
        return [str(Path(path, child.name)) for child in self.resolve(path).iterdir()]

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def make_dirs(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)
