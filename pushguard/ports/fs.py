"""File System port interface.

Defines abstract interface for file system operations.
Enables testing and potential alternative storage backends.
"""

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for file system operations."""

    def read(self, path: Path) -> bytes:
        """Read file contents.

        Args:
            path: Absolute path to file.

        Returns:
            File contents as bytes.

        Raises:
            FileNotFoundError: If file doesn't exist.
            OSError: If the file cannot be read.
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if path is an existing directory."""
        ...
