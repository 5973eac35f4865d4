"""Local file system adapter.

Implements the FileSystem port using the standard library pathlib.
This is the default adapter for file system operations.
"""

from pathlib import Path


class LocalFileSystem:
    """Local file system implementation using pathlib.

    This adapter implements the FileSystem port protocol for standard
    local file system operations. All paths should be absolute.
    """

    def read(self, path: Path) -> bytes:
        """Read file contents.

        Raises:
            FileNotFoundError: If file doesn't exist.
            OSError: If the file cannot be read.
        """
        return path.read_bytes()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()
