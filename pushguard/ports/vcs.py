"""Version Control System (VCS) port interface.

Defines abstract interface for interacting with Git repositories.
"""

from pathlib import Path
from typing import Protocol


class VCS(Protocol):
    """Protocol for version control system operations (Git)."""

    @property
    def repo_root(self) -> Path:
        """Absolute path to the repository root."""
        ...

    def diff_names(self, old_ref: str, new_ref: str, scope: str = ".") -> list[str]:
        """List files added, copied or modified in a commit range.

        Deleted and renamed-away paths are never listed.

        Args:
            old_ref: Ref the range starts from (exclusive).
            new_ref: Ref the range ends at (inclusive).
            scope: Sub-path the diff is restricted to.

        Returns:
            Paths relative to the repository root, in git's output order.

        Raises:
            GitCommandError: If git cannot be run or exits non-zero.
        """
        ...
