"""Domain entities.

Core domain models representing the outgoing changes of a push.
These are pure Python dataclasses with no dependencies on infrastructure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import blake3

from pushguard.domain.exceptions import InvalidPatternError
from pushguard.domain.value_objects import (
    FileName,
    FilePath,
    PathPattern,
    file_name_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Addition:
    """The end state of one file added or modified in a commit range.

    Attributes:
        path: Path relative to the repository root.
        name: Base name of path (derived, never passed in).
        data: Full file content at the new revision, read from the worktree.
    """

    path: FilePath
    data: bytes = b""
    name: FileName = field(init=False)

    def __post_init__(self) -> None:
        """Derive name from path."""
        object.__setattr__(self, "name", file_name_of(self.path))

    @classmethod
    def create(cls, path: str, data: bytes) -> Addition:
        """Create an Addition for a file with the given path and contents."""
        return cls(path=FilePath(path), data=data)

    @property
    def content_hash(self) -> str:
        """blake3 hex digest of the file content."""
        return blake3.blake3(self.data).hexdigest()

    def matches(
        self,
        pattern: str | PathPattern,
        log: logging.Logger | None = None,
    ) -> bool:
        """State whether this addition is selected by a pattern.

        A pattern ending in '/' selects every file under that directory
        (raw prefix on the full path). A pattern containing '/' anywhere else
        is globbed against the full path. A pattern with no '/' is globbed
        against the base name, so it selects that name anywhere in the tree.

        A raw string that is not a valid glob selects nothing.

        Args:
            pattern: Pattern string or an already parsed PathPattern.
            log: Logger for the match record. Defaults to the module logger.

        Returns:
            True if the addition is selected by the pattern.

        Raises:
            InvalidPatternError: If pattern is an empty string.
        """
        log = log or logger
        if isinstance(pattern, PathPattern):
            result = pattern.matches(self.path, self.name)
        elif not pattern:
            raise InvalidPatternError(pattern, "pattern cannot be empty")
        else:
            try:
                result = PathPattern.parse(pattern).matches(self.path, self.name)
            except InvalidPatternError as e:
                log.debug("Ignoring malformed pattern pattern=%r reason=%s", pattern, e.reason)
                result = False

        log.debug(
            "Checking addition for match pattern=%s path=%s match=%s",
            pattern,
            self.path,
            result,
        )
        return result


@dataclass(frozen=True)
class FileReadError:
    """A path listed as changed whose content could not be read.

    Attributes:
        path: Path relative to the repository root.
        reason: Description of the underlying OS error.
    """

    path: FilePath
    reason: str


@dataclass(frozen=True)
class ChangeSet:
    """Outgoing additions for one commit range.

    Behaves as a read-only sequence of Addition in the order git listed them.
    An empty ChangeSet means the range holds no added or modified files.

    Attributes:
        old_ref: Ref the range starts from (exclusive).
        new_ref: Ref the range ends at (inclusive).
        scope: Sub-path the diff was restricted to.
        additions: One Addition per non-deleted changed path.
        read_errors: Paths whose content could not be read. Each still has an
            Addition with empty data.
    """

    old_ref: str
    new_ref: str
    scope: str
    additions: tuple[Addition, ...] = ()
    read_errors: tuple[FileReadError, ...] = ()

    @property
    def range(self) -> str:
        """Git range expression for this change set."""
        return f"{self.old_ref}..{self.new_ref}"

    @property
    def complete(self) -> bool:
        """True if every listed file was read successfully."""
        return not self.read_errors

    def paths(self) -> list[FilePath]:
        """Return the paths of all additions, in order."""
        return [a.path for a in self.additions]

    def __len__(self) -> int:
        return len(self.additions)

    def __iter__(self) -> Iterator[Addition]:
        return iter(self.additions)

    def __getitem__(self, index: int) -> Addition:
        return self.additions[index]
