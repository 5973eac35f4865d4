"""Repository access for outgoing changes.

GitRepo binds to a repository root and answers "what changed in this range
and what does it contain now?". Change listing goes through the VCS port,
file content through the FileSystem port.
"""

import logging
import posixpath
from pathlib import Path

from pushguard.adapters.fs.local import LocalFileSystem
from pushguard.adapters.git_cmd.git_adapter import GitAdapter
from pushguard.domain.config import DEFAULT_NEW_REF, DEFAULT_OLD_REF
from pushguard.domain.entities import Addition, ChangeSet, FileReadError
from pushguard.domain.exceptions import RepositoryNotFoundError
from pushguard.domain.value_objects import PATH_SEPARATOR, FilePath
from pushguard.ports.fs import FileSystem
from pushguard.ports.vcs import VCS

logger = logging.getLogger(__name__)


class GitRepo:
    """A git working tree located at an absolute root.

    All operations are read-only. Construct with GitRepo.located_at().
    """

    def __init__(
        self,
        root: Path,
        vcs: VCS,
        fs: FileSystem,
        log: logging.Logger | None = None,
        default_old_ref: str = DEFAULT_OLD_REF,
        default_new_ref: str = DEFAULT_NEW_REF,
    ) -> None:
        """Initialize with already validated collaborators.

        Args:
            root: Absolute repository root.
            vcs: Version control adapter bound to the same root.
            fs: File system adapter.
            log: Logger for range summaries. Defaults to the module logger.
            default_old_ref: Range start used by compute_default_additions.
            default_new_ref: Range end used by compute_default_additions.
        """
        self._root = root
        self._vcs = vcs
        self._fs = fs
        self._log = log or logger
        self.default_old_ref = default_old_ref
        self.default_new_ref = default_new_ref

    @classmethod
    def located_at(
        cls,
        path: str | Path,
        vcs: VCS | None = None,
        fs: FileSystem | None = None,
        log: logging.Logger | None = None,
        default_old_ref: str = DEFAULT_OLD_REF,
        default_new_ref: str = DEFAULT_NEW_REF,
    ) -> "GitRepo":
        """Return a GitRepo rooted at path.

        A relative path is resolved against the current working directory.

        Args:
            path: Repository root, absolute or relative.
            vcs: VCS adapter. Defaults to a GitAdapter on the resolved root.
            fs: File system adapter. Defaults to LocalFileSystem.
            log: Logger passed down to the repo and the default adapter.
            default_old_ref: Range start used by compute_default_additions.
            default_new_ref: Range end used by compute_default_additions.

        Returns:
            GitRepo bound to the absolute root.

        Raises:
            RepositoryNotFoundError: If the path cannot be resolved or is not
                an existing directory.
        """
        fs = fs or LocalFileSystem()
        try:
            root = Path(path).resolve()
        except (OSError, RuntimeError) as e:
            raise RepositoryNotFoundError(f"Cannot resolve repository path '{path}': {e}") from e

        if not fs.is_dir(root):
            raise RepositoryNotFoundError(
                f"Repository root is not a directory: {root}",
                hint="Pass the path of a checked-out git working tree",
            )

        if vcs is None:
            vcs = GitAdapter(root, log=log)

        return cls(
            root,
            vcs,
            fs,
            log=log,
            default_old_ref=default_old_ref,
            default_new_ref=default_new_ref,
        )

    @property
    def root(self) -> Path:
        """Absolute repository root."""
        return self._root

    def compute_default_additions(self, scope: str = ".") -> ChangeSet:
        """Return the outgoing additions between the default refs.

        Unless configured otherwise this compares origin/master to master.
        """
        return self.compute_additions(self.default_old_ref, self.default_new_ref, scope)

    def compute_additions(self, old_ref: str, new_ref: str, scope: str = ".") -> ChangeSet:
        """Return the outgoing additions and modifications in a commit range.

        Deleted files are never included. Each listed file's current content
        is read from the working tree. A listed file that cannot be read is
        kept with empty content and recorded in ChangeSet.read_errors.

        Args:
            old_ref: Ref the range starts from (exclusive).
            new_ref: Ref the range ends at (inclusive).
            scope: Sub-path the diff is restricted to.

        Returns:
            ChangeSet with one Addition per listed path, in git's order.

        Raises:
            GitCommandError: If git cannot be run or rejects the range.
        """
        files = self._vcs.diff_names(old_ref, new_ref, scope)

        additions: list[Addition] = []
        read_errors: list[FileReadError] = []
        for file in files:
            try:
                data = self.read_repo_file(file)
            except OSError as e:
                self._log.warning("Unable to read changed file path=%s error=%s", file, e)
                read_errors.append(FileReadError(path=FilePath(file), reason=str(e)))
                data = b""
            additions.append(Addition.create(file, data))

        change_set = ChangeSet(
            old_ref=old_ref,
            new_ref=new_ref,
            scope=scope,
            additions=tuple(additions),
            read_errors=tuple(read_errors),
        )
        self._log.info(
            "Generating all additions in range old_ref=%s new_ref=%s scope=%s additions=%d unreadable=%d",
            old_ref,
            new_ref,
            scope,
            len(change_set),
            len(read_errors),
        )
        return change_set

    def _repo_path(self, file_name: str) -> Path:
        """Join a repository-relative name onto the root.

        Leading separators are ignored, so an absolute name still resolves
        under the root.

        Raises:
            ValueError: If the name climbs out of the root through '..'.
        """
        relative = posixpath.normpath(file_name.lstrip(PATH_SEPARATOR) or ".")
        if relative == ".." or relative.startswith("../"):
            raise ValueError(f"Path escapes the repository root: {file_name}")
        return self._root / relative

    def read_repo_file(self, file_name: str) -> bytes:
        """Return the contents of a file relative to the repository root.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            OSError: If the file cannot be read.
            ValueError: If file_name points outside the root.
        """
        return self._fs.read(self._repo_path(file_name))

    def read_repo_file_or_nothing(self, file_name: str) -> bytes:
        """Return the contents of a file, or empty bytes if it does not exist.

        Raises:
            OSError: If the file exists but cannot be read.
            ValueError: If file_name points outside the root.
        """
        if self._fs.exists(self._repo_path(file_name)):
            return self.read_repo_file(file_name)
        return b""
