"""Git adapter implementing VCS protocol using subprocess git commands."""

import logging
import subprocess
from pathlib import Path

from pushguard.domain.exceptions import GitCommandError, RepositoryNotFoundError

logger = logging.getLogger(__name__)

# Added, Copied, Modified: deleted and renamed-away paths are never listed
OUTGOING_DIFF_FILTER = "ACM"


def _decode(output: bytes | None) -> str:
    return output.decode("utf-8", errors="replace") if output else ""


class GitAdapter:
    """Git VCS adapter using subprocess calls to git CLI."""

    def __init__(self, repo_root: Path, log: logging.Logger | None = None) -> None:
        """Initialize Git adapter.

        Args:
            repo_root: Path to the repository root. Resolved to an absolute path.
            log: Logger for command records. Defaults to the module logger.

        Raises:
            RepositoryNotFoundError: If repo_root is not an existing directory.
        """
        self._repo_root = Path(repo_root).resolve()
        self._log = log or logger
        if not self._repo_root.is_dir():
            raise RepositoryNotFoundError(
                f"Repository root is not a directory: {self._repo_root}",
                hint="Pass the path of a checked-out git working tree",
            )

    @property
    def repo_root(self) -> Path:
        """Absolute path to the repository root."""
        return self._repo_root

    def _run_git(self, args: list[str]) -> bytes:
        """Run a git command in the repository and return its stdout.

        Args:
            args: Git command arguments (without 'git' prefix).

        Returns:
            Captured standard output.

        Raises:
            GitCommandError: If git cannot be started or exits non-zero.
        """
        cmd = ["git"] + args
        self._log.debug("Building repo command command=git args=%s", args)
        try:
            result = subprocess.run(
                cmd,
                cwd=self._repo_root,
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as e:
            self._log.error("Command execution failed command=git error=%s", e)
            raise GitCommandError(
                f"git executable not found: {e}",
                command=cmd,
            ) from e
        except subprocess.CalledProcessError as e:
            stdout = _decode(e.stdout)
            stderr = _decode(e.stderr)
            self._log.error(
                "Command execution failed args=%s returncode=%d output=%r stderr=%r",
                args,
                e.returncode,
                stdout,
                stderr,
            )
            raise GitCommandError(
                self._format_git_error(e, f"git {' '.join(args)} failed"),
                command=cmd,
                returncode=e.returncode,
                stdout=stdout,
                stderr=stderr,
            ) from e

        self._log.debug("Command executed successfully output=%r", _decode(result.stdout))
        return result.stdout

    def _format_git_error(
        self,
        error: subprocess.CalledProcessError,
        context: str,
    ) -> str:
        """Format git error with full context.

        Args:
            error: The CalledProcessError from git command.
            context: Human-readable description of what was being done.

        Returns:
            Formatted error message with exit code and stderr.
        """
        stderr = _decode(error.stderr).strip()

        msg = f"{context} (git exit code {error.returncode})"
        if stderr:
            msg += f": {stderr}"
        else:
            msg += " (no error output from git)"

        return msg

    def diff_names(self, old_ref: str, new_ref: str, scope: str = ".") -> list[str]:
        """List files added, copied or modified in a commit range.

        Args:
            old_ref: Ref the range starts from (exclusive).
            new_ref: Ref the range ends at (inclusive).
            scope: Sub-path the diff is restricted to.

        Returns:
            Paths relative to the repository root, in git's output order,
            unquoted. Empty if the range holds no such changes.

        Raises:
            GitCommandError: If git cannot be run or exits non-zero.
        """
        git_range = f"{old_ref}..{new_ref}"
        output = self._run_git(
            [
                "diff",
                git_range,
                "--name-only",
                "-z",
                f"--diff-filter={OUTGOING_DIFF_FILTER}",
                "--",
                scope,
            ]
        )
        # NUL-separated names are never C-quoted by git
        return [name for name in _decode(output).split("\0") if name]
