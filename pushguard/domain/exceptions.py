"""Domain exceptions for pushguard.

These exceptions represent invalid inputs and failures of the environment
the scan runs in. They should be caught at the application boundary (CLI)
and converted to user-facing error messages.
"""


class PushguardDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class InvalidPatternError(PushguardDomainError, ValueError):
    """Raised when a path pattern is empty or is not a valid glob."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid pattern '{pattern}': {reason}",
            hint="Patterns use shell glob syntax: '*', '?', and '[...]' classes",
        )
        self.pattern = pattern
        self.reason = reason


class RepositoryNotFoundError(PushguardDomainError):
    """Raised when a repository root cannot be resolved to a directory."""

    pass


class GitCommandError(PushguardDomainError, RuntimeError):
    """Raised when an invocation of the git executable fails.

    Attributes:
        command: The full argument vector that was executed.
        returncode: Process exit code, or None if git could not be started.
        stdout: Captured standard output (decoded).
        stderr: Captured standard error (decoded).
    """

    def __init__(
        self,
        message: str,
        command: list[str],
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(
            message,
            hint="Check that git is installed and that both refs exist locally",
        )
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
