"""CLI error handling with actionable hints.

Provides consistent error formatting for all pushguard CLI commands.
"""

import click


class PushguardCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.
        exit_code: Process exit code used by click.

    Example:
        raise PushguardCliError(
            "Not a directory: /tmp/missing",
            hint="Pass --repo with the path of a git working tree",
        )
    """

    def __init__(self, message: str, hint: str | None = None, exit_code: int = 1) -> None:
        super().__init__(message)
        self.hint = hint
        self.exit_code = exit_code

    def format_message(self) -> str:
        """Format the error message with hint if present."""
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg
