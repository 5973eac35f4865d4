"""Tests for CLI error types and the error-handling decorator."""

import click
import pytest

from pushguard.core.errors import PushguardCliError
from pushguard.domain.exceptions import (
    GitCommandError,
    InvalidPatternError,
    RepositoryNotFoundError,
)
from pushguard.entrypoints.cli import handle_cli_errors


class TestPushguardCliError:
    """Tests for PushguardCliError exception class."""

    def test_error_without_hint(self) -> None:
        """Should format message correctly without hint."""
        error = PushguardCliError("Test error message")

        assert error.message == "Test error message"
        assert error.hint is None
        assert error.format_message() == "Test error message"
        assert error.exit_code == 1

    def test_error_with_hint(self) -> None:
        """Should format message correctly with hint."""
        error = PushguardCliError("Test error message", hint="Try this instead", exit_code=2)

        assert error.format_message() == "Test error message\nHint: Try this instead"
        assert error.exit_code == 2

    def test_is_click_exception(self) -> None:
        assert isinstance(PushguardCliError("Test"), click.ClickException)


class TestHandleCliErrors:
    """Tests for domain error conversion."""

    @staticmethod
    def _raising(error: Exception):
        @handle_cli_errors("test")
        def command():
            raise error

        return command

    def test_git_failure_exits_two(self) -> None:
        error = GitCommandError("git diff failed", command=["git", "diff"], returncode=128)
        with pytest.raises(PushguardCliError) as exc_info:
            self._raising(error)()

        assert exc_info.value.exit_code == 2
        assert exc_info.value.message == "git diff failed"
        assert exc_info.value.hint == error.hint

    def test_domain_error_keeps_hint(self) -> None:
        with pytest.raises(PushguardCliError) as exc_info:
            self._raising(RepositoryNotFoundError("gone", hint="look elsewhere"))()

        assert exc_info.value.hint == "look elsewhere"

    def test_invalid_pattern(self) -> None:
        with pytest.raises(PushguardCliError) as exc_info:
            self._raising(InvalidPatternError("[a", "unterminated character class"))()

        assert "Invalid pattern '[a'" in exc_info.value.message

    def test_value_error_reported_as_configuration(self) -> None:
        with pytest.raises(PushguardCliError, match="Invalid configuration"):
            self._raising(ValueError("scope cannot be empty"))()

    def test_cli_error_passes_through(self) -> None:
        original = PushguardCliError("as is")
        with pytest.raises(PushguardCliError) as exc_info:
            self._raising(original)()

        assert exc_info.value is original

    def test_unexpected_error_names_command(self) -> None:
        with pytest.raises(PushguardCliError) as exc_info:
            self._raising(KeyError("x"))()

        assert exc_info.value.message == "Unexpected error in test: 'x'"
        assert exc_info.value.exit_code == 2
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_click_exit_passes_through(self) -> None:
        with pytest.raises(click.exceptions.Exit) as exc_info:
            self._raising(click.exceptions.Exit(1))()

        assert exc_info.value.exit_code == 1
