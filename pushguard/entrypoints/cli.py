"""pushguard CLI entrypoint.

Command-line interface for inspecting outgoing git changes.
"""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path

import click

from pushguard.adapters.config.toml_config_provider import TomlConfigProvider
from pushguard.core.errors import PushguardCliError
from pushguard.core.prepush import EXIT_ERROR, PrePushRunner, read_refs_and_shas
from pushguard.core.repository import GitRepo
from pushguard.domain.config import PushguardConfig
from pushguard.domain.entities import Addition
from pushguard.domain.exceptions import (
    GitCommandError,
    InvalidPatternError,
    PushguardDomainError,
)
from pushguard.domain.value_objects import PathPattern
from pushguard.shared.config_io import get_local_config_path, save_config
from pushguard.version import __version__

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Domain errors become PushguardCliError with their hint. Git failures,
    invalid configuration and unexpected errors exit with EXIT_ERROR so a
    hook aborts the push. PushguardCliError and click's own exits are
    re-raised unchanged.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (click.ClickException, click.exceptions.Exit, click.Abort):
                raise
            except GitCommandError as e:
                raise PushguardCliError(e.message, hint=e.hint, exit_code=EXIT_ERROR) from e
            except PushguardDomainError as e:
                raise PushguardCliError(e.message, hint=e.hint, exit_code=EXIT_ERROR) from e
            except ValueError as e:
                raise PushguardCliError(
                    f"Invalid configuration: {e}",
                    hint="Check .pushguard.toml in the repository root",
                    exit_code=EXIT_ERROR,
                ) from e
            except Exception as e:
                ctx = click.get_current_context(silent=True)
                if ctx is not None and (ctx.obj or {}).get("debug", False):
                    import traceback

                    traceback.print_exc()
                raise PushguardCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --debug for more details",
                    exit_code=EXIT_ERROR,
                ) from e

        return wrapper

    return decorator


def _configure_logging(debug: bool) -> logging.Logger:
    """Configure stderr logging and return the package logger."""
    logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
    log = logging.getLogger("pushguard")
    log.setLevel(logging.DEBUG if debug else logging.ERROR)
    return log


def _load_config(repo_root: Path) -> PushguardConfig:
    """Load the merged global and local configuration for a repository.

    Raises:
        ValueError: If a config file is invalid.
    """
    return TomlConfigProvider(strict=True).load(repo_root)


def _open_repo(ctx: click.Context, repo: str, config: PushguardConfig) -> GitRepo:
    return GitRepo.located_at(
        repo,
        log=ctx.obj["log"],
        default_old_ref=config.repository.default_old_ref,
        default_new_ref=config.repository.default_new_ref,
    )


repo_option = click.option(
    "--repo",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Repository root.",
)


@click.group()
@click.version_option(version=__version__, prog_name="pushguard")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging (warning: very verbose).",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """pushguard - Check outgoing git changes before they are pushed."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["log"] = _configure_logging(debug)


@cli.command(name="pre-push")
@repo_option
@click.pass_context
@handle_cli_errors("pre-push")
def pre_push(ctx: click.Context, repo: str) -> None:
    """Scan the push described on stdin.

    Reads '<old ref> <new ref> <old sha> <new sha>' from the first line of
    standard input and exits non-zero if a sensitive file is outgoing.
    """
    repo_root = Path(repo).resolve()
    config = _load_config(repo_root)
    git_repo = _open_repo(ctx, repo, config)

    refs = read_refs_and_shas(click.get_text_stream("stdin"))
    report = PrePushRunner(git_repo, config, log=ctx.obj["log"]).scan(refs)

    for error in report.read_errors:
        click.echo(f"warning: could not read {error.path}: {error.reason}", err=True)
    for detection in report.detections:
        click.echo(
            f"sensitive file: {detection.addition.path} (pattern '{detection.pattern}')",
            err=True,
        )
    if report.detections:
        click.echo(
            f"{len(report.detections)} of {len(report.change_set)} outgoing files look sensitive",
            err=True,
        )
    ctx.exit(report.exit_code)


@cli.command()
@click.argument("old_ref")
@click.argument("new_ref")
@click.argument("scope", required=False, default=".")
@repo_option
@click.pass_context
@handle_cli_errors("additions")
def additions(ctx: click.Context, old_ref: str, new_ref: str, scope: str, repo: str) -> None:
    """List files added or modified between OLD_REF and NEW_REF."""
    config = _load_config(Path(repo).resolve())
    git_repo = _open_repo(ctx, repo, config)
    change_set = git_repo.compute_additions(old_ref, new_ref, scope)

    for addition in change_set:
        click.echo(f"{addition.path}\t{len(addition.data)}\t{addition.content_hash[:12]}")
    for error in change_set.read_errors:
        click.echo(f"warning: could not read {error.path}: {error.reason}", err=True)


@cli.command()
@click.argument("pattern")
@click.argument("paths", nargs=-1, required=True)
@handle_cli_errors("match")
def match(pattern: str, paths: tuple[str, ...]) -> None:
    """Show which PATHS are selected by PATTERN."""
    try:
        parsed = PathPattern.parse(pattern)
    except InvalidPatternError as e:
        raise PushguardCliError(e.message, hint=e.hint, exit_code=EXIT_ERROR) from e

    click.echo(f"pattern: {parsed.raw} ({parsed.kind.value})")
    for path in paths:
        selected = Addition.create(path, b"").matches(parsed)
        click.echo(f"{'match' if selected else 'no match'}\t{path}")


@cli.command()
@repo_option
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file.")
@handle_cli_errors("init")
def init(repo: str, force: bool) -> None:
    """Write a default .pushguard.toml to the repository root."""
    repo_root = Path(repo).resolve()
    if not repo_root.is_dir():
        raise PushguardCliError(
            f"Repository root is not a directory: {repo_root}",
            hint="Pass --repo with the path of a git working tree",
        )

    config_path = get_local_config_path(repo_root)
    if config_path.exists() and not force:
        raise PushguardCliError(
            f"Config already exists: {config_path}",
            hint="Use --force to overwrite it",
        )

    save_config(PushguardConfig.default(), config_path)
    click.echo(f"✓ Wrote {config_path}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
