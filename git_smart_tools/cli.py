"""Typer-based CLIs for git-browse and git-sync-default-branch."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import typer
from rich.console import Console

from . import __version__
from .config import Environment
from .exceptions import GitCommandError, GitToolsError
from .launcher import launch
from .models import Mode
from .resolver import object_kind, resolve
from .sync import sync_default_branch
from .urls import build_url, resolve_remote

# typer only re-exports BadParameter; its base is the error raised for any bad command line.
UsageError = typer.BadParameter.__base__

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

browse_app = typer.Typer(
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
    help="Open a revision, file, issue, pull request or release in the browser.",
)
sync_app = typer.Typer(
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
    help="Fetch and bring the default branch up to date with its upstream.",
)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-smart-tools {__version__}")
        raise typer.Exit()


@browse_app.command()
def browse(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        help="<rev>, <rev>:<path>, <rev> <path> or <path>; the id or tag with -i, -p or -t.",
        show_default=False,
    ),
    issue: bool = typer.Option(False, "-i", "--issue", help="Open the issue list, or the issue <id>."),
    pull_request: bool = typer.Option(
        False, "-p", "--pull-request", help="Open pull/merge requests, or the request <id>."
    ),
    release: bool = typer.Option(False, "-t", "--release", help="Open releases, or the release for <tag>."),
    remote: str | None = typer.Option(None, "-r", "--remote", help="Remote name or URL to browse."),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="Print the URL without opening it."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log git invocations."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Print the web URL for a revision or path and open it."""

    _ = version  # handled via callback
    configure_logging(verbose)
    modes = [
        mode
        for mode, enabled in (
            (Mode.ISSUE, issue),
            (Mode.PULL_REQUEST, pull_request),
            (Mode.RELEASE, release),
        )
        if enabled
    ]
    if len(modes) > 1:
        raise typer.BadParameter("-i, -p and -t are mutually exclusive.", ctx=ctx)
    env = _environment(ctx)
    positional = list(args or [])
    try:
        url = _browse_url(env, positional, modes[0] if modes else None, remote)
        launch(url, env, dry_run=dry_run)
    except GitCommandError as exc:
        _fail(str(exc), exc.returncode or 1)
    except GitToolsError as exc:
        _fail(str(exc))


def _browse_url(env: Environment, positional: list[str], mode: Mode | None, remote: str | None) -> str:
    if mode is not None:
        # Only the id/tag is read in these modes; other positionals are ignored.
        item = positional[0] if positional else None
        return build_url(resolve_remote(env, remote), mode, item=item)
    descriptor = resolve(positional, env)
    remote_descriptor = resolve_remote(env, remote, descriptor)
    if descriptor is None:
        return build_url(remote_descriptor, Mode.HOME)
    kind = object_kind(descriptor, env)
    return build_url(remote_descriptor, Mode.REVISION, descriptor=descriptor, kind=kind)


@sync_app.command()
def sync(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log git invocations."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Merge or rebase the default branch onto its upstream, keeping local changes."""

    _ = version  # handled via callback
    configure_logging(verbose)
    env = _environment(ctx)
    try:
        outcome = sync_default_branch(env, Console())
    except GitCommandError as exc:
        _fail(str(exc), exc.returncode or 1)
    except GitToolsError as exc:
        _fail(str(exc))
    if outcome.returncode:
        raise typer.Exit(outcome.returncode)


def _environment(ctx: typer.Context) -> Environment:
    if isinstance(ctx.obj, Environment):
        return ctx.obj
    return Environment()


def _fail(message: str, code: int = 1) -> NoReturn:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


def _run(app: typer.Typer, prog_name: str, argv: list[str] | None) -> NoReturn:
    """Run ``app`` so that usage errors exit with status 1."""

    command = typer.main.get_command(app)
    try:
        code = command.main(args=argv, prog_name=prog_name, standalone_mode=False)
    except UsageError as exc:
        exc.show()
        sys.exit(1)
    except typer.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(code or 0)


def browse_main(argv: list[str] | None = None) -> NoReturn:
    _run(browse_app, "git-browse", argv)


def sync_main(argv: list[str] | None = None) -> NoReturn:
    _run(sync_app, "git-sync-default-branch", argv)


if __name__ == "__main__":
    browse_main()
