"""track CLI entrypoint.

Command-line interface over ``Repository``: init, add, commit, log, show.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click

from . import __version__
from .diffing import Segment
from .errors import AlreadyInitialized, TrackError
from .repository import REPO_DIRNAME, Repository, repository

LOG_SEPARATOR = "-" * 39

SEGMENT_STYLES = {
    "added": ("++", {"fg": "green"}),
    "removed": ("--", {"fg": "red"}),
    "unchanged": ("  ", {"dim": True}),
}


def handle_cli_errors(func):
    """Turn repository and filesystem errors into a clean ``Error:`` line.

    Every failure exits with status 1; the kind of error is only
    visible in the message.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TrackError as e:
            message = e.message if not e.hint else f"{e.message}\n{e.hint}"
            raise click.ClickException(message) from e
        except OSError as e:
            raise click.ClickException(f"Read/write failure: {e}") from e

    return wrapper


def _repo(ctx: click.Context) -> Repository:
    return ctx.obj["repo"]


@click.group()
@click.version_option(version=__version__, prog_name="track")
@click.option(
    "--dir",
    "-C",
    "workdir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    envvar="TRACK_WORKDIR",
    show_default=True,
    help="Working directory holding the .track repository.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--no-color", is_flag=True, help="Disable colored diff output.")
@click.pass_context
def cli(ctx: click.Context, workdir: Path, verbose: bool, no_color: bool) -> None:
    """track - snapshot files into a local commit history."""
    if no_color:
        ctx.color = False
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.setdefault("repo", repository(workdir=workdir))


@cli.command()
@click.pass_context
@handle_cli_errors
def init(ctx: click.Context) -> None:
    """Create an empty repository (safe to run twice)."""
    repo = _repo(ctx)
    try:
        repo.init()
    except AlreadyInitialized as e:
        click.echo(e.message)
        return
    click.echo(f"Initialized empty track repository in {repo.workdir / REPO_DIRNAME}")


@cli.command()
@click.argument("file")
@click.pass_context
@handle_cli_errors
def add(ctx: click.Context, file: str) -> None:
    """Stage FILE for the next commit."""
    oid = _repo(ctx).add(file)
    click.echo(oid)
    click.echo(f"Added {file}")


@cli.command()
@click.argument("message")
@click.pass_context
@handle_cli_errors
def commit(ctx: click.Context, message: str) -> None:
    """Record the staged files as a new commit."""
    oid = _repo(ctx).commit(message)
    click.echo(f"commit successfully created {oid}")


@cli.command()
@click.pass_context
@handle_cli_errors
def log(ctx: click.Context) -> None:
    """List commits, newest first."""
    for oid, record in _repo(ctx).log():
        click.echo(LOG_SEPARATOR)
        click.echo(f"Commit: {oid}\nDate: {record.timestamp}\n\n{record.message}\n")


def _echo_segment(segment: Segment) -> None:
    prefix, style = SEGMENT_STYLES[segment.kind]
    for line in segment.value.splitlines():
        click.echo(click.style(prefix + line, **style))


@cli.command()
@click.argument("commit_id")
@click.pass_context
@handle_cli_errors
def show(ctx: click.Context, commit_id: str) -> None:
    """Show what COMMIT_ID changed relative to its parent."""
    changes = _repo(ctx).show(commit_id)
    click.echo("Changes in the commit are:")
    for change in changes.files:
        click.echo(f"File: {change.path}")
        click.echo(change.content)
        if change.status == "first_commit":
            click.echo("First commit")
        elif change.status == "new":
            click.echo("New file in this commit")
        else:
            click.echo("\nDiff:")
            for segment in change.segments:
                _echo_segment(segment)
        click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
