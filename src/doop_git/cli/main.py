"""Main CLI interface for doop-git."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from doop_git.core.bookmarks import BookmarkStore
from doop_git.core.config import Settings, find_project_root
from doop_git.core.errors import DoopGitError
from doop_git.core.tracker import HistoryTracker
from doop_git.models.commit import CommitRecord

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    root_logger = logging.getLogger("doop_git")
    root_logger.handlers.clear()
    root_logger.addHandler(
        RichHandler(console=err_console, show_path=False, markup=False)
    )
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _get_settings(ctx: click.Context) -> Settings:
    """Build settings from the global options or exit with error message."""
    root = ctx.obj["root"]
    project_root = root.resolve() if root else find_project_root()
    if project_root is None:
        err_console.print("[red]Error: Not in a git repository[/red]")
        raise click.Abort()

    return Settings(
        root=project_root,
        bookmarks_file=ctx.obj["bookmarks_file"],
        git_binary=ctx.obj["git_binary"],
    )


def _get_tracker(ctx: click.Context) -> HistoryTracker:
    return HistoryTracker(_get_settings(ctx))


def _abort(error: Exception) -> click.Abort:
    """Report an error and build the Abort to raise."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    return click.Abort()


def _print_records(records: List[CommitRecord], title: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([record.to_dict() for record in records], indent=2))
        return

    if not records:
        console.print("[yellow]No commits to show[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Release", style="magenta")
    table.add_column("Date", style="blue")
    table.add_column("Author", style="green")
    table.add_column("Subject")

    for record in records:
        table.add_row(
            record.short_id,
            record.release,
            record.timestamp,
            escape(record.author),
            escape(record.subject),
        )
    console.print(table)


@click.group()
@click.version_option(package_name="doop-git")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="DOOP_GIT_ROOT",
    help="Application root (defaults to the enclosing git repository)",
)
@click.option(
    "--bookmarks-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="DOOP_GIT_BOOKMARKS",
    help="Bookmark file (defaults to .git/doop-git-bookmarks.json)",
)
@click.option(
    "--git",
    "git_binary",
    default="git",
    envvar="DOOP_GIT_BINARY",
    show_default=True,
    help="Git executable to run",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    root: Optional[Path],
    bookmarks_file: Optional[Path],
    git_binary: str,
    verbose: bool,
):
    """doop-git - Git history and deploy bookmarks for an application."""
    _setup_logging(verbose)
    ctx.obj = {
        "root": root,
        "bookmarks_file": bookmarks_file,
        "git_binary": git_binary,
    }


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def current(ctx: click.Context, as_json: bool):
    """Show the latest commit."""
    try:
        record = _get_tracker(ctx).current()
    except DoopGitError as e:
        raise _abort(e) from e

    if as_json:
        click.echo(json.dumps(record.to_dict() if record else None, indent=2))
        return
    if record is None:
        console.print("[yellow]No commits yet[/yellow]")
        return

    console.print(f"[bold]{record.release}[/bold] [cyan]{record.short_id}[/cyan]")
    console.print(f"[bold]Date:[/bold] {record.timestamp}")
    console.print(f"[bold]Author:[/bold] {escape(record.author)}")
    console.print(f"[bold]Subject:[/bold] {escape(record.subject)}")


@main.command()
@click.option("--limit", default=30, type=click.IntRange(min=1), help="Number of commits to show")
@click.option("--full-message", is_flag=True, help="Show the whole commit message")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def history(ctx: click.Context, limit: int, full_message: bool, as_json: bool):
    """Show recent commits, newest first."""
    try:
        records = _get_tracker(ctx).history(
            limit=limit, first_line_only=not full_message
        )
    except DoopGitError as e:
        raise _abort(e) from e

    _print_records(records, "Recent Commits", as_json)


@main.command()
@click.argument("bookmark")
@click.option(
    "--strict",
    is_flag=True,
    help="Fail if the bookmark is older than the history window",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def since(ctx: click.Context, bookmark: str, strict: bool, as_json: bool):
    """Show commits since BOOKMARK was last read, oldest first.

    The bookmark is moved to the latest commit afterwards.
    """
    try:
        records = _get_tracker(ctx).history_since_bookmark(bookmark, strict=strict)
    except DoopGitError as e:
        raise _abort(e) from e

    _print_records(records, f"Commits since '{escape(bookmark)}'", as_json)


@main.command()
@click.option("--forget", "forget_name", help="Remove the named bookmark")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def bookmarks(ctx: click.Context, forget_name: Optional[str], as_json: bool):
    """List stored bookmarks."""
    store = BookmarkStore(_get_settings(ctx))

    if forget_name:
        try:
            removed = store.forget(forget_name)
        except DoopGitError as e:
            raise _abort(e) from e
        if removed:
            console.print(f"[green]Removed bookmark '{escape(forget_name)}'[/green]")
        else:
            console.print(f"[yellow]No bookmark named '{escape(forget_name)}'[/yellow]")
        return

    stored = store.load()
    if as_json:
        click.echo(json.dumps(stored, indent=2))
        return
    if not stored:
        console.print("[yellow]No bookmarks stored[/yellow]")
        return

    table = Table(title="Bookmarks")
    table.add_column("Name", style="cyan")
    table.add_column("Commit", style="green", no_wrap=True)
    for name, short_id in sorted(stored.items()):
        table.add_row(escape(name), short_id)
    console.print(table)


if __name__ == "__main__":
    main()
