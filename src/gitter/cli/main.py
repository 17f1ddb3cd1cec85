"""Main CLI interface for gitter."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitter.config import GitterConfig
from gitter.core.client import Client
from gitter.core.repository import Repository
from gitter.exceptions import GitterError
from gitter.logger import set_level
from gitter.models.diff import Diff, DiffLine, LineKind
from gitter.statistics import AGGREGATORS

console = Console()

LINE_STYLES = {
    LineKind.OLD: "red",
    LineKind.NEW: "green",
    LineKind.CHUNK: "cyan",
    LineKind.INFO: "dim",
}


def _open_repository(ctx: click.Context) -> Repository:
    """Open the repository selected on the command line or exit with an error."""
    try:
        return ctx.obj["client"].get_repository(ctx.obj["repo_path"])
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e


@click.group()
@click.version_option()
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to the git repository",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="JSON configuration file",
)
@click.pass_context
def main(ctx: click.Context, repo_path: str, config_file: Optional[str]):
    """Gitter - structured views over git history."""
    try:
        config = GitterConfig.load(config_file)
    except ValueError as e:
        console.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise click.Abort() from e

    set_level(config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["client"] = Client(config)
    ctx.obj["repo_path"] = Path(repo_path).resolve()


@main.command()
@click.pass_context
def version(ctx: click.Context):
    """Show the git version and the command dialect used for it."""
    client = ctx.obj["client"]
    try:
        git_version = client.get_version()
        dialect = client.dialect
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    console.print(f"[bold]git:[/bold] {git_version}")
    console.print(f"[bold]dialect:[/bold] {dialect.name.lower()}")


@main.command()
@click.option("--file", "file_path", help="Only show commits touching this path")
@click.option("--limit", default=20, help="Number of commits to show")
@click.pass_context
def log(ctx: click.Context, file_path: Optional[str], limit: int):
    """Show the commit log."""
    repository = _open_repository(ctx)

    try:
        commits = repository.get_commits(file_path)
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    table = Table(title=f"Commits in {repository.get_name()}")
    table.add_column("Hash", style="yellow")
    table.add_column("Date")
    table.add_column("Author")
    table.add_column("Message")

    for commit in commits[:limit]:
        table.add_row(
            commit.short_hash,
            commit.date.strftime("%Y-%m-%d %H:%M"),
            escape(commit.author.name),
            escape(commit.message),
        )

    console.print(table)


@main.command()
@click.argument("commit_hash")
@click.pass_context
def show(ctx: click.Context, commit_hash: str):
    """Show a commit with its diff."""
    repository = _open_repository(ctx)

    try:
        commit = repository.get_commit(commit_hash)
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    console.print(f"[bold yellow]commit {commit.hash}[/bold yellow]")
    if commit.is_merge:
        console.print(f"[bold]Merge:[/bold] {' '.join(commit.short_parents)}")
    console.print(f"[bold]Author:[/bold] {escape(str(commit.author))}")
    console.print(f"[bold]Date:[/bold]   {commit.date.isoformat()}")
    console.print()
    console.print(f"    {commit.message}", markup=False)
    if commit.body:
        for line in commit.body.splitlines():
            console.print(f"    {line}", markup=False)
    console.print()

    for diff in commit.diffs or []:
        _print_diff(diff)


def _print_diff(diff: Diff) -> None:
    if diff.is_rename:
        title = f"{diff.file} → {diff.file_new}"
        if diff.similarity is not None:
            title += f" ({diff.similarity}% similar)"
    else:
        title = diff.file or "(unknown file)"
    console.print(title, style="bold", markup=False)

    for header in (diff.index, diff.old, diff.new):
        if header:
            console.print(header, style="white", markup=False)

    for line in diff.lines:
        _print_diff_line(line)


def _print_diff_line(line: DiffLine) -> None:
    if line.kind is LineKind.CHUNK:
        numbers = " " * 11
    else:
        old = "" if line.kind is LineKind.NEW else str(line.old_number)
        new = "" if line.kind is LineKind.OLD else str(line.new_number)
        numbers = f"{old:>5} {new:>5}"

    console.print(
        f"{numbers} {line.line}", style=LINE_STYLES.get(line.kind), markup=False
    )


@main.command()
@click.argument("file_path")
@click.pass_context
def blame(ctx: click.Context, file_path: str):
    """Show which commit last touched each block of a file."""
    repository = _open_repository(ctx)

    try:
        entries = repository.get_blame(file_path)
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    table = Table(show_header=True)
    table.add_column("Commit", style="yellow")
    table.add_column("Line", justify="right")
    table.add_column("Content")

    for entry in entries:
        table.add_row(entry.commit, str(entry.start_line), escape(entry.line))

    console.print(table)


@main.command()
@click.pass_context
def branches(ctx: click.Context):
    """List local branches."""
    repository = _open_repository(ctx)

    try:
        names = repository.get_branches()
        current = repository.get_current_branch()
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    for name in names:
        if name == current:
            console.print(f"* [green]{escape(name)}[/green]")
        else:
            console.print(f"  {name}", markup=False)


@main.command()
@click.pass_context
def tags(ctx: click.Context):
    """List tags."""
    repository = _open_repository(ctx)

    try:
        names = repository.get_tags()
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    if not names:
        console.print("[dim]No tags[/dim]")
        return

    for name in names:
        console.print(name, markup=False)


@main.command()
@click.option(
    "--by",
    "group_by",
    type=click.Choice(sorted(AGGREGATORS)),
    default="contributors",
    help="How to group commits",
)
@click.pass_context
def stats(ctx: click.Context, group_by: str):
    """Summarize the commit log by contributor or by day."""
    repository = _open_repository(ctx)
    repository.add_statistics(group_by, AGGREGATORS[group_by]())

    try:
        aggregator = repository.get_statistics()[group_by]
    except GitterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    table = Table()
    if group_by == "contributors":
        table.add_column("Contributor")
        table.add_column("Email")
        table.add_column("Commits", justify="right")
        for email in aggregator:
            table.add_row(
                escape(aggregator[email]["name"]),
                escape(email),
                str(aggregator.commit_count(email)),
            )
    else:
        table.add_column("Day")
        table.add_column("Commits", justify="right")
        for day in aggregator:
            table.add_row(day, str(len(aggregator[day])))

    console.print(table)


if __name__ == "__main__":
    main()
