"""Command-line interface for git-critic"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import CriticSettings, load_settings
from .core import GitCritic
from .exceptions import GitCriticError
from .logging_config import setup_logging
from .models import Violation

app = typer.Typer(
    name="git-critic",
    help="git-critic - blame the right people for perlcritic violations",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

FILE_ARGUMENT = typer.Argument(
    ...,
    help="Perl file inside a git repository",
    exists=False,
    file_okay=True,
    dir_okay=False,
)
LEVEL_OPTION = typer.Option(
    None,
    "--level",
    "-l",
    help="perlcritic level: gentle|stern|harsh|cruel|brutal or 5..1",
)
JSON_OPTION = typer.Option(False, "--json", help="Output in machine-readable JSON format")
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file path (TOML format)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Suppress all but ERROR logging")


def parse_since(value: Optional[str]) -> Optional[int]:
    """Accept unix seconds or a YYYY-MM-DD date (midnight UTC)."""
    if value is None:
        return None
    text = value.strip()
    if text.isdigit():
        return int(text)
    try:
        day = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise typer.BadParameter("expected YYYY-MM-DD or unix seconds", param_hint="--since")
    return int(day.replace(tzinfo=timezone.utc).timestamp())


def _prepare(config: Optional[Path], verbose: bool, quiet: bool) -> CriticSettings:
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)
    setup_logging(verbose=verbose, quiet=quiet)
    try:
        return load_settings(config_file=config)
    except GitCriticError as e:
        _fail(e)


def _fail(error: GitCriticError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _print_violations(critic: GitCritic, violations: list[Violation], json_output: bool) -> None:
    if json_output:
        rows = []
        for v in violations:
            record = critic.get_blame_line(v.line_number)
            row = v.to_dict()
            row.update(
                author=record.author_identifier,
                authored_at=record.authored_at,
                commit=record.commit,
            )
            rows.append(row)
        typer.echo(json.dumps(rows, indent=2))
        return

    if not violations:
        console.print("[green]No violations found.[/green]")
        return

    table = Table(title=str(critic.file))
    table.add_column("Line", justify="right")
    table.add_column("Sev", justify="right")
    table.add_column("Policy")
    table.add_column("Author")
    table.add_column("Date")
    table.add_column("Description")
    for v in violations:
        record = critic.get_blame_line(v.line_number)
        date = datetime.fromtimestamp(record.authored_at, tz=timezone.utc).strftime("%Y-%m-%d")
        table.add_row(
            str(v.line_number),
            str(v.severity),
            v.policy,
            record.author_identifier,
            date,
            v.description,
        )
    console.print(table)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """
    Attribute perlcritic violations to the git authors responsible for them.

    [bold cyan]Examples:[/bold cyan]

      git-critic authors lib/App.pm

      git-critic report lib/App.pm --author alice@example.com --since 2024-01-01

      git-critic diff lib/App.pm --from main --to HEAD --level harsh
    """
    if version:
        console.print(f"[bold cyan]git-critic[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def authors(
    file: Path = FILE_ARGUMENT,
    json_output: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """List the authors git blame finds in FILE."""
    settings = _prepare(config, verbose, quiet)
    try:
        critic = GitCritic(file, settings=settings)
        found = sorted(critic.get_authors())
    except GitCriticError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(found, indent=2))
    else:
        for author in found:
            console.print(author, highlight=False)


@app.command()
def report(
    file: Path = FILE_ARGUMENT,
    author: str = typer.Option(..., "--author", "-a", help="Author email as shown by git blame"),
    since: Optional[str] = typer.Option(
        None, "--since", "-s", help="Ignore lines authored before this date (YYYY-MM-DD or unix seconds)"
    ),
    level: Optional[str] = LEVEL_OPTION,
    use_cache: bool = typer.Option(False, "--use-cache", help="Reuse cached git blame output"),
    json_output: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Report violations in FILE on lines last touched by an author."""
    settings = _prepare(config, verbose, quiet)
    since_ts = parse_since(since)
    try:
        critic = GitCritic(file, level, settings=settings)
        violations = critic.report_violations(author=author, since=since_ts, use_cache=use_cache)
        _print_violations(critic, violations, json_output)
    except GitCriticError as e:
        _fail(e)


@app.command()
def diff(
    file: Path = FILE_ARGUMENT,
    from_revision: str = typer.Option(..., "--from", help="Commit or branch the changes start from"),
    to_revision: str = typer.Option(..., "--to", help="Commit or branch the changes end at"),
    level: Optional[str] = LEVEL_OPTION,
    json_output: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Report violations in FILE on lines changed between two revisions."""
    settings = _prepare(config, verbose, quiet)
    try:
        critic = GitCritic(file, level, settings=settings)
        violations = critic.diff_violations(from_revision=from_revision, to_revision=to_revision)
        _print_violations(critic, violations, json_output)
    except GitCriticError as e:
        _fail(e)


if __name__ == "__main__":
    app()
