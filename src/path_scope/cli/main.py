"""CLI entry point for path-scope.

Invoked as::

    path-scope [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m path_scope.cli.main

Commands
--------
- check     Decide whether one or more paths are inside a scope
- patterns  Show the compiled allow and forbid patterns of a scope
- version   Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from path_scope.config.builder import scope_from_config
from path_scope.config.loader import ScopeConfigError, ScopeConfigLoader
from path_scope.patterns.pattern import PatternError
from path_scope.scope.fs_scope import Scope

console = Console()
err_console = Console(stderr=True)


def _build_scope(
    config_path: str | None,
    allow_dirs: tuple[str, ...],
    allow_files: tuple[str, ...],
    forbid_dirs: tuple[str, ...],
    forbid_files: tuple[str, ...],
    recursive: bool,
) -> Scope:
    if config_path is not None:
        config = ScopeConfigLoader().load(Path(config_path))
        scope = scope_from_config(config)
    else:
        scope = Scope()
    for directory in allow_dirs:
        scope.allow_directory(directory, recursive)
    for file in allow_files:
        scope.allow_file(file)
    for directory in forbid_dirs:
        scope.forbid_directory(directory, recursive)
    for file in forbid_files:
        scope.forbid_file(file)
    return scope


def _scope_options(command: Callable[..., None]) -> Callable[..., None]:
    """Attach the options shared by every command that builds a scope."""
    decorators = [
        click.option(
            "--config",
            "-c",
            "config_path",
            default=None,
            type=click.Path(exists=True, dir_okay=False),
            help="Path to a scope YAML config.",
        ),
        click.option("--allow-dir", "allow_dirs", multiple=True, help="Directory to allow."),
        click.option("--allow-file", "allow_files", multiple=True, help="File to allow."),
        click.option("--forbid-dir", "forbid_dirs", multiple=True, help="Directory to forbid."),
        click.option("--forbid-file", "forbid_files", multiple=True, help="File to forbid."),
        click.option(
            "--recursive/--no-recursive",
            default=True,
            show_default=True,
            help="Whether --allow-dir/--forbid-dir cover nested directories.",
        ),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="path-scope")
def cli() -> None:
    """Path scope CLI: check filesystem paths against allow/forbid patterns."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from path_scope import __version__

    console.print(
        Panel(
            f"[bold]path-scope[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Glob-based filesystem access scope.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("paths", nargs=-1, required=True)
@_scope_options
def check_command(
    paths: tuple[str, ...],
    config_path: str | None,
    allow_dirs: tuple[str, ...],
    allow_files: tuple[str, ...],
    forbid_dirs: tuple[str, ...],
    forbid_files: tuple[str, ...],
    recursive: bool,
) -> None:
    """Check whether PATHS are allowed; exits 1 if any path is denied."""
    try:
        scope = _build_scope(
            config_path, allow_dirs, allow_files, forbid_dirs, forbid_files, recursive
        )
    except (ScopeConfigError, PatternError) as exc:
        err_console.print(f"[red]Invalid scope:[/red] {escape(str(exc))}")
        sys.exit(2)

    table = Table(title="Scope Check", box=box.SIMPLE)
    table.add_column("Path", style="cyan")
    table.add_column("Decision")

    all_allowed = True
    for path in paths:
        allowed = scope.is_allowed(path)
        all_allowed = all_allowed and allowed
        table.add_row(escape(path), "[green]ALLOWED[/green]" if allowed else "[red]DENIED[/red]")

    console.print(table)
    sys.exit(0 if all_allowed else 1)


# ---------------------------------------------------------------------------
# patterns
# ---------------------------------------------------------------------------


@cli.command(name="patterns")
@_scope_options
def patterns_command(
    config_path: str | None,
    allow_dirs: tuple[str, ...],
    allow_files: tuple[str, ...],
    forbid_dirs: tuple[str, ...],
    forbid_files: tuple[str, ...],
    recursive: bool,
) -> None:
    """Show the allow and forbid patterns of a scope."""
    try:
        scope = _build_scope(
            config_path, allow_dirs, allow_files, forbid_dirs, forbid_files, recursive
        )
    except (ScopeConfigError, PatternError) as exc:
        err_console.print(f"[red]Invalid scope:[/red] {escape(str(exc))}")
        sys.exit(2)

    table = Table(title="Scope Patterns", box=box.SIMPLE)
    table.add_column("Kind", style="magenta")
    table.add_column("Pattern", style="cyan")
    for pattern in sorted(scope.allowed_patterns(), key=str):
        table.add_row("allow", escape(pattern.as_str()))
    for pattern in sorted(scope.forbidden_patterns(), key=str):
        table.add_row("forbid", escape(pattern.as_str()))

    if table.row_count == 0:
        console.print("[yellow]Scope is empty; every path is denied.[/yellow]")
        return
    console.print(table)
    options = scope.match_options
    console.print(
        f"  Literal separator: [cyan]{options.require_literal_separator}[/cyan]  "
        f"Literal leading dot: [cyan]{options.require_literal_leading_dot}[/cyan]"
    )


if __name__ == "__main__":
    cli()
