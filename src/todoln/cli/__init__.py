"""
Todoln CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands and
their short aliases.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from todoln import __version__
from todoln.cli import tasks
from todoln.core.config.env import load_env_files

# Help panel names for command grouping
PANEL_EDIT = "Edit Tasks"
PANEL_VIEW = "View Tasks"
PANEL_FILE = "Backup and Restore"

app = typer.Typer(
    name="todoln",
    help="A minimal command-line task list",
    no_args_is_help=False,
    invoke_without_command=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the CLI.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    store: Path | None = typer.Option(
        None,
        "--store",
        help="Task file to use (overrides TODOLN_STORE and config.json)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Todoln - a minimal command-line task list.

    Tasks are numbered from 1 in list order; those numbers are what done,
    modify, insert and remove take.

    Quick Start:
        todoln add "buy milk" "walk dog"
        todoln done 2
        todoln sort
        todoln clear

    Running todoln with no command lists all tasks.
    """
    # Precedence: OS env > project .env > user .env
    load_env_files()
    setup_logging(debug)

    ctx.obj = {"store": store, "debug": debug}

    if ctx.invoked_subcommand is not None:
        return

    tasks.show_list(ctx, "all")


# =============================================================================
# Edit Tasks
# =============================================================================

app.command(name="add", rich_help_panel=PANEL_EDIT)(tasks.add)
app.command(name="insert", rich_help_panel=PANEL_EDIT)(tasks.insert)
app.command(name="modify", rich_help_panel=PANEL_EDIT)(tasks.modify)
app.command(name="done", rich_help_panel=PANEL_EDIT)(tasks.done)
app.command(name="sort", rich_help_panel=PANEL_EDIT)(tasks.sort)
app.command(name="remove", rich_help_panel=PANEL_EDIT)(tasks.remove)
app.command(name="clear", rich_help_panel=PANEL_EDIT)(tasks.clear)
app.command(name="reset", rich_help_panel=PANEL_EDIT)(tasks.reset)


# =============================================================================
# View Tasks
# =============================================================================

app.command(name="list", rich_help_panel=PANEL_VIEW)(tasks.list_tasks)
app.command(name="raw", rich_help_panel=PANEL_VIEW)(tasks.raw)
app.command(name="find", rich_help_panel=PANEL_VIEW)(tasks.find)


# =============================================================================
# Backup and Restore
# =============================================================================

app.command(name="backup", rich_help_panel=PANEL_FILE)(tasks.backup)
app.command(name="restore", rich_help_panel=PANEL_FILE)(tasks.restore)


@app.command()
def version() -> None:
    """Show todoln version and exit."""
    console.print(f"todoln version {__version__}")
    raise typer.Exit(0)


# =============================================================================
# Short aliases (hidden from --help)
# =============================================================================

ALIASES = {
    tasks.add: ["a"],
    tasks.insert: ["ins", "i"],
    tasks.modify: ["m", "edit"],
    tasks.list_tasks: ["ls", "l"],
    tasks.raw: ["r", "show"],
    tasks.find: ["f", "search"],
    tasks.done: ["dn", "complete"],
    tasks.sort: ["s", "order"],
    tasks.remove: ["rm", "del", "delete"],
    tasks.clear: ["cls", "clean"],
    tasks.reset: ["clearall", "deleteall"],
    tasks.backup: ["b", "export"],
    tasks.restore: ["rest", "import"],
}

for command, names in ALIASES.items():
    for alias in names:
        app.command(name=alias, hidden=True)(command)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
