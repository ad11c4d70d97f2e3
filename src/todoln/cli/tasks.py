"""
Todoln CLI - Task list commands.

Each command loads the task file, runs one operation and saves. Errors from
the core are turned into a message and a non-zero exit code here, and only
here.
"""

from collections.abc import Callable
from pathlib import Path
from typing import NoReturn, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todoln.cli.errors import (
    ExitCode,
    exit_code_for,
    print_error,
    print_invalid_option_error,
    print_task_error,
)
from todoln.core.config.loader import load_config
from todoln.core.services.tasks import TaskService
from todoln.core.tasks.errors import TodolnError
from todoln.core.tasks.models import Task, TaskFilter

console = Console()

T = TypeVar("T")

FILTER_HELP = "Which tasks to show: all, todo or done"
INDICES_HELP = "Task numbers, e.g. 2, 1,3 or 2-4 (can be repeated)"


def get_service(ctx: typer.Context) -> TaskService:
    """Build the task service for this invocation, honouring --store."""
    obj = ctx.obj or {}
    try:
        config = load_config()
    except ValidationError as e:
        print_error(
            "Invalid configuration",
            reason=str(e),
            solution="Check the TODOLN_* environment variables",
        )
        raise typer.Exit(ExitCode.USER_ERROR)
    return TaskService.from_config(config, store_path=obj.get("store"))


def _fail(error: TodolnError) -> NoReturn:
    print_task_error(error)
    raise typer.Exit(exit_code_for(error))


def _run(operation: Callable[[], T]) -> T:
    try:
        return operation()
    except TodolnError as e:
        _fail(e)


def _parse_filter(show: str) -> TaskFilter:
    try:
        return TaskFilter.parse(show)
    except ValueError:
        print_invalid_option_error(show, [f.value for f in TaskFilter])
        raise typer.Exit(ExitCode.USER_ERROR)


def _task_text(task: Task) -> Text:
    if task.done:
        return Text(task.description, style="dim strike")
    return Text(task.description)


def _names(tasks: list[Task]) -> str:
    return ", ".join(escape(t.description) for t in tasks)


def render_tasks(rows: list[tuple[int, Task]], title: str) -> None:
    """Print numbered tasks as a table; done tasks are dimmed and struck through."""
    if not rows:
        console.print("No tasks found.")
        return

    table = Table(title=title, show_header=False, box=None, title_style="bold underline")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Task", overflow="fold")

    for index, task in rows:
        table.add_row(Text(f"[{index}]"), _task_text(task))

    console.print(table)


def show_list(ctx: typer.Context, show: str = "all") -> None:
    """Print the numbered task list; used by `list` and by bare `todoln`."""
    task_filter = _parse_filter(show)
    service = get_service(ctx)
    rows = list(_run(lambda: service.list(task_filter)))
    title = {
        TaskFilter.ALL: "Tasks",
        TaskFilter.TODO: "Tasks todo",
        TaskFilter.DONE: "Tasks done",
    }[task_filter]
    render_tasks(rows, title)


def add(
    ctx: typer.Context,
    descriptions: list[str] = typer.Argument(..., help="The task(s) to add"),
) -> None:
    """
    Add new tasks to the end of the list.

    Examples:
        todoln add "buy milk"
        todoln add "buy milk" "walk dog"
    """
    service = get_service(ctx)
    added = _run(lambda: service.add(*descriptions))
    console.print(f"[green]Added:[/green] {_names(added)}")


def insert(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Position to insert at (1 = top)"),
    descriptions: list[str] = typer.Argument(..., help="The task(s) to insert"),
) -> None:
    """
    Insert new tasks at a position, shifting later tasks down.

    Examples:
        todoln insert 1 "most urgent thing"
        todoln insert 3 "step a" "step b"
    """
    service = get_service(ctx)
    inserted = _run(lambda: service.insert(index, *descriptions))
    console.print(f"[green]Inserted at {index}:[/green] {_names(inserted)}")


def modify(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="The task to modify"),
    description: str = typer.Argument(..., help="The new description"),
) -> None:
    """
    Change the description of a task.

    Examples:
        todoln modify 2 "walk the dog twice"
    """
    service = get_service(ctx)
    task = _run(lambda: service.modify(index, description))
    console.print(f"[green]Modified {index}:[/green] {escape(task.description)}")


def list_tasks(
    ctx: typer.Context,
    show: str = typer.Argument("all", help=FILTER_HELP),
) -> None:
    """
    List tasks with their numbers.

    Examples:
        todoln list
        todoln list todo
        todoln list done
    """
    show_list(ctx, show)


def raw(
    ctx: typer.Context,
    show: str = typer.Argument("all", help=FILTER_HELP),
) -> None:
    """
    Print task descriptions as plain text, one per line.

    Examples:
        todoln raw todo > todo.txt
    """
    task_filter = _parse_filter(show)
    service = get_service(ctx)
    for task in _run(lambda: service.raw(task_filter)):
        console.print(task.description, markup=False, highlight=False, soft_wrap=True)


def find(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Text to search for (case-insensitive)"),
) -> None:
    """
    List tasks whose description contains a search term.

    Numbers shown are the tasks' positions in the full list, so they can be
    passed straight to done, modify or remove.

    Examples:
        todoln find milk
    """
    service = get_service(ctx)
    rows = _run(lambda: service.find(term))
    render_tasks(rows, f'Search results: "{escape(term)}"')


def done(
    ctx: typer.Context,
    indices: list[str] = typer.Argument(..., help=INDICES_HELP),
) -> None:
    """
    Mark tasks as done.

    Nothing is changed if any number is out of range.

    Examples:
        todoln done 2
        todoln done 1,3
        todoln done 2-4 6
    """
    service = get_service(ctx)
    marked = _run(lambda: service.mark_done(indices))
    console.print(f"[green]Completed:[/green] {_names(marked)}")


def sort(ctx: typer.Context) -> None:
    """Move done tasks below todo tasks, keeping their order otherwise."""
    service = get_service(ctx)
    _run(service.sort)
    console.print("[green]Tasks sorted[/green]")


def remove(
    ctx: typer.Context,
    indices: list[str] = typer.Argument(..., help=INDICES_HELP),
) -> None:
    """
    Remove tasks.

    Numbers refer to the list as it is before the command runs. Nothing is
    removed if any number is out of range.

    Examples:
        todoln remove 3
        todoln remove 2,4
    """
    service = get_service(ctx)
    removed = _run(lambda: service.remove(indices))
    console.print(f"[green]Removed:[/green] {_names(removed)}")


def clear(ctx: typer.Context) -> None:
    """Remove all tasks marked as done."""
    service = get_service(ctx)
    cleared = _run(service.clear)
    if not cleared:
        console.print("[yellow]No done tasks to clear.[/yellow]")
        return
    console.print(f"[green]Cleared:[/green] {_names(cleared)}")


def reset(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """
    Delete all tasks, done or not.

    WARNING: This cannot be undone except from a backup. A confirmation
    prompt is shown unless --force is passed.
    """
    service = get_service(ctx)
    if not force:
        confirmation = typer.confirm("Delete ALL tasks?", default=False)
        if not confirmation:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    count = _run(service.reset)
    console.print(f"[green]Reset:[/green] deleted {count} task(s)")


def backup(
    ctx: typer.Context,
    name: str | None = typer.Option(
        None,
        "--name",
        "-n",
        help="Backup file name (default: todoln_backup_<timestamp>.jsonl)",
    ),
) -> None:
    """
    Save a copy of the task file to the current directory.

    Examples:
        todoln backup
        todoln backup --name before-cleanup.jsonl
    """
    service = get_service(ctx)
    path = _run(lambda: service.backup(name))
    console.print(f"[green]Backed up to:[/green] {escape(str(path))}")


def restore(
    ctx: typer.Context,
    backup_path: Path = typer.Argument(..., help="The backup file to restore"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """
    Replace the whole task list with a backup.

    The backup is checked before anything is changed; a missing or corrupt
    file leaves the current list untouched.

    Examples:
        todoln restore todoln_backup_20260101-120000.jsonl
    """
    service = get_service(ctx)
    if not force:
        confirmation = typer.confirm(
            f"Replace the current task list with {backup_path}?",
            default=False,
        )
        if not confirmation:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    store = _run(lambda: service.restore(backup_path))
    console.print(f"[green]Restored:[/green] {len(store)} task(s) from {escape(str(backup_path))}")
