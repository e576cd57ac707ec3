"""CLI commands."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from calendo.config import Config
    from calendo.store import TodoStore

app = typer.Typer(
    name="calendo",
    help="Calendar todo list - up to five todos per day.",
    no_args_is_help=False,
)
console = Console()

DateOption = Annotated[
    str | None, typer.Option("--date", "-d", help="Day as YYYY-MM-DD (default: today)")
]


def _get_config() -> Config:
    """Lazy import and load config."""
    from calendo.config import Config

    return Config.load()


def _get_store(config: Config) -> TodoStore:
    """Lazy import and open the configured store."""
    from calendo.core import open_store

    try:
        return open_store(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _setup_logging(config: Config) -> None:
    level = getattr(logging, str(config.log_level).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_day(value: str | None) -> date:
    """Parse a --date value, exiting with an error message if malformed."""
    from calendo.datekey import parse_key

    if not value:
        return date.today()
    try:
        return parse_key(value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _show_calendar(day: str | None, shift: int) -> None:
    from calendo.presenter import TodoPresenter
    from calendo.ui.calendar_panel import RichCalendarRenderer

    cfg = _get_config()
    store = _get_store(cfg)

    store.set_selected_date(_parse_day(day))
    if shift:
        store.shift_month(shift)

    presenter = TodoPresenter(store, RichCalendarRenderer(console))
    presenter.start()
    presenter.stop()


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Show this month's calendar if no command given."""
    _setup_logging(_get_config())
    if ctx.invoked_subcommand is None:
        _show_calendar(None, 0)


@app.command()
def cal(
    day: Annotated[str | None, typer.Argument(help="Day to select (YYYY-MM-DD)")] = None,
    shift: Annotated[
        int, typer.Option("--shift", "-s", help="Move the displayed month by N months")
    ] = 0,
):
    """Show the month calendar and the selected day's todos."""
    _show_calendar(day, shift)


@app.command()
def add(
    text: Annotated[str, typer.Argument(help="Todo text (use quotes)")],
    day: DateOption = None,
):
    """Add a todo to a day."""
    from calendo.datekey import to_key
    from calendo.errors import CalendoError

    cfg = _get_config()
    store = _get_store(cfg)
    key = to_key(_parse_day(day))

    try:
        item = store.add_todo(key, text)
    except CalendoError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] Added to [cyan]{key}[/cyan]: {escape(item.text)} [dim]({item.id})[/dim]"
    )


@app.command(name="ls")
@app.command(name="list")
def list_todos(day: DateOption = None):
    """List a day's todos."""
    from calendo.calendar_grid import day_label
    from calendo.datekey import to_key
    from calendo.ui.calendar_panel import format_todo

    cfg = _get_config()
    store = _get_store(cfg)
    selected = _parse_day(day)
    items = store.get_todos_by_date(to_key(selected))

    console.print(f"[bold]{day_label(selected)}[/bold]")
    if not items:
        console.print("[dim]No todos[/dim]")
        return
    for item in items:
        console.print(format_todo(item))


@app.command()
def toggle(
    id: Annotated[int, typer.Argument(help="Todo ID")],
    day: DateOption = None,
):
    """Mark a todo done, or pending again."""
    from calendo.datekey import to_key

    cfg = _get_config()
    store = _get_store(cfg)
    key = to_key(_parse_day(day))

    if not _find_item(store, key, id):
        console.print(f"[red]Error:[/red] Todo not found on {key}: {id}")
        raise typer.Exit(1)

    store.toggle_todo(key, id)
    item = _find_item(store, key, id)
    if item.completed:
        console.print(f"[green]✓[/green] Done: {escape(item.text)}")
    else:
        console.print(f"[yellow]↩[/yellow] Reopened: {escape(item.text)}")


@app.command(name="remove")
@app.command()
def rm(
    id: Annotated[int, typer.Argument(help="Todo ID")],
    day: DateOption = None,
):
    """Remove a todo."""
    from calendo.datekey import to_key

    cfg = _get_config()
    store = _get_store(cfg)
    key = to_key(_parse_day(day))

    item = _find_item(store, key, id)
    if not item:
        console.print(f"[red]Error:[/red] Todo not found on {key}: {id}")
        raise typer.Exit(1)

    store.delete_todo(key, id)
    console.print(f"[yellow]✓[/yellow] Removed: {escape(item.text)}")


@app.command()
def info():
    """Show current storage info."""
    from calendo.storage import get_storage_path

    cfg = _get_config()
    store = _get_store(cfg)
    todos = store.get_todos()

    total = sum(len(items) for items in todos.values())
    done = sum(1 for items in todos.values() for item in items if item.completed)
    path = get_storage_path(cfg, cfg.default_backend)

    console.print(f"[bold]Backend:[/bold] {cfg.default_backend}")
    console.print(f"[bold]Storage:[/bold] {escape(str(path)) if path else 'N/A'}")
    console.print(f"[bold]Days:[/bold] {len(todos)}")
    console.print(f"[bold]Todos:[/bold] {total} total ({total - done} pending, {done} done)")


@app.command()
def config(
    key: Annotated[str | None, typer.Argument(help="Setting to show or change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show settings, or change one."""
    from calendo.config import ConfigMeta

    cfg = _get_config()

    if key is None:
        for name, desc, current in cfg.get_settings():
            console.print(f"[bold]{name}[/bold] = {escape(str(current))} [dim]({desc})[/dim]")
        return

    if key not in ConfigMeta.SETTINGS:
        available = ", ".join(ConfigMeta.SETTINGS)
        console.print(f"[red]Error:[/red] Unknown setting '{escape(key)}'. Available: {available}")
        raise typer.Exit(1)

    if value is None:
        console.print(f"[bold]{key}[/bold] = {escape(str(getattr(cfg, key)))}")
        return

    try:
        coerced = cfg._coerce(value, type(cfg.DEFAULTS[key]))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    cfg.set(key, coerced)
    console.print(f"[green]✓[/green] {key} = {escape(str(coerced))}")


# Helpers


def _find_item(store: TodoStore, key: str, id: int):
    """Find a todo by id on one day."""
    for item in store.get_todos_by_date(key):
        if item.id == id:
            return item
    return None
