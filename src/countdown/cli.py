"""Countdown CLI - terminal client for a remote task list."""

import asyncio
import json
import logging
import sys

import click

from .adapters.http_gateway import HttpTaskGateway
from .clock import Clock
from .config import load_config, resolve_base_url
from .core.deadline import parse_deadline
from .edit_session import EditSession
from .errors import ConfigurationError, InvalidDeadline
from .render import build_rows, format_row, render_lines, row_to_json
from .store import TaskStore

logger = logging.getLogger(__name__)


def _make_store(confirm=None) -> TaskStore:
    config = load_config()
    return TaskStore(HttpTaskGateway(config), confirm=confirm)


def _fail_on_error(store: TaskStore) -> None:
    if store.error:
        click.echo(f"Error: {store.error}", err=True)
        sys.exit(1)


def _check_deadline(value: str | None) -> str | None:
    """Reject deadlines the evaluator could not read back."""
    if not value:
        return None
    try:
        parse_deadline(value)
    except InvalidDeadline as e:
        raise click.BadParameter(str(e), param_hint="--deadline")
    return value


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="countdown")
def main(debug: bool):
    """Countdown - task list with live deadlines."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(as_json: bool):
    """List tasks with their deadline status."""
    store = _make_store()
    asyncio.run(store.refresh())
    _fail_on_error(store)

    rows = build_rows(store.tasks, Clock().now)
    if as_json:
        click.echo(json.dumps([row_to_json(r) for r in rows], indent=2, ensure_ascii=False))
        return

    if not rows:
        click.echo("No tasks yet.")
        return

    for row in rows:
        click.echo(click.style(format_row(row), dim=row.inactive))


@main.command()
@click.argument("title")
@click.option("--deadline", "-d", default=None, help="Deadline in local time (YYYY-MM-DDTHH:MM)")
def add(title: str, deadline: str | None):
    """Add a task."""
    if not title.strip():
        click.echo("Title must not be empty.", err=True)
        sys.exit(1)

    store = _make_store()
    task = asyncio.run(store.add(title, _check_deadline(deadline)))
    _fail_on_error(store)
    click.echo(f"✓ Added {task.title}  #{task.id}")


@main.command()
@click.argument("task_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--deadline", "-d", default=None, help="New deadline (YYYY-MM-DDTHH:MM)")
@click.option(
    "--clear-deadline",
    is_flag=True,
    help="Omit the deadline from the update; whether the server drops a stored one is up to it",
)
def edit(task_id: str, title: str | None, deadline: str | None, clear_deadline: bool):
    """Edit a task's title or deadline."""
    store = _make_store()
    session = EditSession(store)

    async def run() -> bool:
        await store.refresh()
        task = store.get(task_id)
        if task is None:
            return False
        session.begin(task.id, task.title, task.deadline)
        session.update(
            title=title,
            deadline="" if clear_deadline else _check_deadline(deadline),
        )
        return await session.commit()

    saved = asyncio.run(run())
    _fail_on_error(store)
    if not saved:
        click.echo("Nothing saved.", err=True)
        sys.exit(1)
    click.echo(f"✓ Updated #{task_id}")


@main.command()
@click.argument("task_id")
def toggle(task_id: str):
    """Mark a task done, or not done."""
    store = _make_store()

    async def run():
        await store.refresh()
        if store.error:
            return None
        return await store.toggle(task_id)

    task = asyncio.run(run())
    _fail_on_error(store)
    state = "done" if task.completed else "not done"
    click.echo(f"✓ {task.title} marked {state}")


@main.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete(task_id: str, yes: bool):
    """Delete a task."""
    confirm = (lambda prompt: True) if yes else (lambda prompt: click.confirm(prompt, default=False))
    store = _make_store(confirm=confirm)
    deleted = asyncio.run(store.remove(task_id))
    _fail_on_error(store)
    if deleted:
        click.echo(f"✓ Deleted #{task_id}")
    else:
        click.echo("Cancelled.")


async def _watch(store: TaskStore, clock: Clock) -> None:
    def draw(now) -> None:
        click.clear()
        for line in render_lines(store.snapshot(), now):
            click.echo(line)

    store.subscribe(lambda snapshot: draw(clock.now))
    await store.refresh()

    clock.subscribe(draw)
    clock.start()
    try:
        await asyncio.Event().wait()
    finally:
        clock.stop()


@main.command()
def watch():
    """Live view with countdowns, redrawn every tick. Ctrl+C to stop."""
    config = load_config()
    store = TaskStore(HttpTaskGateway(config))
    clock = Clock(interval=config.tick_interval)
    try:
        asyncio.run(_watch(store, clock))
    except KeyboardInterrupt:
        click.echo("\nStopped.")


@main.command("config")
def show_config():
    """Show the resolved task server URL."""
    config = load_config()
    try:
        url = resolve_base_url(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Task server: {url}")
    click.echo(f"Deployed:    {config.deployed}")


if __name__ == "__main__":
    main()
