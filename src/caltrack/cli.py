"""caltrack CLI - console calendar and task tracker."""

import json
import sys
from datetime import date

import click

from .config import load_config, setup_logging
from .core.tasks import Task
from .core.views import MonthView, WeekView
from .render import format_day_tasks, format_free_slots, render_month, render_week
from .workflows import build_handler, open_store


def _target_date(target_date: str | None) -> date:
    if not target_date:
        return date.today()
    try:
        return date.fromisoformat(target_date)
    except ValueError:
        raise click.BadParameter(f"{target_date!r} is not a YYYY-MM-DD date", param_hint="--date")


def _ask(question: str) -> str:
    return click.prompt(question, default="", show_default=False)


@click.group(invoke_without_command=True)
@click.version_option(package_name="caltrack")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """caltrack - calendar and task tracker."""
    setup_logging(load_config(), debug)
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
def shell():
    """Interactive week/month calendar."""
    config = load_config()
    try:
        handler = build_handler(config, prompt=_ask)
    except OSError as e:
        click.echo(f"Error: cannot open task file: {e}", err=True)
        sys.exit(1)

    while handler.running:
        click.echo(handler.render(config.cell_width))
        click.echo("Enter help to learn commands")
        try:
            line = click.prompt(">", default="", show_default=False)
        except click.Abort:
            click.echo("\nExiting Calendar...")
            break
        if not line.strip():
            continue
        try:
            output = handler.handle(line)
        except OSError as e:
            click.echo(f"Error: cannot save tasks: {e}", err=True)
            sys.exit(1)
        if output:
            click.echo(output)


@main.command()
@click.option("--month", "month_view", is_flag=True, help="Show the month instead of the week")
@click.option("--date", "-d", "target_date", default=None,
              help="Date inside the view (YYYY-MM-DD), defaults to today")
def show(month_view: bool, target_date: str | None):
    """Print the week or month around a date."""
    config = load_config()
    target = _target_date(target_date)
    store = open_store(config)
    if month_view:
        click.echo(render_month(store, MonthView(target), config.cell_width))
    else:
        click.echo(render_week(store, WeekView(target), config.cell_width))


def _task_to_json(task: Task) -> dict:
    def _iso(value):
        return value.isoformat() if value is not None else None

    return {
        "name": task.name,
        "kind": task.kind.name.lower(),
        "completed": task.completed,
        "priority": task.priority.name.lower(),
        "due_date": _iso(task.due_date),
        "due_time": _iso(task.due_time),
        "start_date": _iso(task.start_date),
        "end_date": _iso(task.end_date),
        "start_time": _iso(task.start_time),
        "end_time": _iso(task.end_time),
    }


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to list (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(target_date: str | None, as_json: bool):
    """List the tasks on a date."""
    config = load_config()
    target = _target_date(target_date)
    day_tasks = open_store(config).get(target)

    if as_json:
        click.echo(json.dumps([_task_to_json(t) for t in day_tasks], indent=2))
    else:
        click.echo(format_day_tasks(target, day_tasks))


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to check (YYYY-MM-DD), defaults to today")
def free(target_date: str | None):
    """Show free time slots on a date."""
    config = load_config()
    target = _target_date(target_date)
    slots = open_store(config).free_time_slots(target)
    click.echo(format_free_slots(target, slots))


if __name__ == "__main__":
    main()
