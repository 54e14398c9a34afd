"""
Tracking Commands
-----------------

Start, stop and inspect the running timeslice.

Commands:
    - start: Start logging time on a project
    - stop: Stop the running slice
    - status: Show the running slice, if any

Starting while a slice is running, or stopping while none is, prints a
notice and exits 0 without touching the store.
"""
import click

from punch.core import colors
from punch.core.exceptions import PunchError
from punch.core.logging_manager import handle_cli_error
from punch.tracking import Idle, TimeLedger
from punch.utils.timefmt import format_duration, format_time
from . import get_db


def _ledger(ctx) -> TimeLedger:
    return TimeLedger(get_db(ctx), clock=ctx.obj["clock"], logger=ctx.obj["logger"])


@click.command()
@click.argument("project")
@click.option("-t", "--tag", "tags", multiple=True, help="Tag for the new slice (repeatable)")
@click.pass_context
def start(ctx, project, tags):
    """Start logging time on PROJECT."""
    try:
        result = _ledger(ctx).start(project, tags)
    except PunchError as e:
        handle_cli_error(ctx, e, "start", {"project": project, "tags": list(tags)})

    running = result.running
    tz = ctx.obj["tz"]
    if not result.started:
        elapsed = running.elapsed(ctx.obj["clock"]())
        click.echo(
            f"Already running: {colors.project(running.project)} since "
            f"{colors.time(format_time(running.started_on, tz))} "
            f"({colors.duration(format_duration(elapsed))})"
        )
        return

    message = (
        f"Started {colors.project(running.project)} at "
        f"{colors.time(format_time(running.started_on, tz))}"
    )
    if result.tags:
        message += f" ({colors.tag(', '.join(result.tags))})"
    click.echo(message)


@click.command()
@click.pass_context
def stop(ctx):
    """Stop the currently running slice."""
    try:
        result = _ledger(ctx).stop()
    except PunchError as e:
        handle_cli_error(ctx, e, "stop")

    if not result.stopped:
        click.echo("No running slice")
        return

    click.echo(
        f"Stopped {colors.project(result.stopped_slice.project)} at "
        f"{colors.time(format_time(result.stopped_on, ctx.obj['tz']))} "
        f"({colors.duration(format_duration(result.duration))})"
    )


@click.command()
@click.pass_context
def status(ctx):
    """Show the currently running slice."""
    try:
        state = _ledger(ctx).status()
    except PunchError as e:
        handle_cli_error(ctx, e, "status")

    if isinstance(state, Idle):
        click.echo("No running slice")
        return

    elapsed = state.elapsed(ctx.obj["clock"]())
    click.echo(
        f"Running: {colors.project(state.project)} since "
        f"{colors.time(format_time(state.started_on, ctx.obj['tz']))} "
        f"({colors.duration(format_duration(elapsed))})"
    )
