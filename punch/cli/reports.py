"""
Report Commands
---------------

Commands:
    - log: Recent closed slices, day by day
    - summarize: Time per project (and tag) per day, or for all time
"""
import click

from punch.core.cli_options import all_option
from punch.core.exceptions import PunchError
from punch.core.logging_manager import handle_cli_error
from punch.tracking import (
    GroupingMode,
    ReportEngine,
    ReportFilter,
    render_log,
    render_summary,
)
from . import get_db


def _engine(ctx) -> ReportEngine:
    return ReportEngine(get_db(ctx), tz=ctx.obj["tz"], logger=ctx.obj["logger"])


@click.command()
@all_option("Show all recorded slices instead of the last days only")
@click.pass_context
def log(ctx, show_all):
    """Log recent work."""
    if show_all:
        report_filter = ReportFilter.all_time()
    else:
        report_filter = ReportFilter.last_days(
            ctx.obj["config"].log_days, ctx.obj["clock"]()
        )

    try:
        days = _engine(ctx).log(report_filter)
    except PunchError as e:
        handle_cli_error(ctx, e, "log", {"all": show_all})

    for line in render_log(days, ctx.obj["tz"]):
        click.echo(line)


@click.command()
@all_option("One bucket for all time instead of one per day")
@click.pass_context
def summarize(ctx, show_all):
    """Summarize work by project and time period."""
    mode = GroupingMode.ALL if show_all else GroupingMode.DAY
    try:
        periods = _engine(ctx).summarize(mode)
    except PunchError as e:
        handle_cli_error(ctx, e, "summarize", {"mode": mode.value})

    for line in render_summary(periods):
        click.echo(line)
