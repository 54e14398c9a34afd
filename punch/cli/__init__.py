#!/usr/bin/env python3
"""
Punch CLI
---------
Command-line interface of the punch time ledger.

This module provides the main CLI group and the shared context setup
(configuration, logger, database) for all commands.

Command Structure:
    - Tracking (start, stop, status)
    - Reports (log, summarize)
    - Import (import)
    - Schema (migrate)

Usage:
    punch start website -t backend -t admin
    punch stop
    punch log --all
    punch summarize
    punch import ~/.config/watson/frames
"""
from pathlib import Path

import click

from punch.core.cli_options import config_option, dbfile_option, log_dir_option, verbose_option
from punch.core.config import load_config
from punch.core.exceptions import PunchError
from punch.core.logging_manager import PunchLogger, handle_cli_error
from punch.database import PunchDB
from punch.utils.timefmt import utcnow


@click.group()
@dbfile_option
@log_dir_option
@config_option
@verbose_option
@click.version_option(package_name="punch")
@click.pass_context
def cli(ctx, dbfile, log_dir, config_path, verbose):
    """A cli based time logger."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = load_config(Path(config_path).expanduser()).merged(dbfile, log_dir)
    except PunchError as e:
        handle_cli_error(ctx, e, "load_config", {"config": config_path})

    ctx.obj["config"] = config
    ctx.obj.setdefault("clock", utcnow)
    ctx.obj.setdefault("tz", None)

    logger = PunchLogger(config.log_dir, component_name="cli", verbose=verbose)
    ctx.obj["logger"] = logger
    ctx.call_on_close(lambda: _close(ctx))


def _close(ctx) -> None:
    db = ctx.obj.pop("db", None)
    if db is not None:
        db.dispose()
    logger = ctx.obj.get("logger")
    if logger is not None:
        logger.close()


def get_db(ctx, migrate: bool = True) -> PunchDB:
    """Get or create the database instance for this invocation."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = PunchDB(
            db_path=ctx.obj["config"].db_path,
            logger=ctx.obj["logger"],
            migrate=migrate,
        )
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .tracking import start, stop, status  # noqa: E402
from .reports import log, summarize  # noqa: E402
from .importing import import_frames  # noqa: E402
from .migration import migrate  # noqa: E402

cli.add_command(start)
cli.add_command(stop)
cli.add_command(status)
cli.add_command(log)
cli.add_command(summarize)
cli.add_command(import_frames)
cli.add_command(migrate)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
