"""
Schema Command
--------------

Every command migrates the store on open; ``migrate`` does it explicitly
and lists what has been applied.
"""
import click

from punch.core.exceptions import PunchError
from punch.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def migrate(ctx):
    """Bring the database schema up to date."""
    try:
        db = get_db(ctx, migrate=False)
        applied = db.migrate()
        history = db.migration_history()
    except PunchError as e:
        handle_cli_error(ctx, e, "migrate")

    if applied:
        click.echo(f"Applied migrations: {', '.join(str(o) for o in applied)}")
    else:
        click.echo("Schema up to date")

    for ordinal, executed_on in history:
        click.echo(f"  #{ordinal}  {executed_on.isoformat()}")
