"""
Import Command
--------------

Bulk import of Watson frames. The whole file goes in one transaction;
a malformed frame aborts it with nothing written.
"""
import click

from punch.core.exceptions import PunchError
from punch.core.logging_manager import handle_cli_error
from punch.tracking import WatsonImporter
from . import get_db


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_frames(ctx, file):
    """Import frames from a Watson FILE."""
    click.echo(f"Importing from file: {file}")
    try:
        count = WatsonImporter(get_db(ctx), logger=ctx.obj["logger"]).import_file(file)
    except PunchError as e:
        handle_cli_error(ctx, e, "import", {"file": file})

    click.echo(f"Imported {count} frames")
