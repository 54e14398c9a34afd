#!/usr/bin/env python3
"""
cli_options.py
-------------------
Reusable Click option decorators for the punch command group.

Usage:
    from punch.core.cli_options import verbose_option, all_option

    @cli.command()
    @all_option("Show every recorded slice")
    def log(show_all):
        pass
"""
import click

from punch.core.paths import CONFIG_PATH


# ═══════════════════════════════════════════════════════════════════════════
# GLOBAL OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

verbose_option = click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable logging of debug messages and show tracebacks on errors",
)

dbfile_option = click.option(
    "-f", "--dbfile",
    type=click.Path(dir_okay=False),
    default=None,
    help="Database file to use (default: from config, else the XDG data dir)",
)

log_dir_option = click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for log files",
)

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=str(CONFIG_PATH),
    show_default=True,
    help="YAML configuration file",
)


# ═══════════════════════════════════════════════════════════════════════════
# REPORT OPTIONS (FACTORIES)
# ═══════════════════════════════════════════════════════════════════════════

def all_option(help_text: str):
    """
    Factory for the ``--all`` flag shared by report commands.

    The flag is passed to the command as ``show_all``.
    """
    return click.option("--all", "show_all", is_flag=True, help=help_text)
