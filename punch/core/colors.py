#!/usr/bin/env python3
"""
colors.py
---------
Terminal color roles for report output.

All styling goes through ``click.style`` so that ``click.echo`` strips
the escape codes automatically when output is not a terminal.
"""
import click


def heading(text: str) -> str:
    return click.style(text, bold=True)


def project(text: str) -> str:
    return click.style(text, fg="magenta")


def time(text: str) -> str:
    return click.style(text, fg="green")


def duration(text: str) -> str:
    return click.style(text, fg="white")


def tag(text: str) -> str:
    return click.style(text, fg="bright_magenta")
