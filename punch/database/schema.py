#!/usr/bin/env python3
"""
schema.py
---------
The ordered list of migrations that build the punch ledger.

Migrations are frozen once released: never edit one, append a new
ordinal instead. They spell out their DDL rather than deriving it from
the ORM models so that an old migration keeps producing the same shape
after the models move on.
"""
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from .migration_engine import Migration


def _initial_structure(conn: Connection) -> None:
    conn.execute(text(
        """
        CREATE TABLE project (
            id INTEGER PRIMARY KEY NOT NULL,
            title TEXT NOT NULL,
            CONSTRAINT uq_project_title UNIQUE (title)
        )
        """
    ))
    conn.execute(text(
        """
        CREATE TABLE tag (
            id INTEGER PRIMARY KEY NOT NULL,
            title TEXT NOT NULL,
            project_id INTEGER NOT NULL,
            FOREIGN KEY (project_id) REFERENCES project (id),
            CONSTRAINT uq_tag_title_project UNIQUE (title, project_id)
        )
        """
    ))
    conn.execute(text(
        """
        CREATE TABLE timeslice (
            id INTEGER PRIMARY KEY NOT NULL,
            project_id INTEGER NOT NULL,
            started_on TEXT NOT NULL,
            stopped_on TEXT,
            FOREIGN KEY (project_id) REFERENCES project (id)
        )
        """
    ))
    conn.execute(text(
        """
        CREATE TABLE timeslice_tag (
            tag_id INTEGER NOT NULL,
            timeslice_id INTEGER NOT NULL,
            FOREIGN KEY (tag_id) REFERENCES tag (id),
            FOREIGN KEY (timeslice_id) REFERENCES timeslice (id)
        )
        """
    ))


def _index_stopped_on(conn: Connection) -> None:
    conn.execute(text(
        "CREATE INDEX ix_timeslice_stopped_on ON timeslice (stopped_on)"
    ))
    conn.execute(text(
        "CREATE INDEX ix_timeslice_tag_timeslice ON timeslice_tag (timeslice_id)"
    ))


def _single_open_timeslice(conn: Connection) -> None:
    # Every open row indexes the same value, so a second one is rejected
    conn.execute(text(
        """
        CREATE UNIQUE INDEX ux_timeslice_single_open
        ON timeslice ((stopped_on IS NULL))
        WHERE stopped_on IS NULL
        """
    ))


MIGRATIONS: List[Migration] = [
    Migration(1, _initial_structure, "initial structure"),
    Migration(2, _index_stopped_on, "index timeslice stop time"),
    Migration(3, _single_open_timeslice, "at most one running timeslice"),
]
