"""
Database Models Package
------------------------

SQLAlchemy ORM models for the punch ledger.

- base: Declarative base
- associations: timeslice_tag join table
- core: Project, Tag, Timeslice
- migrations: SchemaMigration records

Usage:
    from punch.database.models import Project, Tag, Timeslice
"""
from .base import Base
from .associations import timeslice_tag
from .core import Project, Tag, Timeslice
from .migrations import SchemaMigration

__all__ = [
    "Base",
    "timeslice_tag",
    "Project",
    "Tag",
    "Timeslice",
    "SchemaMigration",
]
