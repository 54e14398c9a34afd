"""
Migration Records
-----------------

One row per applied schema migration. The existence of a row for an
ordinal is the only signal the migration engine uses to skip it.
"""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from punch.database.types import UTCDateTime
from .base import Base


class SchemaMigration(Base):
    """
    Record of an applied migration.

    Attributes:
        id: Migration ordinal (primary key)
        executed_on: When the migration was committed
    """

    __tablename__ = "schema_migrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    executed_on: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<SchemaMigration(id={self.id}, executed_on={self.executed_on})>"
