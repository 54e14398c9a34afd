"""
Base Classes
------------

Declarative base shared by all punch ORM models.

Tables are created by the migration engine (see ``punch.database.schema``),
never by ``Base.metadata.create_all``; the models only describe the shape
the migrations build.
"""
# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
