"""
Association Tables
-------------------

Many-to-many join between timeslices and tags.

Rows are written once when a slice is started (or imported) and never
updated. There is no uniqueness constraint; callers de-duplicate the tag
list before assigning.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base

timeslice_tag = Table(
    "timeslice_tag",
    Base.metadata,
    Column("tag_id", Integer, ForeignKey("tag.id"), nullable=False),
    Column("timeslice_id", Integer, ForeignKey("timeslice.id"), nullable=False),
)
