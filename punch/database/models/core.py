"""
Core Models
------------

Ledger entities.

Models:
    - Project: Named bucket of work, unique by exact title
    - Tag: Free-form label scoped to one project
    - Timeslice: One recorded interval of work

All rows are owned by the store; the ORM instances are short-lived
projections that reference each other only through foreign keys.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from punch.database.types import UTCDateTime
from .associations import timeslice_tag
from .base import Base


class Project(Base):
    """
    A project that timeslices and tags belong to.

    Created the first time its title is referenced; never deleted.
    Title matching is exact and case-sensitive.

    Attributes:
        id: Primary key
        title: Unique project title
    """

    __tablename__ = "project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String, unique=True, nullable=False)

    tags: Mapped[List["Tag"]] = relationship(
        "Tag", back_populates="project", order_by="Tag.id"
    )
    timeslices: Mapped[List["Timeslice"]] = relationship(
        "Timeslice", back_populates="project"
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title='{self.title}')>"


class Tag(Base):
    """
    Label attached to timeslices of a single project.

    The same text may exist independently under different projects, so
    uniqueness is on ``(title, project_id)``. Immutable once created.

    Attributes:
        id: Primary key
        title: Tag text
        project_id: Owning project
    """

    __tablename__ = "tag"
    __table_args__ = (
        UniqueConstraint("title", "project_id", name="uq_tag_title_project"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project.id"), nullable=False
    )

    project: Mapped["Project"] = relationship("Project", back_populates="tags")

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, title='{self.title}', project_id={self.project_id})>"


class Timeslice(Base):
    """
    A recorded interval of work.

    ``stopped_on`` is NULL while the slice is running. At most one row in
    the whole store may be running at any time.

    Attributes:
        id: Primary key
        project_id: Owning project
        started_on: Start instant (aware, UTC)
        stopped_on: Stop instant, or None while running

    Relationships:
        project: Many-to-one with Project
        tags: Many-to-many with Tag, read-only (written via timeslice_tag)
    """

    __tablename__ = "timeslice"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project.id"), nullable=False
    )
    started_on: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    stopped_on: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)

    project: Mapped["Project"] = relationship("Project", back_populates="timeslices")
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=timeslice_tag, order_by="Tag.id", viewonly=True
    )

    @property
    def is_running(self) -> bool:
        return self.stopped_on is None

    @property
    def duration(self) -> Optional[timedelta]:
        """Wall-clock length of a closed slice, None while running."""
        if self.stopped_on is None:
            return None
        return self.stopped_on - self.started_on

    def __repr__(self) -> str:
        return (
            f"<Timeslice(id={self.id}, project_id={self.project_id}, "
            f"started_on={self.started_on}, stopped_on={self.stopped_on})>"
        )
