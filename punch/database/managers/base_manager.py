#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing the helpers shared by all entity managers.

Key Features:
    - Bound to one live session (the caller's transaction)
    - Generic lookup / count utilities
    - Title normalization and validation
    - Consistent logging via an optional PunchLogger

Usage:
    class ProjectManager(BaseManager):
        def find_by_title(self, title: str) -> Optional[Project]:
            return self._get_by_fields(Project, title=title)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from punch.core.exceptions import ValidationError
from punch.core.logging_manager import PunchLogger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager.

    Managers never commit: the session's owner (``PunchDB.session_scope``)
    decides when the transaction ends. Writes are flushed immediately so
    that generated ids are available and constraint errors surface at the
    call that caused them.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[PunchLogger] = None):
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize_title(value: Any, what: str) -> str:
        """
        Strip surrounding whitespace from a title.

        Matching stays case-sensitive; only the edges are trimmed.

        Raises:
            ValidationError: If the value is not a string or is blank
        """
        if not isinstance(value, str):
            raise ValidationError(f"{what} title must be a string, got {type(value).__name__}")
        title = value.strip()
        if not title:
            raise ValidationError(f"{what} title cannot be empty")
        return title

    def _get_by_fields(self, model_class: Type[T], **fields: Any) -> Optional[T]:
        """First row matching all ``fields`` exactly, or None."""
        return self.session.scalars(
            select(model_class).filter_by(**fields).limit(1)
        ).first()

    def _count(self, model_class: Type[T], **filters: Any) -> int:
        query = select(func.count()).select_from(model_class)
        if filters:
            query = query.filter_by(**filters)
        return self.session.scalar(query) or 0
