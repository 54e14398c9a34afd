#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Lookup and creation of Tag rows.

A tag belongs to exactly one project; the same text under two projects
is two independent tags. Tags are immutable once created.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from punch.database.decorators import handle_db_errors, log_database_operation
from punch.database.models import Tag
from .base_manager import BaseManager


def unique_titles(titles: Iterable[str]) -> List[str]:
    """
    Normalize tag titles and drop repeats, keeping first-seen order.

    Raises:
        ValidationError: If any title is blank
    """
    seen = []
    for title in titles:
        normalized = BaseManager._normalize_title(title, "Tag")
        if normalized not in seen:
            seen.append(normalized)
    return seen


class TagManager(BaseManager):
    """Manages Tag entities within one session."""

    def find(self, title: str, project_id: int) -> Optional[Tag]:
        """Tag with this exact title under ``project_id``, or None."""
        return self._get_by_fields(
            Tag, title=self._normalize_title(title, "Tag"), project_id=project_id
        )

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, title: str, project_id: int) -> Tag:
        """
        Insert a tag under a project.

        Raises:
            ValidationError: If the title is blank
            ConstraintViolation: If the pair already exists or the project
                does not
        """
        tag = Tag(title=self._normalize_title(title, "Tag"), project_id=project_id)
        self.session.add(tag)
        self.session.flush()
        return tag

    def get_or_create(self, title: str, project_id: int) -> Tag:
        tag = self.find(title, project_id)
        if tag is not None:
            return tag
        return self.create(title, project_id)

    def count(self, project_id: Optional[int] = None) -> int:
        if project_id is None:
            return self._count(Tag)
        return self._count(Tag, project_id=project_id)
