#!/usr/bin/env python3
"""
project_manager.py
------------------
Lookup and creation of Project rows.

Projects are created the first time a title is referenced and never
deleted. Titles match exactly: ``Website`` and ``website`` are two
projects.
"""
from __future__ import annotations

from typing import Optional

from punch.database.decorators import handle_db_errors, log_database_operation
from punch.database.models import Project
from .base_manager import BaseManager


class ProjectManager(BaseManager):
    """Manages Project entities within one session."""

    def find_by_title(self, title: str) -> Optional[Project]:
        """
        Exact-match lookup.

        Returns:
            The project, or None if no project has that title
        """
        return self._get_by_fields(Project, title=self._normalize_title(title, "Project"))

    @handle_db_errors
    @log_database_operation("create_project")
    def create(self, title: str) -> Project:
        """
        Insert a new project.

        Raises:
            ValidationError: If the title is blank
            ConstraintViolation: If the title already exists
        """
        project = Project(title=self._normalize_title(title, "Project"))
        self.session.add(project)
        self.session.flush()
        return project

    def get_or_create(self, title: str) -> Project:
        """
        Resolve a project by title, creating it on first reference.

        The check-then-create pair is not atomic against other processes;
        punch assumes a single writer.
        """
        project = self.find_by_title(title)
        if project is not None:
            return project
        return self.create(title)

    def count(self) -> int:
        return self._count(Project)
