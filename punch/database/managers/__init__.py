#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the punch ledger store.

Each manager wraps one live session and exposes the entity-scoped
operations for one table, inheriting from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    ProjectManager: Project lookup / creation
    TagManager: Per-project tag lookup / creation
    TimesliceManager: Slice creation, closing, tag assignment, open lookup

Usage:
    from punch.database.managers import ProjectManager, TagManager

    project = ProjectManager(session, logger).get_or_create("website")
    tag = TagManager(session, logger).get_or_create("backend", project.id)
"""
from .base_manager import BaseManager
from .project_manager import ProjectManager
from .tag_manager import TagManager, unique_titles
from .timeslice_manager import OpenTimeslice, TimesliceManager

__all__ = [
    "BaseManager",
    "ProjectManager",
    "TagManager",
    "TimesliceManager",
    "OpenTimeslice",
    "unique_titles",
]
