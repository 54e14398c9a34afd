#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Punch time ledger.

Exception Hierarchy:
    Exception (built-in)
    └── PunchError - Base for everything raised on purpose by punch
        ├── DatabaseError - Store-related errors
        │   ├── ConstraintViolation - Uniqueness / foreign key rule broken
        │   ├── MigrationFailure - A schema migration failed and was rolled back
        │   └── TimesliceNotOpen - Attempt to close a slice that is not running
        ├── ValidationError - Data validation failures
        │   └── MalformedInput - Import data with an unexpected shape
        └── ConfigError - Invalid configuration file

Lookups that find nothing return None; there is no NotFound exception.

Usage:
    from punch.core.exceptions import DatabaseError, MalformedInput

    try:
        importer.import_file(path)
    except MalformedInput as e:
        logger.error(f"Import aborted: {e}")
"""
from typing import Optional


class PunchError(Exception):
    """Base class for all punch errors."""

    pass


class DatabaseError(PunchError):
    """
    Base exception for database-related errors.

    Raised when store operations fail due to connection issues,
    query errors, integrity violations, or other database problems.
    """

    pass


class ConstraintViolation(DatabaseError):
    """
    A write broke a uniqueness or foreign-key rule.

    Examples:
        >>> raise ConstraintViolation("project title 'website' already exists")
    """

    pass


class MigrationFailure(DatabaseError):
    """
    A migration's transformation failed mid-transaction.

    The transaction is rolled back, so the store is left exactly as it
    was before the failing migration and the run can be retried once the
    cause is fixed.

    Attributes:
        ordinal: Ordinal of the migration that failed
    """

    def __init__(self, ordinal: int, message: str) -> None:
        self.ordinal = ordinal
        super().__init__(f"Migration #{ordinal} failed: {message}")


class TimesliceNotOpen(DatabaseError):
    """Raised when closing a timeslice that is missing or already stopped."""

    pass


class ValidationError(PunchError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Empty project or tag titles
    - Naive datetimes where an aware one is required
    - Type mismatches
    """

    pass


class MalformedInput(ValidationError):
    """
    Import data that does not decode into the expected frame shape.

    Attributes:
        frame_index: Zero-based index of the offending frame, or None when
            the file as a whole could not be decoded
    """

    def __init__(self, message: str, frame_index: Optional[int] = None) -> None:
        self.frame_index = frame_index
        if frame_index is not None:
            message = f"frame {frame_index}: {message}"
        super().__init__(message)


class ConfigError(PunchError):
    """Invalid or unreadable configuration file."""

    pass
