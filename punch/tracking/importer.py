#!/usr/bin/env python3
"""
importer.py
-----------
Bulk import of Watson frames.

A Watson ``frames`` file is a JSON array whose items are 6-element
arrays::

    [start, stop, project, id, tags, updated_at]
      0      1      2      3    4       5

``start``/``stop``/``updated_at`` are Unix epoch seconds. Each frame
becomes one closed timeslice; projects and tags are resolved or created
exactly as ``punch start`` would. The whole file is imported in one
transaction: the first malformed frame aborts the import and nothing is
written.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import math
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

# --- Local imports ---
from punch.core.exceptions import MalformedInput, ValidationError
from punch.core.logging_manager import PunchLogger, safe_logger
from punch.database.decorators import log_database_operation
from punch.database.manager import PunchDB
from punch.database.managers import unique_titles
from punch.utils.timefmt import from_epoch

FRAME_FIELDS = ("start", "stop", "project", "id", "tags", "updated_at")


@dataclass(frozen=True)
class Frame:
    """A decoded Watson frame."""

    start: datetime
    stop: datetime
    project: str
    frame_id: str
    tags: Tuple[str, ...]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    # Large ints overflow float conversion; from_epoch range-checks them
    return isinstance(value, int) or math.isfinite(value)


def decode_frame(raw: Any, index: int) -> Frame:
    """
    Validate one raw frame and convert it.

    Raises:
        MalformedInput: If the frame does not have the expected shape
    """
    if not isinstance(raw, list) or len(raw) != len(FRAME_FIELDS):
        raise MalformedInput(
            f"expected an array of {len(FRAME_FIELDS)} fields {FRAME_FIELDS}", index
        )

    start, stop, project, frame_id, tags, _updated_at = raw

    if not _is_number(start) or not _is_number(stop):
        raise MalformedInput("start and stop must be finite epoch seconds", index)
    if stop < start:
        raise MalformedInput("stop is before start", index)
    if not isinstance(project, str) or not project.strip():
        raise MalformedInput("project must be a non-empty string", index)
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise MalformedInput("tags must be an array of strings", index)

    try:
        tag_titles = unique_titles(tags)
    except ValidationError as e:
        raise MalformedInput(str(e), index) from e

    try:
        start_on, stop_on = from_epoch(start), from_epoch(stop)
    except (OverflowError, ValueError) as e:
        raise MalformedInput(f"epoch seconds out of range: {e}", index) from e

    return Frame(
        start=start_on,
        stop=stop_on,
        project=project.strip(),
        frame_id=str(frame_id),
        tags=tuple(tag_titles),
    )


def read_frames(path: Union[str, Path]) -> List[Frame]:
    """
    Read and decode every frame of a Watson file.

    Raises:
        MalformedInput: If the file is not JSON, not an array, or holds a
            malformed frame
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedInput(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedInput(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedInput(f"{path}: expected a JSON array of frames")

    return [decode_frame(raw, index) for index, raw in enumerate(data)]


class WatsonImporter:
    """
    Writes Watson frames into a PunchDB.

    Attributes:
        db: Target store
        logger: Optional logger
    """

    def __init__(self, db: PunchDB, logger: Optional[PunchLogger] = None) -> None:
        self.db = db
        self.logger = logger

    def import_frames(self, frames: List[Frame]) -> int:
        """
        Store frames as closed timeslices in a single transaction.

        Returns:
            Number of frames imported
        """
        log = safe_logger(self.logger)
        with self.db.session_scope():
            for frame in frames:
                project = self.db.projects.get_or_create(frame.project)
                timeslice = self.db.timeslices.create(project.id, frame.start, frame.stop)
                for title in frame.tags:
                    tag = self.db.tags.get_or_create(title, project.id)
                    self.db.timeslices.assign_tag(tag.id, timeslice.id)
                log.log_debug(
                    "frame_imported",
                    {"frame_id": frame.frame_id, "timeslice_id": timeslice.id},
                )
        return len(frames)

    @log_database_operation("import_watson_file")
    def import_file(self, path: Union[str, Path]) -> int:
        """
        Decode ``path`` and import all of its frames.

        Decoding finishes before the transaction opens, so a malformed
        frame never leaves a partial import.

        Raises:
            MalformedInput: If the file or any frame is malformed
            DatabaseError: If the store rejects a write (rolled back)
        """
        return self.import_frames(read_frames(path))
