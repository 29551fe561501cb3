"""File-based JSON storage for course records.

Storage path: ``<home>/courses.json`` holding the key counter next to the
record table::

    {"next_id": 3, "courses": [{"id": 1, ...}, {"id": 2, ...}]}

Keys come from the counter, never from the table size, so a deleted key is
never handed out again.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Iterator, Optional

from courseboard.config import default_home
from courseboard.jsonfile import read_object, write_object
from courseboard.models import Course

logger = logging.getLogger(__name__)


class CourseStore:
    """Monotonically keyed course table."""

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self._base = Path(base_dir) if base_dir else default_home()
        self._base.mkdir(parents=True, exist_ok=True)
        self._path = self._base / "courses.json"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self) -> tuple[int, dict[int, Course]]:
        data = read_object(self._path)
        if data is None:
            return 1, {}
        courses: dict[int, Course] = {}
        for d in data.get("courses", []):
            try:
                course = _course_from_dict(d)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed course record in %s: %r", self._path.name, d)
                continue
            courses[course.id] = course
        next_id = max(int(data.get("next_id", 1)), max(courses, default=0) + 1)
        return next_id, courses

    def _write(self, next_id: int, courses: dict[int, Course]) -> None:
        write_object(
            self._path,
            {
                "next_id": next_id,
                "courses": [asdict(courses[key]) for key in sorted(courses)],
            },
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, course_id: int) -> Optional[Course]:
        _, courses = self._read()
        return courses.get(course_id)

    def list_all(self) -> list[Course]:
        """Return every course in ascending key order."""
        _, courses = self._read()
        return [courses[key] for key in sorted(courses)]

    def __iter__(self) -> Iterator[Course]:
        return iter(self.list_all())

    def __len__(self) -> int:
        _, courses = self._read()
        return len(courses)

    @property
    def next_id(self) -> int:
        return self._read()[0]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, **fields: str) -> Course:
        """Allocate the next key, persist a new course built from *fields*."""
        next_id, courses = self._read()
        course = Course(id=next_id, **fields)
        courses[course.id] = course
        self._write(next_id + 1, courses)
        return course

    def replace(self, course: Course) -> Course:
        """Overwrite an existing record under its own key."""
        next_id, courses = self._read()
        if course.id not in courses:
            raise KeyError(course.id)
        courses[course.id] = course
        self._write(next_id, courses)
        return course

    def remove(self, course_id: int) -> Optional[Course]:
        next_id, courses = self._read()
        course = courses.pop(course_id, None)
        if course is not None:
            self._write(next_id, courses)
        return course

    def remove_by_creator(self, creator_address: str) -> list[Course]:
        """Remove every course created by *creator_address* in one write."""
        next_id, courses = self._read()
        removed = [courses[key] for key in sorted(courses) if courses[key].creator_address == creator_address]
        if removed:
            for course in removed:
                del courses[course.id]
            self._write(next_id, courses)
        return removed

    def restore(self, removed: list[Course]) -> None:
        """Put previously removed records back under their original keys."""
        if not removed:
            return
        next_id, courses = self._read()
        for course in removed:
            courses[course.id] = course
        self._write(next_id, courses)


def _course_from_dict(d: dict) -> Course:
    return Course(
        id=int(d["id"]),
        title=d.get("title", ""),
        creator_name=d.get("creator_name", ""),
        creator_address=d.get("creator_address", ""),
        body=d.get("body", ""),
        attachment_url=d.get("attachment_url", ""),
        keyword=d.get("keyword", ""),
        category=d.get("category", ""),
        contact=d.get("contact", ""),
        created_at=d.get("created_at", ""),
        updated_at=d.get("updated_at", ""),
    )
