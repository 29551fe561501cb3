"""AND / OR filtering of courses against optional criteria.

Each present criterion is an exact, case-sensitive equality test against the
course field of the same name (``keyword`` included, no substring matching).

- AND: every present criterion matches. No criteria matches everything.
- OR: at least one present criterion matches. No criteria matches nothing.
"""

from __future__ import annotations

from typing import Iterable

from courseboard.models import Course, FilterCriteria, FilterMode


def matches(course: Course, criteria: FilterCriteria, mode: FilterMode = FilterMode.AND) -> bool:
    """Return True if *course* satisfies *criteria* under *mode*."""
    checks = (getattr(course, name) == value for name, value in criteria.present().items())
    if FilterMode(mode) is FilterMode.AND:
        return all(checks)
    return any(checks)


def filter_courses(
    courses: Iterable[Course],
    criteria: FilterCriteria,
    mode: FilterMode = FilterMode.AND,
) -> list[Course]:
    """Scan *courses* once and keep the matches, preserving input order."""
    return [course for course in courses if matches(course, criteria, mode)]
