"""The course board: one entry point per public operation.

Every mutation consults the authorization policy (or the ban registry, for
creation) before touching the course store. Each call either commits its
whole effect or raises a ``CourseBoardError`` and commits nothing.

Typical use::

    board = CourseBoard(base_dir="/tmp/board")
    board.set_admin("alice", "alice")
    course = board.add_course("bob", CoursePayload(title="T", creator_name="Bob", body="B"))
    board.filter_courses(FilterCriteria(category="math"), FilterMode.OR)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterator, Optional

from courseboard import filters
from courseboard.access import policy
from courseboard.access.bans import BanRegistry
from courseboard.access.identity import IdentityRegistry
from courseboard.access.store import AccessStore
from courseboard.audit import AuditLogger
from courseboard.config import default_home
from courseboard.errors import BannedUser, CourseBoardError, EmptyFields, NotFound, UnAuthorized
from courseboard.models import (
    Course,
    CoursePayload,
    CourseUpdatePayload,
    FilterCriteria,
    FilterMode,
    utc_now,
)
from courseboard.store import CourseStore

logger = logging.getLogger(__name__)


class CourseBoard:
    """Permissioned course store backed by a data directory."""

    def __init__(self, base_dir: Optional[str | Path] = None, audit: bool = True) -> None:
        self.base_dir = Path(base_dir) if base_dir else default_home()
        self._access = AccessStore(self.base_dir)
        self.courses = CourseStore(self.base_dir)
        self.identity = IdentityRegistry(self._access)
        self.bans = BanRegistry(self._access, self.courses)
        self.audit = AuditLogger(self.base_dir / "audit_logs") if audit else None

    @contextmanager
    def _audited(
        self, actor: str, action: str, resource_type: str, resource_id: Any = ""
    ) -> Iterator[dict[str, Any]]:
        details: dict[str, Any] = {}
        try:
            yield details
        except CourseBoardError as exc:
            logger.info("%s by %s refused: %s", action, actor, exc.msg)
            details["error"] = exc.kind
            self._record(actor, action, resource_type, resource_id, details, success=False)
            raise
        self._record(actor, action, resource_type, resource_id, details)

    def _record(
        self,
        actor: str,
        action: str,
        resource_type: str,
        resource_id: Any,
        details: dict[str, Any],
        success: bool = True,
    ) -> None:
        # A failed audit write never changes the outcome of the audited call
        if self.audit is None:
            return
        try:
            self.audit.log_event(
                actor, action, resource_type, str(resource_id), details, success=success
            )
        except OSError:
            logger.exception("Audit write failed for %s by %s", action, actor)

    # ------------------------------------------------------------------
    # Identity registry
    # ------------------------------------------------------------------

    def set_admin(self, caller: str, new_admin: str) -> None:
        with self._audited(caller, "set_admin", "admin", new_admin):
            self.identity.set_admin(caller, new_admin)

    def add_moderator(self, caller: str, address: str) -> None:
        with self._audited(caller, "add_moderator", "moderator", address):
            self.identity.add_moderator(caller, address)

    def remove_moderator(self, caller: str, address: str) -> None:
        with self._audited(caller, "remove_moderator", "moderator", address):
            self.identity.remove_moderator(caller, address)

    def is_admin(self, address: str) -> bool:
        return self.identity.is_admin(address)

    def is_authorized(self, address: str) -> bool:
        return self.identity.is_authorized(address)

    # ------------------------------------------------------------------
    # Ban registry
    # ------------------------------------------------------------------

    def is_banned(self, address: str) -> bool:
        return self.bans.is_banned(address)

    def ban_creator(self, caller: str, address: str) -> list[Course]:
        with self._audited(caller, "ban_creator", "creator", address) as details:
            removed = self.bans.ban_creator(caller, address)
            details["deleted_courses"] = [c.id for c in removed]
        return removed

    def unban_creator(self, caller: str, address: str) -> None:
        with self._audited(caller, "unban_creator", "creator", address):
            self.bans.unban_creator(caller, address)

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------

    def get_course(self, course_id: int) -> Course:
        course = self.courses.get(course_id)
        if course is None:
            raise NotFound(f"a course with id={course_id} not found")
        return course

    def list_courses(self) -> list[Course]:
        return self.courses.list_all()

    def add_course(self, caller: str, payload: CoursePayload) -> Course:
        with self._audited(caller, "add_course", "course") as details:
            if self.bans.is_banned(caller):
                raise BannedUser("User is banned. Cannot add course")
            missing = payload.missing_fields()
            if missing:
                raise EmptyFields(
                    f"Please fill in all the required fields to create a course: {', '.join(missing)}"
                )
            course = self.courses.insert(
                title=payload.title,
                creator_name=payload.creator_name,
                creator_address=caller,
                body=payload.body,
                attachment_url=payload.attachment_url,
                keyword=payload.keyword,
                category=payload.category,
                contact=payload.contact,
            )
            details["course_id"] = course.id
        logger.info("Course %d created by %s", course.id, caller)
        return course

    def update_course(self, caller: str, course_id: int, payload: CourseUpdatePayload) -> Course:
        with self._audited(caller, "update_course", "course", course_id) as details:
            course = self.courses.get(course_id)
            if course is None:
                raise NotFound(f"couldn't update a course with id={course_id}. course not found")
            if not policy.is_allowed(self._access.load(), caller, course):
                raise UnAuthorized(f"You are not authorized to update course with id={course_id}")

            changes = payload.changes()
            updated = replace(course, **changes, updated_at=utc_now())
            missing = updated.missing_fields()
            if missing:
                raise EmptyFields(f"Required fields cannot be emptied: {', '.join(missing)}")
            self.courses.replace(updated)
            details["fields"] = sorted(changes)
        return updated

    def delete_course(self, caller: str, course_id: int) -> Course:
        with self._audited(caller, "delete_course", "course", course_id):
            course = self.courses.get(course_id)
            if course is None:
                raise NotFound(f"couldn't delete a course with id={course_id}. course not found")
            if not policy.is_allowed(self._access.load(), caller, course):
                raise UnAuthorized(f"You are not authorized to delete course with id={course_id}")
            self.courses.remove(course_id)
        return course

    def delete_my_courses(self, caller: str) -> int:
        with self._audited(caller, "delete_my_courses", "creator", caller) as details:
            removed = self.courses.remove_by_creator(caller)
            details["deleted_courses"] = [c.id for c in removed]
        return len(removed)

    def delete_courses_by_creator(self, caller: str, target: str) -> int:
        with self._audited(caller, "delete_courses_by_creator", "creator", target) as details:
            if not self.identity.is_authorized(caller):
                raise UnAuthorized("You are not authorized to delete the courses of another creator")
            removed = self.courses.remove_by_creator(target)
            details["deleted_courses"] = [c.id for c in removed]
        return len(removed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter_courses(
        self, criteria: FilterCriteria, mode: FilterMode = FilterMode.AND
    ) -> list[Course]:
        return filters.filter_courses(self.courses, criteria, mode)

    def filter_courses_and(self, criteria: FilterCriteria) -> list[Course]:
        return self.filter_courses(criteria, FilterMode.AND)

    def filter_courses_or(self, criteria: FilterCriteria) -> list[Course]:
        return self.filter_courses(criteria, FilterMode.OR)
