"""Tests for the ban registry."""

import tempfile

import pytest

from courseboard.access.bans import BanRegistry
from courseboard.access.identity import IdentityRegistry
from courseboard.access.store import AccessStore
from courseboard.errors import UnAuthorized
from courseboard.store import CourseStore


def _setup(tmpdir: str) -> tuple[BanRegistry, CourseStore]:
    access = AccessStore(tmpdir)
    courses = CourseStore(tmpdir)
    identity = IdentityRegistry(access)
    identity.set_admin("root", "root")
    identity.add_moderator("root", "mod")
    return BanRegistry(access, courses), courses


def _add(courses: CourseStore, creator: str) -> None:
    courses.insert(title="T", creator_name="N", creator_address=creator, body="B")


def test_only_authorized_can_ban():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, _ = _setup(tmpdir)
        with pytest.raises(UnAuthorized):
            bans.ban_creator("stranger", "spammer")
        assert not bans.is_banned("spammer")

        bans.ban_creator("mod", "spammer")
        assert bans.is_banned("spammer")


def test_ban_removes_courses_of_target_only():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, courses = _setup(tmpdir)
        _add(courses, "spammer")
        _add(courses, "u1")
        _add(courses, "spammer")

        removed = bans.ban_creator("root", "spammer")
        assert [c.id for c in removed] == [1, 3]
        assert [c.creator_address for c in courses.list_all()] == ["u1"]


def test_ban_without_courses_still_bans():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, _ = _setup(tmpdir)
        assert bans.ban_creator("root", "newcomer") == []
        assert bans.is_banned("newcomer")


def test_banning_twice_keeps_one_entry():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, _ = _setup(tmpdir)
        bans.ban_creator("root", "spammer")
        bans.ban_creator("root", "spammer")
        assert bans.list_banned() == ["spammer"]


def test_admin_and_moderators_cannot_be_banned():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, courses = _setup(tmpdir)
        _add(courses, "mod")
        with pytest.raises(UnAuthorized):
            bans.ban_creator("root", "mod")
        with pytest.raises(UnAuthorized):
            bans.ban_creator("mod", "root")
        assert len(courses) == 1
        assert bans.list_banned() == []


def test_unban():
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, _ = _setup(tmpdir)
        bans.ban_creator("root", "spammer")

        with pytest.raises(UnAuthorized):
            bans.unban_creator("spammer", "spammer")
        bans.unban_creator("mod", "spammer")
        assert not bans.is_banned("spammer")
        # Absent address is a no-op
        bans.unban_creator("mod", "spammer")


def test_failed_ban_write_restores_courses(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        bans, courses = _setup(tmpdir)
        _add(courses, "spammer")
        _add(courses, "u1")
        _add(courses, "spammer")

        def failing_save(self, state):
            raise OSError("disk full")

        monkeypatch.setattr(AccessStore, "save", failing_save)
        with pytest.raises(OSError):
            bans.ban_creator("root", "spammer")
        monkeypatch.undo()

        assert not bans.is_banned("spammer")
        assert [(c.id, c.creator_address) for c in courses.list_all()] == [
            (1, "spammer"),
            (2, "u1"),
            (3, "spammer"),
        ]
        assert courses.next_id == 4
