"""Tests for the course table and its key counter."""

import json
import tempfile
from pathlib import Path

import pytest

from courseboard.errors import StorageError
from courseboard.store import CourseStore


def _fields(creator: str = "u1", **overrides) -> dict:
    data = {
        "title": "Intro",
        "creator_name": "User One",
        "creator_address": creator,
        "body": "Lesson body",
    }
    data.update(overrides)
    return data


def test_keys_start_at_one_and_increase():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        first = store.insert(**_fields())
        second = store.insert(**_fields())
        assert first.id == 1
        assert second.id == 2
        assert first.created_at


def test_keys_are_never_reused():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        store.insert(**_fields())
        second = store.insert(**_fields())
        store.remove(second.id)
        store.remove(1)
        assert len(store) == 0

        third = store.insert(**_fields())
        assert third.id == 3


def test_get_and_remove_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        assert store.get(42) is None
        assert store.remove(42) is None


def test_list_all_in_key_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        for title in ("a", "b", "c"):
            store.insert(**_fields(title=title))
        assert [c.title for c in store.list_all()] == ["a", "b", "c"]
        assert [c.id for c in store] == [1, 2, 3]


def test_remove_by_creator():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        store.insert(**_fields("u1"))
        store.insert(**_fields("u2"))
        store.insert(**_fields("u1"))

        removed = store.remove_by_creator("u1")
        assert [c.id for c in removed] == [1, 3]
        assert [c.id for c in store.list_all()] == [2]
        assert store.remove_by_creator("nobody") == []


def test_table_survives_reload():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        store.insert(**_fields(keyword="py"))
        store.insert(**_fields())
        store.remove(2)

        reloaded = CourseStore(tmpdir)
        assert reloaded.get(1).keyword == "py"
        assert reloaded.next_id == 3


def test_corrupt_file_raises_and_is_left_alone():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "courses.json"
        path.write_text("{not json")
        store = CourseStore(tmpdir)
        with pytest.raises(StorageError):
            store.list_all()
        with pytest.raises(StorageError):
            store.insert(**_fields())
        assert path.read_text() == "{not json"


def test_non_object_file_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "courses.json").write_text("[1, 2]")
        with pytest.raises(StorageError):
            CourseStore(tmpdir).next_id


def test_malformed_records_are_skipped():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "courses.json").write_text(
            json.dumps(
                {
                    "next_id": 3,
                    "courses": [
                        {"title": "no key", "creator_address": "u1"},
                        {"id": "x"},
                        {"id": 2, "title": "kept", "creator_name": "N", "creator_address": "u1", "body": "B"},
                    ],
                }
            )
        )
        store = CourseStore(tmpdir)
        assert [c.title for c in store.list_all()] == ["kept"]
        assert store.insert(**_fields()).id == 3


def test_counter_never_falls_behind_stored_keys():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "courses.json").write_text(
            json.dumps({"next_id": 1, "courses": [{"id": 5, "title": "t", "body": "b"}]})
        )
        assert CourseStore(tmpdir).insert(**_fields()).id == 6


def test_writes_leave_no_temp_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        store.insert(**_fields())
        store.remove(1)
        assert [p.name for p in Path(tmpdir).iterdir()] == ["courses.json"]


def test_restore_puts_records_back_under_their_keys():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CourseStore(tmpdir)
        store.insert(**_fields("u1"))
        store.insert(**_fields("u2"))
        removed = store.remove_by_creator("u1")

        store.restore(removed)
        assert [c.id for c in store.list_all()] == [1, 2]
        assert store.next_id == 3
