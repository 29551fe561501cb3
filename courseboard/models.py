"""Course board domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# Fields a course must never persist empty
REQUIRED_FIELDS = ("title", "creator_name", "body")

# Fields an update may overwrite
MUTABLE_FIELDS = (
    "title",
    "creator_name",
    "body",
    "attachment_url",
    "keyword",
    "category",
    "contact",
)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Course:
    """A stored course record."""

    id: int
    title: str
    creator_name: str
    creator_address: str
    body: str
    attachment_url: str = ""
    keyword: str = ""
    category: str = ""
    contact: str = ""
    created_at: str = ""
    updated_at: str = ""  # empty until the first update

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = utc_now()

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


@dataclass
class CoursePayload:
    """Caller-supplied content for a new course."""

    title: str
    creator_name: str
    body: str
    attachment_url: str = ""
    keyword: str = ""
    category: str = ""
    contact: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


@dataclass
class CourseUpdatePayload:
    """Partial update: only fields that are not ``None`` are written."""

    title: Optional[str] = None
    creator_name: Optional[str] = None
    body: Optional[str] = None
    attachment_url: Optional[str] = None
    keyword: Optional[str] = None
    category: Optional[str] = None
    contact: Optional[str] = None

    def changes(self) -> dict[str, str]:
        """Return the fields present in this payload."""
        return {
            name: getattr(self, name)
            for name in MUTABLE_FIELDS
            if getattr(self, name) is not None
        }


class FilterMode(str, Enum):
    """How present filter criteria combine."""

    AND = "and"
    OR = "or"


@dataclass
class FilterCriteria:
    """Optional exact-match criteria; ``None`` means the field is ignored."""

    keyword: Optional[str] = None
    category: Optional[str] = None
    creator_address: Optional[str] = None

    def present(self) -> dict[str, str]:
        """Return the criteria that must be matched, keyed by course field."""
        return {
            name: value
            for name, value in (
                ("keyword", self.keyword),
                ("category", self.category),
                ("creator_address", self.creator_address),
            )
            if value is not None
        }


@dataclass
class AccessState:
    """Process-wide role configuration.

    ``moderators`` and ``banned`` are kept as ordered lists of unique
    addresses so the persisted form is stable.
    """

    admin: Optional[str] = None
    moderators: list[str] = field(default_factory=list)
    banned: list[str] = field(default_factory=list)
