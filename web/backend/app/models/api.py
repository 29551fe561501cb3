"""Pydantic models for API request/response serialization.

These models mirror the courseboard dataclasses and provide JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from courseboard.models import Course


# ---------------------------------------------------------------------------
# Course models
# ---------------------------------------------------------------------------


class CourseResponse(BaseModel):
    """Mirrors courseboard.models.Course."""

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
    updated_at: str = ""

    @classmethod
    def from_course(cls, course: Course) -> "CourseResponse":
        return cls(
            id=course.id,
            title=course.title,
            creator_name=course.creator_name,
            creator_address=course.creator_address,
            body=course.body,
            attachment_url=course.attachment_url,
            keyword=course.keyword,
            category=course.category,
            contact=course.contact,
            created_at=course.created_at,
            updated_at=course.updated_at,
        )


class CreateCourseRequest(BaseModel):
    """Request body for creating a course. Emptiness is checked by the board."""

    title: str = ""
    creator_name: str = ""
    body: str = ""
    attachment_url: str = ""
    keyword: str = ""
    category: str = ""
    contact: str = ""


class UpdateCourseRequest(BaseModel):
    """Request body for a partial course update."""

    title: Optional[str] = None
    creator_name: Optional[str] = None
    body: Optional[str] = None
    attachment_url: Optional[str] = None
    keyword: Optional[str] = None
    category: Optional[str] = None
    contact: Optional[str] = None


class FilterRequest(BaseModel):
    """Optional exact-match criteria; omitted fields are ignored."""

    keyword: Optional[str] = None
    category: Optional[str] = None
    creator_address: Optional[str] = None


class DeletedCountResponse(BaseModel):
    """Number of courses removed by a bulk delete."""

    deleted: int = 0


# ---------------------------------------------------------------------------
# Access models
# ---------------------------------------------------------------------------


class AddressRequest(BaseModel):
    """Request body naming a single identity."""

    address: str = Field(..., min_length=1)


class AccessStateResponse(BaseModel):
    """Current admin, moderators and banned creators."""

    admin: Optional[str] = None
    moderators: list[str] = Field(default_factory=list)
    banned: list[str] = Field(default_factory=list)


class BanResponse(BaseModel):
    """Result of banning a creator."""

    address: str
    deleted_courses: list[CourseResponse] = Field(default_factory=list)
