"""Courses router -- course CRUD, bulk deletes and AND/OR filtering."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from courseboard.board import CourseBoard
from courseboard.errors import CourseBoardError
from courseboard.models import CoursePayload, CourseUpdatePayload, FilterCriteria, FilterMode
from web.backend.app.errors import to_http_exception
from web.backend.app.middleware.auth import get_board, get_caller
from web.backend.app.models.api import (
    CourseResponse,
    CreateCourseRequest,
    DeletedCountResponse,
    FilterRequest,
    UpdateCourseRequest,
)

router = APIRouter(prefix="/api", tags=["courses"])


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@router.get(
    "/courses",
    response_model=list[CourseResponse],
    summary="List all courses",
)
async def list_courses(board: CourseBoard = Depends(get_board)):
    """Return every course in ascending id order."""
    return [CourseResponse.from_course(c) for c in board.list_courses()]


@router.post(
    "/courses/filter",
    response_model=list[CourseResponse],
    summary="Filter courses",
)
async def filter_courses(
    body: FilterRequest,
    mode: Literal["and", "or"] = Query("and"),
    board: CourseBoard = Depends(get_board),
):
    """Return courses matching all (``and``) or any (``or``) of the given criteria.

    An empty result is a normal outcome, not an error.
    """
    criteria = FilterCriteria(
        keyword=body.keyword,
        category=body.category,
        creator_address=body.creator_address,
    )
    return [CourseResponse.from_course(c) for c in board.filter_courses(criteria, FilterMode(mode))]


@router.get(
    "/courses/{course_id}",
    response_model=CourseResponse,
    summary="Get a course",
)
async def get_course(course_id: int, board: CourseBoard = Depends(get_board)):
    try:
        return CourseResponse.from_course(board.get_course(course_id))
    except CourseBoardError as e:
        raise to_http_exception(e) from e


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post(
    "/courses",
    response_model=CourseResponse,
    summary="Create a course",
    status_code=status.HTTP_201_CREATED,
)
async def create_course(
    body: CreateCourseRequest,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    """Create a course owned by the caller."""
    payload = CoursePayload(**body.model_dump())
    try:
        return CourseResponse.from_course(board.add_course(caller, payload))
    except CourseBoardError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/courses/mine",
    response_model=DeletedCountResponse,
    summary="Delete the caller's courses",
)
async def delete_my_courses(
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    return DeletedCountResponse(deleted=board.delete_my_courses(caller))


@router.patch(
    "/courses/{course_id}",
    response_model=CourseResponse,
    summary="Update a course",
)
async def update_course(
    course_id: int,
    body: UpdateCourseRequest,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    """Overwrite the fields present in the body. Creator, admin or moderator only."""
    payload = CourseUpdatePayload(**body.model_dump(exclude_none=True))
    try:
        return CourseResponse.from_course(board.update_course(caller, course_id, payload))
    except CourseBoardError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/courses/{course_id}",
    response_model=CourseResponse,
    summary="Delete a course",
)
async def delete_course(
    course_id: int,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    try:
        return CourseResponse.from_course(board.delete_course(caller, course_id))
    except CourseBoardError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/creators/{address}/courses",
    response_model=DeletedCountResponse,
    summary="Delete every course of a creator",
)
async def delete_courses_by_creator(
    address: str,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    """Admin or moderator only."""
    try:
        return DeletedCountResponse(deleted=board.delete_courses_by_creator(caller, address))
    except CourseBoardError as e:
        raise to_http_exception(e) from e
