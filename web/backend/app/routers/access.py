"""Access router -- admin, moderators and banned creators."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from courseboard.board import CourseBoard
from courseboard.errors import CourseBoardError
from web.backend.app.errors import to_http_exception
from web.backend.app.middleware.auth import get_board, get_caller
from web.backend.app.models.api import (
    AccessStateResponse,
    AddressRequest,
    BanResponse,
    CourseResponse,
)

router = APIRouter(prefix="/api/access", tags=["access"])


def _state_response(board: CourseBoard) -> AccessStateResponse:
    return AccessStateResponse(
        admin=board.identity.admin,
        moderators=board.identity.list_moderators(),
        banned=board.bans.list_banned(),
    )


@router.get(
    "",
    response_model=AccessStateResponse,
    summary="Show admin, moderators and banned creators",
)
async def get_access(board: CourseBoard = Depends(get_board)):
    return _state_response(board)


# ---------------------------------------------------------------------------
# Admin & moderators
# ---------------------------------------------------------------------------


@router.put(
    "/admin",
    response_model=AccessStateResponse,
    summary="Set the admin",
)
async def set_admin(
    body: AddressRequest,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    """Open to anyone while no admin is set; afterwards only the admin may change it."""
    try:
        board.set_admin(caller, body.address)
    except CourseBoardError as e:
        raise to_http_exception(e) from e
    return _state_response(board)


@router.post(
    "/moderators",
    response_model=AccessStateResponse,
    summary="Add a moderator",
    status_code=status.HTTP_201_CREATED,
)
async def add_moderator(
    body: AddressRequest,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    try:
        board.add_moderator(caller, body.address)
    except CourseBoardError as e:
        raise to_http_exception(e) from e
    return _state_response(board)


@router.delete(
    "/moderators/{address}",
    response_model=AccessStateResponse,
    summary="Remove a moderator",
)
async def remove_moderator(
    address: str,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    try:
        board.remove_moderator(caller, address)
    except CourseBoardError as e:
        raise to_http_exception(e) from e
    return _state_response(board)


# ---------------------------------------------------------------------------
# Bans
# ---------------------------------------------------------------------------


@router.post(
    "/bans",
    response_model=BanResponse,
    summary="Ban a creator and delete its courses",
)
async def ban_creator(
    body: AddressRequest,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    try:
        removed = board.ban_creator(caller, body.address)
    except CourseBoardError as e:
        raise to_http_exception(e) from e
    return BanResponse(
        address=body.address,
        deleted_courses=[CourseResponse.from_course(c) for c in removed],
    )


@router.delete(
    "/bans/{address}",
    response_model=AccessStateResponse,
    summary="Unban a creator",
)
async def unban_creator(
    address: str,
    caller: str = Depends(get_caller),
    board: CourseBoard = Depends(get_board),
):
    """Clears the ban only; deleted courses are not restored."""
    try:
        board.unban_creator(caller, address)
    except CourseBoardError as e:
        raise to_http_exception(e) from e
    return _state_response(board)
