"""Translate course board errors into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status

from courseboard.errors import (
    BannedUser,
    CourseBoardError,
    EmptyFields,
    ModeratorLimitReached,
    NotFound,
    UnAuthorized,
)

_STATUS_BY_ERROR: dict[type[CourseBoardError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    UnAuthorized: status.HTTP_403_FORBIDDEN,
    BannedUser: status.HTTP_403_FORBIDDEN,
    EmptyFields: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ModeratorLimitReached: status.HTTP_409_CONFLICT,
}


def to_http_exception(exc: CourseBoardError) -> HTTPException:
    """Map a board error to an ``HTTPException`` carrying its kind and message."""
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail={"kind": exc.kind, "msg": exc.msg})
