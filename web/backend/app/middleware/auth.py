"""Auth middleware -- FastAPI dependencies for the caller identity and the board.

The hosting transport authenticates the caller and forwards its identity in
the ``X-Caller`` header. The core never derives identities on its own.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from courseboard.board import CourseBoard

# Shared board instance
_board: Optional[CourseBoard] = None


def get_board() -> CourseBoard:
    """Return the singleton CourseBoard instance."""
    global _board
    if _board is None:
        _board = CourseBoard()
    return _board


async def get_caller(x_caller: Optional[str] = Header(None, alias="X-Caller")) -> str:
    """FastAPI dependency returning the authenticated caller identity.

    Raises ``401 Unauthorized`` when the header is missing or blank.
    """
    if x_caller and x_caller.strip():
        return x_caller.strip()
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )
