"""Error kinds raised by the course board.

All of them are ordinary, terminal outcomes: they describe a caller or state
precondition, never a transient fault, and the operation that raised one has
committed nothing.
"""

from __future__ import annotations


class CourseBoardError(Exception):
    """Base class for every course board failure."""

    kind = "error"

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class NotFound(CourseBoardError):
    """The requested course id does not exist."""

    kind = "not_found"


class UnAuthorized(CourseBoardError):
    """The caller lacks the role or ownership the mutation requires."""

    kind = "unauthorized"


class EmptyFields(CourseBoardError):
    """A required course field was empty."""

    kind = "empty_fields"


class BannedUser(CourseBoardError):
    """A banned creator attempted to create a course."""

    kind = "banned_user"


class ModeratorLimitReached(CourseBoardError):
    """The moderator set is already full."""

    kind = "moderator_limit"


class StorageError(Exception):
    """A persisted state file exists but cannot be read back.

    Not a ``CourseBoardError``: this is a fault in the data directory, not a
    caller precondition, and nothing is written until it is repaired.
    """
