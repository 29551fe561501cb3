"""Authorization policy.

Pure decision functions over an explicit ``AccessState`` snapshot. Nothing
here touches storage, so the rules can be checked in isolation:

- admin:       the single address stored in ``AccessState.admin``
- authorized:  the admin or any moderator
- allowed:     the course's creator, or any authorized address
"""

from __future__ import annotations

from courseboard.models import AccessState, Course


def is_admin(state: AccessState, address: str) -> bool:
    """Return True if *address* is the current admin."""
    return state.admin is not None and address == state.admin


def is_moderator(state: AccessState, address: str) -> bool:
    return address in state.moderators


def is_authorized(state: AccessState, address: str) -> bool:
    """Return True if *address* is the admin or a moderator."""
    return is_admin(state, address) or is_moderator(state, address)


def is_banned(state: AccessState, address: str) -> bool:
    return address in state.banned


def is_allowed(state: AccessState, caller: str, course: Course) -> bool:
    """Return True if *caller* may update or delete *course*."""
    return caller == course.creator_address or is_authorized(state, caller)


def can_set_admin(state: AccessState, caller: str) -> bool:
    """The admin slot is open to anyone while empty, then only to its holder."""
    return state.admin is None or caller == state.admin


def can_ban(state: AccessState, caller: str, target: str) -> bool:
    """Authorized callers may ban anyone except the admin and moderators."""
    return is_authorized(state, caller) and not is_authorized(state, target)
