"""Ban registry: creators barred from adding courses.

Banning an address also removes every course it created. Unbanning only
clears the membership; deleted courses stay deleted.
"""

from __future__ import annotations

import logging

from courseboard.access import policy
from courseboard.access.store import AccessStore
from courseboard.errors import UnAuthorized
from courseboard.models import Course
from courseboard.store import CourseStore

logger = logging.getLogger(__name__)


class BanRegistry:
    def __init__(self, store: AccessStore, courses: CourseStore) -> None:
        self._store = store
        self._courses = courses

    def is_banned(self, address: str) -> bool:
        return policy.is_banned(self._store.load(), address)

    def list_banned(self) -> list[str]:
        return list(self._store.load().banned)

    def ban_creator(self, caller: str, address: str) -> list[Course]:
        """Ban *address* and delete all of its courses. Returns the deleted courses."""
        state = self._store.load()
        if not policy.can_ban(state, caller, address):
            raise UnAuthorized("You are not authorized to ban the user")

        removed = self._courses.remove_by_creator(address)
        if address not in state.banned:
            state.banned.append(address)
        try:
            self._store.save(state)
        except Exception:
            # The ban did not land, so neither may the deletions
            self._courses.restore(removed)
            raise
        logger.info(
            "Creator %s banned by %s, %d course(s) removed", address, caller, len(removed)
        )
        return removed

    def unban_creator(self, caller: str, address: str) -> None:
        state = self._store.load()
        if not policy.is_authorized(state, caller):
            raise UnAuthorized("You are not authorized to unban the user")
        if address not in state.banned:
            return
        state.banned.remove(address)
        self._store.save(state)
        logger.info("Creator %s unbanned by %s", address, caller)
