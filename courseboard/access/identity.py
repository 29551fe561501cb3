"""Identity registry: the admin slot and the moderator set."""

from __future__ import annotations

import logging
from typing import Optional

from courseboard.access import policy
from courseboard.access.store import AccessStore
from courseboard.config import MAX_MODERATORS
from courseboard.errors import EmptyFields, ModeratorLimitReached, UnAuthorized

logger = logging.getLogger(__name__)


class IdentityRegistry:
    """Answers role questions and routes every role change through the admin."""

    def __init__(self, store: AccessStore) -> None:
        self._store = store

    # -- queries -------------------------------------------------------------

    @property
    def admin(self) -> Optional[str]:
        return self._store.load().admin

    def list_moderators(self) -> list[str]:
        return list(self._store.load().moderators)

    def is_admin(self, address: str) -> bool:
        return policy.is_admin(self._store.load(), address)

    def is_authorized(self, address: str) -> bool:
        return policy.is_authorized(self._store.load(), address)

    # -- mutations -----------------------------------------------------------

    def set_admin(self, caller: str, new_admin: str) -> None:
        """Bootstrap the admin slot, or hand it over when *caller* holds it."""
        if not new_admin or not new_admin.strip():
            raise EmptyFields("Admin address cannot be empty")
        state = self._store.load()
        if not policy.can_set_admin(state, caller):
            raise UnAuthorized("Only admin can change")
        previous = state.admin
        state.admin = new_admin
        self._store.save(state)
        logger.info("Admin changed from %s to %s by %s", previous, new_admin, caller)

    def add_moderator(self, caller: str, address: str) -> None:
        state = self._store.load()
        if not policy.is_admin(state, caller):
            raise UnAuthorized("Only admin can add moderators")
        if len(state.moderators) >= MAX_MODERATORS:
            raise ModeratorLimitReached("Maximum number of moderators reached")
        if address in state.moderators:
            return
        state.moderators.append(address)
        self._store.save(state)
        logger.info("Moderator %s added by %s", address, caller)

    def remove_moderator(self, caller: str, address: str) -> None:
        state = self._store.load()
        if not policy.is_admin(state, caller):
            raise UnAuthorized("Only admin can remove moderators")
        if address not in state.moderators:
            return
        state.moderators.remove(address)
        self._store.save(state)
        logger.info("Moderator %s removed by %s", address, caller)
