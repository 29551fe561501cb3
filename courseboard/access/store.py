"""File-based JSON storage for the access-control state.

Storage path: ``<home>/access.json`` holding a single object with the admin
address, the moderator list and the banned list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from courseboard.config import default_home
from courseboard.jsonfile import read_object, write_object
from courseboard.models import AccessState


class AccessStore:
    """Loads and saves the process-wide ``AccessState`` record."""

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self._base = Path(base_dir) if base_dir else default_home()
        self._base.mkdir(parents=True, exist_ok=True)
        self._path = self._base / "access.json"

    def load(self) -> AccessState:
        data = read_object(self._path)
        if data is None:
            return AccessState()
        return AccessState(
            admin=data.get("admin"),
            moderators=list(dict.fromkeys(data.get("moderators", []))),
            banned=list(dict.fromkeys(data.get("banned", []))),
        )

    def save(self, state: AccessState) -> None:
        write_object(
            self._path,
            {
                "admin": state.admin,
                "moderators": state.moderators,
                "banned": state.banned,
            },
        )
