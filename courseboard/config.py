"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from pathlib import Path

COURSEBOARD_HOME = os.environ.get("COURSEBOARD_HOME", "")
COURSEBOARD_CALLER = os.environ.get("COURSEBOARD_CALLER", "")
COURSEBOARD_LOG_LEVEL = os.environ.get("COURSEBOARD_LOG_LEVEL", "WARNING")

# Upper bound on the moderator set
MAX_MODERATORS = 5


def default_home() -> Path:
    """Return the data directory, honouring ``COURSEBOARD_HOME``."""
    if COURSEBOARD_HOME:
        return Path(COURSEBOARD_HOME)
    return Path.home() / ".courseboard"
