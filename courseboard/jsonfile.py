"""Read and atomically replace the JSON state files in the data directory."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from courseboard.errors import StorageError


def read_object(path: Path) -> Optional[dict]:
    """Return the JSON object stored at *path*, or None if the file is absent.

    Raises ``StorageError`` when the file exists but does not hold an object.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        raise StorageError(f"cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise StorageError(f"{path} does not hold a JSON object")
    return data


def write_object(path: Path, data: dict[str, Any]) -> None:
    """Write *data* next to *path* and move it into place in one rename."""
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w") as fh:
            fh.write(json.dumps(data, indent=2))
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
