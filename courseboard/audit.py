"""Audit trail for course board mutations.

Every mutating operation, whether it succeeds or is refused, is appended as a
JSON line to a daily file under ``<home>/audit_logs/``. A refused call carries
the error kind under ``details["error"]``; a ban lists the keys it deleted
under ``details["deleted_courses"]``.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from courseboard.config import default_home

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("id", "timestamp", "actor", "action", "resource_type", "resource_id", "success")


@dataclass
class AuditEntry:
    id: str
    timestamp: str
    actor: str
    action: str
    resource_type: str
    resource_id: str
    details: dict[str, Any] = field(default_factory=dict)
    success: bool = True

    def matches(self, actor: Optional[str], action: Optional[str], resource_type: Optional[str]) -> bool:
        return (
            (not actor or self.actor == actor)
            and (not action or self.action == action)
            and (not resource_type or self.resource_type == resource_type)
        )


class AuditLogger:
    """Append-only JSONL trail, one file per UTC day."""

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self._dir = Path(base_dir) if base_dir else default_home() / "audit_logs"
        self._dir.mkdir(parents=True, exist_ok=True)

    def _day_file(self, now: datetime) -> Path:
        return self._dir / f"{now.strftime('%Y-%m-%d')}.jsonl"

    def _entries(self) -> Iterator[AuditEntry]:
        for path in sorted(self._dir.glob("*.jsonl")):
            with path.open(encoding="utf-8") as fh:
                for lineno, line in enumerate(fh, start=1):
                    if not line.strip():
                        continue
                    try:
                        yield AuditEntry(**json.loads(line))
                    except (json.JSONDecodeError, TypeError):
                        logger.warning("Skipping malformed audit line %s:%d", path.name, lineno)

    def log_event(
        self,
        actor: str,
        action: str,
        resource_type: str,
        resource_id: str = "",
        details: Optional[dict[str, Any]] = None,
        success: bool = True,
    ) -> AuditEntry:
        """Append one event and return it."""
        now = datetime.now(timezone.utc)
        entry = AuditEntry(
            id=uuid.uuid4().hex[:16],
            timestamp=now.isoformat(),
            actor=actor,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=dict(details or {}),
            success=success,
        )
        with self._day_file(now).open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry)) + "\n")
        return entry

    def get_events(
        self,
        *,
        actor: Optional[str] = None,
        action: Optional[str] = None,
        resource_type: Optional[str] = None,
        limit: int = 200,
    ) -> list[AuditEntry]:
        """Return matching events, newest first."""
        entries = [e for e in self._entries() if e.matches(actor, action, resource_type)]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def export_events(self, fmt: str = "json", **filters: Any) -> str:
        """Render matching events as ``json`` or ``csv``.

        The CSV form has one quoted row per event under a header row; the
        free-form ``details`` are only in the JSON form.
        """
        entries = self.get_events(**filters)
        if fmt == "csv":
            buf = io.StringIO()
            writer = csv.writer(buf, lineterminator="\n")
            writer.writerow(CSV_COLUMNS)
            for e in entries:
                writer.writerow([getattr(e, column) for column in CSV_COLUMNS])
            return buf.getvalue()
        return json.dumps([asdict(e) for e in entries], indent=2)
