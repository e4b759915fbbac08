"""Append-only activity log."""

from datetime import datetime
from typing import Any, Iterable, Optional

import structlog

from spendsense.domain.entities import ActivityAction, ActivityEntity, ActivityLogEntry
from spendsense.utils.ids import new_id

logger = structlog.get_logger(__name__)


class ActivityLog:
    """Informational audit trail, newest entry first."""

    def __init__(self, entries: Optional[Iterable[ActivityLogEntry]] = None):
        self._entries: list[ActivityLogEntry] = list(entries) if entries is not None else []

    def record(
        self,
        action: ActivityAction,
        entity: ActivityEntity,
        details: str,
        data: Optional[dict[str, Any]] = None,
    ) -> ActivityLogEntry:
        """Record an action and return the new entry."""
        entry = ActivityLogEntry(
            id=new_id("log"),
            action=ActivityAction(action),
            entity=ActivityEntity(entity),
            details=details,
            timestamp=datetime.now(),
            data=data,
        )
        self._entries.insert(0, entry)
        logger.info("activity_recorded", action=entry.action.value, entity=entry.entity.value, details=details)
        return entry

    def entries(self, limit: Optional[int] = None) -> list[ActivityLogEntry]:
        if limit is None:
            return list(self._entries)
        return self._entries[:limit]

    def __len__(self) -> int:
        return len(self._entries)
