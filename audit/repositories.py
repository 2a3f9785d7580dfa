"""
Activity log repository - Data access layer for the audit trail.
"""
from typing import List

from django.conf import settings

from core.constants import DefaultLimits, StorageKey
from core.dto import ActivityLogDTO
from core.repositories import CollectionRepository, EntityStore, generate_id


class ActivityLogRepository(CollectionRepository[ActivityLogDTO]):
    """Append-only log capped to the most recent entries"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.LOGS, ActivityLogDTO)
        self.retention = getattr(settings, 'RMS_LOG_RETENTION', DefaultLimits.LOG_RETENTION)

    def append(self, entry: ActivityLogDTO) -> ActivityLogDTO:
        """Append an entry and drop the oldest ones beyond the retention limit"""
        if not entry.id:
            entry.id = generate_id()
        logs = self.all()
        logs.append(entry)
        self.save_all(logs[-self.retention:])
        return entry

    def newest_first(self) -> List[ActivityLogDTO]:
        return list(reversed(self.all()))

    def for_user(self, user_id: str) -> List[ActivityLogDTO]:
        return [entry for entry in self.newest_first() if entry.user_id == user_id]
