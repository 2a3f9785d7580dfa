"""
Feedback repository - Data access layer for user submissions.
"""
from core.constants import StorageKey
from core.dto import FeedbackDTO
from core.repositories import CollectionRepository, EntityStore


class FeedbackRepository(CollectionRepository[FeedbackDTO]):
    """Repository for FeedbackDTO records"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.FEEDBACK, FeedbackDTO)
