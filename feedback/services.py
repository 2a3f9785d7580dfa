"""
Feedback service - Submissions from staff and their review by admins.
"""
from typing import Any, Dict, List

from django.utils import timezone

from audit.helpers import log_action
from core.access import is_admin
from core.constants import FeedbackStatus, LogAction
from core.dto import FeedbackDTO
from core.exceptions import NotFoundError
from core.repositories import EntityStore
from core.services import BaseService
from core.validators import serializer_error
from .repositories import FeedbackRepository
from .serializers import FeedbackSerializer


class FeedbackService(BaseService):
    """Service for feedback and feature requests"""

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.feedback_repo = FeedbackRepository(store)

    def add_feedback(self, actor, fields: Dict[str, Any]) -> FeedbackDTO:
        """
        Submit feedback as the session user.

        Raises:
            UnauthorizedError: No session
            ValidationError: Blank content or unknown type
        """
        self.require_user(actor)

        serializer = FeedbackSerializer(data=fields)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_FEEDBACK")
        data = serializer.validated_data

        feedback = self.feedback_repo.add(FeedbackDTO(
            user_id=actor.id,
            user_name=actor.full_name,
            type=data['type'],
            content=data['content'],
            timestamp=timezone.now().isoformat(),
            status=FeedbackStatus.PENDING,
        ))

        log_action(self.store, actor, LogAction.FEEDBACK_SUBMITTED, f"{feedback.type} submitted.")
        self.log_info("Feedback submitted", feedback_id=feedback.id, type=feedback.type)
        return feedback

    def get_feedbacks(self, user) -> List[FeedbackDTO]:
        """All submissions for admins, the user's own otherwise; oldest first"""
        if user is None:
            return []
        if is_admin(user):
            return self.feedback_repo.all()
        return self.feedback_repo.filter(user_id=user.id)

    def review_feedback(self, actor, feedback_id: str) -> FeedbackDTO:
        """Mark a submission as reviewed (ADMIN only)"""
        self.require_user(actor)
        if not is_admin(actor):
            self.deny(actor, "review feedback")

        feedback = self.feedback_repo.update(feedback_id, status=FeedbackStatus.REVIEWED)
        if feedback is None:
            raise NotFoundError(resource_type="Feedback", resource_id=feedback_id)

        log_action(self.store, actor, LogAction.FEEDBACK_REVIEWED, f"Feedback from {feedback.user_name} reviewed.")
        self.log_info("Feedback reviewed", feedback_id=feedback_id)
        return feedback
