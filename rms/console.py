"""
Console facade.

One object exposing every console operation over a single injected
EntityStore. Operations that act on behalf of someone resolve the session
user from the store on each call.
"""
from typing import Any, Dict, Iterable, List, Optional

from accounts.services import AuthService, StaffService
from audit.helpers import get_logs
from common.logging_config import set_session_user
from common.services import SettingsService
from core.access import is_admin
from core.constants import PaymentStatus
from core.dto import (
    ActivityLogDTO,
    FeedbackDTO,
    PaymentDTO,
    RoomAssignmentDTO,
    RoomDTO,
    SettingsDTO,
    UserDTO,
)
from core.repositories import EntityStore
from core.services import BaseService
from dashboard.search import SearchResults, global_search
from dashboard.services import DashboardService, DashboardStats, FinancialReport
from feedback.services import FeedbackService
from rent.incentives import IncentiveEngine
from rent.services import LedgerService
from rooms.services import AssignmentService, RoomService


class Console(BaseService):
    """Wires every service around one store"""

    def __init__(self, store: Optional[EntityStore] = None, incentives: Optional[IncentiveEngine] = None):
        super().__init__(store or EntityStore.from_settings())
        self.incentives = incentives or IncentiveEngine(self.store)
        self.auth = AuthService(self.store)
        self.staff = StaffService(self.store)
        self.rooms = RoomService(self.store)
        self.assignments = AssignmentService(self.store)
        self.ledger = LedgerService(self.store, incentives=self.incentives)
        self.feedback = FeedbackService(self.store)
        self.settings = SettingsService(self.store)
        self.dashboard = DashboardService(self.store, incentives=self.incentives)

    def _actor(self) -> Optional[UserDTO]:
        user = self.auth.get_current_user()
        set_session_user(user)
        return user

    # Session

    def login(self, username: str, password: str) -> Optional[UserDTO]:
        return self.auth.login(username, password)

    def logout(self) -> None:
        self.auth.logout()

    def get_current_user(self) -> Optional[UserDTO]:
        return self.auth.get_current_user()

    # Rooms

    def get_rooms(self) -> List[RoomDTO]:
        return self.rooms.get_rooms(self._actor())

    def get_room(self, room_id: str) -> RoomDTO:
        return self.rooms.get_room(self._actor(), room_id)

    def add_room(self, fields: Dict[str, Any]) -> RoomDTO:
        return self.rooms.add_room(self._actor(), fields)

    def update_room(self, room_id: str, fields: Dict[str, Any]) -> RoomDTO:
        return self.rooms.update_room(self._actor(), room_id, fields)

    def bulk_update_rooms(self, room_ids: Iterable[str], fields: Dict[str, Any]) -> List[RoomDTO]:
        return self.rooms.bulk_update_rooms(self._actor(), room_ids, fields)

    # Staff

    def get_employees(self) -> List[UserDTO]:
        return self.staff.get_employees(self._actor())

    def add_employee(self, fields: Dict[str, Any]) -> UserDTO:
        return self.staff.add_employee(self._actor(), fields)

    def update_employee(self, employee_id: str, fields: Dict[str, Any]) -> UserDTO:
        return self.staff.update_employee(self._actor(), employee_id, fields)

    def delete_employee(self, employee_id: str) -> None:
        self.staff.delete_employee(self._actor(), employee_id)

    def toggle_assignment(self, user_id: str, room_id: str) -> RoomAssignmentDTO:
        return self.assignments.toggle_assignment(self._actor(), user_id, room_id)

    def get_assignments(self) -> List[RoomAssignmentDTO]:
        return self.assignments.get_assignments(self._actor())

    # Payments

    def add_payment(self, fields: Dict[str, Any]) -> PaymentDTO:
        return self.ledger.add_payment(self._actor(), fields)

    def record_payment(self, room_id: str, amount, status: str = PaymentStatus.PAID) -> PaymentDTO:
        return self.ledger.record_payment(self._actor(), room_id, amount, status)

    def get_payments(self) -> List[PaymentDTO]:
        return self.ledger.get_payments(self._actor())

    # Feedback

    def add_feedback(self, fields: Dict[str, Any]) -> FeedbackDTO:
        return self.feedback.add_feedback(self._actor(), fields)

    def get_feedbacks(self) -> List[FeedbackDTO]:
        return self.feedback.get_feedbacks(self._actor())

    def review_feedback(self, feedback_id: str) -> FeedbackDTO:
        return self.feedback.review_feedback(self._actor(), feedback_id)

    # Audit and search

    def get_logs(self) -> List[ActivityLogDTO]:
        """Audit trail, newest first (ADMIN only)"""
        actor = self.require_user(self._actor())
        if not is_admin(actor):
            self.deny(actor, "view activity logs")
        return get_logs(self.store)

    def global_search(self, query: str) -> SearchResults:
        return global_search(self.store, self._actor(), query)

    # Settings and reports

    def get_settings(self) -> SettingsDTO:
        return self.settings.get_settings()

    def update_settings(self, fields: Dict[str, Any]) -> SettingsDTO:
        return self.settings.update_settings(self._actor(), fields)

    def get_dashboard(self) -> DashboardStats:
        return self.dashboard.get_dashboard(self._actor())

    def get_financial_report(self) -> FinancialReport:
        return self.dashboard.get_financial_report(self._actor())

    # Change notification

    def subscribe(self, handler) -> None:
        self.store.subscribe(handler)

    def unsubscribe(self, handler) -> bool:
        return self.store.unsubscribe(handler)
