"""
Role-Aware Dashboard Service

Dashboard metrics and the financial report, computed over the rooms the
user may see:
- ADMIN: every room
- EMPLOYEE: rooms granted through enabled assignments

The leaderboard ranks employees by coins and is shown when the
show_leaderboard setting is on, and always to admins.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from accounts.repositories import UserRepository
from core.access import filter_visible_rooms, is_admin
from core.constants import RoomStatus
from core.dto import ZERO, RoomDTO, UserDTO
from core.repositories import EntityStore, SettingsRepository
from core.services import BaseService
from rent.incentives import CollectorProgress, IncentiveEngine
from rooms.repositories import RoomAssignmentRepository, RoomRepository


@dataclass
class DashboardStats:
    total_rooms: int = 0
    available_rooms: int = 0
    occupied_rooms: int = 0
    maintenance_rooms: int = 0
    reserved_rooms: int = 0
    active_employees: int = 0
    projected_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_profit: Decimal = ZERO
    overdue_count: int = 0
    show_leaderboard: bool = True
    overdue_rooms: List[RoomDTO] = field(default_factory=list)
    reminders: List[RoomDTO] = field(default_factory=list)
    leaderboard: List[UserDTO] = field(default_factory=list)
    progress: Optional[CollectorProgress] = None


@dataclass
class RoomProjection:
    room_id: str
    room_number: str
    status: str
    monthly_rent: Decimal
    monthly_expenses: Decimal
    projection: Decimal


@dataclass
class FinancialReport:
    total_asset_value: Decimal = ZERO
    total_monthly_expenses: Decimal = ZERO
    active_contracts: int = 0
    current_monthly_revenue: Decimal = ZERO
    net_monthly_profit: Decimal = ZERO
    rooms: List[RoomProjection] = field(default_factory=list)


def _total(values) -> Decimal:
    return sum(values, ZERO)


class DashboardService(BaseService):
    """Service computing dashboard metrics and reports"""

    def __init__(self, store: EntityStore, incentives: Optional[IncentiveEngine] = None):
        super().__init__(store)
        self.room_repo = RoomRepository(store)
        self.assignment_repo = RoomAssignmentRepository(store)
        self.user_repo = UserRepository(store)
        self.settings_repo = SettingsRepository(store)
        self.incentives = incentives or IncentiveEngine(store)

    def _visible_rooms(self, user) -> List[RoomDTO]:
        return filter_visible_rooms(user, self.room_repo.all(), self.assignment_repo.all())

    def leaderboard(self) -> List[UserDTO]:
        """Employees ranked by coins, highest first"""
        return sorted(self.user_repo.get_employees(), key=lambda u: u.coins, reverse=True)

    def get_dashboard(self, user) -> DashboardStats:
        """
        Get dashboard metrics for the user's visible rooms.

        Returns:
            DashboardStats with per-status totals, money figures, overdue
            rooms, open-ended stay reminders and, when shown, the leaderboard
        """
        self.require_user(user)

        rooms = self._visible_rooms(user)
        occupied = [room for room in rooms if room.status == RoomStatus.OCCUPIED]
        revenue = _total(room.monthly_rent for room in occupied)
        expenses = _total(room.monthly_expenses or ZERO for room in rooms)
        overdue = [room for room in occupied if room.current_balance > 0]
        settings = self.settings_repo.get()
        employees = self.leaderboard()

        stats = DashboardStats(
            total_rooms=len(rooms),
            available_rooms=sum(1 for room in rooms if room.status == RoomStatus.AVAILABLE),
            occupied_rooms=len(occupied),
            maintenance_rooms=sum(1 for room in rooms if room.status == RoomStatus.MAINTENANCE),
            reserved_rooms=sum(1 for room in rooms if room.status == RoomStatus.RESERVED),
            active_employees=len(employees),
            projected_revenue=revenue,
            total_expenses=expenses,
            net_profit=revenue - expenses,
            overdue_count=len(overdue),
            show_leaderboard=settings.show_leaderboard,
            overdue_rooms=overdue,
            reminders=[room for room in occupied if room.is_open_ended],
            progress=self.incentives.collector_progress(user),
        )
        if settings.show_leaderboard or is_admin(user):
            stats.leaderboard = employees
        return stats

    def get_financial_report(self, user) -> FinancialReport:
        """Portfolio-wide revenue and expense summary (ADMIN only)"""
        self.require_user(user)
        if not is_admin(user):
            self.deny(user, "view financial reports")

        rooms = self.room_repo.all()
        occupied = [room for room in rooms if room.status == RoomStatus.OCCUPIED]
        revenue = _total(room.monthly_rent for room in occupied)
        expenses = _total(room.monthly_expenses or ZERO for room in rooms)

        return FinancialReport(
            total_asset_value=_total(room.monthly_rent for room in rooms),
            total_monthly_expenses=expenses,
            active_contracts=len(occupied),
            current_monthly_revenue=revenue,
            net_monthly_profit=revenue - expenses,
            rooms=[
                RoomProjection(
                    room_id=room.id,
                    room_number=room.room_number,
                    status=room.status,
                    monthly_rent=room.monthly_rent,
                    monthly_expenses=room.monthly_expenses or ZERO,
                    projection=room.projection,
                )
                for room in rooms
            ],
        )
