"""
Global search across rooms, users and payments.

Each category is narrowed to what the user may see before matching, and
returns at most SEARCH_RESULTS_PER_CATEGORY results in stored order.
"""
from dataclasses import dataclass, field
from typing import List

from accounts.repositories import UserRepository
from core.access import filter_visible_payments, filter_visible_rooms, is_admin
from core.constants import DefaultLimits
from core.dto import PaymentDTO, RoomDTO, UserDTO
from core.repositories import EntityStore
from rent.repositories import PaymentRepository
from rooms.repositories import RoomAssignmentRepository, RoomRepository


@dataclass
class SearchResults:
    rooms: List[RoomDTO] = field(default_factory=list)
    users: List[UserDTO] = field(default_factory=list)
    payments: List[PaymentDTO] = field(default_factory=list)


def _matches(query, *values):
    return any(query in (value or '').lower() for value in values)


def global_search(store: EntityStore, user, query: str) -> SearchResults:
    """
    Case-insensitive substring search.

    Args:
        store: EntityStore to search
        user: Session user (None returns nothing)
        query: Search text; blank returns nothing

    Matches:
        - Rooms: room_number, building, floor
        - Users (ADMIN only): full_name, username
        - Payments: room_number, recorded_by
    """
    q = (query or '').strip().lower()
    if not q or user is None:
        return SearchResults()

    limit = DefaultLimits.SEARCH_RESULTS_PER_CATEGORY

    rooms = filter_visible_rooms(
        user, RoomRepository(store).all(), RoomAssignmentRepository(store).all()
    )
    rooms = [room for room in rooms if _matches(q, room.room_number, room.building, room.floor)]

    users = []
    if is_admin(user):
        users = [u for u in UserRepository(store).all() if _matches(q, u.full_name, u.username)]

    payments = filter_visible_payments(user, PaymentRepository(store).all())
    payments = [p for p in payments if _matches(q, p.room_number, p.recorded_by)]

    return SearchResults(rooms=rooms[:limit], users=users[:limit], payments=payments[:limit])
