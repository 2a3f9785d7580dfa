"""
Access Control Policy

Pure functions deciding, for a session user, which rooms and payments are
visible and whether a mutating action is permitted. Nothing here reads the
store or has side effects; callers pass in the collections to filter.

Access Rules:
- ADMIN: sees every room and every payment, passes every gate
- EMPLOYEE: sees only rooms granted through an enabled RoomAssignment
- Payments: visible in full with ``can_view_payments``, otherwise only the
  payments the user recorded personally
- Gates: ``role == ADMIN or permissions.<flag>``; staff management has no
  flag and is ADMIN only
"""
from typing import Iterable, List, Optional, Set

from core.constants import UserRole
from core.dto import PaymentDTO, RoomAssignmentDTO, RoomDTO, UserDTO

ROOM_EDIT_PERMISSION = 'can_move_tenants'
PAYMENT_VIEW_PERMISSION = 'can_view_payments'
PAYMENT_ADD_PERMISSION = 'can_add_payments'
PAYMENT_EDIT_PERMISSION = 'can_edit_payments'


# ============================================================================
# GATES
# ============================================================================

def is_admin(user: Optional[UserDTO]) -> bool:
    return user is not None and user.role == UserRole.ADMIN


def has_permission(user: Optional[UserDTO], flag: str) -> bool:
    """
    Check ``role == ADMIN or permissions.<flag>``.

    Args:
        user: Session user (None when logged out)
        flag: Permission attribute, e.g. 'can_add_payments'

    Returns:
        Boolean - True if the action is permitted
    """
    if user is None:
        return False
    if is_admin(user):
        return True
    return bool(getattr(user.permissions, flag, False))


def can_edit_rooms(user: Optional[UserDTO]) -> bool:
    """Room add/edit/move and bulk updates"""
    return has_permission(user, ROOM_EDIT_PERMISSION)


def can_add_payments(user: Optional[UserDTO]) -> bool:
    return has_permission(user, PAYMENT_ADD_PERMISSION)


def can_edit_payments(user: Optional[UserDTO]) -> bool:
    return has_permission(user, PAYMENT_EDIT_PERMISSION)


def can_view_all_payments(user: Optional[UserDTO]) -> bool:
    return has_permission(user, PAYMENT_VIEW_PERMISSION)


def can_manage_staff(user: Optional[UserDTO]) -> bool:
    """Employees, assignments, settings, feedback review and the audit trail"""
    return is_admin(user)


# ============================================================================
# VISIBILITY
# ============================================================================

def get_accessible_room_ids(user: Optional[UserDTO], assignments: Iterable[RoomAssignmentDTO]) -> Set[str]:
    """
    IDs of rooms granted to a non-admin user through enabled assignments.

    Admins do not need assignments; use filter_visible_rooms for them.
    """
    if user is None:
        return set()
    return {a.room_id for a in assignments if a.user_id == user.id and a.is_enabled}


def filter_visible_rooms(
    user: Optional[UserDTO],
    rooms: Iterable[RoomDTO],
    assignments: Iterable[RoomAssignmentDTO],
) -> List[RoomDTO]:
    """
    Rooms the user may see, in stored order.

    Rules:
        - No user: nothing
        - ADMIN: all rooms
        - EMPLOYEE: rooms with an enabled assignment to the user
    """
    if user is None:
        return []
    if is_admin(user):
        return list(rooms)
    accessible = get_accessible_room_ids(user, assignments)
    return [room for room in rooms if room.id in accessible]


def can_access_room(user: Optional[UserDTO], room: RoomDTO, assignments: Iterable[RoomAssignmentDTO]) -> bool:
    if user is None:
        return False
    if is_admin(user):
        return True
    return room.id in get_accessible_room_ids(user, assignments)


def filter_visible_payments(user: Optional[UserDTO], payments: Iterable[PaymentDTO]) -> List[PaymentDTO]:
    """
    Payments the user may see, in stored order.

    Rules:
        - No user: nothing
        - ADMIN or can_view_payments: everything
        - Otherwise: payments recorded by the user
    """
    if user is None:
        return []
    if can_view_all_payments(user):
        return list(payments)
    return [payment for payment in payments if payment.recorded_by_id == user.id]
