"""
Audit Logging Helper Functions

Provides a centralized way to log all system actions.
"""

import logging

from django.utils import timezone

from audit.repositories import ActivityLogRepository
from core.constants import LogAction
from core.dto import ActivityLogDTO

logger = logging.getLogger(__name__)


def log_action(store, user, action, details):
    """
    Log an action to the activity log.

    Args:
        store: EntityStore holding the log collection
        user: User who performed the action
        action: Action label (see core.constants.LogAction)
        details: Human-readable description

    Returns:
        ActivityLogDTO instance, or None if the entry could not be written

    Example:
        log_action(
            store,
            user,
            LogAction.ROOM_CREATED,
            f"Room {room.room_number} registered",
        )
    """
    try:
        entry = ActivityLogRepository(store).append(ActivityLogDTO(
            timestamp=timezone.now().isoformat(),
            user_id=user.id,
            user_name=user.full_name,
            action=action,
            details=details,
        ))

        logger.info(f"Audit: {user.username} - {action} - {details}")

        return entry

    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {e}", exc_info=True)
        return None


def log_login(store, user):
    """Log user login"""
    return log_action(store, user, LogAction.LOGIN, f"User {user.username} authenticated.")


def log_logout(store, user):
    """Log logout"""
    return log_action(store, user, LogAction.LOGOUT, f"User {user.username} signed out.")


def log_room_create(store, user, room):
    """Log room creation"""
    return log_action(
        store,
        user,
        LogAction.ROOM_CREATED,
        f"Unit {room.room_number} registered ({room.type}, {room.status}).",
    )


def log_room_update(store, user, room, changed_fields):
    """Log room update"""
    fields = ", ".join(sorted(changed_fields)) or "no fields"
    return log_action(
        store,
        user,
        LogAction.ROOM_UPDATED,
        f"Unit {room.room_number} updated: {fields}.",
    )


def log_bulk_room_update(store, user, updated_ids, changed_fields):
    fields = ", ".join(sorted(changed_fields)) or "no fields"
    return log_action(
        store,
        user,
        LogAction.BULK_ROOM_UPDATE,
        f"{len(updated_ids)} units updated in bulk: {fields}.",
    )


def log_rent_payment(store, user, payment):
    """Log rent payment"""
    return log_action(
        store,
        user,
        LogAction.PAYMENT_RECORDED,
        f"Collected {payment.amount} for unit {payment.room_number}.",
    )


def log_employee_change(store, user, action, employee, description=None):
    """Log employee creation, update or removal"""
    return log_action(
        store,
        user,
        action,
        description or f"{employee.full_name} ({employee.username})",
    )


def log_access_toggle(store, user, assignment, employee, room):
    """Log room access grant/revocation"""
    verb = "Granted" if assignment.is_enabled else "Revoked"
    return log_action(
        store,
        user,
        LogAction.ACCESS_TOGGLED,
        f"{verb} {employee.username} access to unit {room.room_number}.",
    )


def get_logs(store):
    """All log entries, newest first"""
    return ActivityLogRepository(store).newest_first()


def get_user_activity(store, user, limit=100):
    """
    Get recent activity for a specific user.

    Args:
        store: EntityStore
        user: User instance
        limit: Maximum number of logs to return

    Returns:
        List of ActivityLogDTO entries, newest first
    """
    return ActivityLogRepository(store).for_user(user.id)[:limit]
