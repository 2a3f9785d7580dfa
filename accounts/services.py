"""
Account Service Layer
Handles login/session resolution and staff (employee) management.
Follows Service Layer pattern for separation of concerns.
"""
from typing import Any, Dict, List, Optional

from audit.helpers import log_employee_change
from common.logging_config import clear_session_user, set_session_user
from core.access import can_manage_staff
from core.constants import LogAction, UserRole
from core.dto import PermissionsDTO, UserDTO
from core.exceptions import NotFoundError, ValidationError
from core.repositories import EntityStore, SessionRepository
from core.services import BaseService
from core.signals import user_logged_in, user_logged_out
from core.validators import serializer_error
from rooms.repositories import RoomAssignmentRepository
from .repositories import UserRepository
from .serializers import EmployeeSerializer, EmployeeUpdateSerializer

# Granted to newly registered employees
DEFAULT_EMPLOYEE_PERMISSIONS = PermissionsDTO(can_view_payments=True)


class AuthService(BaseService):
    """
    Service for session handling.
    The stored session is a snapshot; it is always resolved against the live
    user record so permission and coin changes are seen immediately.
    """

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.user_repo = UserRepository(store)
        self.session_repo = SessionRepository(store)

    def login(self, username: str, password: str) -> Optional[UserDTO]:
        """
        Authenticate with plain-text credentials.

        Returns:
            The user on success, None for unknown credentials or inactive users
        """
        user = self.user_repo.get_by_credentials(username, password)
        if user is None or not user.is_active:
            self.log_warning("Failed login attempt", username=username)
            return None

        self.session_repo.set(user)
        set_session_user(user)
        user_logged_in.send(sender=self.store, user=user)
        self.log_info(f"User logged in: {user.username}", user_id=user.id)
        return user

    def logout(self) -> None:
        user = self.get_current_user()
        if user:
            user_logged_out.send(sender=self.store, user=user)
            self.log_info(f"User logged out: {user.username}", user_id=user.id)
        self.session_repo.clear()
        clear_session_user()

    def get_current_user(self) -> Optional[UserDTO]:
        """Resolve the session snapshot to the live user record"""
        session = self.session_repo.get()
        if session is None:
            return None
        return self.user_repo.get_by_id(session.id)


class StaffService(BaseService):
    """Service for employee management (ADMIN only)"""

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.user_repo = UserRepository(store)
        self.assignment_repo = RoomAssignmentRepository(store)

    def _require_admin(self, actor, action: str):
        self.require_user(actor)
        if not can_manage_staff(actor):
            self.deny(actor, action)

    def get_employees(self, actor) -> List[UserDTO]:
        self._require_admin(actor, "view staff")
        return self.user_repo.get_employees()

    def get_employee(self, actor, employee_id: str) -> UserDTO:
        self._require_admin(actor, "view staff")
        employee = self.user_repo.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(resource_type="User", resource_id=employee_id)
        return employee

    def add_employee(self, actor, fields: Dict[str, Any]) -> UserDTO:
        """
        Register a new employee.

        Args:
            actor: Session user (must be ADMIN)
            fields: full_name, username, password, optional email and permissions

        Returns:
            Created UserDTO

        Raises:
            UnauthorizedError: If actor is not an admin
            ValidationError: On missing fields or a duplicate username
        """
        self._require_admin(actor, "add employees")

        serializer = EmployeeSerializer(data=fields)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_EMPLOYEE")
        data = serializer.validated_data

        if self.user_repo.username_taken(data['username']):
            raise ValidationError(
                message=f"Username {data['username']} is already taken",
                code="DUPLICATE_USERNAME",
            )

        permissions = DEFAULT_EMPLOYEE_PERMISSIONS.merged(dict(data.get('permissions', {})))
        employee = self.user_repo.add(UserDTO(
            username=data['username'],
            password=data['password'],
            full_name=data['full_name'],
            email=data.get('email', ''),
            role=UserRole.EMPLOYEE,
            is_active=True,
            permissions=permissions,
        ))

        log_employee_change(self.store, actor, LogAction.EMPLOYEE_ADDED, employee)
        self.log_info(f"Employee added: {employee.username}", employee_id=employee.id)
        return employee

    def update_employee(self, actor, employee_id: str, fields: Dict[str, Any]) -> UserDTO:
        """
        Merge credentials, targets, coins, activity flag or permissions.
        Permissions merge key-wise so a single flag can be toggled.
        """
        self._require_admin(actor, "update employees")

        employee = self.user_repo.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(resource_type="User", resource_id=employee_id)

        serializer = EmployeeUpdateSerializer(data=fields, partial=True)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_EMPLOYEE")
        changes = dict(serializer.validated_data)

        if 'username' in changes and self.user_repo.username_taken(changes['username'], exclude_id=employee_id):
            raise ValidationError(
                message=f"Username {changes['username']} is already taken",
                code="DUPLICATE_USERNAME",
            )
        if 'permissions' in changes:
            changes['permissions'] = {**employee.permissions.to_dict(), **changes['permissions']}

        updated = self.user_repo.update(employee_id, **changes)

        log_employee_change(
            self.store, actor, LogAction.EMPLOYEE_UPDATED, updated,
            description=f"{updated.full_name} updated: {', '.join(sorted(changes)) or 'no fields'}.",
        )
        self.log_info(f"Employee updated: {updated.username}", employee_id=employee_id, fields=sorted(changes))
        return updated

    def grant_all_permissions(self, actor, employee_id: str) -> UserDTO:
        return self.update_employee(actor, employee_id, {'permissions': PermissionsDTO.all_granted().to_dict()})

    def delete_employee(self, actor, employee_id: str) -> None:
        """Remove an employee and every room assignment they hold"""
        self._require_admin(actor, "delete employees")

        employee = self.user_repo.get_by_id(employee_id)
        if employee is None or employee.role != UserRole.EMPLOYEE:
            raise NotFoundError(resource_type="Employee", resource_id=employee_id)

        self.user_repo.delete(employee_id)
        removed = self.assignment_repo.delete_for_user(employee_id)

        log_employee_change(self.store, actor, LogAction.EMPLOYEE_REMOVED, employee)
        self.log_info(f"Employee deleted: {employee.username}", employee_id=employee_id, assignments_removed=removed)
