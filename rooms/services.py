"""
Room service - Business logic layer for the room inventory.
Services orchestrate repositories and contain business rules.
"""
from typing import Any, Dict, Iterable, List

from django.utils import timezone

from accounts.repositories import UserRepository
from audit.helpers import log_access_toggle, log_bulk_room_update, log_room_create, log_room_update
from core.access import can_edit_rooms, can_manage_staff, filter_visible_rooms
from core.constants import RoomStatus
from core.dto import ZERO, RoomAssignmentDTO, RoomDTO
from core.exceptions import NotFoundError
from core.repositories import EntityStore
from core.services import BaseService
from core.validators import RentValidator, serializer_error
from .repositories import RoomAssignmentRepository, RoomRepository
from .serializers import RoomSerializer


class RoomService(BaseService):
    """Service for room-related business logic"""

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.room_repo = RoomRepository(store)
        self.assignment_repo = RoomAssignmentRepository(store)

    def _require_editor(self, actor, action: str):
        self.require_user(actor)
        if not can_edit_rooms(actor):
            self.deny(actor, action)

    def get_rooms(self, user) -> List[RoomDTO]:
        """Rooms visible to the user; empty when there is no session"""
        return filter_visible_rooms(user, self.room_repo.all(), self.assignment_repo.all())

    def get_room(self, user, room_id: str) -> RoomDTO:
        """
        Get a room with access control.

        Raises:
            NotFoundError: If the room doesn't exist or isn't visible to the user
        """
        room = next((room for room in self.get_rooms(user) if room.id == room_id), None)
        if room is None:
            raise NotFoundError(resource_type="Room", resource_id=room_id)
        return room

    def add_room(self, actor, fields: Dict[str, Any]) -> RoomDTO:
        """
        Register a new room.

        An occupied room starts owing its first month's rent; any other
        status starts at a zero balance.
        Occupied rooms are rejected here without an occupancy start date.

        Args:
            actor: Session user (ADMIN or can_move_tenants)
            fields: Room attributes, see RoomSerializer

        Returns:
            Created RoomDTO

        Raises:
            UnauthorizedError: No session or missing permission
            ValidationError: Invalid input or monthly rent above the cap
        """
        self._require_editor(actor, "add rooms")

        serializer = RoomSerializer(data=fields)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_ROOM")
        data = dict(serializer.validated_data)
        RentValidator.validate_rent_amount(data['monthly_rent'])

        room = RoomDTO(**data)
        room.current_balance = room.monthly_rent if room.status == RoomStatus.OCCUPIED else ZERO
        room.created_at = timezone.now().isoformat()
        room = self.room_repo.add(room)

        log_room_create(self.store, actor, room)
        self.log_info(f"Room created: {room.room_number}", room_id=room.id, status=room.status)
        return room

    def update_room(self, actor, room_id: str, fields: Dict[str, Any]) -> RoomDTO:
        """
        Merge ``fields`` into a room.

        Raises:
            NotFoundError: If the room doesn't exist
            ValidationError: Invalid input or resulting monthly rent above the cap
        """
        self._require_editor(actor, "edit rooms")

        room = self.room_repo.get_by_id(room_id)
        if room is None:
            raise NotFoundError(resource_type="Room", resource_id=room_id)

        serializer = RoomSerializer(room, data=fields, partial=True)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_ROOM")
        changes = dict(serializer.validated_data)
        RentValidator.validate_rent_amount(changes.get('monthly_rent', room.monthly_rent))

        updated = self.room_repo.update(room_id, **changes)

        log_room_update(self.store, actor, updated, changes.keys())
        self.log_info(f"Room updated: {updated.room_number}", room_id=room_id, fields=sorted(changes))
        return updated

    def bulk_update_rooms(self, actor, room_ids: Iterable[str], fields: Dict[str, Any]) -> List[RoomDTO]:
        """
        Apply the same partial update to many rooms.
        Unknown IDs are skipped. Occupancy dates are not required here.

        Returns:
            The rooms that were updated, in stored order
        """
        self._require_editor(actor, "edit rooms")

        serializer = RoomSerializer(data=fields, partial=True, context={'skip_occupancy_check': True})
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_ROOM")
        changes = dict(serializer.validated_data)
        if 'monthly_rent' in changes:
            RentValidator.validate_rent_amount(changes['monthly_rent'])

        wanted = set(room_ids)
        rooms = self.room_repo.all()
        updated = []
        for index, room in enumerate(rooms):
            if room.id in wanted:
                rooms[index] = room.merged(changes)
                updated.append(rooms[index])

        skipped = wanted - {room.id for room in updated}
        if skipped:
            self.log_warning("Bulk update skipped unknown rooms", room_ids=sorted(skipped))
        if updated:
            self.room_repo.save_all(rooms)
            log_bulk_room_update(self.store, actor, [room.id for room in updated], changes.keys())
            self.log_info("Rooms updated in bulk", count=len(updated), fields=sorted(changes))
        return updated


class AssignmentService(BaseService):
    """Service for granting employees visibility of rooms (ADMIN only)"""

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.assignment_repo = RoomAssignmentRepository(store)
        self.room_repo = RoomRepository(store)
        self.user_repo = UserRepository(store)

    def _require_admin(self, actor, action: str):
        self.require_user(actor)
        if not can_manage_staff(actor):
            self.deny(actor, action)

    def get_assignments(self, actor) -> List[RoomAssignmentDTO]:
        self._require_admin(actor, "view room assignments")
        return self.assignment_repo.all()

    def toggle_assignment(self, actor, user_id: str, room_id: str) -> RoomAssignmentDTO:
        """
        Grant or revoke a user's access to a room.

        Raises:
            NotFoundError: If the user or room doesn't exist
        """
        self._require_admin(actor, "assign rooms")

        employee = self.user_repo.get_by_id(user_id)
        if employee is None:
            raise NotFoundError(resource_type="User", resource_id=user_id)
        room = self.room_repo.get_by_id(room_id)
        if room is None:
            raise NotFoundError(resource_type="Room", resource_id=room_id)

        assignment = self.assignment_repo.toggle(user_id, room_id)

        log_access_toggle(self.store, actor, assignment, employee, room)
        self.log_info(
            "Room access toggled",
            user_id=user_id, room_id=room_id, is_enabled=assignment.is_enabled,
        )
        return assignment
