"""
Room and assignment repositories - Data access layer for the room inventory.
"""
from typing import Optional

from core.constants import StorageKey
from core.dto import RoomAssignmentDTO, RoomDTO
from core.repositories import CollectionRepository, EntityStore


class RoomRepository(CollectionRepository[RoomDTO]):
    """Repository for RoomDTO records"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.ROOMS, RoomDTO)


class RoomAssignmentRepository(CollectionRepository[RoomAssignmentDTO]):
    """Repository for room visibility grants"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.ASSIGNMENTS, RoomAssignmentDTO)

    def get_for(self, user_id: str, room_id: str) -> Optional[RoomAssignmentDTO]:
        return next(
            (a for a in self.all() if a.user_id == user_id and a.room_id == room_id),
            None,
        )

    def toggle(self, user_id: str, room_id: str) -> RoomAssignmentDTO:
        """
        Flip is_enabled on the existing grant, or create it enabled.

        Returns:
            The assignment after toggling
        """
        existing = self.get_for(user_id, room_id)
        if existing is None:
            return self.add(RoomAssignmentDTO(user_id=user_id, room_id=room_id, is_enabled=True))
        return self.update(existing.id, is_enabled=not existing.is_enabled)

    def delete_for_user(self, user_id: str) -> int:
        """Remove every grant held by the user; returns how many were removed"""
        assignments = self.all()
        remaining = [a for a in assignments if a.user_id != user_id]
        removed = len(assignments) - len(remaining)
        if removed:
            self.save_all(remaining)
        return removed
