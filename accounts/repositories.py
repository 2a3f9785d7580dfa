"""
User repository - Data access layer for console users.
"""
from typing import List, Optional

from core.constants import StorageKey, UserRole
from core.dto import PermissionsDTO, UserDTO
from core.repositories import CollectionRepository, EntityStore

# Present until the users collection is first written
DEFAULT_ADMIN = UserDTO(
    id='1',
    username='admin',
    password='password123',
    full_name='System Admin',
    email='admin@rms.com',
    role=UserRole.ADMIN,
    is_active=True,
    permissions=PermissionsDTO.all_granted(),
)


class UserRepository(CollectionRepository[UserDTO]):
    """Repository for UserDTO records"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.USERS, UserDTO, initial=[DEFAULT_ADMIN.to_dict()])

    def get_by_credentials(self, username: str, password: str) -> Optional[UserDTO]:
        """Plain-text credential match"""
        return next(
            (user for user in self.all() if user.username == username and user.password == password),
            None,
        )

    def get_employees(self) -> List[UserDTO]:
        return self.filter(role=UserRole.EMPLOYEE)

    def username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        return any(user.username == username and user.id != exclude_id for user in self.all())

    def is_seeded(self) -> bool:
        """True once the users collection has been persisted"""
        return self.store.get(self.key) is not None
