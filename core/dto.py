"""
Data Transfer Objects (DTOs).
Records kept in the entity store. Each DTO converts to and from the
JSON-serializable dict stored in its collection.
"""
from dataclasses import dataclass, field, fields, asdict
from decimal import Decimal
from typing import Any, ClassVar, Dict, Optional, Tuple

from core.constants import (
    FeedbackStatus,
    FeedbackType,
    PaymentStatus,
    RoomStatus,
    RoomType,
    UserRole,
)

ZERO = Decimal('0')


def to_decimal(value) -> Decimal:
    """Coerce a stored number (int, float or string) to Decimal"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class RecordMixin:
    """Dict conversion shared by all stored records"""
    decimal_fields: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        for name in cls.decimal_fields:
            if values.get(name) is not None:
                values[name] = to_decimal(values[name])
        return cls(**values)

    def merged(self, updates: Dict[str, Any]):
        """Return a copy with ``updates`` merged over the current fields"""
        data = self.to_dict()
        data.update(updates)
        return type(self).from_dict(data)


@dataclass
class PermissionsDTO(RecordMixin):
    """Per-user permission flags"""
    can_move_tenants: bool = False
    can_view_payments: bool = False
    can_add_payments: bool = False
    can_edit_payments: bool = False

    @classmethod
    def all_granted(cls) -> 'PermissionsDTO':
        return cls(True, True, True, True)


@dataclass
class UserDTO(RecordMixin):
    """Console user (admin or employee) with collection-incentive counters"""
    id: str = ''
    username: str = ''
    password: str = ''
    full_name: str = ''
    email: str = ''
    role: str = UserRole.EMPLOYEE
    is_active: bool = True
    permissions: PermissionsDTO = field(default_factory=PermissionsDTO)
    coins: int = 0
    target_amount: Decimal = ZERO
    min_amount: Decimal = ZERO
    daily_target: Decimal = ZERO
    total_collected: Decimal = ZERO
    daily_collected: Decimal = ZERO
    last_collection_date: Optional[str] = None
    reward_date: Optional[str] = None

    decimal_fields: ClassVar[Tuple[str, ...]] = (
        'target_amount', 'min_amount', 'daily_target', 'total_collected', 'daily_collected',
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserDTO':
        user = super().from_dict(data)
        if isinstance(user.permissions, dict):
            user.permissions = PermissionsDTO.from_dict(user.permissions)
        user.coins = int(user.coins or 0)
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass
class RoomDTO(RecordMixin):
    """Rentable room with its running balance"""
    id: str = ''
    room_number: str = ''
    type: str = RoomType.SINGLE
    status: str = RoomStatus.AVAILABLE
    floor: str = ''
    building: str = ''
    monthly_rent: Decimal = ZERO
    monthly_expenses: Decimal = ZERO
    current_balance: Decimal = ZERO
    target_collection: Decimal = ZERO
    min_collection: Decimal = ZERO
    created_at: Optional[str] = None
    last_maintained: Optional[str] = None
    maintenance_cost: Optional[Decimal] = None
    maintenance_end_date: Optional[str] = None
    occupancy_start_date: Optional[str] = None
    occupancy_end_date: Optional[str] = None
    is_open_ended: bool = False
    reservation_start_date: Optional[str] = None
    reservation_end_date: Optional[str] = None

    decimal_fields: ClassVar[Tuple[str, ...]] = (
        'monthly_rent', 'monthly_expenses', 'current_balance',
        'target_collection', 'min_collection', 'maintenance_cost',
    )

    @property
    def is_occupied(self) -> bool:
        return self.status == RoomStatus.OCCUPIED

    @property
    def projection(self) -> Decimal:
        """Monthly net projection: rent if occupied, minus expenses"""
        revenue = self.monthly_rent if self.is_occupied else ZERO
        return revenue - (self.monthly_expenses or ZERO)


@dataclass
class RoomAssignmentDTO(RecordMixin):
    """Visibility grant of a room to a non-admin user"""
    id: str = ''
    user_id: str = ''
    room_id: str = ''
    is_enabled: bool = True


@dataclass
class PaymentDTO(RecordMixin):
    """Immutable payment transaction"""
    id: str = ''
    room_id: str = ''
    room_number: str = ''
    amount: Decimal = ZERO
    date: str = ''
    status: str = PaymentStatus.PAID
    recorded_by: str = ''
    recorded_by_id: str = ''

    decimal_fields: ClassVar[Tuple[str, ...]] = ('amount',)


@dataclass
class FeedbackDTO(RecordMixin):
    id: str = ''
    user_id: str = ''
    user_name: str = ''
    type: str = FeedbackType.FEEDBACK
    content: str = ''
    timestamp: str = ''
    status: str = FeedbackStatus.PENDING


@dataclass
class ActivityLogDTO(RecordMixin):
    id: str = ''
    timestamp: str = ''
    user_id: str = ''
    user_name: str = ''
    action: str = ''
    details: str = ''


@dataclass
class SettingsDTO(RecordMixin):
    show_leaderboard: bool = True
