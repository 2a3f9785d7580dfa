import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.core.cache.backends.locmem import LocMemCache

from accounts.repositories import UserRepository
from accounts.services import StaffService
from core.constants import IncentivePolicy, RoomStatus
from core.dto import RoomDTO
from core.repositories import EntityStore
from rent.incentives import IncentiveEngine
from rent.services import LedgerService
from rms.console import Console
from rooms.repositories import RoomRepository

TODAY = date(2026, 3, 14)
YESTERDAY = date(2026, 3, 13)


@pytest.fixture
def store():
    """Fresh in-memory store per test"""
    return EntityStore(LocMemCache(f"rms-test-{uuid.uuid4().hex}", {"TIMEOUT": None}))


@pytest.fixture
def engine(store):
    return IncentiveEngine(store, policy=IncentivePolicy.PER_PAYMENT, today=lambda: TODAY)


@pytest.fixture
def ledger(store, engine):
    return LedgerService(store, incentives=engine)


@pytest.fixture
def console(store, engine):
    return Console(store, incentives=engine)


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def admin(users):
    return users.get_by_id('1')


@pytest.fixture
def make_employee(store, admin, users):
    """Register an employee; keyword arguments become permission flags"""
    def _make(username='sara', full_name='Sara Khan', **permissions):
        employee = StaffService(store).add_employee(admin, {
            'full_name': full_name,
            'username': username,
            'password': 'secret',
            'permissions': permissions,
        })
        return users.get_by_id(employee.id)
    return _make


@pytest.fixture
def make_room(store):
    """Store a room directly, bypassing validation"""
    def _make(**fields):
        values = {
            'room_number': '101',
            'status': RoomStatus.AVAILABLE,
            'monthly_rent': Decimal('500'),
        }
        values.update(fields)
        return RoomRepository(store).add(RoomDTO(**values))
    return _make
