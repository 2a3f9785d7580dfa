from decimal import Decimal

import pytest

from audit.helpers import get_logs
from core.constants import LogAction, RoomStatus, RoomType
from core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from rooms.repositories import RoomRepository
from rooms.services import AssignmentService, RoomService


@pytest.fixture
def rooms(store):
    return RoomService(store)


@pytest.fixture
def assignments(store):
    return AssignmentService(store)


def test_add_room_round_trip(store, rooms, admin):
    fields = {
        'room_number': '204',
        'type': RoomType.DOUBLE,
        'status': RoomStatus.AVAILABLE,
        'floor': '2',
        'building': 'Palm Tower',
        'monthly_rent': '1500.00',
        'monthly_expenses': '120.00',
        'is_open_ended': False,
    }

    created = rooms.add_room(admin, fields)
    stored = rooms.get_room(admin, created.id)

    assert len(stored.id) == 9
    assert stored.created_at
    assert stored.room_number == '204'
    assert stored.type == RoomType.DOUBLE
    assert stored.status == RoomStatus.AVAILABLE
    assert stored.floor == '2'
    assert stored.building == 'Palm Tower'
    assert stored.monthly_rent == Decimal('1500')
    assert stored.monthly_expenses == Decimal('120')
    assert stored.target_collection == Decimal('0')
    assert stored.min_collection == Decimal('0')
    assert stored.current_balance == Decimal('0')


def test_occupied_room_starts_owing_rent(rooms, admin):
    room = rooms.add_room(admin, {
        'room_number': '301',
        'status': RoomStatus.OCCUPIED,
        'monthly_rent': 2200,
        'occupancy_start_date': '2026-03-01',
        'is_open_ended': True,
    })

    assert room.current_balance == Decimal('2200')
    assert room.occupancy_start_date == '2026-03-01'


def test_occupied_room_requires_occupancy_date(store, rooms, admin):
    with pytest.raises(ValidationError):
        rooms.add_room(admin, {'room_number': '301', 'status': RoomStatus.OCCUPIED, 'monthly_rent': 2200})

    assert RoomRepository(store).all() == []


def test_rent_above_cap_adds_nothing(store, rooms, admin):
    with pytest.raises(ValidationError) as exc:
        rooms.add_room(admin, {'room_number': '999', 'monthly_rent': 10000})

    assert exc.value.code == "RENT_AMOUNT_TOO_LARGE"
    assert RoomRepository(store).all() == []


@pytest.mark.parametrize("fields", [
    {'monthly_rent': 100},
    {'room_number': '1', 'monthly_rent': -1},
    {'room_number': '1', 'monthly_rent': 100, 'status': 'DEMOLISHED'},
    {'room_number': '1', 'monthly_rent': 100, 'occupancy_start_date': '2026-03-10',
     'occupancy_end_date': '2026-03-01'},
])
def test_add_room_rejects_bad_input(rooms, admin, fields):
    with pytest.raises(ValidationError):
        rooms.add_room(admin, fields)


def test_room_edits_need_permission(rooms, make_employee):
    with pytest.raises(UnauthorizedError) as exc:
        rooms.add_room(None, {'room_number': '1', 'monthly_rent': 100})
    assert exc.value.code == "NO_SESSION"

    with pytest.raises(UnauthorizedError):
        rooms.add_room(make_employee(), {'room_number': '1', 'monthly_rent': 100})

    mover = make_employee(username='mover', can_move_tenants=True)
    assert rooms.add_room(mover, {'room_number': '1', 'monthly_rent': 100}).room_number == '1'


def test_update_room_merges_fields(store, rooms, admin, make_room):
    make_room(id='r1', building='Old Wing', current_balance=Decimal('250'))

    updated = rooms.update_room(admin, 'r1', {'building': 'New Wing', 'current_balance': 0})

    assert updated.building == 'New Wing'
    assert updated.room_number == '101'
    assert updated.current_balance == Decimal('250')
    assert get_logs(store)[0].action == LogAction.ROOM_UPDATED


def test_update_room_checks_rent_cap(store, rooms, admin, make_room):
    make_room(id='r1')

    with pytest.raises(ValidationError):
        rooms.update_room(admin, 'r1', {'monthly_rent': 12000})

    assert RoomRepository(store).get_by_id('r1').monthly_rent == Decimal('500')


def test_update_missing_room(rooms, admin):
    with pytest.raises(NotFoundError):
        rooms.update_room(admin, 'ghost', {'floor': '3'})


def test_update_to_occupied_uses_stored_occupancy_date(rooms, admin, make_room):
    make_room(id='r1', occupancy_start_date='2026-02-01')

    updated = rooms.update_room(admin, 'r1', {'status': RoomStatus.OCCUPIED})

    assert updated.status == RoomStatus.OCCUPIED


def test_bulk_update_skips_unknown_ids(store, rooms, admin, make_room):
    make_room(id='r1')
    make_room(id='r2', room_number='102')

    updated = rooms.bulk_update_rooms(admin, ['r1', 'ghost'], {'status': RoomStatus.MAINTENANCE})

    assert [room.id for room in updated] == ['r1']
    repo = RoomRepository(store)
    assert repo.get_by_id('r1').status == RoomStatus.MAINTENANCE
    assert repo.get_by_id('r2').status == RoomStatus.AVAILABLE
    assert get_logs(store)[0].action == LogAction.BULK_ROOM_UPDATE


def test_bulk_update_to_occupied_needs_no_dates(store, rooms, admin, make_room):
    make_room(id='r1')

    rooms.bulk_update_rooms(admin, ['r1'], {'status': RoomStatus.OCCUPIED})

    assert RoomRepository(store).get_by_id('r1').status == RoomStatus.OCCUPIED


def test_bulk_update_checks_rent_cap(store, rooms, admin, make_room):
    make_room(id='r1')

    with pytest.raises(ValidationError):
        rooms.bulk_update_rooms(admin, ['r1'], {'monthly_rent': 10000})


def test_employee_sees_only_assigned_rooms(rooms, assignments, admin, make_employee, make_room):
    make_room(id='r1')
    make_room(id='r2', room_number='102')
    employee = make_employee()

    assert rooms.get_rooms(employee) == []
    with pytest.raises(NotFoundError):
        rooms.get_room(employee, 'r1')

    assignments.toggle_assignment(admin, employee.id, 'r1')
    first = rooms.get_rooms(employee)
    assert [room.id for room in first] == ['r1']
    assert rooms.get_rooms(employee) == first

    assignments.toggle_assignment(admin, employee.id, 'r1')
    assert rooms.get_rooms(employee) == []


def test_toggle_assignment_requires_known_user_and_room(assignments, admin, make_employee, make_room):
    make_room(id='r1')
    employee = make_employee()

    with pytest.raises(NotFoundError):
        assignments.toggle_assignment(admin, 'nobody', 'r1')
    with pytest.raises(NotFoundError):
        assignments.toggle_assignment(admin, employee.id, 'ghost')
    with pytest.raises(UnauthorizedError):
        assignments.toggle_assignment(employee, employee.id, 'r1')


def test_toggle_assignment_is_logged(store, assignments, admin, make_employee, make_room):
    make_room(id='r1')
    employee = make_employee()

    assignment = assignments.toggle_assignment(admin, employee.id, 'r1')

    assert assignments.get_assignments(admin) == [assignment]
    entry = get_logs(store)[0]
    assert entry.action == LogAction.ACCESS_TOGGLED
    assert 'Granted' in entry.details
