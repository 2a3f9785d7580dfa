from decimal import Decimal

import pytest

from core.constants import RoomStatus
from dashboard.search import global_search
from rooms.repositories import RoomAssignmentRepository


@pytest.fixture
def populated(store, ledger, admin, make_room, make_employee):
    make_room(id='r1', room_number='A-101', building='Palm Tower', floor='1', status=RoomStatus.OCCUPIED)
    make_room(id='r2', room_number='B-202', building='Marina Court', floor='2')
    employee = make_employee(full_name='Palmer Jones', username='pjones', can_view_payments=False)
    RoomAssignmentRepository(store).toggle(employee.id, 'r2')
    ledger.record_payment(admin, 'r1', Decimal('100'))
    return employee


@pytest.mark.parametrize("query", ['', '   '])
def test_blank_query_returns_nothing(store, admin, populated, query):
    results = global_search(store, admin, query)
    assert (results.rooms, results.users, results.payments) == ([], [], [])


def test_no_user_returns_nothing(store, populated):
    results = global_search(store, None, 'palm')
    assert (results.rooms, results.users, results.payments) == ([], [], [])


def test_admin_search_is_case_insensitive(store, admin, populated):
    results = global_search(store, admin, '  PALM ')

    assert [room.id for room in results.rooms] == ['r1']
    assert [user.username for user in results.users] == ['pjones']


def test_payments_match_room_number_and_collector(store, admin, populated):
    assert len(global_search(store, admin, 'a-101').payments) == 1
    assert len(global_search(store, admin, 'system admin').payments) == 1


def test_employee_search_is_scoped(store, populated):
    by_building = global_search(store, populated, 'palm')
    assert by_building.rooms == []
    assert by_building.users == []

    assert [room.id for room in global_search(store, populated, 'marina').rooms] == ['r2']
    assert global_search(store, populated, 'a-101').payments == []


def test_results_capped_per_category(store, admin, make_room):
    for index in range(8):
        make_room(room_number=f'C-{index}', building='Creek Side')

    results = global_search(store, admin, 'creek')

    assert [room.room_number for room in results.rooms] == [f'C-{index}' for index in range(5)]
