from decimal import Decimal

import pytest

from core.constants import LogAction, RoomStatus, StorageKey
from core.exceptions import UnauthorizedError


def test_collection_day_end_to_end(console):
    admin = console.login('admin', 'password123')
    room = console.add_room({
        'room_number': '101', 'status': RoomStatus.OCCUPIED,
        'monthly_rent': 500, 'occupancy_start_date': '2026-03-01',
    })
    employee = console.add_employee({
        'full_name': 'Sara Khan', 'username': 'sara', 'password': 'secret',
        'permissions': {'can_add_payments': True},
    })
    console.update_employee(employee.id, {'daily_target': 100})
    console.toggle_assignment(employee.id, room.id)
    console.logout()

    assert console.login('sara', 'secret').id == employee.id
    assert [r.id for r in console.get_rooms()] == [room.id]
    console.add_payment({'room_id': room.id, 'amount': '150'})

    me = console.get_current_user()
    assert me.coins == 5
    assert me.total_collected == Decimal('150')
    assert console.get_room(room.id).current_balance == Decimal('350')
    with pytest.raises(UnauthorizedError):
        console.get_logs()
    console.logout()

    console.login('admin', 'password123')
    actions = [entry.action for entry in console.get_logs()]
    assert actions[:3] == [LogAction.LOGIN, LogAction.LOGOUT, LogAction.PAYMENT_RECORDED]
    assert console.get_current_user().id == admin.id
    assert console.get_dashboard().overdue_count == 1


def test_logged_out_console_sees_nothing(console, make_room):
    make_room(id='r1')

    assert console.get_current_user() is None
    assert console.get_rooms() == []
    assert console.get_payments() == []
    with pytest.raises(UnauthorizedError):
        console.record_payment('r1', 10)


def test_subscribers_are_notified_after_writes(console):
    keys = []

    def handler(sender, key, **kwargs):
        keys.append(key)

    console.subscribe(handler)
    try:
        console.login('admin', 'password123')
        console.update_settings({'show_leaderboard': False})
    finally:
        console.unsubscribe(handler)
    console.logout()

    assert StorageKey.SESSION in keys
    assert StorageKey.SETTINGS in keys
    assert StorageKey.LOGS in keys
    assert keys.count(StorageKey.SESSION) == 1
