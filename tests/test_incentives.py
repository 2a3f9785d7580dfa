from datetime import timedelta
from decimal import Decimal

import pytest

from core.constants import IncentivePolicy, RoomStatus
from core.exceptions import ValidationError
from rent.incentives import IncentiveEngine
from rent.services import LedgerService

from conftest import TODAY, YESTERDAY


@pytest.fixture
def collector(make_employee, make_room, users):
    make_room(id='r1', status=RoomStatus.OCCUPIED, current_balance=Decimal('1000'))
    employee = make_employee(can_add_payments=True)

    def _set(**fields):
        return users.update(employee.id, **fields)
    return _set


def test_reaching_daily_target_awards_coins(ledger, collector, users):
    employee = collector(
        daily_target=Decimal('100'), daily_collected=Decimal('90'),
        last_collection_date=TODAY.isoformat(), coins=3,
    )

    ledger.record_payment(employee, 'r1', 15)

    updated = users.get_by_id(employee.id)
    assert updated.daily_collected == Decimal('105')
    assert updated.coins == 8


def test_new_day_resets_daily_collected(ledger, collector, users):
    employee = collector(
        daily_target=Decimal('100'), daily_collected=Decimal('500'),
        last_collection_date=YESTERDAY.isoformat(),
    )

    ledger.record_payment(employee, 'r1', 40)

    updated = users.get_by_id(employee.id)
    assert updated.daily_collected == Decimal('40')
    assert updated.last_collection_date == TODAY.isoformat()


def test_total_collected_accumulates_across_days(ledger, collector, users):
    employee = collector(total_collected=Decimal('1200'), last_collection_date=YESTERDAY.isoformat())

    ledger.record_payment(employee, 'r1', 30)

    assert users.get_by_id(employee.id).total_collected == Decimal('1230')


def test_penalty_never_goes_below_zero(ledger, collector, users):
    employee = collector(daily_target=Decimal('100'), coins=0)

    ledger.record_payment(employee, 'r1', 10)

    assert users.get_by_id(employee.id).coins == 0


def test_each_sub_target_payment_costs_a_coin(ledger, collector, users):
    employee = collector(daily_target=Decimal('100'), coins=4)

    ledger.record_payment(employee, 'r1', 10)
    ledger.record_payment(employee, 'r1', 10)

    assert users.get_by_id(employee.id).coins == 2


def test_no_daily_target_leaves_coins_alone(ledger, collector, users):
    employee = collector(coins=7)

    ledger.record_payment(employee, 'r1', 500)

    assert users.get_by_id(employee.id).coins == 7


def test_per_payment_policy_rewards_every_qualifying_payment(ledger, collector, users):
    employee = collector(daily_target=Decimal('50'))

    ledger.record_payment(employee, 'r1', 60)
    ledger.record_payment(employee, 'r1', 5)

    assert users.get_by_id(employee.id).coins == 10


def test_once_per_day_policy_rewards_once(store, collector, users):
    today = [TODAY]
    engine = IncentiveEngine(store, policy=IncentivePolicy.ONCE_PER_DAY, today=lambda: today[0])
    ledger = LedgerService(store, incentives=engine)
    employee = collector(daily_target=Decimal('50'))

    ledger.record_payment(employee, 'r1', 60)
    ledger.record_payment(employee, 'r1', 5)
    assert users.get_by_id(employee.id).coins == 5

    today[0] = TODAY + timedelta(days=1)
    ledger.record_payment(employee, 'r1', 20)
    assert users.get_by_id(employee.id).coins == 4
    ledger.record_payment(employee, 'r1', 40)
    assert users.get_by_id(employee.id).coins == 9


def test_unknown_policy_is_rejected(store):
    with pytest.raises(ValidationError):
        IncentiveEngine(store, policy='hourly')


def test_policy_defaults_to_setting(store, settings):
    settings.RMS_INCENTIVE_POLICY = IncentivePolicy.ONCE_PER_DAY
    assert IncentiveEngine(store).policy == IncentivePolicy.ONCE_PER_DAY


def test_collector_progress(engine, collector):
    employee = collector(
        daily_target=Decimal('200'), daily_collected=Decimal('50'),
        last_collection_date=TODAY.isoformat(), target_amount=Decimal('6000'), min_amount=Decimal('4000'),
    )

    progress = engine.collector_progress(employee)

    assert progress.daily_percentage == 25
    assert progress.daily_collected == Decimal('50')
    assert progress.target_amount == Decimal('6000')
    assert progress.min_amount == Decimal('4000')


def test_collector_progress_ignores_stale_day(engine, collector):
    employee = collector(
        daily_target=Decimal('200'), daily_collected=Decimal('500'),
        last_collection_date=YESTERDAY.isoformat(),
    )

    progress = engine.collector_progress(employee)

    assert progress.daily_percentage == 0
    assert progress.daily_collected == Decimal('0')
