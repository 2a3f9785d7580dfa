from audit.helpers import get_logs, get_user_activity, log_action
from core.constants import LogAction


def test_log_action_records_entry(store, admin):
    entry = log_action(store, admin, LogAction.SETTINGS_UPDATED, "show_leaderboard=False")

    assert len(entry.id) == 9
    assert entry.timestamp
    assert entry.user_id == admin.id
    assert entry.user_name == 'System Admin'
    assert get_logs(store) == [entry]


def test_logs_are_capped_and_newest_first(store, admin):
    for index in range(505):
        log_action(store, admin, LogAction.ROOM_UPDATED, f"entry {index}")

    logs = get_logs(store)

    assert len(logs) == 500
    assert logs[0].details == "entry 504"
    assert logs[-1].details == "entry 5"


def test_retention_follows_setting(store, admin, settings):
    settings.RMS_LOG_RETENTION = 3
    for index in range(5):
        log_action(store, admin, LogAction.ROOM_UPDATED, f"entry {index}")

    assert [entry.details for entry in get_logs(store)] == ["entry 4", "entry 3", "entry 2"]


def test_log_failure_does_not_raise(store):
    assert log_action(store, None, LogAction.LOGIN, "no user") is None
    assert get_logs(store) == []


def test_user_activity(store, admin, make_employee):
    employee = make_employee()
    log_action(store, employee, LogAction.FEEDBACK_SUBMITTED, "first")
    log_action(store, employee, LogAction.FEEDBACK_SUBMITTED, "second")

    activity = get_user_activity(store, employee, limit=1)

    assert [entry.details for entry in activity] == ["second"]

