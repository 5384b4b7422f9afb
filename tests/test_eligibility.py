from datetime import timedelta
import pytest

from notifier.eligibility import find_obligations_needing_notification


def test_seven_days_out_is_eligible_at_seven(store, now):
    obligation = store.add_obligation(now + timedelta(days=7))

    eligible = find_obligations_needing_notification(store, now)

    assert len(eligible) == 1
    assert eligible[0].id == obligation.id
    assert eligible[0].notification_threshold == 7
    assert eligible[0].days_until_deadline == 7
    assert eligible[0].owner_email == obligation.owner_email


def test_existing_record_for_threshold_blocks_eligibility(store, now):
    obligation = store.add_obligation(now + timedelta(days=7))
    store.append_notification_record(obligation.id, 1, "EMAIL", 7, True)

    assert find_obligations_needing_notification(store, now) == []


def test_failed_record_also_blocks_eligibility(store, now):
    obligation = store.add_obligation(now + timedelta(days=1))
    store.append_notification_record(obligation.id, 1, "EMAIL", 1, False, "SMTP down")

    assert find_obligations_needing_notification(store, now) == []


def test_record_for_other_threshold_does_not_block(store, now):
    obligation = store.add_obligation(now + timedelta(days=7))
    store.append_notification_record(obligation.id, 1, "EMAIL", 30, True)

    eligible = find_obligations_needing_notification(store, now)
    assert [e.notification_threshold for e in eligible] == [7]


def test_overdue_obligation_is_not_matched(store, now):
    store.add_obligation(now - timedelta(days=3))

    assert find_obligations_needing_notification(store, now) == []


def test_handled_obligations_are_never_eligible(store, now):
    store.add_obligation(now + timedelta(days=1), status="HANDLED")
    store.add_obligation(now + timedelta(days=7), status="HANDLED")

    assert find_obligations_needing_notification(store, now) == []


def test_handled_rows_from_a_loose_store_are_still_skipped(store, now):
    handled = store.add_obligation(now + timedelta(days=7), status="HANDLED")
    store.list_active_obligations_due_within = lambda days, when: [handled]

    assert find_obligations_needing_notification(store, now) == []


def test_obligations_between_bands_are_skipped(store, now):
    store.add_obligation(now + timedelta(days=4))
    store.add_obligation(now + timedelta(days=15))

    assert find_obligations_needing_notification(store, now) == []


def test_result_keeps_fetch_order(store, now):
    first = store.add_obligation(now + timedelta(days=30))
    store.add_obligation(now + timedelta(days=4))
    second = store.add_obligation(now + timedelta(days=1))
    third = store.add_obligation(now + timedelta(days=6, hours=2))

    eligible = find_obligations_needing_notification(store, now)

    assert [e.id for e in eligible] == [first.id, second.id, third.id]
    assert [e.notification_threshold for e in eligible] == [30, 1, 7]


def test_scanning_twice_yields_the_same_set(store, now):
    store.add_obligation(now + timedelta(days=30))
    store.add_obligation(now + timedelta(days=2))

    first = find_obligations_needing_notification(store, now)
    second = find_obligations_needing_notification(store, now)

    assert first == second
    assert store.records == []


def test_storage_errors_propagate(store, now):
    store.fail_on_list = RuntimeError("database unavailable")

    with pytest.raises(RuntimeError, match="database unavailable"):
        find_obligations_needing_notification(store, now)
