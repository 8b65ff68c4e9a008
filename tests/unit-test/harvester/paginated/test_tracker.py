from tastyharvest.harvester.paginated.tracker import (
    NUM_IGNORED_ROWS_BEFORE_STOPPING,
    ChangeTracker,
)


def test_threshold_default():
    assert NUM_IGNORED_ROWS_BEFORE_STOPPING == 20
    assert ChangeTracker().threshold == 20


def test_changed_records_are_not_counted():
    tracker = ChangeTracker()
    for _ in range(50):
        tracker.record_outcome(True)

    assert tracker.unchanged == 0
    assert not tracker.should_stop(partial_mode=True)


def test_stops_only_in_partial_mode():
    tracker = ChangeTracker()
    for _ in range(20):
        tracker.record_outcome(False)

    assert tracker.should_stop(partial_mode=True)
    assert not tracker.should_stop(partial_mode=False)


def test_below_threshold_does_not_stop():
    tracker = ChangeTracker()
    for _ in range(19):
        tracker.record_outcome(False)

    assert not tracker.should_stop(partial_mode=True)


def test_counter_is_not_reset_by_changed_records():
    """Test that unchanged records accumulate across the run, not as a streak."""
    tracker = ChangeTracker(threshold=4)
    for changed in [False, True, False, True, False, True, False]:
        tracker.record_outcome(changed)

    assert tracker.unchanged == 4
    assert tracker.should_stop(partial_mode=True)
