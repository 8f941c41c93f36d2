from az_snapshot.orchestration import CreateState, RestoreState, StateTracker


class TestStateTracker:

    def test_history_and_current(self):
        tracker = StateTracker()
        tracker.enter(RestoreState.SNAPSHOT_SELECTION)
        tracker.enter(RestoreState.CONFIRM)

        assert tracker.current == RestoreState.CONFIRM
        assert tracker.history == [RestoreState.SNAPSHOT_SELECTION, RestoreState.CONFIRM]
        assert not tracker.is_finished()

    def test_has_succeeded_needs_every_state(self):
        tracker = StateTracker()
        tracker.add_operation(RestoreState.ATTACH_NEW_DISK, True, "attached")
        tracker.add_operation(RestoreState.START_VM, False, "no capacity")

        assert tracker.has_succeeded(RestoreState.ATTACH_NEW_DISK)
        assert not tracker.has_succeeded(RestoreState.ATTACH_NEW_DISK, RestoreState.START_VM)

    def test_terminal_states(self):
        for state in (CreateState.DONE, CreateState.ABORTED, RestoreState.FAILED):
            tracker = StateTracker()
            tracker.enter(state)
            assert tracker.is_finished()

    def test_summary_counts_failures(self):
        tracker = StateTracker()
        tracker.add_operation(RestoreState.CREATE_DISK_FROM_SNAPSHOT, True, "created")
        tracker.add_operation(RestoreState.STOP_VM, False, "failed")

        summary = tracker.get_summary()

        assert summary.startswith("Operations: 1/2 succeeded, 1 failed")
        assert tracker.operations[0].operation_name == "Create Disk"
