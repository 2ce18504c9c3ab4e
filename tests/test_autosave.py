"""
Tests for the debounced autosave subscriber.
"""
import json
import time
from datetime import timedelta

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from habitally.core.repository import Repository
from habitally.core.serialization import HABITS, ONBOARDING
from habitally.services.autosave import AutoSaver
from habitally.services.storage import JsonFileStore, StorageWriteError


@pytest.fixture
def store(data_dir):
    return JsonFileStore(data_dir)


@pytest.fixture
def scheduler(mocker):
    fake = mocker.Mock(spec=BackgroundScheduler)
    fake.running = False
    return fake


@pytest.fixture
def saver(store, scheduler):
    autosaver = AutoSaver(Repository(), store, delay_ms=500, scheduler=scheduler)
    autosaver.start()
    return autosaver


def stored_names(store):
    raw = store.load(HABITS)
    return [record["name"] for record in json.loads(raw)] if raw is not None else None


@pytest.mark.unit
class TestScheduling:

    def test_start_subscribes_and_starts_scheduler(self, saver, scheduler):
        scheduler.start.assert_called_once_with()
        assert saver.on_change in saver.repository.change_callbacks
        assert saver.is_running

    def test_zero_delay_is_kept(self, store, scheduler):
        autosaver = AutoSaver(Repository(), store, delay_ms=0, scheduler=scheduler)
        assert autosaver.delay == timedelta(0)

    def test_change_schedules_replaceable_job(self, saver, scheduler, make_habit):
        saver.repository.add_habit(make_habit())

        _, kwargs = scheduler.add_job.call_args
        assert kwargs["id"] == "autosave_habits"
        assert kwargs["replace_existing"] is True
        assert kwargs["args"] == [HABITS]
        assert saver.pending_keys == [HABITS]

    def test_burst_of_changes_coalesces_into_one_write(self, saver, store, make_habit):
        for _ in range(5):
            saver.repository.add_habit(make_habit())

        assert saver.pending_keys == [HABITS]
        assert saver.flush()
        assert saver.save_count == 1
        assert len(stored_names(store)) == 5

    def test_snapshot_is_taken_at_change_time(self, saver, store, make_habit):
        saver.repository.add_habit(make_habit())
        saver.repository.change_callbacks.clear()
        saver.repository.add_habit(make_habit())

        saver.flush()

        assert len(stored_names(store)) == 1

    def test_nothing_written_before_delay(self, saver, store, make_habit):
        saver.repository.add_habit(make_habit())
        assert stored_names(store) is None

    def test_onboarding_flag_is_saved(self, saver, store):
        saver.repository.has_completed_onboarding = True
        saver.flush()
        assert store.load(ONBOARDING) == b"true"

    def test_scheduled_write_with_nothing_pending(self, saver):
        assert saver._write(HABITS)
        assert saver.save_count == 0


@pytest.mark.unit
class TestFailures:

    def test_failed_write_keeps_key_pending(self, saver, store, make_habit, mocker):
        mocker.patch.object(store, "save", side_effect=StorageWriteError("disk full"))
        saver.repository.add_habit(make_habit())

        assert not saver.flush()
        assert saver.error_count == 1
        assert saver.pending_keys == [HABITS]

    def test_retry_after_failure(self, saver, store, make_habit, mocker):
        real_save = store.save
        mocker.patch.object(store, "save", side_effect=[StorageWriteError("busy"), None])
        saver.repository.add_habit(make_habit())
        saver.flush()

        mocker.patch.object(store, "save", side_effect=real_save)
        assert saver.flush()
        assert len(stored_names(store)) == 1


@pytest.mark.unit
class TestShutdown:

    def test_shutdown_flushes_and_unsubscribes(self, saver, store, scheduler, make_habit):
        saver.repository.add_habit(make_habit())
        scheduler.running = True

        saver.shutdown()

        assert len(stored_names(store)) == 1
        scheduler.shutdown.assert_called_once_with(wait=True)
        assert saver.repository.change_callbacks == []
        assert not saver.is_running

    def test_shutdown_is_idempotent(self, saver, scheduler):
        saver.shutdown()
        saver.shutdown()
        assert saver.repository.change_callbacks == []


@pytest.mark.integration
class TestRealScheduler:

    def test_delayed_write_lands_on_disk(self, store, make_habit):
        saver = AutoSaver(Repository(), store, delay_ms=50)
        saver.start()
        try:
            saver.repository.add_habit(make_habit())
            saver.repository.add_habit(make_habit())

            deadline = time.monotonic() + 5
            while stored_names(store) != ["Read", "Read"] and time.monotonic() < deadline:
                time.sleep(0.02)

            assert stored_names(store) == ["Read", "Read"]
            assert saver.pending_keys == []
        finally:
            saver.shutdown()
