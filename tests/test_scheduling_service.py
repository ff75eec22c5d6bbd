"""Tests for StandupService."""

import pytest

from standup.scheduling import (
    StandupService,
    TimeOfDay,
    TimeValidationError,
    Trigger,
    TriggerStore,
)


class TestStandupService:
    """Tests for create/delete/list operations."""

    def test_create_then_list(self, service: StandupService):
        trigger = service.create("room1", "09:30")

        assert trigger == Trigger(room="room1", time=TimeOfDay(9, 30))
        assert service.list("room1") == [trigger]
        assert service.list("room2") == []

    def test_create_normalizes_time(self, service: StandupService):
        trigger = service.create("room1", "9:5")
        assert trigger.time_label == "09:05"

    def test_create_invalid_time_leaves_store_unchanged(
        self, service: StandupService, store: TriggerStore, persistence
    ):
        service.create("room1", "09:30")
        before = store.list_all()

        with pytest.raises(TimeValidationError):
            service.create("room1", "25:99")

        assert store.list_all() == before
        assert persistence.save_count == 1

    def test_delete_one_removes_duplicates(self, service: StandupService):
        service.create("room1", "09:30")
        service.create("room1", "09:30")
        service.create("room1", "11:00")

        assert service.delete_one("room1", "09:30") == 2
        assert [t.time_label for t in service.list("room1")] == ["11:00"]

    def test_delete_one_matches_normalized_time(self, service: StandupService):
        service.create("room1", "09:05")
        assert service.delete_one("room1", "9:5") == 1

    def test_delete_one_invalid_time(self, service: StandupService):
        with pytest.raises(TimeValidationError):
            service.delete_one("room1", "later")

    def test_delete_all(self, service: StandupService):
        service.create("room1", "09:30")
        service.create("room1", "16:00")
        service.create("room2", "09:30")

        assert service.delete_all("room1") == 2
        assert service.list("room1") == []
        assert len(service.list_all()) == 1

    def test_list_all(self, service: StandupService):
        service.create("room1", "09:30")
        service.create("room2", "10:30")
        assert {t.room for t in service.list_all()} == {"room1", "room2"}
