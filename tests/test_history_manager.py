"""
Tests for HistoryManager.
"""

from datetime import datetime
from typing import List

import pytest

from roadmapper.exceptions import NotFoundError, ValidationError
from roadmapper.managers.events import Event, EventListener, EventType, subscribe_listener
from roadmapper.managers.history_manager import HistoryManager


class RecordingListener(EventListener):
    """Collects every roadmap lifecycle event it receives."""

    def __init__(self):
        self.events: List[Event] = []

    @property
    def subscribed_events(self) -> List[EventType]:
        return [
            EventType.ROADMAP_SAVED,
            EventType.ROADMAP_ARCHIVED,
            EventType.ROADMAP_DELETED,
        ]

    def handle(self, event: Event) -> None:
        self.events.append(event)


@pytest.fixture
def history(storage):
    return HistoryManager(storage, user_name="alice")


@pytest.fixture
def listener():
    recorder = RecordingListener()
    subscribe_listener(recorder)
    return recorder


class TestSaveRoadmap:
    """Test saving roadmaps."""

    def test_save(self, history, sample_roadmap):
        record = history.save_roadmap("Q3 plan", sample_roadmap, description="First draft")

        assert record.name == "Q3 plan"
        assert record.description == "First draft"
        assert record.created_by == "alice"
        assert record.status == "active"
        assert record.roadmap_data == sample_roadmap

    def test_name_is_trimmed(self, history, sample_roadmap):
        assert history.save_roadmap("  Plan  ", sample_roadmap).name == "Plan"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, history, sample_roadmap, name):
        with pytest.raises(ValidationError):
            history.save_roadmap(name, sample_roadmap)

    def test_persisted(self, history, storage, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        assert storage.load_history().roadmaps[0].id == record.id

    def test_stored_copy_is_independent(self, history, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        sample_roadmap.phases[0].tasks.append("Later")
        assert "Later" not in history.get_roadmap(record.id).roadmap_data.phases[0].tasks

    def test_publishes_saved_event(self, history, listener, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)

        assert len(listener.events) == 1
        event = listener.events[0]
        assert event.type == EventType.ROADMAP_SAVED
        assert event.roadmap_id == record.id
        assert event.roadmap_name == "Plan"


class TestListAndGet:
    """Test listing and looking up roadmaps."""

    def test_newest_first(self, history, storage, sample_roadmap, revised_roadmap):
        first = history.save_roadmap("v1", sample_roadmap)
        second = history.save_roadmap("v2", revised_roadmap)
        stored = storage.load_history()
        stored.roadmaps[0].created_at = datetime(2024, 1, 1)
        stored.roadmaps[1].created_at = datetime(2024, 2, 1)
        storage.save_history(stored)

        ids = [r.id for r in history.list_roadmaps()]
        assert ids == [second.id, first.id]

    def test_archived_hidden_by_default(self, history, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.archive_roadmap(record.id)

        assert history.list_roadmaps() == []
        assert [r.id for r in history.list_roadmaps(include_archived=True)] == [record.id]

    def test_deleted_never_listed(self, history, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.delete_roadmap(record.id)

        assert history.list_roadmaps(include_archived=True) == []

    def test_get_unknown(self, history):
        with pytest.raises(NotFoundError):
            history.get_roadmap("missing")

    def test_get_archived(self, history, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.archive_roadmap(record.id)
        assert history.get_roadmap(record.id).status == "archived"


class TestArchiveAndDelete:
    """Test soft archive and delete."""

    def test_delete_keeps_record_on_disk(self, history, storage, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.delete_roadmap(record.id)

        stored = storage.load_history().roadmaps
        assert stored[0].status == "deleted"
        with pytest.raises(NotFoundError):
            history.get_roadmap(record.id)

    def test_delete_twice(self, history, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.delete_roadmap(record.id)
        with pytest.raises(NotFoundError):
            history.delete_roadmap(record.id)

    def test_archive_unknown(self, history):
        with pytest.raises(NotFoundError):
            history.archive_roadmap("missing")

    def test_events(self, history, listener, sample_roadmap):
        record = history.save_roadmap("Plan", sample_roadmap)
        history.archive_roadmap(record.id)
        history.delete_roadmap(record.id)

        assert [e.type for e in listener.events] == [
            EventType.ROADMAP_SAVED,
            EventType.ROADMAP_ARCHIVED,
            EventType.ROADMAP_DELETED,
        ]
        assert listener.events[-1].status == "deleted"
