"""
HistoryManager for Roadmapper.

The roadmap store: saved roadmap versions with soft archive and delete.
"""

from typing import List, Optional

from roadmapper.constants import DEFAULT_USER_NAME
from roadmapper.exceptions import NotFoundError, ValidationError
from roadmapper.managers.events import EventType, RoadmapEvent, publish_event
from roadmapper.managers.storage_manager import StorageManager
from roadmapper.models.records import RoadmapRecord, RoadmapStatus
from roadmapper.models.roadmap import Roadmap


class HistoryManager:
    """
    Manages saved roadmap versions in history.json.

    Handles:
    - Saving a roadmap as a new record
    - Listing records, newest first
    - Looking up a record by id
    - Archiving and deleting (status changes, records are never removed)

    Usage:
        storage = StorageManager()
        history = HistoryManager(storage)

        record = history.save_roadmap("Q3 plan", roadmap)
        history.archive_roadmap(record.id)
    """

    def __init__(self, storage: StorageManager, user_name: str = DEFAULT_USER_NAME) -> None:
        """
        Initialize HistoryManager.

        Args:
            storage: StorageManager for loading/saving history.json.
            user_name: Recorded as created_by on new records.
        """
        self.storage = storage
        self.user_name = user_name

    def save_roadmap(
        self,
        name: str,
        roadmap: Roadmap,
        description: str = "",
        created_by: Optional[str] = None,
    ) -> RoadmapRecord:
        """Save a roadmap as a new active record.

        Args:
            name: Display name for the saved version.
            roadmap: Roadmap document to store.
            description: Optional free-text description.
            created_by: Author. Defaults to the manager's user name.

        Returns:
            The new RoadmapRecord.

        Raises:
            ValidationError: If the name is empty.
        """
        if not name or not name.strip():
            raise ValidationError("Name is required to save a roadmap.")

        record = RoadmapRecord(
            name=name.strip(),
            description=description or "",
            roadmap_data=roadmap.model_copy(deep=True),
            created_by=created_by or self.user_name,
        )

        history = self.storage.load_history()
        history.roadmaps.append(record)
        self.storage.save_history(history)

        self._publish(EventType.ROADMAP_SAVED, record)
        return record

    def list_roadmaps(self, include_archived: bool = False) -> List[RoadmapRecord]:
        """List saved roadmaps, newest first.

        Deleted records are never listed.

        Args:
            include_archived: Also list archived records.

        Returns:
            Matching records ordered by created_at descending.
        """
        visible = {RoadmapStatus.ACTIVE}
        if include_archived:
            visible.add(RoadmapStatus.ARCHIVED)

        records = [
            r for r in self.storage.load_history().roadmaps if r.get_status() in visible
        ]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def get_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        """Get a saved roadmap by id.

        Raises:
            NotFoundError: If no such record exists or it was deleted.
        """
        for record in self.storage.load_history().roadmaps:
            if record.id == roadmap_id and record.get_status() != RoadmapStatus.DELETED:
                return record
        raise NotFoundError(f"Roadmap not found: {roadmap_id}")

    def archive_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        """Mark a saved roadmap as archived."""
        record = self._set_status(roadmap_id, RoadmapStatus.ARCHIVED)
        self._publish(EventType.ROADMAP_ARCHIVED, record)
        return record

    def delete_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        """Mark a saved roadmap as deleted. It will no longer be listed or found."""
        record = self._set_status(roadmap_id, RoadmapStatus.DELETED)
        self._publish(EventType.ROADMAP_DELETED, record)
        return record

    def _set_status(self, roadmap_id: str, status: RoadmapStatus) -> RoadmapRecord:
        history = self.storage.load_history()
        for record in history.roadmaps:
            if record.id == roadmap_id and record.get_status() != RoadmapStatus.DELETED:
                record.set_status(status)
                self.storage.save_history(history)
                return record
        raise NotFoundError(f"Roadmap not found: {roadmap_id}")

    def _publish(self, event_type: EventType, record: RoadmapRecord) -> None:
        publish_event(
            RoadmapEvent(
                type=event_type,
                roadmap_id=record.id,
                roadmap_name=record.name,
                status=record.status,
                data_dir=self.storage.data_dir,
            )
        )
