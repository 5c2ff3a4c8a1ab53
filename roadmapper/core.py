"""
RoadmapperCore - Core business logic for Roadmapper using .roadmapper/ storage.

Orchestrates manager classes for all business operations.
Uses EventBus for decoupled event-driven architecture.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from roadmapper.constants import EXPORT_FORMATS
from roadmapper.differ import compare
from roadmapper.exceptions import InvalidOperationError, ValidationError
from roadmapper.export import build_export_payload, render_json, render_markdown
from roadmapper.managers import (
    AnalyticsListener,
    AnalyticsManager,
    EventType,
    HistoryManager,
    RoadmapEvent,
    StorageManager,
    get_event_bus,
    publish_event,
    subscribe_listener,
)
from roadmapper.metrics import calculate_metrics
from roadmapper.models.comparison import ComparisonMetrics, ComparisonResult
from roadmapper.models.records import RoadmapRecord
from roadmapper.models.roadmap import Roadmap
from roadmapper.timeline import TimelineEntry, build_timeline


@dataclass
class SavedComparison:
    """A comparison of two saved roadmaps with its metrics."""
    before: RoadmapRecord
    after: RoadmapRecord
    result: ComparisonResult
    metrics: ComparisonMetrics


class RoadmapperCore:
    """
    Core class for business logic operations.

    Orchestrates manager classes:
    - StorageManager: Persistence to .roadmapper/ folder
    - HistoryManager: Saved roadmap versions
    - AnalyticsManager: Interaction tracking and usage statistics
    - EventBus: Event-driven communication
    - AnalyticsListener: Records interaction events
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        analytics_enabled: bool = True,
    ):
        """
        Initialize the RoadmapperCore with a .roadmapper/ directory.

        Args:
            data_dir: Path to .roadmapper/ directory. Defaults to .roadmapper/ in current directory.
            analytics_enabled: Whether to record interaction events.
        """
        self.storage = StorageManager(data_dir)
        self.config = self.storage.load_config()

        self.history = HistoryManager(self.storage, user_name=self.config.user_name)
        self.analytics = AnalyticsManager(self.storage, user_id=self.config.user_name)

        # Set up event-driven architecture
        self.event_bus = get_event_bus()

        # The newest core on a data directory owns its analytics listener
        self.analytics_listener = AnalyticsListener(
            self.analytics, enabled=analytics_enabled
        )
        self.event_bus.unsubscribe(self.analytics_listener)
        if analytics_enabled:
            subscribe_listener(self.analytics_listener)

    def _publish(
        self, event_type: EventType, record: RoadmapRecord, **data
    ) -> None:
        publish_event(
            RoadmapEvent(
                type=event_type,
                roadmap_id=record.id,
                roadmap_name=record.name,
                status=record.status,
                data=data,
                data_dir=self.storage.data_dir,
            )
        )

    def save_roadmap(
        self, name: str, roadmap: Roadmap, description: str = ""
    ) -> RoadmapRecord:
        """Save a roadmap version."""
        return self.history.save_roadmap(name, roadmap, description)

    def list_roadmaps(self, include_archived: bool = False) -> List[RoadmapRecord]:
        """List saved roadmaps, newest first."""
        return self.history.list_roadmaps(include_archived)

    def view_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        """Get a saved roadmap and record the view."""
        record = self.history.get_roadmap(roadmap_id)
        self._publish(EventType.ROADMAP_VIEWED, record)
        return record

    def archive_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        return self.history.archive_roadmap(roadmap_id)

    def delete_roadmap(self, roadmap_id: str) -> RoadmapRecord:
        return self.history.delete_roadmap(roadmap_id)

    def compare_saved(self, before_id: str, after_id: str) -> SavedComparison:
        """Compare two saved roadmaps.

        Raises:
            InvalidOperationError: If both ids are the same.
            NotFoundError: If either roadmap doesn't exist.
        """
        comparison = self._compare(before_id, after_id)
        self._publish(
            EventType.ROADMAP_COMPARED, comparison.before, compared_with=after_id
        )
        self._publish(
            EventType.ROADMAP_COMPARED, comparison.after, compared_with=before_id
        )
        return comparison

    def _compare(self, before_id: str, after_id: str) -> SavedComparison:
        if before_id == after_id:
            raise InvalidOperationError("Please select two different roadmaps to compare.")

        before = self.history.get_roadmap(before_id)
        after = self.history.get_roadmap(after_id)

        result = compare(before.roadmap_data, after.roadmap_data)
        metrics = calculate_metrics(
            before.roadmap_data,
            after.roadmap_data,
            result,
            round_precision=self.config.percentage_round_precision,
        )
        return SavedComparison(before, after, result, metrics)

    def export_comparison(
        self,
        before_id: str,
        after_id: str,
        fmt: str = "json",
        exported_at: Optional[datetime] = None,
    ) -> str:
        """Compare two saved roadmaps and render the report as json or markdown.

        Raises:
            ValidationError: If the format is not supported.
        """
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(
                f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}"
            )
        comparison = self._compare(before_id, after_id)
        if fmt == "markdown":
            content = render_markdown(
                comparison.before,
                comparison.after,
                comparison.result,
                comparison.metrics,
                generated_at=exported_at,
            )
        else:
            content = render_json(
                build_export_payload(
                    comparison.before,
                    comparison.after,
                    comparison.result,
                    comparison.metrics,
                    exported_at=exported_at,
                )
            )

        for record in (comparison.before, comparison.after):
            self._publish(EventType.ROADMAP_EXPORTED, record, format=fmt)
        return content

    def analyze_roadmap(self, roadmap_id: str) -> List[TimelineEntry]:
        """Build the estimated timeline of a saved roadmap and record the analysis."""
        record = self.history.get_roadmap(roadmap_id)
        timeline = build_timeline(
            record.roadmap_data,
            horizon_months=self.config.timeline_horizon_months,
            default_months=self.config.default_duration_months,
        )
        self._publish(EventType.ROADMAP_ANALYZED, record)
        return timeline
