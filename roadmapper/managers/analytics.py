"""
Roadmap usage analytics.

Records interactions with saved roadmaps (view, edit, export, share, compare,
analyze) and aggregates them into usage statistics.
"""

from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from roadmapper.constants import (
    DEFAULT_TRENDING_LIMIT,
    DEFAULT_USER_NAME,
    ENGAGEMENT_WINDOW_DAYS,
    NO_ANALYTICS_DATA,
)
from roadmapper.managers.events import Event, EventListener, EventType, RoadmapEvent
from roadmapper.managers.storage_manager import StorageManager
from roadmapper.models.records import ActionType, AnalyticsRecord, RoadmapRecord
from roadmapper.utils import format_date, generate_session_id, percentage

EVENT_ACTIONS = {
    EventType.ROADMAP_VIEWED: ActionType.VIEW,
    EventType.ROADMAP_EDITED: ActionType.EDIT,
    EventType.ROADMAP_EXPORTED: ActionType.EXPORT,
    EventType.ROADMAP_SHARED: ActionType.SHARE,
    EventType.ROADMAP_COMPARED: ActionType.COMPARE,
    EventType.ROADMAP_ANALYZED: ActionType.ANALYZE,
}


class UsageStats(BaseModel):
    """Interaction totals for one saved roadmap."""

    roadmap_id: str
    roadmap_name: str
    roadmap_created_at: datetime
    unique_users: int = 0
    total_interactions: int = 0
    view_count: int = 0
    edit_count: int = 0
    export_count: int = 0
    last_interaction_at: Optional[datetime] = None


class DailyActivity(BaseModel):
    """Interaction counts for a single day."""

    date: str
    count: int = 0
    view_count: int = 0
    edit_count: int = 0
    export_count: int = 0
    share_count: int = 0
    compare_count: int = 0
    analyze_count: int = 0


class EngagementTrend(BaseModel):
    """Interactions in the latest window versus the one before it."""

    current: int = 0
    previous: int = 0
    change: float = 0.0


class DetailedAnalytics(BaseModel):
    """Aggregated analytics for one roadmap."""

    roadmap_id: str
    total_events: int = 0
    action_counts: Dict[str, int] = Field(default_factory=dict)
    unique_users: int = 0
    unique_sessions: int = 0
    daily_data: List[DailyActivity] = Field(default_factory=list)
    avg_actions_per_user: float = 0.0
    avg_actions_per_session: float = 0.0
    engagement_trend: EngagementTrend = Field(default_factory=EngagementTrend)


class UsageComparison(BaseModel):
    """Usage differences between two roadmaps (first minus second)."""

    roadmap1: DetailedAnalytics
    roadmap2: DetailedAnalytics
    differences: Dict[str, int] = Field(default_factory=dict)
    percentage_differences: Dict[str, float] = Field(default_factory=dict)


class AnalyticsManager:
    """
    Tracks and aggregates roadmap interactions stored in analytics.json.

    Usage:
        analytics = AnalyticsManager(storage, user_id="alice")
        analytics.track_event(record.id, ActionType.VIEW)
        details = analytics.get_detailed_analytics(record.id)
    """

    def __init__(self, storage: StorageManager, user_id: str = DEFAULT_USER_NAME) -> None:
        """
        Initialize AnalyticsManager.

        Args:
            storage: StorageManager for loading/saving analytics.json.
            user_id: Recorded as the user on tracked events.
        """
        self.storage = storage
        self.user_id = user_id

    def track_event(
        self,
        roadmap_id: str,
        action_type: ActionType | str,
        action_details: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
    ) -> AnalyticsRecord:
        """Record one interaction with a roadmap.

        Args:
            roadmap_id: Id of the saved roadmap.
            action_type: Kind of interaction.
            action_details: Free-form details stored with the event.
            session_id: Session to attribute the event to. Generated if omitted.

        Returns:
            The stored AnalyticsRecord.
        """
        record = AnalyticsRecord(
            roadmap_id=roadmap_id,
            user_id=self.user_id,
            action_type=ActionType(action_type),
            action_details=action_details or {},
            session_id=session_id or generate_session_id(),
        )
        analytics = self.storage.load_analytics()
        analytics.events.append(record)
        self.storage.save_analytics(analytics)
        return record

    def get_events(self, roadmap_id: Optional[str] = None) -> List[AnalyticsRecord]:
        """Get tracked events, newest first, optionally for a single roadmap."""
        events = self.storage.load_analytics().events
        if roadmap_id is not None:
            events = [e for e in events if e.roadmap_id == roadmap_id]
        return sorted(events, key=lambda e: e.created_at, reverse=True)

    def get_usage_stats(self, records: Iterable[RoadmapRecord]) -> List[UsageStats]:
        """Usage totals per roadmap, most interacted with first."""
        events = self.storage.load_analytics().events
        stats = [self._usage_for(record, events) for record in records]
        return sorted(stats, key=lambda s: s.total_interactions, reverse=True)

    def get_trending(
        self, records: Iterable[RoadmapRecord], limit: int = DEFAULT_TRENDING_LIMIT
    ) -> List[UsageStats]:
        """Roadmaps with the most recent activity first. Untouched ones are skipped."""
        events = self.storage.load_analytics().events
        stats = [self._usage_for(record, events) for record in records]
        active = [s for s in stats if s.last_interaction_at is not None]
        active.sort(key=lambda s: s.last_interaction_at, reverse=True)
        return active[:limit]

    def _usage_for(
        self, record: RoadmapRecord, events: List[AnalyticsRecord]
    ) -> UsageStats:
        own = [e for e in events if e.roadmap_id == record.id]
        counts = Counter(e.action_type for e in own)
        return UsageStats(
            roadmap_id=record.id,
            roadmap_name=record.name,
            roadmap_created_at=record.created_at,
            unique_users=len({e.user_id for e in own if e.user_id}),
            total_interactions=len(own),
            view_count=counts[ActionType.VIEW],
            edit_count=counts[ActionType.EDIT],
            export_count=counts[ActionType.EXPORT],
            last_interaction_at=max((e.created_at for e in own), default=None),
        )

    def get_detailed_analytics(
        self, roadmap_id: str, now: Optional[datetime] = None
    ) -> DetailedAnalytics:
        """Aggregate every tracked event for one roadmap.

        Args:
            roadmap_id: Id of the saved roadmap.
            now: Reference time for the engagement trend. Defaults to now.

        Returns:
            DetailedAnalytics for the roadmap (all zeros if nothing was tracked).
        """
        events = self.get_events(roadmap_id)
        now = now or datetime.now()

        action_counts = {action.value: 0 for action in ActionType}
        for event in events:
            action_counts[event.action_type.value] += 1

        unique_users = len({e.user_id for e in events if e.user_id})
        unique_sessions = len({e.session_id for e in events if e.session_id})

        return DetailedAnalytics(
            roadmap_id=roadmap_id,
            total_events=len(events),
            action_counts=action_counts,
            unique_users=unique_users,
            unique_sessions=unique_sessions,
            daily_data=self._daily_data(events),
            avg_actions_per_user=len(events) / unique_users if unique_users else 0.0,
            avg_actions_per_session=(
                len(events) / unique_sessions if unique_sessions else 0.0
            ),
            engagement_trend=self._engagement_trend(events, now),
        )

    def _daily_data(self, events: List[AnalyticsRecord]) -> List[DailyActivity]:
        by_day: Dict[str, DailyActivity] = {}
        for event in events:
            day = format_date(event.created_at)
            activity = by_day.setdefault(day, DailyActivity(date=day))
            activity.count += 1
            field_name = f"{event.action_type.value}_count"
            setattr(activity, field_name, getattr(activity, field_name) + 1)
        return [by_day[day] for day in sorted(by_day)]

    def _engagement_trend(
        self, events: List[AnalyticsRecord], now: datetime
    ) -> EngagementTrend:
        window = timedelta(days=ENGAGEMENT_WINDOW_DAYS)
        window_start = now - window
        previous_start = now - 2 * window

        current = sum(1 for e in events if window_start <= e.created_at <= now)
        previous = sum(1 for e in events if previous_start <= e.created_at < window_start)

        if previous:
            change = (current - previous) / previous * 100
        else:
            change = 100.0 if current else 0.0
        return EngagementTrend(current=current, previous=previous, change=change)

    def compare_usage(self, roadmap_id1: str, roadmap_id2: str) -> UsageComparison:
        """Compare usage of two roadmaps. Percentages are relative to the second."""
        first = self.get_detailed_analytics(roadmap_id1)
        second = self.get_detailed_analytics(roadmap_id2)

        def metrics_of(details: DetailedAnalytics) -> Dict[str, int]:
            return {
                "total_events": details.total_events,
                "unique_users": details.unique_users,
                "view_count": details.action_counts.get(ActionType.VIEW.value, 0),
                "edit_count": details.action_counts.get(ActionType.EDIT.value, 0),
                "export_count": details.action_counts.get(ActionType.EXPORT.value, 0),
            }

        one = metrics_of(first)
        two = metrics_of(second)
        differences = {key: one[key] - two[key] for key in one}
        return UsageComparison(
            roadmap1=first,
            roadmap2=second,
            differences=differences,
            percentage_differences={
                key: percentage(differences[key], two[key]) for key in differences
            },
        )


def daily_data_to_csv(daily_data: List[DailyActivity]) -> str:
    """Render daily activity as CSV: a header row then one row per day."""
    if not daily_data:
        return NO_ANALYTICS_DATA

    headers = list(DailyActivity.model_fields)
    rows = [",".join(headers)]
    for activity in daily_data:
        values = activity.model_dump()
        rows.append(",".join(str(values[h]) for h in headers))
    return "\n".join(rows)


class AnalyticsListener(EventListener):
    """
    Records roadmap interaction events as analytics.

    Subscribed to view, edit, export, share, compare and analyze events.
    Listeners compare equal when they write to the same data directory, so
    the bus holds at most one per directory. Events stamped with another
    data directory are ignored.
    """

    def __init__(self, analytics: AnalyticsManager, enabled: bool = True) -> None:
        """
        Initialize AnalyticsListener.

        Args:
            analytics: AnalyticsManager to record events with.
            enabled: Whether tracking is enabled.
        """
        self.analytics = analytics
        self.enabled = enabled
        self.data_dir = analytics.storage.data_dir.resolve()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnalyticsListener):
            return NotImplemented
        return self.data_dir == other.data_dir

    def __hash__(self) -> int:
        return hash(self.data_dir)

    @property
    def subscribed_events(self) -> List[EventType]:
        """Return list of events this listener handles."""
        return list(EVENT_ACTIONS)

    def handle(self, event: Event) -> None:
        """Track a roadmap interaction event.

        Args:
            event: The interaction event.
        """
        if not self.enabled or not isinstance(event, RoadmapEvent):
            return
        if not event.roadmap_id:
            return
        if event.data_dir is not None and Path(event.data_dir).resolve() != self.data_dir:
            return

        self.analytics.track_event(
            event.roadmap_id,
            EVENT_ACTIONS[event.type],
            action_details=dict(event.data),
            session_id=event.session_id,
        )
