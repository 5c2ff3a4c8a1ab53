"""
Managers for Roadmapper.

This package contains focused manager classes that handle specific aspects of Roadmapper functionality:
- StorageManager: Persistence to the .roadmapper/ folder
- HistoryManager: Saved roadmap versions (save, list, get, archive, delete)
- AnalyticsManager: Roadmap interaction tracking and usage statistics
- EventBus: Event-driven architecture for decoupled communication
- AnalyticsListener: Records interaction events as analytics
"""

from roadmapper.managers.storage_manager import StorageManager
from roadmapper.managers.history_manager import HistoryManager
from roadmapper.managers.events import (
    EventBus,
    Event,
    RoadmapEvent,
    EventType,
    EventListener,
    get_event_bus,
    publish_event,
    subscribe_listener,
)
from roadmapper.managers.analytics import AnalyticsListener, AnalyticsManager
from roadmapper.exceptions import StorageError

__all__ = [
    "StorageManager",
    "StorageError",
    "HistoryManager",
    "AnalyticsManager",
    "AnalyticsListener",
    "EventBus",
    "Event",
    "RoadmapEvent",
    "EventType",
    "EventListener",
    "get_event_bus",
    "publish_event",
    "subscribe_listener",
]
