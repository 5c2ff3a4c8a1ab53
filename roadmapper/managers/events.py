"""
Event system for Roadmapper.

Allows decoupled communication between components via events and listeners.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import click


class EventType(str, Enum):
    """Types of events in Roadmapper."""
    ROADMAP_SAVED = "roadmap.saved"
    ROADMAP_ARCHIVED = "roadmap.archived"
    ROADMAP_DELETED = "roadmap.deleted"
    ROADMAP_VIEWED = "roadmap.viewed"
    # Edit and share have no CLI command; applications embedding
    # RoadmapperCore publish them to record those interactions.
    ROADMAP_EDITED = "roadmap.edited"
    ROADMAP_EXPORTED = "roadmap.exported"
    ROADMAP_SHARED = "roadmap.shared"
    ROADMAP_COMPARED = "roadmap.compared"
    ROADMAP_ANALYZED = "roadmap.analyzed"


@dataclass
class Event:
    """Base event class."""
    type: EventType
    timestamp: datetime = field(default_factory=datetime.now)
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RoadmapEvent(Event):
    """Event for roadmap-related actions."""
    roadmap_id: str = ""
    roadmap_name: str = ""
    status: str = ""
    session_id: Optional[str] = None
    data_dir: Optional[Path] = None


class EventListener(ABC):
    """Base class for event listeners."""

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Handle an event.

        Args:
            event: The event to handle.
        """
        pass

    @property
    @abstractmethod
    def subscribed_events(self) -> List[EventType]:
        """Return list of event types this listener subscribes to."""
        pass


class EventBus:
    """
    Central event bus for publishing and subscribing to events.

    Singleton pattern for global event access.
    """

    _instance: Optional['EventBus'] = None
    _listeners: Dict[EventType, List[EventListener]] = {}

    def __new__(cls) -> 'EventBus':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def subscribe(self, listener: EventListener) -> None:
        """Subscribe a listener to events.

        Args:
            listener: The listener to subscribe.
        """
        for event_type in listener.subscribed_events:
            if event_type not in self._listeners:
                self._listeners[event_type] = []
            if listener not in self._listeners[event_type]:
                self._listeners[event_type].append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Unsubscribe a listener from all events.

        Args:
            listener: The listener to unsubscribe.
        """
        for event_type in self._listeners:
            if listener in self._listeners[event_type]:
                self._listeners[event_type].remove(listener)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribed listeners.

        A failing listener is reported on stderr and does not stop the others.

        Args:
            event: The event to publish.
        """
        listeners = list(self._listeners.get(event.type, []))
        for listener in listeners:
            try:
                listener.handle(event)
            except Exception as e:
                click.echo(f"  ⚠ Listener {listener.__class__.__name__} failed: {e}", err=True)

    def clear(self) -> None:
        """Clear all listeners (useful for testing)."""
        self._listeners.clear()


# Convenience functions for global event bus access
def get_event_bus() -> EventBus:
    """Get the global event bus instance."""
    return EventBus()


def publish_event(event: Event) -> None:
    """Publish an event to the global event bus."""
    get_event_bus().publish(event)


def subscribe_listener(listener: EventListener) -> None:
    """Subscribe a listener to the global event bus."""
    get_event_bus().subscribe(listener)
