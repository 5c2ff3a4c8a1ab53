"""
Stored record models for Roadmapper.

Saved roadmap versions and analytics events.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from roadmapper.constants import ACTIVE_STATUS, DEFAULT_USER_NAME
from roadmapper.models.roadmap import Roadmap


class RoadmapStatus(str, Enum):
    """Valid status values for saved roadmaps."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DELETED = "deleted"


class ActionType(str, Enum):
    """Kinds of roadmap interaction tracked by analytics."""

    VIEW = "view"
    EDIT = "edit"
    EXPORT = "export"
    SHARE = "share"
    COMPARE = "compare"
    ANALYZE = "analyze"


class RoadmapRecord(BaseModel):
    """A saved roadmap version."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str = ""
    roadmap_data: Roadmap = Field(default_factory=Roadmap)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    created_by: str = DEFAULT_USER_NAME
    status: str = ACTIVE_STATUS

    def get_status(self) -> RoadmapStatus:
        """Get status as RoadmapStatus enum."""
        try:
            return RoadmapStatus(self.status)
        except ValueError:
            return RoadmapStatus.ACTIVE

    def set_status(self, value: RoadmapStatus | str) -> None:
        """Set status from string or RoadmapStatus enum and bump updated_at."""
        self.status = value.value if isinstance(value, RoadmapStatus) else value
        self.updated_at = datetime.now()


class AnalyticsRecord(BaseModel):
    """A single tracked interaction with a roadmap."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    roadmap_id: str
    user_id: Optional[str] = None
    action_type: ActionType
    action_details: Dict[str, Any] = Field(default_factory=dict)
    session_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
