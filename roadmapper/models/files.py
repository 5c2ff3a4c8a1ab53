"""
File models for Roadmapper.

Models representing the structure of JSON files in the .roadmapper/ directory.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from roadmapper.constants import (
    DEFAULT_DURATION_MONTHS,
    DEFAULT_PERCENTAGE_ROUND_PRECISION,
    DEFAULT_TIMELINE_HORIZON_MONTHS,
    DEFAULT_TRENDING_LIMIT,
    DEFAULT_USER_NAME,
)

from .records import AnalyticsRecord, RoadmapRecord


class HistoryFile(BaseModel):
    """Model for history.json file.

    Every saved roadmap version, including archived and deleted ones.
    """

    roadmaps: List[RoadmapRecord] = Field(default_factory=list)


class AnalyticsFile(BaseModel):
    """Model for analytics.json file.

    Flat list of tracked roadmap interactions.
    """

    events: List[AnalyticsRecord] = Field(default_factory=list)


class ConfigFile(BaseModel):
    """Model for config.json file.

    Project settings and configuration.
    """

    model_config = ConfigDict(validate_assignment=True)

    schema_version: str = "0.1.0"

    # Display settings
    percentage_round_precision: int = DEFAULT_PERCENTAGE_ROUND_PRECISION

    # Timeline settings
    default_duration_months: int = DEFAULT_DURATION_MONTHS
    timeline_horizon_months: int = DEFAULT_TIMELINE_HORIZON_MONTHS

    # Analytics settings
    trending_limit: int = DEFAULT_TRENDING_LIMIT
    user_name: str = DEFAULT_USER_NAME
