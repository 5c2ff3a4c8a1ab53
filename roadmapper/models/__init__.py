"""
Data models for Roadmapper.

Import models explicitly from their modules:
    from roadmapper.models.roadmap import Phase, Roadmap, Priority
    from roadmapper.models.comparison import ComparisonResult, PhaseChange
    from roadmapper.models.records import RoadmapRecord, AnalyticsRecord
    from roadmapper.models.files import HistoryFile, AnalyticsFile, ConfigFile
"""

from .comparison import ComparisonMetrics, ComparisonResult, PhaseChange
from .roadmap import Phase, Priority, Roadmap

__all__ = [
    "ComparisonMetrics",
    "ComparisonResult",
    "Phase",
    "PhaseChange",
    "Priority",
    "Roadmap",
]
