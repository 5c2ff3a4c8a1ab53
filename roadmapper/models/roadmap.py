"""
Roadmap document models for Roadmapper.

A roadmap is a summary plus an ordered list of phases. Phases are keyed by
name for comparison purposes.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roadmapper.constants import DEFAULT_PRIORITY, PRIORITY_LEVELS


class Priority(str, Enum):
    """Valid priority values for phases."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def priority_level(priority: Optional[str]) -> int:
    """Convert a priority string to a numeric level (high=3 ... unknown=0)."""
    if not priority:
        return 0
    return PRIORITY_LEVELS.get(priority.lower(), 0)


class Phase(BaseModel):
    """
    A single phase of a roadmap.

    Fields:
    - name: Identity key when comparing roadmaps
    - description: Free text
    - priority: Stored as string, get_priority() returns Priority enum
    - duration: Free text such as "2 months" (opaque to the differ)
    - tasks: Ordered task strings, compared as a set
    - dependencies: Names of other phases in the same roadmap
    """

    name: str
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    duration: str = ""
    tasks: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def none_dependencies_to_empty(cls, v):
        """Treat a missing dependencies list as empty."""
        return [] if v is None else v

    def get_priority(self) -> Priority:
        """Get priority as Priority enum."""
        try:
            return Priority(self.priority)
        except ValueError:
            return Priority.MEDIUM

    @property
    def priority_level(self) -> int:
        return priority_level(self.priority)

    @property
    def task_count(self) -> int:
        return len(self.tasks)


class Roadmap(BaseModel):
    """
    A roadmap document: free-text summary and ordered phases.

    Phase names must be unique within a roadmap. Validation rejects
    duplicates; phase_map() keeps the last occurrence for instances
    built without validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    phases: List[Phase] = Field(default_factory=list)
    generated_date: Optional[str] = Field(default=None, alias="generatedDate")

    @field_validator("phases")
    @classmethod
    def validate_unique_phase_names(cls, v: List[Phase]) -> List[Phase]:
        """Reject roadmaps that reuse a phase name."""
        seen = set()
        for phase in v:
            if phase.name in seen:
                raise ValueError(f"Duplicate phase name: '{phase.name}'")
            seen.add(phase.name)
        return v

    def phase_names(self) -> List[str]:
        return [phase.name for phase in self.phases]

    def phase_map(self) -> Dict[str, Phase]:
        """Map phase name to phase. Later duplicates overwrite earlier ones."""
        return {phase.name: phase for phase in self.phases}

    def get_phase(self, name: str) -> Optional[Phase]:
        return self.phase_map().get(name)

    def total_tasks(self) -> int:
        return sum(phase.task_count for phase in self.phases)
