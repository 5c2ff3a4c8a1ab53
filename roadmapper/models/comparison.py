"""
Comparison result models for Roadmapper.

Typed records produced by the differ and the metrics calculator.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from roadmapper.models.roadmap import Phase


class FieldChange(BaseModel):
    """A scalar field that changed between two phase versions."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str


class ListChange(BaseModel):
    """Set-style difference between two string lists."""

    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    unchanged: List[str] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


class CountPair(BaseModel):
    """A before/after pair of counts."""

    before: int = 0
    after: int = 0


class PhaseChangeMetadata(BaseModel):
    """Numeric annotations for a modified phase."""

    task_count: CountPair = Field(default_factory=CountPair)
    task_change_percentage: float = 0.0
    priority_level: CountPair = Field(default_factory=CountPair)
    priority_change: int = 0


class PhaseChange(BaseModel):
    """A phase present in both roadmaps whose contents differ."""

    name: str
    task_changes: ListChange = Field(default_factory=ListChange)
    priority_changed: Optional[FieldChange] = None
    duration_changed: Optional[FieldChange] = None
    description_changed: bool = False
    dependencies_changed: Optional[ListChange] = None
    metadata: PhaseChangeMetadata = Field(default_factory=PhaseChangeMetadata)

    @property
    def tasks_changed(self) -> bool:
        return self.task_changes.has_changes


class ComparisonStatistics(BaseModel):
    """Overall counts for a comparison."""

    phase_count: CountPair = Field(default_factory=CountPair)
    task_count: CountPair = Field(default_factory=CountPair)
    added_tasks_count: int = 0
    removed_tasks_count: int = 0
    change_percentage: float = 0.0


class ComparisonResult(BaseModel):
    """
    Structural diff between a "before" and an "after" roadmap.

    Unchanged phases appear in none of the three lists.
    """

    added_phases: List[Phase] = Field(default_factory=list)
    removed_phases: List[Phase] = Field(default_factory=list)
    modified_phases: List[PhaseChange] = Field(default_factory=list)
    summary_changed: bool = False
    statistics: ComparisonStatistics = Field(default_factory=ComparisonStatistics)

    @property
    def has_changes(self) -> bool:
        return bool(
            self.added_phases
            or self.removed_phases
            or self.modified_phases
            or self.summary_changed
        )

    def added_phase_names(self) -> List[str]:
        return [phase.name for phase in self.added_phases]

    def removed_phase_names(self) -> List[str]:
        return [phase.name for phase in self.removed_phases]

    def modified_phase_names(self) -> List[str]:
        return [change.name for change in self.modified_phases]


class ComparisonMetrics(BaseModel):
    """Summary percentages and counts derived from a comparison."""

    total_phases_before: int = 0
    total_phases_after: int = 0
    total_tasks_before: int = 0
    total_tasks_after: int = 0
    added_phases_percent: float = 0.0
    removed_phases_percent: float = 0.0
    modified_phases_percent: float = 0.0
    added_tasks: int = 0
    removed_tasks: int = 0
    priority_changes: int = 0
    duration_changes: int = 0
    overall_change_percent: float = 0.0
    phase_delta_percent: float = 0.0
    task_delta_percent: float = 0.0
