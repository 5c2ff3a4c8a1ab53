"""
Tests for Roadmapper pydantic models.
"""

import pytest
from pydantic import ValidationError

from roadmapper.models.comparison import FieldChange, ListChange
from roadmapper.models.files import ConfigFile
from roadmapper.models.records import ActionType, RoadmapRecord, RoadmapStatus
from roadmapper.models.roadmap import Phase, Priority, Roadmap, priority_level


class TestPhase:
    """Test Phase model."""

    def test_defaults(self):
        phase = Phase(name="A")
        assert phase.description == ""
        assert phase.priority == "medium"
        assert phase.duration == ""
        assert phase.tasks == []
        assert phase.dependencies == []

    def test_none_dependencies_become_empty(self):
        phase = Phase(name="A", dependencies=None)
        assert phase.dependencies == []

    def test_get_priority(self):
        assert Phase(name="A", priority="high").get_priority() == Priority.HIGH
        assert Phase(name="A", priority="urgent").get_priority() == Priority.MEDIUM

    def test_priority_level_and_task_count(self):
        phase = Phase(name="A", priority="low", tasks=["t1", "t2"])
        assert phase.priority_level == 1
        assert phase.task_count == 2


class TestPriorityLevel:
    """Test priority_level()."""

    @pytest.mark.parametrize(
        "priority,level",
        [("high", 3), ("medium", 2), ("low", 1), ("HIGH", 3), ("urgent", 0), ("", 0), (None, 0)],
    )
    def test_levels(self, priority, level):
        assert priority_level(priority) == level


class TestRoadmap:
    """Test Roadmap model."""

    def test_duplicate_phase_names_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate phase name: 'A'"):
            Roadmap(phases=[Phase(name="A"), Phase(name="A")])

    def test_generated_date_alias(self):
        roadmap = Roadmap.model_validate(
            {"summary": "s", "phases": [], "generatedDate": "2024-01-01"}
        )
        assert roadmap.generated_date == "2024-01-01"
        assert roadmap.model_dump(by_alias=True)["generatedDate"] == "2024-01-01"

    def test_populate_by_name(self):
        assert Roadmap(generated_date="2024-01-01").generated_date == "2024-01-01"

    def test_lookup_helpers(self, sample_roadmap):
        assert sample_roadmap.phase_names() == ["Foundation", "Core Features", "Polish"]
        assert sample_roadmap.get_phase("Polish").duration == "6 weeks"
        assert sample_roadmap.get_phase("Missing") is None
        assert sample_roadmap.total_tasks() == 6


class TestComparisonModels:
    """Test comparison record models."""

    def test_field_change_dumps_from_alias(self):
        change = FieldChange(from_="low", to="high")
        assert change.model_dump(by_alias=True) == {"from": "low", "to": "high"}

    def test_field_change_accepts_alias(self):
        change = FieldChange.model_validate({"from": "a", "to": "b"})
        assert change.from_ == "a"

    def test_list_change_has_changes(self):
        assert ListChange(added=["x"]).has_changes is True
        assert ListChange(unchanged=["x"]).has_changes is False


class TestRoadmapRecord:
    """Test RoadmapRecord model."""

    def test_defaults(self):
        record = RoadmapRecord(name="Plan")
        assert record.status == "active"
        assert record.created_by == "local"
        assert record.roadmap_data.phases == []
        assert len(record.id) == 36

    def test_set_status_bumps_updated_at(self):
        record = RoadmapRecord(name="Plan")
        before = record.updated_at
        record.set_status(RoadmapStatus.ARCHIVED)
        assert record.status == "archived"
        assert record.get_status() == RoadmapStatus.ARCHIVED
        assert record.updated_at >= before

    def test_unknown_status_reads_as_active(self):
        assert RoadmapRecord(name="Plan", status="weird").get_status() == RoadmapStatus.ACTIVE

    def test_action_types(self):
        assert [a.value for a in ActionType] == [
            "view", "edit", "export", "share", "compare", "analyze"
        ]


class TestConfigFile:
    """Test ConfigFile model."""

    def test_defaults(self):
        config = ConfigFile()
        assert config.percentage_round_precision == 1
        assert config.default_duration_months == 1
        assert config.timeline_horizon_months == 12
        assert config.trending_limit == 5
        assert config.user_name == "local"

    def test_assignment_is_validated(self):
        config = ConfigFile()
        config.trending_limit = "7"
        assert config.trending_limit == 7
        with pytest.raises(ValidationError):
            config.trending_limit = "many"
