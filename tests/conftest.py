"""
Test fixtures for the Roadmapper test suite.

Provides:
- Temporary directory fixtures (isolated from the project's .roadmapper/)
- Mock data builders for creating test roadmaps
- Event bus and config reset between tests
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Optional

import pytest

from roadmapper.constants import reset_config_manager
from roadmapper.managers import StorageManager, get_event_bus
from roadmapper.models.roadmap import Phase, Roadmap


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test isolation.

    Ensures tests don't modify the project's actual .roadmapper/ directory.
    """
    temp_path = Path(tempfile.mkdtemp(prefix="roadmapper_test_"))
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def data_dir(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a temporary .roadmapper/ directory."""
    data_path = temp_dir / ".roadmapper"
    data_path.mkdir(parents=True)
    yield data_path


@pytest.fixture
def storage(data_dir: Path) -> StorageManager:
    return StorageManager(data_dir)


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset the event bus and config singleton around each test."""
    bus = get_event_bus()
    bus.clear()
    reset_config_manager()
    yield
    bus.clear()
    reset_config_manager()


# =============================================================================
# Mock Data Builders
# =============================================================================


class MockDataBuilder:
    """Helper class for building mock roadmaps for testing."""

    @staticmethod
    def create_phase(
        name: str = "Test Phase",
        description: str = "Test description",
        priority: str = "medium",
        duration: str = "1 month",
        tasks: Optional[List[str]] = None,
        dependencies: Optional[List[str]] = None,
    ) -> Phase:
        """Create a mock Phase for testing."""
        return Phase(
            name=name,
            description=description,
            priority=priority,
            duration=duration,
            tasks=tasks if tasks is not None else [],
            dependencies=dependencies if dependencies is not None else [],
        )

    @staticmethod
    def create_roadmap(
        phases: Optional[List[Phase]] = None,
        summary: str = "Test roadmap",
    ) -> Roadmap:
        """Create a mock Roadmap for testing."""
        return Roadmap(summary=summary, phases=phases or [])

    @staticmethod
    def create_sample_roadmap() -> Roadmap:
        """Create a three-phase roadmap with tasks and dependencies."""
        return Roadmap(
            summary="Platform plan v1",
            phases=[
                Phase(
                    name="Foundation",
                    description="Set up infrastructure",
                    priority="high",
                    duration="2 months",
                    tasks=["Provision database", "Set up CI"],
                ),
                Phase(
                    name="Core Features",
                    description="Build the main features",
                    priority="high",
                    duration="3 months",
                    tasks=["Inbox", "Tickets", "Storefront admin"],
                    dependencies=["Foundation"],
                ),
                Phase(
                    name="Polish",
                    description="Improve UX",
                    priority="low",
                    duration="6 weeks",
                    tasks=["Dark mode"],
                    dependencies=["Core Features"],
                ),
            ],
        )

    @staticmethod
    def create_revised_roadmap() -> Roadmap:
        """Create a revision of the sample roadmap.

        - Foundation: unchanged
        - Core Features: "Storefront admin" removed, "Analytics" added, duration changed
        - Polish: removed
        - Launch: added
        """
        return Roadmap(
            summary="Platform plan v2",
            phases=[
                Phase(
                    name="Foundation",
                    description="Set up infrastructure",
                    priority="high",
                    duration="2 months",
                    tasks=["Set up CI", "Provision database"],
                ),
                Phase(
                    name="Core Features",
                    description="Build the main features",
                    priority="high",
                    duration="4 months",
                    tasks=["Inbox", "Tickets", "Analytics"],
                    dependencies=["Foundation"],
                ),
                Phase(
                    name="Launch",
                    description="Go live",
                    priority="medium",
                    duration="2 weeks",
                    tasks=["Announce", "Monitor"],
                    dependencies=["Core Features"],
                ),
            ],
        )


@pytest.fixture
def builder() -> MockDataBuilder:
    return MockDataBuilder()


@pytest.fixture
def sample_roadmap() -> Roadmap:
    return MockDataBuilder.create_sample_roadmap()


@pytest.fixture
def revised_roadmap() -> Roadmap:
    return MockDataBuilder.create_revised_roadmap()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def write_roadmap(temp_dir: Path):
    """Return a helper that writes a roadmap to a JSON file in temp_dir."""

    def _write(file_name: str, roadmap: Roadmap) -> Path:
        path = temp_dir / file_name
        path.write_text(
            json.dumps(roadmap.model_dump(mode="json", by_alias=True), indent=2)
        )
        return path

    return _write
