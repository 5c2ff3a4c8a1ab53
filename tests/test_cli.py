import json
import re

import pytest
from click.testing import CliRunner

from roadmapper.cli import cli
from roadmapper.core import RoadmapperCore
from roadmapper.managers import get_event_bus
from roadmapper.models.roadmap import Phase, Roadmap


@pytest.fixture
def run(data_dir):
    """Invoke the CLI against the temporary data directory."""
    runner = CliRunner()

    def _run(*args, **kwargs):
        # Each invocation builds its own core, as a fresh process would.
        get_event_bus().clear()
        return runner.invoke(cli, ["--data-dir", str(data_dir), *args], **kwargs)

    return _run


@pytest.fixture
def files(write_roadmap, sample_roadmap, revised_roadmap):
    return (
        str(write_roadmap("before.json", sample_roadmap)),
        str(write_roadmap("after.json", revised_roadmap)),
    )


@pytest.fixture
def saved_ids(data_dir, sample_roadmap, revised_roadmap):
    core = RoadmapperCore(data_dir, analytics_enabled=False)
    before = core.save_roadmap("Plan v1", sample_roadmap)
    after = core.save_roadmap("Plan v2", revised_roadmap)
    return before.id, after.id


def test_cli_registers_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ["compare", "compare-saved", "metrics", "export", "timeline", "history", "analytics", "config"]:
        assert name in result.output


class TestCompareCommand:
    def test_text_output(self, run, files):
        result = run("compare", *files)

        assert result.exit_code == 0
        assert "Summary changed: yes" in result.output
        assert "Added Phases (1):" in result.output
        assert "+ Launch (medium, 2 weeks) - 2 tasks" in result.output
        assert "- Polish (low, 6 weeks) - 1 tasks" in result.output
        assert "~ Core Features" in result.output
        assert "  duration: 3 months → 4 months" in result.output
        assert "  + task: Analytics" in result.output
        assert "  - task: Storefront admin" in result.output

    def test_json_output(self, run, files):
        result = run("compare", *files, "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [p["name"] for p in data["added_phases"]] == ["Launch"]
        assert data["modified_phases"][0]["duration_changed"] == {
            "from": "3 months",
            "to": "4 months",
        }

    def test_filter(self, run, files):
        result = run("compare", *files, "--filter", "priority")

        assert result.exit_code == 0
        assert "Modified Phases (0):" in result.output

    def test_invalid_roadmap(self, run, temp_dir, files):
        bad = temp_dir / "bad.json"
        bad.write_text(json.dumps({"phases": [{"name": "A"}, {"name": "A"}]}))

        result = run("compare", str(bad), files[1])

        assert result.exit_code == 1
        assert "Invalid roadmap" in result.output

    def test_not_utf8_file(self, run, temp_dir, files):
        bad = temp_dir / "binary.json"
        bad.write_bytes(b"\xff\xfe\x00garbage")

        result = run("compare", str(bad), files[1])

        assert result.exit_code == 1
        assert "Could not read roadmap file" in result.output

    def test_missing_file(self, run, files):
        result = run("compare", "nope.json", files[1])
        assert result.exit_code == 2


class TestMetricsCommand:
    def test_text_output(self, run, files):
        result = run("metrics", *files)

        assert result.exit_code == 0
        assert "Overall change: 100.0%" in result.output
        assert "Added tasks: 3" in result.output
        assert "Tasks: 6 → 7 (+16.7%)" in result.output

    def test_json_uses_configured_precision(self, run, files):
        run("config", "set", "percentage_round_precision", "2")

        result = run("metrics", *files, "--json")

        assert result.exit_code == 0
        assert json.loads(result.output)["added_phases_percent"] == 33.33

    def test_corrupt_config(self, run, data_dir, files):
        (data_dir / "config.json").write_text("{broken")

        result = run("metrics", *files)

        assert result.exit_code == 1
        assert "Failed to load config.json" in result.output


class TestHistoryCommands:
    def test_save_and_list(self, run, files):
        result = run("history", "save", files[0], "--name", "Plan v1", "-d", "First")

        assert result.exit_code == 0
        match = re.search(r"Saved roadmap 'Plan v1' \(([0-9a-f-]{36})\)", result.output)
        assert match

        listed = run("history", "list")
        assert match.group(1) in listed.output
        assert "Plan v1 (3 phases)" in listed.output

    def test_list_empty(self, run):
        result = run("history", "list")
        assert result.exit_code == 0
        assert "No saved roadmaps." in result.output

    def test_show(self, run, saved_ids):
        result = run("history", "show", saved_ids[0])

        assert result.exit_code == 0
        assert "Plan v1 (active)" in result.output
        assert "2. Core Features [high] 3 months" in result.output
        assert "   depends on: Foundation" in result.output

    def test_show_missing(self, run):
        result = run("history", "show", "missing")
        assert result.exit_code == 1
        assert "Roadmap not found: missing" in result.output

    def test_archive(self, run, saved_ids):
        result = run("history", "archive", saved_ids[0])
        assert "Archived roadmap 'Plan v1'" in result.output

        listed = run("history", "list", "--all", "--json")
        statuses = {r["id"]: r["status"] for r in json.loads(listed.output)}
        assert statuses[saved_ids[0]] == "archived"

    def test_delete_requires_confirmation(self, run, saved_ids):
        result = run("history", "delete", saved_ids[0], input="n\n")
        assert result.exit_code == 1

        result = run("history", "delete", saved_ids[0], "--yes")
        assert result.exit_code == 0
        assert "Deleted roadmap 'Plan v1'" in result.output


class TestCompareSavedCommand:
    def test_compare_saved(self, run, saved_ids):
        result = run("compare-saved", *saved_ids)

        assert result.exit_code == 0
        assert "Before: Plan v1" in result.output
        assert "Added Phases (1):" in result.output
        assert "Overall change: 100.0%" in result.output

    def test_same_roadmap(self, run, saved_ids):
        result = run("compare-saved", saved_ids[0], saved_ids[0])

        assert result.exit_code == 1
        assert "Please select two different roadmaps to compare." in result.output

    def test_json(self, run, saved_ids):
        data = json.loads(run("compare-saved", *saved_ids, "-j").output)

        assert data["before"]["name"] == "Plan v1"
        assert data["metrics"]["added_tasks"] == 3


class TestExportCommand:
    def test_markdown_to_stdout(self, run, saved_ids):
        result = run("export", *saved_ids, "--format", "markdown", "-o", "-")

        assert result.exit_code == 0
        assert "# Roadmap Comparison Report" in result.output

    def test_json_to_file(self, run, saved_ids, temp_dir):
        target = temp_dir / "report.json"

        result = run("export", *saved_ids, "-o", str(target))

        assert result.exit_code == 0
        assert f"Comparison exported to {target}" in result.output
        assert json.loads(target.read_text())["after"]["id"] == saved_ids[1]

    def test_unknown_format(self, run, saved_ids):
        result = run("export", *saved_ids, "--format", "pdf")
        assert result.exit_code == 2


class TestTimelineCommand:
    def test_file(self, run, files):
        result = run("timeline", files[0])

        assert result.exit_code == 0
        assert "month 1, 2 mo" in result.output
        assert "month 3, 3 mo" in result.output
        assert "month 6, 2 mo" in result.output

    def test_estimated_marker(self, run, write_roadmap):
        path = write_roadmap("tbd.json", Roadmap(phases=[Phase(name="Later", duration="TBD")]))

        result = run("timeline", str(path))

        assert "(estimated)" in result.output

    def test_json(self, run, files):
        data = json.loads(run("timeline", files[0], "--json", "--horizon", "6").output)
        assert [e["display_months"] for e in data] == [2, 3, 1]

    def test_saved(self, run, saved_ids):
        result = run("timeline", saved_ids[0], "--saved")

        assert result.exit_code == 0
        assert "Foundation" in result.output

    def test_corrupt_config(self, run, data_dir, files):
        (data_dir / "config.json").write_text("{broken")

        result = run("timeline", files[0])

        assert result.exit_code == 1
        assert "Failed to load config.json" in result.output

    def test_uses_configured_horizon(self, run, files):
        run("config", "set", "timeline_horizon_months", "4")

        data = json.loads(run("timeline", files[0], "--json").output)

        assert [e["display_months"] for e in data] == [2, 2, 0]

    def test_empty_roadmap(self, run, write_roadmap):
        path = write_roadmap("empty.json", Roadmap())
        assert "Roadmap has no phases." in run("timeline", str(path)).output


class TestAnalyticsCommands:
    def test_show_after_view(self, run, saved_ids):
        run("history", "show", saved_ids[0])

        result = run("analytics", "show", saved_ids[0])

        assert result.exit_code == 0
        assert "Total events: 1" in result.output
        assert "- view: 1" in result.output

    def test_stats(self, run, saved_ids):
        run("history", "show", saved_ids[1])

        data = json.loads(run("analytics", "stats", "--json").output)

        assert data[0]["roadmap_id"] == saved_ids[1]
        assert data[0]["view_count"] == 1

    def test_trending_empty(self, run, saved_ids):
        assert "No roadmap activity yet." in run("analytics", "trending").output

    def test_export_csv(self, run, saved_ids):
        run("history", "show", saved_ids[0])

        result = run("analytics", "export", saved_ids[0], "--format", "csv")

        assert result.output.startswith("date,count,view_count")

    def test_export_csv_without_events(self, run, saved_ids):
        result = run("analytics", "export", saved_ids[0], "--format", "csv")
        assert "No data available" in result.output
