"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from devsweep.cli import main

pytestmark = pytest.mark.usefixtures("isolate_config")


@pytest.fixture
def runner():
    return CliRunner()


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestScan:
    def test_json(self, runner, two_projects):
        data = _json(runner.invoke(main, ["scan", str(two_projects), "--json"]))
        assert [(p["name"], p["kind"], p["total_cleanable_bytes"]) for p in data] == [
            ("proj-a", "Rust", 300),
            ("proj-b", "Node.js", 200),
        ]
        assert data[0]["clean_targets"][0]["name"] == "target"

    def test_table(self, runner, two_projects):
        result = runner.invoke(main, ["scan", str(two_projects)])
        assert result.exit_code == 0
        assert "proj-a" in result.output
        assert "500 B" in result.output

    def test_scan_is_default_command(self, runner, two_projects, monkeypatch):
        monkeypatch.chdir(two_projects)
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert "proj-b" in result.output

    def test_default_root_from_config(self, runner, two_projects, isolate_config):
        isolate_config.parent.mkdir(parents=True)
        isolate_config.write_text(json.dumps({"default_roots": [str(two_projects)]}))
        data = _json(runner.invoke(main, ["scan", "--json"]))
        assert len(data) == 2

    def test_bad_age_is_an_error(self, runner, two_projects):
        result = runner.invoke(main, ["scan", str(two_projects), "--older-than", "soon"])
        assert result.exit_code == 1
        assert "soon" in result.output

    def test_missing_root_is_an_error(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_negative_depth_rejected(self, runner, two_projects):
        result = runner.invoke(main, ["scan", str(two_projects), "-d", "-1"])
        assert result.exit_code == 2

    def test_broken_config_is_an_error(self, runner, two_projects, isolate_config):
        isolate_config.parent.mkdir(parents=True)
        isolate_config.write_text("{oops")
        result = runner.invoke(main, ["scan", str(two_projects)])
        assert result.exit_code == 1


class TestClean:
    def test_dry_run_json(self, runner, two_projects):
        data = _json(runner.invoke(main, ["clean", str(two_projects), "--all", "--dry-run", "--json"]))
        assert data["dry_run"] is True
        assert data["projects_cleaned"] == 2
        assert data["total_bytes_freed"] == 500
        assert data["errors"] == []
        assert (two_projects / "proj-a" / "target").is_dir()

    def test_all_yes_json(self, runner, two_projects):
        data = _json(runner.invoke(main, ["clean", str(two_projects), "--all", "--yes", "--json"]))
        assert data["total_bytes_freed"] == 500
        assert not (two_projects / "proj-a" / "target").exists()
        assert not (two_projects / "proj-b" / "node_modules").exists()

    def test_select(self, runner, two_projects):
        data = _json(runner.invoke(main, ["clean", str(two_projects), "-s", "2", "-y", "--json"]))
        assert [r["project"] for r in data["results"]] == [str(two_projects / "proj-b")]
        assert (two_projects / "proj-a" / "target").is_dir()
        assert not (two_projects / "proj-b" / "node_modules").exists()

    def test_empty_selection_json(self, runner, two_projects):
        data = _json(runner.invoke(main, ["clean", str(two_projects), "--json", "-s", " ", "--dry-run"]))
        assert data["projects_cleaned"] == 0
        assert data["results"] == []
        assert (two_projects / "proj-a" / "target").is_dir()

    def test_bad_selection(self, runner, two_projects):
        result = runner.invoke(main, ["clean", str(two_projects), "-s", "7", "-y"])
        assert result.exit_code == 1
        assert (two_projects / "proj-a" / "target").is_dir()

    @pytest.mark.parametrize("args", [["--json", "--yes"], ["--json", "--all"]])
    def test_json_requires_non_interactive_flags(self, runner, two_projects, args):
        result = runner.invoke(main, ["clean", str(two_projects), *args])
        assert result.exit_code == 2

    def test_interactive_confirm(self, runner, two_projects):
        result = runner.invoke(main, ["clean", str(two_projects)], input="1\ny\n")
        assert result.exit_code == 0, result.output
        assert not (two_projects / "proj-a" / "target").exists()
        assert (two_projects / "proj-b" / "node_modules").is_dir()

    def test_interactive_abort(self, runner, two_projects):
        result = runner.invoke(main, ["clean", str(two_projects)], input="all\nn\n")
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert (two_projects / "proj-a" / "target").is_dir()

    def test_nothing_found(self, runner, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        data = _json(runner.invoke(main, ["clean", str(empty), "--all", "--yes", "--json"]))
        assert data["projects_cleaned"] == 0


class TestSummary:
    def test_json(self, runner, two_projects):
        data = _json(runner.invoke(main, ["summary", str(two_projects), "--json"]))
        assert data["total_projects"] == 2
        assert data["total_reclaimable_bytes"] == 500
        assert [k["kind"] for k in data["by_kind"]] == ["Rust", "Node.js"]
        assert data["by_kind"][0]["reclaimable_human"] == "300 B"


class TestConfigCommand:
    def test_reset_then_show(self, runner, isolate_config):
        result = runner.invoke(main, ["config", "--reset"])
        assert result.exit_code == 0
        assert isolate_config.is_file()

        data = _json(runner.invoke(main, ["config", "--show"]))
        assert data == {"ignore_paths": [], "exclude_kinds": [], "default_roots": [], "max_depth": None}

    def test_overview_without_file(self, runner):
        result = runner.invoke(main, ["config"])
        assert result.exit_code == 0
        assert "using defaults" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
