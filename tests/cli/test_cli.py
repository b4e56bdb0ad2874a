"""
Tests for the projectlens command-line interface.
"""

import json

from typer.testing import CliRunner

from projectlens import __version__
from projectlens.cli import app

runner = CliRunner()


class TestScanCommand:
    """Test `projectlens scan`."""

    def test_scan_writes_json_output(self, react_project, tmp_path) -> None:
        output = tmp_path / "analysis.json"

        result = runner.invoke(app, ["scan", str(react_project), "--ignore", "dist/", "--output", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["projectName"] == "sample-project"
        assert data["techStack"]["stacks"] == ["MERN"]
        assert data["truncated"] is False

    def test_scan_prints_summary(self, react_project) -> None:
        result = runner.invoke(app, ["scan", str(react_project)])

        assert result.exit_code == 0, result.output
        assert "Naming Conventions" in result.output
        assert "React" in result.output

    def test_scan_json_flag(self, react_project) -> None:
        result = runner.invoke(app, ["scan", str(react_project), "--json", "--deep"])

        assert result.exit_code == 0, result.output
        assert '"projectName"' in result.output
        assert '"scanMode": "deep"' in result.output

    def test_missing_path_fails(self, tmp_path) -> None:
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_heuristics_file_fails(self, react_project, tmp_path) -> None:
        heuristics = tmp_path / "heuristics.yaml"
        heuristics.write_text("marker_confidence: 500\n")

        result = runner.invoke(app, ["scan", str(react_project), "--heuristics", str(heuristics)])

        assert result.exit_code == 1

    def test_unnamed_pattern_overrides_fail_cleanly(self, react_project, tmp_path) -> None:
        heuristics = tmp_path / "heuristics.yaml"
        heuristics.write_text("architecture_patterns: [MVC]\n")

        result = runner.invoke(app, ["scan", str(react_project), "--heuristics", str(heuristics)])

        assert result.exit_code == 1
        assert "architecture_patterns" in result.output


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
