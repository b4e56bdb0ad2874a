"""
Unit tests for heuristics defaults and YAML overrides.
"""

import pytest
from pydantic import ValidationError

from projectlens.analysis.domain.heuristics import HeuristicsConfig, IndicatorKind, load_heuristics
from projectlens.shared.domain.exceptions import ConfigurationError


class TestHeuristicsConfig:
    """Test defaults and validation."""

    def test_defaults(self) -> None:
        config = load_heuristics(None)

        assert config.primary_language_threshold == 5.0
        assert config.architecture_min_score == 20.0
        assert [p.name for p in config.architecture_patterns][:2] == ["MVC", "MVVM"]

    def test_negative_weight_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HeuristicsConfig.model_validate(
                {"architecture_patterns": [{"name": "X", "indicators": [{"kind": "directory", "values": ["x"], "weight": -1}]}]}
            )


class TestLoadHeuristics:
    """Test YAML override files."""

    def test_scalar_override(self, tmp_path) -> None:
        path = tmp_path / "heuristics.yaml"
        path.write_text("primary_language_threshold: 10\nmarker_confidence: 80\n")

        config = load_heuristics(path)

        assert config.primary_language_threshold == 10.0
        assert config.marker_confidence == 80.0
        assert config.manifest_confidence == 60.0

    def test_pattern_override_replaces_by_name(self, tmp_path) -> None:
        path = tmp_path / "heuristics.yaml"
        path.write_text(
            "architecture_patterns:\n"
            "  - name: MVC\n"
            "    indicators:\n"
            "      - {kind: directory, values: [controllers], weight: 50}\n"
            "  - name: Plugins\n"
            "    indicators:\n"
            "      - {kind: root_directory, values: [plugins], weight: 60}\n"
        )

        config = load_heuristics(path)
        names = [p.name for p in config.architecture_patterns]

        assert names[0] == "MVC"
        assert names[-1] == "Plugins"
        assert len(config.architecture_patterns[0].indicators) == 1
        assert config.architecture_patterns[-1].indicators[0].kind == IndicatorKind.ROOT_DIRECTORY

    def test_negative_weight_in_file(self, tmp_path) -> None:
        path = tmp_path / "heuristics.yaml"
        path.write_text(
            "architecture_patterns:\n"
            "  - name: MVC\n"
            "    indicators:\n"
            "      - {kind: directory, values: [models], weight: -5}\n"
        )
        with pytest.raises(ConfigurationError):
            load_heuristics(path)

    def test_unknown_key(self, tmp_path) -> None:
        path = tmp_path / "heuristics.yaml"
        path.write_text("no_such_threshold: 1\n")
        with pytest.raises(ConfigurationError):
            load_heuristics(path)

    @pytest.mark.parametrize(
        "body",
        [
            "architecture_patterns: [MVC]\n",
            "architecture_patterns:\n  MVC:\n    indicators: []\n",
            "architecture_patterns:\n  - indicators: []\n",
        ],
    )
    def test_malformed_pattern_list(self, tmp_path, body) -> None:
        """Pattern overrides must be a list of named mappings."""
        path = tmp_path / "heuristics.yaml"
        path.write_text(body)

        with pytest.raises(ConfigurationError) as exc_info:
            load_heuristics(path)
        assert "architecture_patterns" in exc_info.value.context

    def test_unreadable_or_malformed_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            load_heuristics(tmp_path / "missing.yaml")

        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_heuristics(path)

    def test_analyzer_uses_settings_file(self, tmp_path, project_root) -> None:
        from projectlens.analysis.application.pipeline import ProjectAnalyzer
        from projectlens.shared.infrastructure.config import Settings

        path = tmp_path / "heuristics.yaml"
        path.write_text("max_cycles: 5\n")

        analyzer = ProjectAnalyzer(settings=Settings(heuristics_file=str(path)))
        assert analyzer.heuristics.max_cycles == 5
