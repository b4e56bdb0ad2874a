"""
Unit tests for TechnologyProfiler.

Tests manifest and marker detection, their merge, primary languages and
named stacks.
"""

import pytest

from projectlens.analysis.application.technology.profiler import TechnologyProfiler
from projectlens.analysis.domain.heuristics import HeuristicsConfig
from projectlens.analysis.domain.project_analysis import AnalysisStage, DiagnosticKind
from projectlens.analysis.domain.tech_stack import DetectionSource, TechnologyCategory
from projectlens.shared.infrastructure.parallel import CancellationToken, ParallelBatchExecutor


class TestTechnologyProfiler:
    """Test technology detection on small trees."""

    def test_react_without_next(self, make_tree, scan) -> None:
        """A React dependency without next.config is React only."""
        root = make_tree(
            {
                "package.json": '{"dependencies": {"react": "18.2.0", "react-dom": "18.2.0"}}',
                "src/App.jsx": "export default function App() { return null; }\n",
            }
        )
        profile, diagnostics = TechnologyProfiler().profile(scan(root))

        assert diagnostics == []
        assert profile.frameworks == ("React",)
        assert not profile.has_technology("Next.js")

    def test_primary_language_shares(self, make_tree, scan) -> None:
        """Shares are computed over source files and ranked."""
        files = {f"web/m{i}.ts": "export {};\n" for i in range(80)}
        files.update({f"tools/t{i}.py": "pass\n" for i in range(20)})
        root = make_tree(files)

        profile, _ = TechnologyProfiler().profile(scan(root))

        assert profile.primary_language == "TypeScript"
        assert [(s.language, s.percentage, s.file_count) for s in profile.primary_languages] == [
            ("TypeScript", 80.0, 80),
            ("Python", 20.0, 20),
        ]

    def test_language_below_threshold_is_dropped(self, make_tree, scan) -> None:
        """Languages under the threshold share are not primary."""
        files = {f"m{i}.py": "pass\n" for i in range(99)}
        files["tool.rb"] = "puts 1\n"
        root = make_tree(files)

        profile, _ = TechnologyProfiler().profile(scan(root))

        assert [s.language for s in profile.primary_languages] == ["Python"]

    def test_marker_dominates_manifest(self, make_tree, scan) -> None:
        """A technology seen in both passes keeps marker source and confidence."""
        root = make_tree(
            {
                "package.json": '{"devDependencies": {"jest": "^29.0.0"}}',
                "jest.config.js": "module.exports = {};\n",
            }
        )
        profile, _ = TechnologyProfiler().profile(scan(root))

        jest = profile.get_detection("Jest")
        assert jest.source == DetectionSource.MARKER
        assert jest.confidence == 90.0
        assert jest.category == TechnologyCategory.TESTING
        assert jest.evidence == ("jest.config.js", "package.json")
        assert profile.testing_frameworks == ("Jest",)

    def test_manifest_only_confidence(self, make_tree, scan) -> None:
        """Manifest-only detections use the manifest confidence."""
        root = make_tree({"requirements.txt": "Django>=4.2\nrequests==2.31.0\n"})
        profile, _ = TechnologyProfiler().profile(scan(root))

        django = profile.get_detection("Django")
        assert django.source == DetectionSource.MANIFEST
        assert django.confidence == 60.0
        assert profile.libraries == ("Requests",)

    def test_confidences_follow_heuristics(self, make_tree, scan) -> None:
        """Detection confidences come from the heuristics configuration."""
        root = make_tree({"Cargo.toml": '[dependencies]\ntokio = "1"\n'})
        heuristics = HeuristicsConfig(manifest_confidence=40.0, marker_confidence=75.0)

        profile, _ = TechnologyProfiler(heuristics).profile(scan(root))

        assert profile.get_detection("Tokio").confidence == 40.0
        assert profile.get_detection("Cargo").confidence == 75.0

    def test_malformed_manifest_is_a_diagnostic(self, make_tree, scan) -> None:
        """A broken manifest is reported and does not stop detection."""
        root = make_tree(
            {
                "package.json": "{ not json",
                "vite.config.ts": "export default {};\n",
            }
        )
        profile, diagnostics = TechnologyProfiler().profile(scan(root))

        assert len(diagnostics) == 1
        assert diagnostics[0].kind == DiagnosticKind.MANIFEST_READ_FAILURE
        assert diagnostics[0].stage == AnalysisStage.TECHNOLOGY
        assert diagnostics[0].path == "package.json"
        assert profile.build_tools == ("Vite",)

    def test_directory_marker(self, make_tree, scan) -> None:
        """Directory markers are matched by relative path."""
        root = make_tree({".github/workflows/ci.yml": "on: push\n"})
        profile, _ = TechnologyProfiler().profile(scan(root))

        assert profile.get_detection("GitHub Actions").evidence == (".github/workflows",)

    def test_mern_stack(self, react_project, scan) -> None:
        """React + Express + mongoose is the MERN stack."""
        profile, diagnostics = TechnologyProfiler().profile(scan(react_project, ["node_modules/", "dist/"]))

        assert diagnostics == []
        assert profile.frameworks == ("Express", "React")
        assert profile.libraries == ("MongoDB",)
        assert profile.testing_frameworks == ("Jest",)
        assert profile.stacks == ("MERN",)
        assert profile.primary_language == "TypeScript"

        typescript = profile.get_detection("TypeScript")
        assert typescript.source == DetectionSource.MARKER
        assert typescript.evidence == ("package.json", "tsconfig.json")

    @pytest.mark.asyncio
    async def test_profile_async(self, react_project, ascan) -> None:
        """The async entry point returns the same profile."""
        structure = await ascan(react_project, ["node_modules/", "dist/"])
        profile, diagnostics = await TechnologyProfiler().profile_async(structure)

        assert diagnostics == []
        assert profile.stacks == ("MERN",)

    def test_cancelled_manifest_batch(self, react_project, scan) -> None:
        """Unread manifests after cancellation are reported, markers still apply."""
        structure = scan(react_project, ["node_modules/", "dist/"])
        token = CancellationToken()
        token.cancel()

        profiler = TechnologyProfiler(executor=ParallelBatchExecutor(cancel_token=token))
        profile, diagnostics = profiler.profile(structure)

        assert [(d.kind, d.stage) for d in diagnostics] == [(DiagnosticKind.CANCELLED, AnalysisStage.TECHNOLOGY)]
        assert profile.frameworks == ()
        assert profile.has_technology("TypeScript")
