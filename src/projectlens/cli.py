"""
ProjectLens CLI - project structure, stack and convention profiler
Main entry point for the command-line interface

Usage:
    projectlens scan <directory>          # Rich summary of a project
    projectlens scan <directory> --json   # ProjectAnalysis as JSON
    projectlens version                   # Show version
"""

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from projectlens import __version__
from projectlens.analysis.application.pipeline import ProjectAnalyzer
from projectlens.analysis.domain.heuristics import load_heuristics
from projectlens.analysis.domain.project_analysis import ProjectAnalysis, ScanMode
from projectlens.shared.domain.exceptions import ProjectLensError
from projectlens.shared.infrastructure.logging import configure_logging, get_logger

app = typer.Typer(
    name="projectlens",
    help="ProjectLens - profile a source tree's structure, stack and conventions",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
logger = get_logger(__name__)


def _format_list(values, empty: str = "-") -> str:
    return ", ".join(values) if values else f"[dim]{empty}[/dim]"


def create_summary_table(analysis: ProjectAnalysis) -> Table:
    """Key facts of an analysis as a two-column table"""
    stack = analysis.tech_stack
    table = Table(title=f"Project: {analysis.project_name}", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    languages = [f"{share.language} ({share.percentage:.1f}%)" for share in stack.primary_languages]
    table.add_row("Files", str(analysis.structure.total_files))
    table.add_row("Directories", str(len(analysis.structure.directories)))
    table.add_row("Languages", _format_list(languages))
    table.add_row("Frameworks", _format_list(stack.frameworks))
    table.add_row("Libraries", _format_list(stack.libraries))
    table.add_row("Build tools", _format_list(stack.build_tools))
    table.add_row("Testing", _format_list(stack.testing_frameworks))
    if stack.stacks:
        table.add_row("Stacks", _format_list(stack.stacks))
    table.add_row("Modules", f"{analysis.dependency_graph.module_count} ({analysis.dependency_graph.edge_count} edges)")
    return table


def create_patterns_table(analysis: ProjectAnalysis) -> Table:
    """Naming conventions per identifier category"""
    table = Table(title="Naming Conventions", box=box.SIMPLE)
    table.add_column("Category", style="cyan")
    table.add_column("Style")
    table.add_column("Confidence", justify="right")
    table.add_column("Example", style="dim")

    for category, result in analysis.patterns.naming_conventions.items():
        if result.total == 0:
            continue
        table.add_row(category, result.dominant_style.value, f"{result.confidence:.0f}%", result.example or "")
    return table


def print_analysis(analysis: ProjectAnalysis) -> None:
    """Render an analysis as rich tables and panels"""
    console.print(create_summary_table(analysis))
    console.print(create_patterns_table(analysis))

    architecture = [f"{p.name} ({p.score:.0f})" for p in analysis.patterns.architecture_patterns]
    console.print(f"[bold]Architecture:[/bold] {_format_list(architecture, 'none detected')}")
    console.print(f"[bold]Code patterns:[/bold] {_format_list(analysis.patterns.code_patterns, 'none')}")

    hints = analysis.graph_metrics.architectural_hints
    if hints:
        console.print(Panel("\n".join(f"• {hint}" for hint in hints), title="Dependency Graph", border_style="cyan"))

    if analysis.diagnostics:
        console.print(f"[yellow]{len(analysis.diagnostics)} diagnostics recorded[/yellow]")
        for diagnostic in analysis.diagnostics[:10]:
            location = f" ({diagnostic.path})" if diagnostic.path else ""
            console.print(f"  [dim]{diagnostic.kind.value}{location}: {diagnostic.message}[/dim]")
    if analysis.truncated:
        console.print("[yellow]Result is partial (resource cap or cancellation)[/yellow]")


@app.command()
def scan(
    path: Path = typer.Argument(..., help="Project root directory"),
    deep: bool = typer.Option(False, "--deep", help="Sample more files and parse more dependencies"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Gitignore-style pattern (repeatable)"),
    gitignore: bool = typer.Option(False, "--gitignore/--no-gitignore", help="Also apply the root .gitignore"),
    as_json: bool = typer.Option(False, "--json", help="Print the analysis as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON analysis to a file"),
    heuristics: Optional[Path] = typer.Option(None, "--heuristics", help="YAML file overriding heuristic weights"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info-level logs"),
):
    """Analyze a project tree"""
    configure_logging(level="INFO" if verbose else "WARNING")

    try:
        analyzer = ProjectAnalyzer(heuristics=load_heuristics(heuristics) if heuristics else None)
        analysis = analyzer.analyze(
            path,
            ignore_patterns=ignore or [],
            mode=ScanMode.DEEP if deep else ScanMode.SHALLOW,
            use_gitignore=gitignore,
        )
    except ProjectLensError as e:
        logger.error("scan_failed", path=str(path), error=e.message)
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    payload = json.dumps(analysis.to_json(), indent=2)
    if output:
        output.write_text(payload + "\n", encoding="utf-8")
        if not as_json:
            console.print(f"[green]Analysis written to {output}[/green]")

    if as_json:
        typer.echo(payload)
    else:
        print_analysis(analysis)


@app.command()
def version():
    """Show ProjectLens version information"""
    console.print(
        Panel.fit(
            "[bold cyan]ProjectLens Core[/bold cyan]\n"
            f"[dim]Version:[/dim] {__version__}\n",
            title="About ProjectLens",
            border_style="cyan",
        )
    )


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    sys.exit(main())
