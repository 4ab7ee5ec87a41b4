"""Rich-based rendering of graphs and analysis results for the CLI."""

from __future__ import annotations

from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from nugetgraph.graph.analyzer import summarize
from nugetgraph.graph.models import DependencyGraph, PackageReference


class GraphDisplay:
    """Render analysis output to a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def show_summary(self, graph: DependencyGraph) -> None:
        summary = summarize(graph)
        table = Table(title=f"{graph.project_name or 'Project'} ({graph.target_framework or '-'})")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Packages", str(summary.total_packages))
        table.add_row("Dependencies", str(summary.total_dependencies))
        table.add_row("Direct", str(summary.direct_count))
        table.add_row("Transitive", str(summary.transitive_count))
        table.add_row("Version conflicts", str(summary.conflict_count))
        table.add_row("Max depth", str(summary.max_level))
        self.console.print(table)

    def show_packages(self, title: str, packages: List[PackageReference]) -> None:
        table = Table(title=f"{title} ({len(packages)})")
        table.add_column("Package", style="cyan")
        table.add_column("Version")
        table.add_column("Type", style="dim")
        for package in packages:
            table.add_row(package.name, package.version, package.type)
        self.console.print(table)

    def show_conflicts(self, conflicts: Dict[str, List[str]]) -> None:
        if not conflicts:
            self.console.print(Text("No version conflicts found", style="green"))
            return
        table = Table(title=f"Version conflicts ({len(conflicts)})")
        table.add_column("Package", style="yellow")
        table.add_column("Versions")
        for name, versions in conflicts.items():
            table.add_row(name, ", ".join(versions))
        self.console.print(table)

    def show_path(self, from_name: str, to_name: str, path: List[str]) -> None:
        if not path:
            self.console.print(
                Text(f"No dependency path from {from_name} to {to_name}", style="yellow")
            )
            return
        self.console.print(Text(" -> ".join(path), style="bold"))


__all__ = ["GraphDisplay"]
