"""Rich terminal formatter for source-metrics."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..math.statistics import Statistics
from ..rollup.models import ProjectStats, Rollup
from .base import BaseFormatter


def _complexity_label(avg: float) -> str:
    if avg > 10:
        return "[red bold]high[/red bold]"
    elif avg > 5:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]low[/green]"


def _coverage_label(pct: float) -> str:
    if pct >= 80:
        return f"[green]{pct:.1f}%[/green]"
    elif pct >= 50:
        return f"[yellow]{pct:.1f}%[/yellow]"
    else:
        return f"[red]{pct:.1f}%[/red]"


class RichFormatter(BaseFormatter):
    """Summary panel, per-package table, complexity distribution and flags."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True)

    def render(self, stats: ProjectStats) -> None:
        self._print_summary(stats)
        self._print_packages(stats)
        self._print_distribution(stats)
        self._print_flags(stats.rollup)
        self._print_skipped(stats)

    def format(self, stats: ProjectStats) -> str:
        # Rich output goes directly to console; return empty string
        self.render(stats)
        return ""

    # -- private helpers --

    def _print_summary(self, stats: ProjectStats) -> None:
        r = stats.rollup
        core = r.core
        summary_text = (
            f"[bold]{stats.metadata.name}[/bold]  |  "
            f"[bold]{core.files}[/bold] files, {core.loc} LOC, {core.symbols} symbols "
            f"({core.functions} functions)  |  "
            f"Avg complexity: [blue]{r.avg_complexity:.2f}[/blue] "
            f"({_complexity_label(r.avg_complexity)}), max {r.max_complexity}  |  "
            f"Doc coverage: {_coverage_label(r.doc_coverage_pct)}  |  "
            f"Explicit return types: {r.return_type_explicitness_pct:.1f}%"
        )
        if stats.skipped_count:
            summary_text += f"  |  [yellow]{stats.skipped_count} skipped[/yellow]"
        self.console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        self.console.print()

    def _print_packages(self, stats: ProjectStats) -> None:
        if not stats.packages:
            return

        table = Table(title="Packages", expand=True)
        table.add_column("Package", style="yellow", ratio=3)
        table.add_column("Files", justify="right", width=6)
        table.add_column("LOC", justify="right", width=8)
        table.add_column("Symbols", justify="right", width=8)
        table.add_column("Avg CC", justify="right", width=8)
        table.add_column("Max CC", justify="right", width=8)
        table.add_column("Avg Nest", justify="right", width=9)
        table.add_column("Branch/100", justify="right", width=11)
        table.add_column("Docs", justify="right", width=8)

        for pkg in stats.packages:
            r = pkg.rollup
            table.add_row(
                escape(pkg.metadata.name),
                str(r.core.files),
                str(r.core.loc),
                str(r.core.symbols),
                f"{r.avg_complexity:.2f}",
                str(r.max_complexity),
                f"{r.avg_nesting_depth:.2f}",
                f"{r.branch_density.density_per_100:.1f}",
                _coverage_label(r.doc_coverage_pct),
            )
        self.console.print(table)
        self.console.print()

    def _print_distribution(self, stats: ProjectStats) -> None:
        complexities = [d.complexity for f in stats.files for d in f.declarations]
        if not complexities:
            return
        dist = Statistics.distribution(complexities)
        self.console.print(
            f"[bold]Complexity distribution[/bold] ({dist['count']} declarations): "
            f"mean {dist['mean']:.2f}, median {dist['median']:.1f}, "
            f"p90 {dist['p90']:.1f}, max {dist['max']:.0f}"
        )
        self.console.print()

    def _print_flags(self, r: Rollup) -> None:
        flags = [
            ("High complexity", r.items_with_high_complexity),
            ("High nesting", r.items_with_high_nesting),
            ("High branch density", r.items_with_high_branch_density),
            ("High pattern matching", r.items_with_high_pattern_matching),
            ("High parameter count", r.items_with_high_parameter_count),
            ("Low documentation", r.items_with_low_documentation),
        ]
        raised = [(label, n) for label, n in flags if n]
        if not raised:
            self.console.print("[green]No quality thresholds exceeded.[/green]")
            return
        self.console.print("[bold]Quality flags:[/bold]")
        for label, n in raised:
            self.console.print(f"  [red]-[/red] {label}: {n}")

    def _print_skipped(self, stats: ProjectStats) -> None:
        if not stats.skipped_files:
            return
        self.console.print()
        self.console.print(f"[bold yellow]Skipped files ({stats.skipped_count}):[/bold yellow]")
        for skipped in stats.skipped_files:
            self.console.print(
                f"  [yellow]![/yellow] {escape(skipped.path)} [dim]({escape(skipped.reason)})[/dim]"
            )
