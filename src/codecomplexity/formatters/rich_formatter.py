"""Rich terminal formatter for analysis results."""

import io
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import AnalysisResult
from .base import BaseFormatter


def _maintainability_label(score: float) -> str:
    if score >= 20.0:
        return f"[green]{score:.2f}[/green]"
    elif score >= 10.0:
        return f"[yellow]{score:.2f}[/yellow]"
    else:
        return f"[red bold]{score:.2f}[/red bold]"


def _complexity_label(cc: int) -> str:
    if cc > 50:
        return f"[red bold]{cc}[/red bold]"
    elif cc > 20:
        return f"[yellow]{cc}[/yellow]"
    else:
        return str(cc)


class RichFormatter(BaseFormatter):
    """Summary panel, per-file table, duplicates and skipped files."""

    def __init__(self, console: Optional[Console] = None, top_n: int = 50) -> None:
        self.console = console or Console()
        self.top_n = top_n

    def render(self, result: AnalysisResult) -> None:
        self._print(result, self.console)

    def format(self, result: AnalysisResult) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=120, color_system=None)
        self._print(result, console)
        return buffer.getvalue()

    # -- private helpers --

    def _print(self, result: AnalysisResult, console: Console) -> None:
        self._print_summary(result, console)
        self._print_files(result, console)
        self._print_duplicates(result, console)
        self._print_skipped(result, console)

    def _print_summary(self, result: AnalysisResult, console: Console) -> None:
        summary_text = (
            f"Analyzed [bold]{result.total_files}[/bold] files  |  "
            f"[bold]{result.total_lines}[/bold] lines  |  "
            f"Avg complexity: [cyan]{result.average_cyclomatic:.2f}[/cyan]  |  "
            f"Avg maintainability: {_maintainability_label(result.average_maintainability)}"
        )
        if result.skipped_files:
            summary_text += f"  |  [red]{len(result.skipped_files)} skipped[/red]"
        console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        console.print()

    def _print_files(self, result: AnalysisResult, console: Console) -> None:
        if not result.files:
            return

        shown = result.worst_files(self.top_n)
        table = Table(title=f"{len(shown)} Least Maintainable Files", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("File", style="yellow", no_wrap=False, ratio=3)
        table.add_column("Lines", justify="right", width=7)
        table.add_column("CC", justify="right", width=6)
        table.add_column("Volume", justify="right", width=10)
        table.add_column("MI", justify="right", width=8)
        table.add_column("Duplicated With", style="magenta", ratio=2)

        for i, f in enumerate(shown, 1):
            table.add_row(
                str(i),
                f.path,
                str(f.lines),
                _complexity_label(f.cyclomatic_complexity),
                f"{f.halstead_volume:.1f}",
                _maintainability_label(f.maintainability_index),
                ", ".join(f.duplicated_with) or "-",
            )

        console.print(table)
        console.print()

    def _print_duplicates(self, result: AnalysisResult, console: Console) -> None:
        cross_file = [g for g in result.duplicate_groups if len(g.files) > 1]
        if not cross_file:
            return
        console.print(f"[bold]Duplicated methods[/bold] ({len(cross_file)} groups):")
        for group in cross_file:
            members = ", ".join(f"{o.file_path}#{o.method_name}" for o in group.occurrences)
            console.print(f"  [magenta]-[/magenta] {members}")
        console.print()

    def _print_skipped(self, result: AnalysisResult, console: Console) -> None:
        if not result.skipped_files:
            return
        console.print("[bold]Skipped files[/bold] (could not be parsed):")
        for skipped in result.skipped_files:
            console.print(f"  [red]![/red] {skipped.path} [dim]({skipped.reason})[/dim]")
        console.print()
