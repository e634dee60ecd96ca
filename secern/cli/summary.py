"""Rich tables for configuration and run summaries."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table

from secern.core.pattern_set import PatternSet
from secern.models.config import RouterConfig
from secern.models.routing import RunStats


def build_config_table(config: RouterConfig, pattern_sets: Sequence[PatternSet]) -> Table:
    """One row per sink, in routing priority order."""
    table = Table(title="Configuration summary")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Sink", style="cyan")
    table.add_column("Output")
    table.add_column("Invert", justify="center")
    table.add_column("Patterns", justify="right")
    table.add_column("Matcher", style="dim")

    for index, (sink, pattern_set) in enumerate(zip(config.sinks, pattern_sets), start=1):
        output = "[dim]discard[/dim]" if sink.discard else str(sink.file_name)
        invert = "[yellow]Yes[/yellow]" if sink.invert else "No"
        table.add_row(
            str(index),
            sink.name,
            output,
            invert,
            str(len(pattern_set)),
            pattern_set.backend,
        )
    return table


def build_stats_table(stats: RunStats) -> Table:
    """Line counts per destination for a finished run."""
    table = Table(title="Run summary")
    table.add_column("Destination", style="cyan")
    table.add_column("Lines", justify="right")

    for name, count in stats.sink_counts.items():
        table.add_row(name, f"{count:,}")
    table.add_row("[dim]passthrough[/dim]", f"{stats.passthrough:,}")
    table.add_row("[dim]suppressed[/dim]", f"{stats.suppressed:,}")
    table.add_row("[bold]total[/bold]", f"[bold]{stats.lines:,}[/bold]")
    return table
