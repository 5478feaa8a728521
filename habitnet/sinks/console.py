"""Console sink for Rich-based metric display."""

from __future__ import annotations

from typing import Any

from rich import box
from rich.markup import escape
from rich.table import Table

from console import HNConsole
from .base import MetricSink, _format_metric_value


class ConsoleSink(MetricSink):
    """Print metrics as a Rich table every ``every`` epochs.

    Records for other epochs are kept and the latest one is printed on
    ``flush()`` if it was not shown yet, so the final epoch always appears.
    """

    def __init__(self, every: int = 10):
        if every <= 0:
            raise ValueError(f"every must be > 0, got {every}")
        self.every = every
        self._console = HNConsole()
        self._pending: tuple[dict[str, Any], int, str] | None = None

    def emit(self, metrics: dict[str, Any], epoch: int, source: str):
        if not metrics:
            return
        if epoch % self.every == 0:
            self._pending = None
            self._print_table(metrics, epoch, source)
        else:
            self._pending = (metrics, epoch, source)

    def _print_table(self, metrics: dict[str, Any], epoch: int, source: str):
        table = Table(
            box=box.SIMPLE,
            show_header=True,
            header_style="table.header",
            title=f"{escape(str(source))} · epoch {epoch}",
            title_style="detail",
            padding=(0, 1),
        )
        table.add_column("Metric", style="metric.label")
        table.add_column("Value", justify="right", style="metric.value")
        for key in sorted(metrics):
            table.add_row(key, _format_metric_value(metrics[key]))
        self._console.print(table)

    def set_run_context(self, **kwargs):
        self._pending = None

    def flush(self):
        if self._pending is not None:
            self._print_table(*self._pending)
            self._pending = None
