"""Sink base classes and shared formatting helpers.

Defines the MetricSink ABC and the FilePathSink base for sinks that write
to a file, either a fixed path or one resolved per training run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


def _format_metric_value(value: Any) -> str:
    """Format a metric value for console display."""
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def _format_number(value: float) -> str:
    """Format a numeric value with appropriate precision."""
    if value != 0 and (abs(value) < 0.001 or abs(value) > 10000):
        return f"{value:.4e}"
    return f"{value:.6f}"


class MetricSink(ABC):
    """Base class for metric output destinations."""

    @abstractmethod
    def emit(self, metrics: dict[str, Any], epoch: int, source: str):
        """Receive one record of metrics.

        Args:
            metrics: Metric name -> value (e.g., "loss": 0.12).
            epoch: Current training epoch.
            source: What produced the metrics (e.g., "train", "meta").
        """
        ...

    def set_run_context(self, **kwargs):
        """Signal a new logical run (e.g., training a different habit).

        Default is a no-op.

        Args:
            **kwargs: Context key-value pairs (e.g., run='habit_42').
        """
        pass

    def flush(self):
        """Flush any buffered output. Called at end of training."""
        pass


class FilePathSink(MetricSink):
    """Base for sinks that write to a file.

    Handles two modes:
    - Fixed path: filepath provided directly
    - Auto path: deferred to set_run_context(run=...), producing
      ``{output_dir}/{experiment_name}/{run}.{ext}`` with numeric suffixes
      on collision
    """

    _file_extension: str  # subclasses must set this

    def __init__(
        self,
        filepath: str | Path | None = None,
        output_dir: str | None = None,
        experiment_name: str | None = None,
    ):
        if filepath is not None:
            self._filepath = Path(filepath)
            self._auto_mode = False
        elif output_dir is not None and experiment_name is not None:
            self._filepath = None
            self._output_dir = output_dir
            self._experiment_name = experiment_name
            self._auto_mode = True
        else:
            raise ValueError(
                f"{self.__class__.__name__} requires either filepath or "
                "(output_dir + experiment_name)"
            )
        self._file = None

    @property
    def filepath(self) -> Path | None:
        return self._filepath

    def _resolve_path(self, run: str) -> Path | None:
        """Collision-free path for the given run, or None if not in auto mode."""
        if not self._auto_mode:
            return None
        run_dir = Path(self._output_dir) / self._experiment_name
        base_path = run_dir / f"{run}.{self._file_extension}"
        if not base_path.exists():
            return base_path
        num = 1
        while True:
            candidate = run_dir / f"{run}_{num}.{self._file_extension}"
            if not candidate.exists():
                return candidate
            num += 1

    def _close_file(self):
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None

    def set_run_context(self, **kwargs):
        """Close the current file and resolve the path for the new run."""
        self._close_file()
        run = kwargs.get('run')
        if run:
            resolved = self._resolve_path(str(run))
            if resolved:
                self._filepath = resolved

    def flush(self):
        self._close_file()
