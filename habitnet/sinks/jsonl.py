"""JSONL sink for appending metrics as JSON Lines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .base import FilePathSink


def _json_default(obj):
    """JSON serializer fallback for torch/numpy scalars and arrays."""
    if hasattr(obj, 'tolist'):
        return obj.tolist()
    if hasattr(obj, 'item'):
        return obj.item()
    return str(obj)


class JSONLSink(FilePathSink):
    """Append metrics as JSON Lines (one JSON object per emit).

    Two modes:
    - Fixed path: ``JSONLSink(filepath='path/to/file.jsonl')``
    - Auto path: ``JSONLSink(output_dir='output', experiment_name='habits')``
      with ``set_run_context(run='habit_42')`` producing
      ``output/habits/habit_42.jsonl``.
    """

    _file_extension = "jsonl"

    def _ensure_open(self):
        if self._filepath is None:
            return
        if self._file is None:
            self._filepath.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._filepath, 'a', newline='')

    def emit(self, metrics: dict[str, Any], epoch: int, source: str):
        if not metrics:
            return

        self._ensure_open()
        if self._file is None:
            return
        record = {"epoch": epoch, "source": source, **metrics}
        self._file.write(json.dumps(record, default=_json_default) + '\n')
        self._file.flush()
