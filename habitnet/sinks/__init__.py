"""Metric sinks for training output.

Sinks receive per-epoch scalar metrics and route them to different
destinations (console, JSONL).
"""

from .base import MetricSink, FilePathSink
from .console import ConsoleSink
from .jsonl import JSONLSink

__all__ = [
    'MetricSink',
    'FilePathSink',
    'ConsoleSink',
    'JSONLSink',
]
