"""Task data model and host-application interfaces."""

from .task import Example, Task, TaskSplit, split_support_query
from .collaborators import FeatureExtractor, HabitRepository, build_task, build_tasks

__all__ = [
    'Example', 'Task', 'TaskSplit', 'split_support_query',
    'FeatureExtractor', 'HabitRepository', 'build_task', 'build_tasks',
]
