"""Interfaces to the host application's habit data.

Feature extraction and habit persistence live outside this library;
implementations of these ABCs adapt them so ``build_task`` can turn a habit
into a ``Task``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from rich.markup import escape

from console import HNConsole

from .task import Example, Task


class FeatureExtractor(ABC):
    """Turns a habit and its completion records into training examples."""

    @abstractmethod
    def extract(self, habit: Any, completions: list[Any]) -> list[Example]:
        """Build the ordered examples for one habit.

        Args:
            habit: Habit record from the repository.
            completions: The habit's completion records, oldest first.

        Returns:
            Examples with feature vectors of the network's feature size and
            target vectors of its output size.
        """
        ...


class HabitRepository(ABC):
    """Read access to stored habits."""

    @abstractmethod
    def get_habit(self, habit_id: int | str) -> Any | None:
        """Return the habit, or None if it does not exist."""
        ...

    @abstractmethod
    def get_completions(self, habit_id: int | str) -> list[Any]:
        """Return the habit's completion records, oldest first."""
        ...


def build_task(
    habit_id: int | str,
    repository: HabitRepository,
    extractor: FeatureExtractor,
) -> Task:
    """Build the task for one habit.

    An unknown habit yields a missing task (``examples is None``).
    """
    habit = repository.get_habit(habit_id)
    if habit is None:
        return Task(examples=None, task_id=habit_id)
    completions = repository.get_completions(habit_id)
    return Task(examples=list(extractor.extract(habit, completions)), task_id=habit_id)


def build_tasks(
    habit_ids: Iterable[int | str],
    repository: HabitRepository,
    extractor: FeatureExtractor,
) -> list[Task]:
    """Build tasks for several habits, skipping unknown ones."""
    tasks = []
    for habit_id in habit_ids:
        task = build_task(habit_id, repository, extractor)
        if task.is_missing:
            HNConsole().print_warning(f"Habit {escape(str(habit_id))} not found, skipping")
            continue
        tasks.append(task)
    return tasks
