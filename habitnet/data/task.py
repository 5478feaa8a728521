"""Task data model for per-habit training and meta-learning.

A ``Task`` is one habit's ordered examples. Meta-learning shuffles each
task and splits it into support (inner adaptation) and query (meta-loss)
sets with ``split_support_query``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import torch

from ..utils.ops import VectorLike, as_vector


@dataclass(frozen=True, eq=False)
class Example:
    """One (features, target) pair, stored as float32 vectors.

    The inputs are copied on construction, so later changes to the caller's
    lists or tensors do not leak in. Two examples are equal when both
    vectors are element-wise identical.
    """
    features: torch.Tensor
    target: torch.Tensor

    def __init__(self, features: VectorLike, target: VectorLike) -> None:
        object.__setattr__(self, 'features', as_vector(features).clone())
        object.__setattr__(self, 'target', as_vector(target).clone())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Example):
            return NotImplemented
        return torch.equal(self.features, other.features) and torch.equal(self.target, other.target)

    def __hash__(self) -> int:
        return hash((tuple(self.features.tolist()), tuple(self.target.tolist())))


@dataclass
class Task:
    """A habit's examples.

    ``examples`` is None when the habit's data could not be loaded; such a
    task is "missing" and ``len()`` raises ``TypeError`` on it.
    """
    examples: list[Example] | None
    task_id: int | str | None = None

    @property
    def is_missing(self) -> bool:
        return self.examples is None

    def __len__(self) -> int:
        if self.examples is None:
            raise TypeError(f"task {self.task_id!r} has no examples")
        return len(self.examples)


@dataclass
class TaskSplit:
    """Support/query partition of one task."""
    support: list[Example] = field(default_factory=list)
    query: list[Example] = field(default_factory=list)
    task_id: int | str | None = None


def split_support_query(
    task: Task,
    support_fraction: float = 0.7,
    generator: torch.Generator | None = None,
) -> TaskSplit:
    """Shuffle a task's examples and split them at ``floor(fraction * n)``.

    The task itself is not modified.

    Args:
        task: Task to split. Must not be missing.
        support_fraction: Share of examples placed in the support set.
        generator: Random source for the shuffle.

    Returns:
        TaskSplit with ``floor(fraction * n)`` support examples and the rest
        as query examples.
    """
    n = len(task)
    order = torch.randperm(n, generator=generator).tolist()
    shuffled = [task.examples[i] for i in order]
    cut = int(n * support_fraction)
    return TaskSplit(support=shuffled[:cut], query=shuffled[cut:], task_id=task.task_id)
