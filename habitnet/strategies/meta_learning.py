"""MAML-style meta-learning over habit tasks.

The shared network is trained so that a few gradient steps on a new habit's
data give a good habit-specific model:

1. Tasks are taken in meta-batches of ``meta_batch_size``.
2. For each task in the batch:
   a. Clone the shared parameters.
   b. Shuffle the task and split it into support/query sets.
   c. Run ``inner_steps`` full-batch gradient steps on the support set,
      updating only the clone.
   d. Compute the query-set gradient of the adapted clone (the task's
      meta-gradient) and add it, divided by ``meta_batch_size``, to the
      batch accumulator.
3. After the batch: ``shared -= meta_lr * accumulator``.

This is the first-order variant: the meta-gradient is taken at the adapted
parameters and applied directly to the shared ones, with no second-order
terms through the inner loop.

Failures abort the call but meta-batches that were already applied stay
applied.
"""

from __future__ import annotations

from typing import Sequence

import torch
from rich.markup import escape

from console import HNConsole

from ..config import MetaLearningConfig
from ..data.task import Example, Task, split_support_query
from ..models.backprop import GradientComputer, batch_gradients, create_gradient_buffers
from ..models.network import NetworkParameters
from ..utils.ops import VectorLike


class MetaLearner:
    """Holds the shared meta-model and runs meta-learning and adaptation.

    Args:
        config: Meta-learning settings. Defaults to ``MetaLearningConfig()``.
        params: Initial shared parameters. Random weights from
            ``config.network`` are drawn when omitted.
        generator: Random source for weight init and task shuffles.
    """

    def __init__(
        self,
        config: MetaLearningConfig | None = None,
        params: NetworkParameters | None = None,
        generator: torch.Generator | None = None,
    ) -> None:
        self.config = config or MetaLearningConfig()
        self.generator = generator
        self.gradient_computer = GradientComputer()
        if params is None:
            params = NetworkParameters.from_config(self.config.network, generator=generator)
        self._params = params
        self._meta_learning_progress = 0.0
        self._adaptation_progress = 0.0
        self._cancel_requested = False

    @property
    def parameters(self) -> NetworkParameters:
        """The shared meta-model (live object, not a copy)."""
        return self._params

    @property
    def meta_learning_progress(self) -> float:
        return self._meta_learning_progress

    @property
    def adaptation_progress(self) -> float:
        return self._adaptation_progress

    def cancel(self) -> None:
        """Request that a running ``meta_learn`` stop before its next meta-batch."""
        self._cancel_requested = True

    # ------------------------------------------------------------------
    # Meta-learning
    # ------------------------------------------------------------------

    def meta_learn(self, tasks: Sequence[Task]) -> bool:
        """Run one pass of meta-learning over ``tasks``.

        Only ``len(tasks) // meta_batch_size`` full meta-batches run; a
        trailing partial batch is dropped. Tasks with fewer than
        ``min_task_examples`` examples are skipped.

        Returns:
            True when every meta-batch was applied. False when there are
            fewer than ``meta_batch_size`` tasks (nothing is changed), when
            a task is missing or malformed, or when the run was cancelled.
            In the last two cases batches applied before the failure are
            kept.
        """
        cfg = self.config
        console = HNConsole()
        self._cancel_requested = False

        if len(tasks) < cfg.meta_batch_size:
            console.print_warning(
                f"Not enough tasks for meta-learning: {len(tasks)} < {cfg.meta_batch_size}"
            )
            return False

        num_batches = len(tasks) // cfg.meta_batch_size
        self._meta_learning_progress = 0.0
        console.print_notification(
            f"Meta-learning on {len(tasks)} tasks ({num_batches} meta-batches)"
        )
        console.create_progress_task("meta_learn", "Meta-learning", total=num_batches)
        try:
            for batch_idx in range(num_batches):
                if self._cancel_requested:
                    console.print_warning(
                        f"Meta-learning cancelled after {batch_idx}/{num_batches} meta-batches"
                    )
                    return False

                start = batch_idx * cfg.meta_batch_size
                batch = tasks[start:start + cfg.meta_batch_size]
                self._run_meta_batch(batch)

                self._meta_learning_progress = (batch_idx + 1) / num_batches
                console.update_progress_task("meta_learn", completed=batch_idx + 1)
                console.print(f"[detail]Meta-batch {batch_idx + 1}/{num_batches} completed[/detail]")
        except (ValueError, TypeError, IndexError, RuntimeError) as e:
            console.print_error(f"Error during meta-learning: {escape(str(e))}")
            return False
        finally:
            console.remove_progress_task("meta_learn")

        console.print_success(f"Meta-learning completed: {num_batches} meta-batches applied")
        return True

    def _run_meta_batch(self, batch: Sequence[Task]) -> None:
        cfg = self.config
        meta_grad_ih, meta_grad_ho = create_gradient_buffers(self._params)

        for task in batch:
            if task.is_missing:
                raise ValueError(f"task {task.task_id!r} has no examples")
            if len(task) < cfg.min_task_examples:
                HNConsole().print(
                    f"[detail]Skipping task {escape(repr(task.task_id))}: "
                    f"{len(task)} < {cfg.min_task_examples} examples[/detail]"
                )
                continue

            split = split_support_query(task, cfg.support_fraction, generator=self.generator)
            adapted = self._params.clone()
            for _ in range(cfg.inner_steps):
                self._gradient_step(adapted, split.support, cfg.inner_lr)

            task_grad_ih, task_grad_ho = batch_gradients(
                adapted, split.query, self.gradient_computer,
            )
            meta_grad_ih.add_(task_grad_ih / cfg.meta_batch_size)
            meta_grad_ho.add_(task_grad_ho / cfg.meta_batch_size)

        self._params.apply_update(meta_grad_ih, meta_grad_ho, cfg.meta_lr)

    def _gradient_step(
        self, params: NetworkParameters, examples: Sequence[Example], lr: float,
    ) -> None:
        """One full-batch step with gradients summed over ``examples``."""
        grad_ih, grad_ho = batch_gradients(params, examples, self.gradient_computer)
        params.apply_update(grad_ih, grad_ho, lr)

    # ------------------------------------------------------------------
    # Single-task adaptation and inference
    # ------------------------------------------------------------------

    def adapt_to_habit(self, task: Task) -> NetworkParameters:
        """Fine-tune a copy of the shared model on one habit.

        Tasks with fewer than ``min_adaptation_examples`` examples (or no
        examples at all) get an unmodified clone. The shared parameters are
        never changed.
        """
        cfg = self.config
        adapted = self._params.clone()
        num_examples = 0 if task.is_missing else len(task)
        if num_examples < cfg.min_adaptation_examples:
            HNConsole().print(
                f"[detail]Not enough examples to adapt to {escape(repr(task.task_id))}: "
                f"{num_examples} < {cfg.min_adaptation_examples}[/detail]"
            )
            return adapted

        self._adaptation_progress = 0.0
        for step in range(cfg.adaptation_steps):
            self._gradient_step(adapted, task.examples, cfg.inner_lr)
            self._adaptation_progress = (step + 1) / cfg.adaptation_steps

        HNConsole().print_complete(f"Adapted meta-model to habit {escape(repr(task.task_id))}")
        return adapted

    def predict(self, features: VectorLike, params: NetworkParameters) -> torch.Tensor:
        """Forward pass through ``params`` (typically from ``adapt_to_habit``)."""
        return params.forward(features)
