"""Adaptive learning-rate controller.

Combines four mechanisms over a single scalar learning rate:

- loss-trend heuristics (``update_learning_rate``): halve on plateau, grow
  by 5% while the loss keeps falling, otherwise shrink by 30%;
- Adam-style per-parameter moments (``optimize_parameter``);
- step decay plus late-training cosine annealing (``apply_decay``);
- depth-based layer scaling (``learning_rate_for_layer``).

One controller belongs to one training stream; its caches are keyed by
caller-supplied parameter ids.
"""

from __future__ import annotations

import math
from collections import deque

from console import HNConsole

from ..config import OptimizerConfig


class AdaptiveLearningRateController:
    """Owns the learning rate, loss history and Adam moment caches.

    Args:
        config: Optimizer settings. Defaults to ``OptimizerConfig()``.
    """

    def __init__(self, config: OptimizerConfig | None = None) -> None:
        self.config = config or OptimizerConfig()
        self._learning_rate = self.config.initial_lr
        self._iteration = 0
        self._momentum: dict[str, float] = {}
        self._velocity: dict[str, float] = {}
        self._loss_history: deque[float] = deque(maxlen=self.config.history_size)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def iteration(self) -> int:
        return self._iteration

    @property
    def loss_history(self) -> list[float]:
        return list(self._loss_history)

    # ------------------------------------------------------------------
    # Loss-trend schedule
    # ------------------------------------------------------------------

    def update_learning_rate(self, loss: float) -> float:
        """Record ``loss`` and adjust the learning rate from the recent trend.

        Nothing changes until ``trend_window`` losses have been seen. A
        plateau takes priority over a decreasing trend.

        Returns:
            The (possibly unchanged) learning rate.
        """
        self._loss_history.append(float(loss))
        window = self.config.trend_window
        if len(self._loss_history) < window:
            return self._learning_rate

        recent = list(self._loss_history)[-window:]
        current = self._learning_rate
        if self._is_plateau(recent):
            new_lr = max(current * 0.5, self.config.min_lr)
        elif self._is_decreasing(recent):
            new_lr = min(current * 1.05, self.config.max_lr)
        else:
            new_lr = max(current * 0.7, self.config.min_lr)

        if new_lr != current:
            self._learning_rate = new_lr
            HNConsole().print(
                f"[detail]learning rate {current:.6g} -> {new_lr:.6g} (loss {loss:.6g})[/detail]"
            )
        return self._learning_rate

    @staticmethod
    def _is_decreasing(losses: list[float]) -> bool:
        """Strictly decreasing at a stride of two."""
        if len(losses) < 3:
            return False
        return all(losses[i] < losses[i - 2] for i in range(2, len(losses)))

    @staticmethod
    def _is_plateau(losses: list[float]) -> bool:
        """Last three losses all within 1% of their mean."""
        if len(losses) < 3:
            return False
        tail = losses[-3:]
        mean = sum(tail) / 3
        threshold = abs(mean) * 0.01
        if threshold == 0.0:
            # Zero mean: only an exactly flat tail counts
            return all(x == mean for x in tail)
        return all(abs(x - mean) < threshold for x in tail)

    # ------------------------------------------------------------------
    # Adam moments
    # ------------------------------------------------------------------

    def optimize_parameter(self, param_id: str, gradient: float) -> float:
        """Adam step size for one scalar parameter.

        The iteration counter is shared by all parameter ids and advances on
        every call; bias correction uses it as ``t``.

        Returns:
            ``lr * m_hat / (sqrt(v_hat) + epsilon)``. The caller subtracts
            it from the parameter.
        """
        cfg = self.config
        self._iteration += 1
        gradient = float(gradient)

        m = cfg.beta1 * self._momentum.get(param_id, 0.0) + (1 - cfg.beta1) * gradient
        v = cfg.beta2 * self._velocity.get(param_id, 0.0) + (1 - cfg.beta2) * gradient * gradient
        self._momentum[param_id] = m
        self._velocity[param_id] = v

        m_hat = m / (1 - cfg.beta1 ** self._iteration)
        v_hat = v / (1 - cfg.beta2 ** self._iteration)
        return self._learning_rate * m_hat / (math.sqrt(v_hat) + cfg.epsilon)

    # ------------------------------------------------------------------
    # Epoch decay and layer scaling
    # ------------------------------------------------------------------

    def apply_decay(self, epoch: int, total_epochs: int) -> float:
        """Step decay every 10th epoch, then cosine annealing past halfway.

        The cosine rule overwrites the rate once ``epoch / total_epochs``
        exceeds 0.5; ``total_epochs <= 0`` disables it.
        """
        cfg = self.config
        if epoch > 0 and epoch % 10 == 0:
            self._learning_rate = max(self._learning_rate * 0.8, cfg.min_lr)

        if total_epochs > 0:
            progress = epoch / total_epochs
            if progress > 0.5:
                cosine = 0.5 * (1 + math.cos(math.pi * progress))
                self._learning_rate = cfg.min_lr + (cfg.initial_lr - cfg.min_lr) * cosine
        return self._learning_rate

    def learning_rate_for_layer(self, layer_index: int, total_layers: int) -> float:
        """Deeper layers get smaller rates: ``lr * (1 - 0.5 * index / total)``."""
        if total_layers <= 0:
            return self._learning_rate
        return self._learning_rate * (1.0 - 0.5 * layer_index / total_layers)

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self._learning_rate = self.config.initial_lr
        self._iteration = 0
        self._momentum.clear()
        self._velocity.clear()
        self._loss_history.clear()

    def state_dict(self) -> dict:
        return {
            'learning_rate': self._learning_rate,
            'iteration': self._iteration,
            'momentum': dict(self._momentum),
            'velocity': dict(self._velocity),
            'loss_history': list(self._loss_history),
        }

    def load_state_dict(self, state: dict) -> None:
        """Restore state saved by ``state_dict``.

        Raises:
            ValueError: If the saved learning rate is outside
                ``[min_lr, max_lr]`` of this controller's config.
        """
        learning_rate = float(state['learning_rate'])
        if not self.config.min_lr <= learning_rate <= self.config.max_lr:
            raise ValueError(
                f"learning_rate must be in [{self.config.min_lr}, {self.config.max_lr}], "
                f"got {learning_rate}"
            )
        self._learning_rate = learning_rate
        self._iteration = int(state['iteration'])
        self._momentum = {k: float(v) for k, v in state['momentum'].items()}
        self._velocity = {k: float(v) for k, v in state['velocity'].items()}
        self._loss_history = deque(
            (float(x) for x in state['loss_history']), maxlen=self.config.history_size,
        )
