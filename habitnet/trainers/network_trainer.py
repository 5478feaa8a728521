"""Epoch-based trainer for one habit's network.

Each epoch runs the whole example list as one batch:

1. Forward every example, recording MSE loss and argmax accuracy.
2. Sum closed-form gradients over the examples and divide by their count.
3. Step every weight with the controller's Adam update, scaled per layer.
4. Clip the weights, then let the controller react to the epoch loss and
   apply its decay schedule.
5. Emit ``loss``, ``accuracy`` and ``learning_rate`` to the sinks.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Sequence

import torch

from console import HNConsole, metric

from ..config import NetworkConfig, TrainerConfig
from ..data.task import Example
from ..models.backprop import GradientComputer, create_gradient_buffers
from ..models.network import NetworkParameters
from ..optim.adaptive_lr import AdaptiveLearningRateController
from ..sinks.base import MetricSink
from ..utils.ops import mse
from ..utils.reproducibility import make_generator

LAYER_NAMES = ('input_to_hidden', 'hidden_to_output')


@dataclass
class EpochResult:
    epoch: int
    loss: float
    accuracy: float
    learning_rate: float


@dataclass
class TrainResult:
    """Per-epoch history of one ``NetworkTrainer.train`` call.

    Empty when training was skipped for lack of data.
    """
    epochs: list[EpochResult] = field(default_factory=list)
    duration: float = 0.0

    @property
    def final_loss(self) -> float | None:
        return self.epochs[-1].loss if self.epochs else None

    @property
    def final_accuracy(self) -> float | None:
        return self.epochs[-1].accuracy if self.epochs else None


class NetworkTrainer:
    """Trains ``NetworkParameters`` in place with the adaptive controller.

    Args:
        config: Trainer settings. Defaults to ``TrainerConfig()``.
        controller: Learning-rate controller; a fresh one is created when
            omitted. It keeps its state across ``train`` calls.
        sinks: Metric sinks receiving one record per epoch.
    """

    def __init__(
        self,
        config: TrainerConfig | None = None,
        controller: AdaptiveLearningRateController | None = None,
        sinks: Sequence[MetricSink] | None = None,
    ) -> None:
        self.config = config or TrainerConfig()
        self.controller = controller or AdaptiveLearningRateController()
        self.sinks = list(sinks or [])
        self.gradient_computer = GradientComputer()

    def fresh_parameters(self, network_config: NetworkConfig | None = None) -> NetworkParameters:
        """Random parameters seeded from ``config.seed``."""
        return NetworkParameters.from_config(
            network_config or NetworkConfig(), generator=make_generator(self.config.seed),
        )

    def train(
        self,
        params: NetworkParameters,
        examples: Sequence[Example],
        epochs: int | None = None,
        run_name: str | None = None,
    ) -> TrainResult:
        """Train ``params`` in place on ``examples``.

        Args:
            params: Parameters to update.
            examples: Training examples (full batch every epoch).
            epochs: Number of epochs. Defaults to ``config.epochs``.
            run_name: Passed to the sinks as ``set_run_context(run=...)``.

        Returns:
            TrainResult with one EpochResult per epoch, or an empty result
            (parameters untouched) when ``examples`` is empty.
        """
        console = HNConsole()
        epochs = self.config.epochs if epochs is None else epochs
        if not examples:
            console.print_warning("No training examples, skipping training")
            return TrainResult()
        if epochs <= 0:
            return TrainResult()

        if run_name is not None:
            for sink in self.sinks:
                sink.set_run_context(run=run_name)

        result = TrainResult()
        start = time.time()
        console.create_progress_task("train", "Training", total=epochs)
        try:
            for epoch in range(epochs):
                loss, accuracy = self._train_epoch(params, examples)
                self.controller.update_learning_rate(loss)
                self.controller.apply_decay(epoch, epochs)

                epoch_result = EpochResult(epoch, loss, accuracy, self.controller.learning_rate)
                result.epochs.append(epoch_result)
                metrics = {
                    'loss': loss,
                    'accuracy': accuracy,
                    'learning_rate': epoch_result.learning_rate,
                }
                for sink in self.sinks:
                    sink.emit(metrics, epoch, 'train')
                console.update_progress_task("train", completed=epoch + 1)
        finally:
            console.remove_progress_task("train")
            for sink in self.sinks:
                sink.flush()

        result.duration = time.time() - start
        console.print_complete(
            f"Trained {epochs} epochs: loss {metric(f'{result.final_loss:.4f}')}, "
            f"accuracy {metric(f'{result.final_accuracy:.2%}')}"
        )
        return result

    def _train_epoch(
        self, params: NetworkParameters, examples: Sequence[Example],
    ) -> tuple[float, float]:
        grad_ih, grad_ho = create_gradient_buffers(params)
        total_loss = 0.0
        correct = 0
        for example in examples:
            prediction = params.forward(example.features)
            total_loss += mse(prediction, example.target)
            if int(torch.argmax(prediction)) == int(torch.argmax(example.target)):
                correct += 1
            self.gradient_computer.compute_gradients(
                params, example.features, example.target, prediction, grad_ih, grad_ho,
            )

        n = len(examples)
        grad_ih /= n
        grad_ho /= n
        self._apply_updates(params, (grad_ih, grad_ho))
        if self.config.weight_clip is not None:
            params.clamp_(self.config.weight_clip)
        return total_loss / n, correct / n

    def _apply_updates(
        self, params: NetworkParameters, grads: tuple[torch.Tensor, torch.Tensor],
    ) -> None:
        """Per-weight Adam step; layer ``l`` is scaled by ``lr_for_layer(l) / lr``."""
        controller = self.controller
        weights = (params.input_to_hidden, params.hidden_to_output)
        for layer_idx, (name, w, g) in enumerate(zip(LAYER_NAMES, weights, grads)):
            scale = controller.learning_rate_for_layer(layer_idx, len(LAYER_NAMES)) / controller.learning_rate
            cols = w.shape[1]
            updates = [
                controller.optimize_parameter(f"{name}[{k // cols},{k % cols}]", grad) * scale
                for k, grad in enumerate(g.reshape(-1).tolist())
            ]
            w.sub_(torch.tensor(updates, dtype=torch.float32).view_as(w))
