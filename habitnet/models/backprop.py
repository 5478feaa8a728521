"""Closed-form gradients for the two-layer sigmoid network.

No autograd: gradients are written into caller-owned buffers using the
analytically derived rules

    output_error = prediction - target
    hidden_error = (W2.T @ output_error) * h * (1 - h)
    dW2 += outer(output_error, h)
    dW1 += outer(hidden_error, x)

The output error has no sigmoid derivative term, so the output layer
follows the cross-entropy gradient rather than the MSE one.
"""

from __future__ import annotations

from typing import Iterable

import torch

from ..utils.ops import VectorLike, as_vector, pad_features, sigmoid_deriv
from .network import NetworkParameters


GradientBuffers = tuple[torch.Tensor, torch.Tensor]


def create_gradient_buffers(params: NetworkParameters) -> GradientBuffers:
    """Zero (input_to_hidden, hidden_to_output) buffers shaped like ``params``."""
    return (
        torch.zeros_like(params.input_to_hidden),
        torch.zeros_like(params.hidden_to_output),
    )


class GradientComputer:
    """Accumulates per-example gradients into gradient buffers."""

    def compute_gradients(
        self,
        params: NetworkParameters,
        features: VectorLike,
        target: VectorLike,
        prediction: torch.Tensor,
        grad_input_to_hidden: torch.Tensor,
        grad_hidden_to_output: torch.Tensor,
    ) -> GradientBuffers:
        """Add one example's gradients to the supplied buffers.

        The buffers are never reset here; sum over examples by calling this
        repeatedly with the same buffers. The hidden layer is recomputed
        from ``features`` so ``prediction`` may come from any earlier
        forward pass of the same parameters.

        Args:
            params: Parameters the prediction was made with.
            features: Input vector (zero-padded / truncated to feature_size).
            target: Target vector of length output_size.
            prediction: Network output for ``features``.
            grad_input_to_hidden: Buffer of shape (hidden_size, feature_size).
            grad_hidden_to_output: Buffer of shape (output_size, hidden_size).

        Returns:
            The two buffers, for convenience.

        Raises:
            RuntimeError: If target or prediction length differs from
                output_size.
        """
        x = pad_features(features, params.feature_size)
        hidden = params.hidden_activations(x)

        output_error = as_vector(prediction) - as_vector(target)
        hidden_error = (params.hidden_to_output.t() @ output_error) * sigmoid_deriv(hidden)

        grad_hidden_to_output.add_(torch.outer(output_error, hidden))
        grad_input_to_hidden.add_(torch.outer(hidden_error, x))
        return grad_input_to_hidden, grad_hidden_to_output


def batch_gradients(
    params: NetworkParameters,
    examples: Iterable,
    computer: GradientComputer | None = None,
) -> GradientBuffers:
    """Summed gradients of ``params`` over ``examples`` (full batch).

    Each example needs ``features`` and ``target`` attributes.
    """
    computer = computer or GradientComputer()
    grad_ih, grad_ho = create_gradient_buffers(params)
    for example in examples:
        prediction = params.forward(example.features)
        computer.compute_gradients(
            params, example.features, example.target, prediction, grad_ih, grad_ho,
        )
    return grad_ih, grad_ho
