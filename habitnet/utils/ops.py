"""Elementwise and vector helpers on 1-D/2-D float32 tensors.

All network arithmetic runs on CPU ``torch.float32`` tensors without
autograd; these helpers keep the conversions and edge cases in one place.
"""

from __future__ import annotations

from typing import Sequence

import torch

# sigmoid(±15) is still strictly inside (0, 1) in float32
SIGMOID_CLAMP = 15.0

VectorLike = Sequence[float] | torch.Tensor


def sigmoid(x: torch.Tensor) -> torch.Tensor:
    """Logistic function with pre-activations clamped to ±SIGMOID_CLAMP."""
    return torch.sigmoid(torch.clamp(x, -SIGMOID_CLAMP, SIGMOID_CLAMP))


def sigmoid_deriv(output: torch.Tensor) -> torch.Tensor:
    """Derivative of sigmoid given the *output* (not pre-activation)."""
    return output * (1.0 - output)


def clamp(x: torch.Tensor, low: float, high: float) -> torch.Tensor:
    return torch.clamp(x, low, high)


def dot(a: torch.Tensor, b: torch.Tensor) -> float:
    return float(torch.dot(a, b))


def as_vector(values: VectorLike) -> torch.Tensor:
    """Convert a sequence or tensor to a flat float32 tensor."""
    return torch.as_tensor(values, dtype=torch.float32).reshape(-1)


def pad_features(features: VectorLike, size: int) -> torch.Tensor:
    """Fit a feature vector to ``size`` entries.

    Shorter vectors are zero-padded; entries at index >= size are dropped.
    """
    vec = as_vector(features)
    n = vec.numel()
    if n == size:
        return vec
    if n > size:
        return vec[:size]
    padded = torch.zeros(size, dtype=torch.float32)
    padded[:n] = vec
    return padded


def all_finite(*tensors: torch.Tensor) -> bool:
    """True when none of the tensors contains NaN or Inf."""
    return all(bool(torch.isfinite(t).all()) for t in tensors)


def mse(prediction: torch.Tensor, target: VectorLike) -> float:
    """Mean squared error between a prediction and a target vector."""
    diff = as_vector(prediction) - as_vector(target)
    return float(torch.mean(diff * diff))
