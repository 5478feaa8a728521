"""Shared numeric and reproducibility helpers.

Organized into submodules:
- ops: sigmoid, clamping, padding, finiteness and loss helpers
- reproducibility: seeds and torch generators
"""

from .ops import (
    SIGMOID_CLAMP, sigmoid, sigmoid_deriv, clamp, dot,
    as_vector, pad_features, all_finite, mse,
)
from .reproducibility import set_seeds, make_generator

__all__ = [
    # Ops
    'SIGMOID_CLAMP', 'sigmoid', 'sigmoid_deriv', 'clamp', 'dot',
    'as_vector', 'pad_features', 'all_finite', 'mse',
    # Reproducibility
    'set_seeds', 'make_generator',
]
