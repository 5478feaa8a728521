"""Tests for habitnet/utils/ops.py."""

import math

import torch

from habitnet.utils.ops import (
    SIGMOID_CLAMP, sigmoid, sigmoid_deriv, clamp, dot,
    as_vector, pad_features, all_finite, mse,
)


class TestSigmoid:

    def test_matches_logistic(self):
        x = torch.tensor([-2.0, 0.0, 3.0])
        expected = torch.tensor([1 / (1 + math.exp(2.0)), 0.5, 1 / (1 + math.exp(-3.0))])
        assert torch.allclose(sigmoid(x), expected)

    def test_strictly_inside_unit_interval_for_extreme_inputs(self):
        """Huge pre-activations never saturate to exactly 0 or 1."""
        x = torch.tensor([-1e30, -1e4, -50.0, 50.0, 1e4, 1e30])
        out = sigmoid(x)
        assert (out > 0).all()
        assert (out < 1).all()

    def test_clamp_bound_is_used(self):
        assert torch.equal(sigmoid(torch.tensor([100.0])), sigmoid(torch.tensor([SIGMOID_CLAMP])))

    def test_deriv_from_output(self):
        out = torch.tensor([0.5, 0.25])
        assert torch.allclose(sigmoid_deriv(out), torch.tensor([0.25, 0.1875]))


class TestVectorHelpers:

    def test_as_vector_from_list(self):
        vec = as_vector([1, 2, 3])
        assert vec.dtype == torch.float32
        assert vec.shape == (3,)

    def test_as_vector_flattens(self):
        assert as_vector(torch.ones(2, 2)).shape == (4,)

    def test_pad_short_vector_with_zeros(self):
        padded = pad_features([1.0, 2.0], 4)
        assert torch.equal(padded, torch.tensor([1.0, 2.0, 0.0, 0.0]))

    def test_pad_truncates_long_vector(self):
        padded = pad_features([1.0, 2.0, 3.0], 2)
        assert torch.equal(padded, torch.tensor([1.0, 2.0]))

    def test_pad_exact_size_unchanged(self):
        vec = torch.tensor([1.0, 2.0])
        assert torch.equal(pad_features(vec, 2), vec)

    def test_clamp(self):
        out = clamp(torch.tensor([-2.0, 0.5, 2.0]), -1.0, 1.0)
        assert torch.equal(out, torch.tensor([-1.0, 0.5, 1.0]))

    def test_dot(self):
        assert dot(torch.tensor([1.0, 2.0]), torch.tensor([3.0, 4.0])) == 11.0

    def test_all_finite(self):
        assert all_finite(torch.zeros(3), torch.ones(2, 2))
        assert not all_finite(torch.tensor([1.0, float('nan')]))
        assert not all_finite(torch.zeros(2), torch.tensor([float('inf')]))

    def test_mse(self):
        assert math.isclose(mse(torch.tensor([1.0, 0.0]), [0.0, 0.0]), 0.5)
