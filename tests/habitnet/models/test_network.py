"""Tests for habitnet/models/network.py."""

import pytest
import torch

from habitnet.config import NetworkConfig
from habitnet.models.network import NetworkParameters
from habitnet.utils.reproducibility import make_generator


class TestConstruction:

    def test_reference_shapes(self, params):
        assert params.input_to_hidden.shape == (8, 10)
        assert params.hidden_to_output.shape == (3, 8)
        assert (params.feature_size, params.hidden_size, params.output_size) == (10, 8, 3)

    def test_random_weights_within_init_scale(self, params):
        for w in (params.input_to_hidden, params.hidden_to_output):
            assert (w >= -0.1).all() and (w <= 0.1).all()

    def test_same_seed_same_weights(self):
        a = NetworkParameters.from_config(NetworkConfig(), generator=make_generator(1))
        b = NetworkParameters.from_config(NetworkConfig(), generator=make_generator(1))
        assert a.equal(b)

    def test_arbitrary_sizes(self):
        p = NetworkParameters.random(4, 5, 2, generator=make_generator(0))
        assert p.forward([1.0, 2.0, 3.0, 4.0]).shape == (2,)

    def test_from_matrices_copies_input(self):
        w1 = torch.zeros(2, 2)
        p = NetworkParameters(w1, torch.zeros(1, 2))
        w1.fill_(1.0)
        assert torch.equal(p.input_to_hidden, torch.zeros(2, 2))

    def test_mismatched_shapes_rejected(self):
        with pytest.raises(ValueError):
            NetworkParameters(torch.zeros(3, 2), torch.zeros(1, 2))

    def test_non_matrix_rejected(self):
        with pytest.raises(ValueError):
            NetworkParameters(torch.zeros(3), torch.zeros(1, 3))


class TestForward:

    def test_output_in_open_unit_interval(self, params, generator):
        """Sigmoid outputs stay inside (0, 1) for any features."""
        for scale in (0.0, 1.0, 100.0, 1e6):
            features = (torch.rand(10, generator=generator) - 0.5) * scale
            out = params.forward(features)
            assert (out > 0).all() and (out < 1).all()

    def test_output_in_range_for_large_weights(self):
        p = NetworkParameters(torch.full((8, 10), 50.0), torch.full((3, 8), -50.0))
        out = p.forward(torch.ones(10))
        assert (out > 0).all() and (out < 1).all()

    def test_zero_weights_give_half(self):
        p = NetworkParameters(torch.zeros(2, 2), torch.zeros(1, 2))
        assert torch.allclose(p.forward([3.0, -1.0]), torch.tensor([0.5]))

    def test_short_features_zero_padded(self, params):
        short = params.forward([0.3, 0.7])
        padded = params.forward([0.3, 0.7] + [0.0] * 8)
        assert torch.equal(short, padded)

    def test_extra_features_ignored(self, params):
        base = [0.1] * 10
        assert torch.equal(params.forward(base), params.forward(base + [5.0, 6.0]))

    def test_forward_with_hidden_consistent(self, params):
        features = torch.linspace(0, 1, 10)
        hidden, out = params.forward_with_hidden(features)
        assert torch.equal(hidden, params.hidden_activations(features))
        assert torch.equal(out, params.forward(features))


class TestMutation:

    def test_clone_is_independent(self, params):
        clone = params.clone()
        assert clone.equal(params)
        clone.input_to_hidden.add_(1.0)
        assert not clone.equal(params)

    def test_apply_update(self, tiny_params):
        g1 = torch.ones(2, 2)
        g2 = torch.ones(1, 2)
        before = tiny_params.clone()
        tiny_params.apply_update(g1, g2, 0.1)
        assert torch.allclose(tiny_params.input_to_hidden, before.input_to_hidden - 0.1)
        assert torch.allclose(tiny_params.hidden_to_output, before.hidden_to_output - 0.1)

    def test_clamp(self):
        p = NetworkParameters(torch.tensor([[2.0, -3.0]]), torch.tensor([[0.5]]))
        p.clamp_(1.0)
        assert torch.equal(p.input_to_hidden, torch.tensor([[1.0, -1.0]]))
        assert torch.equal(p.hidden_to_output, torch.tensor([[0.5]]))

    def test_is_finite(self, tiny_params):
        assert tiny_params.is_finite()
        tiny_params.hidden_to_output[0, 0] = float('nan')
        assert not tiny_params.is_finite()

    def test_state_dict_is_a_copy(self, tiny_params):
        state = tiny_params.state_dict()
        state['input_to_hidden'].zero_()
        assert tiny_params.input_to_hidden[0, 0].item() == pytest.approx(0.1)
