"""Tests for habitnet/config.py."""

import pytest

from habitnet.config import NetworkConfig, OptimizerConfig, MetaLearningConfig, TrainerConfig


class TestNetworkConfig:

    def test_defaults(self):
        cfg = NetworkConfig()
        assert (cfg.feature_size, cfg.hidden_size, cfg.output_size) == (10, 8, 3)
        assert cfg.init_scale == 0.1

    @pytest.mark.parametrize("field", ["feature_size", "hidden_size", "output_size"])
    def test_non_positive_size_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            NetworkConfig(**{field: 0})

    def test_non_positive_init_scale_rejected(self):
        with pytest.raises(ValueError, match="init_scale"):
            NetworkConfig(init_scale=0.0)


class TestOptimizerConfig:

    def test_defaults(self):
        cfg = OptimizerConfig()
        assert cfg.initial_lr == 0.01
        assert cfg.min_lr == 1e-4
        assert cfg.max_lr == 0.1
        assert cfg.beta1 == 0.9
        assert cfg.beta2 == 0.999
        assert cfg.epsilon == 1e-8
        assert cfg.history_size == 20
        assert cfg.trend_window == 5

    def test_initial_lr_outside_bounds_rejected(self):
        with pytest.raises(ValueError, match="initial_lr"):
            OptimizerConfig(initial_lr=0.5)

    def test_max_below_min_rejected(self):
        with pytest.raises(ValueError, match="max_lr"):
            OptimizerConfig(min_lr=0.01, max_lr=0.001, initial_lr=0.01)

    def test_beta_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="beta1"):
            OptimizerConfig(beta1=1.0)

    def test_history_smaller_than_window_rejected(self):
        with pytest.raises(ValueError, match="history_size"):
            OptimizerConfig(history_size=4)


class TestMetaLearningConfig:

    def test_defaults(self):
        cfg = MetaLearningConfig()
        assert cfg.meta_batch_size == 5
        assert cfg.inner_steps == 5
        assert cfg.inner_lr == 0.1
        assert cfg.meta_lr == 0.01
        assert cfg.min_task_examples == 5
        assert cfg.adaptation_steps == 10
        assert cfg.min_adaptation_examples == 3
        assert cfg.support_fraction == 0.7
        assert cfg.network == NetworkConfig()

    def test_support_fraction_bounds(self):
        with pytest.raises(ValueError, match="support_fraction"):
            MetaLearningConfig(support_fraction=1.0)

    def test_zero_batch_size_rejected(self):
        with pytest.raises(ValueError, match="meta_batch_size"):
            MetaLearningConfig(meta_batch_size=0)

    def test_network_configs_are_independent(self):
        """Each config gets its own NetworkConfig instance."""
        a, b = MetaLearningConfig(), MetaLearningConfig()
        assert a.network is not b.network


class TestTrainerConfig:

    def test_defaults(self):
        cfg = TrainerConfig()
        assert cfg.epochs == 100
        assert cfg.weight_clip == 1.0
        assert cfg.seed == 42

    def test_clip_can_be_disabled(self):
        assert TrainerConfig(weight_clip=None).weight_clip is None

    def test_negative_clip_rejected(self):
        with pytest.raises(ValueError, match="weight_clip"):
            TrainerConfig(weight_clip=-1.0)

    def test_negative_seed_rejected(self):
        with pytest.raises(ValueError, match="seed"):
            TrainerConfig(seed=-1)
