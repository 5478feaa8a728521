"""Configuration dataclasses for networks, optimizer, meta-learning and training.

Each config validates its fields in ``__post_init__`` and raises
``ValueError`` naming the offending field.
"""

from dataclasses import dataclass, field


@dataclass
class NetworkConfig:
    """Shape and initialization of the two-layer network."""
    feature_size: int = 10
    hidden_size: int = 8
    output_size: int = 3
    init_scale: float = 0.1          # weights drawn uniformly from [-init_scale, init_scale]

    def __post_init__(self):
        for name in ("feature_size", "hidden_size", "output_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if self.init_scale <= 0:
            raise ValueError(f"init_scale must be > 0, got {self.init_scale}")


@dataclass
class OptimizerConfig:
    """Adaptive learning-rate controller settings."""
    initial_lr: float = 0.01
    min_lr: float = 1e-4
    max_lr: float = 0.1
    beta1: float = 0.9
    beta2: float = 0.999
    epsilon: float = 1e-8
    history_size: int = 20           # loss history cap (FIFO)
    trend_window: int = 5            # losses inspected per update

    def __post_init__(self):
        if self.min_lr <= 0:
            raise ValueError(f"min_lr must be > 0, got {self.min_lr}")
        if self.max_lr < self.min_lr:
            raise ValueError(f"max_lr must be >= min_lr, got {self.max_lr} < {self.min_lr}")
        if not self.min_lr <= self.initial_lr <= self.max_lr:
            raise ValueError(
                f"initial_lr must be in [{self.min_lr}, {self.max_lr}], got {self.initial_lr}"
            )
        for name in ("beta1", "beta2"):
            value = getattr(self, name)
            if not 0.0 <= value < 1.0:
                raise ValueError(f"{name} must be in [0, 1), got {value}")
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")
        if self.trend_window < 3:
            raise ValueError(f"trend_window must be >= 3, got {self.trend_window}")
        if self.history_size < self.trend_window:
            raise ValueError(
                f"history_size must be >= trend_window, got {self.history_size} < {self.trend_window}"
            )


@dataclass
class MetaLearningConfig:
    """MAML-style meta-learning settings."""
    meta_batch_size: int = 5
    inner_steps: int = 5
    inner_lr: float = 0.1
    meta_lr: float = 0.01
    min_task_examples: int = 5
    adaptation_steps: int = 10
    min_adaptation_examples: int = 3
    support_fraction: float = 0.7
    network: NetworkConfig = field(default_factory=NetworkConfig)

    def __post_init__(self):
        for name in ("meta_batch_size", "inner_steps", "adaptation_steps"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        for name in ("inner_lr", "meta_lr"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if self.min_task_examples < 2:
            raise ValueError(f"min_task_examples must be >= 2, got {self.min_task_examples}")
        if self.min_adaptation_examples < 1:
            raise ValueError(
                f"min_adaptation_examples must be >= 1, got {self.min_adaptation_examples}"
            )
        if not 0.0 < self.support_fraction < 1.0:
            raise ValueError(f"support_fraction must be in (0, 1), got {self.support_fraction}")


@dataclass
class TrainerConfig:
    """Ordinary (per-habit) training settings."""
    epochs: int = 100
    weight_clip: float | None = 1.0  # None disables clipping
    seed: int = 42

    def __post_init__(self):
        if self.epochs <= 0:
            raise ValueError(f"epochs must be > 0, got {self.epochs}")
        if self.weight_clip is not None and self.weight_clip <= 0:
            raise ValueError(f"weight_clip must be > 0, got {self.weight_clip}")
        if self.seed < 0:
            raise ValueError(f"seed must be >= 0, got {self.seed}")
